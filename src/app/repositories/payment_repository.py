"""Payment Repository Interface

Defines the contract for payment persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple
from src.domain.client import Client
from src.domain.invoice import Invoice
from src.domain.payment import Payment, PaymentMethod


class PaymentRepository(ABC):
    """
    Repository interface for Payment persistence
    """

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        """
        Create a new payment

        Args:
            payment: Payment entity to persist

        Returns:
            Created Payment with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, payment_id: int, for_update: bool = False) -> Optional[Payment]:
        """
        Retrieve payment by ID

        Args:
            payment_id: Payment ID
            for_update: Lock the row and reload it from the database

        Returns:
            Payment if found, None otherwise
        """
        pass

    @abstractmethod
    async def update(self, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def delete(self, payment: Payment) -> None:
        pass

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: int) -> List[Payment]:
        """
        Payments of an invoice, newest paid_date first
        """
        pass

    @abstractmethod
    async def sum_for_invoice(
        self, invoice_id: int, exclude_payment_id: Optional[int] = None
    ) -> Decimal:
        """
        Total paid against an invoice

        Args:
            invoice_id: Invoice ID
            exclude_payment_id: Leave this payment out of the sum (used when
                revalidating an edited payment)

        Returns:
            Sum of payment amounts, Decimal("0") when none
        """
        pass

    @abstractmethod
    async def list(
        self,
        search: Optional[str] = None,
        client_id: Optional[int] = None,
        method: Optional[PaymentMethod] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Tuple[Payment, Invoice, Client]], int]:
        """
        List payments with their invoice and client, newest paid_date first

        Args:
            search: Case-insensitive match on invoice number, client name or notes
            client_id: Only payments on invoices of this client
            method: Only payments made with this method
            start_date: paid_date lower bound (inclusive)
            end_date: paid_date upper bound (inclusive)
            limit: Page size
            offset: Rows to skip

        Returns:
            Tuple of (rows on the page, total matching count)
        """
        pass
