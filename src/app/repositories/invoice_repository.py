"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Dict, List, Optional, Tuple
from src.domain.client import Client
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.order import Order


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Provides access to invoice data for billing operations.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID

        Raises:
            InvoiceNumberCollisionError: invoice_number already exists
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: int, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID
            for_update: Lock the row until the transaction ends

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_invoice_number(self, invoice_number: str) -> Optional[Invoice]:
        """
        Retrieve invoice by invoice number

        Args:
            invoice_number: Unique invoice number

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def delete(self, invoice: Invoice) -> None:
        pass

    @abstractmethod
    async def list(
        self,
        search: Optional[str] = None,
        client_id: Optional[int] = None,
        order_id: Optional[int] = None,
        status: Optional[InvoiceStatus] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Tuple[Invoice, Client, Optional[Order]]], int]:
        """
        List invoices with their client and originating order

        Args:
            search: Case-insensitive match on invoice number, client name,
                client email or order description
            client_id: Only invoices of this client
            order_id: Only invoices generated from this order
            status: Only invoices in this status
            sort_by: created_at, amount, issue_date, due_date or invoice_number
            sort_order: asc or desc
            limit: Page size
            offset: Rows to skip

        Returns:
            Tuple of (rows on the page, total matching count)
        """
        pass

    @abstractmethod
    async def generate_invoice_number(self, year: int) -> str:
        """
        Generate the next invoice number for a year

        Format: INV-YYYY-NNNNNN (e.g., INV-2025-000001). Uniqueness is
        enforced by the database; callers retry on collision.

        Args:
            year: Issue year

        Returns:
            Candidate invoice number string
        """
        pass

    @abstractmethod
    async def get_overdue_candidate_ids(self, as_of: date) -> List[int]:
        """
        IDs of sent invoices whose due date is before as_of
        """
        pass

    @abstractmethod
    async def mark_overdue(self, invoice_ids: List[int], as_of: date) -> List[int]:
        """
        Flip the given invoices from sent to overdue

        Only rows still sent and past due are touched, so a concurrent
        payment is never overwritten.

        Returns:
            IDs actually updated
        """
        pass

    @abstractmethod
    async def get_statistics(self, as_of: date) -> Dict:
        """
        Aggregate invoice counts and sums

        Returns:
            Dict with counts per status, total_amount, paid_amount and
            overdue_amount (overdue invoices plus sent ones past due)
        """
        pass
