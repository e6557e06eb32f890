"""Order Repository Interface

Defines the contract for recurring order persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional, Tuple
from src.domain.client import Client
from src.domain.order import Order, OrderFrequency, OrderStatus


class OrderRepository(ABC):
    """
    Repository interface for Order persistence

    Provides access to orders for the lifecycle manager and for
    recurring invoice generation.
    """

    @abstractmethod
    async def create(self, order: Order) -> Order:
        """
        Create a new order

        Args:
            order: Order entity to persist

        Returns:
            Created Order with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, order_id: int, for_update: bool = False) -> Optional[Order]:
        """
        Retrieve order by ID

        Args:
            order_id: Order ID
            for_update: Lock the row (SELECT ... FOR UPDATE) until the
                transaction ends

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def update(self, order: Order) -> Order:
        """
        Update an existing order

        Args:
            order: Order entity with updated values

        Returns:
            Updated Order
        """
        pass

    @abstractmethod
    async def delete(self, order: Order) -> None:
        pass

    @abstractmethod
    async def list(
        self,
        search: Optional[str] = None,
        client_id: Optional[int] = None,
        status: Optional[OrderStatus] = None,
        frequency: Optional[OrderFrequency] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Tuple[Order, Client]], int]:
        """
        List orders with their clients

        Args:
            search: Case-insensitive match on description, client name or email
            client_id: Only orders of this client
            status: Only orders in this status
            frequency: Only orders with this frequency
            sort_by: created_at, amount, start_date, next_invoice_date or description
            sort_order: asc or desc
            limit: Page size
            offset: Rows to skip

        Returns:
            Tuple of ((order, client) rows on the page, total matching count)
        """
        pass

    @abstractmethod
    async def get_due_order_ids(self, as_of: date) -> List[int]:
        """
        IDs of active orders whose next invoice date is on or before as_of

        Args:
            as_of: Cut-off date (today)

        Returns:
            Order IDs ordered by next_invoice_date
        """
        pass

    @abstractmethod
    async def get_upcoming(self, start: date, end: date) -> List[Tuple[Order, Client]]:
        """
        Active orders whose next invoice date falls in [start, end]

        Returns:
            (order, client) rows ordered by next_invoice_date
        """
        pass

    @abstractmethod
    async def count_invoices(self, order_id: int) -> int:
        pass
