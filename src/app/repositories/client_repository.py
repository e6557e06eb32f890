"""Client Repository Interface

Defines the contract for client persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from src.domain.client import Client


class ClientRepository(ABC):
    """
    Repository interface for Client persistence
    """

    @abstractmethod
    async def create(self, client: Client) -> Client:
        """
        Create a new client

        Args:
            client: Client entity to persist

        Returns:
            Created Client with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, client_id: int) -> Optional[Client]:
        """
        Retrieve client by ID

        Args:
            client_id: Client ID

        Returns:
            Client if found, None otherwise
        """
        pass

    @abstractmethod
    async def update(self, client: Client) -> Client:
        pass

    @abstractmethod
    async def delete(self, client: Client) -> None:
        pass

    @abstractmethod
    async def list(
        self,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Client], int]:
        """
        List clients, newest first

        Args:
            search: Case-insensitive match on name, email or company
            limit: Page size
            offset: Rows to skip

        Returns:
            Tuple of (clients on the page, total matching count)
        """
        pass

    @abstractmethod
    async def count_orders(self, client_id: int) -> int:
        """
        Count orders owned by a client

        Used to refuse deletion of clients that still have orders.
        """
        pass
