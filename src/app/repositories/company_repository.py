"""Company Repository Interface

Defines the contract for issuing-company persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.company import Company


class CompanyRepository(ABC):
    """
    Repository interface for Company persistence
    """

    @abstractmethod
    async def create(self, company: Company) -> Company:
        pass

    @abstractmethod
    async def get_by_id(self, company_id: int) -> Optional[Company]:
        pass

    @abstractmethod
    async def update(self, company: Company) -> Company:
        pass

    @abstractmethod
    async def list_all(self) -> List[Company]:
        pass

    @abstractmethod
    async def get_default(self) -> Optional[Company]:
        """
        Resolve the company that issues generated invoices

        Returns:
            The active default company, else the first active company,
            else None
        """
        pass

    @abstractmethod
    async def clear_default(self, except_company_id: Optional[int] = None) -> None:
        """
        Unset is_default on every company but the given one

        Args:
            except_company_id: Company keeping its flag
        """
        pass

    @abstractmethod
    async def count_open_invoices(self, company_id: int) -> int:
        """
        Count the company's invoices still in progress

        Returns:
            Number of draft, sent or overdue invoices issued by the company
        """
        pass
