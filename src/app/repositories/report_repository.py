"""Report Repository Interface

Read-only aggregate queries backing the reporting endpoints.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Tuple


class ReportRepository(ABC):
    """
    Repository interface for reporting aggregates

    All methods are read-only and never lock rows.
    """

    @abstractmethod
    async def count_totals(self) -> Dict[str, int]:
        """
        Row counts per entity

        Returns:
            Dict with clients, companies, orders, invoices, payments keys
        """
        pass

    @abstractmethod
    async def count_created_since(self, since: datetime) -> Dict[str, int]:
        """
        Rows created at or after `since`

        Returns:
            Dict with clients, orders, invoices, payments keys
        """
        pass

    @abstractmethod
    async def get_total_revenue(self) -> Decimal:
        """Sum of all payment amounts"""
        pass

    @abstractmethod
    async def get_payments_since(self, start: date) -> List[Tuple[date, Decimal]]:
        """
        (paid_date, amount) of payments with paid_date on or after start
        """
        pass

    @abstractmethod
    async def get_top_clients_by_order_revenue(self, limit: int = 10) -> List[Dict]:
        """
        Clients ranked by revenue from their orders

        Revenue walks client -> orders -> invoices -> payments, so payments
        on manual invoices are not counted.

        Returns:
            Dicts with client_id, name, email, revenue; highest first
        """
        pass

    @abstractmethod
    async def get_client_statistics(self) -> List[Dict]:
        """
        Per-client activity

        Returns:
            Dicts with client_id, name, email, created_at, total_orders,
            total_invoices, total_payments, total_revenue, last_order_date
        """
        pass
