"""GetClientReport Use Case"""

from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.report_repository import ReportRepository
from src.app.services.cache_service import CacheService, build_cache_key
from src.domain.clock import Clock, SystemClock
from src.domain.recurrence import CENTS
from .dtos import ClientReportDTO, ClientStatisticsDTO

NEW_CLIENT_WINDOW_DAYS = 30


class GetClientReport:
    """
    Use Case: Client analytics

    Per-client counts sorted by revenue, plus totals and averages. Averages
    are 0.00 when there are no clients.
    """

    CACHE_PREFIX = "reports:clients"

    def __init__(
        self,
        report_repo: ReportRepository,
        cache: Optional[CacheService] = None,
        clock: Optional[Clock] = None,
    ):
        self.report_repo = report_repo
        self.cache = cache
        self.clock = clock or SystemClock()

    async def execute(self) -> Result[ClientReportDTO]:
        now = self.clock.now()
        cache_key = build_cache_key(self.CACHE_PREFIX, {"date": now.date()})
        if self.cache:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return Return.ok(cached)

        rows = await self.report_repo.get_client_statistics()
        recent = await self.report_repo.count_created_since(now - timedelta(days=NEW_CLIENT_WINDOW_DAYS))

        statistics = sorted(
            (
                ClientStatisticsDTO(
                    client_id=row["client_id"],
                    name=row["name"],
                    email=row["email"],
                    total_orders=row["total_orders"],
                    total_invoices=row["total_invoices"],
                    total_payments=row["total_payments"],
                    total_revenue=row["total_revenue"],
                    last_order_date=row["last_order_date"],
                )
                for row in rows
            ),
            key=lambda item: (-item.total_revenue, item.client_id),
        )

        total_clients = len(statistics)
        total_orders = sum(item.total_orders for item in statistics)
        total_revenue = sum((item.total_revenue for item in statistics), Decimal("0"))

        report = ClientReportDTO(
            total_clients=total_clients,
            new_clients=recent["clients"],
            average_orders_per_client=self._average(Decimal(total_orders), total_clients),
            average_revenue_per_client=self._average(total_revenue, total_clients),
            clients=statistics,
            generated_at=now,
        )

        if self.cache:
            self.cache.set(cache_key, report)
        return Return.ok(report)

    @staticmethod
    def _average(total: Decimal, count: int) -> Decimal:
        if not count:
            return Decimal("0.00")
        return (total / Decimal(count)).quantize(CENTS, rounding=ROUND_HALF_UP)
