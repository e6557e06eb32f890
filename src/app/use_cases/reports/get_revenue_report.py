"""GetRevenueReport Use Case

Monthly revenue over the trailing twelve months plus the top clients.
"""

import logging
from collections import OrderedDict
from decimal import Decimal
from typing import Optional
from dateutil.relativedelta import relativedelta
from libs.result import Result, Return
from src.app.repositories.report_repository import ReportRepository
from src.app.services.cache_service import CacheService, build_cache_key
from src.domain.clock import Clock, SystemClock
from src.domain.invoicing import to_money
from .dtos import MonthlyRevenueDTO, RevenueReportDTO, TopClientDTO

logger = logging.getLogger(__name__)

MONTHS = 12
TOP_CLIENTS = 10


class GetRevenueReport:
    """
    Use Case: Revenue report

    Business Rules:
    1. Payments are bucketed by the YYYY-MM of their paid_date
    2. The window is the current month and the eleven before it; empty
       months are reported as 0.00
    3. Top clients walk client -> orders -> invoices -> payments
    """

    CACHE_PREFIX = "reports:revenue"

    def __init__(
        self,
        report_repo: ReportRepository,
        cache: Optional[CacheService] = None,
        clock: Optional[Clock] = None,
    ):
        self.report_repo = report_repo
        self.cache = cache
        self.clock = clock or SystemClock()

    async def execute(self) -> Result[RevenueReportDTO]:
        now = self.clock.now()
        cache_key = build_cache_key(self.CACHE_PREFIX, {"date": now.date()})
        if self.cache:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return Return.ok(cached)

        # Step 1: Empty buckets for the window, oldest first
        window_start = now.date().replace(day=1) - relativedelta(months=MONTHS - 1)
        buckets = OrderedDict()
        for offset in range(MONTHS):
            month = window_start + relativedelta(months=offset)
            buckets[month.strftime("%Y-%m")] = Decimal("0")

        # Step 2: Fill from payments
        for paid_date, amount in await self.report_repo.get_payments_since(window_start):
            key = paid_date.strftime("%Y-%m")
            if key in buckets:
                buckets[key] += amount

        # Step 3: Totals and ranking
        total_revenue = await self.report_repo.get_total_revenue()
        top_clients = await self.report_repo.get_top_clients_by_order_revenue(TOP_CLIENTS)

        report = RevenueReportDTO(
            total_revenue=total_revenue,
            monthly_revenue=[
                MonthlyRevenueDTO(month=month, revenue=to_money(revenue))
                for month, revenue in buckets.items()
            ],
            top_clients=[TopClientDTO(**row) for row in top_clients],
            generated_at=now,
        )
        logger.debug(f"Revenue report computed from {window_start}")

        if self.cache:
            self.cache.set(cache_key, report)
        return Return.ok(report)
