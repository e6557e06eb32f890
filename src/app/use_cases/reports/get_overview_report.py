"""GetOverviewReport Use Case"""

from datetime import timedelta
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.report_repository import ReportRepository
from src.app.services.cache_service import CacheService, build_cache_key
from src.domain.clock import Clock, SystemClock
from .dtos import EntityTotalsDTO, OverviewReportDTO, RecentActivityDTO

RECENT_WINDOW_DAYS = 30


class GetOverviewReport:
    """
    Use Case: Dashboard totals

    Lifetime counts and revenue plus what was created in the last 30 days.
    """

    CACHE_PREFIX = "reports:overview"

    def __init__(
        self,
        report_repo: ReportRepository,
        cache: Optional[CacheService] = None,
        clock: Optional[Clock] = None,
    ):
        self.report_repo = report_repo
        self.cache = cache
        self.clock = clock or SystemClock()

    async def execute(self) -> Result[OverviewReportDTO]:
        now = self.clock.now()
        cache_key = build_cache_key(self.CACHE_PREFIX, {"date": now.date()})
        if self.cache:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return Return.ok(cached)

        totals = await self.report_repo.count_totals()
        recent = await self.report_repo.count_created_since(now - timedelta(days=RECENT_WINDOW_DAYS))
        revenue = await self.report_repo.get_total_revenue()

        report = OverviewReportDTO(
            totals=EntityTotalsDTO(**totals),
            total_revenue=revenue,
            recent_activity=RecentActivityDTO(days=RECENT_WINDOW_DAYS, **recent),
            generated_at=now,
        )

        if self.cache:
            self.cache.set(cache_key, report)
        return Return.ok(report)
