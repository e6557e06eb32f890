"""Unit tests for the report use cases

Tests cover:
- Trailing twelve month buckets with empty months filled
- Top clients passed through from the repository
- Cached reports are served without touching the repository
"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.cache_service import TTLCacheService
from src.app.use_cases.reports.get_revenue_report import GetRevenueReport
from src.domain.clock import FixedClock


@pytest.fixture
def mock_report_repo():
    repo = MagicMock()
    repo.get_payments_since = AsyncMock(
        return_value=[
            (date(2024, 4, 3), Decimal("10.00")),
            (date(2025, 2, 10), Decimal("60.00")),
            (date(2025, 2, 20), Decimal("40.00")),
            (date(2025, 3, 5), Decimal("25.50")),
        ]
    )
    repo.get_total_revenue = AsyncMock(return_value=Decimal("500.00"))
    repo.get_top_clients_by_order_revenue = AsyncMock(
        return_value=[
            {"client_id": 1, "name": "Acme Corp", "email": "billing@acme.test", "revenue": Decimal("100.00")},
        ]
    )
    return repo


@pytest.mark.asyncio
class TestGetRevenueReport:
    """Test the revenue report"""

    async def test_monthly_buckets(self, mock_report_repo):
        """
        Given: Payments in April 2024, February 2025 and March 2025
        When: The report runs on 2025-03-15
        Then: Twelve buckets from 2024-04 to 2025-03 with the sums per month
        """
        # Arrange
        use_case = GetRevenueReport(mock_report_repo, clock=FixedClock(datetime(2025, 3, 15, 9, 30)))

        # Act
        result = await use_case.execute()

        # Assert
        assert result.is_ok()
        report = result.value
        months = [bucket.month for bucket in report.monthly_revenue]
        assert len(months) == 12
        assert months[0] == "2024-04"
        assert months[-1] == "2025-03"

        revenue = {bucket.month: bucket.revenue for bucket in report.monthly_revenue}
        assert revenue["2024-04"] == Decimal("10.00")
        assert revenue["2025-02"] == Decimal("100.00")
        assert revenue["2025-03"] == Decimal("25.50")
        assert revenue["2024-12"] == Decimal("0.00")

        assert report.total_revenue == Decimal("500.00")
        assert report.top_clients[0].name == "Acme Corp"
        assert report.generated_at == datetime(2025, 3, 15, 9, 30)
        mock_report_repo.get_payments_since.assert_called_once_with(date(2024, 4, 1))
        mock_report_repo.get_top_clients_by_order_revenue.assert_called_once_with(10)

    async def test_served_from_cache(self, mock_report_repo):
        # Arrange
        cache = TTLCacheService(ttl_seconds=60, maxsize=8)
        use_case = GetRevenueReport(mock_report_repo, cache=cache, clock=FixedClock(date(2025, 3, 15)))

        # Act
        first = await use_case.execute()
        second = await use_case.execute()

        # Assert
        assert first.value == second.value
        mock_report_repo.get_payments_since.assert_called_once()

    async def test_cache_invalidation_recomputes(self, mock_report_repo):
        cache = TTLCacheService(ttl_seconds=60, maxsize=8)
        use_case = GetRevenueReport(mock_report_repo, cache=cache, clock=FixedClock(date(2025, 3, 15)))

        await use_case.execute()
        cache.invalidate("reports:")
        await use_case.execute()

        assert mock_report_repo.get_payments_since.call_count == 2
