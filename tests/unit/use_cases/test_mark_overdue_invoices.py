"""Unit tests for MarkOverdueInvoices and GetUpcomingInvoices use cases

Tests cover:
- Past-due sent invoices are moved to overdue
- A second sweep finds nothing
- Upcoming window is inclusive and bounded
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoices.get_upcoming_invoices import GetUpcomingInvoices
from src.app.use_cases.invoices.mark_overdue_invoices import MarkOverdueInvoices
from src.domain.client import Client
from src.domain.clock import FixedClock
from src.domain.order import Order, OrderFrequency, OrderStatus


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.get_overdue_candidate_ids = AsyncMock(return_value=[4, 9])
    repo.mark_overdue = AsyncMock(return_value=[4, 9])
    return repo


@pytest.mark.asyncio
class TestMarkOverdueInvoices:
    """Test the overdue sweep"""

    async def test_marks_past_due_invoices(self, mock_uow, mock_invoice_repo):
        """
        Given: Two sent invoices due before 2025-03-01
        When: The sweep runs on 2025-03-01
        Then: Both are reported as marked and the change is committed
        """
        # Arrange
        use_case = MarkOverdueInvoices(mock_uow, mock_invoice_repo, clock=FixedClock(date(2025, 3, 1)))

        # Act
        result = await use_case.execute()

        # Assert
        assert result.is_ok()
        assert result.value.marked == 2
        assert result.value.invoice_ids == [4, 9]
        mock_invoice_repo.get_overdue_candidate_ids.assert_called_once_with(date(2025, 3, 1))
        mock_invoice_repo.mark_overdue.assert_called_once_with([4, 9], date(2025, 3, 1))
        mock_uow.commit.assert_called_once()

    async def test_second_run_is_noop(self, mock_uow, mock_invoice_repo):
        mock_invoice_repo.get_overdue_candidate_ids = AsyncMock(return_value=[])
        mock_invoice_repo.mark_overdue = AsyncMock(return_value=[])

        result = await MarkOverdueInvoices(mock_uow, mock_invoice_repo).execute()

        assert result.is_ok()
        assert result.value.marked == 0

    async def test_failure_rolls_back(self, mock_uow, mock_invoice_repo):
        mock_invoice_repo.mark_overdue = AsyncMock(side_effect=Exception("deadlock detected"))

        result = await MarkOverdueInvoices(mock_uow, mock_invoice_repo).execute()

        assert result.is_err()
        assert result.error.code == "MARK_OVERDUE_FAILED"
        mock_uow.rollback.assert_called_once()


@pytest.mark.asyncio
class TestGetUpcomingInvoices:
    """Test the upcoming invoices preview"""

    async def test_window_and_totals(self):
        # Arrange
        client = Client(id=1, name="Acme Corp", email="billing@acme.test")
        orders = [
            Order(
                id=i, client_id=1, description=f"Order {i}", amount=Decimal("25.00"),
                frequency=OrderFrequency.WEEKLY, start_date=date(2025, 1, 1),
                next_invoice_date=date(2025, 3, 1 + i), status=OrderStatus.ACTIVE,
            )
            for i in (0, 7)
        ]
        order_repo = MagicMock()
        order_repo.get_upcoming = AsyncMock(return_value=[(order, client) for order in orders])
        use_case = GetUpcomingInvoices(order_repo, clock=FixedClock(date(2025, 3, 1)))

        # Act
        result = await use_case.execute(days_ahead=7)

        # Assert
        assert result.is_ok()
        order_repo.get_upcoming.assert_called_once_with(date(2025, 3, 1), date(2025, 3, 8))
        assert [item.days_until for item in result.value.upcoming] == [0, 7]
        assert result.value.total_amount == Decimal("50.00")

    @pytest.mark.parametrize("days_ahead", [-1, 366])
    async def test_days_ahead_out_of_range(self, days_ahead):
        result = await GetUpcomingInvoices(MagicMock()).execute(days_ahead=days_ahead)

        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"
