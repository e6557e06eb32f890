"""Unit tests for UpdateOrder use case

Tests cover:
- next_invoice_date preserved when the schedule is untouched
- next_invoice_date recomputed when frequency or start date change
- custom_days dropped when leaving custom frequency
- Validation failures
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.orders.dtos import UpdateOrderCommandDTO
from src.app.use_cases.orders.update_order import UpdateOrder
from src.domain.client import Client
from src.domain.clock import FixedClock
from src.domain.order import Order, OrderFrequency, OrderStatus


@pytest.fixture
def existing_order():
    """Monthly order already invoiced once"""
    return Order(
        id=3,
        client_id=7,
        description="Website maintenance",
        amount=Decimal("100.00"),
        frequency=OrderFrequency.MONTHLY,
        start_date=date(2025, 1, 1),
        next_invoice_date=date(2025, 3, 1),
        status=OrderStatus.ACTIVE,
    )


@pytest.fixture
def mock_order_repo(existing_order):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=existing_order)
    repo.update = AsyncMock(side_effect=lambda order: order)
    return repo


@pytest.fixture
def mock_client_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(
        return_value=Client(id=7, name="Acme Corp", email="billing@acme.test")
    )
    return repo


@pytest.fixture
def update_order_use_case(mock_uow, mock_order_repo, mock_client_repo):
    return UpdateOrder(
        uow=mock_uow,
        order_repo=mock_order_repo,
        client_repo=mock_client_repo,
        clock=FixedClock(date(2025, 2, 10)),
    )


@pytest.mark.asyncio
class TestUpdateOrderSchedule:
    """Test schedule handling on update"""

    async def test_amount_change_keeps_next_invoice_date(
        self, update_order_use_case, mock_uow
    ):
        """
        Given: A monthly order with next invoice on 2025-03-01
        When: Only the amount changes
        Then: next_invoice_date stays 2025-03-01
        """
        # Act
        result = await update_order_use_case.execute(
            3, UpdateOrderCommandDTO(amount=Decimal("150.00"))
        )

        # Assert
        assert result.is_ok()
        assert result.value.amount == Decimal("150.00")
        assert result.value.next_invoice_date == date(2025, 3, 1)
        mock_uow.commit.assert_called_once()

    async def test_frequency_change_recomputes_from_start(self, update_order_use_case):
        """
        Given: A monthly order started 2025-01-01
        When: Frequency changes to weekly
        Then: next_invoice_date is start + 1 week
        """
        result = await update_order_use_case.execute(
            3, UpdateOrderCommandDTO(frequency=OrderFrequency.WEEKLY)
        )

        assert result.is_ok()
        assert result.value.frequency == "weekly"
        assert result.value.next_invoice_date == date(2025, 1, 8)

    async def test_start_date_change_recomputes(self, update_order_use_case):
        result = await update_order_use_case.execute(
            3, UpdateOrderCommandDTO(start_date=date(2025, 2, 15))
        )

        assert result.is_ok()
        assert result.value.next_invoice_date == date(2025, 3, 15)

    async def test_leaving_custom_clears_custom_days(
        self, update_order_use_case, existing_order
    ):
        # Arrange
        existing_order.frequency = OrderFrequency.CUSTOM
        existing_order.custom_days = 45

        # Act
        result = await update_order_use_case.execute(
            3, UpdateOrderCommandDTO(frequency=OrderFrequency.QUARTERLY)
        )

        # Assert
        assert result.is_ok()
        assert result.value.custom_days is None
        assert result.value.next_invoice_date == date(2025, 4, 1)

    async def test_lead_time_can_be_cleared(self, update_order_use_case, existing_order):
        existing_order.lead_time_days = 15

        result = await update_order_use_case.execute(
            3, UpdateOrderCommandDTO(lead_time_days=None)
        )

        assert result.is_ok()
        assert result.value.lead_time_days is None


@pytest.mark.asyncio
class TestUpdateOrderValidation:
    """Test rejected updates"""

    async def test_order_not_found(self, update_order_use_case, mock_order_repo):
        mock_order_repo.get_by_id = AsyncMock(return_value=None)

        result = await update_order_use_case.execute(404, UpdateOrderCommandDTO(description="x"))

        assert result.is_err()
        assert result.error.code == "ORDER_NOT_FOUND"

    async def test_custom_without_days(self, update_order_use_case, mock_order_repo):
        result = await update_order_use_case.execute(
            3, UpdateOrderCommandDTO(frequency=OrderFrequency.CUSTOM)
        )

        assert result.is_err()
        assert result.error.code == "INVALID_FREQUENCY_CUSTOM_DAYS"
        mock_order_repo.update.assert_not_called()

    async def test_changed_start_date_in_past(self, update_order_use_case):
        result = await update_order_use_case.execute(
            3, UpdateOrderCommandDTO(start_date=date(2025, 2, 1))
        )

        assert result.is_err()
        assert result.error.code == "INVALID_START_DATE"

    async def test_unknown_client(self, update_order_use_case, mock_client_repo):
        mock_client_repo.get_by_id = AsyncMock(return_value=None)

        result = await update_order_use_case.execute(3, UpdateOrderCommandDTO(client_id=99))

        assert result.is_err()
        assert result.error.code == "CLIENT_NOT_FOUND"
