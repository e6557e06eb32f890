"""Unit tests for ChangeOrderStatus and DeleteOrder use cases

Tests cover:
- Pause, resume and cancel transitions
- Cancelled orders are terminal
- Deleting orders with and without invoices
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.orders.change_order_status import ChangeOrderStatus
from src.app.use_cases.orders.delete_order import DeleteOrder
from src.app.use_cases.orders.dtos import ChangeOrderStatusCommandDTO
from src.domain.order import Order, OrderFrequency, OrderStatus


@pytest.fixture
def order():
    return Order(
        id=5,
        client_id=1,
        description="Hosting",
        amount=Decimal("50.00"),
        frequency=OrderFrequency.MONTHLY,
        start_date=date(2025, 1, 1),
        next_invoice_date=date(2025, 2, 1),
        status=OrderStatus.ACTIVE,
    )


@pytest.fixture
def mock_order_repo(order):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=order)
    repo.update = AsyncMock(side_effect=lambda o: o)
    repo.delete = AsyncMock()
    repo.count_invoices = AsyncMock(return_value=0)
    return repo


@pytest.mark.asyncio
class TestChangeOrderStatus:
    """Test order status transitions"""

    async def test_pause_active_order(self, mock_uow, mock_order_repo):
        # Arrange
        use_case = ChangeOrderStatus(mock_uow, mock_order_repo)

        # Act
        result = await use_case.execute(5, ChangeOrderStatusCommandDTO(status=OrderStatus.PAUSED))

        # Assert
        assert result.is_ok()
        assert result.value.status == "paused"
        assert result.value.next_invoice_date == date(2025, 2, 1)
        mock_uow.commit.assert_called_once()

    async def test_resume_keeps_next_invoice_date(self, mock_uow, mock_order_repo, order):
        """
        Given: A paused order whose next invoice date has passed
        When: It is resumed
        Then: next_invoice_date is unchanged so the order catches up
        """
        order.status = OrderStatus.PAUSED

        result = await ChangeOrderStatus(mock_uow, mock_order_repo).execute(
            5, ChangeOrderStatusCommandDTO(status=OrderStatus.ACTIVE)
        )

        assert result.is_ok()
        assert result.value.status == "active"
        assert result.value.next_invoice_date == date(2025, 2, 1)

    async def test_cancelled_order_cannot_be_resumed(self, mock_uow, mock_order_repo, order):
        order.status = OrderStatus.CANCELLED

        result = await ChangeOrderStatus(mock_uow, mock_order_repo).execute(
            5, ChangeOrderStatusCommandDTO(status=OrderStatus.ACTIVE)
        )

        assert result.is_err()
        assert result.error.code == "INVALID_STATUS_TRANSITION"
        assert result.error.message == "Cannot change status from cancelled to active"
        mock_order_repo.update.assert_not_called()

    async def test_order_not_found(self, mock_uow, mock_order_repo):
        mock_order_repo.get_by_id = AsyncMock(return_value=None)

        result = await ChangeOrderStatus(mock_uow, mock_order_repo).execute(
            9, ChangeOrderStatusCommandDTO(status=OrderStatus.PAUSED)
        )

        assert result.is_err()
        assert result.error.code == "ORDER_NOT_FOUND"


@pytest.mark.asyncio
class TestDeleteOrder:
    """Test order deletion"""

    async def test_order_without_invoices_is_removed(self, mock_uow, mock_order_repo, order):
        result = await DeleteOrder(mock_uow, mock_order_repo).execute(5)

        assert result.is_ok()
        assert result.value.deleted is True
        assert result.value.cancelled is False
        mock_order_repo.delete.assert_called_once_with(order)
        mock_uow.commit.assert_called_once()

    async def test_order_with_invoices_is_cancelled(self, mock_uow, mock_order_repo, order):
        """
        Given: An order referenced by 2 invoices
        When: DeleteOrder is executed
        Then: The order is cancelled, not removed
        """
        mock_order_repo.count_invoices = AsyncMock(return_value=2)

        result = await DeleteOrder(mock_uow, mock_order_repo).execute(5)

        assert result.is_ok()
        assert result.value.deleted is False
        assert result.value.cancelled is True
        assert order.status == OrderStatus.CANCELLED
        mock_order_repo.delete.assert_not_called()
