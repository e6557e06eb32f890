"""Unit tests for CreateOrder use case

Tests cover:
- Next invoice date derived from start date and frequency
- Custom frequency validation
- Missing client
- Start date in the past
- Rollback on repository failure
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.orders.create_order import CreateOrder
from src.app.use_cases.orders.dtos import CreateOrderCommandDTO
from src.domain.client import Client
from src.domain.clock import FixedClock
from src.domain.order import OrderFrequency


@pytest.fixture
def mock_order_repo():
    """Mock order repository assigning an ID on create"""
    repo = MagicMock()

    async def create(order):
        order.id = 1
        return order

    repo.create = AsyncMock(side_effect=create)
    return repo


@pytest.fixture
def mock_client_repo():
    """Mock client repository returning an existing client"""
    repo = MagicMock()
    repo.get_by_id = AsyncMock(
        return_value=Client(id=7, name="Acme Corp", email="billing@acme.test")
    )
    return repo


@pytest.fixture
def create_order_use_case(mock_uow, mock_order_repo, mock_client_repo):
    """CreateOrder pinned to 2025-01-10"""
    return CreateOrder(
        uow=mock_uow,
        order_repo=mock_order_repo,
        client_repo=mock_client_repo,
        clock=FixedClock(date(2025, 1, 10)),
    )


def make_command(**overrides):
    values = dict(
        client_id=7,
        description="Website maintenance",
        amount=Decimal("100.00"),
        frequency=OrderFrequency.MONTHLY,
        start_date=date(2025, 1, 15),
        lead_time_days=15,
    )
    values.update(overrides)
    return CreateOrderCommandDTO(**values)


@pytest.mark.asyncio
class TestCreateOrderSuccess:
    """Test successful order creation"""

    async def test_monthly_order_schedules_first_invoice(
        self, create_order_use_case, mock_order_repo, mock_uow
    ):
        """
        Given: A monthly order starting 2025-01-15
        When: CreateOrder is executed
        Then: Order is active, next invoice on 2025-02-15, committed
        """
        # Act
        result = await create_order_use_case.execute(make_command())

        # Assert
        assert result.is_ok()
        response = result.value
        assert response.id == 1
        assert response.client_name == "Acme Corp"
        assert response.status == "active"
        assert response.next_invoice_date == date(2025, 2, 15)
        assert response.frequency_display == "Monthly"
        assert response.estimated_annual_revenue == Decimal("1200.00")
        mock_order_repo.create.assert_called_once()
        mock_uow.commit.assert_called_once()

    async def test_custom_order_uses_custom_days(self, create_order_use_case):
        """
        Given: A custom order every 45 days starting today
        When: CreateOrder is executed
        Then: next invoice is 45 days after the start date
        """
        # Act
        result = await create_order_use_case.execute(
            make_command(
                amount=Decimal("200.00"),
                frequency=OrderFrequency.CUSTOM,
                custom_days=45,
                start_date=date(2025, 1, 10),
            )
        )

        # Assert
        assert result.is_ok()
        assert result.value.next_invoice_date == date(2025, 2, 24)
        assert result.value.custom_days == 45
        assert result.value.frequency_display == "Every 45 days"
        assert result.value.estimated_annual_revenue == Decimal("1622.22")


@pytest.mark.asyncio
class TestCreateOrderValidation:
    """Test rejected order creation"""

    async def test_custom_frequency_without_days(self, create_order_use_case, mock_order_repo):
        # Act
        result = await create_order_use_case.execute(
            make_command(frequency=OrderFrequency.CUSTOM, custom_days=None)
        )

        # Assert
        assert result.is_err()
        assert result.error.code == "INVALID_FREQUENCY_CUSTOM_DAYS"
        mock_order_repo.create.assert_not_called()

    async def test_custom_days_out_of_range(self, create_order_use_case):
        result = await create_order_use_case.execute(
            make_command(frequency=OrderFrequency.CUSTOM, custom_days=366)
        )

        assert result.is_err()
        assert result.error.code == "INVALID_FREQUENCY_CUSTOM_DAYS"

    async def test_custom_days_with_fixed_frequency(self, create_order_use_case):
        result = await create_order_use_case.execute(make_command(custom_days=10))

        assert result.is_err()
        assert result.error.code == "INVALID_FREQUENCY_CUSTOM_DAYS"

    async def test_client_not_found(self, create_order_use_case, mock_client_repo):
        # Arrange
        mock_client_repo.get_by_id = AsyncMock(return_value=None)

        # Act
        result = await create_order_use_case.execute(make_command(client_id=99))

        # Assert
        assert result.is_err()
        assert result.error.code == "CLIENT_NOT_FOUND"
        assert result.error.message == "Client with ID 99 not found"

    async def test_start_date_in_past(self, create_order_use_case, mock_order_repo):
        """
        Given: Today is 2025-01-10
        When: An order starting 2025-01-09 is created
        Then: INVALID_START_DATE is returned and nothing is persisted
        """
        result = await create_order_use_case.execute(make_command(start_date=date(2025, 1, 9)))

        assert result.is_err()
        assert result.error.code == "INVALID_START_DATE"
        assert result.error.message == "Start date cannot be in the past"
        mock_order_repo.create.assert_not_called()


@pytest.mark.asyncio
class TestCreateOrderErrors:
    """Test error handling"""

    async def test_repository_failure_rolls_back(
        self, create_order_use_case, mock_order_repo, mock_uow
    ):
        # Arrange
        mock_order_repo.create = AsyncMock(side_effect=Exception("Database connection lost"))

        # Act
        result = await create_order_use_case.execute(make_command())

        # Assert
        assert result.is_err()
        assert result.error.code == "CREATE_ORDER_FAILED"
        assert "Database connection lost" in result.error.reason
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()
