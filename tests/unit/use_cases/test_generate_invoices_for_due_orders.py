"""Unit tests for GenerateInvoicesForDueOrders use case

Tests cover:
- Every due order is generated independently
- Per-order failures are collected without stopping the batch
- Failure to load due orders
"""

import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock

from libs.result import Error, Return
from src.app.use_cases.invoices.generate_invoices_for_due_orders import GenerateInvoicesForDueOrders
from src.domain.clock import FixedClock


@pytest.fixture
def mock_order_repo():
    repo = MagicMock()
    repo.get_due_order_ids = AsyncMock(return_value=[1, 2, 3])
    return repo


@pytest.fixture
def mock_generate_invoice():
    return MagicMock()


@pytest.fixture
def sweep_use_case(mock_order_repo, mock_generate_invoice):
    return GenerateInvoicesForDueOrders(
        order_repo=mock_order_repo,
        generate_invoice=mock_generate_invoice,
        clock=FixedClock(date(2025, 2, 1)),
    )


@pytest.mark.asyncio
class TestGenerateInvoicesForDueOrders:
    """Test the batch generation sweep"""

    async def test_generates_all_due_orders(
        self, sweep_use_case, mock_order_repo, mock_generate_invoice
    ):
        # Arrange
        mock_generate_invoice.execute = AsyncMock(
            side_effect=[Return.ok(MagicMock(id=10 + i)) for i in range(3)]
        )

        # Act
        result = await sweep_use_case.execute()

        # Assert
        assert result.is_ok()
        assert result.value.generated == 3
        assert result.value.invoice_ids == [10, 11, 12]
        assert result.value.errors == []
        mock_order_repo.get_due_order_ids.assert_called_once_with(date(2025, 2, 1))
        assert mock_generate_invoice.execute.call_count == 3

    async def test_failure_does_not_stop_batch(self, sweep_use_case, mock_generate_invoice):
        """
        Given: Three due orders, the second fails
        When: The sweep runs
        Then: The other two are generated and the failure is reported
        """
        mock_generate_invoice.execute = AsyncMock(
            side_effect=[
                Return.ok(MagicMock(id=10)),
                Return.err(Error(code="NO_ACTIVE_COMPANY", message="No active company found to issue the invoice")),
                Return.ok(MagicMock(id=12)),
            ]
        )

        result = await sweep_use_case.execute()

        assert result.is_ok()
        assert result.value.generated == 2
        assert result.value.invoice_ids == [10, 12]
        assert len(result.value.errors) == 1
        assert result.value.errors[0].order_id == 2
        assert result.value.errors[0].error == "No active company found to issue the invoice"

    async def test_nothing_due(self, sweep_use_case, mock_order_repo, mock_generate_invoice):
        mock_order_repo.get_due_order_ids = AsyncMock(return_value=[])
        mock_generate_invoice.execute = AsyncMock()

        result = await sweep_use_case.execute()

        assert result.is_ok()
        assert result.value.generated == 0
        mock_generate_invoice.execute.assert_not_called()

    async def test_loading_due_orders_fails(self, sweep_use_case, mock_order_repo):
        mock_order_repo.get_due_order_ids = AsyncMock(side_effect=Exception("timeout"))

        result = await sweep_use_case.execute()

        assert result.is_err()
        assert result.error.code == "GENERATE_DUE_INVOICES_FAILED"
