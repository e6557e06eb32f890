"""Unit tests for ChangeInvoiceStatus use case

Tests cover:
- Sending a draft stamps sent_date
- Marking paid requires full payment
- Reopening a paid invoice requires a shortfall
- Cancelled invoices are terminal
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoices.change_invoice_status import ChangeInvoiceStatus
from src.app.use_cases.invoices.dtos import ChangeInvoiceStatusCommandDTO
from src.domain.clock import FixedClock
from src.domain.invoice import Invoice, InvoiceStatus


@pytest.fixture
def invoice():
    return Invoice(
        id=1,
        client_id=1,
        invoice_number="INV-2025-000001",
        status=InvoiceStatus.DRAFT,
        amount=Decimal("100.00"),
        currency="USD",
        issue_date=date(2025, 2, 1),
        due_date=date(2025, 3, 3),
    )


@pytest.fixture
def mock_invoice_repo(invoice):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=invoice)
    repo.update = AsyncMock(side_effect=lambda i: i)
    return repo


@pytest.fixture
def mock_payment_repo():
    repo = MagicMock()
    repo.sum_for_invoice = AsyncMock(return_value=Decimal("0"))
    return repo


@pytest.fixture
def change_status_use_case(mock_uow, mock_invoice_repo, mock_payment_repo):
    return ChangeInvoiceStatus(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        payment_repo=mock_payment_repo,
        clock=FixedClock(date(2025, 2, 2)),
    )


def to(status):
    return ChangeInvoiceStatusCommandDTO(status=status)


@pytest.mark.asyncio
class TestChangeInvoiceStatus:
    """Test explicit invoice status changes"""

    async def test_send_draft(self, change_status_use_case, mock_uow):
        result = await change_status_use_case.execute(1, to(InvoiceStatus.SENT))

        assert result.is_ok()
        assert result.value.status == "sent"
        assert result.value.sent_date == date(2025, 2, 2)
        mock_uow.commit.assert_called_once()

    async def test_paid_with_outstanding_balance(
        self, change_status_use_case, invoice, mock_payment_repo, mock_invoice_repo
    ):
        """
        Given: Sent invoice of 100.00 with 60.00 paid
        When: It is marked paid
        Then: INVALID_STATUS_TRANSITION naming the outstanding amount
        """
        # Arrange
        invoice.status = InvoiceStatus.SENT
        mock_payment_repo.sum_for_invoice = AsyncMock(return_value=Decimal("60.00"))

        # Act
        result = await change_status_use_case.execute(1, to(InvoiceStatus.PAID))

        # Assert
        assert result.is_err()
        assert result.error.code == "INVALID_STATUS_TRANSITION"
        assert result.error.message == "Cannot mark invoice as paid: outstanding amount is $40.00"
        mock_invoice_repo.update.assert_not_called()

    async def test_paid_when_covered(self, change_status_use_case, invoice, mock_payment_repo):
        invoice.status = InvoiceStatus.OVERDUE
        mock_payment_repo.sum_for_invoice = AsyncMock(return_value=Decimal("100.00"))

        result = await change_status_use_case.execute(1, to(InvoiceStatus.PAID))

        assert result.is_ok()
        assert result.value.status == "paid"
        assert result.value.paid_date == date(2025, 2, 2)

    async def test_reopen_paid_with_shortfall(self, change_status_use_case, invoice):
        invoice.status = InvoiceStatus.PAID
        invoice.paid_date = date(2025, 2, 1)

        result = await change_status_use_case.execute(1, to(InvoiceStatus.SENT))

        assert result.is_ok()
        assert result.value.status == "sent"
        assert result.value.paid_date is None

    async def test_draft_cannot_go_overdue(self, change_status_use_case):
        result = await change_status_use_case.execute(1, to(InvoiceStatus.OVERDUE))

        assert result.is_err()
        assert result.error.message == "Cannot change status from draft to overdue"

    async def test_cancelled_is_terminal(self, change_status_use_case, invoice):
        invoice.status = InvoiceStatus.CANCELLED

        result = await change_status_use_case.execute(1, to(InvoiceStatus.SENT))

        assert result.is_err()
        assert result.error.code == "INVALID_STATUS_TRANSITION"

    async def test_invoice_not_found(self, change_status_use_case, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await change_status_use_case.execute(7, to(InvoiceStatus.SENT))

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"
