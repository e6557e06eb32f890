"""Input checks shared by the payment use cases"""

from decimal import Decimal
from typing import Optional
from libs.result import Error
from src.domain.invoicing import format_money, is_whole_cents, remaining_amount
from .dtos import MAX_NOTES_LENGTH


def validate_payment_input(
    amount: Optional[Decimal], notes: Optional[str]
) -> Optional[Error]:
    """Return a VALIDATION_ERROR for a non-positive or sub-cent amount, or over-long notes"""
    if amount is not None and amount <= 0:
        return Error(
            code="VALIDATION_ERROR",
            message="Payment amount must be greater than 0",
            reason=f"amount={amount}",
        )
    if amount is not None and not is_whole_cents(amount):
        return Error(
            code="VALIDATION_ERROR",
            message="Payment amount cannot have more than 2 decimal places",
            reason=f"amount={amount}",
        )
    if notes is not None and len(notes) > MAX_NOTES_LENGTH:
        return Error(
            code="VALIDATION_ERROR",
            message=f"Notes cannot exceed {MAX_NOTES_LENGTH} characters",
            reason=f"notes length={len(notes)}",
        )
    return None


def overpayment_error(
    invoice_amount: Decimal,
    paid: Decimal,
    paid_label: str,
    maximum_label: str,
    reason: str,
) -> Error:
    """
    OVERPAYMENT error exposing how much can still be paid

    Built from plain values so it stays readable after the transaction is
    rolled back and the invoice row is expired.
    """
    maximum = remaining_amount(invoice_amount, paid)
    return Error(
        code="OVERPAYMENT",
        message=(
            f"Payment amount would exceed invoice total. "
            f"Invoice amount: {format_money(invoice_amount)}, "
            f"{paid_label}: {format_money(paid)}, "
            f"{maximum_label}: {format_money(maximum)}"
        ),
        reason=reason,
    )


def payment_not_found(payment_id: int) -> Error:
    return Error(
        code="PAYMENT_NOT_FOUND",
        message=f"Payment with ID {payment_id} not found",
    )
