"""Invoicing rules

Invoice numbering, due dates, the generation guard for orders, and the
status machines of orders and invoices. Reconciliation of invoice status
against the payments received also lives here so every writer applies
the same rule.
"""

import re
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from src.domain.exceptions import InvalidStatusTransitionError
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.order import Order, OrderStatus

DEFAULT_LEAD_TIME_DAYS = 30
INVOICE_NUMBER_PREFIX = "INV"
INVOICE_SEQUENCE_DIGITS = 6
CANONICAL_INVOICE_NUMBER = re.compile(r"INV-([0-9]{4})-([0-9]{6})")

INVOICE_TRANSITIONS = {
    InvoiceStatus.DRAFT: {InvoiceStatus.SENT, InvoiceStatus.CANCELLED},
    InvoiceStatus.SENT: {InvoiceStatus.PAID, InvoiceStatus.OVERDUE, InvoiceStatus.CANCELLED},
    InvoiceStatus.OVERDUE: {InvoiceStatus.PAID, InvoiceStatus.CANCELLED},
    InvoiceStatus.PAID: {InvoiceStatus.SENT},
    InvoiceStatus.CANCELLED: set(),
}

ORDER_TRANSITIONS = {
    OrderStatus.ACTIVE: {OrderStatus.PAUSED, OrderStatus.CANCELLED},
    OrderStatus.PAUSED: {OrderStatus.ACTIVE, OrderStatus.CANCELLED},
    OrderStatus.CANCELLED: set(),
}


@dataclass(frozen=True)
class GenerationCheck:
    """Whether an invoice may be generated from an order right now"""
    allowed: bool
    reason: Optional[str] = None


def invoice_number_prefix(year: int) -> str:
    return f"{INVOICE_NUMBER_PREFIX}-{year}-"


def format_invoice_number(year: int, sequence: int) -> str:
    """INV-<year>-<sequence zero-padded to 6 digits>"""
    return f"{invoice_number_prefix(year)}{sequence:0{INVOICE_SEQUENCE_DIGITS}d}"


def parse_invoice_sequence(invoice_number: Optional[str], year: Optional[int] = None) -> Optional[int]:
    """
    Extract the counter from a canonical INV-YYYY-NNNNNN number

    Custom numbers that only share the prefix (INV-2025-X1, INV-2025-5)
    are not part of the sequence and yield None.
    """
    if not invoice_number:
        return None
    match = CANONICAL_INVOICE_NUMBER.fullmatch(invoice_number)
    if not match:
        return None
    if year is not None and int(match.group(1)) != year:
        return None
    return int(match.group(2))


def next_invoice_number(year: int, current_max: Optional[str]) -> str:
    """Number following the largest canonical one for the year (000001 if none)"""
    sequence = parse_invoice_sequence(current_max, year)
    return format_invoice_number(year, (sequence or 0) + 1)


def calculate_invoice_due_date(
    issue_date: date,
    lead_time_days: Optional[int] = None,
    default_lead_time_days: int = DEFAULT_LEAD_TIME_DAYS,
) -> date:
    """
    Due date of an invoice issued on issue_date

    Args:
        issue_date: Invoice issue date
        lead_time_days: Order payment terms; ignored unless positive
        default_lead_time_days: Terms used when lead_time_days is not usable

    Returns:
        issue_date plus the applicable number of days
    """
    if lead_time_days is not None and lead_time_days > 0:
        return issue_date + timedelta(days=lead_time_days)
    return issue_date + timedelta(days=default_lead_time_days)


def can_generate_invoice_from_order(order: Order, today: date) -> GenerationCheck:
    if order.status != OrderStatus.ACTIVE:
        return GenerationCheck(False, "Cannot generate invoice from inactive order")
    if order.next_invoice_date > today:
        return GenerationCheck(
            False, f"Next invoice is not due until {order.next_invoice_date.isoformat()}"
        )
    return GenerationCheck(True)


def is_fully_paid(amount: Decimal, total_paid: Decimal) -> bool:
    return Decimal(total_paid) >= Decimal(amount)


def remaining_amount(amount: Decimal, total_paid: Decimal) -> Decimal:
    remaining = Decimal(amount) - Decimal(total_paid)
    return remaining if remaining > 0 else Decimal("0.00")


def format_money(value: Decimal) -> str:
    return f"${Decimal(value).quantize(Decimal('0.01')):,.2f}"


def ensure_order_transition(current: OrderStatus, target: OrderStatus) -> None:
    """Raise InvalidStatusTransitionError unless current -> target is allowed"""
    if current == target:
        return
    if target not in ORDER_TRANSITIONS[current]:
        raise InvalidStatusTransitionError(current, target)


def ensure_invoice_transition(
    current: InvoiceStatus,
    target: InvoiceStatus,
    amount: Decimal,
    total_paid: Decimal,
) -> None:
    """
    Validate an explicit invoice status change

    Besides the transition table, the change must keep status consistent
    with the payments: paid needs full payment, leaving paid needs a
    shortfall.

    Raises:
        InvalidStatusTransitionError: change not allowed
    """
    if target not in INVOICE_TRANSITIONS[current]:
        raise InvalidStatusTransitionError(current, target)

    fully_paid = is_fully_paid(amount, total_paid)
    if target == InvoiceStatus.PAID and not fully_paid:
        raise InvalidStatusTransitionError(
            current,
            target,
            f"Cannot mark invoice as paid: outstanding amount is "
            f"{format_money(remaining_amount(amount, total_paid))}",
        )
    if current == InvoiceStatus.PAID and fully_paid:
        raise InvalidStatusTransitionError(
            current,
            target,
            "Cannot reopen an invoice whose payments cover the full amount",
        )


def apply_invoice_status(invoice: Invoice, target: InvoiceStatus, today: date) -> None:
    """Set status and the dates that follow it (sent_date, paid_date)"""
    if target == InvoiceStatus.SENT and invoice.sent_date is None:
        invoice.sent_date = today
    if target == InvoiceStatus.PAID:
        invoice.paid_date = invoice.paid_date or today
    elif invoice.status == InvoiceStatus.PAID:
        invoice.paid_date = None
    invoice.status = target


def reconcile_invoice_status(
    invoice: Invoice,
    total_paid: Decimal,
    paid_date: Optional[date],
    today: date,
) -> bool:
    """
    Bring invoice status in line with the payments received

    - covered amount: paid, paid_date set to paid_date
    - short while paid: back to sent, paid_date cleared
    - partial payment on a draft: promoted to sent
    - otherwise the status is kept

    Returns:
        True if the status changed
    """
    previous = invoice.status

    if is_fully_paid(invoice.amount, total_paid):
        if invoice.status != InvoiceStatus.PAID:
            invoice.status = InvoiceStatus.PAID
            invoice.paid_date = paid_date or today
    elif invoice.status == InvoiceStatus.PAID:
        invoice.status = InvoiceStatus.SENT
        invoice.paid_date = None
    elif invoice.status == InvoiceStatus.DRAFT and Decimal(total_paid) > 0:
        invoice.status = InvoiceStatus.SENT
        if invoice.sent_date is None:
            invoice.sent_date = today

    return invoice.status != previous


def to_money(value) -> Decimal:
    """Normalize a stored or aggregated amount to a 2-place Decimal"""
    return Decimal(str(value or 0)).quantize(Decimal("0.01"))


def is_whole_cents(value: Decimal) -> bool:
    """Money columns hold two decimal places; anything finer would be rounded on write"""
    value = Decimal(value)
    return value.is_finite() and value.normalize().as_tuple().exponent >= -2
