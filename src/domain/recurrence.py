"""Recurrence rules for orders

Pure date/frequency arithmetic: next invoice date, schedules, frequency
validation and annual revenue estimates. Nothing here touches storage.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterator, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from src.domain.exceptions import InvalidFrequencyError
from src.domain.order import OrderFrequency

CUSTOM_DAYS_MIN = 1
CUSTOM_DAYS_MAX = 365

CENTS = Decimal("0.01")

# relativedelta clamps to the last day of shorter months (Jan 31 -> Feb 28)
_FREQUENCY_STEPS = {
    OrderFrequency.WEEKLY: relativedelta(days=7),
    OrderFrequency.BIWEEKLY: relativedelta(days=14),
    OrderFrequency.MONTHLY: relativedelta(months=1),
    OrderFrequency.QUARTERLY: relativedelta(months=3),
    OrderFrequency.ANNUALLY: relativedelta(years=1),
}

_OCCURRENCES_PER_YEAR = {
    OrderFrequency.WEEKLY: Decimal(365) / Decimal(7),
    OrderFrequency.BIWEEKLY: Decimal(365) / Decimal(14),
    OrderFrequency.MONTHLY: Decimal(12),
    OrderFrequency.QUARTERLY: Decimal(4),
    OrderFrequency.ANNUALLY: Decimal(1),
}

_DISPLAY_TEXT = {
    OrderFrequency.WEEKLY: "Weekly",
    OrderFrequency.BIWEEKLY: "Bi-weekly",
    OrderFrequency.MONTHLY: "Monthly",
    OrderFrequency.QUARTERLY: "Quarterly",
    OrderFrequency.ANNUALLY: "Annually",
}


@dataclass(frozen=True)
class FrequencyValidation:
    """Outcome of validate_frequency_and_custom_days"""
    is_valid: bool
    error: Optional[str] = None


def _is_valid_custom_days(custom_days) -> bool:
    if custom_days is None or isinstance(custom_days, bool):
        return False
    if not isinstance(custom_days, int):
        return False
    return CUSTOM_DAYS_MIN <= custom_days <= CUSTOM_DAYS_MAX


def _require_custom_days(custom_days) -> int:
    if not _is_valid_custom_days(custom_days):
        raise InvalidFrequencyError(
            f"Custom frequency requires valid custom_days "
            f"({CUSTOM_DAYS_MIN}-{CUSTOM_DAYS_MAX})"
        )
    return custom_days


def calculate_next_invoice_date(
    from_date: date,
    frequency: OrderFrequency,
    custom_days: Optional[int] = None,
) -> date:
    """
    Compute the invoice date that follows from_date

    Args:
        from_date: Reference date (start date or last invoice date)
        frequency: Order frequency
        custom_days: Interval in days, required for CUSTOM

    Returns:
        The next invoice date, strictly after from_date

    Raises:
        InvalidFrequencyError: CUSTOM without custom_days in 1..365
    """
    frequency = OrderFrequency(frequency)
    if frequency == OrderFrequency.CUSTOM:
        return from_date + relativedelta(days=_require_custom_days(custom_days))
    return from_date + _FREQUENCY_STEPS[frequency]


def generate_invoice_schedule(
    start_from: date,
    frequency: OrderFrequency,
    count: int,
    custom_days: Optional[int] = None,
) -> Iterator[date]:
    """
    Yield the next `count` invoice dates after start_from

    Each date is the next-date rule applied to the previous one, so the
    first yielded value equals calculate_next_invoice_date(start_from).

    Raises:
        ValueError: count is negative
        InvalidFrequencyError: CUSTOM without valid custom_days
    """
    if count < 0:
        raise ValueError("count must be zero or greater")
    if OrderFrequency(frequency) == OrderFrequency.CUSTOM:
        _require_custom_days(custom_days)

    current = start_from
    for _ in range(count):
        current = calculate_next_invoice_date(current, frequency, custom_days)
        yield current


def validate_frequency_and_custom_days(
    frequency: OrderFrequency,
    custom_days: Optional[int],
) -> FrequencyValidation:
    """Check that custom_days is present exactly when frequency is CUSTOM"""
    frequency = OrderFrequency(frequency)
    if frequency == OrderFrequency.CUSTOM:
        if custom_days is None:
            return FrequencyValidation(False, "Custom frequency requires custom_days")
        if not _is_valid_custom_days(custom_days):
            return FrequencyValidation(
                False,
                f"custom_days must be between {CUSTOM_DAYS_MIN} and {CUSTOM_DAYS_MAX}",
            )
        return FrequencyValidation(True)

    if custom_days is not None:
        return FrequencyValidation(
            False, "custom_days should only be provided for custom frequency"
        )
    return FrequencyValidation(True)


def calculate_estimated_annual_revenue(
    amount: Decimal,
    frequency: OrderFrequency,
    custom_days: Optional[int] = None,
) -> Decimal:
    """
    Estimate yearly revenue of an order, rounded to cents

    Occurrences per year: 365/7, 365/14, 12, 4, 1 or 365/custom_days.
    """
    frequency = OrderFrequency(frequency)
    if frequency == OrderFrequency.CUSTOM:
        occurrences = Decimal(365) / Decimal(_require_custom_days(custom_days))
    else:
        occurrences = _OCCURRENCES_PER_YEAR[frequency]
    return (Decimal(amount) * occurrences).quantize(CENTS, rounding=ROUND_HALF_UP)


def frequency_display_text(
    frequency: OrderFrequency,
    custom_days: Optional[int] = None,
) -> str:
    frequency = OrderFrequency(frequency)
    if frequency == OrderFrequency.CUSTOM:
        if not custom_days:
            return "Custom"
        return f"Every {custom_days} day" if custom_days == 1 else f"Every {custom_days} days"
    return _DISPLAY_TEXT[frequency]


def upcoming_invoice_dates(
    next_invoice_date: date,
    frequency: OrderFrequency,
    count: int,
    custom_days: Optional[int] = None,
) -> List[date]:
    """The next `count` invoice dates of an order, starting with next_invoice_date itself"""
    if count <= 0:
        return []
    following = generate_invoice_schedule(next_invoice_date, frequency, count - 1, custom_days)
    return [next_invoice_date, *following]


def describe_schedule(
    next_invoice_date: date,
    frequency: OrderFrequency,
    count: int,
    custom_days: Optional[int] = None,
) -> List[Tuple[date, str]]:
    """Upcoming invoice dates paired with a short label for display"""
    display = frequency_display_text(frequency, custom_days)
    entries = []
    for index, scheduled in enumerate(
        upcoming_invoice_dates(next_invoice_date, frequency, count, custom_days)
    ):
        formatted = scheduled.strftime("%b %d, %Y")
        if index == 0:
            entries.append((scheduled, f"Next invoice: {formatted}"))
        else:
            entries.append((scheduled, f"Invoice {index + 1} ({display}): {formatted}"))
    return entries
