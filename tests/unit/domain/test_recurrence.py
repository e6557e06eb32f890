"""Unit tests for order recurrence rules

Tests cover:
- Next invoice date per frequency, including month-end clamping
- Custom frequency validation
- Schedule generation
- Annual revenue estimates and display text
"""

import pytest
from datetime import date
from decimal import Decimal

from src.domain.exceptions import InvalidFrequencyError
from src.domain.order import OrderFrequency
from src.domain.recurrence import (
    calculate_estimated_annual_revenue,
    calculate_next_invoice_date,
    describe_schedule,
    frequency_display_text,
    generate_invoice_schedule,
    upcoming_invoice_dates,
    validate_frequency_and_custom_days,
)

STANDARD_FREQUENCIES = [
    OrderFrequency.WEEKLY,
    OrderFrequency.BIWEEKLY,
    OrderFrequency.MONTHLY,
    OrderFrequency.QUARTERLY,
    OrderFrequency.ANNUALLY,
]


class TestCalculateNextInvoiceDate:
    @pytest.mark.parametrize(
        "frequency, expected",
        [
            (OrderFrequency.WEEKLY, date(2025, 1, 8)),
            (OrderFrequency.BIWEEKLY, date(2025, 1, 15)),
            (OrderFrequency.MONTHLY, date(2025, 2, 1)),
            (OrderFrequency.QUARTERLY, date(2025, 4, 1)),
            (OrderFrequency.ANNUALLY, date(2026, 1, 1)),
        ],
    )
    def test_standard_frequencies(self, frequency, expected):
        assert calculate_next_invoice_date(date(2025, 1, 1), frequency) == expected

    def test_monthly_clamps_to_end_of_shorter_month(self):
        assert calculate_next_invoice_date(date(2025, 1, 31), OrderFrequency.MONTHLY) == date(2025, 2, 28)
        assert calculate_next_invoice_date(date(2024, 1, 31), OrderFrequency.MONTHLY) == date(2024, 2, 29)

    def test_quarterly_clamps_to_end_of_month(self):
        assert calculate_next_invoice_date(date(2025, 11, 30), OrderFrequency.QUARTERLY) == date(2026, 2, 28)

    def test_annually_from_leap_day(self):
        assert calculate_next_invoice_date(date(2024, 2, 29), OrderFrequency.ANNUALLY) == date(2025, 2, 28)

    def test_custom_adds_days(self):
        assert calculate_next_invoice_date(date(2025, 1, 1), OrderFrequency.CUSTOM, 45) == date(2025, 2, 15)

    @pytest.mark.parametrize("custom_days", [None, 0, -5, 366])
    def test_custom_requires_valid_days(self, custom_days):
        with pytest.raises(InvalidFrequencyError):
            calculate_next_invoice_date(date(2025, 1, 1), OrderFrequency.CUSTOM, custom_days)

    @pytest.mark.parametrize("frequency", STANDARD_FREQUENCIES)
    @pytest.mark.parametrize(
        "from_date", [date(2024, 2, 29), date(2025, 1, 31), date(2025, 12, 31), date(2025, 6, 15)]
    )
    def test_next_date_is_strictly_later(self, frequency, from_date):
        assert calculate_next_invoice_date(from_date, frequency) > from_date

    def test_accepts_string_frequency(self):
        assert calculate_next_invoice_date(date(2025, 1, 1), "monthly") == date(2025, 2, 1)


class TestGenerateInvoiceSchedule:
    def test_schedule_length_and_order(self):
        schedule = list(generate_invoice_schedule(date(2025, 1, 1), OrderFrequency.MONTHLY, 6))

        assert len(schedule) == 6
        assert all(earlier < later for earlier, later in zip(schedule, schedule[1:]))

    def test_first_element_is_next_date(self):
        schedule = list(generate_invoice_schedule(date(2025, 1, 31), OrderFrequency.MONTHLY, 3))

        assert schedule[0] == calculate_next_invoice_date(date(2025, 1, 31), OrderFrequency.MONTHLY)

    def test_each_date_steps_from_the_previous(self):
        schedule = list(generate_invoice_schedule(date(2025, 1, 31), OrderFrequency.MONTHLY, 3))

        # Jan 31 -> Feb 28 -> Mar 28 -> Apr 28
        assert schedule == [date(2025, 2, 28), date(2025, 3, 28), date(2025, 4, 28)]

    def test_zero_count_is_empty(self):
        assert list(generate_invoice_schedule(date(2025, 1, 1), OrderFrequency.WEEKLY, 0)) == []

    def test_negative_count_fails(self):
        with pytest.raises(ValueError):
            list(generate_invoice_schedule(date(2025, 1, 1), OrderFrequency.WEEKLY, -1))

    def test_custom_without_days_fails(self):
        with pytest.raises(InvalidFrequencyError):
            list(generate_invoice_schedule(date(2025, 1, 1), OrderFrequency.CUSTOM, 3))


class TestValidateFrequencyAndCustomDays:
    def test_standard_frequency_without_custom_days(self):
        assert validate_frequency_and_custom_days(OrderFrequency.MONTHLY, None).is_valid

    def test_custom_with_valid_days(self):
        assert validate_frequency_and_custom_days(OrderFrequency.CUSTOM, 1).is_valid
        assert validate_frequency_and_custom_days(OrderFrequency.CUSTOM, 365).is_valid

    def test_custom_missing_days(self):
        result = validate_frequency_and_custom_days(OrderFrequency.CUSTOM, None)

        assert not result.is_valid
        assert result.error == "Custom frequency requires custom_days"

    @pytest.mark.parametrize("custom_days", [0, -1, 366])
    def test_custom_out_of_range(self, custom_days):
        result = validate_frequency_and_custom_days(OrderFrequency.CUSTOM, custom_days)

        assert not result.is_valid
        assert result.error == "custom_days must be between 1 and 365"

    def test_custom_days_on_standard_frequency(self):
        result = validate_frequency_and_custom_days(OrderFrequency.WEEKLY, 10)

        assert not result.is_valid
        assert "only be provided for custom frequency" in result.error


class TestEstimatedAnnualRevenue:
    @pytest.mark.parametrize(
        "frequency, expected",
        [
            (OrderFrequency.WEEKLY, Decimal("5214.29")),
            (OrderFrequency.BIWEEKLY, Decimal("2607.14")),
            (OrderFrequency.MONTHLY, Decimal("1200.00")),
            (OrderFrequency.QUARTERLY, Decimal("400.00")),
            (OrderFrequency.ANNUALLY, Decimal("100.00")),
        ],
    )
    def test_standard_frequencies(self, frequency, expected):
        assert calculate_estimated_annual_revenue(Decimal("100.00"), frequency) == expected

    def test_custom_45_days(self):
        # 200 * 365 / 45 = 1622.222...
        assert calculate_estimated_annual_revenue(
            Decimal("200.00"), OrderFrequency.CUSTOM, 45
        ) == Decimal("1622.22")

    def test_custom_without_days_fails(self):
        with pytest.raises(InvalidFrequencyError):
            calculate_estimated_annual_revenue(Decimal("200.00"), OrderFrequency.CUSTOM, None)


class TestDisplayText:
    def test_standard_labels(self):
        assert frequency_display_text(OrderFrequency.BIWEEKLY) == "Bi-weekly"
        assert frequency_display_text(OrderFrequency.ANNUALLY) == "Annually"

    def test_custom_labels(self):
        assert frequency_display_text(OrderFrequency.CUSTOM, 45) == "Every 45 days"
        assert frequency_display_text(OrderFrequency.CUSTOM, 1) == "Every 1 day"
        assert frequency_display_text(OrderFrequency.CUSTOM, None) == "Custom"


class TestUpcomingSchedule:
    def test_starts_with_stored_next_date(self):
        dates = upcoming_invoice_dates(date(2025, 2, 1), OrderFrequency.MONTHLY, 3)

        assert dates == [date(2025, 2, 1), date(2025, 3, 1), date(2025, 4, 1)]

    def test_describe_schedule_labels(self):
        entries = describe_schedule(date(2025, 2, 1), OrderFrequency.MONTHLY, 2)

        assert entries[0] == (date(2025, 2, 1), "Next invoice: Feb 01, 2025")
        assert entries[1] == (date(2025, 3, 1), "Invoice 2 (Monthly): Mar 01, 2025")
