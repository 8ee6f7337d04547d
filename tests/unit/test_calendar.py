"""
Tests for the business calendar.

Covers day classification, holiday matching (including leap years),
business-hour addition and elapsed business-hour accumulation.
"""

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo

import pytest

from helpdesk_sla.core.exceptions import ConfigurationError
from helpdesk_sla.sla.domain import (
    BusinessCalendar,
    BusinessHoursConfig,
    Holiday,
    matches_recurring_holiday,
)

UTC = timezone.utc


def at(day: int, hour: int, minute: int = 0) -> datetime:
    """July 2025 in UTC; the 14th is a Monday."""
    return datetime(2025, 7, day, hour, minute, tzinfo=UTC)


def with_holidays(config: BusinessHoursConfig, *holidays: Holiday) -> BusinessCalendar:
    return BusinessCalendar(config.model_copy(update={"holidays": list(holidays)}))


# =============================================================================
# Configuration validation
# =============================================================================


class TestCalendarValidation:
    def test_start_after_end_rejected(self):
        config = BusinessHoursConfig(start=time(17, 0), end=time(9, 0), timezone="UTC")
        with pytest.raises(ConfigurationError):
            BusinessCalendar(config)

    def test_zero_length_window_rejected(self):
        config = BusinessHoursConfig(start=time(9, 0), end=time(9, 0), timezone="UTC")
        with pytest.raises(ConfigurationError):
            BusinessCalendar(config)

    def test_empty_weekday_set_rejected(self):
        config = BusinessHoursConfig(days=set(), timezone="UTC")
        with pytest.raises(ConfigurationError):
            BusinessCalendar(config)

    def test_weekday_out_of_range_rejected(self):
        config = BusinessHoursConfig(days={1, 7}, timezone="UTC")
        with pytest.raises(ConfigurationError) as exc_info:
            BusinessCalendar(config)
        assert exc_info.value.details == {"days": [7]}

    def test_string_times_accepted(self):
        config = BusinessHoursConfig(start="08:30", end="16:45", timezone="UTC")
        assert config.start == time(8, 30)
        assert config.end == time(16, 45)


# =============================================================================
# Day classification
# =============================================================================


class TestDayClassification:
    def test_weekdays_are_business_days(self, calendar):
        assert calendar.is_business_day(at(14, 12))
        assert calendar.is_business_day(at(18, 12))

    def test_weekend_is_not_business_day(self, calendar):
        assert not calendar.is_business_day(at(19, 12))
        assert not calendar.is_business_day(at(20, 12))

    def test_weekday_evaluated_in_calendar_timezone(self):
        chicago = BusinessCalendar(BusinessHoursConfig(timezone="America/Chicago"))
        # Saturday 02:00 UTC is still Friday evening in Chicago
        assert chicago.is_business_day(datetime(2025, 7, 19, 2, 0, tzinfo=UTC))

    def test_accepts_plain_dates(self, calendar):
        assert calendar.is_business_day(date(2025, 7, 15))
        assert not calendar.is_business_day(date(2025, 7, 20))

    def test_one_time_holiday_matches_exact_date_only(self, business_hours):
        cal = with_holidays(business_hours, Holiday(date=date(2025, 7, 16)))
        assert cal.is_holiday(at(16, 10))
        assert not cal.is_holiday(datetime(2026, 7, 16, 10, tzinfo=UTC))

    def test_recurring_holiday_matches_any_year(self, business_hours):
        cal = with_holidays(business_hours, Holiday(date=date(2024, 12, 25), recurring=True))
        assert cal.is_holiday(datetime(2025, 12, 25, 10, tzinfo=UTC))
        assert cal.is_holiday(datetime(2031, 12, 25, 10, tzinfo=UTC))
        assert not cal.is_holiday(datetime(2025, 12, 26, 10, tzinfo=UTC))

    def test_holiday_alias_keys(self):
        holiday = Holiday.model_validate({"date": "2025-01-01", "isRecurring": True})
        assert holiday.recurring is True
        assert holiday.date == date(2025, 1, 1)

    def test_holidays_between(self, business_hours):
        cal = with_holidays(
            business_hours,
            Holiday(date=date(2025, 7, 16)),
            Holiday(date=date(2020, 7, 18), recurring=True),
        )
        assert list(cal.holidays_between(date(2025, 7, 14), date(2025, 7, 21))) == [
            date(2025, 7, 16),
            date(2025, 7, 18),
        ]


class TestRecurringHolidayMatching:
    def test_same_month_and_day_different_year(self):
        assert matches_recurring_holiday(date(2030, 7, 4), date(1999, 7, 4))

    def test_different_day(self):
        assert not matches_recurring_holiday(date(2030, 7, 5), date(1999, 7, 4))

    def test_leap_day_holiday_matches_leap_years(self):
        assert matches_recurring_holiday(date(2028, 2, 29), date(2024, 2, 29))

    def test_leap_day_holiday_skipped_in_non_leap_years(self):
        assert not matches_recurring_holiday(date(2025, 2, 28), date(2024, 2, 29))
        assert not matches_recurring_holiday(date(2025, 3, 1), date(2024, 2, 29))

    def test_leap_day_holiday_does_not_block_calendar_in_non_leap_year(self, business_hours):
        cal = with_holidays(business_hours, Holiday(date=date(2024, 2, 29), recurring=True))
        # Friday 2025-02-28 stays a working day
        start = datetime(2025, 2, 28, 9, 0, tzinfo=UTC)
        assert cal.add_business_hours(start, 2) == datetime(2025, 2, 28, 11, 0, tzinfo=UTC)


# =============================================================================
# add_business_hours
# =============================================================================


class TestAddBusinessHours:
    def test_within_same_day(self, calendar):
        assert calendar.add_business_hours(at(15, 10), 2) == at(15, 12)

    def test_fractional_hours(self, calendar):
        assert calendar.add_business_hours(at(15, 9), 0.25) == at(15, 9, 15)

    def test_start_before_window_is_clamped(self, calendar):
        assert calendar.add_business_hours(at(15, 7), 1) == at(15, 10)

    def test_start_after_window_rolls_to_next_day(self, calendar):
        assert calendar.add_business_hours(at(15, 18), 1) == at(16, 10)

    def test_start_exactly_at_window_end_rolls(self, calendar):
        assert calendar.add_business_hours(at(15, 17), 1) == at(16, 10)

    def test_ending_exactly_at_window_end(self, calendar):
        assert calendar.add_business_hours(at(15, 9), 8) == at(15, 17)

    def test_weekend_skipped(self, calendar):
        assert calendar.add_business_hours(at(18, 16), 2) == at(21, 10)

    def test_friday_afternoon_rolls_into_monday(self, calendar):
        # 2h Friday 15:00-17:00, remaining 2h from Monday 09:00
        assert calendar.add_business_hours(at(18, 15), 4) == at(21, 11)

    def test_spans_multiple_days(self, calendar):
        # Mon 8h + Tue 8h + Wed 4h
        assert calendar.add_business_hours(at(14, 9), 20) == at(16, 13)

    def test_holiday_skipped_entirely(self, business_hours):
        cal = with_holidays(business_hours, Holiday(date=date(2025, 7, 16)))
        # Tuesday 16:30 + 2h: 30 min Tuesday, Wednesday skipped, 1.5h Thursday
        assert cal.add_business_hours(at(15, 16, 30), 2) == at(17, 10, 30)

    def test_start_on_holiday_treated_as_before_next_window(self, business_hours):
        cal = with_holidays(business_hours, Holiday(date=date(2025, 7, 16)))
        assert cal.add_business_hours(at(16, 11), 1) == at(17, 10)

    def test_start_on_weekend(self, calendar):
        assert calendar.add_business_hours(at(19, 12), 1) == at(21, 10)

    @pytest.mark.parametrize("hours", [0, -1, -0.5])
    def test_zero_or_negative_hours_return_start(self, calendar, hours):
        start = at(19, 3, 17)
        assert calendar.add_business_hours(start, hours) == start

    def test_monotonic_in_hours(self, calendar):
        start = at(17, 15, 45)
        previous = calendar.add_business_hours(start, 0)
        for quarter in range(1, 200):
            result = calendar.add_business_hours(start, quarter / 4)
            assert result >= previous
            previous = result

    def test_result_keeps_input_timezone(self):
        chicago = BusinessCalendar(BusinessHoursConfig(timezone="America/Chicago"))
        # 14:00 UTC on Tue 15 July is 09:00 CDT
        result = chicago.add_business_hours(at(15, 14), 2)
        assert result == at(15, 16)
        assert result.tzinfo == UTC

    def test_business_window_in_local_time(self):
        chicago = BusinessCalendar(BusinessHoursConfig(timezone="America/Chicago"))
        start = datetime(2025, 7, 15, 16, 0, tzinfo=ZoneInfo("America/Chicago"))
        # 1h Tuesday, 2h Wednesday from 09:00 local
        result = chicago.add_business_hours(start, 3)
        assert result == datetime(2025, 7, 16, 11, 0, tzinfo=ZoneInfo("America/Chicago"))

    def test_naive_input_is_utc_and_stays_naive(self, calendar):
        result = calendar.add_business_hours(datetime(2025, 7, 15, 10, 0), 2)
        assert result == datetime(2025, 7, 15, 12, 0)
        assert result.tzinfo is None


# =============================================================================
# compute_elapsed_business_hours
# =============================================================================


class TestElapsedBusinessHours:
    def test_within_same_day(self, calendar):
        assert calendar.compute_elapsed_business_hours(at(15, 10), at(15, 12)) == 2.0

    def test_outside_window_ignored(self, calendar):
        assert calendar.compute_elapsed_business_hours(at(15, 6), at(15, 20)) == 8.0

    def test_across_weekend(self, calendar):
        assert calendar.compute_elapsed_business_hours(at(18, 15), at(21, 11)) == 4.0

    def test_weekend_only(self, calendar):
        assert calendar.compute_elapsed_business_hours(at(19, 8), at(20, 20)) == 0.0

    def test_end_before_start(self, calendar):
        assert calendar.compute_elapsed_business_hours(at(15, 12), at(15, 10)) == 0.0

    def test_holidays_excluded(self, business_hours):
        cal = with_holidays(business_hours, Holiday(date=date(2025, 7, 16)))
        assert cal.compute_elapsed_business_hours(at(15, 16, 30), at(17, 10, 30)) == 2.0

    @pytest.mark.parametrize("hours", [0.5, 3, 8, 13.25, 40])
    def test_inverse_of_add_business_hours(self, calendar, hours):
        start = at(15, 11, 20)
        end = calendar.add_business_hours(start, hours)
        assert calendar.compute_elapsed_business_hours(start, end) == pytest.approx(hours)
