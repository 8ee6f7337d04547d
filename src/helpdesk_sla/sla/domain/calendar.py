"""
Business Calendar
=================

Date/time arithmetic over a configured business-hours window, weekday set,
timezone and holiday list.

All methods are pure: the calendar holds only its (immutable) configuration
and never reads the system clock.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, Tuple

from helpdesk_sla.core.exceptions import InvalidBusinessHoursError
from helpdesk_sla.sla.domain.value_objects import BusinessHoursConfig, Holiday

_ONE_DAY = timedelta(days=1)


def matches_recurring_holiday(day: date, holiday_date: date) -> bool:
    """
    Check whether ``day`` falls on a recurring holiday.

    Only month and day are compared. A Feb 29 holiday therefore matches
    Feb 29 of leap years and nothing in other years; it is not moved to
    Feb 28 or Mar 1.
    """
    return (day.month, day.day) == (holiday_date.month, holiday_date.day)


def matches_holiday(day: date, holiday: Holiday) -> bool:
    if holiday.recurring:
        return matches_recurring_holiday(day, holiday.date)
    return day == holiday.date


def weekday_number(day: date) -> int:
    """Weekday with 0 = Sunday ... 6 = Saturday."""
    return day.isoweekday() % 7


class BusinessCalendar:
    """
    Business-hours calendar.

    Building a calendar validates its configuration; an empty weekday set,
    an out-of-range weekday or a window whose start is not before its end
    raises ``InvalidBusinessHoursError`` (a ``ConfigurationError``).

    Naive datetimes are interpreted as UTC. Results are returned in the
    timezone of the input (naive in, naive UTC out).
    """

    def __init__(self, config: BusinessHoursConfig):
        self._validate(config)
        self.config = config
        self.tz = config.tz

    @staticmethod
    def _validate(config: BusinessHoursConfig) -> None:
        if not config.days:
            raise InvalidBusinessHoursError("weekday set is empty")
        bad_days = sorted(d for d in config.days if not 0 <= d <= 6)
        if bad_days:
            raise InvalidBusinessHoursError(
                "weekdays must be between 0 (Sunday) and 6 (Saturday)",
                {"days": bad_days},
            )
        if config.start >= config.end:
            raise InvalidBusinessHoursError(
                "start of day must be before end of day",
                {"start": config.start.isoformat(), "end": config.end.isoformat()},
            )

    # ========== Day classification ==========

    def is_business_day(self, when) -> bool:
        """True iff the weekday (in the calendar timezone) is a business day."""
        return weekday_number(self._local_date(when)) in self.config.days

    def is_holiday(self, when) -> bool:
        day = self._local_date(when)
        return any(matches_holiday(day, h) for h in self.config.holidays)

    def holidays_between(self, start: date, end: date) -> Iterable[date]:
        """Holiday dates in ``[start, end]``, in order."""
        day = start
        while day <= end:
            if any(matches_holiday(day, h) for h in self.config.holidays):
                yield day
            day += _ONE_DAY

    # ========== Arithmetic ==========

    def add_business_hours(self, start: datetime, hours: float) -> datetime:
        """
        Advance ``start`` by ``hours`` counted only inside business windows.

        Non-business days and holidays are skipped whole. A start before the
        window is clamped to the window start; a start at or after the
        window end rolls to the next working day. Zero or negative hours
        return ``start`` unchanged.
        """
        if not hours > 0:
            return start

        current = self._to_local(start)
        remaining = timedelta(hours=hours)

        while remaining > timedelta(0):
            day = current.date()
            if not self._is_working_date(day):
                current = self._window(day + _ONE_DAY)[0]
                continue

            window_start, window_end = self._window(day)
            if current < window_start:
                current = window_start
            if current >= window_end:
                current = self._window(day + _ONE_DAY)[0]
                continue

            available = window_end - current
            if remaining <= available:
                current = current + remaining
                remaining = timedelta(0)
            else:
                remaining -= available
                current = self._window(day + _ONE_DAY)[0]

        return self._restore(current, start)

    def compute_elapsed_business_hours(self, start: datetime, end: datetime) -> float:
        """Sum of business-window overlap for every day between start and end."""
        if end <= start:
            return 0.0

        current = self._to_local(start)
        finish = self._to_local(end)
        total = timedelta(0)

        while current < finish:
            day = current.date()
            if self._is_working_date(day):
                window_start, window_end = self._window(day)
                period_start = max(current, window_start)
                period_end = min(finish, window_end)
                if period_start < period_end:
                    total += period_end - period_start
            current = datetime.combine(day + _ONE_DAY, time(0), tzinfo=self.tz)

        return total.total_seconds() / 3600

    # ========== Helpers ==========

    def _is_working_date(self, day: date) -> bool:
        return weekday_number(day) in self.config.days and not any(
            matches_holiday(day, h) for h in self.config.holidays
        )

    def _window(self, day: date) -> Tuple[datetime, datetime]:
        return (
            datetime.combine(day, self.config.start, tzinfo=self.tz),
            datetime.combine(day, self.config.end, tzinfo=self.tz),
        )

    def _to_local(self, when: datetime) -> datetime:
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        return when.astimezone(self.tz)

    def _local_date(self, when) -> date:
        if isinstance(when, datetime):
            return self._to_local(when).date()
        return when

    @staticmethod
    def _restore(result: datetime, like: datetime) -> datetime:
        if like.tzinfo is None:
            return result.astimezone(timezone.utc).replace(tzinfo=None)
        return result.astimezone(like.tzinfo)

