"""
Customer-facing SLA expectation text.

Turns computed deadlines into the "Service Level Expectations" block that
the notification collaborator includes in acknowledgement emails. Dates are
rendered in the business-hours timezone.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from helpdesk_sla.sla.domain.calendar import BusinessCalendar
from helpdesk_sla.sla.domain.deadlines import compute_deadlines
from helpdesk_sla.sla.domain.value_objects import SLASettings


@dataclass(frozen=True)
class SLAExpectation:
    response_expected_by: datetime
    resolution_expected_by: datetime
    response_message: str
    resolution_message: str
    is_business_hours_only: bool


def _aware(when: datetime) -> datetime:
    return when if when.tzinfo else when.replace(tzinfo=timezone.utc)


def _clock(when: datetime) -> str:
    hour = when.hour % 12 or 12
    return f"{hour}:{when.minute:02d} {'AM' if when.hour < 12 else 'PM'}"


def _hours_text(hours: float) -> str:
    shown = int(hours) if float(hours).is_integer() else hours
    return "1 hour" if shown == 1 else f"{shown} hours"


def format_expectation_message(
    expected_by: datetime, hours: float, business_hours_only: bool, now: datetime
) -> str:
    """
    Describe a deadline relative to ``now``.

    Example: "within 4 business hours (tomorrow (Friday, March 7) by 10:00 AM)".
    """
    day = expected_by.date()
    local_now = _aware(now).astimezone(_aware(expected_by).tzinfo)
    date_text = f"{expected_by:%A}, {expected_by:%B} {expected_by.day}"
    time_text = _clock(expected_by)

    if day == local_now.date():
        timeframe = f"today by {time_text}"
    elif day == (local_now + timedelta(days=1)).date():
        timeframe = f"tomorrow ({date_text}) by {time_text}"
    else:
        timeframe = f"by {time_text} on {date_text}"

    business = " business" if business_hours_only else ""
    return f"within {_hours_text(hours)}{business} ({timeframe})"


def calculate_sla_expectation(
    priority,
    submitted_at: datetime,
    sla_settings: SLASettings,
    now: datetime,
    calendar: Optional[BusinessCalendar] = None,
) -> Optional[SLAExpectation]:
    """Expected response/resolution times, or None when SLA is disabled."""
    config = sla_settings.config_for(priority)
    if config is None or not config.enabled:
        return None

    calendar = calendar or BusinessCalendar(sla_settings.business_hours)
    deadlines = compute_deadlines(
        submitted_at, priority, sla_settings,
        calendar if config.business_hours_only else None,
    )
    response_by = _aware(deadlines.response_deadline).astimezone(calendar.tz)
    resolution_by = _aware(deadlines.resolution_deadline).astimezone(calendar.tz)

    return SLAExpectation(
        response_expected_by=response_by,
        resolution_expected_by=resolution_by,
        response_message=format_expectation_message(
            response_by, config.response_time_hours, config.business_hours_only, now
        ),
        resolution_message=format_expectation_message(
            resolution_by, config.resolution_time_hours, config.business_hours_only, now
        ),
        is_business_hours_only=config.business_hours_only,
    )


def build_expectation_text(
    priority,
    submitted_at: datetime,
    sla_settings: SLASettings,
    now: datetime,
    calendar: Optional[BusinessCalendar] = None,
) -> str:
    """Plain-text expectation block; empty string when SLA is disabled."""
    expectation = calculate_sla_expectation(priority, submitted_at, sla_settings, now, calendar)
    if expectation is None:
        return ""

    note = ""
    if expectation.is_business_hours_only:
        hours = sla_settings.business_hours
        count = len(hours.holidays)
        holidays = ""
        if count:
            holidays = f", excluding {count} configured holiday{'' if count == 1 else 's'}"
        note = (
            f" (calculated using business hours: {hours.start:%H:%M}-{hours.end:%H:%M}, "
            f"{hours.timezone}{holidays})"
        )

    return (
        "Service Level Expectations:\n"
        f"• Initial response: {expectation.response_message}\n"
        f"• Resolution target: {expectation.resolution_message}{note}\n"
    )
