"""
SLA status tracking.

Derives per-metric compliance status from deadlines and completion
timestamps, and summarizes elapsed time for completed metrics.
"""

from datetime import datetime
from typing import Optional

from helpdesk_sla.config import SLAMetricStatus
from helpdesk_sla.sla.domain.calendar import BusinessCalendar
from helpdesk_sla.sla.domain.deadlines import compute_deadlines
from helpdesk_sla.sla.domain.entities import SLASummary, TicketSnapshot
from helpdesk_sla.sla.domain.value_objects import SLASettings

DEFAULT_AT_RISK_THRESHOLD = 0.8


def get_metric_status(
    deadline: Optional[datetime],
    actual_at: Optional[datetime],
    now: datetime,
    created_at: Optional[datetime] = None,
    at_risk_threshold: float = DEFAULT_AT_RISK_THRESHOLD,
    calendar: Optional[BusinessCalendar] = None,
) -> SLAMetricStatus:
    """
    Calculate the status of one SLA metric.

    Args:
        deadline: Metric deadline, None when the SLA is not tracked
        actual_at: When the metric completed (first response / resolution)
        now: Evaluation time
        created_at: Start of the tracked window (ticket creation)
        at_risk_threshold: Fraction of the window that must elapse before
            the metric is at risk
        calendar: Business calendar for business-hours tiers; the window
            and the time remaining are then counted in business hours

    A metric is at risk once less than ``1 - at_risk_threshold`` of the
    creation-to-deadline window remains. Without ``created_at`` there is no
    window and a pending metric is never reported at risk.
    """
    if deadline is None:
        return SLAMetricStatus.PENDING

    if actual_at is not None:
        return SLAMetricStatus.MET if actual_at <= deadline else SLAMetricStatus.BREACHED

    if now > deadline:
        return SLAMetricStatus.BREACHED

    if created_at is not None:
        if calendar is not None:
            window = calendar.compute_elapsed_business_hours(created_at, deadline)
            remaining = calendar.compute_elapsed_business_hours(now, deadline)
        else:
            window = (deadline - created_at).total_seconds() / 3600
            remaining = (deadline - now).total_seconds() / 3600
        if remaining < window * (1 - at_risk_threshold):
            return SLAMetricStatus.AT_RISK

    return SLAMetricStatus.PENDING


def _elapsed_hours(
    start: datetime, end: Optional[datetime], calendar: Optional[BusinessCalendar]
) -> Optional[float]:
    if end is None:
        return None
    if calendar is not None:
        return calendar.compute_elapsed_business_hours(start, end)
    return (end - start).total_seconds() / 3600


def compute_sla_summary(
    ticket: TicketSnapshot,
    sla_settings: SLASettings,
    now: datetime,
    calendar: Optional[BusinessCalendar] = None,
) -> SLASummary:
    """
    Calculate the complete SLA summary for a ticket at ``now``.

    Priorities whose SLA is disabled produce a summary with no deadlines,
    both statuses pending and ``is_tracked`` False.
    """
    config = sla_settings.config_for(ticket.priority)
    if config is None or not config.enabled:
        return SLASummary(
            response_deadline=None,
            resolution_deadline=None,
            response_status=SLAMetricStatus.PENDING,
            resolution_status=SLAMetricStatus.PENDING,
            is_tracked=False,
        )

    business = None
    if config.business_hours_only:
        business = calendar or BusinessCalendar(sla_settings.business_hours)

    deadlines = compute_deadlines(ticket.created_at, ticket.priority, sla_settings, business)
    threshold = sla_settings.at_risk_threshold

    return SLASummary(
        response_deadline=deadlines.response_deadline,
        resolution_deadline=deadlines.resolution_deadline,
        response_status=get_metric_status(
            deadlines.response_deadline, ticket.first_response_at, now,
            ticket.created_at, threshold, business,
        ),
        resolution_status=get_metric_status(
            deadlines.resolution_deadline, ticket.resolved_at, now,
            ticket.created_at, threshold, business,
        ),
        response_elapsed_hours=_elapsed_hours(ticket.created_at, ticket.first_response_at, business),
        resolution_elapsed_hours=_elapsed_hours(ticket.created_at, ticket.resolved_at, business),
        is_business_hours=config.business_hours_only,
    )


def format_time_remaining(deadline: datetime, now: datetime) -> str:
    """
    Format the time left until (or past) a deadline for display.

    Examples: "2d 3h remaining", "1h 5m overdue", "12m remaining".
    """
    seconds = (deadline - now).total_seconds()
    suffix = "remaining" if seconds > 0 else "overdue"
    minutes_total = int(abs(seconds) // 60)
    hours, minutes = divmod(minutes_total, 60)

    if hours > 24:
        days, hours = divmod(hours, 24)
        return f"{days}d {hours}h {suffix}"
    if hours > 0:
        return f"{hours}h {minutes}m {suffix}"
    return f"{minutes}m {suffix}"
