"""
Deadline calculation for SLA tiers.
"""

from datetime import datetime, timedelta
from typing import Optional

from helpdesk_sla.sla.domain.calendar import BusinessCalendar
from helpdesk_sla.sla.domain.entities import NOT_TRACKED, SLADeadlines
from helpdesk_sla.sla.domain.value_objects import SLASettings


def add_hours(start: datetime, hours: float, calendar: Optional[BusinessCalendar]) -> datetime:
    """Add hours either inside business windows or around the clock."""
    if calendar is not None:
        return calendar.add_business_hours(start, hours)
    return start + timedelta(hours=hours)


def compute_deadlines(
    created_at: datetime,
    priority,
    sla_settings: SLASettings,
    calendar: Optional[BusinessCalendar] = None,
) -> SLADeadlines:
    """
    Compute response and resolution deadlines for a ticket.

    Args:
        created_at: When the ticket was created
        priority: Ticket priority (enum or raw string)
        sla_settings: SLA tiers and business calendar
        calendar: Pre-built calendar for ``sla_settings.business_hours``;
            built on demand when omitted

    Returns:
        SLADeadlines; both deadlines are None when the priority's SLA is
        disabled or the priority has no tier.
    """
    config = sla_settings.config_for(priority)
    if config is None or not config.enabled:
        return NOT_TRACKED

    business = None
    if config.business_hours_only:
        business = calendar or BusinessCalendar(sla_settings.business_hours)

    return SLADeadlines(
        response_deadline=add_hours(created_at, config.response_time_hours, business),
        resolution_deadline=add_hours(created_at, config.resolution_time_hours, business),
    )
