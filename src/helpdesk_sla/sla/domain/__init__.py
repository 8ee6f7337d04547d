"""
SLA Domain Layer
================

Domain layer for SLA tracking.

Contains:
- Entities: TicketSnapshot, SLADeadlines, SLASummary
- Value Objects: Holiday, BusinessHoursConfig, SLAConfig, SLASettings
- Domain Services: BusinessCalendar, deadline and status calculation

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from helpdesk_sla.sla.domain.calendar import (
    BusinessCalendar,
    matches_holiday,
    matches_recurring_holiday,
)
from helpdesk_sla.sla.domain.deadlines import compute_deadlines
from helpdesk_sla.sla.domain.entities import (
    NOT_TRACKED,
    SLADeadlines,
    SLASummary,
    TicketSnapshot,
    parse_timestamp,
)
from helpdesk_sla.sla.domain.expectations import (
    SLAExpectation,
    build_expectation_text,
    calculate_sla_expectation,
)
from helpdesk_sla.sla.domain.status import (
    compute_sla_summary,
    format_time_remaining,
    get_metric_status,
)
from helpdesk_sla.sla.domain.value_objects import (
    DEFAULT_SLA_SETTINGS,
    BusinessHoursConfig,
    Holiday,
    SLAConfig,
    SLASettings,
)

__all__ = [
    # Entities
    "TicketSnapshot",
    "SLADeadlines",
    "SLASummary",
    "NOT_TRACKED",
    "parse_timestamp",
    "SLAExpectation",
    # Value Objects
    "Holiday",
    "BusinessHoursConfig",
    "SLAConfig",
    "SLASettings",
    "DEFAULT_SLA_SETTINGS",
    # Domain Services
    "BusinessCalendar",
    "matches_holiday",
    "matches_recurring_holiday",
    "compute_deadlines",
    "get_metric_status",
    "compute_sla_summary",
    "format_time_remaining",
    "calculate_sla_expectation",
    "build_expectation_text",
]
