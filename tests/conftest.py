"""Shared pytest fixtures for the SLA engine tests.

Unless a test says otherwise, the business calendar is Mon-Fri
09:00-17:00 UTC and dates fall in July 2025 (Mon 14th ... Mon 21st).
"""

from datetime import datetime, time, timezone

import pytest

from helpdesk_sla.escalation.domain import TechRosterEntry
from helpdesk_sla.sla.domain import (
    BusinessCalendar,
    BusinessHoursConfig,
    SLAConfig,
    SLASettings,
    TicketSnapshot,
)


@pytest.fixture
def business_hours() -> BusinessHoursConfig:
    """Mon-Fri 09:00-17:00 UTC, no holidays."""
    return BusinessHoursConfig(
        start=time(9, 0), end=time(17, 0), days={1, 2, 3, 4, 5}, timezone="UTC"
    )


@pytest.fixture
def calendar(business_hours: BusinessHoursConfig) -> BusinessCalendar:
    return BusinessCalendar(business_hours)


@pytest.fixture
def sla_settings(business_hours: BusinessHoursConfig) -> SLASettings:
    """Urgent 24x7, High/Medium business hours, Low disabled."""
    return SLASettings(
        urgent=SLAConfig(response_time_hours=1, resolution_time_hours=4),
        high=SLAConfig(
            response_time_hours=4, resolution_time_hours=8, business_hours_only=True
        ),
        medium=SLAConfig(
            response_time_hours=8, resolution_time_hours=24, business_hours_only=True
        ),
        low=SLAConfig(
            enabled=False, response_time_hours=24, resolution_time_hours=72
        ),
        business_hours=business_hours,
    )


@pytest.fixture
def make_ticket():
    """Factory for ticket snapshots with sensible defaults."""

    def _make(**overrides) -> TicketSnapshot:
        values = dict(
            id="T-1001",
            priority="High",
            status="Open",
            created_at=datetime(2025, 7, 14, 9, 0, tzinfo=timezone.utc),
            title="Printer on fire",
            customer="Dana Smith",
        )
        values.update(overrides)
        return TicketSnapshot(**values)

    return _make


@pytest.fixture
def roster() -> list:
    return [
        TechRosterEntry(tech_id="tech-1", role="tech", current_tickets=1, name="Ari"),
        TechRosterEntry(tech_id="senior-1", role="senior", current_tickets=5, name="Bo"),
        TechRosterEntry(tech_id="manager-1", role="manager", current_tickets=4, name="Cy"),
        TechRosterEntry(tech_id="manager-2", role="manager", current_tickets=2, name="Di"),
        TechRosterEntry(
            tech_id="manager-3", role="manager", is_active=False, current_tickets=0, name="Ed"
        ),
    ]
