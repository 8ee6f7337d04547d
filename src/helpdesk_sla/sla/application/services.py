"""
SLA Application Services
=========================

Application services orchestrate the pure SLA domain for a caller (the
scheduler or ticket persistence collaborator) and define the interfaces
through which configuration reaches the engine.

Following SOLID principles:
- Single Responsibility: Each service has one clear purpose
- Dependency Inversion: Depend on abstractions (providers), not concrete
  configuration stores
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Iterable, Optional

from helpdesk_sla.shared.infrastructure.logging import get_context_logger, get_logger, log_latency
from helpdesk_sla.sla.domain import (
    BusinessCalendar,
    SLADeadlines,
    SLASettings,
    SLASummary,
    TicketSnapshot,
    build_expectation_text,
    compute_deadlines,
    compute_sla_summary,
)

logger = get_logger(__name__)


# ========== Provider Interfaces (Dependency Inversion) ==========

class ISLASettingsProvider(ABC):
    """Interface for SLA settings access."""

    @abstractmethod
    def get_settings(self) -> SLASettings:
        """Get current SLA settings."""


class StaticSLASettingsProvider(ISLASettingsProvider):
    """Provider over a fixed SLASettings instance."""

    def __init__(self, settings: SLASettings):
        # Build once so an invalid calendar fails here, not mid-sweep.
        BusinessCalendar(settings.business_hours)
        self._settings = settings

    def get_settings(self) -> SLASettings:
        return self._settings


# ========== Application Services ==========

class SLAService:
    """
    Service for SLA deadlines and compliance status.

    Holds no per-ticket state; the business calendar is rebuilt only when
    the provider hands out a different settings object.
    """

    def __init__(self, settings_provider: ISLASettingsProvider):
        self._settings_provider = settings_provider
        self._calendar_for: Optional[SLASettings] = None
        self._calendar: Optional[BusinessCalendar] = None

    @property
    def settings(self) -> SLASettings:
        return self._settings_provider.get_settings()

    def calendar(self) -> BusinessCalendar:
        """Calendar for the current settings."""
        settings = self.settings
        if self._calendar is None or self._calendar_for is not settings:
            self._calendar = BusinessCalendar(settings.business_hours)
            self._calendar_for = settings
        return self._calendar

    def compute_deadlines(self, created_at: datetime, priority) -> SLADeadlines:
        return compute_deadlines(created_at, priority, self.settings, self.calendar())

    def evaluate_ticket(self, ticket: TicketSnapshot, now: datetime) -> SLASummary:
        """
        Calculate the SLA summary for one ticket.

        Args:
            ticket: Ticket snapshot from the persistence collaborator
            now: Evaluation time supplied by the scheduler
        """
        summary = compute_sla_summary(ticket, self.settings, now, self.calendar())
        logger.debug(
            "SLA evaluated",
            extra={
                "ticket_id": ticket.id,
                "response_status": summary.response_status.value,
                "resolution_status": summary.resolution_status.value,
            },
        )
        return summary

    def evaluate_tickets(
        self,
        tickets: Iterable[TicketSnapshot],
        now: datetime,
        correlation_id: Optional[str] = None,
    ) -> Dict[str, SLASummary]:
        """
        Calculate SLA summaries for multiple tickets.

        Args:
            tickets: Tickets in one evaluation cycle
            now: Evaluation time shared by the whole cycle
            correlation_id: Cycle ID stamped on the sweep log record

        Returns:
            Dict mapping ticket id to SLASummary
        """
        tickets = list(tickets)
        cycle_logger = get_context_logger(__name__, correlation_id)
        with log_latency(cycle_logger, "sla_sweep", tickets=len(tickets)):
            summaries = {ticket.id: self.evaluate_ticket(ticket, now) for ticket in tickets}
        return summaries

    def build_expectation_text(self, priority, submitted_at: datetime, now: datetime) -> str:
        """Plain-text expectation block for acknowledgement emails."""
        return build_expectation_text(
            priority, submitted_at, self.settings, now, self.calendar()
        )
