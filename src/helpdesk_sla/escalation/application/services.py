"""
Escalation Application Services
================================

Turns a rule match into a complete, side-effect-free escalation plan:
which rule fired, who the ticket goes to, which fields change and what the
notification says. Delivering the notification and writing the updates
back are left to the caller's collaborators.
"""

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from helpdesk_sla.config import EscalationState, Priority, TicketStatus
from helpdesk_sla.escalation.domain import (
    DEFAULT_COOLDOWN_HOURS,
    EscalationRule,
    TechRosterEntry,
    build_escalation_targets,
    render_notification_message,
    select_escalation,
    suggest_priority_bump,
)
from helpdesk_sla.shared.infrastructure.logging import get_context_logger, get_logger, log_latency
from helpdesk_sla.sla.application.services import SLAService
from helpdesk_sla.sla.domain import SLASummary, TicketSnapshot

logger = get_logger(__name__)


# ========== Provider Interfaces (Dependency Inversion) ==========

class IEscalationRuleProvider(ABC):
    """Interface for escalation rule access."""

    @abstractmethod
    def get_rules(self) -> List[EscalationRule]:
        """Get the configured escalation rules."""


class ITechRosterProvider(ABC):
    """Interface for the roster of escalation targets."""

    @abstractmethod
    def get_roster(self) -> List[TechRosterEntry]:
        """Get all techs with role, activity and workload."""


class StaticRuleProvider(IEscalationRuleProvider):
    def __init__(self, rules: Iterable[EscalationRule]):
        self._rules = list(rules)

    def get_rules(self) -> List[EscalationRule]:
        return self._rules


class StaticRosterProvider(ITechRosterProvider):
    def __init__(self, roster: Iterable[TechRosterEntry]):
        self._roster = list(roster)

    def get_roster(self) -> List[TechRosterEntry]:
        return self._roster


# ========== Results ==========

@dataclass(frozen=True)
class EscalationPlan:
    """
    Outcome of evaluating one ticket for escalation.

    Only ``state``, ``ticket_id`` and ``sla`` are meaningful when no rule
    matched.
    """
    ticket_id: str
    state: EscalationState
    sla: Optional[SLASummary] = None
    rule: Optional[EscalationRule] = None
    urgency: int = 0
    reason: str = ""
    new_assignee: Optional[TechRosterEntry] = None
    candidates: Tuple[TechRosterEntry, ...] = ()
    priority_update: Optional[Priority] = None
    status_update: Optional[TicketStatus] = None
    suggested_priority: Optional[Priority] = None
    message: Optional[str] = None
    recipients: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def matched(self) -> bool:
        return self.state == EscalationState.EVALUATED_MATCHED

    @property
    def updated_fields(self) -> List[str]:
        """Ticket fields the persistence collaborator should write."""
        fields = []
        if self.new_assignee is not None:
            fields.append("assignee_id")
        if self.priority_update is not None:
            fields.append("priority")
        if self.status_update is not None:
            fields.append("status")
        return fields


# ========== Application Services ==========

class EscalationService:
    """
    Service for per-ticket escalation decisions.

    Run by the scheduler collaborator once per ticket per evaluation
    cycle, passing the cycle's ``now``. The caller records the rule id and
    ``now`` of every matched plan in the ticket's ``last_escalations`` so
    the rule stays quiet for ``cooldown_hours``.
    """

    def __init__(
        self,
        sla_service: SLAService,
        rule_provider: IEscalationRuleProvider,
        roster_provider: Optional[ITechRosterProvider] = None,
        cooldown_hours: float = DEFAULT_COOLDOWN_HOURS,
    ):
        self._sla_service = sla_service
        self._cooldown_hours = cooldown_hours
        self._rule_provider = rule_provider
        self._roster_provider = roster_provider

    def plan(self, ticket: TicketSnapshot, now: datetime) -> EscalationPlan:
        """
        Evaluate one ticket.

        The ticket's SLA summary is recomputed at ``now`` before rules are
        matched, so a stale stored status cannot trigger or hide an
        escalation.
        """
        if ticket.status.is_terminal:
            return EscalationPlan(ticket_id=ticket.id, state=EscalationState.EVALUATED_NO_MATCH)

        summary = self._sla_service.evaluate_ticket(ticket, now)
        current = dataclasses.replace(ticket, sla=summary)

        match = select_escalation(
            current, self._rule_provider.get_rules(), now, self._cooldown_hours
        )
        if match is None:
            return EscalationPlan(
                ticket_id=ticket.id, state=EscalationState.EVALUATED_NO_MATCH, sla=summary
            )

        rule = match.rule
        actions = rule.actions

        candidates: List[TechRosterEntry] = []
        if actions.reassign is not None and self._roster_provider is not None:
            candidates = build_escalation_targets(
                actions.reassign.to,
                self._roster_provider.get_roster(),
                actions.reassign.tech_ids,
                ticket.assignee_id,
            )
        new_assignee = candidates[0] if candidates else None

        message = None
        recipients: Tuple[str, ...] = ()
        if actions.notify is not None and actions.notify.emails:
            recipients = tuple(actions.notify.emails)
            message = render_notification_message(
                actions.notify.message, current, match.reason, now, new_assignee
            )

        logger.info(
            "Escalation matched",
            extra={
                "ticket_id": ticket.id,
                "rule_id": rule.id,
                "urgency": match.urgency,
                "assignee_id": new_assignee.tech_id if new_assignee else None,
            },
        )

        return EscalationPlan(
            ticket_id=ticket.id,
            state=EscalationState.EVALUATED_MATCHED,
            sla=summary,
            rule=rule,
            urgency=match.urgency,
            reason=match.reason,
            new_assignee=new_assignee,
            candidates=tuple(candidates),
            priority_update=actions.update_priority,
            status_update=actions.update_status,
            suggested_priority=suggest_priority_bump(ticket.priority, match.urgency),
            message=message,
            recipients=recipients,
        )

    def plan_many(
        self,
        tickets: Iterable[TicketSnapshot],
        now: datetime,
        correlation_id: Optional[str] = None,
    ) -> List[EscalationPlan]:
        """Plans for the tickets that matched a rule, in input order."""
        tickets = list(tickets)
        cycle_logger = get_context_logger(__name__, correlation_id)
        with log_latency(cycle_logger, "escalation_sweep", tickets=len(tickets)):
            plans = [self.plan(ticket, now) for ticket in tickets]
        matched = [plan for plan in plans if plan.matched]
        cycle_logger.info(
            "Escalation sweep finished",
            extra={"tickets": len(tickets), "matched": len(matched)},
        )
        return matched
