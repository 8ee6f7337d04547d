"""
Escalation Rule Engine
======================

Matches tickets against escalation rules and scores their urgency.

Evaluation is first-match: enabled rules are ordered by their declared
priority (highest first, ties keep configuration order) and the first rule
whose conditions hold is the only one reported. Downstream notification
assumes at most one active escalation per ticket per evaluation cycle.

A rule that already fired for a ticket within the cooldown (24 hours by
default) is skipped for that ticket and the next rule is tried.
"""

from datetime import datetime
from typing import Iterable, Optional

from helpdesk_sla.config import Priority, SLAMetricStatus
from helpdesk_sla.escalation.domain.entities import (
    EscalationConditions,
    EscalationMatch,
    EscalationRule,
)
from helpdesk_sla.sla.domain.entities import TicketSnapshot

PRIORITY_WEIGHTS = {
    Priority.URGENT: 40,
    Priority.HIGH: 30,
    Priority.MEDIUM: 20,
    Priority.LOW: 10,
    Priority.NONE: 0,
}

# (minimum exclusive age in hours, bonus), highest tier first
AGE_BONUSES = ((72, 30), (48, 20), (24, 10))

RESPONSE_BREACHED_BONUS = 25
RESOLUTION_BREACHED_BONUS = 35
AT_RISK_BONUS = 15
NO_RESPONSE_BONUS = 20

DEFAULT_REASON = "Escalation rule triggered"

DEFAULT_COOLDOWN_HOURS = 24.0


def _hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def _last_response_at(ticket: TicketSnapshot) -> datetime:
    return ticket.first_response_at or ticket.created_at


def _sla_breached(ticket: TicketSnapshot) -> bool:
    return ticket.sla is not None and ticket.sla.is_any_breached


def matches_conditions(
    ticket: TicketSnapshot, conditions: EscalationConditions, now: datetime
) -> bool:
    """Check that every condition present on the rule holds for the ticket."""
    if conditions.priorities and ticket.priority not in conditions.priorities:
        return False

    if conditions.statuses and ticket.status not in conditions.statuses:
        return False

    if conditions.time_since_created is not None:
        if _hours_between(ticket.created_at, now) < conditions.time_since_created:
            return False

    if conditions.time_since_response is not None:
        if _hours_between(_last_response_at(ticket), now) < conditions.time_since_response:
            return False

    if conditions.sla_breached and not _sla_breached(ticket):
        return False

    return True


def in_cooldown(
    ticket: TicketSnapshot,
    rule: EscalationRule,
    now: datetime,
    cooldown_hours: float = DEFAULT_COOLDOWN_HOURS,
) -> bool:
    """True when ``rule`` fired for the ticket less than ``cooldown_hours`` ago."""
    fired_at = ticket.last_escalations.get(rule.id)
    if fired_at is None or cooldown_hours <= 0:
        return False
    return _hours_between(fired_at, now) < cooldown_hours


def order_rules(rules: Iterable[EscalationRule]) -> list:
    """Enabled rules, highest declared priority first (stable on ties)."""
    return sorted((r for r in rules if r.enabled), key=lambda r: r.priority, reverse=True)


def select_escalation(
    ticket: TicketSnapshot,
    rules: Iterable[EscalationRule],
    now: datetime,
    cooldown_hours: float = DEFAULT_COOLDOWN_HOURS,
) -> Optional[EscalationMatch]:
    """
    Find the escalation that applies to a ticket.

    Returns None for resolved/closed tickets without checking any rule,
    and None when no enabled rule outside its cooldown matches.
    ``cooldown_hours`` of 0 disables the cooldown.
    """
    if ticket.status.is_terminal:
        return None

    for rule in order_rules(rules):
        if in_cooldown(ticket, rule, now, cooldown_hours):
            continue
        if matches_conditions(ticket, rule.conditions, now):
            return EscalationMatch(
                rule=rule,
                urgency=compute_urgency_score(ticket, now),
                reason=build_reason(ticket, rule, now),
            )
    return None


def compute_urgency_score(ticket: TicketSnapshot, now: datetime) -> int:
    """
    Additive urgency score: priority, age, SLA state and missing response.

    The score is not capped.
    """
    score = PRIORITY_WEIGHTS.get(ticket.priority, 0)

    age = _hours_between(ticket.created_at, now)
    for threshold, bonus in AGE_BONUSES:
        if age > threshold:
            score += bonus
            break

    if ticket.sla is not None:
        if ticket.sla.response_status == SLAMetricStatus.BREACHED:
            score += RESPONSE_BREACHED_BONUS
        if ticket.sla.resolution_status == SLAMetricStatus.BREACHED:
            score += RESOLUTION_BREACHED_BONUS
        if ticket.sla.response_status == SLAMetricStatus.AT_RISK:
            score += AT_RISK_BONUS
        if ticket.sla.resolution_status == SLAMetricStatus.AT_RISK:
            score += AT_RISK_BONUS

    if ticket.first_response_at is None:
        score += NO_RESPONSE_BONUS

    return score


def build_reason(ticket: TicketSnapshot, rule: EscalationRule, now: datetime) -> str:
    """Human-readable list of what triggered the rule."""
    conditions = rule.conditions
    reasons = []

    if conditions.time_since_created:
        age = _hours_between(ticket.created_at, now)
        if age >= conditions.time_since_created:
            reasons.append(f"Ticket is {int(age)} hours old")

    if conditions.time_since_response:
        silence = _hours_between(_last_response_at(ticket), now)
        if silence >= conditions.time_since_response:
            reasons.append(f"No response for {int(silence)} hours")

    if conditions.sla_breached and ticket.sla is not None:
        if ticket.sla.response_status == SLAMetricStatus.BREACHED:
            reasons.append("Response SLA breached")
        if ticket.sla.resolution_status == SLAMetricStatus.BREACHED:
            reasons.append("Resolution SLA breached")

    if ticket.priority in (Priority.URGENT, Priority.HIGH):
        reasons.append(f"{ticket.priority.value} priority ticket")

    return ", ".join(reasons) if reasons else DEFAULT_REASON


def suggest_priority_bump(current, urgency_score: int) -> Priority:
    """
    Suggest a priority for an escalated ticket.

    Never returns a priority below ``current``.
    """
    current = Priority.parse(current)

    if urgency_score >= 80:
        suggested = Priority.URGENT
    elif urgency_score >= 60:
        suggested = Priority.HIGH if current == Priority.LOW else Priority.URGENT
    elif urgency_score >= 40:
        suggested = {
            Priority.LOW: Priority.MEDIUM,
            Priority.MEDIUM: Priority.HIGH,
        }.get(current, current)
    else:
        suggested = current

    return suggested if suggested.rank >= current.rank else current
