"""
Escalation Domain Layer
=======================

Contains:
- Entities: EscalationRule (with conditions and actions), TechRosterEntry,
  EscalationMatch
- Domain Services: rule matching, urgency scoring, target selection and
  notification rendering

Pure Python business logic; ``now`` is always passed in.
"""

from helpdesk_sla.escalation.domain.entities import (
    EscalationActions,
    EscalationConditions,
    EscalationMatch,
    EscalationRule,
    NotifyAction,
    ReassignAction,
    TechRosterEntry,
)
from helpdesk_sla.escalation.domain.messages import (
    DEFAULT_TEMPLATE,
    format_escalation_age,
    render_notification_message,
)
from helpdesk_sla.escalation.domain.rules import (
    DEFAULT_COOLDOWN_HOURS,
    build_reason,
    compute_urgency_score,
    in_cooldown,
    matches_conditions,
    order_rules,
    select_escalation,
    suggest_priority_bump,
)
from helpdesk_sla.escalation.domain.targets import build_escalation_targets

__all__ = [
    # Entities
    "EscalationRule",
    "EscalationConditions",
    "EscalationActions",
    "ReassignAction",
    "NotifyAction",
    "TechRosterEntry",
    "EscalationMatch",
    # Domain Services
    "matches_conditions",
    "order_rules",
    "in_cooldown",
    "select_escalation",
    "compute_urgency_score",
    "build_reason",
    "suggest_priority_bump",
    "build_escalation_targets",
    "render_notification_message",
    "format_escalation_age",
    "DEFAULT_TEMPLATE",
    "DEFAULT_COOLDOWN_HOURS",
]
