"""
Escalation Application Layer
============================

Contains:
- Services: EscalationService producing EscalationPlan results
- Provider interfaces: escalation rules and tech roster
"""

from helpdesk_sla.escalation.application.services import (
    EscalationPlan,
    EscalationService,
    IEscalationRuleProvider,
    ITechRosterProvider,
    StaticRosterProvider,
    StaticRuleProvider,
)

__all__ = [
    # Services
    "EscalationService",
    "EscalationPlan",
    # Provider Interfaces
    "IEscalationRuleProvider",
    "ITechRosterProvider",
    "StaticRuleProvider",
    "StaticRosterProvider",
]
