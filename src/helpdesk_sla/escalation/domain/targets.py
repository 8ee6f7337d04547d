"""
Escalation target selection.
"""

from typing import Iterable, List, Optional

from helpdesk_sla.config import EscalationTargetType, TechRole
from helpdesk_sla.escalation.domain.entities import TechRosterEntry

_ELIGIBLE_ROLES = {
    EscalationTargetType.MANAGER: {TechRole.MANAGER},
    EscalationTargetType.SENIOR: {TechRole.SENIOR, TechRole.MANAGER},
}


def _has_capacity(tech: TechRosterEntry) -> bool:
    return tech.max_tickets is None or tech.current_tickets < tech.max_tickets


def build_escalation_targets(
    target_type,
    roster: Iterable[TechRosterEntry],
    specific_ids: Optional[Iterable[str]] = None,
    exclude_id: Optional[str] = None,
) -> List[TechRosterEntry]:
    """
    Candidates for reassignment, least-loaded first.

    Args:
        target_type: manager, senior or specific
        roster: All techs known to the roster collaborator
        specific_ids: Tech IDs eligible when target_type is specific
        exclude_id: Current assignee, never re-selected

    Inactive techs and techs already at their ``max_tickets`` capacity are
    excluded. Ties in open-ticket count keep roster order.

    Raises:
        ValueError: unknown ``target_type``. Rules loaded through pydantic
            never carry one; this is the only escalation function that raises
            on bad input instead of degrading.
    """
    target_type = EscalationTargetType(target_type)

    if target_type == EscalationTargetType.SPECIFIC:
        wanted = set(specific_ids or ())

        def eligible(tech: TechRosterEntry) -> bool:
            return tech.tech_id in wanted
    else:
        roles = _ELIGIBLE_ROLES[target_type]

        def eligible(tech: TechRosterEntry) -> bool:
            return tech.role in roles

    candidates = [
        tech for tech in roster
        if tech.is_active
        and tech.tech_id != exclude_id
        and _has_capacity(tech)
        and eligible(tech)
    ]
    return sorted(candidates, key=lambda tech: tech.current_tickets)
