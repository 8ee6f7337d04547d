"""
Tests for escalation target selection.
"""

import pytest

from helpdesk_sla.config import EscalationTargetType, TechRole
from helpdesk_sla.escalation.domain import TechRosterEntry, build_escalation_targets


def ids(entries):
    return [entry.tech_id for entry in entries]


class TestBuildEscalationTargets:
    def test_managers_least_loaded_first(self, roster):
        targets = build_escalation_targets("manager", roster)
        assert ids(targets) == ["manager-2", "manager-1"]

    def test_inactive_techs_never_selected(self, roster):
        targets = build_escalation_targets(EscalationTargetType.MANAGER, roster)
        assert "manager-3" not in ids(targets)

    def test_senior_includes_managers(self, roster):
        targets = build_escalation_targets("senior", roster)
        assert ids(targets) == ["manager-2", "manager-1", "senior-1"]

    def test_specific_ids(self, roster):
        targets = build_escalation_targets(
            "specific", roster, specific_ids=["senior-1", "tech-1", "manager-3"]
        )
        assert ids(targets) == ["tech-1", "senior-1"]

    def test_specific_without_ids_is_empty(self, roster):
        assert build_escalation_targets("specific", roster) == []

    def test_current_assignee_excluded(self, roster):
        targets = build_escalation_targets("manager", roster, exclude_id="manager-2")
        assert ids(targets) == ["manager-1"]

    def test_ties_keep_roster_order(self):
        roster = [
            TechRosterEntry(tech_id="m-b", role="manager", current_tickets=3),
            TechRosterEntry(tech_id="m-a", role="manager", current_tickets=3),
            TechRosterEntry(tech_id="m-c", role="manager", current_tickets=1),
        ]
        assert ids(build_escalation_targets("manager", roster)) == ["m-c", "m-b", "m-a"]

    def test_techs_at_capacity_excluded(self):
        roster = [
            TechRosterEntry(tech_id="m-full", role="manager", current_tickets=3, max_tickets=3),
            TechRosterEntry(tech_id="m-busy", role="manager", current_tickets=6),
            TechRosterEntry(tech_id="m-room", role="manager", current_tickets=4, max_tickets=5),
        ]
        assert ids(build_escalation_targets("manager", roster)) == ["m-room", "m-busy"]

    def test_empty_roster(self):
        assert build_escalation_targets("manager", []) == []

    def test_unknown_target_type_rejected(self, roster):
        with pytest.raises(ValueError):
            build_escalation_targets("director", roster)

    def test_unknown_role_is_never_eligible(self):
        roster = [TechRosterEntry(tech_id="x", role="intern")]
        assert roster[0].role == TechRole.UNKNOWN
        assert build_escalation_targets("senior", roster) == []
