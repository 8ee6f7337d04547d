"""
Escalation Domain Entities
==========================

Escalation rules as configured by administrators, escalation target
candidates, and the result of matching a ticket against the rules.

Rules are frozen Pydantic models (they arrive from the configuration
collaborator and are validated once); roster entries and match results are
frozen dataclasses.
"""

from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from helpdesk_sla.config import (
    EscalationTargetType,
    Priority,
    TechRole,
    TicketStatus,
)


class EscalationConditions(BaseModel):
    """
    Predicates a ticket must satisfy for a rule to fire.

    Every field is optional; absent fields (and empty lists) do not
    constrain the match.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    priorities: Optional[List[Priority]] = None
    statuses: Optional[List[TicketStatus]] = None
    time_since_created: Optional[float] = Field(
        default=None, alias="timeSinceCreated", description="Minimum age in hours"
    )
    time_since_response: Optional[float] = Field(
        default=None,
        alias="timeSinceResponse",
        description="Minimum hours since first response (or creation)"
    )
    sla_breached: Optional[bool] = Field(default=None, alias="slaBreached")

    @field_validator("priorities", mode="before")
    @classmethod
    def parse_priorities(cls, v):
        if v is None:
            return v
        return [Priority.parse(p) for p in v]

    @field_validator("statuses", mode="before")
    @classmethod
    def parse_statuses(cls, v):
        if v is None:
            return v
        return [TicketStatus.parse(s) for s in v]


class ReassignAction(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    to: EscalationTargetType
    tech_ids: List[str] = Field(default_factory=list, alias="techIds")


class NotifyAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    emails: List[str] = Field(default_factory=list)
    message: Optional[str] = Field(default=None, description="Message template")


class EscalationActions(BaseModel):
    """What happens when a rule fires."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    reassign: Optional[ReassignAction] = None
    notify: Optional[NotifyAction] = None
    update_priority: Optional[Priority] = Field(default=None, alias="updatePriority")
    update_status: Optional[TicketStatus] = Field(default=None, alias="updateStatus")

    @field_validator("update_priority", mode="before")
    @classmethod
    def parse_priority(cls, v):
        return None if v is None else Priority.parse(v)

    @field_validator("update_status", mode="before")
    @classmethod
    def parse_status(cls, v):
        return None if v is None else TicketStatus.parse(v)


class EscalationRule(BaseModel):
    """
    A configured condition/action pair.

    ``priority`` only orders rule evaluation: higher numbers are evaluated
    first.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    enabled: bool = True
    priority: int = 0
    conditions: EscalationConditions = Field(default_factory=EscalationConditions)
    actions: EscalationActions = Field(default_factory=EscalationActions)


@dataclass(frozen=True)
class TechRosterEntry:
    """A possible escalation target."""
    tech_id: str
    role: TechRole
    is_active: bool = True
    current_tickets: int = 0
    name: str = ""
    email: str = ""
    max_tickets: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "role", TechRole.parse(self.role))

    @property
    def display_name(self) -> str:
        return self.name or self.email or self.tech_id


@dataclass(frozen=True)
class EscalationMatch:
    """The first rule that matched a ticket, with its urgency and reason."""
    rule: EscalationRule
    urgency: int
    reason: str
