"""
SLA Domain Entities
====================

Pure Python domain entities for SLA tracking.

Following Domain-Driven Design principles, these entities contain
business logic and are free of infrastructure concerns. They are frozen:
the engine reads a ticket snapshot for the duration of one evaluation and
returns new values instead of mutating it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from helpdesk_sla.config import Priority, SLAMetricStatus, TicketStatus


@dataclass(frozen=True)
class SLADeadlines:
    """
    Response and resolution deadlines for a ticket.

    ``None`` means the deadline is not tracked (SLA disabled for the
    ticket's priority).
    """
    response_deadline: Optional[datetime]
    resolution_deadline: Optional[datetime]

    @property
    def is_tracked(self) -> bool:
        return self.response_deadline is not None


NOT_TRACKED = SLADeadlines(response_deadline=None, resolution_deadline=None)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Coerce a stored timestamp to a datetime.

    The ticket store keeps epoch milliseconds; ISO-8601 strings (with or
    without a trailing ``Z``) are accepted too and read as UTC when they
    carry no offset. Raises ValueError for
    anything else.
    """
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        raise ValueError(f"not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    raise ValueError(f"not a timestamp: {value!r}")


@dataclass(frozen=True)
class SLASummary:
    """
    SLA compliance summary for a ticket at one point in time.

    Elapsed hours are only present for metrics that have completed
    (first response given, ticket resolved).
    """

    response_deadline: Optional[datetime]
    resolution_deadline: Optional[datetime]
    response_status: SLAMetricStatus
    resolution_status: SLAMetricStatus
    response_elapsed_hours: Optional[float] = None
    resolution_elapsed_hours: Optional[float] = None
    is_business_hours: bool = False
    is_tracked: bool = True

    @property
    def is_any_breached(self) -> bool:
        return SLAMetricStatus.BREACHED in (self.response_status, self.resolution_status)

    @property
    def most_urgent_status(self) -> SLAMetricStatus:
        """Get the most urgent of the two metric statuses."""
        statuses = (self.response_status, self.resolution_status)
        if SLAMetricStatus.BREACHED in statuses:
            return SLAMetricStatus.BREACHED
        if SLAMetricStatus.AT_RISK in statuses:
            return SLAMetricStatus.AT_RISK
        if all(s == SLAMetricStatus.MET for s in statuses):
            return SLAMetricStatus.MET
        return SLAMetricStatus.PENDING

    def to_dict(self) -> dict:
        """Convert to a plain dict for the ticket persistence collaborator."""
        return {
            "response": {
                "deadline": self.response_deadline.isoformat() if self.response_deadline else None,
                "status": self.response_status.value,
                "elapsed_hours": self.response_elapsed_hours,
            },
            "resolution": {
                "deadline": self.resolution_deadline.isoformat() if self.resolution_deadline else None,
                "status": self.resolution_status.value,
                "elapsed_hours": self.resolution_elapsed_hours,
            },
            "overall": {
                "status": self.most_urgent_status.value,
                "is_any_breached": self.is_any_breached,
            },
            "is_business_hours": self.is_business_hours,
            "is_tracked": self.is_tracked,
        }


@dataclass(frozen=True)
class TicketSnapshot:
    """
    Read-only view of a ticket as supplied by the persistence collaborator.

    Priority and status accept raw strings; unrecognized values become
    ``UNKNOWN`` rather than raising.
    """

    id: str
    priority: Priority
    status: TicketStatus
    created_at: datetime
    first_response_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    sla: Optional[SLASummary] = None
    title: str = ""
    customer: str = ""
    assignee_id: Optional[str] = None
    last_escalations: Mapping[str, datetime] = field(default_factory=dict, compare=False)
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "priority", Priority.parse(self.priority))
        object.__setattr__(self, "status", TicketStatus.parse(self.status))

    def age_hours(self, now: datetime) -> float:
        """Hours between creation and ``now``."""
        return (now - self.created_at).total_seconds() / 3600

    @property
    def is_open(self) -> bool:
        return not self.status.is_terminal

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "TicketSnapshot":
        """
        Build a snapshot from a stored ticket document.

        Accepts both snake_case and the camelCase keys used by the
        ticket store; unknown keys are kept in ``extra``. Timestamps may be
        datetimes, epoch milliseconds or ISO-8601 strings.

        ``last_escalations`` maps rule id to when that rule last fired for
        the ticket.
        """
        aliases = {
            "createdAt": "created_at",
            "firstResponseAt": "first_response_at",
            "resolvedAt": "resolved_at",
            "assigneeId": "assignee_id",
            "lastEscalations": "last_escalations",
            "name": "customer",
        }
        known = {
            "id", "priority", "status", "created_at", "first_response_at",
            "resolved_at", "sla", "title", "customer", "assignee_id",
            "last_escalations",
        }
        values: dict = {}
        extra: dict = {}
        for key, value in record.items():
            name = aliases.get(key, key)
            # stored SLA blobs are recomputed, not trusted
            if name == "sla" and not isinstance(value, SLASummary):
                extra[key] = value
            elif name in known:
                values.setdefault(name, value)
            else:
                extra[key] = value
        for name in ("created_at", "first_response_at", "resolved_at"):
            if name in values:
                values[name] = parse_timestamp(values[name])
        if "last_escalations" in values:
            values["last_escalations"] = {
                rule_id: parse_timestamp(fired_at)
                for rule_id, fired_at in (values["last_escalations"] or {}).items()
            }
        return cls(extra=extra, **values)
