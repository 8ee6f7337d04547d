"""
Escalation notification rendering.
"""

import re
from datetime import datetime
from typing import Optional

from helpdesk_sla.escalation.domain.entities import TechRosterEntry
from helpdesk_sla.sla.domain.entities import TicketSnapshot

DEFAULT_TEMPLATE = "Ticket #{ticketId} requires escalation. Reason: {reason}"

_TOKEN = re.compile(r"\{(\w+)\}")


def render_notification_message(
    template: Optional[str],
    ticket: TicketSnapshot,
    reason: str,
    now: datetime,
    assignee: Optional[TechRosterEntry] = None,
) -> str:
    """
    Substitute ``{token}`` placeholders in a notification template.

    Substitution is a single pass over the template, so a value that itself
    contains ``{...}`` is never expanded again. Unknown tokens, and
    ``{assignee}`` when no assignee is given, are left verbatim.
    """
    values = {
        "ticketId": ticket.id,
        "title": ticket.title,
        "priority": ticket.priority.value,
        "status": ticket.status.value,
        "reason": reason,
        "customer": ticket.customer,
        "timeOverdue": f"{int(ticket.age_hours(now))} hours",
    }
    if assignee is not None:
        values["assignee"] = assignee.display_name

    def replace(match: "re.Match[str]") -> str:
        return values.get(match.group(1), match.group(0))

    return _TOKEN.sub(replace, template or DEFAULT_TEMPLATE)


def format_escalation_age(timestamp: datetime, now: datetime) -> str:
    """How long ago an escalation happened, e.g. "1d 2h ago"."""
    minutes_total = max(int((now - timestamp).total_seconds() // 60), 0)
    hours, minutes = divmod(minutes_total, 60)
    if hours > 24:
        days, hours = divmod(hours, 24)
        return f"{days}d {hours}h ago"
    if hours > 0:
        return f"{hours}h {minutes}m ago"
    return f"{minutes}m ago"
