"""
Escalation Module
=================

Bounded context deciding whether and how an open ticket is escalated.

Consumes the SLA summary produced by the ``sla`` module and yields, per
ticket and evaluation cycle, at most one matched rule with its urgency
score, reassignment target, overrides and rendered notification.
"""
