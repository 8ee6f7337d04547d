"""
SLA Tracking Module
===================

Bounded context for Service Level Agreement deadlines and compliance.

Responsibilities:
- Business-calendar arithmetic (windows, weekdays, holidays, timezone)
- Response/resolution deadlines per priority tier
- Live met / pending / at-risk / breached status per metric
- Customer-facing expectation text
"""
