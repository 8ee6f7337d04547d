"""
Shared Kernel Module
====================

Generic infrastructure shared by the ``sla`` and ``escalation`` bounded
contexts.

DO NOT add SLA or escalation business logic to the shared kernel.
"""
