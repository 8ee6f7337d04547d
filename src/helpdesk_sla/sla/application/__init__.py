"""
SLA Application Layer
======================

Application layer for SLA tracking.

Contains:
- Services: Orchestrate domain calculations for callers
- Provider interfaces: How SLA settings reach the engine

This layer depends on the domain layer and provider interfaces,
but not on concrete infrastructure implementations.
"""

from helpdesk_sla.sla.application.services import (
    ISLASettingsProvider,
    SLAService,
    StaticSLASettingsProvider,
)

__all__ = [
    # Services
    "SLAService",
    # Provider Interfaces
    "ISLASettingsProvider",
    "StaticSLASettingsProvider",
]
