"""
Help-desk SLA deadline and escalation engine.

Typical use by a scheduler collaborator::

    from datetime import datetime, timezone

    from helpdesk_sla import bootstrap

    with bootstrap() as engine:
        now = datetime.now(timezone.utc)
        for plan in engine.escalation_service.plan_many(tickets, now):
            deliver(plan)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

__version__ = "1.0.0"


@dataclass
class Engine:
    """
    Wired services plus the configuration manager behind them.

    Closing the engine stops the configuration file watcher, if one was
    started. Usable as a context manager.
    """
    sla_service: Any
    escalation_service: Any
    config_manager: Any

    def close(self) -> None:
        self.config_manager.stop_watching()

    def __enter__(self) -> "Engine":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def bootstrap(
    config_path: Optional[Path] = None,
    roster: Optional[Iterable] = None,
) -> Engine:
    """
    Wire logging, configuration and both services from ``Settings``.

    Returns:
        Engine holding SLAService, EscalationService and SLAConfigManager
    """
    from helpdesk_sla.config import get_settings
    from helpdesk_sla.escalation.application import EscalationService, StaticRosterProvider
    from helpdesk_sla.shared.infrastructure.logging import setup_logging
    from helpdesk_sla.sla.application import SLAService
    from helpdesk_sla.sla.infrastructure import SLAConfigManager

    settings = get_settings()
    setup_logging(settings.log_level, settings.environment)

    manager = SLAConfigManager()
    manager.load(config_path or settings.sla_config_path)
    if settings.watch_config:
        manager.start_watching()

    sla_service = SLAService(manager)
    escalation_service = EscalationService(
        sla_service,
        manager,
        StaticRosterProvider(roster) if roster is not None else None,
        cooldown_hours=settings.escalation_cooldown_hours,
    )
    return Engine(sla_service, escalation_service, manager)
