"""
SLA Configuration Loading
=========================

Reads SLA settings and escalation rules from a YAML document:

    sla:
      urgent: {enabled: true, responseTimeHours: 1, resolutionTimeHours: 4}
      ...
      businessHours:
        start: "09:00"
        end: "17:00"
        days: [1, 2, 3, 4, 5]
        timezone: America/Chicago
        holidays:
          - {date: 2025-12-25, isRecurring: true, name: Christmas Day}
    escalation_rules:
      - id: breached-high
        name: Breached high priority
        priority: 10
        conditions: {priorities: [High, Urgent], slaBreached: true}
        actions: {reassign: {to: manager}}

Validation (including building the business calendar) happens at load
time, so a bad document fails with ``ConfigurationError`` before any
deadline is computed. Optionally watches the file and hot-reloads it.
"""

import threading
from pathlib import Path
from typing import Any, List, Optional, Tuple

import yaml
from pydantic import TypeAdapter, ValidationError
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from helpdesk_sla.core.exceptions import ConfigurationError
from helpdesk_sla.escalation.application.services import IEscalationRuleProvider
from helpdesk_sla.escalation.domain import EscalationRule
from helpdesk_sla.shared.infrastructure.logging import get_logger
from helpdesk_sla.sla.application.services import ISLASettingsProvider
from helpdesk_sla.sla.domain import DEFAULT_SLA_SETTINGS, BusinessCalendar, SLASettings

logger = get_logger(__name__)

_RULES = TypeAdapter(List[EscalationRule])


def parse_config(data: Any, source: str = "<memory>") -> Tuple[SLASettings, List[EscalationRule]]:
    """
    Validate a configuration document.

    Raises:
        ConfigurationError: the document is malformed or describes an
            unusable business calendar
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "SLA configuration must be a mapping", {"source": source}
        )

    try:
        settings = (
            SLASettings.model_validate(data["sla"]) if data.get("sla") else DEFAULT_SLA_SETTINGS
        )
        rules = _RULES.validate_python(data.get("escalation_rules") or [])
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid SLA configuration in {source}",
            {"source": source, "errors": e.errors(include_url=False)},
        ) from e

    BusinessCalendar(settings.business_hours)
    return settings, rules


class ConfigFileHandler(FileSystemEventHandler):
    """Watchdog event handler for SLA config file changes."""

    def __init__(self, config_manager: "SLAConfigManager", config_path: Path):
        self.config_manager = config_manager
        self.config_path = config_path
        super().__init__()

    def on_modified(self, event):
        if event.is_directory:
            return
        if Path(event.src_path).resolve() == self.config_path.resolve():
            logger.info("Config file changed", extra={"path": str(event.src_path)})
            self.config_manager.reload()


class SLAConfigManager(ISLASettingsProvider, IEscalationRuleProvider):
    """
    Thread-safe SLA configuration manager with hot-reload support.

    Implements both provider interfaces, so the same manager can back
    ``SLAService`` and ``EscalationService``.
    """

    def __init__(self):
        self._settings: Optional[SLASettings] = None
        self._rules: List[EscalationRule] = []
        self._lock = threading.Lock()
        self._path: Optional[Path] = None
        self._observer = None

    def load(self, path: Path) -> SLASettings:
        """Initial configuration load; raises ConfigurationError when invalid."""
        self._path = Path(path)
        settings, rules = self._load_from_file(self._path)
        with self._lock:
            self._settings, self._rules = settings, rules
        logger.info(
            "SLA configuration loaded",
            extra={"path": str(self._path), "rules": len(rules)},
        )
        return settings

    def _load_from_file(self, path: Path) -> Tuple[SLASettings, List[EscalationRule]]:
        if not path.exists():
            logger.warning("SLA config file not found, using defaults", extra={"path": str(path)})
            return DEFAULT_SLA_SETTINGS, []

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"SLA configuration is not valid YAML: {path}", {"source": str(path)}
            ) from e

        return parse_config(data, str(path))

    def reload(self) -> bool:
        """
        Reload configuration from file.

        A failed reload keeps the previous configuration.
        """
        if self._path is None:
            return False

        try:
            settings, rules = self._load_from_file(self._path)
        except ConfigurationError as e:
            logger.error(
                "Failed to reload SLA config, keeping previous",
                extra={"path": str(self._path), "error": e.message},
            )
            return False

        with self._lock:
            self._settings, self._rules = settings, rules
        logger.info("SLA configuration reloaded", extra={"rules": len(rules)})
        return True

    def start_watching(self) -> None:
        """
        Start watching the configuration file for changes.

        Skips watching when the file does not exist or the platform cannot
        deliver file events.
        """
        if self._path is None:
            raise RuntimeError("Config not loaded. Call load() first.")

        if not self._path.exists():
            logger.info("Config file doesn't exist, skipping file watch", extra={"path": str(self._path)})
            return

        try:
            self._observer = Observer()
            self._observer.schedule(
                ConfigFileHandler(self, self._path),
                str(self._path.parent),
                recursive=False,
            )
            self._observer.start()
            logger.info("Started watching config file", extra={"path": str(self._path)})
        except OSError as e:
            logger.warning("File watching not available, using static config", extra={"error": str(e)})
            self._observer = None

    @property
    def is_watching(self) -> bool:
        return self._observer is not None

    def stop_watching(self) -> None:
        """Stop watching (safe to call even if not watching)."""
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5)
            self._observer = None

    # ========== Provider interfaces ==========

    def get_settings(self) -> SLASettings:
        with self._lock:
            if self._settings is None:
                raise RuntimeError("SLA configuration not loaded")
            return self._settings

    def get_rules(self) -> List[EscalationRule]:
        with self._lock:
            return list(self._rules)
