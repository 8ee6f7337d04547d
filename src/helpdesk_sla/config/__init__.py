"""
Configuration Module
====================

Application settings and shared enumerations.

Settings are loaded from environment variables using Pydantic. The
enumerations are closed sets with an ``UNKNOWN`` member so that a ticket
carrying an unrecognized value degrades to a neutral weight instead of
aborting a batch evaluation.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="helpdesk-sla", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Root log level")

    # ========== SLA Configuration ==========
    sla_config_path: Path = Field(
        default=Path("sla_config.yaml"),
        description="Path to the SLA settings and escalation rules YAML file"
    )
    watch_config: bool = Field(
        default=False,
        description="Reload the SLA configuration file when it changes"
    )

    # ========== Escalation ==========
    escalation_cooldown_hours: float = Field(
        default=24.0,
        ge=0,
        description="Hours before the same rule may escalate the same ticket again"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# ========== Enumerations ==========

class _LenientEnum(str, Enum):
    """String enum whose ``parse`` never raises."""

    @classmethod
    def parse(cls, value: Any) -> "_LenientEnum":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted or member.name.lower() == wanted:
                    return member
        return cls.UNKNOWN  # type: ignore[attr-defined]


class Priority(_LenientEnum):
    """Ticket priority levels."""
    URGENT = "Urgent"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    NONE = "None"
    UNKNOWN = "unknown"

    @property
    def rank(self) -> int:
        """Severity rank; NONE and UNKNOWN sit below LOW."""
        return PRIORITY_RANKS[self]


class TicketStatus(_LenientEnum):
    """Ticket lifecycle statuses."""
    OPEN = "Open"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    ON_HOLD = "On Hold"
    WAITING = "Waiting"
    PAUSED = "Paused"
    RESOLVED = "Resolved"
    CLOSED = "Closed"
    UNKNOWN = "unknown"

    @property
    def is_terminal(self) -> bool:
        return self in (TicketStatus.RESOLVED, TicketStatus.CLOSED)


class SLAMetricStatus(str, Enum):
    """SLA status of a single metric."""
    MET = "met"
    BREACHED = "breached"
    PENDING = "pending"
    AT_RISK = "at_risk"


class TechRole(_LenientEnum):
    """Role tiers of the tech roster."""
    TECH = "tech"
    SENIOR = "senior"
    MANAGER = "manager"
    UNKNOWN = "unknown"


class EscalationTargetType(str, Enum):
    """Who a ticket is reassigned to on escalation."""
    MANAGER = "manager"
    SENIOR = "senior"
    SPECIFIC = "specific"


class EscalationState(str, Enum):
    """Outcome of one escalation evaluation."""
    NOT_EVALUATED = "not_evaluated"
    EVALUATED_NO_MATCH = "evaluated_no_match"
    EVALUATED_MATCHED = "evaluated_matched"


PRIORITY_RANKS = {
    Priority.UNKNOWN: 0,
    Priority.NONE: 0,
    Priority.LOW: 1,
    Priority.MEDIUM: 2,
    Priority.HIGH: 3,
    Priority.URGENT: 4,
}
