"""
SLA Value Objects
==================

Immutable configuration value objects for the SLA domain.

Value objects are defined by their attributes rather than an identity.
They are frozen Pydantic models so that a configuration document read from
YAML (or handed over by the configuration collaborator) is validated once
and can then be shared freely between evaluations.
"""

from datetime import date, time
from typing import List, Optional, Set
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator

from helpdesk_sla.config import Priority


class Holiday(BaseModel):
    """
    A day excluded from business-hours accounting.

    Recurring holidays match every year on the same month and day;
    one-time holidays match their exact date only.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: date
    recurring: bool = Field(
        default=False,
        alias="isRecurring",
        description="Match by month and day regardless of year"
    )
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None


class BusinessHoursConfig(BaseModel):
    """
    Daily business window, weekday set and timezone.

    Weekdays are numbered 0 (Sunday) through 6 (Saturday). The window
    ordering and weekday set are checked by ``BusinessCalendar`` when a
    calendar is built, so an invalid window surfaces as a
    ``ConfigurationError`` at configuration-load time.
    """
    model_config = ConfigDict(frozen=True)

    start: time = Field(default=time(9, 0), description="Start of the business day")
    end: time = Field(default=time(17, 0), description="End of the business day")
    days: Set[int] = Field(
        default_factory=lambda: {1, 2, 3, 4, 5},
        description="Business weekdays, 0 = Sunday"
    )
    timezone: str = Field(default="America/Chicago", description="IANA timezone")
    holidays: List[Holiday] = Field(default_factory=list)

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_wall_clock(cls, v):
        """Accept "HH:MM" strings as used in the settings screens."""
        if isinstance(v, str):
            return time.fromisoformat(v.strip())
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone {v!r}") from e
        return v

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


class SLAConfig(BaseModel):
    """
    SLA targets for one priority tier.

    When ``enabled`` is false no deadline is tracked for the tier.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    enabled: bool = True
    response_time_hours: float = Field(alias="responseTimeHours", ge=0)
    resolution_time_hours: float = Field(alias="resolutionTimeHours", ge=0)
    business_hours_only: bool = Field(default=False, alias="businessHoursOnly")


class SLASettings(BaseModel):
    """
    One SLAConfig per priority tier plus the shared business calendar.

    ``at_risk_threshold`` is the fraction of the creation-to-deadline
    window that must elapse before a pending metric is reported as
    at-risk.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    urgent: SLAConfig
    high: SLAConfig
    medium: SLAConfig
    low: SLAConfig
    business_hours: BusinessHoursConfig = Field(
        default_factory=BusinessHoursConfig, alias="businessHours"
    )
    at_risk_threshold: float = Field(default=0.8, gt=0, lt=1, alias="atRiskThreshold")

    def config_for(self, priority) -> Optional[SLAConfig]:
        """
        Get the SLA tier for a priority.

        Returns None for priorities without a tier (None, unrecognized).
        """
        tiers = {
            Priority.URGENT: self.urgent,
            Priority.HIGH: self.high,
            Priority.MEDIUM: self.medium,
            Priority.LOW: self.low,
        }
        return tiers.get(Priority.parse(priority))


DEFAULT_SLA_SETTINGS = SLASettings(
    urgent=SLAConfig(response_time_hours=1, resolution_time_hours=4),
    high=SLAConfig(response_time_hours=4, resolution_time_hours=8),
    medium=SLAConfig(
        response_time_hours=8, resolution_time_hours=24, business_hours_only=True
    ),
    low=SLAConfig(
        response_time_hours=24, resolution_time_hours=72, business_hours_only=True
    ),
    business_hours=BusinessHoursConfig(),
)
