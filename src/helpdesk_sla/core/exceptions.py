"""
Core Exceptions
================

Custom exceptions for the SLA and escalation engine.

These exceptions define domain-specific errors that can be caught and handled
appropriately at the application boundaries. The pure engine only raises
them for configuration problems; malformed tickets degrade instead of
raising.
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""


# Name used throughout the engine for invalid calendar or SLA settings.
ConfigurationError = ConfigurationException


class InvalidBusinessHoursError(ConfigurationException):
    """Business-hours window or weekday set cannot produce a calendar."""

    def __init__(self, reason: str, details: Optional[dict] = None):
        self.reason = reason
        super().__init__(f"Invalid business hours: {reason}", details)
