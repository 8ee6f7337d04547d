"""
Structured Logging
==================

JSON-structured logging for the SLA engine.

Provides:
- Structured JSON logs (parseable by log aggregators)
- Evaluation-cycle correlation IDs so every ticket evaluated in one sweep
  can be grouped
- Timing helper for batch evaluations

Usage:
    from helpdesk_sla.shared.infrastructure.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Escalation matched", extra={"ticket_id": "T-1001"})
"""

import logging
import sys
import time
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator, Optional

from pythonjsonlogger.json import JsonFormatter

# Extra keys whose values never reach the log stream verbatim.
_REDACTED_KEYS = ("password", "api_key", "secret", "email")


class EngineJsonFormatter(JsonFormatter):
    """
    JSON formatter with engine-specific fields.

    Adds:
    - timestamp in ISO format (UTC)
    - correlation_id when available
    - environment the process was configured for
    """

    def __init__(self, *args: Any, environment: str = "development", **kwargs: Any):
        self.environment = environment
        super().__init__(*args, **kwargs)

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.now(timezone.utc).isoformat()

        if hasattr(record, "correlation_id"):
            log_record["correlation_id"] = record.correlation_id

        log_record["environment"] = self.environment

        for key, value in list(log_record.items()):
            if isinstance(value, str) and any(k in key.lower() for k in _REDACTED_KEYS):
                log_record[key] = "***REDACTED***"


def setup_logging(
    level: str = "INFO",
    environment: str = "development",
) -> None:
    """
    Configure structured JSON logging for the process.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        environment: Environment name for log context
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level.upper()))
    handler.setFormatter(
        EngineJsonFormatter(
            fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
            environment=environment,
        )
    )
    root_logger.addHandler(handler)

    # watchdog is chatty at DEBUG
    logging.getLogger("watchdog").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__ of the module)
    """
    return logging.getLogger(name)


class CorrelationAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges its context into per-call extras."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_context_logger(name: str, correlation_id: Optional[str] = None) -> CorrelationAdapter:
    """
    Get a logger that stamps every record with an evaluation-cycle ID.

    A fresh ID is generated when none is supplied.
    """
    return CorrelationAdapter(
        get_logger(name), {"correlation_id": correlation_id or uuid.uuid4().hex}
    )


@contextmanager
def log_latency(logger: Any, operation: str, **extra_context: Any) -> Iterator[None]:
    """
    Context manager for measuring and logging operation latency.

    Usage:
        with log_latency(logger, "sla_sweep", tickets=len(tickets)):
            summaries = service.evaluate_tickets(tickets, now)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        latency_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            f"{operation} completed",
            extra={
                "operation": operation,
                "latency_ms": round(latency_ms, 2),
                **extra_context,
            },
        )
