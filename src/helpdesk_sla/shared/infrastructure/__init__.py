"""
Infrastructure Layer
=====================

Low-level technical concerns shared across modules:
- Logging setup
"""

from helpdesk_sla.shared.infrastructure.logging import (
    CorrelationAdapter,
    get_context_logger,
    get_logger,
    log_latency,
    setup_logging,
)

__all__ = ["CorrelationAdapter", "get_context_logger", "get_logger", "log_latency", "setup_logging"]
