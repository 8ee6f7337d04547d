"""
SLA Infrastructure Layer
========================

Concrete adapters for the SLA module:
- YAML configuration loading with optional hot-reload
"""

from helpdesk_sla.sla.infrastructure.config import (
    ConfigFileHandler,
    SLAConfigManager,
    parse_config,
)

__all__ = ["ConfigFileHandler", "SLAConfigManager", "parse_config"]
