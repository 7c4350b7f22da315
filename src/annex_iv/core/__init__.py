"""Core utilities for Annex IV serialization."""

from annex_iv.core.logging import get_logger, configure_logging, report_context
from annex_iv.core.errors import (
    AnnexIVError,
    ReportValidationError,
    ConfigurationError,
)
from annex_iv.core.config import SerializerConfig, DEFAULT_CONFIG

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "report_context",
    # Errors
    "AnnexIVError",
    "ReportValidationError",
    "ConfigurationError",
    # Config
    "SerializerConfig",
    "DEFAULT_CONFIG",
]
