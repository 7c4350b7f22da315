"""Structured logging for Annex IV serialization.

Log output goes to stderr; stdout is left to the XML documents. While a
report is being serialized its fund identifiers are bound as context, so
classifier fallback events can be traced back to the fund that caused them.
"""

import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

import structlog

from annex_iv.core.errors import ConfigurationError

SERVICE_NAME = "annex-iv"


def _add_service(logger, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _resolve_level(level: str) -> int:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ConfigurationError(f"Unknown log level: {level}", setting="LOG_LEVEL", value=level)
    return numeric


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Render JSON lines instead of the console format
        log_file: Optional file that also receives standard library records
        stream: Output stream, stderr by default

    Raises:
        ConfigurationError: If the level name is unknown
    """
    numeric_level = _resolve_level(level)
    stream = stream or sys.stderr
    logging.basicConfig(format="%(message)s", stream=stream, level=numeric_level)

    processors: list = [
        structlog.contextvars.merge_contextvars,
        _add_service,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_format:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=stream.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        logging.getLogger().addHandler(file_handler)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger for a module."""
    return structlog.get_logger(name)


@contextmanager
def report_context(aif_national_code: str, domicile: str) -> Iterator[None]:
    """Bind a fund's identifiers to every event logged inside the block."""
    with structlog.contextvars.bound_contextvars(
        aif_national_code=aif_national_code, domicile=domicile
    ):
        yield
