"""
Logging configuration.

Provides a single entry point for configuring structured logging.

Configuration is read from arguments first, then environment variables:
- KONDUCTA_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR | CRITICAL (default: INFO)
- KONDUCTA_LOG_FORMAT: json | console (default: console)

Usage:
    # Configure at application startup
    from konducta.framework.logging import configure_logging
    configure_logging()

    # Or with explicit settings
    configure_logging(level="DEBUG", format="json")
"""

import logging
import os
import sys
from typing import Literal

import structlog
from structlog.types import Processor

from konducta.core.errors import InvalidConfigError
from konducta.framework.logging.context import add_context_processor

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("console", "json")

# Track if logging has been configured
_configured = False


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None,
    format: Literal["json", "console"] | None = None,
    force: bool = False,
) -> None:
    """
    Configure structured logging for the application.

    Should be called once at startup (CLI entry). Subsequent calls are no-ops
    unless force=True.

    Args:
        level: Log level (overrides KONDUCTA_LOG_LEVEL env var)
        format: Output format (overrides KONDUCTA_LOG_FORMAT env var)
        force: Reconfigure even if already configured

    Raises:
        InvalidConfigError: If the level or format is not a known value.
    """
    global _configured

    log_level = (level or os.environ.get("KONDUCTA_LOG_LEVEL", "INFO")).upper()
    log_format = (format or os.environ.get("KONDUCTA_LOG_FORMAT", "console")).lower()
    if log_level not in LOG_LEVELS:
        raise InvalidConfigError("log_level", log_level, f"unknown log level {log_level!r}")
    if log_format not in LOG_FORMATS:
        raise InvalidConfigError("log_format", log_format, f"unknown log format {log_format!r}")

    if _configured and not force:
        return

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        # UTC ISO-8601 timestamps
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        # run_id / company / stage from contextvars
        add_context_processor,
        structlog.processors.format_exc_info,
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level),
        force=True,
    )
    logging.getLogger("konducta").setLevel(getattr(logging, log_level))

    _configured = True

