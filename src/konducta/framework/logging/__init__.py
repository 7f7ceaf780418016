"""
konducta logging - structured, run-aware logging.

This module provides:
- Structured logging with structlog
- Run context propagation via contextvars
- RunLog, the leveled sink handed to the bot and every company

Usage:
    from konducta.framework.logging import RunLog, configure_logging, push_context

    # Configure once at startup
    configure_logging()

    log = RunLog()
    token = push_context(company="nvd", stage="fetch")
    try:
        log.info("nvd fetch")
    finally:
        token.restore()
"""

from konducta.framework.logging.config import LOG_FORMATS, LOG_LEVELS, configure_logging
from konducta.framework.logging.context import (
    LogContext,
    bind_context,
    clear_context,
    get_context,
    get_logger,
    push_context,
)
from konducta.framework.logging.run_log import HEADER, RunLog

__all__ = [
    # Configuration
    "configure_logging",
    "LOG_LEVELS",
    "LOG_FORMATS",
    # Context
    "get_logger",
    "clear_context",
    "get_context",
    "bind_context",
    "push_context",
    "LogContext",
    # Sink
    "RunLog",
    "HEADER",
]
