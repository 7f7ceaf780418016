"""Leveled run log shared by the bot and every company.

``fatal`` only records the message at CRITICAL level; deciding to terminate
stays with the caller.
"""

from typing import Any

from konducta.framework.logging.context import get_logger

HEADER = "-" * 72


class RunLog:
    """Thin facade over a structlog logger with the levels a run needs."""

    def __init__(self, logger: Any | None = None, name: str = "konducta") -> None:
        self._logger = logger if logger is not None else get_logger(name)

    def debug(self, message: str, **fields: Any) -> None:
        self._logger.debug(message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self._logger.info(message, **fields)

    def warn(self, message: str, **fields: Any) -> None:
        self._logger.warning(message, **fields)

    def error(self, message: str, **fields: Any) -> None:
        self._logger.error(message, **fields)

    def fatal(self, message: str, **fields: Any) -> None:
        self._logger.critical(message, **fields)

    def header(self) -> None:
        """Emit a divider line between run phases."""
        self._logger.info(HEADER)
