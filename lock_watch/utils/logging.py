"""Logging utilities for LockWatch."""

import logging
import sys
from pathlib import Path
from typing import Optional, Any
from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOGGER_NAMESPACE = "lock_watch"

LOG_THEME = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "red",
    "debug": "dim",
})


def _rich_handler() -> RichHandler:
    """Build a handler that renders records on stderr through rich."""
    handler = RichHandler(
        console=Console(stderr=True, theme=LOG_THEME),
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(fmt="%(name)s: %(message)s", datefmt="[%X]"))
    return handler


class LockWatchLogger:
    """Component logger; its level follows the ``lock_watch`` parent logger."""

    def __init__(self, name: str) -> None:
        self.logger = logging.getLogger(name)
        self.logger.handlers = [_rich_handler()]
        self.logger.propagate = False

    def debug(self, msg: str, **kwargs: Any) -> None:
        self.logger.debug(msg, extra=kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self.logger.warning(msg, extra=kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self.logger.error(msg, extra=kwargs)


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    verbose: bool = False
) -> None:
    """Configure the root logger and the LockWatch namespace level.

    Args:
        level: Logging level
        log_file: Optional file that also receives root log records
        verbose: Force DEBUG level
    """
    if verbose:
        level = logging.DEBUG

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )

    logging.getLogger(LOGGER_NAMESPACE).setLevel(level)


def get_logger(name: str) -> LockWatchLogger:
    """Return a logger for ``name`` under the ``lock_watch`` namespace."""
    if not name.startswith(LOGGER_NAMESPACE):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return LockWatchLogger(name)
