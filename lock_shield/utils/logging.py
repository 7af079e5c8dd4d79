"""Logging utilities for LockShield."""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

ROOT_LOGGER_NAME = "lock_shield"


class LockShieldLogger:
    """Logger with rich formatting, writing to stderr so stdout stays a clean report."""

    def __init__(self, name: str) -> None:
        self.logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Setup rich console handler with custom theme."""
        console = Console(stderr=True, theme=Theme({
            "info": "cyan",
            "warning": "yellow",
            "error": "red",
            "critical": "red bold",
            "debug": "dim",
        }))

        handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            markup=False,
        )

        formatter = logging.Formatter(
            fmt="%(name)s: %(message)s",
            datefmt="[%X]"
        )
        handler.setFormatter(formatter)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()
        self.logger.addHandler(handler)
        self.logger.propagate = False

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(msg, extra=kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(msg, extra=kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(msg, extra=kwargs)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(msg, extra=kwargs)


def setup_logging(verbose: bool = False) -> None:
    """Setup the package log level.

    Child loggers created by ``get_logger`` inherit this level.

    Args:
        verbose: Enable debug logging
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


def get_logger(name: str) -> LockShieldLogger:
    """Get a LockShield logger instance.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    return LockShieldLogger(name)
