"""Rich-based logging setup."""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

_stderr_console = Console(file=sys.stderr)


def setup_logging(level: str = "INFO", rich_tracebacks: bool = True) -> None:
    """
    Install a Rich handler on the root logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        rich_tracebacks: Render exception tracebacks with Rich
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = RichHandler(
        console=_stderr_console,
        show_time=True,
        show_path=False,
        rich_tracebacks=rich_tracebacks,
        markup=False,
    )
    handler.setLevel(log_level)
    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get logger instance (usually called with __name__)."""
    return logging.getLogger(name)
