"""Logging configuration for the command line."""
import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from src.config import LOG_LEVEL


def setup_logging(verbosity: int = 0, console: Optional[Console] = None) -> None:
    """Route log records through rich.

    Args:
        verbosity: 0 uses SONIC_LOG_LEVEL, 1 is INFO, 2 or more is DEBUG
        console: Console to write to. Defaults to stderr.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.getLevelName(LOG_LEVEL)
        if not isinstance(level, int):
            level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    logging.getLogger(__name__).debug("Logging initialized with verbosity=%d", verbosity)
