# ABOUTME: Logging setup for the CLI using Rich's log handler.
# ABOUTME: Library modules only create named loggers; the CLI decides where they go.

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Route package logging to stderr through a RichHandler.

    Args:
        level: Logging level name such as "INFO" or "DEBUG". Unknown names
            fall back to WARNING.
    """
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("event_connect")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolved)
    root.propagate = False
