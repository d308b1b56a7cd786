# ABOUTME: Logging setup for the crawler and CLI.
# ABOUTME: Installs a single Rich handler on the root logger, once per process.

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGING_CONFIGURED = False


def configure_logging(level: int | str = logging.INFO, console: Console | None = None) -> None:
    """Configure the root logger with a Rich handler.

    Safe to call multiple times; only the first call installs the handler.

    Args:
        level: Log level name or number for the root logger.
        console: Optional Rich console to log to. Defaults to stderr.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)
    root.handlers.clear()
    root.addHandler(handler)

    _LOGGING_CONFIGURED = True
