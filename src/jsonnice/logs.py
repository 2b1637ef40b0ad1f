"""Jsonnice Logging Setup

Process-wide logging sink, configured once after the command line is parsed.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'error': logging.ERROR,
}

DEFAULT_LOG_LEVEL = 'error'

_configured = False


def setup_logging(level: int, console: Optional[Console] = None) -> bool:
    """Install the rich handler on the root logger.

    Args:
        level: Minimum stdlib logging level to emit
        console: Console to log to (default: a stderr console)

    Returns:
        True if logging was configured by this call, False if it already was
    """
    global _configured
    if _configured:
        return False

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)

    _configured = True
    return True
