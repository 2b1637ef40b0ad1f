"""Jsonnice Input Reader

Loads the program text named on the command line.
"""

import logging
import sys
from typing import Optional, TextIO, Tuple


logger = logging.getLogger(__name__)

CMDLINE_FILENAME = "<cmdline>"
STDIN_FILENAME = "<stdin>"


class InputError(Exception):
    """Exception for unreadable program input."""
    pass


def read_input(filename_is_code: bool, filename: str,
               stdin: Optional[TextIO] = None) -> Tuple[str, str]:
    """Resolve the program input.

    Args:
        filename_is_code: Treat `filename` as the program text itself
        filename: Path to the program, "-" for stdin, or code
        stdin: Stream read for "-" (default: sys.stdin)

    Returns:
        Tuple of (display filename, program text)
    """
    if filename_is_code:
        return CMDLINE_FILENAME, filename

    if filename == '-':
        stream = stdin or sys.stdin
        try:
            text = stream.read()
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"Reading input file: {STDIN_FILENAME}: {_reason(e)}") from e
        logger.debug("read %d characters from stdin", len(text))
        return STDIN_FILENAME, text

    try:
        f = open(filename, 'r', encoding='utf-8')
    except OSError as e:
        raise InputError(f"Opening input file: {filename}: {_reason(e)}") from e

    with f:
        try:
            text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"Reading input file: {filename}: {_reason(e)}") from e

    logger.debug("read %d characters from %s", len(text), filename)
    return filename, text


def _reason(error: Exception) -> str:
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    return str(error)
