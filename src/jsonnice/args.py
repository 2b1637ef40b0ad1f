"""Jsonnice Command-Line Arguments

Turns the raw argument list into a Configuration plus a parse status.
"""

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, TextIO

from .logs import LOG_LEVELS, DEFAULT_LOG_LEVEL
from .usage import print_version


class InternalError(Exception):
    """Raised when the argument rules leave the parser in an impossible state."""
    pass


class ParseStatus(Enum):
    """Outcome of argument parsing."""
    CONTINUE = "continue"
    SUCCESS_USAGE = "success-show-usage"
    FAILURE_USAGE = "failure-show-usage"
    SUCCESS = "success"
    FAILURE = "failure"


class Mode(Enum):
    """Which long-running session the process starts."""
    REPL = "repl"
    DAP = "dap"


@dataclass
class Configuration:
    """Resolved command-line configuration."""
    input_file: str = ""
    filename_is_code: bool = False
    mode: Mode = Mode.REPL
    jpath: List[str] = field(default_factory=list)
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def dap_mode(self) -> bool:
        return self.mode is Mode.DAP

    @property
    def logging_level(self) -> int:
        return LOG_LEVELS[self.log_level]


@dataclass
class ParseResult:
    """Parse status together with the configuration built so far."""
    status: ParseStatus
    config: Optional[Configuration] = None
    error: Optional[str] = None


class _ArgCursor:
    """Left-to-right position over the simplified argument list."""

    def __init__(self, args: List[str]):
        self.args = args
        self.index = 0

    def has_more(self) -> bool:
        return self.index < len(self.args)

    def current(self) -> str:
        return self.args[self.index]

    def advance(self) -> None:
        self.index += 1

    def next_arg(self) -> Optional[str]:
        """Consume the argument that follows the current flag.

        Returns:
            The argument, or None if the flag was the last token
        """
        if self.index + 1 >= len(self.args):
            self.index = len(self.args)
            return None
        self.index += 1
        return self.args[self.index]

    def rest(self) -> List[str]:
        """Consume and return everything after the current token."""
        remaining = self.args[self.index + 1:]
        self.index = len(self.args)
        return remaining


def simplify_args(args: List[str]) -> List[str]:
    """Expand clustered short options, e.g. -abc becomes -a -b -c.

    Nothing after a "--" is expanded.
    """
    result: List[str] = []
    for i, arg in enumerate(args):
        if arg == '--':
            result.extend(args[i:])
            break
        if len(arg) > 2 and arg[0] == '-' and arg[1] != '-':
            result.extend('-' + ch for ch in arg[1:])
        else:
            result.append(arg)
    return result


def parse_args(argv: List[str], out: Optional[TextIO] = None) -> ParseResult:
    """Parse command-line arguments.

    Args:
        argv: Arguments without the program name
        out: Stream that receives the version text (default: stdout)

    Returns:
        ParseResult; status CONTINUE means the configuration is ready to run
    """
    config = Configuration()
    cursor = _ArgCursor(simplify_args(argv))
    positional: List[str] = []

    def fail(message: str) -> ParseResult:
        return ParseResult(ParseStatus.FAILURE, config, message)

    while cursor.has_more():
        arg = cursor.current()

        if arg in ('-h', '--help'):
            return ParseResult(ParseStatus.SUCCESS_USAGE, config)

        elif arg in ('-v', '--version'):
            print_version(out or sys.stdout)
            return ParseResult(ParseStatus.SUCCESS, config)

        elif arg in ('-e', '--exec'):
            config.filename_is_code = True

        elif arg == '--':
            positional.extend(cursor.rest())
            break

        elif arg in ('-J', '--jpath'):
            directory = cursor.next_arg()
            if not directory:
                return fail("-J argument was empty string")
            config.jpath.append(directory)

        elif arg in ('-d', '--dap'):
            config.mode = Mode.DAP

        elif arg in ('-l', '--log-level'):
            level = cursor.next_arg()
            if not level:
                return fail("no log level specified")
            if level not in LOG_LEVELS:
                return fail(
                    f"invalid log level {level}. Allowed: {','.join(LOG_LEVELS)}"
                )
            config.log_level = level

        elif len(arg) > 1 and arg.startswith('-'):
            return fail(f"unrecognized argument: {arg}")

        else:
            positional.append(arg)

        cursor.advance()

    if config.dap_mode:
        return ParseResult(ParseStatus.CONTINUE, config)

    want = "code" if config.filename_is_code else "filename"
    if not positional:
        return ParseResult(ParseStatus.FAILURE_USAGE, config, f"must give {want}")
    if len(positional) != 1:
        raise InternalError("Internal error: expected a single input file.")

    config.input_file = positional[0]
    return ParseResult(ParseStatus.CONTINUE, config)
