"""Jsonnice Main Entry Point

Command-line interface for the jsonnet debugger.
"""

import logging
import os
import sys
from typing import List, Optional, TextIO

from .args import Configuration, Mode, ParseResult, ParseStatus, parse_args
from .debug_adapter import DAP_HOST, DAP_PORT, start_debug_adapter
from .input_reader import InputError, read_input
from .interactive_debugger import ReplDebugger
from .logs import setup_logging
from .usage import print_usage


logger = logging.getLogger(__name__)


def dispatch(result: ParseResult, stdout: Optional[TextIO] = None,
             stderr: Optional[TextIO] = None) -> int:
    """Act on a parse result.

    Args:
        result: Outcome of parse_args
        stdout: Stream for usage on success (default: sys.stdout)
        stderr: Stream for errors and usage on failure (default: sys.stderr)

    Returns:
        Process exit code
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    if result.error is not None:
        print(f"ERROR: {result.error}", file=stderr)

    status = result.status
    if status is ParseStatus.SUCCESS_USAGE:
        print_usage(stdout)
        return 0
    elif status is ParseStatus.FAILURE_USAGE:
        if result.error is not None:
            print(file=stderr)
        print_usage(stderr)
        return 1
    elif status is ParseStatus.SUCCESS:
        return 0
    elif status is ParseStatus.FAILURE:
        return 1

    return run_config(result.config, stderr)


def run_config(config: Configuration, stderr: TextIO) -> int:
    """Start the session the configuration selects."""
    setup_logging(config.logging_level)

    if config.mode is Mode.DAP:
        try:
            start_debug_adapter(DAP_HOST, DAP_PORT)
        except Exception as e:
            logger.error("dap server terminated: %s", e)
        return 0

    try:
        filename, source = read_input(config.filename_is_code, config.input_file)
    except InputError as e:
        print(str(e), file=stderr)
        return 1

    if not config.filename_is_code:
        config.jpath.append(os.path.dirname(filename) or '.')

    repl = ReplDebugger(filename, source, config.jpath)
    repl.run()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the debugger."""
    if argv is None:
        argv = sys.argv[1:]

    return dispatch(parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())
