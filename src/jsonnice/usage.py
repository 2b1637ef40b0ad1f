"""Version and usage text for the jsonnice command."""

from typing import TextIO

from .evaluator import jsonnet_version


def version_text() -> str:
    return f"Jsonnet debugger {jsonnet_version()}"


def print_version(out: TextIO) -> None:
    print(version_text(), file=out)


def print_usage(out: TextIO) -> None:
    """Print the command synopsis and option list."""
    print_version(out)
    print(file=out)
    print("jsonnice {<option>} { <filename> }", file=out)
    print(file=out)
    print("Available options:", file=out)
    print("  -h / --help                This message", file=out)
    print("  -e / --exec                Treat filename as code", file=out)
    print("  -J / --jpath <dir>         Specify an additional library search dir", file=out)
    print("  -d / --dap                 Start a debug-adapter-protocol server", file=out)
    print("  -l / --log-level <level>   Set the log level. Allowed values: debug,info,warn,error", file=out)
    print("  -v / --version             Print version", file=out)
    print(file=out)
    print("In all cases:", file=out)
    print("  <filename> can be - (stdin)", file=out)
    print("  Multichar options are expanded e.g. -abc becomes -a -b -c.", file=out)
    print("  The -- option suppresses option processing for subsequent arguments.", file=out)
    print("  Note that since filenames and jsonnet programs can begin with -, it is", file=out)
    print("  advised to use -- if the argument is unknown, e.g. jsonnice -- \"$FILENAME\".", file=out)
