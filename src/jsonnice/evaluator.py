"""Jsonnet Evaluator

Thin wrapper over the jsonnet Python binding.
"""

import logging
from typing import Iterable, Optional

import _jsonnet


logger = logging.getLogger(__name__)


class EvaluationError(Exception):
    """Exception for jsonnet evaluation errors."""
    pass


def jsonnet_version() -> str:
    return _jsonnet.version


def evaluate_snippet(filename: str, source: str, jpath: Iterable[str] = ()) -> str:
    """Evaluate jsonnet source to JSON text.

    Args:
        filename: Name used in error messages and for relative imports
        source: Jsonnet program text
        jpath: Library search directories, in lookup order

    Returns:
        The manifested JSON output
    """
    jpath = list(jpath)
    logger.debug("evaluating %s with jpath %s", filename, jpath)
    try:
        return _jsonnet.evaluate_snippet(filename, source, jpathdir=jpath)
    except RuntimeError as e:
        raise EvaluationError(str(e).rstrip()) from e


def evaluate_expression(filename: str, source: Optional[str], expression: str,
                        jpath: Iterable[str] = ()) -> str:
    """Evaluate an expression with the program's value bound to `top`."""
    if source is None:
        return evaluate_snippet(filename, expression, jpath)

    snippet = f"local top = ({source}\n);\n{expression}\n"
    return evaluate_snippet(filename, snippet, jpath)
