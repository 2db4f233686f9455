"""
postfix-pda - push-down automaton for postfix arithmetic expressions.

Reads a postfix expression terminated by a sentinel (``;`` by default)
and evaluates it on an operand stack.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

from .core import ErrorKind, EvaluationResult, PostfixError, evaluate, evaluate_source, run


def _get_version() -> str:
    """Get version from installed package metadata."""
    try:
        return _metadata_version("postfix-pda")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ErrorKind",
    "EvaluationResult",
    "PostfixError",
    "evaluate",
    "evaluate_source",
    "run",
]
