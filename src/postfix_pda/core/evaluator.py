"""
Push-down evaluator for postfix expressions.

Numbers are pushed onto a stack; an operator pops two values, applies itself
and pushes the result. The value left on top when input ends is the result.
Pure evaluation: no I/O. Observers receive each step for tracing.
"""

from __future__ import annotations

import logging
import operator
import re
import warnings
from collections.abc import Callable, Iterable
from enum import StrEnum
from typing import Any, Protocol, TextIO

from pydantic import BaseModel, ConfigDict, Field

from .errors import (
    ERROR_MESSAGES,
    ErrorKind,
    IncompleteExpressionWarning,
    PostfixError,
    make_division_error,
)
from .stream import CharStream
from .tokenizer import (
    ASCII_CLASSIFIER,
    DEFAULT_SENTINEL,
    CharClassifier,
    Token,
    TokenKind,
    iter_tokens,
)

logger = logging.getLogger(__name__)


class Operator(StrEnum):
    """Binary arithmetic operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


_OPERATIONS: dict[Operator, Callable[[float, float], float]] = {
    Operator.ADD: operator.add,
    Operator.SUB: operator.sub,
    Operator.MUL: operator.mul,
    Operator.DIV: operator.truediv,
}

# Signed decimal with an optional radix point; at least one digit somewhere.
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


# =============================================================================
# Observer
# =============================================================================


class EvaluationObserver(Protocol):
    """Receives evaluation events. Stacks are passed as snapshots."""

    def on_number(self, value: float, stack: tuple[float, ...]) -> None: ...

    def on_operator(self, op: Operator, stack: tuple[float, ...]) -> None: ...

    def on_applied(
        self, n1: float, op: Operator, n2: float, result: float, stack: tuple[float, ...]
    ) -> None: ...

    def on_result(self, result: float, leftover: tuple[float, ...]) -> None: ...


class NullObserver:
    """Observer that ignores every event."""

    def on_number(self, value: float, stack: tuple[float, ...]) -> None:
        pass

    def on_operator(self, op: Operator, stack: tuple[float, ...]) -> None:
        pass

    def on_applied(
        self, n1: float, op: Operator, n2: float, result: float, stack: tuple[float, ...]
    ) -> None:
        pass

    def on_result(self, result: float, leftover: tuple[float, ...]) -> None:
        pass


def _notify(observer: Any, event: str, *args: Any) -> None:
    """Call ``observer.<event>`` if the observer implements it."""
    handler = getattr(observer, event, None)
    if handler is not None:
        handler(*args)


# =============================================================================
# Results
# =============================================================================


class EvaluationResult(BaseModel):
    """Final value plus whatever was left under it on the stack."""

    value: float = Field(description="Value on top of the stack at end of input")
    leftover: tuple[float, ...] = Field(
        default=(), description="Remaining stack, bottom first"
    )

    model_config = ConfigDict(frozen=True)

    @property
    def incomplete(self) -> bool:
        """True when the input was not a complete postfix expression."""
        return bool(self.leftover)


class EvaluationOutcome(BaseModel):
    """Either a result or an error kind, as returned by :func:`run`."""

    result: EvaluationResult | None = None
    error_kind: ErrorKind | None = None
    message: str | None = None
    lexeme: str | None = None
    operand: float | None = None
    detail: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def from_error(cls, error: PostfixError) -> EvaluationOutcome:
        return cls(
            error_kind=error.kind,
            message=error.message,
            lexeme=error.lexeme,
            operand=error.operand,
            detail=error.detail,
        )


# =============================================================================
# Evaluation
# =============================================================================


def parse_number(lexeme: str) -> float:
    """Convert a number lexeme to a float, requiring the whole lexeme to parse.

    Raises:
        PostfixError: ``NUMBER_FORMAT`` if the lexeme is not a decimal number.
    """
    if not _NUMBER_RE.fullmatch(lexeme):
        raise PostfixError(ErrorKind.NUMBER_FORMAT, lexeme=lexeme)
    return float(lexeme)


def apply_operator(op: Operator, n1: float, n2: float) -> float:
    """Compute ``n1 op n2``.

    Raises:
        PostfixError: ``DIVISION_BY_ZERO`` (carrying *n1*) for ``/`` by zero.
    """
    if op == Operator.DIV and n2 == 0:
        raise make_division_error(n1)
    return _OPERATIONS[op](n1, n2)


def evaluate(
    tokens: Iterable[Token],
    observer: EvaluationObserver | None = None,
    *,
    strict: bool = False,
) -> EvaluationResult:
    """Evaluate a token sequence on an operand stack.

    Tokens are consumed until the first ``END`` token (or until the iterable
    runs out). Scanner errors raised by a lazy token iterator propagate.

    Args:
        tokens: Token sequence, typically from :func:`iter_tokens`.
        observer: Receives number/operator/applied/result events.
        strict: Raise ``INCOMPLETE_EXPRESSION`` instead of warning when
            values remain under the result.

    Returns:
        The result and any leftover stack.

    Raises:
        PostfixError: ``EMPTY_STACK_UNDERFLOW``, ``DIVISION_BY_ZERO``,
            ``NUMBER_FORMAT`` (or a tokenizer kind), and
            ``INCOMPLETE_EXPRESSION`` in strict mode.
    """
    observer = observer or NullObserver()
    stack: list[float] = []

    for token in tokens:
        if token.kind == TokenKind.END:
            break
        if token.kind == TokenKind.NUMBER:
            _interpret_number(token, stack, observer)
        else:
            _interpret_operator(token, stack, observer)

    if not stack:
        raise PostfixError(ErrorKind.EMPTY_STACK_UNDERFLOW)

    value = stack.pop()
    result = EvaluationResult(value=value, leftover=tuple(stack))
    _notify(observer, "on_result", result.value, result.leftover)

    if result.incomplete:
        logger.debug("Stack not empty after result: %s", list(result.leftover))
        if strict:
            raise PostfixError(
                ErrorKind.INCOMPLETE_EXPRESSION,
                detail=" ".join(repr(v) for v in result.leftover),
            )
        warnings.warn(
            ERROR_MESSAGES[ErrorKind.INCOMPLETE_EXPRESSION],
            IncompleteExpressionWarning,
            stacklevel=2,
        )

    return result


def _interpret_number(token: Token, stack: list[float], observer: Any) -> None:
    value = parse_number(token.value)
    stack.append(value)
    _notify(observer, "on_number", value, tuple(stack))


def _interpret_operator(token: Token, stack: list[float], observer: Any) -> None:
    """Pop two operands, apply the operator and push the result."""
    op = Operator(token.value)
    _notify(observer, "on_operator", op, tuple(stack))

    # The top of the stack is the second operand
    if not stack:
        raise PostfixError(ErrorKind.EMPTY_STACK_UNDERFLOW)
    n2 = stack.pop()
    if not stack:
        raise PostfixError(ErrorKind.EMPTY_STACK_UNDERFLOW)
    n1 = stack.pop()

    result = apply_operator(op, n1, n2)
    logger.debug("%r %s %r = %r", n1, op, n2, result)
    stack.append(result)
    _notify(observer, "on_applied", n1, op, n2, result, tuple(stack))


def evaluate_source(
    source: CharStream | str | TextIO,
    *,
    sentinel: str = DEFAULT_SENTINEL,
    classifier: CharClassifier = ASCII_CLASSIFIER,
    observer: EvaluationObserver | None = None,
    strict: bool = False,
) -> EvaluationResult:
    """Scan and evaluate one expression read from *source*."""
    tokens = iter_tokens(source, sentinel=sentinel, classifier=classifier)
    return evaluate(tokens, observer, strict=strict)


def run(
    source: CharStream | str | TextIO,
    *,
    sentinel: str = DEFAULT_SENTINEL,
    classifier: CharClassifier = ASCII_CLASSIFIER,
    observer: EvaluationObserver | None = None,
    strict: bool = False,
) -> EvaluationOutcome:
    """Evaluate without raising: every failure becomes an error outcome.

    The incomplete-expression warning is carried by ``result.incomplete``
    rather than issued through :mod:`warnings`.
    """
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", IncompleteExpressionWarning)
            result = evaluate_source(
                source,
                sentinel=sentinel,
                classifier=classifier,
                observer=observer,
                strict=strict,
            )
    except PostfixError as e:
        logger.debug("Evaluation failed: %s", e)
        return EvaluationOutcome.from_error(e)
    return EvaluationOutcome(result=result)
