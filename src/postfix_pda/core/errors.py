"""
Error types for postfix expression scanning and evaluation.

Every fatal condition is raised as a single :class:`PostfixError` whose
``kind`` is one member of the closed :class:`ErrorKind` enumeration. The top
level dispatches on the kind instead of catching one exception class per
failure.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Closed set of failure kinds."""

    LEX_ERROR = "lex_error"
    INVALID_EXPRESSION = "invalid_expression"
    EMPTY_STACK_UNDERFLOW = "empty_stack_underflow"
    NUMBER_FORMAT = "number_format"
    DIVISION_BY_ZERO = "division_by_zero"
    # Only raised in strict mode; otherwise reported as a warning.
    INCOMPLETE_EXPRESSION = "incomplete_expression"


# Human-readable headline for each kind.
ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.LEX_ERROR: "Input stream failure",
    ErrorKind.INVALID_EXPRESSION: "Invalid expression",
    ErrorKind.EMPTY_STACK_UNDERFLOW: "Invalid input",
    ErrorKind.NUMBER_FORMAT: "Could not convert to number",
    ErrorKind.DIVISION_BY_ZERO: "Division by zero",
    ErrorKind.INCOMPLETE_EXPRESSION: "The input was improper; the stack is not empty.",
}


class PostfixError(Exception):
    """
    Raised when an expression cannot be scanned or evaluated.

    Attributes:
        kind: Which failure occurred
        message: Headline, defaults to the kind's entry in ``ERROR_MESSAGES``
        lexeme: Offending lexeme (INVALID_EXPRESSION, NUMBER_FORMAT)
        operand: First operand of a division by zero
        detail: Free-form detail, e.g. the underlying I/O error
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str | None = None,
        *,
        lexeme: str | None = None,
        operand: float | None = None,
        detail: str | None = None,
    ) -> None:
        self.kind = kind
        self.message = message or ERROR_MESSAGES[kind]
        self.lexeme = lexeme
        self.operand = operand
        self.detail = detail
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with the lexeme or detail if available."""
        if self.lexeme is not None:
            return f"{self.message}: {self.lexeme}"
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class IncompleteExpressionWarning(UserWarning):
    """Issued when values remain on the stack after the result is taken."""


def make_division_error(operand: float) -> PostfixError:
    """Create a DIVISION_BY_ZERO error retaining the first operand."""
    return PostfixError(ErrorKind.DIVISION_BY_ZERO, operand=operand)
