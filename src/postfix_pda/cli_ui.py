"""
Rich output helpers for the postfix CLI.

Results and the verbose trace go to stdout; errors and warnings go to
stderr. Nothing here is needed by the core evaluator.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.style import Style
from rich.text import Text

from postfix_pda.core.evaluator import Operator
from postfix_pda.core.formatting import format_number, format_stack

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

# Style definitions
STYLES = {
    "number": Style(color="cyan"),
    "operator": Style(color="magenta", bold=True),
    "stack": Style(color="bright_black"),
    "result": Style(bold=True),
    "error": Style(color="red", bold=True),
    "warning": Style(color="yellow"),
}


def print_result(
    value: float, *, precision: int = 6, use_locale: bool = True, label: bool = False
) -> None:
    """Print the final result, optionally prefixed with ``Result:``."""
    text = Text("Result: " if label else "")
    text.append(format_number(value, precision, use_locale), style=STYLES["result"])
    console.print(text)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(Text(message, style=STYLES["error"]))


def print_warning(
    message: str,
    stack: Iterable[float] | None = None,
    *,
    precision: int = 6,
    use_locale: bool = True,
) -> None:
    """Print a warning to stderr, with the remaining stack when given."""
    err_console.print(Text(message, style=STYLES["warning"]))
    if stack is not None:
        rendered = format_stack(stack, precision, use_locale)
        err_console.print(Text(f"Stack: {rendered}", style=STYLES["stack"]))


class TraceRenderer:
    """
    Evaluation observer that prints each step.

    Output per operand is ``Number <n>``; per operator, the stack before,
    the computation and the stack after.
    """

    def __init__(
        self, out: Console | None = None, precision: int = 6, use_locale: bool = True
    ) -> None:
        self.out = out or console
        self.precision = precision
        self.use_locale = use_locale

    def _fmt(self, value: float) -> str:
        return format_number(value, self.precision, self.use_locale)

    def _print_stack(self, stack: tuple[float, ...]) -> None:
        rendered = format_stack(stack, self.precision, self.use_locale)
        self.out.print(Text(f"Stack: {rendered}", style=STYLES["stack"]))

    def on_number(self, value: float, stack: tuple[float, ...]) -> None:
        text = Text("Number ")
        text.append(self._fmt(value), style=STYLES["number"])
        self.out.print(text)

    def on_operator(self, op: Operator, stack: tuple[float, ...]) -> None:
        text = Text("Operator ")
        text.append(str(op), style=STYLES["operator"])
        self.out.print(text)
        self._print_stack(stack)

    def on_applied(
        self, n1: float, op: Operator, n2: float, result: float, stack: tuple[float, ...]
    ) -> None:
        self.out.print(Text(f"{self._fmt(n1)} {op} {self._fmt(n2)} = {self._fmt(result)}"))
        self._print_stack(stack)
        self.out.print()
