"""
postfix CLI - entry point.

Commands:
    eval     Evaluate one postfix expression (stdin, a file or --expr)
    tokens   Show the token stream an expression scans to
"""

from __future__ import annotations

import logging
import platform
import sys
from collections.abc import Callable
from contextlib import ExitStack
from pathlib import Path
from typing import Annotated, TextIO

import typer
from pydantic import ValidationError

from postfix_pda import __version__
from postfix_pda.cli_ui import TraceRenderer, print_error, print_result, print_warning
from postfix_pda.core.config import ConfigError, EvaluatorConfig, PostfixConfig, load_config
from postfix_pda.core.errors import ERROR_MESSAGES, ErrorKind, PostfixError
from postfix_pda.core.evaluator import EvaluationOutcome, run
from postfix_pda.core.formatting import format_number, setup_locale
from postfix_pda.core.tokenizer import canonical_form, iter_tokens

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Evaluate postfix (Reverse Polish) arithmetic expressions.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"postfix-pda version {__version__}")
        typer.echo(f"  Python: {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and environment information",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            envvar="POSTFIX_CONFIG",
            help="Path to postfix.toml (default: ./postfix.toml)",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            envvar="POSTFIX_LOG_LEVEL",
            help="Logging level for diagnostics on stderr",
        ),
    ] = "WARNING",
) -> None:
    """postfix CLI main callback for global options."""
    level = log_level.upper()
    if level not in logging.getLevelNamesMapping():
        print_error(f"Unknown log level: {log_level}")
        raise typer.Exit(code=2)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )
    setup_locale()

    try:
        ctx.obj = load_config(config_path)
    except ConfigError as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(code=1)


# =============================================================================
# Error rendering
# =============================================================================


def _describe_division(outcome: EvaluationOutcome, precision: int, use_locale: bool) -> str:
    operand = format_number(outcome.operand or 0.0, precision, use_locale)
    return f"{ERROR_MESSAGES[ErrorKind.DIVISION_BY_ZERO]}: {operand} / 0"


def _describe_lexeme(outcome: EvaluationOutcome, precision: int, use_locale: bool) -> str:
    return f"{outcome.message}: {outcome.lexeme}"


def _describe_plain(outcome: EvaluationOutcome, precision: int, use_locale: bool) -> str:
    if outcome.detail:
        return f"{outcome.message}: {outcome.detail}"
    return outcome.message or ""


def _describe_incomplete(outcome: EvaluationOutcome, precision: int, use_locale: bool) -> str:
    return outcome.message or ""


_DESCRIBERS: dict[ErrorKind, Callable[[EvaluationOutcome, int, bool], str]] = {
    ErrorKind.LEX_ERROR: _describe_plain,
    ErrorKind.INVALID_EXPRESSION: _describe_lexeme,
    ErrorKind.EMPTY_STACK_UNDERFLOW: _describe_plain,
    ErrorKind.NUMBER_FORMAT: _describe_lexeme,
    ErrorKind.DIVISION_BY_ZERO: _describe_division,
    ErrorKind.INCOMPLETE_EXPRESSION: _describe_incomplete,
}


def describe_error(outcome: EvaluationOutcome, precision: int = 6, use_locale: bool = True) -> str:
    """Map a failed outcome to the one-line message shown to the user."""
    assert outcome.error_kind is not None
    return _DESCRIBERS[outcome.error_kind](outcome, precision, use_locale)


# =============================================================================
# Commands
# =============================================================================


def _open_source(stack: ExitStack, file: Path | None, expr: str | None) -> str | TextIO:
    """Resolve the input: --expr text, a file, or stdin."""
    if expr is not None:
        if file is not None:
            print_error("Give either FILE or --expr, not both")
            raise typer.Exit(code=2)
        return expr
    if file is None:
        return sys.stdin
    try:
        return stack.enter_context(open(file, encoding="utf-8"))
    except OSError as e:
        print_error(f"{ERROR_MESSAGES[ErrorKind.LEX_ERROR]}: {e}")
        raise typer.Exit(code=1)


def _get_config(ctx: typer.Context) -> PostfixConfig:
    obj = ctx.obj
    return obj if isinstance(obj, PostfixConfig) else PostfixConfig()


@app.command("eval")
def eval_command(
    ctx: typer.Context,
    file: Annotated[
        Path | None,
        typer.Argument(help="File holding the expression (default: stdin)"),
    ] = None,
    expr: Annotated[
        str | None,
        typer.Option("--expr", "-e", help="Expression text, e.g. '3 4 +;'"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Print each evaluation step"),
    ] = False,
    strict: Annotated[
        bool | None,
        typer.Option("--strict/--lenient", help="Fail when values remain on the stack"),
    ] = None,
    sentinel: Annotated[
        str | None,
        typer.Option("--sentinel", help="End-of-expression character (default ';')"),
    ] = None,
    precision: Annotated[
        int | None,
        typer.Option("--precision", "-p", min=1, max=17, help="Significant digits in output"),
    ] = None,
) -> None:
    """Evaluate one postfix expression and print the result."""
    config = _get_config(ctx)
    overrides: dict[str, object] = {}
    if strict is not None:
        overrides["strict"] = strict
    if sentinel is not None:
        overrides["sentinel"] = sentinel
    try:
        evaluator_config = EvaluatorConfig.model_validate(
            {**config.evaluator.model_dump(), **overrides}
        )
    except ValidationError as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(code=2)

    output = config.output
    precision = precision if precision is not None else output.precision
    verbose = verbose or output.verbose
    use_locale = output.use_locale

    observer = TraceRenderer(precision=precision, use_locale=use_locale) if verbose else None

    with ExitStack() as stack:
        source = _open_source(stack, file, expr)
        logger.debug("Evaluating from %s", "--expr" if expr is not None else file or "stdin")
        outcome = run(
            source,
            sentinel=evaluator_config.sentinel,
            classifier=evaluator_config.get_classifier(),
            observer=observer,
            strict=evaluator_config.strict,
        )

    if not outcome.ok:
        print_error(describe_error(outcome, precision, use_locale))
        raise typer.Exit(code=1)

    result = outcome.result
    assert result is not None
    print_result(result.value, precision=precision, use_locale=use_locale, label=verbose)
    if result.incomplete:
        print_warning(
            ERROR_MESSAGES[ErrorKind.INCOMPLETE_EXPRESSION],
            result.leftover if verbose else None,
            precision=precision,
            use_locale=use_locale,
        )


@app.command("tokens")
def tokens_command(
    ctx: typer.Context,
    file: Annotated[
        Path | None,
        typer.Argument(help="File holding the expression (default: stdin)"),
    ] = None,
    expr: Annotated[
        str | None,
        typer.Option("--expr", "-e", help="Expression text, e.g. '3 4 +;'"),
    ] = None,
    canonical: Annotated[
        bool,
        typer.Option("--canonical", help="Print the space-normalised expression instead"),
    ] = False,
) -> None:
    """Show the tokens an expression scans to."""
    evaluator_config = _get_config(ctx).evaluator

    with ExitStack() as stack:
        source = _open_source(stack, file, expr)
        try:
            tokens = list(
                iter_tokens(
                    source,
                    sentinel=evaluator_config.sentinel,
                    classifier=evaluator_config.get_classifier(),
                )
            )
        except PostfixError as e:
            print_error(describe_error(EvaluationOutcome.from_error(e)))
            raise typer.Exit(code=1)

    if canonical:
        typer.echo(canonical_form(tokens))
        return
    for token in tokens:
        typer.echo(str(token))


# =============================================================================
# Main Entry Point
# =============================================================================


def main() -> None:
    app()


if __name__ == "__main__":
    main()
