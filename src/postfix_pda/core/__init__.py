"""
Postfix expression core.

Tokenizer and push-down evaluator for postfix arithmetic.

Usage:
    from postfix_pda.core import evaluate_source

    result = evaluate_source("5 1 2 + 4 * + 3 -;")
    # result.value == 14.0
"""

from postfix_pda.core.errors import ErrorKind, IncompleteExpressionWarning, PostfixError
from postfix_pda.core.evaluator import (
    EvaluationObserver,
    EvaluationOutcome,
    EvaluationResult,
    Operator,
    evaluate,
    evaluate_source,
    run,
)
from postfix_pda.core.stream import CharStream
from postfix_pda.core.tokenizer import Token, TokenKind, canonical_form, next_token, tokenize

__all__ = [
    "CharStream",
    "ErrorKind",
    "EvaluationObserver",
    "EvaluationOutcome",
    "EvaluationResult",
    "IncompleteExpressionWarning",
    "Operator",
    "PostfixError",
    "Token",
    "TokenKind",
    "canonical_form",
    "evaluate",
    "evaluate_source",
    "next_token",
    "run",
    "tokenize",
]
