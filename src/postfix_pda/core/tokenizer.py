"""
Tokenizer for postfix arithmetic expressions.

Scans a :class:`CharStream` one character at a time and produces typed
tokens. Tokens need not be separated by whitespace: ``3 4+`` and ``2 3*4/``
scan the same as their spaced forms, and a leading ``+``/``-`` binds to the
number that follows it (``-3`` is one token, ``- 3`` is two).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TextIO

from .errors import ErrorKind, PostfixError
from .stream import CharStream

logger = logging.getLogger(__name__)

DEFAULT_SENTINEL = ";"

PLUS = "+"
MINUS = "-"
MULT = "*"
DIV = "/"
RADIX_POINT = "."
ZERO = "0"

OPERATORS = frozenset({PLUS, MINUS, MULT, DIV})


class TokenKind(StrEnum):
    """Token types for postfix expressions."""

    NUMBER = auto()
    OPERATOR = auto()
    END = auto()


@dataclass(frozen=True)
class Token:
    """A single token: its kind and the raw lexeme it was scanned from."""

    kind: TokenKind
    value: str = ""

    def __str__(self) -> str:
        if self.kind == TokenKind.END:
            return "END"
        return f"{self.kind.upper()} {self.value}"


END_TOKEN = Token(TokenKind.END)


@dataclass(frozen=True)
class CharClassifier:
    """Decides which characters count as digits and as whitespace."""

    name: str
    is_digit: Callable[[str], bool]
    is_space: Callable[[str], bool]


_ASCII_DIGITS = frozenset("0123456789")
_ASCII_SPACE = frozenset(" \t\n\r\f\v")

ASCII_CLASSIFIER = CharClassifier(
    name="ascii",
    is_digit=_ASCII_DIGITS.__contains__,
    is_space=_ASCII_SPACE.__contains__,
)

UNICODE_CLASSIFIER = CharClassifier(
    name="unicode",
    is_digit=str.isdecimal,
    is_space=str.isspace,
)

_CLASSIFIERS: dict[str, CharClassifier] = {
    ASCII_CLASSIFIER.name: ASCII_CLASSIFIER,
    UNICODE_CLASSIFIER.name: UNICODE_CLASSIFIER,
}


def get_classifier(name: str) -> CharClassifier:
    """Look up a classifier by name (``ascii`` or ``unicode``)."""
    try:
        return _CLASSIFIERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown classifier {name!r}; expected one of {sorted(_CLASSIFIERS)}"
        ) from None


def next_token(
    stream: CharStream,
    *,
    sentinel: str = DEFAULT_SENTINEL,
    classifier: CharClassifier = ASCII_CLASSIFIER,
) -> Token:
    """Scan and return the next token from *stream*.

    A lexeme cut short by the sentinel or by the end of the source is still
    returned as its own token; the call after that returns ``END``.

    Raises:
        PostfixError: ``LEX_ERROR`` if the source fails to read,
            ``INVALID_EXPRESSION`` if the lexeme is neither a number nor an
            operator and input has not ended.
    """
    if stream.exhausted:
        return END_TOKEN

    chars: list[str] = []
    got_radix_point = False
    is_valid_number = False
    should_continue = True

    while should_continue:
        c = stream.read()
        if c is None:
            stream.mark_exhausted()
            break

        if c == sentinel:
            stream.mark_exhausted()
            should_continue = False

        elif c in (PLUS, MINUS):
            if chars:
                # Start of the next token
                stream.unread(c)
                should_continue = False
            else:
                chars.append(c)

        elif c == RADIX_POINT:
            if got_radix_point:
                stream.unread(c)
                should_continue = False
            else:
                if not chars:
                    chars.append(ZERO)  # .5 -> 0.5
                chars.append(c)
                got_radix_point = True
                # A number can't end with the radix point
                is_valid_number = False

        elif c in (MULT, DIV):
            if chars:
                stream.unread(c)
            else:
                chars.append(c)
            should_continue = False

        elif classifier.is_space(c):
            if chars:
                stream.unread(c)
                should_continue = False

        elif classifier.is_digit(c):
            chars.append(c)
            is_valid_number = True

        else:
            # Keep it so the error can show it
            chars.append(c)
            stream.unread(c)
            is_valid_number = False
            should_continue = False

    lexeme = "".join(chars)
    is_operator = lexeme in OPERATORS

    if not stream.exhausted and not is_valid_number and not is_operator:
        raise PostfixError(ErrorKind.INVALID_EXPRESSION, lexeme=lexeme)

    if is_operator:
        token = Token(TokenKind.OPERATOR, lexeme)
    elif lexeme:
        token = Token(TokenKind.NUMBER, lexeme)
    else:
        token = END_TOKEN

    logger.debug("Scanned %s", token)
    return token


def iter_tokens(
    source: CharStream | str | TextIO,
    *,
    sentinel: str = DEFAULT_SENTINEL,
    classifier: CharClassifier = ASCII_CLASSIFIER,
) -> Iterator[Token]:
    """Yield tokens lazily, ending with (and including) the ``END`` token."""
    stream = source if isinstance(source, CharStream) else CharStream(source)
    while True:
        token = next_token(stream, sentinel=sentinel, classifier=classifier)
        yield token
        if token.kind == TokenKind.END:
            return


def tokenize(
    source: CharStream | str | TextIO,
    *,
    sentinel: str = DEFAULT_SENTINEL,
    classifier: CharClassifier = ASCII_CLASSIFIER,
) -> list[Token]:
    """Tokenize a whole expression into a list ending with ``END``."""
    return list(iter_tokens(source, sentinel=sentinel, classifier=classifier))


def canonical_form(tokens: Iterable[Token]) -> str:
    """Join number and operator lexemes with single spaces."""
    return " ".join(t.value for t in tokens if t.kind != TokenKind.END)
