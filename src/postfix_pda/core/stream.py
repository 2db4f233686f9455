"""
Character stream with one character of pushback.

The tokenizer needs to look one character past the end of a lexeme to find
where it stops. ``CharStream`` wraps any text source (a string or a text file
object such as ``sys.stdin``) and lets the tokenizer hand that character back.
"""

from __future__ import annotations

import io
import logging
from typing import TextIO

from .errors import ErrorKind, PostfixError

logger = logging.getLogger(__name__)


class CharStream:
    """Cursor over a text source supporting ``read``, ``unread`` and ``peek``."""

    def __init__(self, source: str | TextIO) -> None:
        self._source: TextIO = io.StringIO(source) if isinstance(source, str) else source
        self._pushback: str | None = None
        self._exhausted = False

    @property
    def exhausted(self) -> bool:
        """True once the sentinel was consumed or the source ran out."""
        return self._exhausted

    def mark_exhausted(self) -> None:
        self._exhausted = True

    def read(self) -> str | None:
        """Return the next character, or None at the natural end of the source."""
        if self._pushback is not None:
            ch, self._pushback = self._pushback, None
            return ch

        try:
            ch = self._source.read(1)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Read from %r failed: %s", self._source, e)
            raise PostfixError(ErrorKind.LEX_ERROR, detail=str(e)) from e

        return ch or None

    def unread(self, ch: str) -> None:
        """Push a single character back so the next ``read`` returns it."""
        if self._pushback is not None:
            raise RuntimeError("CharStream holds at most one pushed-back character")
        self._pushback = ch

    def peek(self) -> str | None:
        """Return the next character without consuming it."""
        ch = self.read()
        if ch is not None:
            self.unread(ch)
        return ch
