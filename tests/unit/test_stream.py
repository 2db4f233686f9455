"""Tests for the pushback character stream."""

from __future__ import annotations

import io

import pytest

from postfix_pda.core.errors import ErrorKind, PostfixError
from postfix_pda.core.stream import CharStream


class _FailingReader(io.StringIO):
    """Text source that fails after its buffered content is consumed."""

    def read(self, size: int | None = -1) -> str:
        ch = super().read(size)
        if not ch:
            raise OSError("device unplugged")
        return ch


class TestCharStream:
    """CharStream reads, unreads and peeks single characters."""

    def test_reads_string_source(self) -> None:
        stream = CharStream("ab")
        assert stream.read() == "a"
        assert stream.read() == "b"
        assert stream.read() is None

    def test_reads_file_object(self) -> None:
        stream = CharStream(io.StringIO("x"))
        assert stream.read() == "x"
        assert stream.read() is None

    def test_unread_returns_character_again(self) -> None:
        stream = CharStream("12")
        c = stream.read()
        stream.unread(c)
        assert stream.read() == "1"
        assert stream.read() == "2"

    def test_only_one_character_of_pushback(self) -> None:
        stream = CharStream("12")
        stream.unread("a")
        with pytest.raises(RuntimeError):
            stream.unread("b")

    def test_peek_does_not_consume(self) -> None:
        stream = CharStream("7")
        assert stream.peek() == "7"
        assert stream.read() == "7"
        assert stream.peek() is None

    def test_exhausted_flag(self) -> None:
        stream = CharStream("")
        assert not stream.exhausted
        stream.mark_exhausted()
        assert stream.exhausted

    def test_read_failure_is_lex_error(self) -> None:
        stream = CharStream(_FailingReader("1"))
        assert stream.read() == "1"
        with pytest.raises(PostfixError) as exc_info:
            stream.read()
        assert exc_info.value.kind == ErrorKind.LEX_ERROR
        assert "device unplugged" in str(exc_info.value)
