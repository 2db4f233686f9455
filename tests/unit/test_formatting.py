"""Tests for number rendering."""

from __future__ import annotations

import locale
from collections.abc import Iterator

import pytest

from postfix_pda.core.formatting import format_number, format_stack


@pytest.fixture
def c_locale() -> Iterator[None]:
    previous = locale.setlocale(locale.LC_NUMERIC)
    locale.setlocale(locale.LC_NUMERIC, "C")
    yield
    locale.setlocale(locale.LC_NUMERIC, previous)


class TestFormatNumber:
    """%g-style rendering."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (7.0, "7"),
            (14.0, "14"),
            (0.5, "0.5"),
            (1 / 3, "0.333333"),
            (1e20, "1e+20"),
            (-2.5, "-2.5"),
        ],
    )
    def test_plain(self, value: float, expected: str) -> None:
        assert format_number(value, use_locale=False) == expected

    def test_precision(self) -> None:
        assert format_number(2 / 3, precision=3, use_locale=False) == "0.667"

    def test_locale_c(self, c_locale: None) -> None:
        assert format_number(1.25) == "1.25"

    def test_stack(self) -> None:
        assert format_stack([3.0, 4.5], use_locale=False) == "3 4.5"
        assert format_stack([], use_locale=False) == ""
