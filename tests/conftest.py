"""Shared pytest fixtures for postfix-pda tests."""

from __future__ import annotations

from typing import Any

import pytest


class RecordingObserver:
    """Evaluation observer that records every event it receives."""

    def __init__(self) -> None:
        self.events: list[tuple[Any, ...]] = []

    def on_number(self, value: float, stack: tuple[float, ...]) -> None:
        self.events.append(("number", value, stack))

    def on_operator(self, op: str, stack: tuple[float, ...]) -> None:
        self.events.append(("operator", str(op), stack))

    def on_applied(
        self, n1: float, op: str, n2: float, result: float, stack: tuple[float, ...]
    ) -> None:
        self.events.append(("applied", n1, str(op), n2, result, stack))

    def on_result(self, result: float, leftover: tuple[float, ...]) -> None:
        self.events.append(("result", result, leftover))


@pytest.fixture
def recorder() -> RecordingObserver:
    """Return a fresh recording observer."""
    return RecordingObserver()
