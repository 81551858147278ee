"""Shared test helpers for codec unit tests."""

from __future__ import annotations

import pytest


class RecordingSink:
    """Diagnostic sink that keeps every notice."""

    def __init__(self) -> None:
        self.notices: list[str] = []

    def notice(self, message: str) -> None:
        self.notices.append(message)


class ExplodingSink:
    """Diagnostic sink that always fails."""

    def notice(self, message: str) -> None:
        raise RuntimeError(f"sink down: {message}")


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()
