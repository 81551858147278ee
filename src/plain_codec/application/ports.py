"""Application ports for the codec's external collaborators."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, TypeAlias, runtime_checkable

from plain_codec.types import FieldValue


@runtime_checkable
class Record(Protocol):
    """Structured unit of data produced by decode and consumed by encode."""

    def get(self, field: str) -> FieldValue:
        """Return the value stored under ``field`` or ``None``."""

    def set(self, field: str, value: FieldValue) -> None:
        """Store ``value`` under ``field``."""

    def expand_template(self, template: str) -> str:
        """Substitute ``%{...}`` placeholders with field values."""

    def default_text_rendering(self) -> str:
        """Return the record's default textual representation."""


class RecordFactory(Protocol):
    """Create new, empty records."""

    def new_record(self) -> Record:
        """Return a fresh record."""


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receive best-effort, non-fatal notices."""

    def notice(self, message: str) -> None:
        """Accept one diagnostic message. Must not block the caller."""


DecodeCallback: TypeAlias = Callable[[Record], None]
EncodeCallback: TypeAlias = Callable[[Record, str], None]
