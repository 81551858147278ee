"""Public convenience API (delegates to the converter and codec)."""

from __future__ import annotations

from collections.abc import Mapping

from plain_codec.adapters.events import Event
from plain_codec.application.options import EcsCompatibility
from plain_codec.application.ports import DiagnosticSink, Record, RecordFactory
from plain_codec.charset import DEFAULT_CHARSET, CharsetConverter
from plain_codec.codecs.plain import PlainCodec
from plain_codec.types import FieldMap, RawInput


def convert_bytes(
    data: RawInput,
    charset: str = DEFAULT_CHARSET,
    sink: DiagnosticSink | None = None,
) -> str:
    """Convert one buffer of ``charset`` bytes into valid text."""
    return CharsetConverter(charset, sink=sink).convert(data)


def build_codec(
    charset: str = DEFAULT_CHARSET,
    format: str | None = None,
    ecs_compatibility: EcsCompatibility | str = EcsCompatibility.DISABLED,
    record_factory: RecordFactory | None = None,
    sink: DiagnosticSink | None = None,
) -> PlainCodec:
    """Build a configured plain codec."""
    return PlainCodec(
        charset=charset,
        format=format,
        ecs_compatibility=ecs_compatibility,
        record_factory=record_factory,
        sink=sink,
    )


def decode_message(
    data: RawInput,
    charset: str = DEFAULT_CHARSET,
    ecs_compatibility: EcsCompatibility | str = EcsCompatibility.DISABLED,
    sink: DiagnosticSink | None = None,
) -> Record:
    """Decode one message into a record."""
    codec = build_codec(
        charset=charset,
        ecs_compatibility=ecs_compatibility,
        sink=sink,
    )
    return next(codec.iter_decode(data))


def encode_record(
    record: Record | FieldMap,
    format: str | None = None,
) -> str:
    """Render a record (or a plain mapping of fields) as text."""
    if not isinstance(record, Record):
        record = Event(record)
    return build_codec(format=format).render(record)
