"""Plain text codec.

The plain codec is for plain text with no delimiting between records: every
``decode`` call turns one already-framed message into exactly one record.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from plain_codec.adapters.events import EventFactory
from plain_codec.application.options import CodecOptions, EcsCompatibility
from plain_codec.application.ports import (
    DecodeCallback,
    DiagnosticSink,
    EncodeCallback,
    Record,
    RecordFactory,
)
from plain_codec.charset import DEFAULT_CHARSET, CharsetConverter
from plain_codec.schemas import parse_codec_config
from plain_codec.types import RawInput

MESSAGE_FIELD = "message"


def _discard(record: Record, text: str) -> None:
    del record, text


class PlainCodec:
    """Decode bytes into records and render records back to text.

    Parameters
    ----------
    charset : str, default="UTF-8"
        Source charset used by ``decode``.
    format : str | None, default=None
        ``%{...}`` template used by ``encode``. When omitted, records render
        through their default text representation.
    ecs_compatibility : EcsCompatibility | str, default="disabled"
        When enabled, decoded text is also stored under ``[event][original]``.
    record_factory : RecordFactory | None, default=None
        Creates records for ``decode``. Defaults to ``EventFactory``.
    sink : DiagnosticSink | None, default=None
        Receives notices about recovered invalid input.

    Raises
    ------
    ConfigurationError
        If the settings are invalid.
    """

    name = "plain"

    def __init__(
        self,
        charset: str = DEFAULT_CHARSET,
        format: str | None = None,
        ecs_compatibility: EcsCompatibility | str = EcsCompatibility.DISABLED,
        *,
        record_factory: RecordFactory | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self.options = parse_codec_config(
            {
                "charset": charset,
                "format": format,
                "ecs_compatibility": ecs_compatibility,
            }
        )
        self._converter = CharsetConverter(self.options.charset, sink=sink)
        self._record_factory = record_factory or EventFactory()
        self._original_field = self.options.original_field
        self._on_event: EncodeCallback = _discard

    @classmethod
    def from_config(
        cls,
        settings: Mapping[str, object] | None = None,
        *,
        record_factory: RecordFactory | None = None,
        sink: DiagnosticSink | None = None,
    ) -> PlainCodec:
        """Build a codec from a raw settings mapping."""
        options = parse_codec_config(settings)
        return cls.from_options(options, record_factory=record_factory, sink=sink)

    @classmethod
    def from_options(
        cls,
        options: CodecOptions,
        *,
        record_factory: RecordFactory | None = None,
        sink: DiagnosticSink | None = None,
    ) -> PlainCodec:
        return cls(
            charset=options.charset,
            format=options.format,
            ecs_compatibility=options.ecs_compatibility,
            record_factory=record_factory,
            sink=sink,
        )

    @property
    def converter(self) -> CharsetConverter:
        return self._converter

    @property
    def original_field(self) -> str | None:
        return self._original_field

    def iter_decode(self, data: RawInput) -> Iterator[Record]:
        """Yield exactly one record holding the converted text."""
        message = self._converter.convert(data)
        record = self._record_factory.new_record()
        record.set(MESSAGE_FIELD, message)
        if self._original_field:
            record.set(self._original_field, message)
        yield record

    def decode(self, data: RawInput, emit: DecodeCallback) -> None:
        """Convert one message and pass the resulting record to ``emit``."""
        for record in self.iter_decode(data):
            emit(record)

    def on_event(self, handler: EncodeCallback) -> None:
        """Register the callback ``encode`` uses when none is passed."""
        self._on_event = handler

    def render(self, record: Record) -> str:
        """Render ``record`` as text without emitting it.

        Raises
        ------
        TemplateExpansionError
            If the configured format holds a malformed expression.
        """
        if self.options.format is not None:
            return record.expand_template(self.options.format)
        return record.default_text_rendering()

    def encode(self, record: Record, emit: EncodeCallback | None = None) -> str:
        """Render ``record`` and hand ``(record, text)`` to the emitter.

        Rendering completes before anything is emitted, so a template error
        never leads to partial output.
        """
        encoded = self.render(record)
        (emit or self._on_event)(record, encoded)
        return encoded

    def multi_encode(
        self,
        records: Iterable[Record],
        emit: EncodeCallback | None = None,
    ) -> list[str]:
        """Encode each record in order."""
        return [self.encode(record, emit) for record in records]

    def flush(self, emit: DecodeCallback) -> None:
        """No-op: this codec never buffers input between calls."""
        del emit
