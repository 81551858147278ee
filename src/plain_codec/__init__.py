"""Plain text codec with charset normalization and invalid-byte escaping."""

from __future__ import annotations

from plain_codec.adapters.diagnostics import LoggingSink, NullSink
from plain_codec.adapters.events import Event, EventFactory
from plain_codec.api import build_codec, convert_bytes, decode_message, encode_record
from plain_codec.application.options import EcsCompatibility
from plain_codec.charset import CharsetConverter, supported_charsets
from plain_codec.codecs.plain import PlainCodec
from plain_codec.errors import (
    ConfigurationError,
    FieldReferenceError,
    PlainCodecError,
    TemplateExpansionError,
)

__version__ = "0.1.0"

__all__ = [
    "CharsetConverter",
    "ConfigurationError",
    "EcsCompatibility",
    "Event",
    "EventFactory",
    "FieldReferenceError",
    "LoggingSink",
    "NullSink",
    "PlainCodec",
    "PlainCodecError",
    "TemplateExpansionError",
    "build_codec",
    "convert_bytes",
    "decode_message",
    "encode_record",
    "supported_charsets",
]
