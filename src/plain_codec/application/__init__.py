"""Application layer: options and collaborator ports."""

from plain_codec.application.options import (
    ORIGINAL_FIELD,
    CodecOptions,
    EcsCompatibility,
)
from plain_codec.application.ports import (
    DecodeCallback,
    DiagnosticSink,
    EncodeCallback,
    Record,
    RecordFactory,
)

__all__ = [
    "ORIGINAL_FIELD",
    "CodecOptions",
    "DecodeCallback",
    "DiagnosticSink",
    "EcsCompatibility",
    "EncodeCallback",
    "Record",
    "RecordFactory",
]
