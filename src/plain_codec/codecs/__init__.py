"""Codec implementations."""

from plain_codec.codecs.plain import MESSAGE_FIELD, PlainCodec

__all__ = ["MESSAGE_FIELD", "PlainCodec"]
