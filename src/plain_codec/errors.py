"""Exception hierarchy for the plain codec."""

from __future__ import annotations


class PlainCodecError(Exception):
    """Base error raised by plain codec components."""

    exit_code = 1


class ConfigurationError(PlainCodecError):
    """Codec configuration is invalid (e.g. unknown charset)."""

    exit_code = 2


class FieldReferenceError(PlainCodecError):
    """Field reference syntax is malformed."""

    exit_code = 3


class TemplateExpansionError(PlainCodecError):
    """Output template contains a malformed expression."""

    exit_code = 4
