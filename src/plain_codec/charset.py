"""Byte-to-text conversion with invalid-sequence recovery.

``CharsetConverter`` turns bytes of a declared source charset into valid
Unicode text and never fails on malformed input:

- UTF-8 sources: invalid bytes are escaped as the literal text ``\\xHH``;
- any other source: undecodable units become U+FFFD.

One scheme is chosen per converter at construction time.
"""

from __future__ import annotations

import codecs
import encodings
import logging
import pkgutil
import warnings
from dataclasses import dataclass
from encodings.aliases import aliases
from enum import Enum
from functools import lru_cache

from plain_codec.adapters.diagnostics import NullSink
from plain_codec.application.ports import DiagnosticSink
from plain_codec.errors import ConfigurationError
from plain_codec.types import BytesLike, RawInput

logger = logging.getLogger(__name__)

CANONICAL_CHARSET = "utf-8"
DEFAULT_CHARSET = "UTF-8"
ESCAPE_ERRORS = "plain-codec-escape"
REPLACE_ERRORS = "replace"

BINARY_CHARSET = "ASCII-8BIT"
BINARY_ALIASES = frozenset({"ascii-8bit", "binary"})
_BINARY_CODEC = "ascii"

_UNICODE_CODECS = frozenset(
    {
        "utf-8-sig",
        "utf-7",
        "utf-16",
        "utf-16-le",
        "utf-16-be",
        "utf-32",
        "utf-32-le",
        "utf-32-be",
    }
)
_ALL_BYTES = bytes(range(256))


class EncodingClass(str, Enum):
    """Classification of a source charset; selects the invalid-byte policy."""

    UTF8 = "utf8"
    UNICODE = "unicode"
    LEGACY = "legacy"
    BINARY = "binary"

    @property
    def errors(self) -> str:
        """Codec error handler used for this class."""
        if self is EncodingClass.UTF8:
            return ESCAPE_ERRORS
        return REPLACE_ERRORS


@dataclass(frozen=True)
class ResolvedCharset:
    """Declared charset resolved against the runtime codec registry."""

    name: str
    codec: str
    encoding_class: EncodingClass

    @property
    def errors(self) -> str:
        return self.encoding_class.errors


def _escape_invalid(exc: UnicodeError) -> tuple[str, int]:
    """Codec error handler rendering each invalid byte as ``\\xHH``."""
    if not isinstance(exc, UnicodeDecodeError):
        raise exc
    invalid = exc.object[exc.start : exc.end]
    return "".join(f"\\x{byte:02X}" for byte in invalid), exc.end


codecs.register_error(ESCAPE_ERRORS, _escape_invalid)


def _classify(codec_name: str) -> EncodingClass:
    if codec_name == CANONICAL_CHARSET:
        return EncodingClass.UTF8
    if codec_name in _UNICODE_CODECS:
        return EncodingClass.UNICODE
    return EncodingClass.LEGACY


def resolve_charset(name: str) -> ResolvedCharset:
    """Resolve a charset name into a decodable text codec.

    Parameters
    ----------
    name : str
        Charset name, matched case-insensitively (``UTF-8``, ``utf8``,
        ``ISO-8859-1``, ``cp1252``, ``ASCII-8BIT``...).

    Returns
    -------
    ResolvedCharset
        Codec name and encoding class for ``name``.

    Raises
    ------
    ConfigurationError
        If the name is unknown, names a non-text codec (``base64``,
        ``rot13``...), or the codec cannot decode with error recovery.
    """
    if not isinstance(name, str) or not name.strip():
        raise ConfigurationError("Charset name cannot be empty.")
    declared = name.strip()

    if declared.lower() in BINARY_ALIASES:
        return ResolvedCharset(
            name=declared,
            codec=_BINARY_CODEC,
            encoding_class=EncodingClass.BINARY,
        )

    try:
        info = codecs.lookup(declared)
    except LookupError as exc:
        raise ConfigurationError(f"Unsupported charset '{declared}'.") from exc

    resolved = ResolvedCharset(
        name=declared,
        codec=info.name,
        encoding_class=_classify(info.name),
    )
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", DeprecationWarning)
            _ALL_BYTES.decode(resolved.codec, resolved.errors)
    except LookupError as exc:
        raise ConfigurationError(
            f"Charset '{declared}' is not a text encoding."
        ) from exc
    except Exception as exc:
        raise ConfigurationError(
            f"Charset '{declared}' cannot decode with error recovery: {exc}"
        ) from exc
    return resolved


def _codec_modules() -> set[str]:
    """Names of every codec module shipped in the ``encodings`` package."""
    modules = {
        module.name
        for module in pkgutil.iter_modules(encodings.__path__)
        if not module.name.startswith("_") and module.name != "aliases"
    }
    return modules | set(aliases.values())


@lru_cache(maxsize=1)
def _supported_charsets() -> tuple[str, ...]:
    names = {BINARY_CHARSET}
    for module_name in sorted(_codec_modules()):
        try:
            names.add(resolve_charset(module_name).codec)
        except ConfigurationError:
            continue
    return tuple(sorted(names))


def supported_charsets() -> list[str]:
    """Return canonical names of every charset the converter accepts."""
    return list(_supported_charsets())


def escape_invalid_bytes(data: BytesLike) -> str:
    """Decode UTF-8, rendering each invalid byte as literal ``\\xHH`` text."""
    return bytes(data).decode(CANONICAL_CHARSET, ESCAPE_ERRORS)


def is_valid_text(text: str) -> bool:
    """Return whether ``text`` encodes as strict UTF-8 (no lone surrogates)."""
    try:
        text.encode(CANONICAL_CHARSET)
    except UnicodeEncodeError:
        return False
    return True


class CharsetConverter:
    """Convert bytes of a declared charset into valid Unicode text.

    Parameters
    ----------
    charset : str, default="UTF-8"
        Source charset name.
    sink : DiagnosticSink | None, default=None
        Receives a notice whenever invalid input was recovered. Defaults to
        a no-op sink.

    Raises
    ------
    ConfigurationError
        If ``charset`` cannot be resolved.

    Notes
    -----
    Instances hold no mutable state and may be shared across threads.
    """

    def __init__(
        self,
        charset: str = DEFAULT_CHARSET,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self._charset = resolve_charset(charset)
        self._sink: DiagnosticSink = sink or NullSink()

    @property
    def charset(self) -> ResolvedCharset:
        return self._charset

    @property
    def sink(self) -> DiagnosticSink:
        return self._sink

    def convert(self, data: RawInput) -> str:
        """Convert ``data`` into valid text. Never raises on bad input.

        Parameters
        ----------
        data : bytes | bytearray | memoryview | str
            One message's bytes. A ``str`` is treated as already-decoded
            text and validated as UTF-8; lone surrogates in it are escaped.

        Returns
        -------
        str
            Text that always encodes as strict UTF-8.
        """
        if isinstance(data, str):
            return self._convert_utf8(data.encode(CANONICAL_CHARSET, "surrogatepass"))
        raw = bytes(data)
        if not raw:
            return ""
        if self._charset.encoding_class is EncodingClass.UTF8:
            return self._convert_utf8(raw)
        return self._convert_other(raw)

    def _convert_utf8(self, raw: bytes) -> str:
        try:
            return raw.decode(CANONICAL_CHARSET)
        except UnicodeDecodeError:
            pass
        text = raw.decode(CANONICAL_CHARSET, ESCAPE_ERRORS)
        self._notify(text)
        return text

    def _convert_other(self, raw: bytes) -> str:
        codec = self._charset.codec
        try:
            text = raw.decode(codec)
        except UnicodeDecodeError:
            text = raw.decode(codec, REPLACE_ERRORS)
            self._notify(text)
        if is_valid_text(text):
            return text
        # Escape-style codecs can yield lone surrogates from valid input.
        return text.encode(CANONICAL_CHARSET, "surrogatepass").decode(
            CANONICAL_CHARSET, REPLACE_ERRORS
        )

    def _notify(self, text: str) -> None:
        message = (
            "Received an event that has a different character encoding than "
            f"you configured (expected_charset={self._charset.name}): {text}"
        )
        try:
            self._sink.notice(message)
        except Exception:
            logger.debug("Diagnostic sink failed; notice dropped.", exc_info=True)
