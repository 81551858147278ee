"""``%{...}`` string interpolation against record fields."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping
from datetime import UTC, datetime

from plain_codec.errors import FieldReferenceError, TemplateExpansionError
from plain_codec.types import FieldValue

OPEN = "%{"
CLOSE = "}"

_JODA_TOKEN = re.compile(r"yyyy|YYYY|yy|MM|dd|HH|mm|ss|SSS|Z")
_JODA_STRFTIME = {
    "yyyy": "%Y",
    "YYYY": "%Y",
    "yy": "%y",
    "MM": "%m",
    "dd": "%d",
    "HH": "%H",
    "mm": "%M",
    "ss": "%S",
    "Z": "%z",
}

FieldLookup = Callable[[str], FieldValue]


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO8601 UTC with millisecond precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    rendered = value.astimezone(UTC).isoformat(timespec="milliseconds")
    return rendered.replace("+00:00", "Z")


def format_value(value: FieldValue) -> str:
    """Render a field value the way it appears inside interpolated text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, Mapping):
        return json.dumps(value, separators=(",", ":"), default=json_default)
    if isinstance(value, list):
        return ",".join(format_value(item) for item in value)
    return str(value)


def json_default(value: object) -> str:
    """``json.dumps`` hook rendering datetimes as ISO8601 UTC."""
    if isinstance(value, datetime):
        return format_timestamp(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _format_joda(pattern: str, timestamp: datetime) -> str:
    """Format ``timestamp`` (in UTC) with a Joda-style date pattern."""
    if pattern == "%s":
        return str(int(timestamp.timestamp()))
    moment = timestamp.astimezone(UTC)

    def _token(match: re.Match[str]) -> str:
        token = match.group(0)
        if token == "SSS":
            return f"{moment.microsecond // 1000:03d}"
        return moment.strftime(_JODA_STRFTIME[token])

    return _JODA_TOKEN.sub(_token, pattern)


def interpolate(
    template: str,
    lookup: FieldLookup,
    timestamp: datetime | None = None,
) -> str:
    """Expand ``%{...}`` placeholders in ``template``.

    Parameters
    ----------
    template : str
        Text with ``%{field}``, ``%{[nested][field]}`` or ``%{+FORMAT}``
        placeholders.
    lookup : Callable[[str], FieldValue]
        Resolve a field reference to its value (``None`` when missing).
    timestamp : datetime | None, default=None
        Record timestamp used by ``%{+FORMAT}`` placeholders.

    Returns
    -------
    str
        Expanded text. Placeholders for missing fields and unterminated
        ``%{`` sequences are kept verbatim.

    Raises
    ------
    TemplateExpansionError
        If a placeholder holds a malformed field reference.
    """
    if OPEN not in template:
        return template

    parts: list[str] = []
    position = 0
    while True:
        start = template.find(OPEN, position)
        if start < 0:
            break
        end = template.find(CLOSE, start + len(OPEN))
        if end < 0:
            break
        parts.append(template[position:start])
        expression = template[start + len(OPEN) : end]
        placeholder = template[start : end + 1]
        parts.append(_expand_one(expression, placeholder, lookup, timestamp))
        position = end + 1
    parts.append(template[position:])
    return "".join(parts)


def _expand_one(
    expression: str,
    placeholder: str,
    lookup: FieldLookup,
    timestamp: datetime | None,
) -> str:
    if expression.startswith("+"):
        if timestamp is None:
            return placeholder
        return _format_joda(expression[1:], timestamp)

    try:
        value = lookup(expression)
    except FieldReferenceError as exc:
        raise TemplateExpansionError(
            f"Malformed template expression '{placeholder}': {exc}"
        ) from exc
    if value is None:
        return placeholder
    return format_value(value)
