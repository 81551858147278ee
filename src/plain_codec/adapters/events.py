"""Reference record implementation backed by nested dictionaries."""

from __future__ import annotations

import copy
from datetime import UTC, datetime

from plain_codec.adapters.field_reference import parse_field_reference
from plain_codec.adapters.interpolation import format_timestamp, format_value, interpolate
from plain_codec.errors import FieldReferenceError
from plain_codec.types import FieldMap, FieldValue, MutableFieldMap

TIMESTAMP_FIELD = "@timestamp"


class Event:
    """Mutable record addressed through field references.

    Parameters
    ----------
    data : Mapping[str, FieldValue] | None, default=None
        Initial field values. The mapping is deep-copied.
    """

    def __init__(self, data: FieldMap | None = None) -> None:
        self._data: MutableFieldMap = copy.deepcopy(dict(data or {}))

    def get(self, field: str) -> FieldValue:
        """Return the value at ``field``, or ``None`` when absent."""
        node: FieldValue = self._data
        for key in parse_field_reference(field):
            if not isinstance(node, dict) or key not in node:
                return None
            node = node[key]
        return node

    def set(self, field: str, value: FieldValue) -> None:
        """Store ``value`` at ``field``, creating intermediate mappings.

        Raises
        ------
        FieldReferenceError
            If the reference is malformed or crosses a non-mapping value.
        """
        *parents, leaf = parse_field_reference(field)
        node = self._data
        for key in parents:
            child = node.setdefault(key, {})
            if not isinstance(child, dict):
                raise FieldReferenceError(
                    f"Cannot set '{field}': '{key}' holds a non-mapping value."
                )
            node = child
        node[leaf] = value

    def remove(self, field: str) -> FieldValue:
        """Delete ``field`` and return its previous value (``None`` if absent)."""
        *parents, leaf = parse_field_reference(field)
        node: FieldValue = self._data
        for key in parents:
            if not isinstance(node, dict) or key not in node:
                return None
            node = node[key]
        if not isinstance(node, dict):
            return None
        return node.pop(leaf, None)

    def includes(self, field: str) -> bool:
        """Return whether ``field`` is present (even when set to ``None``)."""
        *parents, leaf = parse_field_reference(field)
        node: FieldValue = self._data
        for key in parents:
            if not isinstance(node, dict) or key not in node:
                return False
            node = node[key]
        return isinstance(node, dict) and leaf in node

    @property
    def timestamp(self) -> datetime | None:
        value = self._data.get(TIMESTAMP_FIELD)
        return value if isinstance(value, datetime) else None

    def to_dict(self) -> MutableFieldMap:
        """Return a deep copy of the underlying data."""
        return copy.deepcopy(self._data)

    def expand_template(self, template: str) -> str:
        """Expand ``%{...}`` placeholders against this event."""
        return interpolate(template, self.get, self.timestamp)

    sprintf = expand_template

    def default_text_rendering(self) -> str:
        """Render ``"<@timestamp> <host> <message>"``.

        Missing ``host``/``message`` render as their literal placeholders;
        the timestamp prefix is dropped when the event has none.
        """
        host = self.get("host")
        message = self.get("message")
        host_text = "%{host}" if host is None else format_value(host)
        message_text = "%{message}" if message is None else format_value(message)
        body = f"{host_text} {message_text}"
        timestamp = self.timestamp
        if timestamp is None:
            return body
        return f"{format_timestamp(timestamp)} {body}"

    def __str__(self) -> str:
        return self.default_text_rendering()

    def __repr__(self) -> str:
        return f"Event({self._data!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self._data == other._data


class EventFactory:
    """Create empty events stamped with the current UTC time."""

    def __init__(self, stamp: bool = True) -> None:
        self.stamp = stamp

    def new_record(self) -> Event:
        event = Event()
        if self.stamp:
            event.set(TIMESTAMP_FIELD, datetime.now(UTC))
        return event
