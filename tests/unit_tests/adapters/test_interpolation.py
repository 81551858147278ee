"""Unit tests for ``%{...}`` template interpolation."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from plain_codec.adapters.events import Event
from plain_codec.adapters.interpolation import (
    format_timestamp,
    format_value,
    interpolate,
    json_default,
)
from plain_codec.errors import TemplateExpansionError

STAMP = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=UTC)


def _event() -> Event:
    return Event(
        {
            "@timestamp": STAMP,
            "hello": "world",
            "something": {"fancy": 123},
            "tags": ["a", "b"],
            "ok": True,
        }
    )


@pytest.mark.parametrize(
    ("template", "expected"),
    [
        ("%{[hello]} %{[something][fancy]}", "world 123"),
        ("%{hello}!", "world!"),
        ("no placeholders", "no placeholders"),
        ("%{missing} stays", "%{missing} stays"),
        ("%{[something]}", '{"fancy":123}'),
        ("%{tags}", "a,b"),
        ("%{ok}", "true"),
        ("%{@timestamp}", "2024-01-02T03:04:05.678Z"),
        ("%{+yyyy.MM.dd}", "2024.01.02"),
        ("%{+HH:mm:ss.SSS}", "03:04:05.678"),
        ("%{+%s}", "1704164645"),
        ("open %{hello", "open %{hello"),
        ("%{hello}%{hello}", "worldworld"),
    ],
)
def test_expand_template(template: str, expected: str) -> None:
    """Substitute field values and keep unresolvable text verbatim."""
    assert _event().expand_template(template) == expected


@pytest.mark.parametrize("template", ["%{}", "%{[hello}", "%{[a]b}"])
def test_malformed_expression_raises(template: str) -> None:
    """Raise TemplateExpansionError for malformed field references."""
    with pytest.raises(TemplateExpansionError, match="Malformed template expression"):
        _event().expand_template(template)


def test_time_placeholder_without_timestamp_is_kept() -> None:
    """Keep ``%{+FORMAT}`` verbatim when the record has no timestamp."""
    assert interpolate("%{+yyyy}", lambda _ref: None, None) == "%{+yyyy}"


def test_format_timestamp_treats_naive_as_utc() -> None:
    """Assume UTC for naive datetimes."""
    assert format_timestamp(datetime(2024, 5, 6, 7, 8, 9)) == "2024-05-06T07:08:09.000Z"


def test_format_value_nested_mapping_with_datetime() -> None:
    """Serialize nested mappings as compact JSON."""
    assert format_value({"at": STAMP, "n": [1, 2]}) == (
        '{"at":"2024-01-02T03:04:05.678Z","n":[1,2]}'
    )


def test_json_default_renders_datetimes_and_rejects_others() -> None:
    """Serialize datetimes as ISO8601 UTC and refuse unknown objects."""
    assert json_default(datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)) == "2024-01-02T03:04:05.000Z"
    with pytest.raises(TypeError, match="set"):
        json_default({1})
