"""Shared type aliases for codec modules."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Literal, TypeAlias

BytesLike: TypeAlias = bytes | bytearray | memoryview
RawInput: TypeAlias = BytesLike | str

EcsMode: TypeAlias = Literal["disabled", "v1", "v8"]

FieldScalar: TypeAlias = str | int | float | bool | None | datetime
FieldValue: TypeAlias = (
    FieldScalar
    | list["FieldValue"]
    | dict[str, "FieldValue"]
)
FieldMap: TypeAlias = Mapping[str, FieldValue]
MutableFieldMap: TypeAlias = dict[str, FieldValue]
