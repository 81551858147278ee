"""Field reference parsing.

A field reference addresses a value inside a nested record. Two forms are
accepted:

- a bare top-level name, e.g. ``message`` or ``@timestamp``;
- one or more bracketed segments, e.g. ``[event][original]``.
"""

from __future__ import annotations

import re
from functools import lru_cache

from plain_codec.errors import FieldReferenceError

_BRACKETED = re.compile(r"(?:\[[^\[\]]+\])+")
_SEGMENT = re.compile(r"\[([^\[\]]+)\]")


@lru_cache(maxsize=1024)
def parse_field_reference(reference: str) -> tuple[str, ...]:
    """Split a field reference into its path segments.

    Parameters
    ----------
    reference : str
        Field reference in bare or bracketed form.

    Returns
    -------
    tuple[str, ...]
        Path segments from the outermost key inward.

    Raises
    ------
    FieldReferenceError
        If the reference is empty or its brackets are malformed.
    """
    if not reference:
        raise FieldReferenceError("Field reference cannot be empty.")
    if "[" not in reference and "]" not in reference:
        return (reference,)
    if not _BRACKETED.fullmatch(reference):
        raise FieldReferenceError(f"Invalid field reference: '{reference}'.")
    return tuple(_SEGMENT.findall(reference))
