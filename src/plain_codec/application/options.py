"""Typed option objects shared across codec components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ORIGINAL_FIELD = "[event][original]"


class EcsCompatibility(str, Enum):
    """ECS compatibility mode selected by the host configuration."""

    DISABLED = "disabled"
    V1 = "v1"
    V8 = "v8"

    def resolved(self) -> EcsCompatibility:
        """Collapse alias modes onto the mode they behave like.

        ``v8`` is an alias of ``v1`` for this codec.
        """
        if self is EcsCompatibility.V8:
            return EcsCompatibility.V1
        return self

    @property
    def original_field(self) -> str | None:
        """Field that receives a copy of the decoded message, if any."""
        if self.resolved() is EcsCompatibility.DISABLED:
            return None
        return ORIGINAL_FIELD


@dataclass(frozen=True)
class CodecOptions:
    """Resolved plain codec configuration."""

    charset: str = "UTF-8"
    format: str | None = None
    ecs_compatibility: EcsCompatibility = EcsCompatibility.DISABLED

    @property
    def original_field(self) -> str | None:
        """Resolved original-preserving field name, or ``None``."""
        return self.ecs_compatibility.original_field
