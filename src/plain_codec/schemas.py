"""Pydantic schemas for runtime validation of codec configuration."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from plain_codec.application.options import CodecOptions, EcsCompatibility
from plain_codec.charset import DEFAULT_CHARSET, resolve_charset
from plain_codec.errors import ConfigurationError


class PlainCodecConfig(BaseModel):
    """Validated settings for the plain codec."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    charset: str = DEFAULT_CHARSET
    format: str | None = None
    ecs_compatibility: EcsCompatibility = EcsCompatibility.DISABLED

    @field_validator("charset")
    @classmethod
    def _validate_charset(cls, value: str) -> str:
        try:
            resolve_charset(value)
        except ConfigurationError as exc:
            raise ValueError(str(exc)) from exc
        return value.strip()

    @field_validator("ecs_compatibility", mode="before")
    @classmethod
    def _normalize_ecs(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def to_options(self) -> CodecOptions:
        """Convert validated settings into runtime options."""
        return CodecOptions(
            charset=self.charset,
            format=self.format,
            ecs_compatibility=self.ecs_compatibility,
        )


def parse_codec_config(settings: Mapping[str, object] | None = None) -> CodecOptions:
    """Validate raw codec settings.

    Parameters
    ----------
    settings : Mapping[str, object] | None, default=None
        Raw ``charset``/``format``/``ecs_compatibility`` values.

    Returns
    -------
    CodecOptions
        Resolved options.

    Raises
    ------
    ConfigurationError
        If any setting is unknown or invalid.
    """
    try:
        config = PlainCodecConfig.model_validate(dict(settings or {}))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid plain codec configuration: {exc}") from exc
    return config.to_options()
