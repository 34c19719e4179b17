"""Pydantic model for cache configuration."""

from __future__ import annotations

import codecs
from typing import Any

from pydantic import BaseModel, Field, field_validator

from fscache.config.defaults import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_ENCODING,
    DEFAULT_LOG_LEVEL,
    DEFAULT_WATCH,
)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class CacheConfig(BaseModel):
    encoding: str = DEFAULT_ENCODING
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)
    watch: bool = DEFAULT_WATCH
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("encoding")
    @classmethod
    def _known_codec(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {value}") from e
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_mapping(cls, raw: dict[str, Any]) -> CacheConfig:
        """Build from a merged config dict, ignoring keys this model doesn't know."""
        return cls(**{k: v for k, v in raw.items() if k in cls.model_fields})
