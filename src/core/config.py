"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking
  into the CLI.
- Lets adapters (connector/session) read timeouts and encoding the same way.

Only environment variables are read; there is no settings file.
"""

from __future__ import annotations

import codecs

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed, validated at the edge (env vars) without polluting the core.
    - A single configuration contract for the CLI and adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="FINGER_D2_",
        extra="ignore",
        case_sensitive=False,
    )

    connect_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Connect timeout (seconds). None blocks until the OS gives up.",
    )
    read_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Per-read timeout (seconds). None waits for the peer indefinitely.",
    )
    encoding: str = Field(
        default="utf-8",
        min_length=1,
        description="Text encoding for the query and the response lines.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Level for diagnostics on stderr (DEBUG, INFO, WARNING, ...).",
    )

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"unknown encoding: {value}") from exc
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()
