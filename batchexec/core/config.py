from __future__ import annotations

import os
import sys
from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def program_name() -> str:
    """Basename of the running program (argv[0]), used as the default prefix."""
    argv0 = sys.argv[0] if sys.argv and sys.argv[0] else "python"
    return os.path.basename(argv0) or "python"


class BatchSettings(BaseSettings):
    """Process-wide defaults for batch executive objects.

    Loaded from environment variables (and an optional ``.env`` file), so a
    batch job can be made quieter or more tolerant without code changes.
    """

    echo: bool = Field(
        default=False,
        validation_alias=AliasChoices("BATCH_ECHO", "BATCH__ECHO"),
    )
    fatal: bool = Field(
        default=True,
        validation_alias=AliasChoices("BATCH_FATAL", "BATCH__FATAL"),
    )
    prefix: str = Field(
        default_factory=program_name,
        validate_default=True,
        validation_alias=AliasChoices("BATCH_PREFIX", "BATCH__PREFIX"),
    )
    retry: int = Field(
        default=1,
        ge=1,
        validation_alias=AliasChoices("BATCH_RETRY", "BATCH__RETRY"),
    )
    timeout: float | None = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("BATCH_TIMEOUT", "BATCH__TIMEOUT"),
    )
    log_level: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL"))

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("prefix", mode="before")
    @classmethod
    def _normalize_prefix(cls, value):
        if value is None:
            return program_name()
        prefix = str(value).strip()
        return prefix or program_name()

    @field_validator("timeout", mode="before")
    @classmethod
    def _parse_timeout(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


@lru_cache
def get_settings() -> BatchSettings:
    return BatchSettings()
