"""
Configuration
=============
Settings for scim-schema, loaded from ``SCIM_SCHEMA_*`` environment
variables or a ``.env`` file.

Usage::

    from scim_schema.config import get_settings

    if depth > get_settings().max_nesting_depth:
        ...
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScimSchemaSettings(BaseSettings):
    """Process-wide settings. Read once; treat as immutable afterwards."""
    model_config = SettingsConfigDict(
        env_prefix="SCIM_SCHEMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    log_level: str = Field("WARNING", description="Log level used by the CLI")
    max_nesting_depth: int = Field(
        4,
        ge=1,
        description="Deepest attribute tree a Schema may declare (top-level attributes are depth 1)",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {v!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> ScimSchemaSettings:
    return ScimSchemaSettings()


def configure_logging(level: str | None = None) -> None:
    """Install a rich console handler on the root logger (CLI only)."""
    from rich.logging import RichHandler

    logging.basicConfig(
        level=level or get_settings().log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
