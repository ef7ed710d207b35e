"""Centralised configuration using pydantic-settings.

All environment variables are read through the Settings class.
Consumers call ``get_settings()`` to obtain a cached, validated instance.
Tests construct ``Settings(_env_file=None, ...)`` directly for isolation.

The library functions never read settings themselves: entry points (the
CLI) pass the configured values in as keyword arguments.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, PositiveFloat, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from texprep.dimensions import EM_PER_INCH, PX_PER_INCH
from texprep.macros import MAX_BUFFER

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class UnitConfig(BaseModel):
    """Physical-unit conversion constants."""

    em_per_inch: PositiveFloat = EM_PER_INCH
    px_per_inch: PositiveFloat = PX_PER_INCH


class MacroConfig(BaseModel):
    """Macro expansion limits."""

    max_buffer: PositiveInt = MAX_BUFFER


class LoggingConfig(BaseModel):
    """Logging output for the command-line tool."""

    level: str = "INFO"
    dir: Path | None = None

    @field_validator("level")
    @classmethod
    def known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            msg = f"LOG__LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {value!r}"
            raise ValueError(msg)
        return level


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Settings with automatic .env loading and type validation.

    Environment variables use double-underscore delimiter for nesting:
    ``UNITS__EM_PER_INCH``, ``MACROS__MAX_BUFFER``, ``LOG__LEVEL``, etc.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        # Ignore unrelated env vars from shared .env files.
        extra="ignore",
    )

    units: UnitConfig = UnitConfig()
    macros: MacroConfig = MacroConfig()
    log: LoggingConfig = LoggingConfig()


# ---------------------------------------------------------------------------
# Singleton access
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    settings = Settings()

    env_file = settings.model_config.get("env_file")
    if env_file is not None and Path(str(env_file)).is_file():
        logger.info("Settings loaded .env from: %s", env_file)
    else:
        logger.info("Settings: no .env file found, using env vars and defaults")

    return settings
