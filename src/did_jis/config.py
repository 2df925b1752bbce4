"""Environment configuration for did-jis.

Settings are read from ``DID_JIS_``-prefixed environment variables:

``DID_JIS_SECRET_KEY``
    64-character hex secret seed. When unset, engines built from settings
    generate a fresh keypair.
``DID_JIS_LOG_LEVEL``
    ``DEBUG``, ``INFO``, ``WARNING`` or ``ERROR``. Defaults to ``WARNING``.
"""
from __future__ import annotations

from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class EngineSettings(BaseSettings):
    """Configuration for engines created through :meth:`DidEngine.from_settings`."""

    model_config = SettingsConfigDict(env_prefix="DID_JIS_", extra="ignore")

    secret_key: SecretStr | None = None
    log_level: LogLevel = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        """Accept log levels in any case."""
        return value.upper() if isinstance(value, str) else value


def get_settings() -> EngineSettings:
    """Load settings from the current environment."""
    return EngineSettings()


__all__ = ["EngineSettings", "LogLevel", "get_settings"]
