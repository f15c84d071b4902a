"""
Process settings for the marketplace service.
Values come from `.env` and the process environment, are checked for presence as a group,
then validated by a pydantic model so a bad port or log level fails at startup.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from functools import lru_cache
from typing import Final

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# Grouped by concern so the startup error points at what is misconfigured.
REQUIRED_ENV_GROUPS: Final[dict[str, tuple[str, ...]]] = {
    "service": ("PROJECT_NAME", "ENV", "LOG_LEVEL"),
    "storage": ("DATABASE_URL",),
    "auth": ("JWT_SECRET_KEY",),
    "http": ("API_HOST", "API_PORT"),
}
REQUIRED_ENV_VARS: Final[tuple[str, ...]] = tuple(
    key for keys in REQUIRED_ENV_GROUPS.values() for key in keys
)


class Settings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    PROJECT_NAME: str
    ENV: str
    LOG_LEVEL: str
    DATABASE_URL: str
    JWT_SECRET_KEY: str
    API_HOST: str
    API_PORT: int = Field(gt=0, lt=65536)

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level


def missing_env_vars(environ: Mapping[str, str]) -> list[str]:
    return sorted(key for key in REQUIRED_ENV_VARS if not environ.get(key))


def load_settings(
    *, load_env: bool = True, environ: Mapping[str, str] | None = None
) -> Settings:
    """Read settings from `environ` (the process environment by default)."""

    if load_env:
        load_dotenv()
    values = dict(os.environ if environ is None else environ)

    missing = missing_env_vars(values)
    if missing:
        raise RuntimeError(
            f"Missing required environment variables: {', '.join(missing)}. "
            "Set them in `.env` or the process environment."
        )

    try:
        return Settings.model_validate(values)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
