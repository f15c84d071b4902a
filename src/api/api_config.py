# This file holds the API runtime configuration model and its environment loader.
# Every setting has one environment variable, listed in `ENV_FIELDS` with its parser and default.
# Table names are built from a prefix plus a known marketplace entity and must pass an allowlist
# before any SQL text is rendered with them.

from __future__ import annotations

import os
import re
from collections.abc import Callable, Mapping
from functools import lru_cache
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.api.passwords import BCRYPT_MAX_ROUNDS, BCRYPT_MIN_ROUNDS, BCRYPT_ROUNDS
from src.common.ddl import MARKETPLACE_TABLES

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "Shopping Mall Marketplace API"
    api_version_path: str = "/api/v1"
    host: str = "0.0.0.0"
    port: int = 8000
    environment: str = "local"
    log_level: str = "INFO"
    database_url: str
    jwt_secret_key: str
    jwt_issuer: str = "shopping-mall"
    jwt_algorithm: str = "HS256"
    access_token_ttl_seconds: int = 3600
    refresh_token_ttl_seconds: int = 604800
    password_hash_rounds: int = Field(default=BCRYPT_ROUNDS, ge=BCRYPT_MIN_ROUNDS, le=BCRYPT_MAX_ROUNDS)
    default_page_size: int = 10
    max_page_size: int = 100
    enable_request_logging: bool = False
    allowed_origins: list[str] = Field(default_factory=list)
    table_prefix: str = "shopping_mall_"
    request_log_table_name: str = "api_request_log"
    app_version: str = "0.1.0"
    allowed_table_names: set[str] = Field(default_factory=set)

    @field_validator("api_version_path")
    @classmethod
    def validate_api_version_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("api_version_path must start with '/'.")
        parts = [part for part in value.split("/") if part]
        if len(parts) < 2 or parts[-1].startswith("v") is False:
            raise ValueError("api_version_path must look like '/api/v1'.")
        return value.rstrip("/")

    @field_validator("table_prefix", "request_log_table_name")
    @classmethod
    def validate_identifier(cls, value: str) -> str:
        if not _IDENTIFIER_RE.match(value):
            raise ValueError(f"Unsafe SQL identifier: {value!r}")
        return value

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_secret(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("jwt_secret_key must not be empty.")
        return value

    @field_validator(
        "default_page_size",
        "max_page_size",
        "access_token_ttl_seconds",
        "refresh_token_ttl_seconds",
    )
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Value must be greater than 0.")
        return value

    def api_version_label(self) -> str:
        return self.api_version_path.rstrip("/").split("/")[-1]

    def table(self, entity: str) -> str:
        """Resolve an entity name such as `sales` to its validated table name."""

        if entity not in MARKETPLACE_TABLES:
            raise ValueError(f"Unknown marketplace entity: {entity!r}")
        return self.validate_table_name(f"{self.table_prefix}{entity}")

    def validate_table_name(self, table_name: str) -> str:
        if not _IDENTIFIER_RE.match(table_name):
            raise ValueError(f"Unsafe SQL identifier: {table_name!r}")
        allowed = self.allowed_table_names or build_allowed_table_names(
            table_prefix=self.table_prefix,
            request_log_table_name=self.request_log_table_name,
        )
        if table_name not in allowed:
            raise ValueError(f"Table name is not in allowlist: {table_name!r}")
        return table_name


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be boolean-like, got {raw!r}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _parse_list(_: str, raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _parse_str(_: str, raw: str) -> str:
    return raw


# field name -> (environment variable, parser, default)
ENV_FIELDS: dict[str, tuple[str, Callable[[str, str], Any], Any]] = {
    "api_name": ("API_NAME", _parse_str, "Shopping Mall Marketplace API"),
    "api_version_path": ("API_VERSION_PATH", _parse_str, "/api/v1"),
    "host": ("API_HOST", _parse_str, "0.0.0.0"),
    "port": ("API_PORT", _parse_int, 8000),
    "environment": ("ENV", _parse_str, "local"),
    "log_level": ("LOG_LEVEL", _parse_str, "INFO"),
    "database_url": ("DATABASE_URL", _parse_str, ""),
    "jwt_secret_key": ("JWT_SECRET_KEY", _parse_str, ""),
    "jwt_issuer": ("API_JWT_ISSUER", _parse_str, "shopping-mall"),
    "jwt_algorithm": ("API_JWT_ALGORITHM", _parse_str, "HS256"),
    "access_token_ttl_seconds": ("API_ACCESS_TOKEN_TTL_SECONDS", _parse_int, 3600),
    "refresh_token_ttl_seconds": ("API_REFRESH_TOKEN_TTL_SECONDS", _parse_int, 604800),
    "password_hash_rounds": ("API_PASSWORD_HASH_ROUNDS", _parse_int, BCRYPT_ROUNDS),
    "default_page_size": ("API_DEFAULT_PAGE_SIZE", _parse_int, 10),
    "max_page_size": ("API_MAX_PAGE_SIZE", _parse_int, 100),
    "enable_request_logging": ("API_ENABLE_REQUEST_LOGGING", _parse_bool, False),
    "allowed_origins": ("API_ALLOWED_ORIGINS", _parse_list, []),
    "table_prefix": ("API_TABLE_PREFIX", _parse_str, "shopping_mall_"),
    "request_log_table_name": ("API_REQUEST_LOG_TABLE_NAME", _parse_str, "api_request_log"),
    "app_version": ("APP_VERSION", _parse_str, "0.1.0"),
}
REQUIRED_FIELDS = ("database_url", "jwt_secret_key")


def read_env_fields(environ: Mapping[str, str]) -> dict[str, Any]:
    """Parse every known field from `environ`; blank values fall back to the default."""

    values: dict[str, Any] = {}
    for field_name, (env_name, parse, default) in ENV_FIELDS.items():
        raw = environ.get(env_name)
        if raw is None or raw.strip() == "":
            values[field_name] = list(default) if isinstance(default, list) else default
        else:
            values[field_name] = parse(env_name, raw)
    return values


def build_allowed_table_names(*, table_prefix: str, request_log_table_name: str) -> set[str]:
    configured_names = {f"{table_prefix}{entity}" for entity in MARKETPLACE_TABLES}
    configured_names.add(request_log_table_name)
    unsafe = sorted(name for name in configured_names if not _IDENTIFIER_RE.match(name))
    if unsafe:
        raise ValueError(f"Unsafe SQL identifier in allowlist: {unsafe[0]!r}")
    return configured_names


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and process environment."""

    if load_env:
        load_dotenv()

    values = read_env_fields(os.environ)
    for field_name in REQUIRED_FIELDS:
        if not values[field_name]:
            env_name = ENV_FIELDS[field_name][0]
            raise RuntimeError(f"{env_name} is required for API startup.")

    values["allowed_table_names"] = build_allowed_table_names(
        table_prefix=values["table_prefix"],
        request_log_table_name=values["request_log_table_name"],
    )
    return ApiConfig.model_validate(values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
