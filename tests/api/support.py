# This file provides shared helpers for API endpoint tests.
# Tests override the database client with a SQLite-backed one and seed rows through the store.
# The helpers build consistent config objects, bearer headers and scoped TestClient contexts.

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime, timedelta
from typing import Any

from fastapi.testclient import TestClient

from src.api.api_config import ApiConfig
from src.api.app import app
from src.api.dependencies import get_config, get_database_client
from src.api.passwords import hash_password
from src.api.roles import RoleSpec
from src.api.store import MarketplaceStore
from src.api.tokens import TokenCodec

TEST_PASSWORD = "correct-horse-battery"
BASE_TIME = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)


def build_test_config(**overrides: Any) -> ApiConfig:
    """Create deterministic API config for tests."""

    values: dict[str, Any] = {
        "api_name": "Test Marketplace API",
        "api_version_path": "/api/v1",
        "host": "0.0.0.0",
        "port": 8000,
        "environment": "test",
        "database_url": "sqlite+pysqlite:///:memory:",
        "jwt_secret_key": "test-secret-key",
        "jwt_issuer": "shopping-mall-test",
        "default_page_size": 10,
        "max_page_size": 50,
        "password_hash_rounds": 4,
        "enable_request_logging": False,
        "allowed_origins": [],
        "app_version": "0.1.0",
    }
    values.update(overrides)
    return ApiConfig(**values)


class FakeDBClient:
    """Simple fake DB dependency for health/readiness endpoint tests."""

    def __init__(self, *, connected: bool = True, existing_tables: set[str] | None = None) -> None:
        self._connected = connected
        self._tables = existing_tables

    def can_connect(self) -> bool:
        return self._connected

    def table_exists(self, table_name: str) -> bool:
        if not self._connected:
            return False
        return self._tables is None or table_name in self._tables

    def log_request(self, **_: Any) -> None:
        return None


class SpyDBClient:
    """Wraps a real client and records every query it is asked to run."""

    def __init__(self, inner: Any) -> None:
        self._inner = inner
        self.calls: list[tuple[str, str]] = []

    def can_connect(self) -> bool:
        return self._inner.can_connect()

    def table_exists(self, table_name: str) -> bool:
        return self._inner.table_exists(table_name)

    def fetch_all(self, query: str, params: Any = None) -> list[dict[str, Any]]:
        self.calls.append(("fetch_all", query))
        return self._inner.fetch_all(query, params)

    def fetch_one(self, query: str, params: Any = None) -> dict[str, Any] | None:
        self.calls.append(("fetch_one", query))
        return self._inner.fetch_one(query, params)

    def fetch_scalar(self, query: str, params: Any = None) -> Any:
        self.calls.append(("fetch_scalar", query))
        return self._inner.fetch_scalar(query, params)

    def execute(self, query: str, params: Any = None) -> int:
        self.calls.append(("execute", query))
        return self._inner.execute(query, params)

    @property
    def writes(self) -> list[str]:
        return [query for kind, query in self.calls if kind == "execute"]


def seed_account(
    store: MarketplaceStore,
    spec: RoleSpec,
    *,
    status: str = "active",
    email: str | None = None,
    **values: Any,
) -> dict[str, Any]:
    """Insert one account row for a role and return it."""

    if spec.entity == "guestusers":
        row = {
            "ip_address": "10.0.0.1",
            "access_url": "https://mall.example/home",
            "session_start_at": BASE_TIME,
        }
    else:
        row = {
            "email": email or f"{spec.entity}-{uuid.uuid4().hex[:8]}@mall.example",
            "password_hash": hash_password(TEST_PASSWORD, rounds=4),
            "nickname": "tester",
            "full_name": "Test User",
            "status": status,
        }
        if spec.entity == "sellerusers":
            row["business_registration_number"] = f"BRN-{uuid.uuid4().hex[:10]}"
    row.update(values)
    return store.insert(spec.entity, row)


def seed(store: MarketplaceStore, entity: str, **values: Any) -> dict[str, Any]:
    return store.insert(entity, values)


def at(minutes: int) -> datetime:
    return BASE_TIME + timedelta(minutes=minutes)


def bearer(config: ApiConfig, subject_id: str, role_type: str) -> dict[str, str]:
    tokens = TokenCodec(config=config).issue(subject_id=subject_id, role_type=role_type)
    return {"Authorization": f"Bearer {tokens.access}"}


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    db_client: Any | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    resolved_config = config or build_test_config()

    app.dependency_overrides[get_config] = lambda: resolved_config
    if db_client is not None:
        app.dependency_overrides[get_database_client] = lambda: db_client

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
