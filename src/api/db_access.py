# This file is the only place that talks to the database driver.
# Marketplace queries arrive as SQL text with named parameters; reads come back as plain dicts
# and writes report how many rows they touched, so callers can tell a missing record apart.
# The request log insert does nothing when its table has not been created.

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import CursorResult, Engine
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

_SAFE_NAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

Params = Mapping[str, Any] | None


def safe_identifier(name: str) -> str:
    if not _SAFE_NAME_RE.match(name):
        raise ValueError(f"Unsafe SQL identifier: {name!r}")
    return name


class DatabaseClient:
    """SQLAlchemy Core access to the marketplace tables."""

    def __init__(self, *, database_url: str) -> None:
        self._engine: Engine = create_engine(database_url, pool_pre_ping=True)
        self._log_tables: dict[str, bool] = {}

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def _read(self, query: str, params: Params) -> Iterator[CursorResult[Any]]:
        with self._engine.connect() as connection:
            yield connection.execute(text(query), dict(params or {}))

    def can_connect(self) -> bool:
        try:
            with self._read("SELECT 1", None) as result:
                result.scalar_one()
        except SQLAlchemyError as exc:
            logger.warning("Database connectivity check failed: %s", exc)
            return False
        return True

    def table_exists(self, table_name: str) -> bool:
        return inspect(self._engine).has_table(safe_identifier(table_name))

    def fetch_all(self, query: str, params: Params = None) -> list[dict[str, Any]]:
        with self._read(query, params) as result:
            return [dict(row) for row in result.mappings()]

    def fetch_one(self, query: str, params: Params = None) -> dict[str, Any] | None:
        with self._read(query, params) as result:
            row = result.mappings().first()
        return None if row is None else dict(row)

    def fetch_scalar(self, query: str, params: Params = None) -> Any:
        with self._read(query, params) as result:
            return result.scalar_one()

    def execute(self, query: str, params: Params = None) -> int:
        """Run one write statement in its own transaction; returns the affected row count."""

        with self._engine.begin() as connection:
            result = connection.execute(text(query), dict(params or {}))
            return max(result.rowcount or 0, 0)

    def log_request(
        self,
        *,
        table_name: str,
        request_id: str,
        path: str,
        method: str,
        status_code: int,
        duration_ms: float,
    ) -> None:
        table = safe_identifier(table_name)
        if table not in self._log_tables:
            self._log_tables[table] = self.table_exists(table)
        if not self._log_tables[table]:
            return

        self.execute(
            f"INSERT INTO {table} (request_id, path, method, status_code, duration_ms, created_at) "
            "VALUES (:request_id, :path, :method, :status_code, :duration_ms, CURRENT_TIMESTAMP)",
            {
                "request_id": request_id,
                "path": path,
                "method": method,
                "status_code": status_code,
                "duration_ms": duration_ms,
            },
        )

    def dispose(self) -> None:
        self._engine.dispose()
