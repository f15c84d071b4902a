# This file is the storage-access interface shared by authorizers and services.
# Every query against a marketplace table goes through it, so the soft-delete filter
# (`deleted_at IS NULL`) is applied in one place for every soft-deletable entity.
# Callers that need deleted rows, such as delete handlers, opt out with `include_deleted=True`.

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient
from src.api.error_handlers import NotFoundError
from src.api.filters import WhereBuilder
from src.api.lifecycle import utc_now
from src.api.pagination import PaginationSpec, SortSpec
from src.common.ddl import MARKETPLACE_TABLES

logger = logging.getLogger(__name__)


def _column_names(entity: str) -> set[str]:
    return {definition.split()[0] for definition in MARKETPLACE_TABLES[entity]}


SOFT_DELETE_ENTITIES: frozenset[str] = frozenset(
    entity for entity in MARKETPLACE_TABLES if "deleted_at" in _column_names(entity)
)


class MarketplaceStore:
    """Point lookups, paged searches and writes over marketplace tables."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db

    def _scoped_where(
        self, entity: str, where: WhereBuilder | None, include_deleted: bool
    ) -> tuple[str, dict[str, Any]]:
        builder = where if where is not None else WhereBuilder()
        where_sql, params = builder.build()
        if entity in SOFT_DELETE_ENTITIES and not include_deleted:
            where_sql = f"({where_sql}) AND deleted_at IS NULL"
        return where_sql, params

    def _check_columns(self, entity: str, columns: Mapping[str, Any] | Sequence[str]) -> None:
        known = _column_names(entity)
        unknown = [column for column in columns if column not in known]
        if unknown:
            raise ValueError(f"Unknown columns for {entity}: {', '.join(sorted(unknown))}")

    def find_first(
        self,
        entity: str,
        where: WhereBuilder | None = None,
        *,
        include_deleted: bool = False,
        order_by: SortSpec | None = None,
    ) -> dict[str, Any] | None:
        table = self.config.table(entity)
        where_sql, params = self._scoped_where(entity, where, include_deleted)
        order_sql = ""
        if order_by is not None:
            self._check_columns(entity, [order_by.field])
            order_sql = f" ORDER BY {order_by.field} {order_by.order.upper()}"
        query = f"SELECT * FROM {table} WHERE {where_sql}{order_sql} LIMIT 1"
        return self.db.fetch_one(query, params)

    def find_many(
        self,
        entity: str,
        where: WhereBuilder | None = None,
        *,
        include_deleted: bool = False,
    ) -> list[dict[str, Any]]:
        table = self.config.table(entity)
        where_sql, params = self._scoped_where(entity, where, include_deleted)
        return self.db.fetch_all(f"SELECT * FROM {table} WHERE {where_sql} ORDER BY id", params)

    def find_by_id(
        self, entity: str, record_id: str, *, include_deleted: bool = False
    ) -> dict[str, Any] | None:
        return self.find_first(
            entity, WhereBuilder().equals("id", record_id), include_deleted=include_deleted
        )

    def find_unique_or_throw(
        self, entity: str, record_id: str, *, include_deleted: bool = False
    ) -> dict[str, Any]:
        row = self.find_by_id(entity, record_id, include_deleted=include_deleted)
        if row is None:
            raise NotFoundError(
                f"No {entity} record found for id {record_id}.",
                details={"entity": entity, "id": record_id},
            )
        return row

    def count(
        self, entity: str, where: WhereBuilder | None = None, *, include_deleted: bool = False
    ) -> int:
        table = self.config.table(entity)
        where_sql, params = self._scoped_where(entity, where, include_deleted)
        query = f"SELECT COUNT(*) AS total_count FROM {table} WHERE {where_sql}"
        return int(self.db.fetch_scalar(query, params))

    def search(
        self,
        entity: str,
        where: WhereBuilder | None,
        *,
        pagination: PaginationSpec,
        sort: SortSpec,
        include_deleted: bool = False,
    ) -> tuple[list[dict[str, Any]], int]:
        """Return one page of rows plus the total number of matching rows.

        Rows are ordered by the sort field with `id` as a tiebreaker so pages are stable.
        """

        self._check_columns(entity, [sort.field])
        table = self.config.table(entity)
        where_sql, params = self._scoped_where(entity, where, include_deleted)

        total_count = self.count(entity, where, include_deleted=include_deleted)

        order_sql = f"{sort.field} {sort.order.upper()}"
        if sort.field != "id":
            order_sql = f"{order_sql}, id ASC"
        data_query = f"""
        SELECT *
        FROM {table}
        WHERE {where_sql}
        ORDER BY {order_sql}
        LIMIT :limit OFFSET :offset
        """
        rows = self.db.fetch_all(
            data_query,
            {**params, "limit": pagination.limit, "offset": pagination.offset},
        )
        return rows, total_count

    def insert(self, entity: str, values: Mapping[str, Any]) -> dict[str, Any]:
        """Insert a row, filling `id` and timestamps when the table has them."""

        row = dict(values)
        columns = _column_names(entity)
        row.setdefault("id", str(uuid.uuid4()))
        now = utc_now()
        if "created_at" in columns:
            row.setdefault("created_at", now)
        if "updated_at" in columns:
            row.setdefault("updated_at", now)
        if "deleted_at" in columns:
            row.setdefault("deleted_at", None)
        self._check_columns(entity, row)

        table = self.config.table(entity)
        column_sql = ", ".join(row)
        value_sql = ", ".join(f":{column}" for column in row)
        self.db.execute(f"INSERT INTO {table} ({column_sql}) VALUES ({value_sql})", row)
        return row

    def update(self, entity: str, record_id: str, values: Mapping[str, Any]) -> dict[str, Any]:
        """Point update by id; returns the stored row after the write."""

        changes = dict(values)
        changes.pop("id", None)
        if "updated_at" in _column_names(entity):
            changes.setdefault("updated_at", utc_now())
        self._check_columns(entity, changes)
        if not changes:
            return self.find_unique_or_throw(entity, record_id, include_deleted=True)

        table = self.config.table(entity)
        set_sql = ", ".join(f"{column} = :{column}" for column in changes)
        affected = self.db.execute(
            f"UPDATE {table} SET {set_sql} WHERE id = :record_id",
            {**changes, "record_id": record_id},
        )
        if affected == 0:
            raise NotFoundError(
                f"No {entity} record found for id {record_id}.",
                details={"entity": entity, "id": record_id},
            )
        return self.find_unique_or_throw(entity, record_id, include_deleted=True)

    def soft_delete(self, entity: str, record_id: str, *, at: datetime) -> None:
        """Mark a row deleted by writing `deleted_at`; the row itself stays."""

        if entity not in SOFT_DELETE_ENTITIES:
            raise ValueError(f"{entity} records cannot be soft-deleted.")
        table = self.config.table(entity)
        self.db.execute(
            f"UPDATE {table} SET deleted_at = :deleted_at WHERE id = :record_id",
            {"deleted_at": at, "record_id": record_id},
        )
        logger.info("Soft-deleted %s record %s at %s", entity, record_id, at.isoformat())
