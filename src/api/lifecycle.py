# This file models the soft-delete lifecycle of marketplace records.
# A stored row is either Active or Deleted(at); the state is read from the `deleted_at` column.
# Soft deletion writes a timestamp instead of removing the row.

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Active:
    pass


@dataclass(frozen=True)
class Deleted:
    at: datetime


Lifecycle = Active | Deleted


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _as_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def lifecycle_of(row: Mapping[str, Any]) -> Lifecycle:
    """Derive the lifecycle state of a stored row."""

    deleted_at = row.get("deleted_at")
    if deleted_at is None:
        return Active()
    return Deleted(at=_as_datetime(deleted_at))
