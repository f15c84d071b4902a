# This file composes WHERE clauses for marketplace search queries.
# Services add optional filters one by one and get back SQL text plus a bound-parameter map.
# Filters whose value is None are skipped, so request bodies with unset fields need no branching.
# Column names must be plain identifiers; values never reach the SQL text.

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Any

_COLUMN_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def _like_pattern(value: str) -> str:
    escaped = value.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class WhereBuilder:
    """Accumulates parameterized predicates joined with AND."""

    def __init__(self) -> None:
        self._clauses: list[str] = []
        self._params: dict[str, Any] = {}

    def __bool__(self) -> bool:
        return bool(self._clauses)

    def _bind(self, value: Any) -> str:
        name = f"w{len(self._params)}"
        self._params[name] = value
        return f":{name}"

    @staticmethod
    def _column(column: str) -> str:
        if not _COLUMN_RE.match(column):
            raise ValueError(f"Unsafe column name: {column!r}")
        return column

    def equals(self, column: str, value: Any) -> WhereBuilder:
        if value is not None:
            self._clauses.append(f"{self._column(column)} = {self._bind(value)}")
        return self

    def contains(self, column: str, value: str | None) -> WhereBuilder:
        """Case-insensitive substring match."""

        if value:
            placeholder = self._bind(_like_pattern(value))
            self._clauses.append(f"LOWER({self._column(column)}) LIKE {placeholder} ESCAPE '\\'")
        return self

    def contains_any(self, columns: Sequence[str], value: str | None) -> WhereBuilder:
        """Free-text search across several columns."""

        if value:
            placeholder = self._bind(_like_pattern(value))
            alternatives = " OR ".join(
                f"LOWER({self._column(column)}) LIKE {placeholder} ESCAPE '\\'" for column in columns
            )
            self._clauses.append(f"({alternatives})")
        return self

    def between(self, column: str, *, gte: Any = None, lte: Any = None) -> WhereBuilder:
        if gte is not None:
            self._clauses.append(f"{self._column(column)} >= {self._bind(gte)}")
        if lte is not None:
            self._clauses.append(f"{self._column(column)} <= {self._bind(lte)}")
        return self

    def in_(self, column: str, values: Iterable[Any] | None) -> WhereBuilder:
        if values is None:
            return self
        items = list(values)
        if not items:
            self._clauses.append("1 = 0")
            return self
        placeholders = ", ".join(self._bind(item) for item in items)
        self._clauses.append(f"{self._column(column)} IN ({placeholders})")
        return self

    def is_null(self, column: str) -> WhereBuilder:
        self._clauses.append(f"{self._column(column)} IS NULL")
        return self

    def build(self) -> tuple[str, dict[str, Any]]:
        """Return `(sql, params)`; an empty builder yields a tautology."""

        if not self._clauses:
            return "1 = 1", {}
        return " AND ".join(self._clauses), dict(self._params)
