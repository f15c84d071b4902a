# This file builds the page envelope returned by every search endpoint.
# The envelope pairs pagination metadata with the rows of the current page.
# Rows are passed through untouched and in query order.

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from src.api.pagination import PaginationSpec, compute_total_pages


def build_pagination(*, pagination: PaginationSpec, records: int) -> dict[str, int]:
    return {
        "current": pagination.page,
        "limit": pagination.limit,
        "records": records,
        "pages": compute_total_pages(records=records, limit=pagination.limit),
    }


def build_page(
    rows: Iterable[Any],
    *,
    pagination: PaginationSpec,
    records: int,
) -> dict[str, Any]:
    """Build the `{pagination, data}` envelope for one page of results."""

    return {
        "pagination": build_pagination(pagination=pagination, records=records),
        "data": list(rows),
    }
