# This file turns the paging fields of a search body into an offset window and an ORDER BY choice.
# Pages are 1-indexed and the page size travels as `limit`. Sort fields are checked against
# a per-endpoint allowlist, and any bad value becomes a 400 INVALID_QUERY_PARAM response.

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from src.api.error_handlers import APIError

SORT_ORDERS = frozenset({"asc", "desc"})
# Largest OFFSET a signed 64-bit SQL integer holds.
MAX_OFFSET = 2**63 - 1


class PageRequestLike(Protocol):
    page: int | None
    limit: int | None
    sort: str | None


@dataclass(frozen=True)
class SortSpec:
    field: str
    order: str

    @property
    def as_text(self) -> str:
        return f"{self.field}:{self.order}"


@dataclass(frozen=True)
class PaginationSpec:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def normalize_pagination(
    *,
    page: int | None,
    limit: int | None,
    default_page_size: int,
    max_page_size: int,
) -> PaginationSpec:
    """Validate and normalize page/limit values."""

    resolved_page = 1 if page is None else page
    resolved_limit = default_page_size if limit is None else limit
    if resolved_page < 1:
        raise ValueError("page must be >= 1")
    if resolved_limit < 1:
        raise ValueError("limit must be >= 1")
    if resolved_limit > max_page_size:
        raise ValueError(f"limit must be <= {max_page_size}")
    if (resolved_page - 1) * resolved_limit > MAX_OFFSET:
        raise ValueError("page is out of range")
    return PaginationSpec(page=resolved_page, limit=resolved_limit)


def parse_sort(
    *,
    requested_sort: str | None,
    default_sort: str,
    allowed_fields: set[str],
) -> SortSpec:
    """Parse `field` or `field:asc|desc`; a bare field sorts ascending."""

    field, _, order = (requested_sort or default_sort).strip().lower().partition(":")
    if not field:
        raise ValueError("sort cannot be empty")
    if field not in allowed_fields:
        raise ValueError(
            f"Unsupported sort field '{field}'. Supported fields: {', '.join(sorted(allowed_fields))}"
        )
    order = order or "asc"
    if order not in SORT_ORDERS:
        raise ValueError("sort order must be 'asc' or 'desc'")
    return SortSpec(field=field, order=order)


def compute_total_pages(*, records: int, limit: int) -> int:
    """Number of pages needed for `records` rows, 0 when there are none."""

    if records <= 0:
        return 0
    return ((records - 1) // limit) + 1


def resolve_page_request(
    body: PageRequestLike,
    *,
    default_page_size: int,
    max_page_size: int,
    default_sort: str,
    allowed_fields: set[str],
) -> tuple[PaginationSpec, SortSpec]:
    """Validate the paging and sort fields of a search body.

    Raises APIError (400, INVALID_QUERY_PARAM) on invalid input.
    """

    try:
        pagination = normalize_pagination(
            page=body.page,
            limit=body.limit,
            default_page_size=default_page_size,
            max_page_size=max_page_size,
        )
        sort_spec = parse_sort(
            requested_sort=body.sort,
            default_sort=default_sort,
            allowed_fields=allowed_fields,
        )
    except ValueError as exc:
        raise APIError(
            status_code=400,
            error_code="INVALID_QUERY_PARAM",
            message=str(exc),
        ) from exc
    return pagination, sort_spec
