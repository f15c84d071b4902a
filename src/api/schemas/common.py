# This file defines schema pieces shared by every marketplace endpoint.
# The generic Page model pairs pagination metadata with one page of summary rows,
# and PageRequest carries the paging and sort fields every search body accepts.
# Error payloads, the documented error responses and issued tokens are described here as well.

from __future__ import annotations

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

SummaryT = TypeVar("SummaryT")


class PaginationMetadata(BaseModel):
    current: int = Field(ge=1)
    limit: int = Field(ge=1)
    records: int = Field(ge=0)
    pages: int = Field(ge=0)


class Page(BaseModel, Generic[SummaryT]):
    pagination: PaginationMetadata
    data: list[SummaryT]


class PageRequest(BaseModel):
    """Paging and sort fields accepted by every search body.

    Range checks happen in `normalize_pagination` so bad values return 400 rather than 422.
    """

    model_config = ConfigDict(extra="forbid")

    page: int | None = None
    limit: int | None = None
    sort: str | None = Field(default=None, description="`field:asc` or `field:desc`")


class StoredRecord(BaseModel):
    """Base for models built from table rows; unknown columns are dropped."""

    model_config = ConfigDict(extra="ignore")


class AuthorizationToken(BaseModel):
    access: str
    refresh: str
    expired_at: datetime
    refreshable_until: datetime


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Any | None = None
    request_id: str
    timestamp: datetime


# Documented error bodies shared by every marketplace router.
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid paging, sort or relation input."},
    401: {"model": ErrorResponse, "description": "Missing, expired or invalid bearer token."},
    403: {"model": ErrorResponse, "description": "Caller may not act on this resource."},
    404: {"model": ErrorResponse, "description": "Resource not found or soft-deleted."},
}
