# This file defines product review schemas for member users.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.api.schemas.common import Page, PageRequest, StoredRecord


class ReviewSummary(StoredRecord):
    id: str
    shopping_mall_channel_id: str
    shopping_mall_sale_snapshot_id: str
    review_title: str
    rating: int
    is_private: bool
    status: str
    created_at: datetime


class Review(ReviewSummary):
    shopping_mall_category_id: str | None = None
    shopping_mall_memberuserid: str
    review_body: str
    updated_at: datetime


class ReviewRequest(PageRequest):
    search: str | None = None
    rating: int | None = None
    status: str | None = None


class ReviewCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    review_title: str = Field(min_length=1)
    review_body: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5)
    is_private: bool = False


class ReviewUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    review_title: str | None = Field(default=None, min_length=1)
    review_body: str | None = Field(default=None, min_length=1)
    rating: int | None = Field(default=None, ge=1, le=5)
    is_private: bool | None = None


PageReviewSummary = Page[ReviewSummary]
