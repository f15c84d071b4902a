# This file defines customer inquiry schemas, comments on inquiries and reviews,
# and seller responses.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.api.schemas.common import Page, PageRequest, StoredRecord


class _Body(BaseModel):
    model_config = ConfigDict(extra="forbid")


class InquirySummary(StoredRecord):
    id: str
    shopping_mall_channel_id: str
    inquiry_title: str
    is_private: bool
    is_answered: bool
    status: str
    created_at: datetime


class Inquiry(InquirySummary):
    shopping_mall_section_id: str | None = None
    shopping_mall_category_id: str | None = None
    shopping_mall_memberuserid: str | None = None
    shopping_mall_guestuserid: str | None = None
    parent_inquiry_id: str | None = None
    inquiry_body: str
    updated_at: datetime


class InquiryRequest(PageRequest):
    search: str | None = None
    shopping_mall_channel_id: str | None = None
    shopping_mall_section_id: str | None = None
    shopping_mall_category_id: str | None = None
    shopping_mall_memberuserid: str | None = None
    shopping_mall_guestuserid: str | None = None
    parent_inquiry_id: str | None = None
    root_only: bool = Field(default=False, description="Only inquiries that open a thread.")
    is_private: bool | None = None
    is_answered: bool | None = None
    status: str | None = None


class InquiryUpdate(_Body):
    inquiry_title: str | None = Field(default=None, min_length=1)
    inquiry_body: str | None = Field(default=None, min_length=1)
    is_private: bool | None = None


class CommentSummary(StoredRecord):
    id: str
    shopping_mall_inquiry_id: str | None = None
    shopping_mall_review_id: str | None = None
    parent_comment_id: str | None = None
    comment_body: str
    is_private: bool
    status: str
    created_at: datetime


class Comment(CommentSummary):
    shopping_mall_memberuserid: str | None = None
    shopping_mall_guestuserid: str | None = None
    shopping_mall_selleruserid: str | None = None
    updated_at: datetime


class CommentRequest(PageRequest):
    search: str | None = None
    status: str | None = None
    is_private: bool | None = None
    shopping_mall_memberuserid: str | None = None
    root_only: bool = Field(default=False, description="Only top-level comments, no replies.")


class CommentUpdate(_Body):
    comment_body: str | None = Field(default=None, min_length=1)
    is_private: bool | None = None
    status: str | None = Field(default=None, min_length=1)


class SellerResponseSummary(StoredRecord):
    id: str
    shopping_mall_inquiry_id: str | None = None
    shopping_mall_review_id: str | None = None
    shopping_mall_selleruserid: str
    response_body: str
    is_private: bool
    status: str
    created_at: datetime


class SellerResponse(SellerResponseSummary):
    updated_at: datetime


class SellerResponseRequest(PageRequest):
    search: str | None = None
    shopping_mall_inquiry_id: str | None = None
    shopping_mall_review_id: str | None = None
    shopping_mall_selleruserid: str | None = None
    is_private: bool | None = None
    status: str | None = None


class SellerResponseUpdate(_Body):
    response_body: str | None = Field(default=None, min_length=1)
    is_private: bool | None = None
    status: str | None = Field(default=None, min_length=1)


PageInquirySummary = Page[InquirySummary]
PageCommentSummary = Page[CommentSummary]
PageSellerResponseSummary = Page[SellerResponseSummary]
