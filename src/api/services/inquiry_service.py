# This file implements customer inquiries, the comment threads under inquiries and reviews,
# and seller responses.
# Authors alone edit what they wrote: members their inquiries and inquiry comments, sellers
# their responses. Admins moderate review comments. Outside admin searches, private
# comments stay hidden.

from __future__ import annotations

import logging
from typing import Any

from src.api.error_handlers import ForbiddenError
from src.api.filters import WhereBuilder
from src.api.roles import ADMIN
from src.api.schemas.inquiry_schemas import (
    CommentRequest,
    CommentUpdate,
    InquiryRequest,
    InquiryUpdate,
    SellerResponseRequest,
    SellerResponseUpdate,
)
from src.api.services.base import StoreService
from src.api.tokens import TokenPayload

logger = logging.getLogger(__name__)

INQUIRY_SORT_FIELDS: set[str] = {
    "id",
    "shopping_mall_channel_id",
    "shopping_mall_section_id",
    "shopping_mall_category_id",
    "shopping_mall_memberuserid",
    "shopping_mall_guestuserid",
    "parent_inquiry_id",
    "inquiry_title",
    "is_private",
    "is_answered",
    "status",
    "created_at",
    "updated_at",
}
COMMENT_SORT_FIELDS: set[str] = {"id", "status", "is_private", "created_at", "updated_at"}
SELLER_RESPONSE_SORT_FIELDS: set[str] = {"id", "status", "is_private", "created_at", "updated_at"}


class InquiryService(StoreService):
    def search_inquiries(self, body: InquiryRequest) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .contains_any(("inquiry_title", "inquiry_body"), body.search)
            .equals("shopping_mall_channel_id", body.shopping_mall_channel_id)
            .equals("shopping_mall_section_id", body.shopping_mall_section_id)
            .equals("shopping_mall_category_id", body.shopping_mall_category_id)
            .equals("shopping_mall_memberuserid", body.shopping_mall_memberuserid)
            .equals("shopping_mall_guestuserid", body.shopping_mall_guestuserid)
            .equals("parent_inquiry_id", body.parent_inquiry_id)
            .equals("is_private", body.is_private)
            .equals("is_answered", body.is_answered)
            .equals("status", body.status)
        )
        if body.root_only:
            where.is_null("parent_inquiry_id")
        return self._search_page(
            "inquiries",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=INQUIRY_SORT_FIELDS,
        )

    def update_inquiry(
        self, member_user_id: str, inquiry_id: str, body: InquiryUpdate
    ) -> dict[str, Any]:
        inquiry = self.store.find_unique_or_throw("inquiries", inquiry_id)
        if inquiry["shopping_mall_memberuserid"] != member_user_id:
            logger.info("Member %s denied update of inquiry %s", member_user_id, inquiry_id)
            raise ForbiddenError("You can only update your own inquiries")
        return self.store.update("inquiries", inquiry_id, body.model_dump(exclude_none=True))

    def _search_comments(
        self, column: str, parent_id: str, body: CommentRequest, principal: TokenPayload
    ) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .equals(column, parent_id)
            .contains("comment_body", body.search)
            .equals("status", body.status)
            .equals("is_private", body.is_private)
            .equals("shopping_mall_memberuserid", body.shopping_mall_memberuserid)
        )
        if body.root_only:
            where.is_null("parent_comment_id")
        if principal.type != ADMIN.type_tag:
            where.equals("is_private", False)
        return self._search_page(
            "comments",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=COMMENT_SORT_FIELDS,
        )

    def search_inquiry_comments(
        self, inquiry_id: str, body: CommentRequest, *, principal: TokenPayload
    ) -> dict[str, Any]:
        self.store.find_unique_or_throw("inquiries", inquiry_id)
        return self._search_comments("shopping_mall_inquiry_id", inquiry_id, body, principal)

    def update_inquiry_comment(
        self, member_user_id: str, inquiry_id: str, comment_id: str, body: CommentUpdate
    ) -> dict[str, Any]:
        self.store.find_unique_or_throw("inquiries", inquiry_id)
        comment = self._child(
            "comments", comment_id, column="shopping_mall_inquiry_id", parent_id=inquiry_id
        )
        if comment["shopping_mall_memberuserid"] != member_user_id:
            logger.info("Member %s denied update of comment %s", member_user_id, comment_id)
            raise ForbiddenError("You can only update your own comments")
        return self.store.update("comments", comment_id, body.model_dump(exclude_none=True))

    def search_review_comments(
        self, review_id: str, body: CommentRequest, *, principal: TokenPayload
    ) -> dict[str, Any]:
        self.store.find_unique_or_throw("reviews", review_id)
        return self._search_comments("shopping_mall_review_id", review_id, body, principal)

    def update_review_comment(
        self, review_id: str, comment_id: str, body: CommentUpdate
    ) -> dict[str, Any]:
        self.store.find_unique_or_throw("reviews", review_id)
        self._child("comments", comment_id, column="shopping_mall_review_id", parent_id=review_id)
        return self.store.update("comments", comment_id, body.model_dump(exclude_none=True))

    def search_seller_responses(self, body: SellerResponseRequest) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .contains("response_body", body.search)
            .equals("shopping_mall_inquiry_id", body.shopping_mall_inquiry_id)
            .equals("shopping_mall_review_id", body.shopping_mall_review_id)
            .equals("shopping_mall_selleruserid", body.shopping_mall_selleruserid)
            .equals("is_private", body.is_private)
            .equals("status", body.status)
        )
        return self._search_page(
            "seller_responses",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=SELLER_RESPONSE_SORT_FIELDS,
        )

    def update_seller_response(
        self, seller_user_id: str, response_id: str, body: SellerResponseUpdate
    ) -> dict[str, Any]:
        response = self.store.find_unique_or_throw("seller_responses", response_id)
        if response["shopping_mall_selleruserid"] != seller_user_id:
            logger.info("Seller %s denied update of response %s", seller_user_id, response_id)
            raise ForbiddenError("You can only update your own responses")
        return self.store.update(
            "seller_responses", response_id, body.model_dump(exclude_none=True)
        )
