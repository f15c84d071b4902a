# This file implements product reviews written by member users.
# A member may only review after a confirmed and paid order; the review is attached to
# that order's channel and to the sale snapshot of one of its items, and starts as pending.

from __future__ import annotations

import logging
from typing import Any

from src.api.error_handlers import ForbiddenError
from src.api.filters import WhereBuilder
from src.api.pagination import SortSpec
from src.api.schemas.review_schemas import ReviewCreate, ReviewRequest, ReviewUpdate
from src.api.services.base import StoreService

logger = logging.getLogger(__name__)

REVIEW_SORT_FIELDS: set[str] = {"id", "rating", "review_title", "status", "created_at"}
_MOST_RECENT = SortSpec(field="created_at", order="desc")


class ReviewService(StoreService):
    def search_reviews(self, member_user_id: str, body: ReviewRequest) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .equals("shopping_mall_memberuserid", member_user_id)
            .contains_any(("review_title", "review_body"), body.search)
            .equals("rating", body.rating)
            .equals("status", body.status)
        )
        return self._search_page(
            "reviews",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=REVIEW_SORT_FIELDS,
        )

    def create_review(self, member_user_id: str, body: ReviewCreate) -> dict[str, Any]:
        order = self.store.find_first(
            "orders",
            WhereBuilder()
            .equals("shopping_mall_memberuser_id", member_user_id)
            .equals("order_status", "confirmed")
            .equals("payment_status", "paid"),
            order_by=_MOST_RECENT,
        )
        if order is None:
            raise ForbiddenError("No confirmed and paid order found to review.")

        item = self.store.find_first(
            "order_items",
            WhereBuilder().equals("shopping_mall_order_id", order["id"]),
            order_by=_MOST_RECENT,
        )
        if item is None:
            raise ForbiddenError("The most recent paid order has no items to review.")

        row = self.store.insert(
            "reviews",
            {
                "shopping_mall_channel_id": order["shopping_mall_channel_id"],
                "shopping_mall_category_id": None,
                "shopping_mall_memberuserid": member_user_id,
                "shopping_mall_sale_snapshot_id": item["shopping_mall_sale_snapshot_id"],
                "review_title": body.review_title,
                "review_body": body.review_body,
                "rating": body.rating,
                "is_private": body.is_private,
                "status": "pending",
            },
        )
        logger.info("Member %s created review %s", member_user_id, row["id"])
        return row

    def update_review(self, member_user_id: str, review_id: str, body: ReviewUpdate) -> dict[str, Any]:
        review = self.store.find_unique_or_throw("reviews", review_id)
        if review["shopping_mall_memberuserid"] != member_user_id:
            raise ForbiddenError("You can only update your own reviews")
        return self.store.update("reviews", review_id, body.model_dump(exclude_none=True))
