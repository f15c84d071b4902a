# This file implements coupon, coupon ticket, deposit and mileage operations.
# Members only ever see and change their own tickets, ticket logs, deposits and deposit charges.

from __future__ import annotations

import logging
from typing import Any

from src.api.error_handlers import ForbiddenError
from src.api.filters import WhereBuilder
from src.api.schemas.promotion_schemas import (
    CouponConditionRequest,
    CouponLogRequest,
    CouponRequest,
    CouponTicketRequest,
    CouponTicketUpdate,
    DepositChargeRequest,
    DepositChargeUpdate,
    DepositRequest,
    MileageDonationRequest,
)
from src.api.services.base import StoreService

logger = logging.getLogger(__name__)

COUPON_SORT_FIELDS: set[str] = {
    "id",
    "coupon_code",
    "coupon_name",
    "discount_value",
    "start_date",
    "end_date",
    "created_at",
}
COUPON_CONDITION_SORT_FIELDS: set[str] = {"id", "condition_type", "created_at", "updated_at"}
COUPON_TICKET_SORT_FIELDS: set[str] = {"id", "ticket_code", "valid_from", "valid_until", "created_at"}
COUPON_LOG_SORT_FIELDS: set[str] = {"id", "log_type", "logged_at"}
DEPOSIT_SORT_FIELDS: set[str] = {
    "id",
    "deposit_amount",
    "usable_balance",
    "deposit_start_at",
    "deposit_end_at",
    "created_at",
}
DEPOSIT_CHARGE_SORT_FIELDS: set[str] = {"id", "charge_amount", "paid_at", "created_at"}
MILEAGE_DONATION_SORT_FIELDS: set[str] = {"id", "donation_amount", "donation_date", "created_at"}


class PromotionService(StoreService):
    def _owned_by_member(self, entity: str, record_id: str, member_user_id: str) -> dict[str, Any]:
        row = self.store.find_unique_or_throw(entity, record_id)
        if row["memberuser_id"] != member_user_id:
            logger.info("Member %s denied update of %s %s", member_user_id, entity, record_id)
            raise ForbiddenError("You can only update your own records")
        return row

    def search_coupons(self, body: CouponRequest) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .contains_any(("coupon_code", "coupon_name"), body.search)
            .equals("status", body.status)
            .equals("discount_type", body.discount_type)
        )
        return self._search_page(
            "coupons",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=COUPON_SORT_FIELDS,
        )

    def delete_coupon(self, coupon_id: str) -> None:
        self._soft_delete("coupons", coupon_id)

    def search_coupon_conditions(
        self, coupon_id: str, body: CouponConditionRequest
    ) -> dict[str, Any]:
        self.store.find_unique_or_throw("coupons", coupon_id)
        where = (
            WhereBuilder()
            .equals("shopping_mall_coupon_id", coupon_id)
            .equals("condition_type", body.condition_type)
            .equals("product_id", body.product_id)
            .equals("section_id", body.section_id)
            .equals("category_id", body.category_id)
            .between("created_at", gte=body.created_after, lte=body.created_before)
            .between("updated_at", gte=body.updated_after, lte=body.updated_before)
        )
        return self._search_page(
            "coupon_conditions",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=COUPON_CONDITION_SORT_FIELDS,
        )

    def search_coupon_tickets(self, member_user_id: str, body: CouponTicketRequest) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .equals("memberuser_id", member_user_id)
            .equals("shopping_mall_coupon_id", body.shopping_mall_coupon_id)
            .equals("usage_status", body.usage_status)
        )
        return self._search_page(
            "coupon_tickets",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=COUPON_TICKET_SORT_FIELDS,
        )

    def update_coupon_ticket(
        self, member_user_id: str, ticket_id: str, body: CouponTicketUpdate
    ) -> dict[str, Any]:
        self._owned_by_member("coupon_tickets", ticket_id, member_user_id)
        return self.store.update("coupon_tickets", ticket_id, body.model_dump(exclude_none=True))

    def search_coupon_logs(self, member_user_id: str, body: CouponLogRequest) -> dict[str, Any]:
        """Usage logs of the member's own coupon tickets; no tickets means an empty page."""

        tickets = self.store.find_many(
            "coupon_tickets", WhereBuilder().equals("memberuser_id", member_user_id)
        )
        where = (
            WhereBuilder()
            .in_("shopping_mall_coupon_ticket_id", [ticket["id"] for ticket in tickets])
            .equals("shopping_mall_coupon_ticket_id", body.shopping_mall_coupon_ticket_id)
            .equals("used_by_customer_id", body.used_by_customer_id)
            .equals("log_type", body.log_type)
            .between("logged_at", gte=body.logged_after, lte=body.logged_before)
        )
        return self._search_page(
            "coupon_logs",
            body,
            where,
            default_sort="logged_at:desc",
            allowed_fields=COUPON_LOG_SORT_FIELDS,
        )

    def search_deposits(self, member_user_id: str, body: DepositRequest) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .equals("memberuser_id", member_user_id)
            .equals("status", body.status)
            .between("deposit_start_at", lte=body.active_at)
            .between("deposit_end_at", gte=body.active_at)
        )
        return self._search_page(
            "deposits",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=DEPOSIT_SORT_FIELDS,
        )

    def search_deposit_charges(
        self, member_user_id: str, body: DepositChargeRequest
    ) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .equals("memberuser_id", member_user_id)
            .equals("charge_status", body.charge_status)
            .equals("payment_provider", body.payment_provider)
        )
        return self._search_page(
            "deposit_charges",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=DEPOSIT_CHARGE_SORT_FIELDS,
        )

    def update_deposit_charge(
        self, member_user_id: str, charge_id: str, body: DepositChargeUpdate
    ) -> dict[str, Any]:
        self._owned_by_member("deposit_charges", charge_id, member_user_id)
        return self.store.update("deposit_charges", charge_id, body.model_dump(exclude_none=True))

    def search_mileage_donations(self, body: MileageDonationRequest) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .equals("adminuser_id", body.adminuser_id)
            .equals("memberuser_id", body.memberuser_id)
            .between("donation_amount", gte=body.min_amount, lte=body.max_amount)
            .between("donation_date", gte=body.donated_after, lte=body.donated_before)
        )
        return self._search_page(
            "mileage_donations",
            body,
            where,
            default_sort="donation_date:desc",
            allowed_fields=MILEAGE_DONATION_SORT_FIELDS,
        )
