# This file defines promotion and balance schemas: coupons with their conditions, coupon
# tickets and their usage logs, deposits, deposit charges and mileage donations.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.api.schemas.common import Page, PageRequest, StoredRecord


class _Body(BaseModel):
    model_config = ConfigDict(extra="forbid")


class CouponSummary(StoredRecord):
    id: str
    coupon_code: str
    coupon_name: str
    discount_type: str
    discount_value: float
    status: str
    start_date: datetime | None = None
    end_date: datetime | None = None
    created_at: datetime


class CouponRequest(PageRequest):
    search: str | None = None
    status: str | None = None
    discount_type: str | None = None


class CouponConditionSummary(StoredRecord):
    id: str
    shopping_mall_coupon_id: str
    condition_type: str
    product_id: str | None = None
    section_id: str | None = None
    category_id: str | None = None
    created_at: datetime
    updated_at: datetime


class CouponConditionRequest(PageRequest):
    condition_type: str | None = None
    product_id: str | None = None
    section_id: str | None = None
    category_id: str | None = None
    created_after: datetime | None = None
    created_before: datetime | None = None
    updated_after: datetime | None = None
    updated_before: datetime | None = None


class CouponTicketSummary(StoredRecord):
    id: str
    shopping_mall_coupon_id: str
    ticket_code: str
    usage_status: str
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    created_at: datetime


class CouponTicket(CouponTicketSummary):
    memberuser_id: str | None = None
    used_at: datetime | None = None
    updated_at: datetime


class CouponTicketRequest(PageRequest):
    shopping_mall_coupon_id: str | None = None
    usage_status: str | None = None


class CouponTicketUpdate(_Body):
    usage_status: str | None = Field(default=None, min_length=1)
    used_at: datetime | None = None


class CouponLog(StoredRecord):
    id: str
    shopping_mall_coupon_ticket_id: str
    used_by_customer_id: str | None = None
    log_type: str
    log_data: str | None = None
    logged_at: datetime


class CouponLogRequest(PageRequest):
    shopping_mall_coupon_ticket_id: str | None = None
    used_by_customer_id: str | None = None
    log_type: str | None = None
    logged_after: datetime | None = None
    logged_before: datetime | None = None


class DepositSummary(StoredRecord):
    id: str
    deposit_amount: float
    usable_balance: float
    deposit_start_at: datetime
    deposit_end_at: datetime
    status: str
    created_at: datetime


class DepositRequest(PageRequest):
    status: str | None = None
    active_at: datetime | None = None


class DepositChargeSummary(StoredRecord):
    id: str
    charge_amount: float
    charge_status: str
    payment_provider: str
    paid_at: datetime | None = None
    created_at: datetime


class DepositCharge(DepositChargeSummary):
    memberuser_id: str | None = None
    payment_account: str
    updated_at: datetime


class DepositChargeRequest(PageRequest):
    charge_status: str | None = None
    payment_provider: str | None = None


class DepositChargeUpdate(_Body):
    charge_amount: float | None = Field(default=None, gt=0)
    charge_status: str | None = Field(default=None, min_length=1)
    payment_provider: str | None = Field(default=None, min_length=1)
    payment_account: str | None = Field(default=None, min_length=1)
    paid_at: datetime | None = None


class MileageDonationSummary(StoredRecord):
    id: str
    adminuser_id: str
    memberuser_id: str
    donation_reason: str
    donation_amount: float
    donation_date: datetime


class MileageDonationRequest(PageRequest):
    adminuser_id: str | None = None
    memberuser_id: str | None = None
    min_amount: float | None = None
    max_amount: float | None = None
    donated_after: datetime | None = None
    donated_before: datetime | None = None


PageCouponSummary = Page[CouponSummary]
PageCouponConditionSummary = Page[CouponConditionSummary]
PageCouponTicketSummary = Page[CouponTicketSummary]
PageCouponLog = Page[CouponLog]
PageDepositSummary = Page[DepositSummary]
PageDepositChargeSummary = Page[DepositChargeSummary]
PageMileageDonationSummary = Page[MileageDonationSummary]
