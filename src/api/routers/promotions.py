# This file defines coupon, coupon ticket, deposit and mileage endpoints.
# Member routes pass the caller's id down, so searches and updates only reach the caller's
# own records.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from src.api.authorization import AdminUserDep, MemberUserDep, SellerUserDep
from src.api.dependencies import get_promotion_service
from src.api.schemas.common import ERROR_RESPONSES
from src.api.schemas.promotion_schemas import (
    CouponConditionRequest,
    CouponLogRequest,
    CouponRequest,
    CouponTicket,
    CouponTicketRequest,
    CouponTicketUpdate,
    DepositCharge,
    DepositChargeRequest,
    DepositChargeUpdate,
    DepositRequest,
    MileageDonationRequest,
    PageCouponConditionSummary,
    PageCouponLog,
    PageCouponSummary,
    PageCouponTicketSummary,
    PageDepositChargeSummary,
    PageDepositSummary,
    PageMileageDonationSummary,
)
from src.api.services.promotion_service import PromotionService

router = APIRouter(prefix="/shoppingMall", tags=["promotions"], responses=ERROR_RESPONSES)
PromotionServiceDep = Annotated[PromotionService, Depends(get_promotion_service)]


@router.patch("/adminUser/coupons", response_model=PageCouponSummary)
def admin_search_coupons(
    admin_user: AdminUserDep, body: CouponRequest, service: PromotionServiceDep
) -> dict[str, object]:
    return service.search_coupons(body)


@router.patch("/sellerUser/coupons", response_model=PageCouponSummary)
def seller_search_coupons(
    seller_user: SellerUserDep, body: CouponRequest, service: PromotionServiceDep
) -> dict[str, object]:
    return service.search_coupons(body)


@router.patch("/memberUser/coupons", response_model=PageCouponSummary)
def member_search_coupons(
    member_user: MemberUserDep, body: CouponRequest, service: PromotionServiceDep
) -> dict[str, object]:
    return service.search_coupons(body)


@router.delete("/adminUser/coupons/{coupon_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_coupon(
    admin_user: AdminUserDep, coupon_id: str, service: PromotionServiceDep
) -> Response:
    service.delete_coupon(coupon_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/memberUser/couponTickets", response_model=PageCouponTicketSummary)
def search_coupon_tickets(
    member_user: MemberUserDep, body: CouponTicketRequest, service: PromotionServiceDep
) -> dict[str, object]:
    return service.search_coupon_tickets(member_user.id, body)


@router.patch("/memberUser/deposits", response_model=PageDepositSummary)
def search_deposits(
    member_user: MemberUserDep, body: DepositRequest, service: PromotionServiceDep
) -> dict[str, object]:
    return service.search_deposits(member_user.id, body)


@router.patch("/memberUser/depositCharges", response_model=PageDepositChargeSummary)
def search_deposit_charges(
    member_user: MemberUserDep, body: DepositChargeRequest, service: PromotionServiceDep
) -> dict[str, object]:
    return service.search_deposit_charges(member_user.id, body)


@router.patch("/adminUser/mileageDonations", response_model=PageMileageDonationSummary)
def search_mileage_donations(
    admin_user: AdminUserDep, body: MileageDonationRequest, service: PromotionServiceDep
) -> dict[str, object]:
    return service.search_mileage_donations(body)


@router.patch(
    "/adminUser/coupons/{coupon_id}/conditions", response_model=PageCouponConditionSummary
)
def search_coupon_conditions(
    admin_user: AdminUserDep,
    coupon_id: str,
    body: CouponConditionRequest,
    service: PromotionServiceDep,
) -> dict[str, object]:
    return service.search_coupon_conditions(coupon_id, body)


@router.put("/memberUser/couponTickets/{ticket_id}", response_model=CouponTicket)
def update_coupon_ticket(
    member_user: MemberUserDep,
    ticket_id: str,
    body: CouponTicketUpdate,
    service: PromotionServiceDep,
) -> dict[str, object]:
    return service.update_coupon_ticket(member_user.id, ticket_id, body)


@router.patch("/memberUser/couponLogs", response_model=PageCouponLog)
def search_coupon_logs(
    member_user: MemberUserDep, body: CouponLogRequest, service: PromotionServiceDep
) -> dict[str, object]:
    return service.search_coupon_logs(member_user.id, body)


@router.put("/memberUser/depositCharges/{charge_id}", response_model=DepositCharge)
def update_deposit_charge(
    member_user: MemberUserDep,
    charge_id: str,
    body: DepositChargeUpdate,
    service: PromotionServiceDep,
) -> dict[str, object]:
    return service.update_deposit_charge(member_user.id, charge_id, body)
