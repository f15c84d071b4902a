# This file defines the admin account-management endpoints.
# Search endpoints take a JSON body of filters and paging fields and answer with a page envelope.
# Deletions are soft: the record stays and gets a deletion timestamp; the response has no body.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from src.api.authorization import AdminUserDep
from src.api.dependencies import get_account_service
from src.api.schemas.account_schemas import (
    AdminUser,
    AdminUserRequest,
    GuestUserRequest,
    MemberUserRequest,
    PageAdminUserSummary,
    PageGuestUserSummary,
    PageMemberUserSummary,
    PageSellerUserSummary,
    SellerUser,
    SellerUserRequest,
    SellerUserUpdate,
)
from src.api.schemas.common import ERROR_RESPONSES
from src.api.services.account_service import AccountService

router = APIRouter(
    prefix="/shoppingMall/adminUser", tags=["accounts"], responses=ERROR_RESPONSES
)
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]


@router.patch("/guestUsers", response_model=PageGuestUserSummary)
def search_guest_users(
    admin_user: AdminUserDep, body: GuestUserRequest, service: AccountServiceDep
) -> dict[str, object]:
    return service.search_guest_users(body)


@router.patch("/memberUsers", response_model=PageMemberUserSummary)
def search_member_users(
    admin_user: AdminUserDep, body: MemberUserRequest, service: AccountServiceDep
) -> dict[str, object]:
    return service.search_member_users(body)


@router.patch("/sellerUsers", response_model=PageSellerUserSummary)
def search_seller_users(
    admin_user: AdminUserDep, body: SellerUserRequest, service: AccountServiceDep
) -> dict[str, object]:
    return service.search_seller_users(body)


@router.patch("/adminUsers", response_model=PageAdminUserSummary)
def search_admin_users(
    admin_user: AdminUserDep, body: AdminUserRequest, service: AccountServiceDep
) -> dict[str, object]:
    return service.search_admin_users(body)


@router.get("/adminUsers/{admin_user_id}", response_model=AdminUser)
def get_admin_user(
    admin_user: AdminUserDep, admin_user_id: str, service: AccountServiceDep
) -> dict[str, object]:
    return service.get_admin_user(admin_user_id)


@router.put("/sellerUsers/{seller_user_id}", response_model=SellerUser)
def update_seller_user(
    admin_user: AdminUserDep,
    seller_user_id: str,
    body: SellerUserUpdate,
    service: AccountServiceDep,
) -> dict[str, object]:
    return service.update_seller_user(seller_user_id, body)


@router.delete("/sellerUsers/{seller_user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_seller_user(
    admin_user: AdminUserDep, seller_user_id: str, service: AccountServiceDep
) -> Response:
    service.delete_seller_user(seller_user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/memberUsers/{member_user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_member_user(
    admin_user: AdminUserDep, member_user_id: str, service: AccountServiceDep
) -> Response:
    service.delete_member_user(member_user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/guestUsers/{guest_user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_guest_user(
    admin_user: AdminUserDep, guest_user_id: str, service: AccountServiceDep
) -> Response:
    service.delete_guest_user(guest_user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
