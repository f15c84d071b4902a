# This file defines the registration, login and token refresh endpoints for every role.
# These routes are public: they are how callers obtain the bearer tokens other routes require.
# Guests have no credentials, so they only join and refresh.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_auth_service
from src.api.roles import ADMIN, GUEST, MEMBER, SELLER
from src.api.schemas.auth_schemas import (
    AdminUserAuthorized,
    AdminUserJoin,
    GuestUserAuthorized,
    GuestUserJoin,
    Login,
    MemberUserAuthorized,
    MemberUserJoin,
    Refresh,
    SellerUserAuthorized,
    SellerUserJoin,
)
from src.api.schemas.common import ERROR_RESPONSES, ErrorResponse
from src.api.services.auth_service import AuthService

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={
        **ERROR_RESPONSES,
        409: {"model": ErrorResponse, "description": "Email already registered for the role."},
    },
)
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


@router.post(
    "/adminUser/join",
    response_model=AdminUserAuthorized,
    status_code=status.HTTP_201_CREATED,
)
def admin_user_join(body: AdminUserJoin, service: AuthServiceDep) -> dict[str, object]:
    return service.join_admin_user(body)


@router.post("/adminUser/login", response_model=AdminUserAuthorized)
def admin_user_login(body: Login, service: AuthServiceDep) -> dict[str, object]:
    return service.login(ADMIN, body)


@router.post("/adminUser/refresh", response_model=AdminUserAuthorized)
def admin_user_refresh(body: Refresh, service: AuthServiceDep) -> dict[str, object]:
    return service.refresh(ADMIN, body.refresh_token)


@router.post(
    "/memberUser/join",
    response_model=MemberUserAuthorized,
    status_code=status.HTTP_201_CREATED,
)
def member_user_join(body: MemberUserJoin, service: AuthServiceDep) -> dict[str, object]:
    return service.join_member_user(body)


@router.post("/memberUser/login", response_model=MemberUserAuthorized)
def member_user_login(body: Login, service: AuthServiceDep) -> dict[str, object]:
    return service.login(MEMBER, body)


@router.post("/memberUser/refresh", response_model=MemberUserAuthorized)
def member_user_refresh(body: Refresh, service: AuthServiceDep) -> dict[str, object]:
    return service.refresh(MEMBER, body.refresh_token)


@router.post(
    "/sellerUser/join",
    response_model=SellerUserAuthorized,
    status_code=status.HTTP_201_CREATED,
)
def seller_user_join(body: SellerUserJoin, service: AuthServiceDep) -> dict[str, object]:
    return service.join_seller_user(body)


@router.post("/sellerUser/login", response_model=SellerUserAuthorized)
def seller_user_login(body: Login, service: AuthServiceDep) -> dict[str, object]:
    return service.login(SELLER, body)


@router.post("/sellerUser/refresh", response_model=SellerUserAuthorized)
def seller_user_refresh(body: Refresh, service: AuthServiceDep) -> dict[str, object]:
    return service.refresh(SELLER, body.refresh_token)


@router.post(
    "/guestUser/join",
    response_model=GuestUserAuthorized,
    status_code=status.HTTP_201_CREATED,
)
def guest_user_join(body: GuestUserJoin, service: AuthServiceDep) -> dict[str, object]:
    return service.join_guest_user(body)


@router.post("/guestUser/refresh", response_model=GuestUserAuthorized)
def guest_user_refresh(body: Refresh, service: AuthServiceDep) -> dict[str, object]:
    return service.refresh(GUEST, body.refresh_token)
