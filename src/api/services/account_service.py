# This file implements the admin-facing account operations.
# Admins search all four account tables, read admin profiles, update sellers
# (including activating pending ones) and soft-delete sellers, members and guests.

from __future__ import annotations

from typing import Any

from src.api.filters import WhereBuilder
from src.api.schemas.account_schemas import (
    AdminUserRequest,
    GuestUserRequest,
    MemberUserRequest,
    SellerUserRequest,
    SellerUserUpdate,
)
from src.api.services.base import StoreService

ACCOUNT_SORT_FIELDS: set[str] = {"id", "email", "nickname", "full_name", "status", "created_at"}
GUEST_SORT_FIELDS: set[str] = {
    "id",
    "ip_address",
    "access_url",
    "user_agent",
    "session_start_at",
    "session_end_at",
    "created_at",
}
_ACCOUNT_SEARCH_COLUMNS = ("email", "nickname", "full_name")


class AccountService(StoreService):
    """Account administration for admin users."""

    def search_guest_users(self, body: GuestUserRequest) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .contains_any(("ip_address", "access_url", "user_agent"), body.search)
            .between("session_start_at", gte=body.session_start_after, lte=body.session_start_before)
        )
        return self._search_page(
            "guestusers",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=GUEST_SORT_FIELDS,
        )

    def search_member_users(self, body: MemberUserRequest) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .contains_any(_ACCOUNT_SEARCH_COLUMNS, body.search)
            .equals("status", body.status)
        )
        return self._search_page(
            "memberusers",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=ACCOUNT_SORT_FIELDS,
        )

    def search_seller_users(self, body: SellerUserRequest) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .contains_any(_ACCOUNT_SEARCH_COLUMNS, body.search)
            .equals("status", body.status)
            .equals("business_registration_number", body.business_registration_number)
        )
        return self._search_page(
            "sellerusers",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=ACCOUNT_SORT_FIELDS | {"business_registration_number"},
        )

    def search_admin_users(self, body: AdminUserRequest) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .contains_any(_ACCOUNT_SEARCH_COLUMNS, body.search)
            .equals("status", body.status)
        )
        return self._search_page(
            "adminusers",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=ACCOUNT_SORT_FIELDS,
        )

    def get_admin_user(self, admin_user_id: str) -> dict[str, Any]:
        return self.store.find_unique_or_throw("adminusers", admin_user_id)

    def update_seller_user(self, seller_user_id: str, body: SellerUserUpdate) -> dict[str, Any]:
        self.store.find_unique_or_throw("sellerusers", seller_user_id)
        return self.store.update(
            "sellerusers", seller_user_id, body.model_dump(exclude_none=True)
        )

    def delete_seller_user(self, seller_user_id: str) -> None:
        self._soft_delete("sellerusers", seller_user_id)

    def delete_member_user(self, member_user_id: str) -> None:
        self._soft_delete("memberusers", member_user_id)

    def delete_guest_user(self, guest_user_id: str) -> None:
        self._soft_delete("guestusers", guest_user_id)
