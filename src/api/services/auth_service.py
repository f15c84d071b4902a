# This file implements registration, login and token refresh for every role.
# Accounts are stored with salted password hashes and answered with a fresh token pair.
# Refresh re-checks the subject the same way the role authorizer does, but any failure
# there is an authentication failure because the caller holds no valid access token.

from __future__ import annotations

import logging
from typing import Any

from src.api.api_config import ApiConfig
from src.api.error_handlers import AuthenticationError, ConflictError
from src.api.filters import WhereBuilder
from src.api.lifecycle import utc_now
from src.api.passwords import hash_password, verify_password
from src.api.roles import ADMIN, GUEST, MEMBER, SELLER, RoleSpec
from src.api.schemas.auth_schemas import (
    AdminUserJoin,
    GuestUserJoin,
    Login,
    MemberUserJoin,
    SellerUserJoin,
)
from src.api.services.base import StoreService
from src.api.store import MarketplaceStore
from src.api.tokens import TokenCodec

logger = logging.getLogger(__name__)

INITIAL_STATUS: dict[str, str] = {
    ADMIN.type_tag: "active",
    MEMBER.type_tag: "active",
    SELLER.type_tag: "pending",
}


class AuthService(StoreService):
    """Account creation and token issuance."""

    def __init__(self, *, config: ApiConfig, store: MarketplaceStore, codec: TokenCodec) -> None:
        super().__init__(config=config, store=store)
        self.codec = codec

    def _authorized(self, spec: RoleSpec, row: dict[str, Any]) -> dict[str, Any]:
        tokens = self.codec.issue(subject_id=row["id"], role_type=spec.type_tag, email=row.get("email"))
        return {**row, "token": tokens.model_dump()}

    def _join_account(self, spec: RoleSpec, body: AdminUserJoin) -> dict[str, Any]:
        email = body.email.strip().lower()
        if self.store.find_first(spec.entity, WhereBuilder().equals("email", email)) is not None:
            raise ConflictError("Email is already registered.")

        values = body.model_dump(exclude={"password"})
        values["email"] = email
        values["password_hash"] = hash_password(body.password, rounds=self.config.password_hash_rounds)
        values["status"] = INITIAL_STATUS[spec.type_tag]
        row = self.store.insert(spec.entity, values)
        logger.info("Registered %s %s with status %s", spec.type_tag, row["id"], row["status"])
        return self._authorized(spec, row)

    def join_admin_user(self, body: AdminUserJoin) -> dict[str, Any]:
        return self._join_account(ADMIN, body)

    def join_member_user(self, body: MemberUserJoin) -> dict[str, Any]:
        return self._join_account(MEMBER, body)

    def join_seller_user(self, body: SellerUserJoin) -> dict[str, Any]:
        duplicate = self.store.find_first(
            SELLER.entity,
            WhereBuilder().equals("business_registration_number", body.business_registration_number),
        )
        if duplicate is not None:
            raise ConflictError("Business registration number is already registered.")
        return self._join_account(SELLER, body)

    def join_guest_user(self, body: GuestUserJoin) -> dict[str, Any]:
        values = body.model_dump()
        values["session_start_at"] = utc_now()
        values["session_end_at"] = None
        row = self.store.insert(GUEST.entity, values)
        logger.info("Started guest session %s", row["id"])
        return self._authorized(GUEST, row)

    def login(self, spec: RoleSpec, body: Login) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .equals("email", body.email.strip().lower())
            .equals("status", "active")
        )
        row = self.store.find_first(spec.entity, where)
        if row is None or not verify_password(body.password, row["password_hash"]):
            logger.info("Failed %s login", spec.type_tag)
            raise AuthenticationError("Invalid credentials")
        return self._authorized(spec, row)

    def refresh(self, spec: RoleSpec, refresh_token: str) -> dict[str, Any]:
        payload = self.codec.decode(refresh_token, expected_token_type="refresh")
        if payload.type != spec.type_tag:
            raise AuthenticationError(f"Refresh token does not belong to a {spec.type_tag}.")

        where = WhereBuilder().equals("id", payload.id)
        if spec.require_active:
            where.equals("status", "active")
        row = self.store.find_first(spec.entity, where)
        if row is None:
            raise AuthenticationError(spec.not_enrolled_message)
        return self._authorized(spec, row)
