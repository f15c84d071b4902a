# This file defines request and response schemas for registration, login and token refresh.
# Every successful call answers with the account plus a freshly issued token pair.

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from src.api.schemas.account_schemas import AdminUser, GuestUser, MemberUser, SellerUser
from src.api.schemas.common import AuthorizationToken


class _Body(BaseModel):
    model_config = ConfigDict(extra="forbid")


class AdminUserJoin(_Body):
    email: str = Field(min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=8, max_length=72)
    nickname: str = Field(min_length=1)
    full_name: str = Field(min_length=1)


class MemberUserJoin(AdminUserJoin):
    phone_number: str | None = None


class SellerUserJoin(MemberUserJoin):
    business_registration_number: str = Field(min_length=1)


class GuestUserJoin(_Body):
    ip_address: str = Field(min_length=1)
    access_url: str = Field(min_length=1)
    referrer: str | None = None
    user_agent: str | None = None


class Login(_Body):
    email: str
    password: str


class Refresh(_Body):
    refresh_token: str = Field(min_length=1)


class AdminUserAuthorized(AdminUser):
    token: AuthorizationToken


class MemberUserAuthorized(MemberUser):
    token: AuthorizationToken


class SellerUserAuthorized(SellerUser):
    token: AuthorizationToken


class GuestUserAuthorized(GuestUser):
    token: AuthorizationToken
