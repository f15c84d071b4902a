# This file defines account schemas for the four marketplace roles.
# Summaries are the list-view projections returned inside page envelopes; detail models
# back single-record responses. Password hashes never appear in any response model.

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from src.api.schemas.common import Page, PageRequest, StoredRecord

AccountStatus = Literal["pending", "active", "suspended"]


class AdminUserSummary(StoredRecord):
    id: str
    email: str
    nickname: str
    full_name: str
    status: str
    created_at: datetime


class AdminUser(AdminUserSummary):
    updated_at: datetime


class MemberUserSummary(StoredRecord):
    id: str
    email: str
    nickname: str
    full_name: str
    phone_number: str | None = None
    status: str
    created_at: datetime


class MemberUser(MemberUserSummary):
    updated_at: datetime


class SellerUserSummary(StoredRecord):
    id: str
    email: str
    nickname: str
    full_name: str
    business_registration_number: str
    status: str
    created_at: datetime


class SellerUser(SellerUserSummary):
    phone_number: str | None = None
    updated_at: datetime


class GuestUserSummary(StoredRecord):
    id: str
    ip_address: str
    access_url: str
    user_agent: str | None = None
    session_start_at: datetime
    session_end_at: datetime | None = None
    created_at: datetime


class GuestUser(GuestUserSummary):
    referrer: str | None = None
    updated_at: datetime


class AdminUserRequest(PageRequest):
    search: str | None = None
    status: str | None = None


class MemberUserRequest(PageRequest):
    search: str | None = None
    status: str | None = None


class SellerUserRequest(PageRequest):
    search: str | None = None
    status: str | None = None
    business_registration_number: str | None = None


class GuestUserRequest(PageRequest):
    search: str | None = None
    session_start_after: datetime | None = None
    session_start_before: datetime | None = None


class SellerUserUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    nickname: str | None = Field(default=None, min_length=1)
    full_name: str | None = Field(default=None, min_length=1)
    phone_number: str | None = None
    status: AccountStatus | None = None


PageAdminUserSummary = Page[AdminUserSummary]
PageMemberUserSummary = Page[MemberUserSummary]
PageSellerUserSummary = Page[SellerUserSummary]
PageGuestUserSummary = Page[GuestUserSummary]
