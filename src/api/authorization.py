# This file implements role-based access checks for authenticated endpoints.
# One RoleAuthorizer is parameterized by a RoleSpec instead of repeating a guard per role:
# it decodes the bearer token, compares the declared role with the expected one, and then
# confirms with a single lookup that the subject still exists, is not soft-deleted and,
# for every role but guests, is active.

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.api.dependencies import StoreDep, TokenCodecDep
from src.api.error_handlers import ForbiddenError
from src.api.filters import WhereBuilder
from src.api.roles import ADMIN, GUEST, MEMBER, SELLER, RoleSpec
from src.api.store import MarketplaceStore
from src.api.tokens import TokenPayload, jwt_authorize

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)
BearerDep = Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)]


def check_enrollment(spec: RoleSpec, payload: TokenPayload, store: MarketplaceStore) -> TokenPayload:
    """Role and subject-state checks applied after the token has been decoded."""

    if payload.type != spec.type_tag:
        logger.info("Rejected %s token on %s endpoint", payload.type, spec.type_tag)
        raise ForbiddenError(f"You're not {payload.type}")

    where = WhereBuilder().equals("id", payload.id)
    if spec.require_active:
        where.equals("status", "active")
    if store.find_first(spec.entity, where) is None:
        logger.info("Rejected %s %s: not enrolled or inactive", spec.type_tag, payload.id)
        raise ForbiddenError(spec.not_enrolled_message)
    return payload


class RoleAuthorizer:
    """FastAPI dependency returning the validated token payload for one role."""

    def __init__(self, spec: RoleSpec) -> None:
        self.spec = spec

    def __call__(
        self,
        credentials: BearerDep,
        codec: TokenCodecDep,
        store: StoreDep,
    ) -> TokenPayload:
        payload = jwt_authorize(credentials, codec=codec)
        return check_enrollment(self.spec, payload, store)


admin_authorize = RoleAuthorizer(ADMIN)
guest_authorize = RoleAuthorizer(GUEST)
member_authorize = RoleAuthorizer(MEMBER)
seller_authorize = RoleAuthorizer(SELLER)

AdminUserDep = Annotated[TokenPayload, Depends(admin_authorize)]
GuestUserDep = Annotated[TokenPayload, Depends(guest_authorize)]
MemberUserDep = Annotated[TokenPayload, Depends(member_authorize)]
SellerUserDep = Annotated[TokenPayload, Depends(seller_authorize)]
