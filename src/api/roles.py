# This file lists the marketplace roles as data.
# Each role names the tag carried in its tokens, the account table that backs it and
# whether the account must be active to act.

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RoleSpec:
    type_tag: str
    entity: str
    require_active: bool

    @property
    def not_enrolled_message(self) -> str:
        if self.require_active:
            return "You're not enrolled or inactive"
        return "You're not enrolled"


ADMIN = RoleSpec(type_tag="adminuser", entity="adminusers", require_active=True)
GUEST = RoleSpec(type_tag="guestuser", entity="guestusers", require_active=False)
MEMBER = RoleSpec(type_tag="memberuser", entity="memberusers", require_active=True)
SELLER = RoleSpec(type_tag="sellerUser", entity="sellerusers", require_active=True)

ROLES: tuple[RoleSpec, ...] = (ADMIN, GUEST, MEMBER, SELLER)
