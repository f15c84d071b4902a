# This file tests the role authorizer shared by every protected endpoint.
# It covers token decoding failures, role mismatches, and subject state checks
# (soft-deleted, inactive, pending) for each of the four roles.

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from src.api.authorization import check_enrollment
from src.api.db_access import DatabaseClient
from src.api.error_handlers import ForbiddenError
from src.api.lifecycle import utc_now
from src.api.roles import ADMIN, GUEST, MEMBER, SELLER, RoleSpec
from src.api.store import MarketplaceStore
from src.api.tokens import TokenCodec
from tests.api.support import SpyDBClient, api_test_client, bearer, build_test_config, seed_account

ADMIN_SEARCH = "/api/v1/shoppingMall/adminUser/memberUsers"
MEMBER_SEARCH = "/api/v1/shoppingMall/memberUser/coupons"
SELLER_SEARCH = "/api/v1/shoppingMall/sellerUser/sales"
GUEST_PAYMENTS = "/api/v1/shoppingMall/guestUser/orders/missing-order/payments"


def test_valid_admin_token_passes(marketplace_db: DatabaseClient, store: MarketplaceStore) -> None:
    config = build_test_config()
    admin = seed_account(store, ADMIN)
    with api_test_client(config=config, db_client=marketplace_db) as client:
        response = client.patch(ADMIN_SEARCH, json={}, headers=bearer(config, admin["id"], "adminuser"))

    assert response.status_code == 200


def test_check_enrollment_returns_payload_unchanged(store: MarketplaceStore) -> None:
    config = build_test_config()
    member = seed_account(store, MEMBER)
    codec = TokenCodec(config=config)
    payload = codec.decode(codec.issue(subject_id=member["id"], role_type="memberuser").access)

    assert check_enrollment(MEMBER, payload, store) is payload


@pytest.mark.parametrize(
    ("path", "role_type", "spec"),
    [
        (ADMIN_SEARCH, "memberuser", MEMBER),
        (ADMIN_SEARCH, "sellerUser", SELLER),
        (MEMBER_SEARCH, "adminuser", ADMIN),
        (SELLER_SEARCH, "guestuser", GUEST),
    ],
)
def test_role_mismatch_reports_actual_role(
    marketplace_db: DatabaseClient,
    store: MarketplaceStore,
    path: str,
    role_type: str,
    spec: RoleSpec,
) -> None:
    config = build_test_config()
    account = seed_account(store, spec)
    with api_test_client(config=config, db_client=marketplace_db) as client:
        response = client.patch(path, json={}, headers=bearer(config, account["id"], role_type))

    assert response.status_code == 403
    payload = response.json()
    assert payload["error_code"] == "FORBIDDEN"
    assert payload["message"] == f"You're not {role_type}"


def test_soft_deleted_admin_is_rejected(marketplace_db: DatabaseClient, store: MarketplaceStore) -> None:
    config = build_test_config()
    admin = seed_account(store, ADMIN, deleted_at=utc_now())
    with api_test_client(config=config, db_client=marketplace_db) as client:
        response = client.patch(ADMIN_SEARCH, json={}, headers=bearer(config, admin["id"], "adminuser"))

    assert response.status_code == 403
    assert response.json()["message"] == "You're not enrolled or inactive"


def test_inactive_member_is_rejected(marketplace_db: DatabaseClient, store: MarketplaceStore) -> None:
    config = build_test_config()
    member = seed_account(store, MEMBER, status="suspended")
    with api_test_client(config=config, db_client=marketplace_db) as client:
        response = client.patch(
            MEMBER_SEARCH, json={}, headers=bearer(config, member["id"], "memberuser")
        )

    assert response.status_code == 403
    assert response.json()["message"] == "You're not enrolled or inactive"


def test_pending_seller_is_rejected(marketplace_db: DatabaseClient, store: MarketplaceStore) -> None:
    config = build_test_config()
    seller = seed_account(store, SELLER, status="pending")
    with api_test_client(config=config, db_client=marketplace_db) as client:
        response = client.patch(
            SELLER_SEARCH, json={}, headers=bearer(config, seller["id"], "sellerUser")
        )

    assert response.status_code == 403
    assert response.json()["message"] == "You're not enrolled or inactive"


def test_soft_deleted_guest_is_rejected(marketplace_db: DatabaseClient, store: MarketplaceStore) -> None:
    config = build_test_config()
    guest = seed_account(store, GUEST, deleted_at=utc_now())
    with api_test_client(config=config, db_client=marketplace_db) as client:
        response = client.patch(
            GUEST_PAYMENTS, json={}, headers=bearer(config, guest["id"], "guestuser")
        )

    assert response.status_code == 403
    assert response.json()["message"] == "You're not enrolled"


def test_active_guest_passes_without_status_check(
    marketplace_db: DatabaseClient, store: MarketplaceStore
) -> None:
    config = build_test_config()
    guest = seed_account(store, GUEST)
    with api_test_client(config=config, db_client=marketplace_db) as client:
        response = client.patch(
            GUEST_PAYMENTS, json={}, headers=bearer(config, guest["id"], "guestuser")
        )

    # Authorized, then the handler reports the unknown order.
    assert response.status_code == 404


def test_missing_header_is_rejected_before_any_query(marketplace_db: DatabaseClient) -> None:
    spy = SpyDBClient(marketplace_db)
    with api_test_client(db_client=spy) as client:
        response = client.patch(ADMIN_SEARCH, json={})

    assert response.status_code == 401
    assert response.json()["error_code"] == "UNAUTHENTICATED"
    assert response.headers["www-authenticate"] == "Bearer"
    assert spy.calls == []


def test_malformed_token_is_rejected_before_any_query(marketplace_db: DatabaseClient) -> None:
    spy = SpyDBClient(marketplace_db)
    with api_test_client(db_client=spy) as client:
        response = client.patch(
            ADMIN_SEARCH, json={}, headers={"Authorization": "Bearer not-a-jwt"}
        )

    assert response.status_code == 401
    assert spy.calls == []


def test_expired_token_is_rejected(marketplace_db: DatabaseClient, store: MarketplaceStore) -> None:
    config = build_test_config()
    admin = seed_account(store, ADMIN)
    issued = datetime.now(tz=UTC) - timedelta(hours=2)
    token = TokenCodec(config=config).encode(
        subject_id=admin["id"],
        role_type="adminuser",
        token_type="access",
        issued_at=issued,
        expires_at=issued + timedelta(minutes=5),
    )
    with api_test_client(config=config, db_client=marketplace_db) as client:
        response = client.patch(
            ADMIN_SEARCH, json={}, headers={"Authorization": f"Bearer {token}"}
        )

    assert response.status_code == 401
    assert response.json()["message"] == "Token has expired."


def test_token_signed_with_other_secret_is_rejected(
    marketplace_db: DatabaseClient, store: MarketplaceStore
) -> None:
    config = build_test_config()
    admin = seed_account(store, ADMIN)
    forged = bearer(build_test_config(jwt_secret_key="someone-else"), admin["id"], "adminuser")
    with api_test_client(config=config, db_client=marketplace_db) as client:
        response = client.patch(ADMIN_SEARCH, json={}, headers=forged)

    assert response.status_code == 401


def test_refresh_token_cannot_be_used_for_access(
    marketplace_db: DatabaseClient, store: MarketplaceStore
) -> None:
    config = build_test_config()
    admin = seed_account(store, ADMIN)
    tokens = TokenCodec(config=config).issue(subject_id=admin["id"], role_type="adminuser")
    with api_test_client(config=config, db_client=marketplace_db) as client:
        response = client.patch(
            ADMIN_SEARCH, json={}, headers={"Authorization": f"Bearer {tokens.refresh}"}
        )

    assert response.status_code == 401


def test_check_enrollment_raises_forbidden_for_unknown_subject(store: MarketplaceStore) -> None:
    config = build_test_config()
    codec = TokenCodec(config=config)
    payload = codec.decode(codec.issue(subject_id="ghost", role_type="adminuser").access)

    with pytest.raises(ForbiddenError, match="You're not enrolled or inactive"):
        check_enrollment(ADMIN, payload, store)
