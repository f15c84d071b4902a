# This file tests registration, login and token refresh for every role.
# Responses must carry a usable token pair and never expose the stored password hash.
# Sellers register as pending and can only sign in after an admin activates them.

from __future__ import annotations

import pytest

from src.api.db_access import DatabaseClient
from src.api.roles import ADMIN, MEMBER
from src.api.store import MarketplaceStore
from src.api.tokens import TokenCodec
from tests.api.support import TEST_PASSWORD, api_test_client, at, build_test_config, seed_account

AUTH = "/api/v1/auth"


def _member_join_body(email: str = "Ada@Mall.Example") -> dict[str, str]:
    return {
        "email": email,
        "password": TEST_PASSWORD,
        "nickname": "ada",
        "full_name": "Ada Lovelace",
        "phone_number": "010-0000-0000",
    }


def _seller_join_body(email: str = "shop@mall.example", brn: str = "123-45-67890") -> dict[str, str]:
    return {
        "email": email,
        "password": TEST_PASSWORD,
        "nickname": "shop",
        "full_name": "Shop Owner",
        "business_registration_number": brn,
    }


def test_member_join_returns_account_and_tokens(marketplace_db: DatabaseClient) -> None:
    config = build_test_config()
    with api_test_client(config=config, db_client=marketplace_db) as client:
        response = client.post(f"{AUTH}/memberUser/join", json=_member_join_body())

    assert response.status_code == 201
    payload = response.json()
    assert payload["email"] == "ada@mall.example"
    assert payload["status"] == "active"
    assert "password_hash" not in payload
    assert "password" not in payload

    claims = TokenCodec(config=config).decode(payload["token"]["access"])
    assert claims.id == payload["id"]
    assert claims.type == "memberuser"
    assert claims.email == "ada@mall.example"


def test_password_is_stored_hashed(marketplace_db: DatabaseClient, store: MarketplaceStore) -> None:
    body = {
        "email": "root@mall.example",
        "password": TEST_PASSWORD,
        "nickname": "root",
        "full_name": "Root Admin",
    }
    with api_test_client(db_client=marketplace_db) as client:
        account_id = client.post(f"{AUTH}/adminUser/join", json=body).json()["id"]

    stored = store.find_by_id("adminusers", account_id)
    assert stored is not None
    assert stored["password_hash"] != TEST_PASSWORD
    assert stored["password_hash"].startswith("$2b$04$")


def test_duplicate_member_email_conflicts(marketplace_db: DatabaseClient) -> None:
    with api_test_client(db_client=marketplace_db) as client:
        first = client.post(f"{AUTH}/memberUser/join", json=_member_join_body())
        second = client.post(
            f"{AUTH}/memberUser/join", json=_member_join_body(email="ADA@mall.example")
        )

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error_code"] == "CONFLICT"


@pytest.mark.parametrize("password", ["short", "x" * 73])
def test_join_rejects_password_outside_length_bounds(
    marketplace_db: DatabaseClient, password: str
) -> None:
    body = _member_join_body() | {"password": password}
    with api_test_client(db_client=marketplace_db) as client:
        response = client.post(f"{AUTH}/memberUser/join", json=body)

    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"


def test_member_login_succeeds_with_correct_password(
    marketplace_db: DatabaseClient, store: MarketplaceStore
) -> None:
    config = build_test_config()
    member = seed_account(store, MEMBER, email="login@mall.example")
    with api_test_client(config=config, db_client=marketplace_db) as client:
        response = client.post(
            f"{AUTH}/memberUser/login",
            json={"email": "Login@Mall.example", "password": TEST_PASSWORD},
        )

    assert response.status_code == 200
    payload = response.json()
    assert payload["id"] == member["id"]
    assert TokenCodec(config=config).decode(payload["token"]["access"]).type == "memberuser"


def test_login_rejects_wrong_password(
    marketplace_db: DatabaseClient, store: MarketplaceStore
) -> None:
    seed_account(store, ADMIN, email="admin@mall.example")
    with api_test_client(db_client=marketplace_db) as client:
        response = client.post(
            f"{AUTH}/adminUser/login",
            json={"email": "admin@mall.example", "password": "not-the-password"},
        )

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_login_rejects_unknown_and_deleted_accounts(
    marketplace_db: DatabaseClient, store: MarketplaceStore
) -> None:
    seed_account(store, MEMBER, email="gone@mall.example", deleted_at=at(0))
    with api_test_client(db_client=marketplace_db) as client:
        unknown = client.post(
            f"{AUTH}/memberUser/login",
            json={"email": "nobody@mall.example", "password": TEST_PASSWORD},
        )
        deleted = client.post(
            f"{AUTH}/memberUser/login",
            json={"email": "gone@mall.example", "password": TEST_PASSWORD},
        )

    assert unknown.status_code == 401
    assert deleted.status_code == 401
    assert unknown.json()["message"] == deleted.json()["message"] == "Invalid credentials"


def test_refresh_issues_new_pair(marketplace_db: DatabaseClient, store: MarketplaceStore) -> None:
    config = build_test_config()
    admin = seed_account(store, ADMIN)
    refresh = TokenCodec(config=config).issue(subject_id=admin["id"], role_type="adminuser").refresh
    with api_test_client(config=config, db_client=marketplace_db) as client:
        response = client.post(f"{AUTH}/adminUser/refresh", json={"refresh_token": refresh})

    assert response.status_code == 200
    payload = response.json()
    assert payload["id"] == admin["id"]
    assert TokenCodec(config=config).decode(payload["token"]["access"]).id == admin["id"]


def test_refresh_rejects_access_token(
    marketplace_db: DatabaseClient, store: MarketplaceStore
) -> None:
    config = build_test_config()
    admin = seed_account(store, ADMIN)
    access = TokenCodec(config=config).issue(subject_id=admin["id"], role_type="adminuser").access
    with api_test_client(config=config, db_client=marketplace_db) as client:
        response = client.post(f"{AUTH}/adminUser/refresh", json={"refresh_token": access})

    assert response.status_code == 401


def test_refresh_rejects_other_role(marketplace_db: DatabaseClient, store: MarketplaceStore) -> None:
    config = build_test_config()
    member = seed_account(store, MEMBER)
    refresh = TokenCodec(config=config).issue(subject_id=member["id"], role_type="memberuser").refresh
    with api_test_client(config=config, db_client=marketplace_db) as client:
        response = client.post(f"{AUTH}/adminUser/refresh", json={"refresh_token": refresh})

    assert response.status_code == 401


def test_seller_joins_pending_and_logs_in_after_activation(
    marketplace_db: DatabaseClient, store: MarketplaceStore
) -> None:
    config = build_test_config()
    admin = seed_account(store, ADMIN)
    admin_headers = {
        "Authorization": "Bearer "
        + TokenCodec(config=config).issue(subject_id=admin["id"], role_type="adminuser").access
    }
    credentials = {"email": "shop@mall.example", "password": TEST_PASSWORD}

    with api_test_client(config=config, db_client=marketplace_db) as client:
        joined = client.post(f"{AUTH}/sellerUser/join", json=_seller_join_body())
        pending_login = client.post(f"{AUTH}/sellerUser/login", json=credentials)
        activated = client.put(
            f"/api/v1/shoppingMall/adminUser/sellerUsers/{joined.json()['id']}",
            json={"status": "active"},
            headers=admin_headers,
        )
        active_login = client.post(f"{AUTH}/sellerUser/login", json=credentials)

    assert joined.status_code == 201
    assert joined.json()["status"] == "pending"
    assert pending_login.status_code == 401
    assert activated.status_code == 200
    assert activated.json()["status"] == "active"
    assert active_login.status_code == 200
    assert TokenCodec(config=config).decode(active_login.json()["token"]["access"]).type == (
        "sellerUser"
    )


def test_duplicate_business_registration_number_conflicts(marketplace_db: DatabaseClient) -> None:
    with api_test_client(db_client=marketplace_db) as client:
        first = client.post(f"{AUTH}/sellerUser/join", json=_seller_join_body())
        second = client.post(
            f"{AUTH}/sellerUser/join",
            json=_seller_join_body(email="other@mall.example"),
        )

    assert first.status_code == 201
    assert second.status_code == 409


def test_guest_join_and_refresh(marketplace_db: DatabaseClient) -> None:
    config = build_test_config()
    with api_test_client(config=config, db_client=marketplace_db) as client:
        joined = client.post(
            f"{AUTH}/guestUser/join",
            json={"ip_address": "10.1.1.1", "access_url": "https://mall.example/"},
        )
        refreshed = client.post(
            f"{AUTH}/guestUser/refresh",
            json={"refresh_token": joined.json()["token"]["refresh"]},
        )

    assert joined.status_code == 201
    guest = joined.json()
    assert guest["session_end_at"] is None
    assert TokenCodec(config=config).decode(guest["token"]["access"]).type == "guestuser"
    assert refreshed.status_code == 200
    assert refreshed.json()["id"] == guest["id"]
