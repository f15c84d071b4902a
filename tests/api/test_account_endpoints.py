# This file tests the admin account-management endpoints.
# Searches answer with a page envelope and hide soft-deleted accounts.
# Deletes stamp `deleted_at` without touching other fields, and a missing id is a 404
# with no write issued.

from __future__ import annotations

from datetime import datetime

import pytest

from src.api.db_access import DatabaseClient
from src.api.roles import ADMIN, GUEST, MEMBER, SELLER, RoleSpec
from src.api.store import MarketplaceStore
from tests.api.support import (
    SpyDBClient,
    api_test_client,
    at,
    bearer,
    build_test_config,
    seed_account,
)

ADMIN_BASE = "/api/v1/shoppingMall/adminUser"


@pytest.fixture
def admin_headers(store: MarketplaceStore) -> dict[str, str]:
    admin = seed_account(store, ADMIN)
    return bearer(build_test_config(), admin["id"], "adminuser")


def test_member_search_pages_results(
    marketplace_db: DatabaseClient, store: MarketplaceStore, admin_headers: dict[str, str]
) -> None:
    for index in range(12):
        seed_account(store, MEMBER, nickname=f"member-{index:02d}", created_at=at(index))

    with api_test_client(db_client=marketplace_db) as client:
        response = client.patch(
            f"{ADMIN_BASE}/memberUsers",
            json={"page": 2, "limit": 5, "sort": "nickname:asc"},
            headers=admin_headers,
        )

    assert response.status_code == 200
    payload = response.json()
    assert payload["pagination"] == {"current": 2, "limit": 5, "records": 12, "pages": 3}
    assert [row["nickname"] for row in payload["data"]] == [
        f"member-{index:02d}" for index in range(5, 10)
    ]
    assert "password_hash" not in payload["data"][0]


def test_member_search_filters_by_text_and_status(
    marketplace_db: DatabaseClient, store: MarketplaceStore, admin_headers: dict[str, str]
) -> None:
    seed_account(store, MEMBER, full_name="Grace Hopper")
    seed_account(store, MEMBER, full_name="Grace Kelly", status="suspended")
    seed_account(store, MEMBER, full_name="Alan Turing")

    with api_test_client(db_client=marketplace_db) as client:
        response = client.patch(
            f"{ADMIN_BASE}/memberUsers",
            json={"search": "grace", "status": "active"},
            headers=admin_headers,
        )

    assert response.status_code == 200
    assert [row["full_name"] for row in response.json()["data"]] == ["Grace Hopper"]


def test_search_rejects_unknown_body_fields(
    marketplace_db: DatabaseClient, admin_headers: dict[str, str]
) -> None:
    with api_test_client(db_client=marketplace_db) as client:
        response = client.patch(
            f"{ADMIN_BASE}/sellerUsers", json={"colour": "blue"}, headers=admin_headers
        )

    assert response.status_code == 422


def test_guest_search_filters_by_session_window(
    marketplace_db: DatabaseClient, store: MarketplaceStore, admin_headers: dict[str, str]
) -> None:
    seed_account(store, GUEST, session_start_at=at(0))
    inside = seed_account(store, GUEST, session_start_at=at(60))
    seed_account(store, GUEST, session_start_at=at(240))

    with api_test_client(db_client=marketplace_db) as client:
        response = client.patch(
            f"{ADMIN_BASE}/guestUsers",
            json={
                "session_start_after": at(30).isoformat(),
                "session_start_before": at(120).isoformat(),
            },
            headers=admin_headers,
        )

    assert response.status_code == 200
    assert [row["id"] for row in response.json()["data"]] == [inside["id"]]


def test_get_admin_user_returns_profile(
    marketplace_db: DatabaseClient, store: MarketplaceStore, admin_headers: dict[str, str]
) -> None:
    other = seed_account(store, ADMIN, nickname="second")
    with api_test_client(db_client=marketplace_db) as client:
        response = client.get(f"{ADMIN_BASE}/adminUsers/{other['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["nickname"] == "second"
    assert "password_hash" not in response.json()


def test_get_missing_admin_user_is_not_found(
    marketplace_db: DatabaseClient, admin_headers: dict[str, str]
) -> None:
    with api_test_client(db_client=marketplace_db) as client:
        response = client.get(f"{ADMIN_BASE}/adminUsers/missing", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["error_code"] == "NOT_FOUND"


def test_update_seller_changes_only_given_fields(
    marketplace_db: DatabaseClient, store: MarketplaceStore, admin_headers: dict[str, str]
) -> None:
    seller = seed_account(store, SELLER, status="pending", nickname="old-name")
    with api_test_client(db_client=marketplace_db) as client:
        response = client.put(
            f"{ADMIN_BASE}/sellerUsers/{seller['id']}",
            json={"nickname": "new-name"},
            headers=admin_headers,
        )

    assert response.status_code == 200
    payload = response.json()
    assert payload["nickname"] == "new-name"
    assert payload["status"] == "pending"
    assert payload["business_registration_number"] == seller["business_registration_number"]


def test_update_missing_seller_is_not_found(
    marketplace_db: DatabaseClient, admin_headers: dict[str, str]
) -> None:
    with api_test_client(db_client=marketplace_db) as client:
        response = client.put(
            f"{ADMIN_BASE}/sellerUsers/missing", json={"status": "active"}, headers=admin_headers
        )

    assert response.status_code == 404


@pytest.mark.parametrize(
    ("path", "spec"),
    [("sellerUsers", SELLER), ("memberUsers", MEMBER), ("guestUsers", GUEST)],
)
def test_delete_marks_record_deleted(
    marketplace_db: DatabaseClient,
    store: MarketplaceStore,
    admin_headers: dict[str, str],
    path: str,
    spec: RoleSpec,
) -> None:
    account = seed_account(store, spec)
    before = store.find_by_id(spec.entity, account["id"])

    with api_test_client(db_client=marketplace_db) as client:
        response = client.delete(f"{ADMIN_BASE}/{path}/{account['id']}", headers=admin_headers)

    assert response.status_code == 204
    assert response.content == b""
    assert store.find_by_id(spec.entity, account["id"]) is None

    after = store.find_by_id(spec.entity, account["id"], include_deleted=True)
    assert after is not None
    assert after["deleted_at"] is not None
    assert {key: value for key, value in after.items() if key != "deleted_at"} == {
        key: value for key, value in before.items() if key != "deleted_at"
    }


def test_delete_missing_record_is_not_found_without_writes(
    marketplace_db: DatabaseClient, admin_headers: dict[str, str]
) -> None:
    spy = SpyDBClient(marketplace_db)
    with api_test_client(db_client=spy) as client:
        response = client.delete(f"{ADMIN_BASE}/memberUsers/missing", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["details"] == {"entity": "memberusers", "id": "missing"}
    assert spy.writes == []


def test_repeated_delete_overwrites_timestamp(
    marketplace_db: DatabaseClient,
    store: MarketplaceStore,
    admin_headers: dict[str, str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    member = seed_account(store, MEMBER)
    stamps = iter([at(10), at(20)])
    monkeypatch.setattr("src.api.services.base.utc_now", lambda: next(stamps))

    with api_test_client(db_client=marketplace_db) as client:
        first = client.delete(f"{ADMIN_BASE}/memberUsers/{member['id']}", headers=admin_headers)
        second = client.delete(f"{ADMIN_BASE}/memberUsers/{member['id']}", headers=admin_headers)

    assert first.status_code == 204
    assert second.status_code == 204
    stored = store.find_by_id("memberusers", member["id"], include_deleted=True)
    assert stored is not None
    assert datetime.fromisoformat(str(stored["deleted_at"])) == at(20)


def test_deleted_accounts_are_hidden_from_search(
    marketplace_db: DatabaseClient, store: MarketplaceStore, admin_headers: dict[str, str]
) -> None:
    kept = seed_account(store, SELLER)
    seed_account(store, SELLER, deleted_at=at(5))

    with api_test_client(db_client=marketplace_db) as client:
        response = client.patch(f"{ADMIN_BASE}/sellerUsers", json={}, headers=admin_headers)

    payload = response.json()
    assert payload["pagination"]["records"] == 1
    assert [row["id"] for row in payload["data"]] == [kept["id"]]
