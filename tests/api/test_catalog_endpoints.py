# This file tests the catalog endpoints: channels, channel categories, category relations,
# sales and inventory. Sellers only ever see their own sales and the inventory behind them.

from __future__ import annotations

from typing import Any

import pytest

from src.api.db_access import DatabaseClient
from src.api.roles import ADMIN, SELLER
from src.api.store import MarketplaceStore
from tests.api.support import api_test_client, at, bearer, build_test_config, seed, seed_account

MALL = "/api/v1/shoppingMall"


@pytest.fixture
def admin_headers(store: MarketplaceStore) -> dict[str, str]:
    admin = seed_account(store, ADMIN)
    return bearer(build_test_config(), admin["id"], "adminuser")


def _channel(store: MarketplaceStore, code: str = "WEB") -> dict[str, Any]:
    return seed(store, "channels", code=code, name=f"{code} channel", status="active")


def _category(store: MarketplaceStore, code: str) -> dict[str, Any]:
    return seed(store, "categories", code=code, name=code.title(), status="active")


def _sale(
    store: MarketplaceStore, seller_id: str, channel_id: str, code: str, **values: Any
) -> dict[str, Any]:
    row = {
        "shopping_mall_channel_id": channel_id,
        "shopping_mall_seller_user_id": seller_id,
        "code": code,
        "status": "active",
        "name": f"Sale {code}",
        "price": 10.0,
    }
    row.update(values)
    return seed(store, "sales", **row)


def test_create_channel_and_search_it(
    marketplace_db: DatabaseClient, store: MarketplaceStore, admin_headers: dict[str, str]
) -> None:
    with api_test_client(db_client=marketplace_db) as client:
        created = client.post(
            f"{MALL}/adminUser/channels",
            json={"code": "APP", "name": "Mobile app"},
            headers=admin_headers,
        )
        found = client.patch(
            f"{MALL}/adminUser/channels", json={"search": "mobile"}, headers=admin_headers
        )

    assert created.status_code == 201
    assert created.json()["status"] == "active"
    assert [row["id"] for row in found.json()["data"]] == [created.json()["id"]]


def test_duplicate_channel_code_conflicts(
    marketplace_db: DatabaseClient, store: MarketplaceStore, admin_headers: dict[str, str]
) -> None:
    _channel(store, "APP")
    with api_test_client(db_client=marketplace_db) as client:
        response = client.post(
            f"{MALL}/adminUser/channels",
            json={"code": "APP", "name": "Again"},
            headers=admin_headers,
        )

    assert response.status_code == 409


def test_channel_category_requires_existing_references(
    marketplace_db: DatabaseClient, store: MarketplaceStore, admin_headers: dict[str, str]
) -> None:
    channel = _channel(store)
    category = _category(store, "shoes")
    with api_test_client(db_client=marketplace_db) as client:
        created = client.post(
            f"{MALL}/adminUser/channelCategories",
            json={
                "shopping_mall_channel_id": channel["id"],
                "shopping_mall_category_id": category["id"],
            },
            headers=admin_headers,
        )
        missing = client.post(
            f"{MALL}/adminUser/channelCategories",
            json={
                "shopping_mall_channel_id": channel["id"],
                "shopping_mall_category_id": "missing",
            },
            headers=admin_headers,
        )

    assert created.status_code == 201
    assert missing.status_code == 404


def test_update_channel_category_moves_link(
    marketplace_db: DatabaseClient, store: MarketplaceStore, admin_headers: dict[str, str]
) -> None:
    channel = _channel(store)
    shoes = _category(store, "shoes")
    bags = _category(store, "bags")
    link = seed(
        store,
        "channel_categories",
        shopping_mall_channel_id=channel["id"],
        shopping_mall_category_id=shoes["id"],
    )
    with api_test_client(db_client=marketplace_db) as client:
        response = client.put(
            f"{MALL}/adminUser/channelCategories/{link['id']}",
            json={"shopping_mall_category_id": bags["id"]},
            headers=admin_headers,
        )

    assert response.status_code == 200
    assert response.json()["shopping_mall_category_id"] == bags["id"]
    assert response.json()["shopping_mall_channel_id"] == channel["id"]


def test_child_and_parent_relations(
    marketplace_db: DatabaseClient, store: MarketplaceStore, admin_headers: dict[str, str]
) -> None:
    clothing = _category(store, "clothing")
    shirts = _category(store, "shirts")
    base = f"{MALL}/adminUser/categories"
    with api_test_client(db_client=marketplace_db) as client:
        created = client.post(
            f"{base}/{clothing['id']}/categoryRelations/child",
            json={"child_shopping_mall_category_id": shirts["id"]},
            headers=admin_headers,
        )
        children = client.patch(
            f"{base}/{clothing['id']}/categoryRelations/child", json={}, headers=admin_headers
        )
        parents = client.patch(
            f"{base}/{shirts['id']}/categoryRelations/parent", json={}, headers=admin_headers
        )

    assert created.status_code == 201
    relation_id = created.json()["id"]
    assert [row["id"] for row in children.json()["data"]] == [relation_id]
    assert [row["id"] for row in parents.json()["data"]] == [relation_id]


def test_category_cannot_be_its_own_child(
    marketplace_db: DatabaseClient, store: MarketplaceStore, admin_headers: dict[str, str]
) -> None:
    clothing = _category(store, "clothing")
    with api_test_client(db_client=marketplace_db) as client:
        response = client.post(
            f"{MALL}/adminUser/categories/{clothing['id']}/categoryRelations/child",
            json={"child_shopping_mall_category_id": clothing["id"]},
            headers=admin_headers,
        )

    assert response.status_code == 400
    assert response.json()["error_code"] == "INVALID_RELATION"


def test_update_relation_must_belong_to_category(
    marketplace_db: DatabaseClient, store: MarketplaceStore, admin_headers: dict[str, str]
) -> None:
    clothing = _category(store, "clothing")
    shirts = _category(store, "shirts")
    hats = _category(store, "hats")
    relation = seed(
        store,
        "category_relations",
        parent_shopping_mall_category_id=clothing["id"],
        child_shopping_mall_category_id=shirts["id"],
    )
    base = f"{MALL}/adminUser/categories"
    with api_test_client(db_client=marketplace_db) as client:
        moved = client.put(
            f"{base}/{clothing['id']}/categoryRelations/child/{relation['id']}",
            json={"child_shopping_mall_category_id": hats["id"]},
            headers=admin_headers,
        )
        foreign = client.put(
            f"{base}/{hats['id']}/categoryRelations/child/{relation['id']}",
            json={"child_shopping_mall_category_id": shirts["id"]},
            headers=admin_headers,
        )
        reparented = client.put(
            f"{base}/{hats['id']}/categoryRelations/parent/{relation['id']}",
            json={"parent_shopping_mall_category_id": shirts["id"]},
            headers=admin_headers,
        )

    assert moved.status_code == 200
    assert moved.json()["child_shopping_mall_category_id"] == hats["id"]
    assert foreign.status_code == 404
    assert reparented.status_code == 200
    assert reparented.json()["parent_shopping_mall_category_id"] == shirts["id"]


def test_admin_sales_search_and_delete(
    marketplace_db: DatabaseClient, store: MarketplaceStore, admin_headers: dict[str, str]
) -> None:
    seller = seed_account(store, SELLER)
    channel = _channel(store)
    cheap = _sale(store, seller["id"], channel["id"], "S1", price=5.0, created_at=at(0))
    dear = _sale(store, seller["id"], channel["id"], "S2", price=50.0, created_at=at(1))

    with api_test_client(db_client=marketplace_db) as client:
        ranged = client.patch(
            f"{MALL}/adminUser/sales", json={"min_price": 10, "max_price": 100}, headers=admin_headers
        )
        deleted = client.delete(f"{MALL}/adminUser/sales/{cheap['id']}", headers=admin_headers)
        remaining = client.patch(f"{MALL}/adminUser/sales", json={}, headers=admin_headers)

    assert [row["id"] for row in ranged.json()["data"]] == [dear["id"]]
    assert deleted.status_code == 204
    assert [row["id"] for row in remaining.json()["data"]] == [dear["id"]]


def test_seller_sales_are_scoped_to_caller(
    marketplace_db: DatabaseClient, store: MarketplaceStore
) -> None:
    config = build_test_config()
    mine = seed_account(store, SELLER)
    theirs = seed_account(store, SELLER)
    channel = _channel(store)
    own_sale = _sale(store, mine["id"], channel["id"], "MINE")
    _sale(store, theirs["id"], channel["id"], "THEIRS")

    with api_test_client(config=config, db_client=marketplace_db) as client:
        response = client.patch(
            f"{MALL}/sellerUser/sales",
            json={"shopping_mall_seller_user_id": theirs["id"]},
            headers=bearer(config, mine["id"], "sellerUser"),
        )

    assert response.status_code == 200
    assert [row["id"] for row in response.json()["data"]] == [own_sale["id"]]


def test_seller_inventory_access(marketplace_db: DatabaseClient, store: MarketplaceStore) -> None:
    config = build_test_config()
    mine = seed_account(store, SELLER)
    theirs = seed_account(store, SELLER)
    channel = _channel(store)
    own_sale = _sale(store, mine["id"], channel["id"], "MINE")
    other_sale = _sale(store, theirs["id"], channel["id"], "THEIRS")
    stock = seed(
        store,
        "inventory",
        shopping_mall_sale_id=own_sale["id"],
        option_combination_code="RED-M",
        stock_quantity=4,
    )
    seed(
        store,
        "inventory",
        shopping_mall_sale_id=other_sale["id"],
        option_combination_code="BLUE-L",
        stock_quantity=9,
    )
    headers = bearer(config, mine["id"], "sellerUser")
    path = f"{MALL}/sellerUser/inventory"

    with api_test_client(config=config, db_client=marketplace_db) as client:
        own = client.patch(path, json={"sale_id": own_sale["id"]}, headers=headers)
        other = client.patch(path, json={"sale_id": other_sale["id"]}, headers=headers)
        unscoped = client.patch(path, json={}, headers=headers)

    assert [row["id"] for row in own.json()["data"]] == [stock["id"]]
    assert other.status_code == 403
    assert other.json()["message"] == "You have no access to this sale inventory"
    assert unscoped.status_code == 200
    assert unscoped.json()["data"] == []
    assert unscoped.json()["pagination"]["records"] == 0


def test_admin_inventory_filters_by_quantity(
    marketplace_db: DatabaseClient, store: MarketplaceStore, admin_headers: dict[str, str]
) -> None:
    seller = seed_account(store, SELLER)
    sale = _sale(store, seller["id"], _channel(store)["id"], "S1")
    seed(
        store,
        "inventory",
        shopping_mall_sale_id=sale["id"],
        option_combination_code="RED-S",
        stock_quantity=0,
    )
    stocked = seed(
        store,
        "inventory",
        shopping_mall_sale_id=sale["id"],
        option_combination_code="RED-L",
        stock_quantity=12,
    )
    with api_test_client(db_client=marketplace_db) as client:
        response = client.patch(
            f"{MALL}/adminUser/inventory",
            json={"sale_id": sale["id"], "min_quantity": 1},
            headers=admin_headers,
        )

    assert [row["id"] for row in response.json()["data"]] == [stocked["id"]]
