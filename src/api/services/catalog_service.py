# This file implements catalog operations: channels, channel-category links,
# category relations, sales with their units, unit options and snapshots, inventory
# and inventory audits.
# Admins see the whole catalog; sellers are scoped to the sales they own.

from __future__ import annotations

import logging
from typing import Any

from src.api.error_handlers import APIError, ConflictError, ForbiddenError, NotFoundError
from src.api.filters import WhereBuilder
from src.api.schemas.catalog_schemas import (
    CategoryRelationRequest,
    ChannelCategoryCreate,
    ChannelCategoryUpdate,
    ChannelCreate,
    ChannelRequest,
    ChildRelationCreate,
    ChildRelationUpdate,
    InventoryAuditRequest,
    InventoryRequest,
    ParentRelationUpdate,
    SaleRequest,
    SaleSnapshotRequest,
    SaleUnitOptionRequest,
    SaleUnitRequest,
    SnapshotRequest,
)
from src.api.services.base import StoreService

logger = logging.getLogger(__name__)

CHANNEL_SORT_FIELDS: set[str] = {"id", "code", "name", "status", "created_at"}
RELATION_SORT_FIELDS: set[str] = {"id", "created_at", "updated_at"}
SALE_SORT_FIELDS: set[str] = {"id", "code", "name", "status", "price", "created_at"}
INVENTORY_SORT_FIELDS: set[str] = {
    "id",
    "option_combination_code",
    "stock_quantity",
    "created_at",
}
SALE_UNIT_SORT_FIELDS: set[str] = {"id", "code", "name", "created_at", "updated_at"}
SALE_UNIT_OPTION_SORT_FIELDS: set[str] = {
    "id",
    "additional_price",
    "stock_quantity",
    "created_at",
    "updated_at",
}
SALE_SNAPSHOT_SORT_FIELDS: set[str] = {"id", "code", "name", "status", "price", "created_at"}
SNAPSHOT_SORT_FIELDS: set[str] = {"id", "entity_type", "entity_id", "created_at"}
INVENTORY_AUDIT_SORT_FIELDS: set[str] = {"id", "change_type", "quantity_changed", "changed_at"}


class CatalogService(StoreService):
    """Catalog reads and writes for admin and seller users."""

    def search_channels(self, body: ChannelRequest) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .contains_any(("code", "name"), body.search)
            .equals("status", body.status)
        )
        return self._search_page(
            "channels",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=CHANNEL_SORT_FIELDS,
        )

    def create_channel(self, body: ChannelCreate) -> dict[str, Any]:
        if self.store.find_first("channels", WhereBuilder().equals("code", body.code)) is not None:
            raise ConflictError(f"Channel code {body.code!r} is already in use.")
        return self.store.insert("channels", body.model_dump())

    def _check_channel_and_category(self, *, channel_id: str | None, category_id: str | None) -> None:
        if channel_id is not None:
            self.store.find_unique_or_throw("channels", channel_id)
        if category_id is not None:
            self.store.find_unique_or_throw("categories", category_id)

    def create_channel_category(self, body: ChannelCategoryCreate) -> dict[str, Any]:
        self._check_channel_and_category(
            channel_id=body.shopping_mall_channel_id,
            category_id=body.shopping_mall_category_id,
        )
        return self.store.insert("channel_categories", body.model_dump())

    def update_channel_category(
        self, channel_category_id: str, body: ChannelCategoryUpdate
    ) -> dict[str, Any]:
        self.store.find_unique_or_throw("channel_categories", channel_category_id)
        self._check_channel_and_category(
            channel_id=body.shopping_mall_channel_id,
            category_id=body.shopping_mall_category_id,
        )
        return self.store.update(
            "channel_categories", channel_category_id, body.model_dump(exclude_none=True)
        )

    def search_child_relations(
        self, category_id: str, body: CategoryRelationRequest
    ) -> dict[str, Any]:
        self.store.find_unique_or_throw("categories", category_id)
        where = WhereBuilder().equals("parent_shopping_mall_category_id", category_id)
        return self._search_page(
            "category_relations",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=RELATION_SORT_FIELDS,
        )

    def search_parent_relations(
        self, category_id: str, body: CategoryRelationRequest
    ) -> dict[str, Any]:
        self.store.find_unique_or_throw("categories", category_id)
        where = WhereBuilder().equals("child_shopping_mall_category_id", category_id)
        return self._search_page(
            "category_relations",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=RELATION_SORT_FIELDS,
        )

    @staticmethod
    def _reject_self_relation(parent_id: str, child_id: str) -> None:
        if parent_id == child_id:
            raise APIError(
                status_code=400,
                error_code="INVALID_RELATION",
                message="A category cannot be related to itself.",
            )

    def create_child_relation(self, category_id: str, body: ChildRelationCreate) -> dict[str, Any]:
        self.store.find_unique_or_throw("categories", category_id)
        self.store.find_unique_or_throw("categories", body.child_shopping_mall_category_id)
        self._reject_self_relation(category_id, body.child_shopping_mall_category_id)
        return self.store.insert(
            "category_relations",
            {
                "parent_shopping_mall_category_id": category_id,
                "child_shopping_mall_category_id": body.child_shopping_mall_category_id,
            },
        )

    def _relation_of(self, relation_id: str, *, column: str, category_id: str) -> dict[str, Any]:
        relation = self.store.find_unique_or_throw("category_relations", relation_id)
        if relation[column] != category_id:
            raise NotFoundError(
                f"Relation {relation_id} does not belong to category {category_id}.",
                details={"entity": "category_relations", "id": relation_id},
            )
        return relation

    def update_child_relation(
        self, category_id: str, relation_id: str, body: ChildRelationUpdate
    ) -> dict[str, Any]:
        self._relation_of(relation_id, column="parent_shopping_mall_category_id", category_id=category_id)
        self.store.find_unique_or_throw("categories", body.child_shopping_mall_category_id)
        self._reject_self_relation(category_id, body.child_shopping_mall_category_id)
        return self.store.update("category_relations", relation_id, body.model_dump())

    def update_parent_relation(
        self, category_id: str, relation_id: str, body: ParentRelationUpdate
    ) -> dict[str, Any]:
        self._relation_of(relation_id, column="child_shopping_mall_category_id", category_id=category_id)
        self.store.find_unique_or_throw("categories", body.parent_shopping_mall_category_id)
        self._reject_self_relation(body.parent_shopping_mall_category_id, category_id)
        return self.store.update("category_relations", relation_id, body.model_dump())

    def search_sales(self, body: SaleRequest, *, seller_user_id: str | None = None) -> dict[str, Any]:
        """Search sales; a seller id pins the search to that seller's own sales."""

        owner_id = seller_user_id if seller_user_id is not None else body.shopping_mall_seller_user_id
        where = (
            WhereBuilder()
            .contains_any(("code", "name"), body.search)
            .equals("status", body.status)
            .equals("shopping_mall_channel_id", body.shopping_mall_channel_id)
            .equals("shopping_mall_seller_user_id", owner_id)
            .between("price", gte=body.min_price, lte=body.max_price)
        )
        return self._search_page(
            "sales",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=SALE_SORT_FIELDS,
        )

    def delete_sale(self, sale_id: str) -> None:
        self._soft_delete("sales", sale_id)

    def search_inventory(self, body: InventoryRequest) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .equals("shopping_mall_sale_id", body.sale_id)
            .contains("option_combination_code", body.option_combination_code)
            .between("stock_quantity", gte=body.min_quantity, lte=body.max_quantity)
        )
        return self._search_page(
            "inventory",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=INVENTORY_SORT_FIELDS,
        )

    def search_seller_inventory(self, seller_user_id: str, body: InventoryRequest) -> dict[str, Any]:
        """Inventory of one sale owned by the seller; no sale id yields an empty page."""

        if not body.sale_id:
            return self._empty_page(
                body, default_sort="created_at:desc", allowed_fields=INVENTORY_SORT_FIELDS
            )
        sale = self.store.find_by_id("sales", body.sale_id)
        if sale is None or sale["shopping_mall_seller_user_id"] != seller_user_id:
            logger.info("Seller %s denied inventory of sale %s", seller_user_id, body.sale_id)
            raise ForbiddenError("You have no access to this sale inventory")
        return self.search_inventory(body)

    def _sale_for(self, sale_id: str, *, seller_user_id: str | None) -> dict[str, Any]:
        """Load a sale; with a seller id the sale must also belong to that seller."""

        sale = self.store.find_unique_or_throw("sales", sale_id)
        if seller_user_id is not None and sale["shopping_mall_seller_user_id"] != seller_user_id:
            logger.info("Seller %s denied access to sale %s", seller_user_id, sale_id)
            raise ForbiddenError("You have no access to this sale")
        return sale

    def search_sale_units(
        self, sale_id: str, body: SaleUnitRequest, *, seller_user_id: str | None = None
    ) -> dict[str, Any]:
        self._sale_for(sale_id, seller_user_id=seller_user_id)
        where = (
            WhereBuilder()
            .equals("shopping_mall_sale_id", sale_id)
            .contains_any(("code", "name", "description"), body.search)
        )
        return self._search_page(
            "sale_units",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=SALE_UNIT_SORT_FIELDS,
        )

    def search_sale_unit_options(
        self,
        sale_id: str,
        sale_unit_id: str,
        body: SaleUnitOptionRequest,
        *,
        seller_user_id: str | None = None,
    ) -> dict[str, Any]:
        self._sale_for(sale_id, seller_user_id=seller_user_id)
        unit = self.store.find_unique_or_throw("sale_units", sale_unit_id)
        if unit["shopping_mall_sale_id"] != sale_id:
            raise NotFoundError(
                f"Sale unit {sale_unit_id} does not belong to sale {sale_id}.",
                details={"entity": "sale_units", "id": sale_unit_id},
            )
        where = (
            WhereBuilder()
            .equals("shopping_mall_sale_unit_id", sale_unit_id)
            .equals("shopping_mall_sale_option_id", body.shopping_mall_sale_option_id)
        )
        return self._search_page(
            "sale_unit_options",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=SALE_UNIT_OPTION_SORT_FIELDS,
        )

    def search_sale_snapshots(
        self, sale_id: str, body: SaleSnapshotRequest, *, seller_user_id: str | None = None
    ) -> dict[str, Any]:
        self._sale_for(sale_id, seller_user_id=seller_user_id)
        where = (
            WhereBuilder()
            .equals("shopping_mall_sale_id", sale_id)
            .contains_any(("code", "name", "description"), body.search)
            .in_("status", body.statuses)
            .between("price", gte=body.min_price, lte=body.max_price)
            .between("created_at", gte=body.created_after, lte=body.created_before)
        )
        return self._search_page(
            "sale_snapshots",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=SALE_SNAPSHOT_SORT_FIELDS,
        )

    def search_snapshots(self, body: SnapshotRequest) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .equals("entity_type", body.entity_type)
            .equals("entity_id", body.entity_id)
            .between("created_at", gte=body.created_after, lte=body.created_before)
        )
        return self._search_page(
            "snapshots",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=SNAPSHOT_SORT_FIELDS,
        )

    def search_inventory_audits(self, body: InventoryAuditRequest) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .equals("inventory_id", body.inventory_id)
            .equals("actor_user_id", body.actor_user_id)
            .equals("change_type", body.change_type)
            .between("changed_at", gte=body.changed_after, lte=body.changed_before)
        )
        return self._search_page(
            "inventory_audits",
            body,
            where,
            default_sort="changed_at:desc",
            allowed_fields=INVENTORY_AUDIT_SORT_FIELDS,
        )
