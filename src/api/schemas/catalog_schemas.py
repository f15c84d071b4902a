# This file defines catalog schemas: channels, channel-category links, category relations,
# sales with their units, unit options and snapshots, inventory and inventory audits.
# Search bodies add entity filters on top of the shared paging fields.

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from src.api.schemas.common import Page, PageRequest, StoredRecord

CatalogStatus = Literal["active", "inactive"]


class _Body(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ChannelSummary(StoredRecord):
    id: str
    code: str
    name: str
    description: str | None = None
    status: str
    created_at: datetime


class Channel(ChannelSummary):
    updated_at: datetime


class ChannelRequest(PageRequest):
    search: str | None = None
    status: str | None = None


class ChannelCreate(_Body):
    code: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str | None = None
    status: CatalogStatus = "active"


class ChannelCategory(StoredRecord):
    id: str
    shopping_mall_channel_id: str
    shopping_mall_category_id: str
    created_at: datetime
    updated_at: datetime


class ChannelCategoryCreate(_Body):
    shopping_mall_channel_id: str
    shopping_mall_category_id: str


class ChannelCategoryUpdate(_Body):
    shopping_mall_channel_id: str | None = None
    shopping_mall_category_id: str | None = None


class CategoryRelationSummary(StoredRecord):
    id: str
    parent_shopping_mall_category_id: str
    child_shopping_mall_category_id: str
    created_at: datetime
    updated_at: datetime


class CategoryRelationRequest(PageRequest):
    pass


class ChildRelationCreate(_Body):
    child_shopping_mall_category_id: str


class ChildRelationUpdate(_Body):
    child_shopping_mall_category_id: str


class ParentRelationUpdate(_Body):
    parent_shopping_mall_category_id: str


class SaleSummary(StoredRecord):
    id: str
    shopping_mall_channel_id: str
    shopping_mall_seller_user_id: str
    code: str
    status: str
    name: str
    price: float
    created_at: datetime


class SaleRequest(PageRequest):
    search: str | None = None
    status: str | None = None
    shopping_mall_channel_id: str | None = None
    shopping_mall_seller_user_id: str | None = None
    min_price: float | None = None
    max_price: float | None = None


class InventorySummary(StoredRecord):
    id: str
    shopping_mall_sale_id: str
    option_combination_code: str
    stock_quantity: int


class InventoryRequest(PageRequest):
    sale_id: str | None = None
    option_combination_code: str | None = None
    min_quantity: int | None = None
    max_quantity: int | None = None


class SaleUnitSummary(StoredRecord):
    id: str
    shopping_mall_sale_id: str
    code: str
    name: str
    description: str | None = None
    created_at: datetime


class SaleUnitRequest(PageRequest):
    search: str | None = None


class SaleUnitOptionSummary(StoredRecord):
    id: str
    shopping_mall_sale_unit_id: str
    shopping_mall_sale_option_id: str
    additional_price: float
    stock_quantity: int
    created_at: datetime


class SaleUnitOptionRequest(PageRequest):
    shopping_mall_sale_option_id: str | None = None


class SaleSnapshotSummary(StoredRecord):
    id: str
    shopping_mall_sale_id: str
    code: str
    status: str
    name: str
    description: str | None = None
    price: float
    created_at: datetime


class SaleSnapshotRequest(PageRequest):
    search: str | None = None
    statuses: list[str] | None = None
    min_price: float | None = None
    max_price: float | None = None
    created_after: datetime | None = None
    created_before: datetime | None = None


class SnapshotSummary(StoredRecord):
    id: str
    entity_type: str
    entity_id: str
    snapshot_data: str
    created_at: datetime


class SnapshotRequest(PageRequest):
    entity_type: str | None = None
    entity_id: str | None = None
    created_after: datetime | None = None
    created_before: datetime | None = None


class InventoryAuditSummary(StoredRecord):
    id: str
    inventory_id: str
    actor_user_id: str | None = None
    change_type: str
    quantity_changed: int
    change_reason: str | None = None
    changed_at: datetime


class InventoryAuditRequest(PageRequest):
    inventory_id: str | None = None
    actor_user_id: str | None = None
    change_type: str | None = None
    changed_after: datetime | None = None
    changed_before: datetime | None = None


PageChannelSummary = Page[ChannelSummary]
PageCategoryRelationSummary = Page[CategoryRelationSummary]
PageSaleSummary = Page[SaleSummary]
PageInventorySummary = Page[InventorySummary]
PageSaleUnitSummary = Page[SaleUnitSummary]
PageSaleUnitOptionSummary = Page[SaleUnitOptionSummary]
PageSaleSnapshotSummary = Page[SaleSnapshotSummary]
PageSnapshotSummary = Page[SnapshotSummary]
PageInventoryAuditSummary = Page[InventoryAuditSummary]
