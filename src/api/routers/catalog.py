# This file defines catalog endpoints for admins, sellers and members.
# Admins manage channels, channel-category links, category relations, sales and inventory;
# sellers search their own sales with their units, snapshots and inventory. Members browse
# snapshots and inventory audits.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from src.api.authorization import AdminUserDep, MemberUserDep, SellerUserDep
from src.api.dependencies import get_catalog_service
from src.api.schemas.catalog_schemas import (
    CategoryRelationRequest,
    CategoryRelationSummary,
    Channel,
    ChannelCategory,
    ChannelCategoryCreate,
    ChannelCategoryUpdate,
    ChannelCreate,
    ChannelRequest,
    ChildRelationCreate,
    ChildRelationUpdate,
    InventoryAuditRequest,
    InventoryRequest,
    PageCategoryRelationSummary,
    PageChannelSummary,
    PageInventoryAuditSummary,
    PageInventorySummary,
    PageSaleSnapshotSummary,
    PageSaleSummary,
    PageSaleUnitOptionSummary,
    PageSaleUnitSummary,
    PageSnapshotSummary,
    ParentRelationUpdate,
    SaleRequest,
    SaleSnapshotRequest,
    SaleUnitOptionRequest,
    SaleUnitRequest,
    SnapshotRequest,
)
from src.api.schemas.common import ERROR_RESPONSES
from src.api.services.catalog_service import CatalogService

router = APIRouter(prefix="/shoppingMall", tags=["catalog"], responses=ERROR_RESPONSES)
CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]


@router.patch("/adminUser/channels", response_model=PageChannelSummary)
def search_channels(
    admin_user: AdminUserDep, body: ChannelRequest, service: CatalogServiceDep
) -> dict[str, object]:
    return service.search_channels(body)


@router.post(
    "/adminUser/channels",
    response_model=Channel,
    status_code=status.HTTP_201_CREATED,
)
def create_channel(
    admin_user: AdminUserDep, body: ChannelCreate, service: CatalogServiceDep
) -> dict[str, object]:
    return service.create_channel(body)


@router.post(
    "/adminUser/channelCategories",
    response_model=ChannelCategory,
    status_code=status.HTTP_201_CREATED,
)
def create_channel_category(
    admin_user: AdminUserDep, body: ChannelCategoryCreate, service: CatalogServiceDep
) -> dict[str, object]:
    return service.create_channel_category(body)


@router.put("/adminUser/channelCategories/{channel_category_id}", response_model=ChannelCategory)
def update_channel_category(
    admin_user: AdminUserDep,
    channel_category_id: str,
    body: ChannelCategoryUpdate,
    service: CatalogServiceDep,
) -> dict[str, object]:
    return service.update_channel_category(channel_category_id, body)


@router.patch(
    "/adminUser/categories/{category_id}/categoryRelations/child",
    response_model=PageCategoryRelationSummary,
)
def search_child_relations(
    admin_user: AdminUserDep,
    category_id: str,
    body: CategoryRelationRequest,
    service: CatalogServiceDep,
) -> dict[str, object]:
    return service.search_child_relations(category_id, body)


@router.patch(
    "/adminUser/categories/{category_id}/categoryRelations/parent",
    response_model=PageCategoryRelationSummary,
)
def search_parent_relations(
    admin_user: AdminUserDep,
    category_id: str,
    body: CategoryRelationRequest,
    service: CatalogServiceDep,
) -> dict[str, object]:
    return service.search_parent_relations(category_id, body)


@router.post(
    "/adminUser/categories/{category_id}/categoryRelations/child",
    response_model=CategoryRelationSummary,
    status_code=status.HTTP_201_CREATED,
)
def create_child_relation(
    admin_user: AdminUserDep,
    category_id: str,
    body: ChildRelationCreate,
    service: CatalogServiceDep,
) -> dict[str, object]:
    return service.create_child_relation(category_id, body)


@router.put(
    "/adminUser/categories/{category_id}/categoryRelations/child/{relation_id}",
    response_model=CategoryRelationSummary,
)
def update_child_relation(
    admin_user: AdminUserDep,
    category_id: str,
    relation_id: str,
    body: ChildRelationUpdate,
    service: CatalogServiceDep,
) -> dict[str, object]:
    return service.update_child_relation(category_id, relation_id, body)


@router.put(
    "/adminUser/categories/{category_id}/categoryRelations/parent/{relation_id}",
    response_model=CategoryRelationSummary,
)
def update_parent_relation(
    admin_user: AdminUserDep,
    category_id: str,
    relation_id: str,
    body: ParentRelationUpdate,
    service: CatalogServiceDep,
) -> dict[str, object]:
    return service.update_parent_relation(category_id, relation_id, body)


@router.patch("/adminUser/sales", response_model=PageSaleSummary)
def admin_search_sales(
    admin_user: AdminUserDep, body: SaleRequest, service: CatalogServiceDep
) -> dict[str, object]:
    return service.search_sales(body)


@router.delete("/adminUser/sales/{sale_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sale(admin_user: AdminUserDep, sale_id: str, service: CatalogServiceDep) -> Response:
    service.delete_sale(sale_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/adminUser/inventory", response_model=PageInventorySummary)
def admin_search_inventory(
    admin_user: AdminUserDep, body: InventoryRequest, service: CatalogServiceDep
) -> dict[str, object]:
    return service.search_inventory(body)


@router.patch("/sellerUser/sales", response_model=PageSaleSummary)
def seller_search_sales(
    seller_user: SellerUserDep, body: SaleRequest, service: CatalogServiceDep
) -> dict[str, object]:
    return service.search_sales(body, seller_user_id=seller_user.id)


@router.patch("/sellerUser/inventory", response_model=PageInventorySummary)
def seller_search_inventory(
    seller_user: SellerUserDep, body: InventoryRequest, service: CatalogServiceDep
) -> dict[str, object]:
    return service.search_seller_inventory(seller_user.id, body)


@router.patch("/adminUser/sales/{sale_id}/saleUnits", response_model=PageSaleUnitSummary)
def admin_search_sale_units(
    admin_user: AdminUserDep, sale_id: str, body: SaleUnitRequest, service: CatalogServiceDep
) -> dict[str, object]:
    return service.search_sale_units(sale_id, body)


@router.patch("/sellerUser/sales/{sale_id}/saleUnits", response_model=PageSaleUnitSummary)
def seller_search_sale_units(
    seller_user: SellerUserDep, sale_id: str, body: SaleUnitRequest, service: CatalogServiceDep
) -> dict[str, object]:
    return service.search_sale_units(sale_id, body, seller_user_id=seller_user.id)


@router.patch(
    "/adminUser/sales/{sale_id}/saleUnits/{sale_unit_id}/saleUnitOptions",
    response_model=PageSaleUnitOptionSummary,
)
def admin_search_sale_unit_options(
    admin_user: AdminUserDep,
    sale_id: str,
    sale_unit_id: str,
    body: SaleUnitOptionRequest,
    service: CatalogServiceDep,
) -> dict[str, object]:
    return service.search_sale_unit_options(sale_id, sale_unit_id, body)


@router.patch(
    "/sellerUser/sales/{sale_id}/saleUnits/{sale_unit_id}/saleUnitOptions",
    response_model=PageSaleUnitOptionSummary,
)
def seller_search_sale_unit_options(
    seller_user: SellerUserDep,
    sale_id: str,
    sale_unit_id: str,
    body: SaleUnitOptionRequest,
    service: CatalogServiceDep,
) -> dict[str, object]:
    return service.search_sale_unit_options(
        sale_id, sale_unit_id, body, seller_user_id=seller_user.id
    )


@router.patch("/adminUser/sales/{sale_id}/snapshots", response_model=PageSaleSnapshotSummary)
def admin_search_sale_snapshots(
    admin_user: AdminUserDep, sale_id: str, body: SaleSnapshotRequest, service: CatalogServiceDep
) -> dict[str, object]:
    return service.search_sale_snapshots(sale_id, body)


@router.patch("/sellerUser/sales/{sale_id}/snapshots", response_model=PageSaleSnapshotSummary)
def seller_search_sale_snapshots(
    seller_user: SellerUserDep, sale_id: str, body: SaleSnapshotRequest, service: CatalogServiceDep
) -> dict[str, object]:
    return service.search_sale_snapshots(sale_id, body, seller_user_id=seller_user.id)


@router.patch("/memberUser/snapshots", response_model=PageSnapshotSummary)
def member_search_snapshots(
    member_user: MemberUserDep, body: SnapshotRequest, service: CatalogServiceDep
) -> dict[str, object]:
    return service.search_snapshots(body)


@router.patch("/memberUser/inventoryAudits", response_model=PageInventoryAuditSummary)
def member_search_inventory_audits(
    member_user: MemberUserDep, body: InventoryAuditRequest, service: CatalogServiceDep
) -> dict[str, object]:
    return service.search_inventory_audits(body)
