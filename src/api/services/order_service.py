# This file implements order-side operations: order items, payments, deliveries, order
# status history, audit logs, carts with their items and options, and favorite addresses.
# Every order-scoped call first loads the order (404 when missing), then checks that the
# caller may see it: members and guests own the order, sellers sell one of its items,
# admins see everything. Carts follow the same rule with the cart owner in place of the
# order owner.

from __future__ import annotations

import logging
from typing import Any

from src.api.error_handlers import ForbiddenError
from src.api.filters import WhereBuilder
from src.api.roles import ADMIN, GUEST, MEMBER, SELLER
from src.api.schemas.order_schemas import (
    CartItemOptionRequest,
    CartItemOptionUpdate,
    CartItemRequest,
    CartItemUpdate,
    DeliveryRequest,
    DeliveryUpdate,
    FavoriteAddressRequest,
    OrderAuditLogRequest,
    OrderItemRequest,
    OrderItemUpdate,
    OrderStatusHistoryRequest,
    PaymentCreate,
    PaymentRequest,
    PaymentUpdate,
)
from src.api.services.base import StoreService
from src.api.tokens import TokenPayload

logger = logging.getLogger(__name__)

ORDER_ITEM_SORT_FIELDS: set[str] = {
    "id",
    "quantity",
    "unit_price",
    "order_item_status",
    "created_at",
}
PAYMENT_SORT_FIELDS: set[str] = {
    "id",
    "payment_method",
    "payment_status",
    "payment_amount",
    "created_at",
}
DELIVERY_SORT_FIELDS: set[str] = {
    "id",
    "delivery_status",
    "delivery_stage",
    "expected_delivery_date",
    "created_at",
}
STATUS_HISTORY_SORT_FIELDS: set[str] = {"id", "old_status", "new_status", "changed_at"}
AUDIT_LOG_SORT_FIELDS: set[str] = {"id", "action", "performed_at"}
CART_ITEM_SORT_FIELDS: set[str] = {
    "id",
    "quantity",
    "unit_price",
    "status",
    "created_at",
    "updated_at",
}
CART_ITEM_OPTION_SORT_FIELDS: set[str] = {"id", "created_at"}
FAVORITE_ADDRESS_SORT_FIELDS: set[str] = {"id", "created_at", "updated_at"}


class OrderService(StoreService):
    """Order, payment, delivery and cart access for every role."""

    def _seller_sale_ids(self, seller_user_id: str) -> list[str]:
        sales = self.store.find_many(
            "sales", WhereBuilder().equals("shopping_mall_seller_user_id", seller_user_id)
        )
        return [sale["id"] for sale in sales]

    def _seller_sells_order(self, seller_user_id: str, order_id: str) -> bool:
        sale_ids = self._seller_sale_ids(seller_user_id)
        if not sale_ids:
            return False
        item = self.store.find_first(
            "order_items",
            WhereBuilder()
            .equals("shopping_mall_order_id", order_id)
            .in_("shopping_mall_sale_id", sale_ids),
        )
        return item is not None

    def _accessible_order(self, order_id: str, principal: TokenPayload) -> dict[str, Any]:
        order = self.store.find_unique_or_throw("orders", order_id)
        if principal.type == ADMIN.type_tag:
            allowed = True
        elif principal.type == MEMBER.type_tag:
            allowed = order["shopping_mall_memberuser_id"] == principal.id
        elif principal.type == GUEST.type_tag:
            allowed = order["shopping_mall_guestuser_id"] == principal.id
        elif principal.type == SELLER.type_tag:
            allowed = self._seller_sells_order(principal.id, order_id)
        else:
            allowed = False
        if not allowed:
            logger.info("%s %s denied access to order %s", principal.type, principal.id, order_id)
            raise ForbiddenError("You have no access to this order")
        return order

    def _accessible_cart(self, cart_id: str, principal: TokenPayload) -> dict[str, Any]:
        cart = self.store.find_unique_or_throw("carts", cart_id)
        if principal.type == ADMIN.type_tag:
            allowed = True
        elif principal.type == MEMBER.type_tag:
            allowed = cart["shopping_mall_memberuser_id"] == principal.id
        elif principal.type == GUEST.type_tag:
            allowed = cart["shopping_mall_guestuser_id"] == principal.id
        else:
            allowed = False
        if not allowed:
            logger.info("%s %s denied access to cart %s", principal.type, principal.id, cart_id)
            raise ForbiddenError("You have no access to this cart")
        return cart

    def _accessible_cart_item(self, cart_item_id: str, principal: TokenPayload) -> dict[str, Any]:
        cart_item = self.store.find_unique_or_throw("cart_items", cart_item_id)
        self._accessible_cart(cart_item["shopping_cart_id"], principal)
        return cart_item

    def search_order_items(
        self, order_id: str, body: OrderItemRequest, *, principal: TokenPayload
    ) -> dict[str, Any]:
        """Items of one order; sellers only see the items of their own sales."""

        self._accessible_order(order_id, principal)
        where = (
            WhereBuilder()
            .equals("shopping_mall_order_id", order_id)
            .equals("order_item_status", body.order_item_status)
            .equals("shopping_mall_sale_id", body.shopping_mall_sale_id)
        )
        if principal.type == SELLER.type_tag:
            where.in_("shopping_mall_sale_id", self._seller_sale_ids(principal.id))
        return self._search_page(
            "order_items",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=ORDER_ITEM_SORT_FIELDS,
        )

    def update_order_item(
        self, order_id: str, order_item_id: str, body: OrderItemUpdate, *, seller_user_id: str
    ) -> dict[str, Any]:
        self.store.find_unique_or_throw("orders", order_id)
        item = self._child(
            "order_items", order_item_id, column="shopping_mall_order_id", parent_id=order_id
        )
        sale = self.store.find_by_id("sales", item["shopping_mall_sale_id"], include_deleted=True)
        if sale is None or sale["shopping_mall_seller_user_id"] != seller_user_id:
            logger.info("Seller %s denied update of order item %s", seller_user_id, order_item_id)
            raise ForbiddenError("You can only update items of your own sales")
        return self.store.update("order_items", order_item_id, body.model_dump(exclude_none=True))

    def search_payments(
        self, order_id: str, body: PaymentRequest, *, principal: TokenPayload
    ) -> dict[str, Any]:
        self._accessible_order(order_id, principal)
        where = (
            WhereBuilder()
            .equals("shopping_mall_order_id", order_id)
            .equals("payment_status", body.payment_status)
            .equals("payment_method", body.payment_method)
            .between("payment_amount", gte=body.min_amount, lte=body.max_amount)
        )
        return self._search_page(
            "payments",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=PAYMENT_SORT_FIELDS,
        )

    def create_payment(
        self, order_id: str, body: PaymentCreate, *, principal: TokenPayload
    ) -> dict[str, Any]:
        self._accessible_order(order_id, principal)
        row = self.store.insert(
            "payments",
            {"shopping_mall_order_id": order_id, "cancelled_at": None, **body.model_dump()},
        )
        logger.info(
            "%s %s recorded payment %s on order %s", principal.type, principal.id, row["id"], order_id
        )
        return row

    def update_payment(
        self, order_id: str, payment_id: str, body: PaymentUpdate, *, principal: TokenPayload
    ) -> dict[str, Any]:
        self._accessible_order(order_id, principal)
        self._child("payments", payment_id, column="shopping_mall_order_id", parent_id=order_id)
        return self.store.update("payments", payment_id, body.model_dump(exclude_none=True))

    def search_deliveries(
        self, order_id: str, body: DeliveryRequest, *, principal: TokenPayload
    ) -> dict[str, Any]:
        self._accessible_order(order_id, principal)
        where = (
            WhereBuilder()
            .equals("shopping_mall_order_id", order_id)
            .equals("delivery_status", body.delivery_status)
            .equals("delivery_stage", body.delivery_stage)
        )
        return self._search_page(
            "deliveries",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=DELIVERY_SORT_FIELDS,
        )

    def update_delivery(
        self, order_id: str, delivery_id: str, body: DeliveryUpdate, *, principal: TokenPayload
    ) -> dict[str, Any]:
        self._accessible_order(order_id, principal)
        self._child("deliveries", delivery_id, column="shopping_mall_order_id", parent_id=order_id)
        return self.store.update("deliveries", delivery_id, body.model_dump(exclude_none=True))

    def search_order_status_histories(self, body: OrderStatusHistoryRequest) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .equals("shopping_mall_order_id", body.shopping_mall_order_id)
            .equals("old_status", body.old_status)
            .equals("new_status", body.new_status)
            .between("changed_at", gte=body.changed_after, lte=body.changed_before)
        )
        return self._search_page(
            "order_status_histories",
            body,
            where,
            default_sort="changed_at:desc",
            allowed_fields=STATUS_HISTORY_SORT_FIELDS,
        )

    def search_order_audit_logs(
        self, member_user_id: str, body: OrderAuditLogRequest
    ) -> dict[str, Any]:
        """Audit entries of the member's own orders only."""

        own_orders = self.store.find_many(
            "orders", WhereBuilder().equals("shopping_mall_memberuser_id", member_user_id)
        )
        where = (
            WhereBuilder()
            .in_("shopping_mall_order_id", [order["id"] for order in own_orders])
            .equals("shopping_mall_order_id", body.shopping_mall_order_id)
            .equals("actor_user_id", body.actor_user_id)
            .contains("action", body.action)
            .between("performed_at", gte=body.performed_after, lte=body.performed_before)
        )
        return self._search_page(
            "order_audit_logs",
            body,
            where,
            default_sort="performed_at:desc",
            allowed_fields=AUDIT_LOG_SORT_FIELDS,
        )

    def search_cart_items(
        self, cart_id: str, body: CartItemRequest, *, principal: TokenPayload
    ) -> dict[str, Any]:
        self._accessible_cart(cart_id, principal)
        where = WhereBuilder().equals("shopping_cart_id", cart_id).equals("status", body.status)
        return self._search_page(
            "cart_items",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=CART_ITEM_SORT_FIELDS,
        )

    def update_cart_item(
        self, cart_id: str, cart_item_id: str, body: CartItemUpdate, *, principal: TokenPayload
    ) -> dict[str, Any]:
        self._accessible_cart(cart_id, principal)
        self._child("cart_items", cart_item_id, column="shopping_cart_id", parent_id=cart_id)
        return self.store.update("cart_items", cart_item_id, body.model_dump(exclude_none=True))

    def search_cart_item_options(
        self, cart_item_id: str, body: CartItemOptionRequest, *, principal: TokenPayload
    ) -> dict[str, Any]:
        self._accessible_cart_item(cart_item_id, principal)
        where = (
            WhereBuilder()
            .equals("shopping_cart_item_id", cart_item_id)
            .equals("shopping_sale_option_group_id", body.shopping_sale_option_group_id)
            .equals("shopping_sale_option_id", body.shopping_sale_option_id)
        )
        return self._search_page(
            "cart_item_options",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=CART_ITEM_OPTION_SORT_FIELDS,
        )

    def update_cart_item_option(
        self,
        cart_item_id: str,
        option_id: str,
        body: CartItemOptionUpdate,
        *,
        principal: TokenPayload,
    ) -> dict[str, Any]:
        self._accessible_cart_item(cart_item_id, principal)
        self._child(
            "cart_item_options", option_id, column="shopping_cart_item_id", parent_id=cart_item_id
        )
        return self.store.update(
            "cart_item_options", option_id, body.model_dump(exclude_none=True)
        )

    def search_favorite_addresses(
        self, member_user_id: str, body: FavoriteAddressRequest
    ) -> dict[str, Any]:
        where = (
            WhereBuilder()
            .equals("shopping_mall_memberuser_id", member_user_id)
            .between("created_at", gte=body.created_after, lte=body.created_before)
        )
        return self._search_page(
            "favorite_addresses",
            body,
            where,
            default_sort="created_at:desc",
            allowed_fields=FAVORITE_ADDRESS_SORT_FIELDS,
        )
