# This file defines order-side schemas: order items, payments, deliveries, order status
# history, audit logs, carts with their items and options, and favorite addresses.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.api.schemas.common import Page, PageRequest, StoredRecord


class _Body(BaseModel):
    model_config = ConfigDict(extra="forbid")


class OrderItemSummary(StoredRecord):
    id: str
    shopping_mall_order_id: str
    shopping_mall_sale_id: str
    shopping_mall_sale_snapshot_id: str
    quantity: int
    unit_price: float
    order_item_status: str | None = None
    created_at: datetime


class OrderItem(OrderItemSummary):
    updated_at: datetime


class OrderItemRequest(PageRequest):
    order_item_status: str | None = None
    shopping_mall_sale_id: str | None = None


class OrderItemUpdate(_Body):
    quantity: int | None = Field(default=None, ge=0)
    unit_price: float | None = Field(default=None, ge=0)
    order_item_status: str | None = Field(default=None, min_length=1)


class PaymentSummary(StoredRecord):
    id: str
    shopping_mall_order_id: str
    payment_method: str
    payment_status: str
    payment_amount: float
    created_at: datetime


class Payment(PaymentSummary):
    transaction_id: str | None = None
    cancelled_at: datetime | None = None
    updated_at: datetime


class PaymentRequest(PageRequest):
    payment_status: str | None = None
    payment_method: str | None = None
    min_amount: float | None = None
    max_amount: float | None = None


class PaymentCreate(_Body):
    payment_method: str = Field(min_length=1)
    payment_status: str = Field(min_length=1)
    payment_amount: float = Field(gt=0)
    transaction_id: str | None = None


class PaymentUpdate(_Body):
    payment_method: str | None = Field(default=None, min_length=1)
    payment_status: str | None = Field(default=None, min_length=1)
    payment_amount: float | None = Field(default=None, ge=0)
    transaction_id: str | None = Field(default=None, min_length=1)
    cancelled_at: datetime | None = None


class DeliverySummary(StoredRecord):
    id: str
    shopping_mall_order_id: str
    delivery_status: str
    delivery_stage: str
    expected_delivery_date: datetime | None = None
    created_at: datetime


class Delivery(DeliverySummary):
    updated_at: datetime


class DeliveryRequest(PageRequest):
    delivery_status: str | None = None
    delivery_stage: str | None = None


class DeliveryUpdate(_Body):
    delivery_status: str | None = Field(default=None, min_length=1)
    delivery_stage: str | None = Field(default=None, min_length=1)
    expected_delivery_date: datetime | None = None


class OrderStatusHistorySummary(StoredRecord):
    id: str
    shopping_mall_order_id: str
    old_status: str
    new_status: str
    changed_at: datetime


class OrderStatusHistoryRequest(PageRequest):
    shopping_mall_order_id: str | None = None
    old_status: str | None = None
    new_status: str | None = None
    changed_after: datetime | None = None
    changed_before: datetime | None = None


class OrderAuditLog(StoredRecord):
    id: str
    shopping_mall_order_id: str
    actor_user_id: str | None = None
    action: str
    action_details: str | None = None
    performed_at: datetime


class OrderAuditLogRequest(PageRequest):
    shopping_mall_order_id: str | None = None
    actor_user_id: str | None = None
    action: str | None = None
    performed_after: datetime | None = None
    performed_before: datetime | None = None


class CartItemSummary(StoredRecord):
    id: str
    shopping_cart_id: str
    shopping_mall_sale_id: str
    quantity: int
    unit_price: float
    status: str
    created_at: datetime


class CartItem(CartItemSummary):
    updated_at: datetime


class CartItemRequest(PageRequest):
    status: str | None = None


class CartItemUpdate(_Body):
    quantity: int | None = Field(default=None, ge=1)
    unit_price: float | None = Field(default=None, ge=0)
    status: str | None = Field(default=None, min_length=1)


class CartItemOptionSummary(StoredRecord):
    id: str
    shopping_cart_item_id: str
    shopping_sale_option_group_id: str
    shopping_sale_option_id: str
    created_at: datetime


class CartItemOption(CartItemOptionSummary):
    updated_at: datetime


class CartItemOptionRequest(PageRequest):
    shopping_sale_option_group_id: str | None = None
    shopping_sale_option_id: str | None = None


class CartItemOptionUpdate(_Body):
    shopping_sale_option_group_id: str | None = Field(default=None, min_length=1)
    shopping_sale_option_id: str | None = Field(default=None, min_length=1)


class FavoriteAddressSummary(StoredRecord):
    id: str
    shopping_mall_snapshot_id: str
    created_at: datetime


class FavoriteAddressRequest(PageRequest):
    created_after: datetime | None = None
    created_before: datetime | None = None


PageOrderItemSummary = Page[OrderItemSummary]
PagePaymentSummary = Page[PaymentSummary]
PageDeliverySummary = Page[DeliverySummary]
PageOrderStatusHistorySummary = Page[OrderStatusHistorySummary]
PageOrderAuditLog = Page[OrderAuditLog]
PageCartItemSummary = Page[CartItemSummary]
PageCartItemOptionSummary = Page[CartItemOptionSummary]
PageFavoriteAddressSummary = Page[FavoriteAddressSummary]
