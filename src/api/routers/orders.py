# This file defines order-side endpoints: order items, payments, deliveries, order status
# history, audit logs, carts and favorite addresses. Order-scoped routes check that the
# caller may see the order, and cart-scoped routes check that the caller owns the cart.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.authorization import AdminUserDep, GuestUserDep, MemberUserDep, SellerUserDep
from src.api.dependencies import get_order_service
from src.api.schemas.common import ERROR_RESPONSES
from src.api.schemas.order_schemas import (
    CartItem,
    CartItemOption,
    CartItemOptionRequest,
    CartItemOptionUpdate,
    CartItemRequest,
    CartItemUpdate,
    Delivery,
    DeliveryRequest,
    DeliveryUpdate,
    FavoriteAddressRequest,
    OrderAuditLogRequest,
    OrderItem,
    OrderItemRequest,
    OrderItemUpdate,
    OrderStatusHistoryRequest,
    PageCartItemOptionSummary,
    PageCartItemSummary,
    PageDeliverySummary,
    PageFavoriteAddressSummary,
    PageOrderAuditLog,
    PageOrderItemSummary,
    PageOrderStatusHistorySummary,
    PagePaymentSummary,
    Payment,
    PaymentCreate,
    PaymentRequest,
    PaymentUpdate,
)
from src.api.services.order_service import OrderService

router = APIRouter(prefix="/shoppingMall", tags=["orders"], responses=ERROR_RESPONSES)
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]


@router.patch("/sellerUser/orders/{order_id}/items", response_model=PageOrderItemSummary)
def seller_search_order_items(
    seller_user: SellerUserDep, order_id: str, body: OrderItemRequest, service: OrderServiceDep
) -> dict[str, object]:
    return service.search_order_items(order_id, body, principal=seller_user)


@router.put("/sellerUser/orders/{order_id}/items/{order_item_id}", response_model=OrderItem)
def seller_update_order_item(
    seller_user: SellerUserDep,
    order_id: str,
    order_item_id: str,
    body: OrderItemUpdate,
    service: OrderServiceDep,
) -> dict[str, object]:
    return service.update_order_item(order_id, order_item_id, body, seller_user_id=seller_user.id)


@router.patch("/adminUser/orders/{order_id}/payments", response_model=PagePaymentSummary)
def admin_search_payments(
    admin_user: AdminUserDep, order_id: str, body: PaymentRequest, service: OrderServiceDep
) -> dict[str, object]:
    return service.search_payments(order_id, body, principal=admin_user)


@router.patch("/memberUser/orders/{order_id}/payments", response_model=PagePaymentSummary)
def member_search_payments(
    member_user: MemberUserDep, order_id: str, body: PaymentRequest, service: OrderServiceDep
) -> dict[str, object]:
    return service.search_payments(order_id, body, principal=member_user)


@router.patch("/sellerUser/orders/{order_id}/payments", response_model=PagePaymentSummary)
def seller_search_payments(
    seller_user: SellerUserDep, order_id: str, body: PaymentRequest, service: OrderServiceDep
) -> dict[str, object]:
    return service.search_payments(order_id, body, principal=seller_user)


@router.patch("/guestUser/orders/{order_id}/payments", response_model=PagePaymentSummary)
def guest_search_payments(
    guest_user: GuestUserDep, order_id: str, body: PaymentRequest, service: OrderServiceDep
) -> dict[str, object]:
    return service.search_payments(order_id, body, principal=guest_user)


@router.post(
    "/sellerUser/orders/{order_id}/payments",
    response_model=Payment,
    status_code=status.HTTP_201_CREATED,
)
def seller_create_payment(
    seller_user: SellerUserDep, order_id: str, body: PaymentCreate, service: OrderServiceDep
) -> dict[str, object]:
    return service.create_payment(order_id, body, principal=seller_user)


@router.put("/adminUser/orders/{order_id}/payments/{payment_id}", response_model=Payment)
def update_payment(
    admin_user: AdminUserDep,
    order_id: str,
    payment_id: str,
    body: PaymentUpdate,
    service: OrderServiceDep,
) -> dict[str, object]:
    return service.update_payment(order_id, payment_id, body, principal=admin_user)


@router.put("/sellerUser/orders/{order_id}/payments/{payment_id}", response_model=Payment)
def seller_update_payment(
    seller_user: SellerUserDep,
    order_id: str,
    payment_id: str,
    body: PaymentUpdate,
    service: OrderServiceDep,
) -> dict[str, object]:
    return service.update_payment(order_id, payment_id, body, principal=seller_user)


@router.put("/memberUser/orders/{order_id}/payments/{payment_id}", response_model=Payment)
def member_update_payment(
    member_user: MemberUserDep,
    order_id: str,
    payment_id: str,
    body: PaymentUpdate,
    service: OrderServiceDep,
) -> dict[str, object]:
    return service.update_payment(order_id, payment_id, body, principal=member_user)


@router.patch("/sellerUser/orders/{order_id}/deliveries", response_model=PageDeliverySummary)
def seller_search_deliveries(
    seller_user: SellerUserDep, order_id: str, body: DeliveryRequest, service: OrderServiceDep
) -> dict[str, object]:
    return service.search_deliveries(order_id, body, principal=seller_user)


@router.put("/sellerUser/orders/{order_id}/deliveries/{delivery_id}", response_model=Delivery)
def seller_update_delivery(
    seller_user: SellerUserDep,
    order_id: str,
    delivery_id: str,
    body: DeliveryUpdate,
    service: OrderServiceDep,
) -> dict[str, object]:
    return service.update_delivery(order_id, delivery_id, body, principal=seller_user)


@router.patch("/adminUser/orderStatusHistories", response_model=PageOrderStatusHistorySummary)
def search_order_status_histories(
    admin_user: AdminUserDep, body: OrderStatusHistoryRequest, service: OrderServiceDep
) -> dict[str, object]:
    return service.search_order_status_histories(body)


@router.patch("/memberUser/orderAuditLogs", response_model=PageOrderAuditLog)
def search_order_audit_logs(
    member_user: MemberUserDep, body: OrderAuditLogRequest, service: OrderServiceDep
) -> dict[str, object]:
    return service.search_order_audit_logs(member_user.id, body)


@router.patch("/memberUser/carts/{cart_id}/cartItems", response_model=PageCartItemSummary)
def member_search_cart_items(
    member_user: MemberUserDep, cart_id: str, body: CartItemRequest, service: OrderServiceDep
) -> dict[str, object]:
    return service.search_cart_items(cart_id, body, principal=member_user)


@router.put("/memberUser/carts/{cart_id}/cartItems/{cart_item_id}", response_model=CartItem)
def member_update_cart_item(
    member_user: MemberUserDep,
    cart_id: str,
    cart_item_id: str,
    body: CartItemUpdate,
    service: OrderServiceDep,
) -> dict[str, object]:
    return service.update_cart_item(cart_id, cart_item_id, body, principal=member_user)


@router.patch(
    "/adminUser/cartItems/{cart_item_id}/cartItemOptions",
    response_model=PageCartItemOptionSummary,
)
def admin_search_cart_item_options(
    admin_user: AdminUserDep,
    cart_item_id: str,
    body: CartItemOptionRequest,
    service: OrderServiceDep,
) -> dict[str, object]:
    return service.search_cart_item_options(cart_item_id, body, principal=admin_user)


@router.patch(
    "/memberUser/cartItems/{cart_item_id}/cartItemOptions",
    response_model=PageCartItemOptionSummary,
)
def member_search_cart_item_options(
    member_user: MemberUserDep,
    cart_item_id: str,
    body: CartItemOptionRequest,
    service: OrderServiceDep,
) -> dict[str, object]:
    return service.search_cart_item_options(cart_item_id, body, principal=member_user)


@router.put(
    "/guestUser/cartItems/{cart_item_id}/cartItemOptions/{option_id}",
    response_model=CartItemOption,
)
def guest_update_cart_item_option(
    guest_user: GuestUserDep,
    cart_item_id: str,
    option_id: str,
    body: CartItemOptionUpdate,
    service: OrderServiceDep,
) -> dict[str, object]:
    return service.update_cart_item_option(cart_item_id, option_id, body, principal=guest_user)


@router.patch("/memberUser/favoriteAddresses", response_model=PageFavoriteAddressSummary)
def search_favorite_addresses(
    member_user: MemberUserDep, body: FavoriteAddressRequest, service: OrderServiceDep
) -> dict[str, object]:
    return service.search_favorite_addresses(member_user.id, body)
