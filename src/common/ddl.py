"""DDL helpers for marketplace tables."""

from __future__ import annotations

from sqlalchemy.engine import Engine

_USER_COLUMNS = (
    "id TEXT PRIMARY KEY",
    "email TEXT NOT NULL",
    "password_hash TEXT NOT NULL",
    "nickname TEXT NOT NULL",
    "full_name TEXT NOT NULL",
)
_TIMESTAMPS = (
    "created_at TIMESTAMP NOT NULL",
    "updated_at TIMESTAMP NOT NULL",
)
_SOFT_DELETE = ("deleted_at TIMESTAMP NULL",)

# Column lists keyed by entity name; the physical table is `<prefix><entity>`.
MARKETPLACE_TABLES: dict[str, tuple[str, ...]] = {
    "adminusers": _USER_COLUMNS + ("status TEXT NOT NULL",) + _TIMESTAMPS + _SOFT_DELETE,
    "memberusers": _USER_COLUMNS
    + ("phone_number TEXT NULL", "status TEXT NOT NULL")
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "sellerusers": _USER_COLUMNS
    + (
        "phone_number TEXT NULL",
        "business_registration_number TEXT NOT NULL",
        "status TEXT NOT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "guestusers": (
        "id TEXT PRIMARY KEY",
        "ip_address TEXT NOT NULL",
        "access_url TEXT NOT NULL",
        "referrer TEXT NULL",
        "user_agent TEXT NULL",
        "session_start_at TIMESTAMP NOT NULL",
        "session_end_at TIMESTAMP NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "channels": (
        "id TEXT PRIMARY KEY",
        "code TEXT NOT NULL",
        "name TEXT NOT NULL",
        "description TEXT NULL",
        "status TEXT NOT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "categories": (
        "id TEXT PRIMARY KEY",
        "code TEXT NOT NULL",
        "name TEXT NOT NULL",
        "description TEXT NULL",
        "status TEXT NOT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "channel_categories": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_channel_id TEXT NOT NULL",
        "shopping_mall_category_id TEXT NOT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "category_relations": (
        "id TEXT PRIMARY KEY",
        "parent_shopping_mall_category_id TEXT NOT NULL",
        "child_shopping_mall_category_id TEXT NOT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "sales": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_channel_id TEXT NOT NULL",
        "shopping_mall_section_id TEXT NULL",
        "shopping_mall_seller_user_id TEXT NOT NULL",
        "code TEXT NOT NULL",
        "status TEXT NOT NULL",
        "name TEXT NOT NULL",
        "description TEXT NULL",
        "price DOUBLE PRECISION NOT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "inventory": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_sale_id TEXT NOT NULL",
        "option_combination_code TEXT NOT NULL",
        "stock_quantity INTEGER NOT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "inventory_audits": (
        "id TEXT PRIMARY KEY",
        "inventory_id TEXT NOT NULL",
        "actor_user_id TEXT NULL",
        "change_type TEXT NOT NULL",
        "quantity_changed INTEGER NOT NULL",
        "change_reason TEXT NULL",
        "changed_at TIMESTAMP NOT NULL",
    ),
    "sale_units": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_sale_id TEXT NOT NULL",
        "code TEXT NOT NULL",
        "name TEXT NOT NULL",
        "description TEXT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "sale_unit_options": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_sale_unit_id TEXT NOT NULL",
        "shopping_mall_sale_option_id TEXT NOT NULL",
        "additional_price DOUBLE PRECISION NOT NULL",
        "stock_quantity INTEGER NOT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    # Snapshots are immutable: no updated_at and no soft delete.
    "sale_snapshots": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_sale_id TEXT NOT NULL",
        "code TEXT NOT NULL",
        "status TEXT NOT NULL",
        "name TEXT NOT NULL",
        "description TEXT NULL",
        "price DOUBLE PRECISION NOT NULL",
        "created_at TIMESTAMP NOT NULL",
    ),
    "snapshots": (
        "id TEXT PRIMARY KEY",
        "entity_type TEXT NOT NULL",
        "entity_id TEXT NOT NULL",
        "snapshot_data TEXT NOT NULL",
        "created_at TIMESTAMP NOT NULL",
    ),
    "orders": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_channel_id TEXT NOT NULL",
        "shopping_mall_memberuser_id TEXT NULL",
        "shopping_mall_guestuser_id TEXT NULL",
        "order_code TEXT NOT NULL",
        "order_status TEXT NOT NULL",
        "payment_status TEXT NOT NULL",
        "total_price DOUBLE PRECISION NOT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "order_items": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_order_id TEXT NOT NULL",
        "shopping_mall_sale_id TEXT NOT NULL",
        "shopping_mall_sale_snapshot_id TEXT NOT NULL",
        "quantity INTEGER NOT NULL",
        "unit_price DOUBLE PRECISION NOT NULL",
        "order_item_status TEXT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "payments": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_order_id TEXT NOT NULL",
        "payment_method TEXT NOT NULL",
        "payment_status TEXT NOT NULL",
        "payment_amount DOUBLE PRECISION NOT NULL",
        "transaction_id TEXT NULL",
        "cancelled_at TIMESTAMP NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "deliveries": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_order_id TEXT NOT NULL",
        "delivery_status TEXT NOT NULL",
        "delivery_stage TEXT NOT NULL",
        "expected_delivery_date TIMESTAMP NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "order_status_histories": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_order_id TEXT NOT NULL",
        "old_status TEXT NOT NULL",
        "new_status TEXT NOT NULL",
        "changed_at TIMESTAMP NOT NULL",
    ),
    # A cart belongs to exactly one member or one guest.
    "carts": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_memberuser_id TEXT NULL",
        "shopping_mall_guestuser_id TEXT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "cart_items": (
        "id TEXT PRIMARY KEY",
        "shopping_cart_id TEXT NOT NULL",
        "shopping_mall_sale_id TEXT NOT NULL",
        "quantity INTEGER NOT NULL",
        "unit_price DOUBLE PRECISION NOT NULL",
        "status TEXT NOT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "order_audit_logs": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_order_id TEXT NOT NULL",
        "actor_user_id TEXT NULL",
        "action TEXT NOT NULL",
        "action_details TEXT NULL",
        "performed_at TIMESTAMP NOT NULL",
    ),
    "favorite_addresses": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_memberuser_id TEXT NOT NULL",
        "shopping_mall_snapshot_id TEXT NOT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "cart_item_options": (
        "id TEXT PRIMARY KEY",
        "shopping_cart_item_id TEXT NOT NULL",
        "shopping_sale_option_group_id TEXT NOT NULL",
        "shopping_sale_option_id TEXT NOT NULL",
    )
    + _TIMESTAMPS,
    "coupons": (
        "id TEXT PRIMARY KEY",
        "coupon_code TEXT NOT NULL",
        "coupon_name TEXT NOT NULL",
        "discount_type TEXT NOT NULL",
        "discount_value DOUBLE PRECISION NOT NULL",
        "status TEXT NOT NULL",
        "start_date TIMESTAMP NULL",
        "end_date TIMESTAMP NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "coupon_conditions": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_coupon_id TEXT NOT NULL",
        "condition_type TEXT NOT NULL",
        "product_id TEXT NULL",
        "section_id TEXT NULL",
        "category_id TEXT NULL",
    )
    + _TIMESTAMPS,
    "coupon_tickets": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_coupon_id TEXT NOT NULL",
        "memberuser_id TEXT NULL",
        "ticket_code TEXT NOT NULL",
        "usage_status TEXT NOT NULL",
        "valid_from TIMESTAMP NULL",
        "valid_until TIMESTAMP NULL",
        "used_at TIMESTAMP NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "coupon_logs": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_coupon_ticket_id TEXT NOT NULL",
        "used_by_customer_id TEXT NULL",
        "log_type TEXT NOT NULL",
        "log_data TEXT NULL",
        "logged_at TIMESTAMP NOT NULL",
    ),
    "deposits": (
        "id TEXT PRIMARY KEY",
        "memberuser_id TEXT NULL",
        "guestuser_id TEXT NULL",
        "deposit_amount DOUBLE PRECISION NOT NULL",
        "usable_balance DOUBLE PRECISION NOT NULL",
        "deposit_start_at TIMESTAMP NOT NULL",
        "deposit_end_at TIMESTAMP NOT NULL",
        "status TEXT NOT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "deposit_charges": (
        "id TEXT PRIMARY KEY",
        "memberuser_id TEXT NULL",
        "guestuser_id TEXT NULL",
        "charge_amount DOUBLE PRECISION NOT NULL",
        "charge_status TEXT NOT NULL",
        "payment_provider TEXT NOT NULL",
        "payment_account TEXT NOT NULL",
        "paid_at TIMESTAMP NULL",
    )
    + _TIMESTAMPS,
    "mileage_donations": (
        "id TEXT PRIMARY KEY",
        "adminuser_id TEXT NOT NULL",
        "memberuser_id TEXT NOT NULL",
        "donation_reason TEXT NOT NULL",
        "donation_amount DOUBLE PRECISION NOT NULL",
        "donation_date TIMESTAMP NOT NULL",
    )
    + _TIMESTAMPS,
    "reviews": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_channel_id TEXT NOT NULL",
        "shopping_mall_category_id TEXT NULL",
        "shopping_mall_memberuserid TEXT NOT NULL",
        "shopping_mall_sale_snapshot_id TEXT NOT NULL",
        "review_title TEXT NOT NULL",
        "review_body TEXT NOT NULL",
        "rating INTEGER NOT NULL",
        "is_private BOOLEAN NOT NULL",
        "status TEXT NOT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "inquiries": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_channel_id TEXT NOT NULL",
        "shopping_mall_section_id TEXT NULL",
        "shopping_mall_category_id TEXT NULL",
        "shopping_mall_memberuserid TEXT NULL",
        "shopping_mall_guestuserid TEXT NULL",
        "parent_inquiry_id TEXT NULL",
        "inquiry_title TEXT NOT NULL",
        "inquiry_body TEXT NOT NULL",
        "is_private BOOLEAN NOT NULL",
        "is_answered BOOLEAN NOT NULL",
        "status TEXT NOT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    # A comment hangs off either an inquiry or a review.
    "comments": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_inquiry_id TEXT NULL",
        "shopping_mall_review_id TEXT NULL",
        "parent_comment_id TEXT NULL",
        "shopping_mall_memberuserid TEXT NULL",
        "shopping_mall_guestuserid TEXT NULL",
        "shopping_mall_selleruserid TEXT NULL",
        "comment_body TEXT NOT NULL",
        "is_private BOOLEAN NOT NULL",
        "status TEXT NOT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
    "seller_responses": (
        "id TEXT PRIMARY KEY",
        "shopping_mall_inquiry_id TEXT NULL",
        "shopping_mall_review_id TEXT NULL",
        "shopping_mall_selleruserid TEXT NOT NULL",
        "response_body TEXT NOT NULL",
        "is_private BOOLEAN NOT NULL",
        "status TEXT NOT NULL",
    )
    + _TIMESTAMPS
    + _SOFT_DELETE,
}

REQUEST_LOG_COLUMNS: tuple[str, ...] = (
    "request_id TEXT NOT NULL",
    "path TEXT NOT NULL",
    "method TEXT NOT NULL",
    "status_code INTEGER NOT NULL",
    "duration_ms DOUBLE PRECISION NOT NULL",
    "created_at TIMESTAMP NOT NULL",
)


def build_marketplace_ddl(*, table_prefix: str, request_log_table: str) -> list[str]:
    """Return CREATE TABLE statements, one per table."""

    statements = [
        f"CREATE TABLE IF NOT EXISTS {table_prefix}{entity} ({', '.join(columns)})"
        for entity, columns in MARKETPLACE_TABLES.items()
    ]
    statements.append(
        f"CREATE TABLE IF NOT EXISTS {request_log_table} ({', '.join(REQUEST_LOG_COLUMNS)})"
    )
    return statements


def apply_marketplace_ddl(
    engine: Engine,
    *,
    table_prefix: str = "shopping_mall_",
    request_log_table: str = "api_request_log",
) -> None:
    """Apply marketplace DDL in deterministic order."""

    with engine.begin() as connection:
        for statement in build_marketplace_ddl(
            table_prefix=table_prefix, request_log_table=request_log_table
        ):
            connection.exec_driver_sql(statement)
