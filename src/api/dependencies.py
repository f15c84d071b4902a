# This file provides dependency factories for FastAPI routes and middleware.
# The database client is created once per process; stores, token codecs and services are
# built per request on top of it, so overriding `get_database_client` or `get_config`
# in tests swaps the storage and settings seen by every route.

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from src.api.api_config import ApiConfig, get_api_config
from src.api.db_access import DatabaseClient
from src.api.services.account_service import AccountService
from src.api.services.auth_service import AuthService
from src.api.services.catalog_service import CatalogService
from src.api.services.inquiry_service import InquiryService
from src.api.services.order_service import OrderService
from src.api.services.promotion_service import PromotionService
from src.api.services.review_service import ReviewService
from src.api.store import MarketplaceStore
from src.api.tokens import TokenCodec


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    config = get_api_config()
    return DatabaseClient(database_url=config.database_url)


def get_config() -> ApiConfig:
    return get_api_config()


ConfigDep = Annotated[ApiConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def get_store(config: ConfigDep, db: DBDep) -> MarketplaceStore:
    return MarketplaceStore(config=config, db=db)


def get_token_codec(config: ConfigDep) -> TokenCodec:
    return TokenCodec(config=config)


StoreDep = Annotated[MarketplaceStore, Depends(get_store)]
TokenCodecDep = Annotated[TokenCodec, Depends(get_token_codec)]


def get_auth_service(config: ConfigDep, store: StoreDep, codec: TokenCodecDep) -> AuthService:
    return AuthService(config=config, store=store, codec=codec)


def get_account_service(config: ConfigDep, store: StoreDep) -> AccountService:
    return AccountService(config=config, store=store)


def get_catalog_service(config: ConfigDep, store: StoreDep) -> CatalogService:
    return CatalogService(config=config, store=store)


def get_order_service(config: ConfigDep, store: StoreDep) -> OrderService:
    return OrderService(config=config, store=store)


def get_promotion_service(config: ConfigDep, store: StoreDep) -> PromotionService:
    return PromotionService(config=config, store=store)


def get_review_service(config: ConfigDep, store: StoreDep) -> ReviewService:
    return ReviewService(config=config, store=store)


def get_inquiry_service(config: ConfigDep, store: StoreDep) -> InquiryService:
    return InquiryService(config=config, store=store)
