# This file builds the FastAPI application and mounts every marketplace router.
# Each request gets an id, a timing header and Prometheus samples labelled by route template,
# so ids in paths do not create new series. Request logging to the database is optional.

from __future__ import annotations

import logging
import time
import uuid

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import RequestResponseEndpoint

from src.api.api_config import ApiConfig, get_api_config
from src.api.db_access import DatabaseClient
from src.api.dependencies import get_database_client
from src.api.error_handlers import register_error_handlers
from src.api.routers.accounts import router as accounts_router
from src.api.routers.auth import router as auth_router
from src.api.routers.catalog import router as catalog_router
from src.api.routers.health import router as health_router
from src.api.routers.inquiries import router as inquiries_router
from src.api.routers.orders import router as orders_router
from src.api.routers.promotions import router as promotions_router
from src.api.routers.reviews import router as reviews_router
from src.common.logging import configure_logging

logger = logging.getLogger(__name__)

VERSIONED_ROUTERS: tuple[APIRouter, ...] = (
    auth_router,
    accounts_router,
    catalog_router,
    orders_router,
    promotions_router,
    reviews_router,
    inquiries_router,
)

OPENAPI_TAGS = [
    {"name": "health", "description": "Service liveness, readiness, and version metadata."},
    {"name": "auth", "description": "Registration, login and token refresh per role."},
    {"name": "accounts", "description": "Admin management of user accounts."},
    {
        "name": "catalog",
        "description": "Channels, categories, sales with units and snapshots, inventory.",
    },
    {
        "name": "orders",
        "description": "Order items, payments, deliveries, status history, audit logs and carts.",
    },
    {"name": "promotions", "description": "Coupons, tickets, deposits and mileage."},
    {"name": "reviews", "description": "Product reviews written by members."},
    {"name": "inquiries", "description": "Inquiries, comment threads and seller responses."},
]

REQUESTS_TOTAL = Counter(
    "marketplace_http_requests_total",
    "HTTP requests handled, by route template and status.",
    ["method", "route", "status_code"],
)
REQUEST_SECONDS = Histogram(
    "marketplace_http_request_duration_seconds",
    "HTTP request duration in seconds, by route template.",
    ["method", "route"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
INFLIGHT_REQUESTS = Gauge(
    "marketplace_http_inflight_requests",
    "HTTP requests currently being handled.",
    ["method"],
)


def _route_label(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", "unmatched")


def _record_request(request: Request, status_code: int, duration_s: float) -> None:
    route = _route_label(request)
    REQUESTS_TOTAL.labels(
        method=request.method, route=route, status_code=str(status_code)
    ).inc()
    REQUEST_SECONDS.labels(method=request.method, route=route).observe(duration_s)


def _install_request_middleware(app: FastAPI, config: ApiConfig) -> None:
    def resolve_database_client() -> DatabaseClient:
        return app.dependency_overrides.get(get_database_client, get_database_client)()

    def write_request_log(request: Request, request_id: str, status_code: int, ms: float) -> None:
        try:
            resolve_database_client().log_request(
                table_name=config.request_log_table_name,
                request_id=request_id,
                path=request.url.path,
                method=request.method,
                status_code=status_code,
                duration_ms=ms,
            )
        except SQLAlchemyError:
            logger.warning("Request log write failed for %s", request_id, exc_info=True)

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        started = time.perf_counter()
        status_code = 500
        INFLIGHT_REQUESTS.labels(method=request.method).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
        finally:
            duration_s = time.perf_counter() - started
            INFLIGHT_REQUESTS.labels(method=request.method).dec()
            _record_request(request, status_code, duration_s)

        duration_ms = duration_s * 1000.0
        response.headers["x-request-id"] = request_id
        response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"
        if config.enable_request_logging:
            write_request_log(request, request_id, status_code, duration_ms)
        return response

    @app.on_event("startup")
    def startup_checks() -> None:
        connected = resolve_database_client().can_connect()
        app.state.db_connected_at_startup = connected
        if connected:
            logger.info("Database reachable at startup")
        else:
            logger.warning("Database unreachable at startup; readiness will report not ready")


def create_app() -> FastAPI:
    """Create configured FastAPI application instance."""

    config = get_api_config()
    configure_logging(config.log_level)

    app = FastAPI(
        title=config.api_name,
        description=(
            "Multi-role marketplace API for admin, seller, member and guest users. "
            "Search endpoints accept JSON filter bodies and answer with paginated envelopes."
        ),
        version=config.app_version,
        openapi_tags=OPENAPI_TAGS,
    )

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    _install_request_middleware(app, config)

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    register_error_handlers(app)

    app.include_router(health_router)
    for router in VERSIONED_ROUTERS:
        app.include_router(router, prefix=config.api_version_path)

    return app


app = create_app()
