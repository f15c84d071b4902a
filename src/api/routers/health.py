# This file defines liveness, readiness, and version endpoints for API operations.
# Orchestration and monitoring systems use them to verify service health quickly.
# The readiness check confirms database connectivity and that the core marketplace
# tables for accounts, catalog and orders exist.

from __future__ import annotations

import logging
import subprocess
from datetime import UTC, datetime

from fastapi import APIRouter, Request

from src.api.dependencies import ConfigDep, DBDep
from src.api.schemas.health_schemas import HealthResponse, ReadinessResponse, VersionResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

ACCOUNT_ENTITIES = ("adminusers", "memberusers", "sellerusers", "guestusers")
CATALOG_ENTITIES = ("channels", "categories", "sales", "inventory")
ORDER_ENTITIES = ("orders", "order_items", "payments", "deliveries")


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _git_commit() -> str | None:
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            check=True,
            capture_output=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        logger.debug("git commit unavailable", exc_info=True)
        return None
    return completed.stdout.strip() or None


@router.get("/health", response_model=HealthResponse)
def health(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        "api_version": config.api_version_label(),
        "request_id": request.state.request_id,
        "status": "ok",
        "environment": config.environment,
        "service_name": config.api_name,
        "timestamp": _utc_now(),
    }


@router.get("/ready", response_model=ReadinessResponse)
def ready(request: Request, config: ConfigDep, db: DBDep) -> dict[str, object]:
    db_connected = db.can_connect()

    def tables_ready(entities: tuple[str, ...]) -> bool:
        return db_connected and all(db.table_exists(config.table(entity)) for entity in entities)

    accounts_ready = tables_ready(ACCOUNT_ENTITIES)
    catalog_ready = tables_ready(CATALOG_ENTITIES)
    orders_ready = tables_ready(ORDER_ENTITIES)

    return {
        "api_version": config.api_version_label(),
        "request_id": request.state.request_id,
        "db_connected": db_connected,
        "accounts_ready": accounts_ready,
        "catalog_ready": catalog_ready,
        "orders_ready": orders_ready,
        "ready": db_connected and accounts_ready and catalog_ready and orders_ready,
        "database": "reachable" if db_connected else "unreachable",
        "timestamp": _utc_now(),
    }


@router.get("/version", response_model=VersionResponse)
def version(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        "api_version": config.api_version_label(),
        "request_id": request.state.request_id,
        "api_version_path": config.api_version_path,
        "app_version": config.app_version,
        "git_commit": _git_commit(),
        "project": config.api_name,
        "timestamp": _utc_now(),
    }
