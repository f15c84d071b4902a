# This file defines response schemas for the health, readiness and version endpoints.
# Each response carries the API version label, the request id and a server timestamp.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ServiceStamp(BaseModel):
    api_version: str
    request_id: str
    timestamp: datetime


class HealthResponse(ServiceStamp):
    status: str
    environment: str
    service_name: str


class ReadinessResponse(ServiceStamp):
    """Database reachability plus one flag per table group the handlers need."""

    db_connected: bool
    accounts_ready: bool
    catalog_ready: bool
    orders_ready: bool
    ready: bool
    database: str


class VersionResponse(ServiceStamp):
    api_version_path: str
    app_version: str
    git_commit: str | None = None
    project: str
