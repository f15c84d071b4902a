"""
Database connection utilities for scripts and maintenance jobs.
The API itself goes through `src.api.db_access.DatabaseClient`; this module serves one-off
tooling such as schema bootstrap.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from src.common.settings import get_settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Engine bound to `DATABASE_URL`."""

    return create_engine(get_settings().DATABASE_URL, pool_pre_ping=True, future=True)


def test_connection() -> bool:
    """Return True if the database can be reached and queried."""

    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        logger.warning("Database connectivity check failed", exc_info=True)
        return False
