"""
Shared test configuration.
Environment defaults are set at import time because `src.api.app` builds the application
when it is first imported; the autouse fixture restores them for tests that remove values.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

TEST_ENV_DEFAULTS = {
    "PROJECT_NAME": "test-project",
    "ENV": "test",
    "LOG_LEVEL": "INFO",
    "DATABASE_URL": "sqlite+pysqlite:///:memory:",
    "JWT_SECRET_KEY": "test-secret-key",
    "API_HOST": "0.0.0.0",
    "API_PORT": "8000",
    "API_PASSWORD_HASH_ROUNDS": "4",
}

for _key, _value in TEST_ENV_DEFAULTS.items():
    os.environ.setdefault(_key, _value)

from src.api.db_access import DatabaseClient  # noqa: E402
from src.api.store import MarketplaceStore  # noqa: E402
from src.common.ddl import apply_marketplace_ddl  # noqa: E402
from tests.api.support import build_test_config  # noqa: E402


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure required environment variables are present during tests."""

    for key, value in TEST_ENV_DEFAULTS.items():
        if os.getenv(key) is None:
            monkeypatch.setenv(key, value)


@pytest.fixture
def marketplace_db(tmp_path: Path) -> Iterator[DatabaseClient]:
    """SQLite-backed database client with every marketplace table created."""

    db = DatabaseClient(database_url=f"sqlite+pysqlite:///{tmp_path / 'marketplace.db'}")
    apply_marketplace_ddl(db.engine)
    yield db
    db.dispose()


@pytest.fixture
def store(marketplace_db: DatabaseClient) -> MarketplaceStore:
    return MarketplaceStore(config=build_test_config(), db=marketplace_db)
