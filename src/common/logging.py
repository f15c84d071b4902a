"""
Logging setup shared by the API process and the bootstrap script.
The root logger is configured once per process; later calls are no-ops.
"""

from __future__ import annotations

import logging

from src.common.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_configured = False


def _resolve_level(level_name: str | None) -> int:
    name = (level_name or get_settings().LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level_name: str | None = None) -> None:
    """Configure the root logger; `level_name` overrides the `LOG_LEVEL` setting."""

    global _configured
    if _configured:
        return

    level = _resolve_level(level_name)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger(__name__).debug("Logging configured at %s", logging.getLevelName(level))
    _configured = True
