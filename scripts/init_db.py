#!/usr/bin/env python3
"""
Create the marketplace tables in the database named by `DATABASE_URL`.
Statements use `CREATE TABLE IF NOT EXISTS`, so running it again is harmless.
Prints a JSON summary and exits non-zero when the database cannot be reached.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from src.common.db import get_engine, test_connection
from src.common.ddl import MARKETPLACE_TABLES, apply_marketplace_ddl
from src.common.logging import configure_logging

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create marketplace tables")
    parser.add_argument("--table-prefix", default="shopping_mall_")
    parser.add_argument("--request-log-table", default="api_request_log")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging()

    if not test_connection():
        print("Database is unreachable; check DATABASE_URL.", file=sys.stderr)
        sys.exit(1)

    apply_marketplace_ddl(
        get_engine(),
        table_prefix=args.table_prefix,
        request_log_table=args.request_log_table,
    )
    tables = [f"{args.table_prefix}{entity}" for entity in MARKETPLACE_TABLES]
    tables.append(args.request_log_table)
    logger.info("Applied DDL for %d tables", len(tables))
    print(json.dumps({"tables": tables}, indent=2))


if __name__ == "__main__":
    main()
