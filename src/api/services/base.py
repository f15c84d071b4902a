# This file holds the pieces every marketplace service shares.
# Search handlers validate paging input, run one counted search and wrap the rows in a page
# envelope; nested lookups check that a record hangs off the parent named in the path;
# delete handlers verify existence and then stamp `deleted_at`.

from __future__ import annotations

import logging
from typing import Any

from src.api.api_config import ApiConfig
from src.api.error_handlers import NotFoundError
from src.api.filters import WhereBuilder
from src.api.lifecycle import Deleted, lifecycle_of, utc_now
from src.api.pagination import PageRequestLike, resolve_page_request
from src.api.response_envelope import build_page
from src.api.store import MarketplaceStore

logger = logging.getLogger(__name__)


class StoreService:
    def __init__(self, *, config: ApiConfig, store: MarketplaceStore) -> None:
        self.config = config
        self.store = store

    def _search_page(
        self,
        entity: str,
        body: PageRequestLike,
        where: WhereBuilder,
        *,
        default_sort: str,
        allowed_fields: set[str],
    ) -> dict[str, Any]:
        pagination, sort_spec = resolve_page_request(
            body,
            default_page_size=self.config.default_page_size,
            max_page_size=self.config.max_page_size,
            default_sort=default_sort,
            allowed_fields=allowed_fields,
        )
        rows, total_count = self.store.search(
            entity, where, pagination=pagination, sort=sort_spec
        )
        return build_page(rows, pagination=pagination, records=total_count)

    def _empty_page(
        self, body: PageRequestLike, *, default_sort: str, allowed_fields: set[str]
    ) -> dict[str, Any]:
        pagination, _ = resolve_page_request(
            body,
            default_page_size=self.config.default_page_size,
            max_page_size=self.config.max_page_size,
            default_sort=default_sort,
            allowed_fields=allowed_fields,
        )
        return build_page([], pagination=pagination, records=0)

    def _child(self, entity: str, record_id: str, *, column: str, parent_id: str) -> dict[str, Any]:
        """Load a record that must hang off `parent_id`; any other parent reads as missing."""

        row = self.store.find_unique_or_throw(entity, record_id)
        if row[column] != parent_id:
            raise NotFoundError(
                f"No {entity} record {record_id} under {parent_id}.",
                details={"entity": entity, "id": record_id},
            )
        return row

    def _soft_delete(self, entity: str, record_id: str) -> None:
        """Soft-delete one record; missing ids raise NotFoundError before any write.

        Deleting an already deleted record succeeds and overwrites its timestamp.
        """

        row = self.store.find_unique_or_throw(entity, record_id, include_deleted=True)
        state = lifecycle_of(row)
        if isinstance(state, Deleted):
            logger.warning(
                "Re-deleting %s record %s (previously deleted at %s)",
                entity,
                record_id,
                state.at.isoformat(),
            )
        self.store.soft_delete(entity, record_id, at=utc_now())
