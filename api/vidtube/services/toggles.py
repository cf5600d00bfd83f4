"""Idempotent create/remove of relationship edges (likes, subscriptions)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from ..errors import ConflictError, NotFoundError
from ..store import DataStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToggleResult:
    active: bool


class EdgeToggleService:
    """
    Flip the existence of the edge identified by ``key``.

    Check-then-act is not atomic. Two concurrent toggles can both see the
    edge missing; the store's uniqueness constraint rejects the second
    insert, which is reported as "already active". Two concurrent removals
    are harmless: the loser finds nothing to delete and still reports
    "inactive".
    """

    def __init__(self, store: DataStore):
        self.store = store

    def is_active(self, collection: str, key: Mapping[str, Any]) -> bool:
        return self.store.count(collection, key) > 0

    def toggle(self, collection: str, key: Mapping[str, Any]) -> ToggleResult:
        existing = self.store.find_many(collection, key, limit=1)
        if existing:
            try:
                self.store.delete_by_id(collection, existing[0]["id"])
            except NotFoundError:
                logger.info(f"{collection} edge {dict(key)} already removed by a concurrent request")
            else:
                logger.info(f"Removed {collection} edge {dict(key)}")
            return ToggleResult(active=False)

        try:
            self.store.create(collection, dict(key))
        except ConflictError:
            logger.info(f"{collection} edge {dict(key)} already created by a concurrent request")
        else:
            logger.info(f"Created {collection} edge {dict(key)}")
        return ToggleResult(active=True)
