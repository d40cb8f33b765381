# -*- coding: utf-8 -*-
"""Account: bulk reads and deletes across every collection a user owns."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from ..goals.storage import COLLECTION as GOALS
from ..intake.storage import ENTRIES, RECORDS, TOTAL_FIELDS
from ..metrics.storage import COLLECTION as METRICS
from ..recipes.storage import FAVORITES, SHARED
from ..store import get_store, utc_now_iso

logger = logging.getLogger(__name__)

# data type -> collection queried by user_id
OWNED_COLLECTIONS = {
    "food_diary": ENTRIES,
    "daily_records": RECORDS,
    "health_metrics": METRICS,
    "favorite_recipes": FAVORITES,
    "shared_recipes": SHARED,
}


def _by_date(docs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(docs, key=lambda d: (str(d.get("date") or ""), str(d.get("created_at") or "")))


def owned_docs(user_id: str, data_type: str) -> List[Dict[str, Any]]:
    return _by_date(get_store().query(OWNED_COLLECTIONS[data_type], {"user_id": user_id}))


def _zero_nutrition_totals(user_id: str) -> None:
    """Daily records keep their water/steps/sleep/mood once the diary is gone."""
    store = get_store()
    zeroed = {field: 0 for field in TOTAL_FIELDS}
    zeroed["updated_at"] = utc_now_iso()
    for doc in store.query(RECORDS, {"user_id": user_id}):
        store.update(RECORDS, doc["id"], zeroed)


def delete_user_data(user_id: str, data_types: Iterable[str]) -> Dict[str, int]:
    """Delete the listed data types for one user; returns deleted documents per type."""
    store = get_store()
    counts: Dict[str, int] = {}
    for data_type in dict.fromkeys(data_types):
        if data_type == "goals":
            counts[data_type] = int(store.delete(GOALS, user_id))
            continue
        deleted = 0
        for doc in store.query(OWNED_COLLECTIONS[data_type], {"user_id": user_id}):
            if store.delete(OWNED_COLLECTIONS[data_type], doc["id"]):
                deleted += 1
        counts[data_type] = deleted
        if data_type == "food_diary" and "daily_records" not in counts:
            _zero_nutrition_totals(user_id)
    logger.info("Deleted data for user %s: %s", user_id, counts)
    return counts
