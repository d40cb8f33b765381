# -*- coding: utf-8 -*-
"""Document store: shared errors and helpers.

Every backend exposes the same small surface:

    get(collection, doc_id) -> dict | None
    set(collection, doc_id, data, merge=False) -> dict
    add(collection, data) -> dict
    update(collection, doc_id, data) -> dict
    increment(collection, doc_id, deltas, fields=None) -> None
    delete(collection, doc_id) -> bool
    query(collection, where=None) -> list[dict]
    ping() -> None

Returned documents are plain dicts that carry their id under "id".
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import uuid4

_SEGMENT_RE = re.compile(r"^[A-Za-z0-9_.\-]+$")


class StoreError(Exception):
    """Base class for document store failures."""


class StoreUnavailable(StoreError):
    """The backend is not configured or cannot be reached."""


class DocumentNotFound(StoreError):
    def __init__(self, collection: str, doc_id: str) -> None:
        super().__init__(f"{collection}/{doc_id} not found")
        self.collection = collection
        self.doc_id = doc_id


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def new_doc_id() -> str:
    return uuid4().hex


def check_segment(value: str) -> str:
    """Collection names and document ids double as file names in the JSON store."""
    if not value or value in {".", ".."} or not _SEGMENT_RE.match(value):
        raise ValueError(f"Invalid document path segment: {value!r}")
    return value


def with_id(doc_id: str, data: Dict[str, Any] | None) -> Dict[str, Any]:
    out = dict(data or {})
    out["id"] = doc_id
    return out


def strip_id(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k != "id"}


def deep_merge(base: Dict[str, Any], patch: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for key, value in patch.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = deep_merge(out[key], value)
        else:
            out[key] = value
    return out


def newest_first(docs: List[Dict[str, Any]], key: str = "created_at") -> List[Dict[str, Any]]:
    return sorted(docs, key=lambda d: str(d.get(key) or ""), reverse=True)
