# -*- coding: utf-8 -*-
"""Document store with Firestore as primary and local JSON files as fallback."""

from __future__ import annotations

from typing import Optional

from ..config import settings
from .base import DocumentNotFound, StoreError, StoreUnavailable, newest_first, utc_now_iso
from .fallback import FallbackStore
from .files import JsonFileStore
from .firestore import FirestoreStore

_store: Optional[FallbackStore] = None


def get_store() -> FallbackStore:
    global _store
    if _store is None:
        _store = FallbackStore(
            FirestoreStore(settings.firebase_credentials, settings.firebase_project_id),
            JsonFileStore(settings.store_root),
        )
    return _store


def set_store(store: Optional[FallbackStore]) -> None:
    """Swap the process-wide store (tests inject fakes here)."""
    global _store
    _store = store


__all__ = [
    "DocumentNotFound",
    "FallbackStore",
    "FirestoreStore",
    "JsonFileStore",
    "StoreError",
    "StoreUnavailable",
    "get_store",
    "newest_first",
    "set_store",
    "utc_now_iso",
]
