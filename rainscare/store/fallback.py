# -*- coding: utf-8 -*-
"""Document store: primary/secondary chain.

Each operation goes to the primary (Firestore) first. Any failure other than
DocumentNotFound is logged at WARNING and the same operation is replayed on
the secondary (local JSON). A primary with no credentials at all logs at
DEBUG. There is one level of fallback and no retry.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .base import DocumentNotFound, StoreUnavailable

logger = logging.getLogger(__name__)


class FallbackStore:
    def __init__(self, primary: Any, secondary: Any) -> None:
        self.primary = primary
        self.secondary = secondary

    def _call(self, op: str, collection: str, *args: Any, **kwargs: Any) -> Any:
        try:
            return getattr(self.primary, op)(collection, *args, **kwargs)
        except DocumentNotFound:
            raise
        except StoreUnavailable as exc:
            if getattr(self.primary, "configured", True):
                logger.warning(
                    "Primary store unavailable for %s %s (%s); using %s store",
                    op,
                    collection,
                    exc,
                    getattr(self.secondary, "name", "fallback"),
                )
            else:
                # Running without Firestore on purpose; the startup warning covers it.
                logger.debug("Primary store not configured for %s %s: %s", op, collection, exc)
        except Exception as exc:
            logger.warning(
                "Primary store failed on %s %s (%s: %s); using %s store",
                op,
                collection,
                type(exc).__name__,
                exc,
                getattr(self.secondary, "name", "fallback"),
            )
        return getattr(self.secondary, op)(collection, *args, **kwargs)

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        return self._call("get", collection, doc_id)

    def set(self, collection: str, doc_id: str, data: Dict[str, Any], merge: bool = False) -> Dict[str, Any]:
        return self._call("set", collection, doc_id, data, merge=merge)

    def add(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("add", collection, data)

    def update(self, collection: str, doc_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("update", collection, doc_id, data)

    def increment(
        self,
        collection: str,
        doc_id: str,
        deltas: Dict[str, float],
        fields: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._call("increment", collection, doc_id, deltas, fields=fields)

    def delete(self, collection: str, doc_id: str) -> bool:
        return self._call("delete", collection, doc_id)

    def query(self, collection: str, where: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return self._call("query", collection, where)

    def primary_status(self) -> str:
        try:
            self.primary.ping()
        except Exception as exc:
            logger.debug("Primary store ping failed: %s", exc)
            return "disconnected"
        return "connected"
