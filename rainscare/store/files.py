# -*- coding: utf-8 -*-
"""Document store: local JSON files, one file per document.

Layout: <root>/<collection>/<doc_id>.json
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from .base import DocumentNotFound, check_segment, deep_merge, new_doc_id, strip_id, with_id

logger = logging.getLogger(__name__)


class JsonFileStore:
    name = "local"

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        # Read-modify-write cycles (merge, increment) must not interleave.
        self._lock = threading.RLock()

    def _path(self, collection: str, doc_id: str) -> Path:
        return self.root / check_segment(collection) / f"{check_segment(doc_id)}.json"

    def _read(self, fp: Path) -> Optional[Dict[str, Any]]:
        if not fp.exists():
            return None
        raw = json.loads(fp.read_text(encoding="utf-8"))
        return raw if isinstance(raw, dict) else {}

    def _write(self, fp: Path, data: Dict[str, Any]) -> None:
        fp.parent.mkdir(parents=True, exist_ok=True)
        tmp = fp.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(strip_id(data), ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(fp)

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            data = self._read(self._path(collection, doc_id))
        return with_id(doc_id, data) if data is not None else None

    def set(self, collection: str, doc_id: str, data: Dict[str, Any], merge: bool = False) -> Dict[str, Any]:
        fp = self._path(collection, doc_id)
        with self._lock:
            payload = strip_id(data)
            if merge:
                payload = deep_merge(self._read(fp) or {}, payload)
            self._write(fp, payload)
        return with_id(doc_id, payload)

    def add(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.set(collection, new_doc_id(), data)

    def update(self, collection: str, doc_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        fp = self._path(collection, doc_id)
        with self._lock:
            existing = self._read(fp)
            if existing is None:
                raise DocumentNotFound(collection, doc_id)
            existing.update(strip_id(data))
            self._write(fp, existing)
        return with_id(doc_id, existing)

    def increment(
        self,
        collection: str,
        doc_id: str,
        deltas: Dict[str, float],
        fields: Optional[Dict[str, Any]] = None,
    ) -> None:
        fp = self._path(collection, doc_id)
        with self._lock:
            existing = self._read(fp)
            if existing is None:
                raise DocumentNotFound(collection, doc_id)
            for key, amount in deltas.items():
                current = existing.get(key) or 0
                existing[key] = current + amount
            if fields:
                existing.update(strip_id(fields))
            self._write(fp, existing)

    def delete(self, collection: str, doc_id: str) -> bool:
        fp = self._path(collection, doc_id)
        with self._lock:
            if not fp.exists():
                return False
            fp.unlink()
        return True

    def query(self, collection: str, where: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        folder = self.root / check_segment(collection)
        if not folder.exists():
            return []
        out: List[Dict[str, Any]] = []
        with self._lock:
            for fp in sorted(folder.glob("*.json")):
                try:
                    data = self._read(fp)
                except (OSError, ValueError) as exc:
                    logger.warning("Skipping unreadable document %s: %s", fp, exc)
                    continue
                if data is None:
                    continue
                if where and any(data.get(k) != v for k, v in where.items()):
                    continue
                out.append(with_id(fp.stem, data))
        return out

    def ping(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
