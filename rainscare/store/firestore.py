# -*- coding: utf-8 -*-
"""Document store: Cloud Firestore via firebase-admin."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core.exceptions import NotFound

from .base import DocumentNotFound, StoreUnavailable, new_doc_id, strip_id, with_id

logger = logging.getLogger(__name__)

_APP_NAME = "rainscare"


class FirestoreStore:
    name = "firestore"

    def __init__(
        self,
        credentials_path: Optional[Path] = None,
        project_id: Optional[str] = None,
        client: Any = None,
    ) -> None:
        self.credentials_path = credentials_path
        self.project_id = project_id
        self._db = client
        self._lock = threading.Lock()

    @property
    def configured(self) -> bool:
        return self._db is not None or self.credentials_path is not None

    def _client(self) -> Any:
        if self._db is not None:
            return self._db
        with self._lock:
            if self._db is None:
                if self.credentials_path is None:
                    raise StoreUnavailable("Firebase credentials are not configured")
                if not self.credentials_path.exists():
                    raise StoreUnavailable(f"Firebase credentials not found: {self.credentials_path}")
                try:
                    app = firebase_admin.get_app(_APP_NAME)
                except ValueError:
                    options = {"projectId": self.project_id} if self.project_id else None
                    app = firebase_admin.initialize_app(
                        credentials.Certificate(str(self.credentials_path)),
                        options,
                        name=_APP_NAME,
                    )
                    logger.info("Firebase app initialized (project=%s)", self.project_id or "from credentials")
                self._db = firestore.client(app)
        return self._db

    def _ref(self, collection: str, doc_id: str) -> Any:
        return self._client().collection(collection).document(doc_id)

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        snap = self._ref(collection, doc_id).get()
        if not snap.exists:
            return None
        return with_id(snap.id, snap.to_dict())

    def set(self, collection: str, doc_id: str, data: Dict[str, Any], merge: bool = False) -> Dict[str, Any]:
        ref = self._ref(collection, doc_id)
        ref.set(strip_id(data), merge=merge)
        if not merge:
            return with_id(doc_id, strip_id(data))
        snap = ref.get()
        return with_id(doc_id, snap.to_dict())

    def add(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.set(collection, new_doc_id(), data)

    def update(self, collection: str, doc_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        ref = self._ref(collection, doc_id)
        try:
            ref.update(strip_id(data))
        except NotFound as exc:
            raise DocumentNotFound(collection, doc_id) from exc
        return with_id(doc_id, ref.get().to_dict())

    def increment(
        self,
        collection: str,
        doc_id: str,
        deltas: Dict[str, float],
        fields: Optional[Dict[str, Any]] = None,
    ) -> None:
        payload: Dict[str, Any] = {key: firestore.Increment(amount) for key, amount in deltas.items()}
        if fields:
            payload.update(strip_id(fields))
        try:
            self._ref(collection, doc_id).update(payload)
        except NotFound as exc:
            raise DocumentNotFound(collection, doc_id) from exc

    def delete(self, collection: str, doc_id: str) -> bool:
        ref = self._ref(collection, doc_id)
        if not ref.get().exists:
            return False
        ref.delete()
        return True

    def query(self, collection: str, where: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        # Equality filters only; ordering happens in the caller so no composite index is needed.
        q = self._client().collection(collection)
        for field, value in (where or {}).items():
            q = q.where(field, "==", value)
        return [with_id(snap.id, snap.to_dict()) for snap in q.stream()]

    def ping(self) -> None:
        list(self._client().collection("healthCheck").limit(1).stream())
