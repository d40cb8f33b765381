# -*- coding: utf-8 -*-
"""Blogs: `blogs` collection.

Posts are soft-deleted through `is_active`; inactive posts are invisible to
public reads but remain editable by admins. Public reads count views.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..store import DocumentNotFound, get_store, newest_first, utc_now_iso
from .models import BlogCreate, BlogPost, BlogUpdate

logger = logging.getLogger(__name__)

COLLECTION = "blogs"
EXCERPT_CHARS = 150


def _excerpt(content: str) -> str:
    return content[:EXCERPT_CHARS] + "..."


def _get(blog_id: str) -> Optional[Dict[str, Any]]:
    try:
        return get_store().get(COLLECTION, blog_id)
    except ValueError:
        return None


def list_active() -> List[BlogPost]:
    docs = get_store().query(COLLECTION, {"is_active": True})
    return [BlogPost.model_validate(d) for d in newest_first(docs)]


def list_all() -> List[BlogPost]:
    return [BlogPost.model_validate(d) for d in newest_first(get_store().query(COLLECTION))]


def get_public(blog_id: str) -> Optional[BlogPost]:
    """Active post by id, counting the view."""
    doc = _get(blog_id)
    if not doc or not doc.get("is_active"):
        return None
    try:
        get_store().increment(COLLECTION, blog_id, {"views": 1})
    except DocumentNotFound:
        return None
    doc["views"] = int(doc.get("views") or 0) + 1
    return BlogPost.model_validate(doc)


def get_admin(blog_id: str) -> Optional[BlogPost]:
    doc = _get(blog_id)
    return BlogPost.model_validate(doc) if doc else None


def create(request: BlogCreate) -> BlogPost:
    now = utc_now_iso()
    payload = request.model_dump()
    payload["category"] = request.category or "General"
    payload["excerpt"] = request.excerpt or _excerpt(request.content)
    payload.update({"views": 0, "created_at": now, "updated_at": now, "date": now[:10]})
    doc = get_store().add(COLLECTION, payload)
    logger.info("Blog %s created: %s", doc["id"], request.title)
    return BlogPost.model_validate(doc)


def update(blog_id: str, request: BlogUpdate) -> BlogPost:
    """Raises LookupError when the post does not exist and ValidationError when
    the merged post would be invalid (e.g. an explicit null title)."""
    existing = _get(blog_id)
    if existing is None:
        raise LookupError(f"Blog not found: {blog_id}")
    patch = request.model_dump(exclude_unset=True)
    patch["updated_at"] = utc_now_iso()
    # Nothing is written unless the merged post still reads back.
    BlogPost.model_validate({**existing, **patch})
    try:
        doc = get_store().update(COLLECTION, blog_id, patch)
    except DocumentNotFound as exc:
        raise LookupError(f"Blog not found: {blog_id}") from exc
    return BlogPost.model_validate(doc)


def delete(blog_id: str) -> None:
    """Raises LookupError when the post does not exist."""
    if _get(blog_id) is None or not get_store().delete(COLLECTION, blog_id):
        raise LookupError(f"Blog not found: {blog_id}")
