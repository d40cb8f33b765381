# -*- coding: utf-8 -*-
"""Content: storage for the four admin-curated collections.

Public reads never fail: when neither store can answer they log and serve the
built-in defaults (announcements, tips, stories) or an empty list (updates).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel

from ..store import DocumentNotFound, get_store, newest_first, utc_now_iso
from .models import (
    ActivityItem,
    AnnouncementCreate,
    ContentEngagement,
    ContentItem,
    DashboardStats,
    HealthTipCreate,
    KindEngagement,
    SuccessStoryCreate,
    UpdateCreate,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentKind:
    name: str
    collection: str
    create_model: Type[BaseModel]
    public_limit: int
    counters: tuple = ()


ANNOUNCEMENTS = ContentKind("announcements", "announcements", AnnouncementCreate, 5, ("views",))
HEALTH_TIPS = ContentKind("health-tips", "healthTips", HealthTipCreate, 10, ("views", "likes"))
SUCCESS_STORIES = ContentKind("success-stories", "successStories", SuccessStoryCreate, 6, ("likes",))
UPDATES = ContentKind("updates", "updates", UpdateCreate, 10)

KINDS: Dict[str, ContentKind] = {k.name: k for k in (ANNOUNCEMENTS, HEALTH_TIPS, SUCCESS_STORIES, UPDATES)}

_SEED_TIME = "2024-01-01T00:00:00Z"

DEFAULT_CONTENT: Dict[str, List[Dict[str, Any]]] = {
    "announcements": [
        {
            "id": "welcome",
            "title": "Welcome to Rainscare!",
            "content": "Your health journey starts here. Track your nutrition and get personalized insights.",
            "priority": 1,
            "is_active": True,
            "views": 0,
            "created_at": _SEED_TIME,
        }
    ],
    "health-tips": [
        {
            "id": "stay-hydrated",
            "title": "Stay Hydrated",
            "content": "Drink at least 8 glasses of water daily for optimal health.",
            "category": "general",
            "is_active": True,
            "views": 0,
            "likes": 0,
            "created_at": _SEED_TIME,
        },
        {
            "id": "eat-more-vegetables",
            "title": "Eat More Vegetables",
            "content": "Include a variety of colorful vegetables in your daily meals.",
            "category": "nutrition",
            "is_active": True,
            "views": 0,
            "likes": 0,
            "created_at": _SEED_TIME,
        },
    ],
    "success-stories": [
        {
            "id": "sarah-johnson",
            "title": "Sarah Johnson",
            "content": "Lost 20 pounds using Rainscare's nutrition tracking features!",
            "author": "Sarah Johnson",
            "before_weight": 180,
            "after_weight": 160,
            "duration": "3 months",
            "featured": False,
            "likes": 0,
            "is_active": True,
            "created_at": _SEED_TIME,
        }
    ],
    "updates": [],
}


def seed_defaults(store: Any) -> int:
    """Write the default content into `store` for collections that are still empty."""
    written = 0
    for kind_name, docs in DEFAULT_CONTENT.items():
        kind = KINDS[kind_name]
        if not docs or store.query(kind.collection):
            continue
        for doc in docs:
            store.set(kind.collection, doc["id"], doc)
            written += 1
    if written:
        logger.info("Seeded %d default content documents", written)
    return written


def _defaults(kind: ContentKind) -> List[ContentItem]:
    return [ContentItem.model_validate(d) for d in DEFAULT_CONTENT[kind.name]]


def _active(kind: ContentKind, where: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    filters = {"is_active": True}
    filters.update(where or {})
    return newest_first(get_store().query(kind.collection, filters))


def active_announcements() -> List[ContentItem]:
    try:
        docs = _active(ANNOUNCEMENTS)
    except Exception as exc:
        logger.error("Error fetching active announcements: %s", exc)
        return _defaults(ANNOUNCEMENTS)
    # Stable sort keeps newest-first within a priority.
    docs.sort(key=lambda d: int(d.get("priority") or 0), reverse=True)
    return [ContentItem.model_validate(d) for d in docs[: ANNOUNCEMENTS.public_limit]]


def active_health_tips(category: str = "all") -> List[ContentItem]:
    where = {"category": category} if category and category != "all" else None
    try:
        docs = _active(HEALTH_TIPS, where)
    except Exception as exc:
        logger.error("Error fetching active health tips: %s", exc)
        tips = _defaults(HEALTH_TIPS)
        if where:
            tips = [t for t in tips if getattr(t, "category", None) == category]
        return tips
    return [ContentItem.model_validate(d) for d in docs[: HEALTH_TIPS.public_limit]]


def active_success_stories() -> List[ContentItem]:
    try:
        docs = _active(SUCCESS_STORIES)
    except Exception as exc:
        logger.error("Error fetching active success stories: %s", exc)
        return _defaults(SUCCESS_STORIES)
    return [ContentItem.model_validate(d) for d in docs[: SUCCESS_STORIES.public_limit]]


def active_updates() -> List[ContentItem]:
    try:
        docs = _active(UPDATES)
    except Exception as exc:
        logger.error("Error fetching active updates: %s", exc)
        return []
    return [ContentItem.model_validate(d) for d in docs[: UPDATES.public_limit]]


def like_health_tip(tip_id: str) -> bool:
    """Returns whether the like was recorded; callers report success either way."""
    try:
        get_store().increment(HEALTH_TIPS.collection, tip_id, {"likes": 1})
    except (DocumentNotFound, ValueError) as exc:
        logger.info("Like for unknown health tip %s ignored: %s", tip_id, exc)
        return False
    except Exception as exc:
        logger.error("Error liking health tip %s: %s", tip_id, exc)
        return False
    return True


# ---- admin ----


def _get(kind: ContentKind, item_id: str) -> Optional[Dict[str, Any]]:
    try:
        return get_store().get(kind.collection, item_id)
    except ValueError:
        return None


def list_all(kind: ContentKind) -> List[ContentItem]:
    return [ContentItem.model_validate(d) for d in newest_first(get_store().query(kind.collection))]


def get_item(kind: ContentKind, item_id: str) -> Optional[ContentItem]:
    doc = _get(kind, item_id)
    return ContentItem.model_validate(doc) if doc else None


def create_item(kind: ContentKind, payload: Dict[str, Any]) -> ContentItem:
    """Raises pydantic.ValidationError on bad payloads."""
    validated = kind.create_model.model_validate(payload)
    now = utc_now_iso()
    data = validated.model_dump()
    for counter in kind.counters:
        data[counter] = 0
    data.update({"created_at": now, "updated_at": now})
    doc = get_store().add(kind.collection, data)
    logger.info("Created %s %s", kind.name, doc["id"])
    return ContentItem.model_validate(doc)


def update_item(kind: ContentKind, item_id: str, patch: Dict[str, Any]) -> ContentItem:
    """Validates the merged document; raises LookupError when missing."""
    existing = _get(kind, item_id)
    if existing is None:
        raise LookupError(f"{kind.name} not found: {item_id}")
    fields = set(kind.create_model.model_fields)
    merged = {k: v for k, v in existing.items() if k in fields}
    if "description" in patch and "content" not in patch:
        patch = dict(patch, content=patch["description"])
    merged.update(patch)
    validated = kind.create_model.model_validate(merged)
    changes = validated.model_dump()
    changes["updated_at"] = utc_now_iso()
    try:
        doc = get_store().update(kind.collection, item_id, changes)
    except DocumentNotFound as exc:
        raise LookupError(f"{kind.name} not found: {item_id}") from exc
    return ContentItem.model_validate(doc)


def delete_item(kind: ContentKind, item_id: str) -> None:
    if _get(kind, item_id) is None or not get_store().delete(kind.collection, item_id):
        raise LookupError(f"{kind.name} not found: {item_id}")


# ---- admin dashboard ----

# Kinds that show up in the recent activity feed, with their singular label.
_ACTIVITY_TYPES = {"announcements": "announcement", "health-tips": "health-tip", "updates": "update"}
RECENT_ACTIVITY_LIMIT = 5


def _all_docs() -> Dict[str, List[Dict[str, Any]]]:
    return {name: get_store().query(kind.collection) for name, kind in KINDS.items()}


def recent_activity(
    docs_by_kind: Dict[str, List[Dict[str, Any]]], limit: int = RECENT_ACTIVITY_LIMIT
) -> List[ActivityItem]:
    items = [
        {"type": label, "id": d["id"], "title": d.get("title") or "", "created_at": d.get("created_at")}
        for name, label in _ACTIVITY_TYPES.items()
        for d in docs_by_kind.get(name, [])
    ]
    return [ActivityItem.model_validate(i) for i in newest_first(items)[:limit]]


def dashboard_stats(total_users: int, total_blogs: int, pending_shared_recipes: int) -> DashboardStats:
    docs = _all_docs()
    by_type = {name: len(items) for name, items in docs.items()}
    return DashboardStats(
        total_users=total_users,
        total_content=sum(by_type.values()),
        content_by_type=by_type,
        total_blogs=total_blogs,
        pending_shared_recipes=pending_shared_recipes,
        recent_activity=recent_activity(docs),
    )


def _counter(doc: Dict[str, Any], field: str) -> int:
    value = doc.get(field)
    return int(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else 0


def content_engagement(blog_docs: List[Dict[str, Any]]) -> ContentEngagement:
    """Sum views and likes per kind; blogs only count views."""
    by_type: Dict[str, KindEngagement] = {}
    for name, items in dict(_all_docs(), blogs=blog_docs).items():
        by_type[name] = KindEngagement(
            total=len(items),
            active=sum(1 for d in items if d.get("is_active", True)),
            views=sum(_counter(d, "views") for d in items),
            likes=sum(_counter(d, "likes") for d in items),
        )
    return ContentEngagement(
        by_type=by_type,
        total_views=sum(e.views for e in by_type.values()),
        total_likes=sum(e.likes for e in by_type.values()),
    )
