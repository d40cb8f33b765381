# -*- coding: utf-8 -*-
"""Content: public feeds and admin CRUD."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import ValidationError

from ..auth.security import require_admin
from ..auth.storage import count_users
from ..blogs.storage import COLLECTION as BLOGS
from ..recipes.storage import list_pending
from ..store import get_store
from . import storage
from .models import ContentEngagement, ContentItem, DashboardStats, LikeResponse
from .storage import ContentKind

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Content"])
admin_router = APIRouter(prefix="/api/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


@router.get("/announcements/active", response_model=List[ContentItem], summary="Active announcements")
def announcements_active():
    return storage.active_announcements()


@router.get("/health-tips/active", response_model=List[ContentItem], summary="Active health tips")
def health_tips_active(category: str = Query(default="all", max_length=80)):
    return storage.active_health_tips(category)


@router.post("/health-tips/{tip_id}/like", response_model=LikeResponse, summary="Like a health tip")
def like_health_tip(tip_id: str):
    storage.like_health_tip(tip_id)
    return LikeResponse()


@router.get("/success-stories/active", response_model=List[ContentItem], summary="Active success stories")
def success_stories_active():
    return storage.active_success_stories()


@router.get("/updates/active", response_model=List[ContentItem], summary="Active updates")
def updates_active():
    return storage.active_updates()


@admin_router.get("/dashboard/stats", response_model=DashboardStats, summary="Totals and recent content activity")
def dashboard_stats():
    try:
        return storage.dashboard_stats(
            total_users=count_users(),
            total_blogs=len(get_store().query(BLOGS)),
            pending_shared_recipes=len(list_pending()),
        )
    except Exception as exc:
        logger.error("Error building dashboard stats: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to fetch dashboard statistics") from exc


@admin_router.get(
    "/analytics/content-engagement", response_model=ContentEngagement, summary="Views and likes per content type"
)
def content_engagement():
    try:
        return storage.content_engagement(get_store().query(BLOGS))
    except Exception as exc:
        logger.error("Error building content engagement: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to fetch content engagement analytics") from exc


def _validation_detail(exc: ValidationError) -> str:
    fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
    return f"Invalid fields: {', '.join(fields)}" if fields else "Invalid payload"


def _register_admin_routes(kind: ContentKind) -> None:
    path = f"/{kind.name}"
    tag = kind.name.replace("-", " ")

    def list_items():
        return storage.list_all(kind)

    def read_item(item_id: str):
        item = storage.get_item(kind, item_id)
        if not item:
            raise HTTPException(status_code=404, detail=f"{tag} item not found")
        return item

    def create_item(payload: Dict[str, Any] = Body(...)):
        try:
            return storage.create_item(kind, payload)
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=_validation_detail(exc)) from exc

    def update_item(item_id: str, payload: Dict[str, Any] = Body(...)):
        try:
            return storage.update_item(kind, item_id, payload)
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=f"{tag} item not found") from exc
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=_validation_detail(exc)) from exc

    def delete_item(item_id: str):
        try:
            storage.delete_item(kind, item_id)
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=f"{tag} item not found") from exc
        return {"message": f"{tag} item deleted successfully"}

    admin_router.add_api_route(path, list_items, methods=["GET"], response_model=List[ContentItem], summary=f"List {tag}")
    admin_router.add_api_route(
        path, create_item, methods=["POST"], response_model=ContentItem, status_code=201, summary=f"Create {tag} item"
    )
    admin_router.add_api_route(f"{path}/{{item_id}}", read_item, methods=["GET"], response_model=ContentItem, summary=f"Read {tag} item")
    admin_router.add_api_route(
        f"{path}/{{item_id}}", update_item, methods=["PUT"], response_model=ContentItem, summary=f"Update {tag} item"
    )
    admin_router.add_api_route(f"{path}/{{item_id}}", delete_item, methods=["DELETE"], summary=f"Delete {tag} item")


for _kind in storage.KINDS.values():
    _register_admin_routes(_kind)
