# -*- coding: utf-8 -*-
"""Content: admin-curated announcements, health tips, success stories and updates."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1)
    priority: int = Field(1, ge=0, le=100, description="Higher shows first")
    is_active: bool = True


class HealthTipCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1)
    category: str = Field("General Health", min_length=1, max_length=80)
    is_active: bool = True


class SuccessStoryCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1)
    author: str = Field("Anonymous User", max_length=120)
    featured: bool = False
    before_weight: Optional[float] = Field(None, gt=0)
    after_weight: Optional[float] = Field(None, gt=0)
    duration: Optional[str] = Field(None, max_length=80)
    is_active: bool = True


class UpdateCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1)
    is_active: bool = True

    @model_validator(mode="before")
    @classmethod
    def _description_alias(cls, value: Any) -> Any:
        # Older admin clients post `description` instead of `content`.
        if isinstance(value, dict) and not value.get("content") and value.get("description"):
            value = dict(value)
            value["content"] = value.pop("description")
        return value


class ContentItem(BaseModel):
    """Stored content document; kind-specific fields pass through."""

    model_config = ConfigDict(extra="allow")

    id: str
    title: str = ""
    content: str = ""
    is_active: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class LikeResponse(BaseModel):
    success: bool = True
    message: str = "Health tip liked successfully"


class ActivityItem(BaseModel):
    type: str
    id: str
    title: str = ""
    created_at: Optional[str] = None


class DashboardStats(BaseModel):
    total_users: int = 0
    total_content: int = 0
    content_by_type: Dict[str, int] = Field(default_factory=dict)
    total_blogs: int = 0
    pending_shared_recipes: int = 0
    recent_activity: List[ActivityItem] = Field(default_factory=list)


class KindEngagement(BaseModel):
    total: int = 0
    active: int = 0
    views: int = 0
    likes: int = 0


class ContentEngagement(BaseModel):
    by_type: Dict[str, KindEngagement] = Field(default_factory=dict)
    total_views: int = 0
    total_likes: int = 0
