# -*- coding: utf-8 -*-
"""Pydantic models for the account routes."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..goals.models import UserGoals

DATA_TYPES = ("food_diary", "daily_records", "health_metrics", "favorite_recipes", "shared_recipes", "goals")


class ExportSummary(BaseModel):
    total_food_entries: int = 0
    total_daily_records: int = 0
    total_health_metrics: int = 0
    total_favorite_recipes: int = 0
    total_shared_recipes: int = 0


class ExportResponse(BaseModel):
    export_date: str
    profile: Dict[str, Any]
    goals: Optional[UserGoals] = None
    food_diary: List[Dict[str, Any]] = Field(default_factory=list)
    daily_records: List[Dict[str, Any]] = Field(default_factory=list)
    health_metrics: List[Dict[str, Any]] = Field(default_factory=list)
    favorite_recipes: List[Dict[str, Any]] = Field(default_factory=list)
    shared_recipes: List[Dict[str, Any]] = Field(default_factory=list)
    summary: ExportSummary


class DeleteDataRequest(BaseModel):
    data_types: List[str] = Field(default_factory=list)
    # Only a literal JSON true confirms.
    confirm_delete: Any = False


class DeleteDataResponse(BaseModel):
    success: bool = True
    message: str = "Selected data deleted successfully"
    deleted_counts: Dict[str, int] = Field(default_factory=dict)
