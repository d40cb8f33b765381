# -*- coding: utf-8 -*-
"""Goals: one document per user in `userGoals`, overwritten on save."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from ..store import get_store, utc_now_iso
from .models import GoalProgress, GoalsResponse, UserGoals

logger = logging.getLogger(__name__)

COLLECTION = "userGoals"

_GOAL_FIELDS = set(UserGoals.model_fields)


def get_goals(user_id: str) -> GoalsResponse:
    try:
        doc = get_store().get(COLLECTION, user_id)
    except Exception as exc:
        logger.error("Failed to load goals for user %s, serving defaults: %s", user_id, exc)
        doc = None
    if not doc:
        return GoalsResponse(goals=UserGoals(), is_default=True)
    stored = {k: v for k, v in doc.items() if k in _GOAL_FIELDS and v is not None}
    return GoalsResponse(goals=UserGoals.model_validate(stored), updated_at=doc.get("updated_at"))


def save_goals(user_id: str, goals: UserGoals) -> GoalsResponse:
    now = utc_now_iso()
    payload: Dict[str, Any] = goals.model_dump(mode="json")
    payload["user_id"] = user_id
    payload["updated_at"] = now
    get_store().set(COLLECTION, user_id, payload)
    return GoalsResponse(goals=goals, updated_at=now)


def _pct(value: float, goal: float) -> float:
    if not goal:
        return 0.0
    return round(float(value or 0) / float(goal) * 100.0, 1)


def compute_goal_progress(record: Mapping[str, Any], goals: UserGoals) -> GoalProgress:
    """`record` is a daily record dict (total_calories, water, steps, ...)."""
    return GoalProgress(
        calories=_pct(record.get("total_calories", 0), goals.calorie_goal),
        protein=_pct(record.get("total_protein", 0), goals.protein_goal),
        carbs=_pct(record.get("total_carbs", 0), goals.carbs_goal),
        fat=_pct(record.get("total_fat", 0), goals.fat_goal),
        water=_pct(record.get("water", 0), goals.water_goal),
        steps=_pct(record.get("steps", 0), goals.steps_goal),
        sleep=_pct(record.get("sleep", 0), goals.sleep_goal),
    )
