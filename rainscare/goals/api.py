# -*- coding: utf-8 -*-
"""Goals API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..auth.security import get_current_user
from .models import GoalsResponse, UserGoals
from .storage import get_goals, save_goals

router = APIRouter(prefix="/api/goals", tags=["Goals"])


@router.get("", response_model=GoalsResponse, summary="Get daily goals (defaults when unset)")
def read_goals(user: dict = Depends(get_current_user)):
    return get_goals(user["id"])


@router.put("", response_model=GoalsResponse, summary="Replace daily goals")
def update_goals(request: UserGoals, user: dict = Depends(get_current_user)):
    try:
        return save_goals(user["id"], request)
    except Exception as exc:
        raise HTTPException(status_code=500, detail=f"Failed to save goals: {exc}") from exc
