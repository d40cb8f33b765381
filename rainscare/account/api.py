# -*- coding: utf-8 -*-
"""Account: personal data export and deletion."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..auth.security import get_current_user
from ..goals.storage import get_goals
from ..store import utc_now_iso
from .models import DATA_TYPES, DeleteDataRequest, DeleteDataResponse, ExportResponse, ExportSummary
from .storage import delete_user_data, owned_docs

router = APIRouter(prefix="/api/user", tags=["Account"])


@router.get("/export", response_model=ExportResponse, summary="Export everything stored for the current user")
def export_data(user: dict = Depends(get_current_user)):
    user_id = user["id"]
    food = owned_docs(user_id, "food_diary")
    records = owned_docs(user_id, "daily_records")
    metrics = owned_docs(user_id, "health_metrics")
    favorites = owned_docs(user_id, "favorite_recipes")
    shared = owned_docs(user_id, "shared_recipes")
    goals = get_goals(user_id)

    return ExportResponse(
        export_date=utc_now_iso(),
        profile={k: user.get(k) for k in ("id", "email", "display_name", "created_at")},
        goals=None if goals.is_default else goals.goals,
        food_diary=food,
        daily_records=records,
        health_metrics=metrics,
        favorite_recipes=favorites,
        shared_recipes=shared,
        summary=ExportSummary(
            total_food_entries=len(food),
            total_daily_records=len(records),
            total_health_metrics=len(metrics),
            total_favorite_recipes=len(favorites),
            total_shared_recipes=len(shared),
        ),
    )


@router.delete("/data", response_model=DeleteDataResponse, summary="Delete selected kinds of the current user's data")
def delete_data(request: DeleteDataRequest, user: dict = Depends(get_current_user)):
    if not request.data_types:
        raise HTTPException(status_code=400, detail="Select at least one data type")
    invalid = [t for t in request.data_types if t not in DATA_TYPES]
    if invalid:
        raise HTTPException(status_code=400, detail=f"Invalid data types: {', '.join(invalid)}")
    if request.confirm_delete is not True:
        raise HTTPException(status_code=400, detail="Confirmation required to delete data")
    try:
        counts = delete_user_data(user["id"], request.data_types)
    except Exception as exc:
        raise HTTPException(status_code=500, detail="Failed to delete user data") from exc
    return DeleteDataResponse(deleted_counts=counts)
