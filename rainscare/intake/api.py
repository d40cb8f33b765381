# -*- coding: utf-8 -*-
"""Intake API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from .models import (
    DATE_PATTERN,
    DailyHealthRecord,
    DaysResponse,
    FoodEntryCreate,
    FoodEntryCreateResponse,
    MetricUpdateRequest,
    WaterRequest,
)
from .storage import (
    add_food_entry,
    add_water,
    get_day,
    get_days,
    get_month,
    get_week,
    parse_day,
    remove_food_entry,
    summarize_days,
    today_utc,
    update_metric,
)

router = APIRouter(prefix="/api/intake", tags=["Intake"])


def _days_response(start: str, end: str, days) -> DaysResponse:
    totals, averages = summarize_days(days)
    return DaysResponse(start=start, end=end, days=days, totals=totals, averages=averages)


@router.get("/today", response_model=DailyHealthRecord, summary="Today's record with food entries")
def today(user: dict = Depends(get_current_user)):
    return get_day(user["id"], today_utc())


@router.get("/days/{day}", response_model=DailyHealthRecord, summary="One day's record with food entries")
def day_record(day: str, user: dict = Depends(get_current_user)):
    try:
        parse_day(day)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid date: {day}") from exc
    return get_day(user["id"], day)


@router.get("/week", response_model=DaysResponse, summary="Seven days ending at `end` (default today)")
def week(
    end: str | None = Query(default=None, pattern=DATE_PATTERN, description="YYYY-MM-DD"),
    user: dict = Depends(get_current_user),
):
    start_s, end_s, days = get_week(user["id"], end)
    return _days_response(start_s, end_s, days)


@router.get("/month", response_model=DaysResponse, summary="Thirty days ending at `end` (default today)")
def month(
    end: str | None = Query(default=None, pattern=DATE_PATTERN, description="YYYY-MM-DD"),
    user: dict = Depends(get_current_user),
):
    start_s, end_s, days = get_month(user["id"], end)
    return _days_response(start_s, end_s, days)


@router.get("/range", response_model=DaysResponse, summary="Records for an explicit date range")
def date_range(
    start: str = Query(..., pattern=DATE_PATTERN, description="YYYY-MM-DD"),
    end: str = Query(..., pattern=DATE_PATTERN, description="YYYY-MM-DD"),
    user: dict = Depends(get_current_user),
):
    try:
        days = get_days(user["id"], start, end)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _days_response(start, end, days)


@router.post("/entries", response_model=FoodEntryCreateResponse, summary="Log a food entry")
def create_entry(request: FoodEntryCreate, user: dict = Depends(get_current_user)):
    try:
        entry, day = add_food_entry(user["id"], request)
    except Exception as exc:
        raise HTTPException(status_code=500, detail=f"Failed to save entry: {exc}") from exc
    return FoodEntryCreateResponse(entry=entry, day=day)


@router.delete("/entries/{entry_id}", response_model=DailyHealthRecord, summary="Remove a food entry")
def delete_entry(entry_id: str, user: dict = Depends(get_current_user)):
    try:
        return remove_food_entry(user["id"], entry_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail="Food entry not found") from exc


@router.post("/metrics", response_model=DailyHealthRecord, summary="Set water, steps, sleep, mood or calories")
def set_metric(request: MetricUpdateRequest, user: dict = Depends(get_current_user)):
    try:
        return update_metric(user["id"], request.metric, request.value, request.date)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/water", response_model=DailyHealthRecord, summary="Add (or remove) glasses of water")
def water(request: WaterRequest, user: dict = Depends(get_current_user)):
    return add_water(user["id"], request.amount, request.date)
