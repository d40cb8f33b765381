# -*- coding: utf-8 -*-
"""Steps API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from ..auth.security import get_current_user
from ..config import settings
from .detector import count_steps
from .models import ManualStepsRequest, StepDetectRequest, StepResult, StepSyncRequest, StepSyncStatus
from .sync import StepSyncError, get_sync_status, record_detected_steps, record_manual_steps, sync_provider

router = APIRouter(prefix="/api/steps", tags=["Steps"])


@router.post("/detect", response_model=StepResult, summary="Count steps in accelerometer samples and add them to today")
def detect(request: StepDetectRequest, user: dict = Depends(get_current_user)):
    steps = count_steps(
        [(s.x, s.y, s.z, s.t_ms) for s in request.samples],
        threshold=request.threshold or settings.step_threshold,
        min_interval_ms=settings.step_min_interval_ms if request.min_interval_ms is None else request.min_interval_ms,
    )
    return record_detected_steps(user["id"], steps)


@router.post("/sync", response_model=StepResult, summary="Sync today's steps from a fitness platform")
def sync(request: StepSyncRequest, http_request: Request, user: dict = Depends(get_current_user)):
    try:
        return sync_provider(user["id"], request.provider, user_agent=http_request.headers.get("user-agent") or "")
    except StepSyncError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/manual", response_model=StepResult, summary="Enter today's steps by hand")
def manual(request: ManualStepsRequest, user: dict = Depends(get_current_user)):
    try:
        return record_manual_steps(user["id"], request.steps, request.date)
    except StepSyncError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/status", response_model=StepSyncStatus, summary="Last sync and today's step count")
def status(user: dict = Depends(get_current_user)):
    return get_sync_status(user["id"])
