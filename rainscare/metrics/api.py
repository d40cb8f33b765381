# -*- coding: utf-8 -*-
"""Metrics: API endpoints under /api/health."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..intake.models import DATE_PATTERN
from .models import DashboardResponse, HealthMetric, HealthMetricInput, MetricsListResponse, MetricType, ProgressResponse
from .storage import build_dashboard, compute_progress, compute_stats, create_metric, delete_metric, list_metrics, update_metric

router = APIRouter(prefix="/api/health", tags=["Health"])


@router.post("/metrics", response_model=HealthMetric, status_code=201, summary="Record body measurements")
def add_metric(request: HealthMetricInput, user: dict = Depends(get_current_user)):
    try:
        return create_metric(user["id"], request)
    except Exception as exc:
        raise HTTPException(status_code=500, detail=f"Failed to save health metrics: {exc}") from exc


@router.get("/metrics", response_model=MetricsListResponse, summary="List measurements with summary stats")
def get_metrics(
    start: str | None = Query(default=None, pattern=DATE_PATTERN, description="YYYY-MM-DD"),
    end: str | None = Query(default=None, pattern=DATE_PATTERN, description="YYYY-MM-DD"),
    limit: int = Query(default=100, ge=1, le=365),
    type: MetricType = Query(default="all"),
    user: dict = Depends(get_current_user),
):
    metrics = list_metrics(user["id"], start=start, end=end, limit=limit, metric_type=type)
    return MetricsListResponse(
        data=metrics,
        count=len(metrics),
        stats=compute_stats(metrics, type),
        filters={"start": start, "end": end, "type": type},
    )


@router.put("/metrics/{metric_id}", response_model=HealthMetric, summary="Update a measurement")
def put_metric(metric_id: str, request: HealthMetricInput, user: dict = Depends(get_current_user)):
    try:
        return update_metric(user["id"], metric_id, request)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail="Health metric not found") from exc
    except PermissionError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc


@router.delete("/metrics/{metric_id}", summary="Delete a measurement")
def remove_metric(metric_id: str, user: dict = Depends(get_current_user)):
    try:
        delete_metric(user["id"], metric_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail="Health metric not found") from exc
    except PermissionError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    return {"success": True, "message": "Health metric deleted successfully"}


@router.get("/progress", response_model=ProgressResponse, summary="Consistency, weight and nutrition progress")
def progress(days: int = Query(default=30, ge=7, le=365), user: dict = Depends(get_current_user)):
    return compute_progress(user["id"], days)


@router.get("/dashboard", response_model=DashboardResponse, summary="Today's overview with weekly trends")
def dashboard(user: dict = Depends(get_current_user)):
    return build_dashboard(user["id"])
