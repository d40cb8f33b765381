# -*- coding: utf-8 -*-
"""Metrics: `healthMetrics` readings plus progress and dashboard aggregation."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional

import numpy as np

from ..goals.storage import compute_goal_progress, get_goals
from ..intake.storage import ENTRIES, get_day, parse_day, today_utc
from ..store import DocumentNotFound, get_store, utc_now_iso
from .models import (
    BloodPressureStats,
    Consistency,
    DailyNutrition,
    DashboardResponse,
    DashboardSummary,
    DashboardToday,
    HealthMetric,
    HealthMetricInput,
    LatestReading,
    MetricStats,
    NutritionProgress,
    ProgressResponse,
    WeightProgress,
    WeightStats,
)

logger = logging.getLogger(__name__)

COLLECTION = "healthMetrics"


def compute_bmi(weight: Optional[float], height_cm: Optional[float]) -> Optional[float]:
    if not weight or not height_cm:
        return None
    meters = height_cm / 100.0
    return round(weight / (meters * meters), 1)


def _by_date(docs: List[Dict[str, Any]], newest_first: bool = True) -> List[Dict[str, Any]]:
    return sorted(docs, key=lambda d: (str(d.get("date") or ""), str(d.get("created_at") or "")), reverse=newest_first)


def _user_metrics(user_id: str, start: Optional[str] = None, end: Optional[str] = None) -> List[Dict[str, Any]]:
    start_date = start or "0000-01-01"
    end_date = end or "9999-12-31"
    docs = get_store().query(COLLECTION, {"user_id": user_id})
    return [d for d in docs if start_date <= str(d.get("date") or "") <= end_date]


def create_metric(user_id: str, request: HealthMetricInput) -> HealthMetric:
    payload = request.model_dump(exclude_none=True)
    payload["date"] = request.date or today_utc()
    payload["user_id"] = user_id
    payload["created_at"] = utc_now_iso()
    bmi = compute_bmi(request.weight, request.height)
    if bmi is not None:
        payload["bmi"] = bmi
    doc = get_store().add(COLLECTION, payload)
    return HealthMetric.model_validate(doc)


def list_metrics(
    user_id: str,
    *,
    start: Optional[str] = None,
    end: Optional[str] = None,
    limit: int = 100,
    metric_type: str = "all",
) -> List[HealthMetric]:
    docs = _by_date(_user_metrics(user_id, start, end))[:limit]
    if metric_type != "all":
        docs = [d for d in docs if d.get(metric_type) is not None]
    return [HealthMetric.model_validate(d) for d in docs]


def compute_stats(metrics: List[HealthMetric], metric_type: str = "all") -> Optional[MetricStats]:
    """`metrics` must be newest first."""
    if not metrics:
        return None
    stats = MetricStats(count=len(metrics), latest=metrics[0], oldest=metrics[-1])

    if metric_type in {"weight", "all"}:
        weights = np.array([m.weight for m in metrics if m.weight], dtype=float)
        if weights.size:
            stats.weight = WeightStats(
                current=float(weights[0]),
                min=float(weights.min()),
                max=float(weights.max()),
                avg=round(float(weights.mean()), 1),
                trend=round(float(weights[0] - weights[-1]), 1) if weights.size > 1 else 0.0,
            )

    if metric_type in {"blood_pressure", "all"}:
        readings = [m.blood_pressure for m in metrics if m.blood_pressure]
        if readings:
            stats.blood_pressure = BloodPressureStats(
                current=readings[0],
                avg_systolic=int(round(float(np.mean([r.systolic for r in readings])))),
                avg_diastolic=int(round(float(np.mean([r.diastolic for r in readings])))),
            )

    return stats


def _owned(user_id: str, metric_id: str) -> Dict[str, Any]:
    """Raises LookupError if missing, PermissionError if owned by someone else."""
    try:
        doc = get_store().get(COLLECTION, metric_id)
    except ValueError:
        doc = None
    if not doc:
        raise LookupError(f"Health metric not found: {metric_id}")
    if doc.get("user_id") != user_id:
        raise PermissionError("Not authorized to access this health metric")
    return doc


def update_metric(user_id: str, metric_id: str, request: HealthMetricInput) -> HealthMetric:
    existing = _owned(user_id, metric_id)
    patch = request.model_dump(exclude_unset=True, exclude_none=True)
    patch["updated_at"] = utc_now_iso()
    weight = patch.get("weight", existing.get("weight"))
    height = patch.get("height", existing.get("height"))
    bmi = compute_bmi(weight, height)
    if bmi is not None:
        patch["bmi"] = bmi
    try:
        doc = get_store().update(COLLECTION, metric_id, patch)
    except DocumentNotFound as exc:
        raise LookupError(f"Health metric not found: {metric_id}") from exc
    return HealthMetric.model_validate(doc)


def delete_metric(user_id: str, metric_id: str) -> None:
    _owned(user_id, metric_id)
    get_store().delete(COLLECTION, metric_id)


def _food_entries(user_id: str, start: str, end: str) -> List[Dict[str, Any]]:
    docs = get_store().query(ENTRIES, {"user_id": user_id})
    return [d for d in docs if start <= str(d.get("date") or "") <= end]


def compute_progress(user_id: str, days: int = 30, today: Optional[str] = None) -> ProgressResponse:
    end_d = parse_day(today or today_utc())
    start_s = (end_d - timedelta(days=days)).isoformat()
    end_s = end_d.isoformat()

    metrics = _by_date(_user_metrics(user_id, start_s, end_s), newest_first=False)
    food = _food_entries(user_id, start_s, end_s)
    goals = get_goals(user_id)
    food_days = {str(f.get("date")) for f in food}

    progress = ProgressResponse(
        start=start_s,
        end=end_s,
        days=days,
        consistency=Consistency(
            metrics_tracked=len(metrics),
            food_tracked=len(food_days),
            total_days=days,
            metrics_percentage=int(round(len(metrics) / days * 100)),
            food_percentage=int(round(len(food_days) / days * 100)),
        ),
    )

    target = goals.goals.target_weight
    weights = [float(m["weight"]) for m in metrics if m.get("weight")]
    if target and len(weights) > 1:
        start_w, current_w = weights[0], weights[-1]
        span = start_w - target
        progress.weight = WeightProgress(
            start_weight=start_w,
            current_weight=current_w,
            target_weight=target,
            total_change=round(current_w - start_w, 1),
            remaining_change=round(target - current_w, 1),
            progress_percentage=int(round((start_w - current_w) / span * 100)) if span else None,
        )

    if food:
        per_day: Dict[str, np.ndarray] = {}
        for entry in food:
            row = np.array([float(entry.get(k) or 0) for k in ("calories", "protein", "carbs", "fat")])
            day = str(entry.get("date"))
            per_day[day] = per_day.get(day, np.zeros(4)) + row
        avg = np.mean(np.stack(list(per_day.values())), axis=0)
        calorie_goal = goals.goals.calorie_goal
        progress.nutrition = NutritionProgress(
            avg_calories=int(round(avg[0])),
            avg_protein=int(round(avg[1])),
            avg_carbs=int(round(avg[2])),
            avg_fat=int(round(avg[3])),
            calorie_goal_adherence=int(round(avg[0] / calorie_goal * 100)) if calorie_goal else None,
        )

    return progress


def _trends(metrics: List[Dict[str, Any]]) -> Optional[Dict[str, float]]:
    """`metrics` oldest first."""
    if len(metrics) < 2:
        return None
    trends: Dict[str, float] = {}
    for field in ("weight", "bmi"):
        values = [float(m[field]) for m in metrics if m.get(field)]
        if len(values) >= 2:
            trends[field] = round(values[-1] - values[0], 1)
    return trends


def _latest(metrics: List[Dict[str, Any]], field: str) -> Optional[LatestReading]:
    """`metrics` newest first."""
    for m in metrics:
        if m.get(field):
            return LatestReading(date=str(m.get("date")), value=m[field])
    return None


def build_dashboard(user_id: str, today: Optional[str] = None) -> DashboardResponse:
    today_s = today or today_utc()
    week_ago = (parse_day(today_s) - timedelta(days=7)).isoformat()

    recent = _by_date(_user_metrics(user_id, week_ago, today_s))[:7]
    todays = [m for m in recent if m.get("date") == today_s]
    record = get_day(user_id, today_s)
    goals = get_goals(user_id).goals

    return DashboardResponse(
        today=DashboardToday(
            date=today_s,
            metrics=HealthMetric.model_validate(todays[0]) if todays else None,
            nutrition=DailyNutrition(
                calories=record.total_calories,
                protein=record.total_protein,
                carbs=record.total_carbs,
                fat=record.total_fat,
                fiber=record.total_fiber,
            ),
            food_entries=len(record.food_entries),
            water=record.water,
            steps=record.steps,
            sleep=record.sleep,
            mood=record.mood,
        ),
        goals=goals,
        goal_progress=compute_goal_progress(record.model_dump(), goals),
        trends=_trends(list(reversed(recent))),
        summary=DashboardSummary(
            total_days_tracked=len({m.get("date") for m in recent}),
            last_weight_entry=_latest(recent, "weight"),
            last_bp_entry=_latest(recent, "blood_pressure"),
        ),
    )
