# -*- coding: utf-8 -*-
"""Metrics: body measurements, progress and dashboard models."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from ..goals.models import GoalProgress, UserGoals
from ..intake.models import DATE_PATTERN

MetricType = Literal["weight", "blood_pressure", "blood_sugar", "all"]


class BloodPressure(BaseModel):
    systolic: float = Field(..., gt=0, le=300)
    diastolic: float = Field(..., gt=0, le=200)


class HealthMetricInput(BaseModel):
    """Every measurement is optional; a reading may carry any subset."""

    weight: Optional[float] = Field(None, gt=0, le=500, description="kg")
    height: Optional[float] = Field(None, gt=0, le=300, description="cm")
    blood_pressure: Optional[BloodPressure] = None
    blood_sugar: Optional[float] = Field(None, ge=0, le=1000, description="mg/dL")
    heart_rate: Optional[float] = Field(None, gt=0, le=300, description="bpm")
    body_fat: Optional[float] = Field(None, ge=0, le=100, description="%")
    muscle_mass: Optional[float] = Field(None, ge=0, le=300, description="kg")
    water_intake: Optional[float] = Field(None, ge=0, le=50, description="Glasses")
    sleep_hours: Optional[float] = Field(None, ge=0, le=24)
    stress_level: Optional[int] = Field(None, ge=1, le=10)
    energy_level: Optional[int] = Field(None, ge=1, le=10)
    date: Optional[str] = Field(None, pattern=DATE_PATTERN)
    notes: Optional[str] = Field(None, max_length=2000)


class HealthMetric(HealthMetricInput):
    id: str
    user_id: str
    date: str
    bmi: Optional[float] = None
    created_at: str
    updated_at: Optional[str] = None


class WeightStats(BaseModel):
    current: float
    min: float
    max: float
    avg: float
    trend: float = Field(0.0, description="Newest minus oldest reading")


class BloodPressureStats(BaseModel):
    current: BloodPressure
    avg_systolic: int
    avg_diastolic: int


class MetricStats(BaseModel):
    count: int
    latest: HealthMetric
    oldest: HealthMetric
    weight: Optional[WeightStats] = None
    blood_pressure: Optional[BloodPressureStats] = None


class MetricsListResponse(BaseModel):
    data: List[HealthMetric]
    count: int
    stats: Optional[MetricStats] = None
    filters: Dict[str, Any] = Field(default_factory=dict)


class Consistency(BaseModel):
    metrics_tracked: int
    food_tracked: int
    total_days: int
    metrics_percentage: int
    food_percentage: int


class WeightProgress(BaseModel):
    start_weight: float
    current_weight: float
    target_weight: float
    total_change: float
    remaining_change: float
    progress_percentage: Optional[int] = None


class NutritionProgress(BaseModel):
    avg_calories: int
    avg_protein: int
    avg_carbs: int
    avg_fat: int
    calorie_goal_adherence: Optional[int] = None


class ProgressResponse(BaseModel):
    start: str
    end: str
    days: int
    consistency: Consistency
    weight: Optional[WeightProgress] = None
    nutrition: Optional[NutritionProgress] = None


class DailyNutrition(BaseModel):
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0


class LatestReading(BaseModel):
    date: str
    value: Any


class DashboardToday(BaseModel):
    date: str
    metrics: Optional[HealthMetric] = None
    nutrition: DailyNutrition
    food_entries: int = 0
    water: float = 0.0
    steps: int = 0
    sleep: float = 0.0
    mood: str = "neutral"


class DashboardSummary(BaseModel):
    total_days_tracked: int = 0
    last_weight_entry: Optional[LatestReading] = None
    last_bp_entry: Optional[LatestReading] = None


class DashboardResponse(BaseModel):
    today: DashboardToday
    goals: UserGoals
    goal_progress: GoalProgress
    trends: Optional[Dict[str, float]] = None
    summary: DashboardSummary
