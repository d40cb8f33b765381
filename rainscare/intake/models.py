# -*- coding: utf-8 -*-
"""Intake: daily health record and food diary models."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

_NUM_RE = re.compile(r"-?\d+(?:\.\d+)?")


def coerce_amount(value: Any, strict: bool = False) -> float:
    """Best-effort non-negative number: 12, "12", "12.5g" and None all work.

    With `strict`, a value that holds no number at all raises ValueError.
    """
    if value is None or isinstance(value, bool):
        if strict:
            raise ValueError(f"Not a number: {value!r}")
        return 0.0
    if isinstance(value, (int, float)):
        return max(0.0, float(value))
    if isinstance(value, str):
        m = _NUM_RE.search(value.replace(",", ""))
        if not m:
            if strict:
                raise ValueError(f"Not a number: {value!r}")
            return 0.0
        return max(0.0, float(m.group(0)))
    raise ValueError(f"Not a number: {value!r}")


class FoodEntryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    serving_size: str = Field("1 serving", max_length=100)
    meal_type: Optional[Literal["breakfast", "lunch", "dinner", "snack"]] = None
    analysis_type: str = Field("manual", max_length=32, description="manual | image | text")
    health_score: Optional[float] = Field(None, ge=0, le=10)
    date: Optional[str] = Field(None, pattern=DATE_PATTERN, description="Defaults to today (UTC)")

    @field_validator("calories", "protein", "carbs", "fat", "fiber", mode="before")
    @classmethod
    def _coerce_nutrients(cls, value: object) -> float:
        return coerce_amount(value)


class FoodEntry(BaseModel):
    id: str
    user_id: str
    date: str
    name: str
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    serving_size: str = "1 serving"
    meal_type: Optional[str] = None
    analysis_type: str = "manual"
    health_score: Optional[float] = None
    created_at: str


class DailyHealthRecord(BaseModel):
    date: str
    total_calories: float = 0.0
    total_protein: float = 0.0
    total_carbs: float = 0.0
    total_fat: float = 0.0
    total_fiber: float = 0.0
    water: float = Field(0.0, description="Glasses")
    steps: int = 0
    sleep: float = Field(0.0, description="Hours")
    mood: str = "neutral"
    food_entries: List[FoodEntry] = []
    updated_at: Optional[str] = None


class MetricUpdateRequest(BaseModel):
    metric: Literal["water", "steps", "sleep", "mood", "calories"]
    value: Union[float, str]
    date: Optional[str] = Field(None, pattern=DATE_PATTERN)


class WaterRequest(BaseModel):
    amount: float = Field(1.0, ge=-20, le=20, description="Glasses; negative removes")
    date: Optional[str] = Field(None, pattern=DATE_PATTERN)


class FoodEntryCreateResponse(BaseModel):
    entry: FoodEntry
    day: DailyHealthRecord


class DaysResponse(BaseModel):
    start: str
    end: str
    days: List[DailyHealthRecord]
    totals: Dict[str, float] = Field(default_factory=dict)
    averages: Dict[str, float] = Field(default_factory=dict)
