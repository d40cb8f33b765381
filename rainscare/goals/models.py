# -*- coding: utf-8 -*-
"""Pydantic models for the goals routes."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class WeightGoalType(str, Enum):
    lose = "lose"
    gain = "gain"
    maintain = "maintain"


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    light = "light"
    moderate = "moderate"
    active = "active"
    very_active = "very_active"


class UserGoals(BaseModel):
    calorie_goal: float = Field(2000, ge=0, le=20000)
    protein_goal: float = Field(150, ge=0, le=1000)
    carbs_goal: float = Field(250, ge=0, le=2000)
    fat_goal: float = Field(65, ge=0, le=1000)
    water_goal: float = Field(8, ge=0, le=50, description="Glasses per day")
    steps_goal: int = Field(10000, ge=0, le=100000)
    sleep_goal: float = Field(8, ge=0, le=24, description="Hours per night")
    target_weight: Optional[float] = Field(None, gt=0, le=500, description="kg")
    weight_goal_type: Optional[WeightGoalType] = None
    activity_level: Optional[ActivityLevel] = None


class GoalsResponse(BaseModel):
    goals: UserGoals
    is_default: bool = False
    updated_at: Optional[str] = None


class GoalProgress(BaseModel):
    """Percent of each daily goal reached; values above 100 mean the goal was exceeded."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    water: float = 0.0
    steps: float = 0.0
    sleep: float = 0.0
