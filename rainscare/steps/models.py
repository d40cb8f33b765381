# -*- coding: utf-8 -*-
"""Pydantic models for the steps routes."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..intake.models import DATE_PATTERN, DailyHealthRecord


class MotionSample(BaseModel):
    x: float
    y: float
    z: float
    t_ms: float = Field(..., ge=0, description="Milliseconds since an arbitrary epoch")


class StepDetectRequest(BaseModel):
    samples: List[MotionSample] = Field(..., min_length=1, max_length=20000)
    threshold: Optional[float] = Field(None, gt=0, le=20)
    min_interval_ms: Optional[float] = Field(None, ge=0, le=5000)


class StepSyncRequest(BaseModel):
    provider: Literal["auto", "google_fit", "apple_health", "samsung_health"] = "auto"


class ManualStepsRequest(BaseModel):
    # Range is checked by the sync service so the error matches other sources.
    steps: float
    date: Optional[str] = Field(None, pattern=DATE_PATTERN)


class StepResult(BaseModel):
    success: bool = True
    steps: int
    source: str
    day: Optional[DailyHealthRecord] = None


class StepSyncStatus(BaseModel):
    today_steps: int = 0
    last_sync_at: Optional[str] = None
    last_source: Optional[str] = None
    last_steps: Optional[int] = None
    auto_sync_minutes: int
    providers: List[str] = []
