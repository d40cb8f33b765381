# -*- coding: utf-8 -*-
"""Analysis API endpoints."""

from __future__ import annotations

import base64

from fastapi import APIRouter, Depends, HTTPException

from ..auth.security import get_current_user
from ..config import settings
from .gemini import analyze_food_image, analyze_food_name
from .models import FoodAnalysis, FoodImageAnalyzeRequest, FoodTextAnalyzeRequest

router = APIRouter(prefix="/api/food", tags=["Food Analysis"])


def _decode_image_or_400(image_base64: str, max_bytes: int) -> bytes:
    try:
        data = base64.b64decode(image_base64, validate=True)
    except Exception as exc:
        raise HTTPException(status_code=400, detail=f"Invalid base64 image: {exc}") from exc
    if len(data) > max_bytes:
        raise HTTPException(status_code=400, detail=f"Image too large: {len(data)} bytes > {max_bytes}")
    return data


@router.post("/analyze", response_model=FoodAnalysis, summary="Analyze a food photo")
def analyze_image(request: FoodImageAnalyzeRequest, user: dict = Depends(get_current_user)):  # noqa: ARG001
    image_bytes = _decode_image_or_400(request.image_base64, max_bytes=settings.max_image_bytes)
    return analyze_food_image(image_bytes, request.image_mime, request.health_conditions)


@router.post("/analyze-text", response_model=FoodAnalysis, summary="Analyze a food by name")
def analyze_text(request: FoodTextAnalyzeRequest, user: dict = Depends(get_current_user)):  # noqa: ARG001
    return analyze_food_name(request.food_name, request.health_conditions)
