# -*- coding: utf-8 -*-
"""Analysis: food photo / food name analysis models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class FoodImageAnalyzeRequest(BaseModel):
    image_mime: str = Field(..., pattern=r"^image/(jpeg|jpg|png|webp|heic)$")
    image_base64: str = Field(..., min_length=16, description="Raw base64 without data-url prefix")
    health_conditions: List[str] = Field(default_factory=list, max_length=20)


class FoodTextAnalyzeRequest(BaseModel):
    food_name: str = Field(..., min_length=1, max_length=200)
    health_conditions: List[str] = Field(default_factory=list, max_length=20)


class NutritionFacts(BaseModel):
    protein: float = Field(0.0, ge=0, description="g")
    carbs: float = Field(0.0, ge=0, description="g")
    fat: float = Field(0.0, ge=0, description="g")
    fiber: float = Field(0.0, ge=0, description="g")
    sugar: float = Field(0.0, ge=0, description="g")
    sodium: float = Field(0.0, ge=0, description="mg")


class FoodAnalysis(BaseModel):
    food_name: str = "Food Item"
    calories: Optional[float] = Field(None, ge=0)
    nutrition_facts: NutritionFacts = NutritionFacts()
    serving_size: str = "1 serving"
    health_score: float = Field(5.0, ge=0, le=10)
    is_healthy: bool = True
    recommendation: str = ""
    health_warnings: List[str] = []
    health_benefits: List[str] = []
    suitable_for: List[str] = []
    avoid_if: List[str] = []
    alternatives: List[str] = []
    preparation: str = "Unknown"
    ingredients: List[str] = []
    source: Literal["gemini", "fallback"] = "gemini"
    model: Optional[str] = None
    warnings: List[str] = []

    @field_validator(
        "health_warnings",
        "health_benefits",
        "suitable_for",
        "avoid_if",
        "alternatives",
        "ingredients",
        "warnings",
        mode="before",
    )
    @classmethod
    def _coerce_str_list(cls, value: object) -> List[str]:
        """Model output sometimes uses a bare string where a list is expected."""
        if value is None:
            return []
        if isinstance(value, str):
            v = value.strip()
            return [v] if v else []
        if isinstance(value, list):
            return [str(item).strip() for item in value if item is not None and str(item).strip()]
        s = str(value).strip()
        return [s] if s else []
