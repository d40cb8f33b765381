# -*- coding: utf-8 -*-
"""Pydantic models for the recipes routes."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Difficulty = Literal["Easy", "Medium", "Hard"]


class FavoriteRecipeCreate(BaseModel):
    recipe_id: str = Field(..., min_length=1, max_length=200)
    title: str = Field(..., min_length=1, max_length=300)
    image: Optional[str] = Field(None, max_length=2000)
    cooking_time: Optional[float] = Field(None, ge=0, description="Minutes")
    servings: Optional[float] = Field(None, gt=0)
    calories: Optional[float] = Field(None, ge=0)
    ingredients: List[str] = []
    instructions: List[str] = []
    nutrition_facts: Dict[str, Union[float, str]] = Field(default_factory=dict)


class FavoriteRecipe(FavoriteRecipeCreate):
    id: str
    user_id: str
    is_favorite: bool = True
    created_at: str


class SharedRecipeCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    description: Optional[str] = Field(None, max_length=5000)
    ingredients: List[str] = Field(..., min_length=1)
    instructions: List[str] = Field(..., min_length=1)
    cooking_time: float = Field(..., ge=0, description="Minutes")
    servings: float = Field(..., gt=0)
    difficulty: Difficulty
    tags: List[str] = []
    nutrition_facts: Dict[str, Union[float, str]] = Field(default_factory=dict)
    image: Optional[str] = Field(None, max_length=2000)


class SharedRecipe(SharedRecipeCreate):
    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    author_name: str = ""
    likes: int = 0
    views: int = 0
    is_public: bool = True
    is_approved: bool = False
    created_at: str


class FavoriteList(BaseModel):
    data: List[FavoriteRecipe]
    count: int


class SharedList(BaseModel):
    data: List[SharedRecipe]
    count: int
    filters: Dict[str, Optional[str]] = Field(default_factory=dict)
