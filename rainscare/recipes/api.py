# -*- coding: utf-8 -*-
"""Recipes API endpoints."""

from __future__ import annotations

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user, require_admin
from . import storage
from .models import Difficulty, FavoriteList, FavoriteRecipe, FavoriteRecipeCreate, SharedList, SharedRecipe, SharedRecipeCreate
from .storage import RecipeConflict

router = APIRouter(prefix="/api/recipes", tags=["Recipes"])
admin_router = APIRouter(prefix="/api/admin/shared-recipes", tags=["Admin"], dependencies=[Depends(require_admin)])


@router.post("/favorites", response_model=FavoriteRecipe, status_code=201, summary="Save a favorite recipe")
def add_favorite(request: FavoriteRecipeCreate, user: dict = Depends(get_current_user)):
    try:
        return storage.add_favorite(user["id"], request)
    except RecipeConflict as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/favorites", response_model=FavoriteList, summary="List my favorite recipes")
def list_favorites(limit: int = Query(default=50, ge=1, le=100), user: dict = Depends(get_current_user)):
    favorites = storage.list_favorites(user["id"], limit=limit)
    return FavoriteList(data=favorites, count=len(favorites))


@router.delete("/favorites/{favorite_id}", summary="Remove a favorite recipe")
def remove_favorite(favorite_id: str, user: dict = Depends(get_current_user)):
    try:
        storage.remove_favorite(user["id"], favorite_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail="Favorite recipe not found") from exc
    except PermissionError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    return {"success": True, "message": "Recipe removed from favorites successfully"}


@router.post("/shared", response_model=SharedRecipe, status_code=201, summary="Share a recipe with the community")
def share_recipe(request: SharedRecipeCreate, user: dict = Depends(get_current_user)):
    return storage.share_recipe(user, request)


@router.get("/shared", response_model=SharedList, summary="Approved community recipes")
def list_shared(
    limit: int = Query(default=20, ge=1, le=100),
    difficulty: Optional[Difficulty] = Query(default=None),
    tags: Optional[str] = Query(default=None, description="Comma-separated"),
    sort_by: Literal["newest", "popular", "likes"] = Query(default="newest"),
    user: dict = Depends(get_current_user),  # noqa: ARG001
):
    recipes = storage.list_shared(limit=limit, difficulty=difficulty, tags=tags, sort_by=sort_by)
    return SharedList(
        data=recipes,
        count=len(recipes),
        filters={"difficulty": difficulty, "tags": tags, "sort_by": sort_by},
    )


@router.get("/shared/mine", response_model=SharedList, summary="Recipes I have shared")
def list_my_shared(limit: int = Query(default=50, ge=1, le=100), user: dict = Depends(get_current_user)):
    recipes = storage.list_my_shared(user["id"], limit=limit)
    return SharedList(data=recipes, count=len(recipes))


@router.post("/shared/{recipe_id}/like", summary="Like a shared recipe")
def like_shared(recipe_id: str, user: dict = Depends(get_current_user)):
    try:
        storage.like_shared(user["id"], recipe_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail="Recipe not found") from exc
    except RecipeConflict as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"success": True, "message": "Recipe liked successfully"}


@router.delete("/shared/{recipe_id}/like", summary="Unlike a shared recipe")
def unlike_shared(recipe_id: str, user: dict = Depends(get_current_user)):
    try:
        storage.unlike_shared(user["id"], recipe_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail="Recipe not found") from exc
    except RecipeConflict as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"success": True, "message": "Recipe unliked successfully"}


@admin_router.get("/pending", response_model=List[SharedRecipe], summary="Shared recipes awaiting approval")
def admin_pending():
    return storage.list_pending()


@admin_router.put("/{recipe_id}/approve", response_model=SharedRecipe, summary="Approve a shared recipe")
def admin_approve(recipe_id: str):
    try:
        return storage.set_approval(recipe_id, True)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail="Recipe not found") from exc


@admin_router.put("/{recipe_id}/reject", response_model=SharedRecipe, summary="Hide a shared recipe")
def admin_reject(recipe_id: str):
    try:
        return storage.set_approval(recipe_id, False)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail="Recipe not found") from exc
