# -*- coding: utf-8 -*-
"""Recipes: favorites (`favoriteRecipes`) and community shares (`sharedRecipes`)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..store import get_store, newest_first, utc_now_iso
from .models import FavoriteRecipe, FavoriteRecipeCreate, SharedRecipe, SharedRecipeCreate

logger = logging.getLogger(__name__)

FAVORITES = "favoriteRecipes"
SHARED = "sharedRecipes"
LIKES = "recipeLikes"


class RecipeConflict(ValueError):
    pass


def _get(collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
    try:
        return get_store().get(collection, doc_id)
    except ValueError:
        return None


def add_favorite(user_id: str, request: FavoriteRecipeCreate) -> FavoriteRecipe:
    if get_store().query(FAVORITES, {"user_id": user_id, "recipe_id": request.recipe_id}):
        raise RecipeConflict("Recipe is already in favorites")
    payload = request.model_dump()
    payload.update({"user_id": user_id, "is_favorite": True, "created_at": utc_now_iso()})
    return FavoriteRecipe.model_validate(get_store().add(FAVORITES, payload))


def list_favorites(user_id: str, limit: int = 50) -> List[FavoriteRecipe]:
    docs = newest_first(get_store().query(FAVORITES, {"user_id": user_id}))[:limit]
    return [FavoriteRecipe.model_validate(d) for d in docs]


def remove_favorite(user_id: str, favorite_id: str) -> None:
    """Raises LookupError if missing, PermissionError if owned by someone else."""
    doc = _get(FAVORITES, favorite_id)
    if not doc:
        raise LookupError(f"Favorite recipe not found: {favorite_id}")
    if doc.get("user_id") != user_id:
        raise PermissionError("Not authorized to remove this favorite")
    get_store().delete(FAVORITES, favorite_id)


def share_recipe(user: Dict[str, Any], request: SharedRecipeCreate) -> SharedRecipe:
    payload = request.model_dump()
    payload.update(
        {
            "user_id": user["id"],
            "author_name": user.get("display_name") or user.get("email") or "",
            "likes": 0,
            "views": 0,
            "is_public": True,
            # Shared recipes are hidden until an admin approves them.
            "is_approved": False,
            "created_at": utc_now_iso(),
        }
    )
    doc = get_store().add(SHARED, payload)
    logger.info("Recipe %s shared by user %s (pending approval)", doc["id"], user["id"])
    return SharedRecipe.model_validate(doc)


def list_shared(
    *,
    limit: int = 20,
    difficulty: Optional[str] = None,
    tags: Optional[str] = None,
    sort_by: str = "newest",
) -> List[SharedRecipe]:
    where: Dict[str, Any] = {"is_public": True, "is_approved": True}
    if difficulty:
        where["difficulty"] = difficulty
    docs = get_store().query(SHARED, where)
    if sort_by == "popular":
        docs.sort(key=lambda d: int(d.get("views") or 0), reverse=True)
    elif sort_by == "likes":
        docs.sort(key=lambda d: int(d.get("likes") or 0), reverse=True)
    else:
        docs = newest_first(docs)
    docs = docs[:limit]

    if tags:
        wanted = {t.strip().lower() for t in tags.split(",") if t.strip()}
        docs = [d for d in docs if any(str(t).lower() in wanted for t in d.get("tags") or [])]
    return [SharedRecipe.model_validate(d) for d in docs]


def list_my_shared(user_id: str, limit: int = 50) -> List[SharedRecipe]:
    docs = newest_first(get_store().query(SHARED, {"user_id": user_id}))[:limit]
    return [SharedRecipe.model_validate(d) for d in docs]


def like_shared(user_id: str, recipe_id: str) -> None:
    """Only approved public recipes can be liked; anything else looks missing."""
    doc = _get(SHARED, recipe_id)
    if not doc or not (doc.get("is_approved") and doc.get("is_public", True)):
        raise LookupError(f"Recipe not found: {recipe_id}")
    like_id = f"{user_id}_{recipe_id}"
    if get_store().get(LIKES, like_id):
        raise RecipeConflict("Recipe already liked")
    get_store().set(LIKES, like_id, {"user_id": user_id, "recipe_id": recipe_id, "created_at": utc_now_iso()})
    get_store().increment(SHARED, recipe_id, {"likes": 1})


def unlike_shared(user_id: str, recipe_id: str) -> None:
    doc = _get(SHARED, recipe_id)
    if not doc:
        raise LookupError(f"Recipe not found: {recipe_id}")
    if not get_store().delete(LIKES, f"{user_id}_{recipe_id}"):
        raise RecipeConflict("Recipe not liked yet")
    get_store().increment(SHARED, recipe_id, {"likes": -1})
    after = _get(SHARED, recipe_id) or {}
    if int(after.get("likes") or 0) < 0:
        get_store().update(SHARED, recipe_id, {"likes": 0})


def set_approval(recipe_id: str, approved: bool) -> SharedRecipe:
    if not _get(SHARED, recipe_id):
        raise LookupError(f"Recipe not found: {recipe_id}")
    doc = get_store().update(SHARED, recipe_id, {"is_approved": approved, "updated_at": utc_now_iso()})
    return SharedRecipe.model_validate(doc)


def list_pending() -> List[SharedRecipe]:
    docs = newest_first(get_store().query(SHARED, {"is_approved": False}))
    return [SharedRecipe.model_validate(d) for d in docs]
