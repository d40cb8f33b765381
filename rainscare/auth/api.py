# -*- coding: utf-8 -*-
"""Auth API endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Response

from ..config import settings
from .models import AuthResponse, LoginRequest, ProfileUpdate, RegisterRequest, UserPublic
from .security import TOKEN_COOKIE_NAME, get_current_user, hash_password, issue_token, verify_password
from .storage import EmailTaken, create_user, get_user_by_email, record_login, set_display_name

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _start_session(response: Response, user: Dict[str, Any]) -> AuthResponse:
    token, expires = issue_token(user)
    response.set_cookie(
        TOKEN_COOKIE_NAME,
        token,
        httponly=True,
        secure=bool(settings.cookie_secure),
        samesite="lax",
        max_age=int(settings.token_ttl_days) * 24 * 60 * 60,
        path="/",
    )
    return AuthResponse(user=UserPublic.from_row(user), token=token, expires_at=expires.isoformat())


@router.post("/register", response_model=AuthResponse, summary="Register a new user")
def register(request: RegisterRequest, response: Response):
    try:
        user = create_user(
            email=request.email,
            password_hash=hash_password(request.password),
            display_name=request.display_name,
        )
    except EmailTaken as exc:
        raise HTTPException(status_code=400, detail="Email already registered") from exc
    logger.info("Registered user %s", user["id"])
    return _start_session(response, user)


@router.post("/login", response_model=AuthResponse, summary="Login")
def login(request: LoginRequest, response: Response):
    user = get_user_by_email(request.email)
    if not user or not verify_password(request.password, user["password_hash"]):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    user["last_login_at"] = record_login(user["id"])
    return _start_session(response, user)


@router.post("/logout", summary="Logout")
def logout(response: Response):
    response.delete_cookie(TOKEN_COOKIE_NAME, path="/")
    return {"status": "ok"}


@router.get("/me", response_model=UserPublic, summary="Get current user")
def me(user: dict = Depends(get_current_user)):
    return UserPublic.from_row(user)


@router.patch("/me", response_model=UserPublic, summary="Change the current user's display name")
def update_me(request: ProfileUpdate, user: dict = Depends(get_current_user)):
    updated = set_display_name(user["id"], request.display_name)
    if not updated:
        raise HTTPException(status_code=404, detail="User not found")
    return UserPublic.from_row(updated)
