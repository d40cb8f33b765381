# -*- coding: utf-8 -*-
"""Pydantic models for the auth routes."""

from __future__ import annotations

import re
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _clean_email(value: str) -> str:
    value = value.strip().lower()
    if not _EMAIL_RE.match(value):
        raise ValueError("Enter a valid email address")
    return value


def _clean_display_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = " ".join(value.split())
    return value or None


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=8, max_length=128)
    display_name: Optional[str] = Field(None, max_length=100)

    clean_email = field_validator("email")(_clean_email)
    clean_display_name = field_validator("display_name")(_clean_display_name)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def _lower(cls, v: str) -> str:
        return v.strip().lower()


class ProfileUpdate(BaseModel):
    display_name: Optional[str] = Field(None, max_length=100)

    clean_display_name = field_validator("display_name")(_clean_display_name)


class UserPublic(BaseModel):
    id: str
    email: str
    display_name: Optional[str] = None
    created_at: str
    last_login_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "UserPublic":
        return cls.model_validate({k: row.get(k) for k in cls.model_fields})


class AuthResponse(BaseModel):
    user: UserPublic
    token: str
    expires_at: str
