# -*- coding: utf-8 -*-
"""Auth: user rows in the sqlite accounts table."""

from __future__ import annotations

import sqlite3
from typing import Any, Dict, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from ..store import utc_now_iso


class EmailTaken(Exception):
    pass


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _one(sql: str, *params: Any) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(sql, params).fetchone()
    return dict(row) if row else None


def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    return _one("SELECT * FROM users WHERE email = ?", normalize_email(email))


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    return _one("SELECT * FROM users WHERE id = ?", user_id)


def create_user(*, email: str, password_hash: str, display_name: Optional[str] = None) -> Dict[str, Any]:
    """Insert a user; raises EmailTaken when the address is already registered."""
    user = {
        # Hex ids double as document-id prefixes in the store.
        "id": uuid4().hex,
        "email": normalize_email(email),
        "display_name": display_name,
        "password_hash": password_hash,
        "created_at": utc_now_iso(),
        "last_login_at": None,
    }
    try:
        with db_conn(settings.app_db_path) as conn:
            conn.execute(
                "INSERT INTO users (id, email, display_name, password_hash, created_at) "
                "VALUES (:id, :email, :display_name, :password_hash, :created_at)",
                user,
            )
    except sqlite3.IntegrityError as exc:
        raise EmailTaken(user["email"]) from exc
    return user


def record_login(user_id: str) -> str:
    now = utc_now_iso()
    with db_conn(settings.app_db_path) as conn:
        conn.execute("UPDATE users SET last_login_at = ? WHERE id = ?", (now, user_id))
    return now


def set_display_name(user_id: str, display_name: Optional[str]) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        conn.execute("UPDATE users SET display_name = ? WHERE id = ?", (display_name, user_id))
    return get_user_by_id(user_id)


def count_users() -> int:
    row = _one("SELECT COUNT(*) AS n FROM users")
    return int(row["n"]) if row else 0
