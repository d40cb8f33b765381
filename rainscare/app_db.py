# -*- coding: utf-8 -*-
"""SQLite helpers for the user accounts database.

Health data lives in the document store (rainscare/store); only credentials are kept here.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

# Columns added after the first release; older databases get them on startup.
_LATE_USER_COLUMNS = {"last_login_at": "TEXT"}


def connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def init_app_db(db_path: Path) -> None:
    conn = connect(db_path)
    try:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                email TEXT NOT NULL UNIQUE,
                display_name TEXT,
                password_hash TEXT NOT NULL,
                created_at TEXT NOT NULL,
                last_login_at TEXT
            );
            """
        )
        existing = {row["name"] for row in conn.execute("PRAGMA table_info(users)")}
        for column, decl in _LATE_USER_COLUMNS.items():
            if column not in existing:
                conn.execute(f"ALTER TABLE users ADD COLUMN {column} {decl}")
        conn.commit()
    finally:
        conn.close()


@contextmanager
def db_conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    conn = connect(db_path)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()
