from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional


class Settings:
    """Centralized configuration for the Rainscare backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("RAINSCARE_DATA_ROOT") or data_root_default
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("RAINSCARE_DB_PATH") or (self.data_root / "rainscare.db")
        ).expanduser()
        # Documents written while Firestore is unreachable land here.
        self.store_root: Path = Path(
            os.environ.get("RAINSCARE_STORE_ROOT") or (self.data_root / "store")
        ).expanduser()

        # In production you MUST set RAINSCARE_JWT_SECRET.
        self.jwt_secret: str = os.environ.get("RAINSCARE_JWT_SECRET") or "dev-secret-change-me"
        self.token_ttl_days: int = int(os.environ.get("RAINSCARE_TOKEN_TTL_DAYS") or "7")
        self.cookie_secure: bool = (os.environ.get("RAINSCARE_COOKIE_SECURE") or "").strip() in {"1", "true", "True"}
        # Empty string disables the admin routes (503).
        self.admin_key: str = os.environ.get("RAINSCARE_ADMIN_KEY", "rainscare_admin_key_2024")

        self.firebase_credentials: Optional[Path] = None
        creds = (os.environ.get("FIREBASE_CREDENTIALS") or "").strip()
        if creds:
            self.firebase_credentials = Path(creds).expanduser()
        self.firebase_project_id: str | None = os.environ.get("FIREBASE_PROJECT_ID") or None

        self.gemini_api_key: str | None = os.environ.get("GEMINI_API_KEY") or None
        self.gemini_base_url: str = os.environ.get(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        )
        self.gemini_model: str = os.environ.get("GEMINI_MODEL", "gemini-1.5-flash")
        self.gemini_timeout: float = float(os.environ.get("GEMINI_TIMEOUT", "30"))
        self.max_image_bytes: int = int(os.environ.get("RAINSCARE_MAX_IMAGE_BYTES") or "5000000")

        self.step_threshold: float = float(os.environ.get("RAINSCARE_STEP_THRESHOLD", "1.2"))
        self.step_min_interval_ms: int = int(os.environ.get("RAINSCARE_STEP_MIN_INTERVAL_MS", "300"))
        self.step_auto_sync_minutes: int = int(os.environ.get("RAINSCARE_STEP_AUTO_SYNC_MINUTES", "15"))

        self.log_level: str = (os.environ.get("RAINSCARE_LOG_LEVEL") or "INFO").upper()

        cors = os.environ.get("RAINSCARE_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
