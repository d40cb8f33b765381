# -*- coding: utf-8 -*-
"""
Rainscare health tracking API

Food and water logging, steps, sleep and mood, body metrics, goals and
progress dashboards, plus admin-curated blogs and content.
"""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .account.api import router as account_router
from .analysis.api import router as analysis_router
from .app_db import init_app_db
from .auth.api import router as auth_router
from .auth.security import get_current_user_from_request
from .blogs.api import admin_router as blogs_admin_router
from .blogs.api import router as blogs_router
from .config import settings
from .content.api import admin_router as content_admin_router
from .content.api import router as content_router
from .content.storage import seed_defaults
from .goals.api import router as goals_router
from .intake.api import router as intake_router
from .metrics.api import router as metrics_router
from .recipes.api import admin_router as recipes_admin_router
from .recipes.api import router as recipes_router
from .steps.api import router as steps_router
from .store import get_store, utc_now_iso

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Rainscare API",
    description="Daily nutrition, activity and body metric tracking",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _init_storage() -> None:
    init_app_db(settings.app_db_path)
    store = get_store()
    creds = store.primary.credentials_path
    if not store.primary.configured:
        logger.warning("FIREBASE_CREDENTIALS not set; documents are stored under %s", settings.store_root)
    elif creds is not None and not creds.exists():
        logger.warning(
            "FIREBASE_CREDENTIALS file %s not found; documents are stored under %s", creds, settings.store_root
        )
    # Public feeds need something to show while Firestore is unreachable.
    seed_defaults(store.secondary)


@app.on_event("startup")
def _startup_init_storage() -> None:
    _init_storage()


# Ensure storage exists even when lifespan events are not triggered (e.g. some test clients).
_init_storage()


_AUTH_EXEMPT_PREFIXES = (
    "/api/auth/login",
    "/api/auth/register",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
    "/api/announcements/active",
    "/api/health-tips/",
    "/api/success-stories/active",
    "/api/updates/active",
    "/api/blogs",
    # Admin routes check the admin key instead of a user session.
    "/api/admin/",
)


@app.middleware("http")
async def _auth_gate(request: Request, call_next):
    path = request.url.path
    if path.startswith("/api") and path != "/api/health" and not any(path.startswith(p) for p in _AUTH_EXEMPT_PREFIXES):
        try:
            user = get_current_user_from_request(request)
            request.state.user = user
        except HTTPException as exc:
            return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    return await call_next(request)


app.include_router(auth_router)
app.include_router(intake_router)
app.include_router(goals_router)
app.include_router(steps_router)
app.include_router(metrics_router)
app.include_router(recipes_router)
app.include_router(account_router)
app.include_router(analysis_router)
app.include_router(content_router)
app.include_router(blogs_router)
app.include_router(blogs_admin_router)
app.include_router(recipes_admin_router)
app.include_router(content_admin_router)


@app.get("/api/health", tags=["System"], summary="Service status")
def health_check():
    return {
        "status": "ok",
        "timestamp": utc_now_iso(),
        "services": {
            "firestore": get_store().primary_status(),
            "gemini": "configured" if settings.gemini_api_key else "not configured",
        },
    }


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    host = os.environ.get("RAINSCARE_HOST") or os.environ.get("HOST") or "127.0.0.1"
    port_raw = os.environ.get("RAINSCARE_PORT") or os.environ.get("PORT") or "8000"
    try:
        port = int(port_raw)
    except ValueError:
        port = 8000

    uvicorn.run("rainscare.api:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    run()
