# -*- coding: utf-8 -*-
"""Steps: fitness platform syncs and sync status.

Platform integrations are simulated: a sync reports a plausible daily step
count in [3000, 7999]. The random source is injectable for tests.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, Optional

from ..config import settings
from ..intake.storage import add_steps, get_day, today_utc, update_metric
from ..store import get_store, utc_now_iso

logger = logging.getLogger(__name__)

STATUS_COLLECTION = "stepSync"

MAX_MANUAL_STEPS = 100_000
SIMULATED_MIN = 3000
SIMULATED_SPAN = 5000

PROVIDERS = {
    "google_fit": "Google Fit",
    "apple_health": "Apple Health",
    "samsung_health": "Samsung Health",
}

_rng = random.Random()


class StepSyncError(ValueError):
    pass


def provider_for_user_agent(user_agent: str) -> Optional[str]:
    ua = (user_agent or "").lower()
    if "iphone" in ua or "ipad" in ua:
        return "apple_health"
    if "android" in ua:
        return "google_fit"
    return None


def simulate_provider_steps(provider: str, rng: Optional[random.Random] = None) -> int:
    if provider not in PROVIDERS:
        raise StepSyncError(f"Unknown provider: {provider}")
    r = rng or _rng
    return SIMULATED_MIN + int(r.random() * SIMULATED_SPAN)


def _record_sync(user_id: str, source: str, steps: int) -> Dict[str, Any]:
    payload = {
        "user_id": user_id,
        "last_source": source,
        "last_steps": steps,
        "last_sync_at": utc_now_iso(),
    }
    return get_store().set(STATUS_COLLECTION, user_id, payload, merge=True)


def sync_provider(
    user_id: str,
    provider: str,
    user_agent: str = "",
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    """Pull today's steps from a platform (`auto` picks one from the user agent)."""
    resolved = provider_for_user_agent(user_agent) if provider == "auto" else provider
    if not resolved:
        raise StepSyncError("No fitness platform available for this device")
    steps = simulate_provider_steps(resolved, rng=rng)
    day = update_metric(user_id, "steps", steps)
    _record_sync(user_id, PROVIDERS[resolved], steps)
    logger.info("Synced %d steps from %s for user %s", steps, PROVIDERS[resolved], user_id)
    return {"success": True, "steps": steps, "source": PROVIDERS[resolved], "day": day}


def record_manual_steps(user_id: str, steps: Any, day: Optional[str] = None) -> Dict[str, Any]:
    try:
        count = float(steps)
    except (TypeError, ValueError) as exc:
        raise StepSyncError("Invalid step count") from exc
    if count != count or count < 0 or count > MAX_MANUAL_STEPS:
        raise StepSyncError("Invalid step count")
    record = update_metric(user_id, "steps", int(count), day)
    _record_sync(user_id, "Manual", int(count))
    return {"success": True, "steps": int(count), "source": "Manual", "day": record}


def record_detected_steps(user_id: str, steps: int) -> Dict[str, Any]:
    if steps <= 0:
        return {"success": True, "steps": 0, "source": "Device Motion", "day": get_day(user_id, today_utc())}
    record = add_steps(user_id, steps)
    _record_sync(user_id, "Device Motion", steps)
    return {"success": True, "steps": steps, "source": "Device Motion", "day": record}


def get_sync_status(user_id: str) -> Dict[str, Any]:
    doc = get_store().get(STATUS_COLLECTION, user_id) or {}
    return {
        "today_steps": get_day(user_id, today_utc(), include_entries=False).steps,
        "last_sync_at": doc.get("last_sync_at"),
        "last_source": doc.get("last_source"),
        "last_steps": doc.get("last_steps"),
        "auto_sync_minutes": settings.step_auto_sync_minutes,
        "providers": sorted(PROVIDERS),
    }
