# -*- coding: utf-8 -*-
"""Intake: daily health records (`dailyHealthMetrics`) and food diary (`foodDiary`).

A daily record is keyed `<user_id>_<YYYY-MM-DD>` and only holds running totals.
Food entries live in their own collection and are linked to a day by
(user_id, date); logging or removing an entry moves the day's totals by the
entry's amounts.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..store import DocumentNotFound, get_store, utc_now_iso
from .models import DailyHealthRecord, FoodEntry, FoodEntryCreate, coerce_amount

logger = logging.getLogger(__name__)

RECORDS = "dailyHealthMetrics"
ENTRIES = "foodDiary"

MAX_RANGE_DAYS = 366

# food entry field -> daily record total
_TOTALS = {
    "calories": "total_calories",
    "protein": "total_protein",
    "carbs": "total_carbs",
    "fat": "total_fat",
    "fiber": "total_fiber",
}
TOTAL_FIELDS = tuple(_TOTALS.values())
_CLAMPED_FIELDS = TOTAL_FIELDS + ("water", "steps", "sleep")
_RECORD_FIELDS = set(DailyHealthRecord.model_fields) - {"food_entries"}


def today_utc() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def parse_day(value: str) -> date:
    return datetime.strptime(value, "%Y-%m-%d").date()


def _iter_days(start: date, end: date) -> Iterable[date]:
    cur = start
    while cur <= end:
        yield cur
        cur = cur + timedelta(days=1)


def record_id(user_id: str, day: str) -> str:
    return f"{user_id}_{day}"


def default_record(day: str) -> Dict[str, Any]:
    return DailyHealthRecord(date=day).model_dump(exclude={"food_entries", "updated_at"})


def _to_record(day: str, doc: Optional[Dict[str, Any]], entries: List[FoodEntry]) -> DailyHealthRecord:
    data = default_record(day)
    if doc:
        data.update({k: v for k, v in doc.items() if k in _RECORD_FIELDS and v is not None})
    data["date"] = day
    data["steps"] = int(round(float(data.get("steps") or 0)))
    data["food_entries"] = entries
    return DailyHealthRecord.model_validate(data)


def list_food_entries(user_id: str, day: str) -> List[FoodEntry]:
    docs = get_store().query(ENTRIES, {"user_id": user_id, "date": day})
    entries = [FoodEntry.model_validate(d) for d in docs]
    entries.sort(key=lambda e: e.created_at, reverse=True)
    return entries


def get_day(user_id: str, day: str, include_entries: bool = True) -> DailyHealthRecord:
    """Stored record over defaults. Missing days are not written."""
    doc = get_store().get(RECORDS, record_id(user_id, day))
    entries = list_food_entries(user_id, day) if include_entries else []
    return _to_record(day, doc, entries)


def ensure_day(user_id: str, day: str) -> Dict[str, Any]:
    store = get_store()
    rid = record_id(user_id, day)
    doc = store.get(RECORDS, rid)
    if doc is not None:
        return doc
    now = utc_now_iso()
    payload = default_record(day)
    payload.update({"user_id": user_id, "created_at": now, "updated_at": now})
    return store.set(RECORDS, rid, payload)


def _clamp_day(user_id: str, day: str) -> None:
    store = get_store()
    rid = record_id(user_id, day)
    doc = store.get(RECORDS, rid) or {}
    fixes = {}
    for field in _CLAMPED_FIELDS:
        value = doc.get(field)
        if isinstance(value, (int, float)) and value < 0:
            fixes[field] = 0
    if fixes:
        store.update(RECORDS, rid, fixes)


def _shift_totals(user_id: str, day: str, deltas: Dict[str, float]) -> None:
    ensure_day(user_id, day)
    rid = record_id(user_id, day)
    try:
        get_store().increment(RECORDS, rid, deltas, fields={"updated_at": utc_now_iso()})
    except DocumentNotFound:
        # The record vanished between ensure and increment; recreate and retry once.
        ensure_day(user_id, day)
        get_store().increment(RECORDS, rid, deltas, fields={"updated_at": utc_now_iso()})
    _clamp_day(user_id, day)


def add_food_entry(user_id: str, request: FoodEntryCreate) -> Tuple[FoodEntry, DailyHealthRecord]:
    day = request.date or today_utc()
    payload = request.model_dump(exclude={"date"})
    payload.update({"user_id": user_id, "date": day, "created_at": utc_now_iso()})
    doc = get_store().add(ENTRIES, payload)
    entry = FoodEntry.model_validate(doc)

    _shift_totals(user_id, day, {total: getattr(entry, field) for field, total in _TOTALS.items()})
    logger.info("Food entry %s logged for user %s on %s (%.0f kcal)", entry.id, user_id, day, entry.calories)
    return entry, get_day(user_id, day)


def _get_entry(entry_id: str) -> Optional[Dict[str, Any]]:
    try:
        return get_store().get(ENTRIES, entry_id)
    except ValueError:
        return None


def remove_food_entry(user_id: str, entry_id: str) -> DailyHealthRecord:
    """Raises LookupError when the entry is missing or owned by someone else."""
    doc = _get_entry(entry_id)
    if not doc or doc.get("user_id") != user_id:
        raise LookupError(f"Food entry not found: {entry_id}")
    entry = FoodEntry.model_validate(doc)
    get_store().delete(ENTRIES, entry_id)

    _shift_totals(user_id, entry.date, {total: -getattr(entry, field) for field, total in _TOTALS.items()})
    return get_day(user_id, entry.date)


def update_metric(user_id: str, metric: str, value: Any, day: Optional[str] = None) -> DailyHealthRecord:
    """Set one of water/steps/sleep/mood/calories for a day. Raises ValueError on bad input."""
    day = day or today_utc()
    if metric == "mood":
        mood = value.strip() if isinstance(value, str) else ""
        if not mood or len(mood) > 32:
            raise ValueError("Mood must be a short non-empty string")
        patch: Dict[str, Any] = {"mood": mood}
    elif metric in {"water", "steps", "sleep", "calories"}:
        try:
            amount = coerce_amount(value, strict=True)
        except ValueError as exc:
            raise ValueError(f"Invalid value for {metric}") from exc
        if metric == "steps":
            patch = {"steps": int(round(amount))}
        elif metric == "calories":
            patch = {"total_calories": amount}
        else:
            patch = {metric: amount}
    else:
        raise ValueError(f"Unknown metric: {metric}")

    ensure_day(user_id, day)
    patch["updated_at"] = utc_now_iso()
    get_store().update(RECORDS, record_id(user_id, day), patch)
    return get_day(user_id, day)


def add_water(user_id: str, amount: float = 1.0, day: Optional[str] = None) -> DailyHealthRecord:
    day = day or today_utc()
    _shift_totals(user_id, day, {"water": float(amount)})
    return get_day(user_id, day)


def add_steps(user_id: str, steps: int, day: Optional[str] = None) -> DailyHealthRecord:
    day = day or today_utc()
    _shift_totals(user_id, day, {"steps": int(steps)})
    return get_day(user_id, day)


def get_days(user_id: str, start: str, end: str) -> List[DailyHealthRecord]:
    """One record per calendar day in [start, end], oldest first, defaults for gaps."""
    start_d = parse_day(start)
    end_d = parse_day(end)
    if end_d < start_d:
        raise ValueError("end must be on or after start")
    if (end_d - start_d).days + 1 > MAX_RANGE_DAYS:
        raise ValueError(f"Range too large (max {MAX_RANGE_DAYS} days)")

    stored: Dict[str, Dict[str, Any]] = {}
    for doc in get_store().query(RECORDS, {"user_id": user_id}):
        d = str(doc.get("date") or "")
        if start <= d <= end:
            stored[d] = doc
    return [_to_record(d.isoformat(), stored.get(d.isoformat()), []) for d in _iter_days(start_d, end_d)]


def _last_days(user_id: str, count: int, end: Optional[str]) -> Tuple[str, str, List[DailyHealthRecord]]:
    end_d = parse_day(end) if end else parse_day(today_utc())
    start_d = end_d - timedelta(days=count - 1)
    start_s, end_s = start_d.isoformat(), end_d.isoformat()
    return start_s, end_s, get_days(user_id, start_s, end_s)


def get_week(user_id: str, end: Optional[str] = None) -> Tuple[str, str, List[DailyHealthRecord]]:
    return _last_days(user_id, 7, end)


def get_month(user_id: str, end: Optional[str] = None) -> Tuple[str, str, List[DailyHealthRecord]]:
    return _last_days(user_id, 30, end)


def summarize_days(days: List[DailyHealthRecord]) -> Tuple[Dict[str, float], Dict[str, float]]:
    """Totals and per-day averages over the days that have any activity logged."""
    fields = ("total_calories", "total_protein", "total_carbs", "total_fat", "water", "steps", "sleep")
    totals = {f: 0.0 for f in fields}
    active = 0
    for day in days:
        if day.updated_at is None:
            continue
        active += 1
        for f in fields:
            totals[f] += float(getattr(day, f) or 0)
    averages = {f: round(totals[f] / active, 1) if active else 0.0 for f in fields}
    totals = {f: round(v, 1) for f, v in totals.items()}
    totals["active_days"] = float(active)
    return totals, averages
