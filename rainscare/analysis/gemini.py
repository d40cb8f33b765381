# -*- coding: utf-8 -*-
"""Analysis: Gemini `generateContent` call over REST, with a graceful fallback."""

from __future__ import annotations

import base64
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings
from .models import FoodAnalysis, NutritionFacts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeminiSettings:
    api_key: Optional[str]
    base_url: str
    model: str
    timeout: float


def resolve_gemini_settings() -> GeminiSettings:
    return GeminiSettings(
        api_key=settings.gemini_api_key,
        base_url=settings.gemini_base_url.rstrip("/"),
        model=settings.gemini_model,
        timeout=settings.gemini_timeout,
    )


_RESPONSE_SHAPE = """{
  "foodName": "Name of the food item",
  "calories": "Estimated calories per serving",
  "nutritionFacts": {"protein": "grams", "carbs": "grams", "fat": "grams", "fiber": "grams", "sugar": "grams", "sodium": "mg"},
  "servingSize": "Description of serving size",
  "healthScore": "1-10 rating",
  "isHealthy": true,
  "recommendation": "Overall recommendation",
  "healthWarnings": ["Warnings based on health conditions"],
  "healthBenefits": ["Benefits"],
  "suitableFor": ["Health conditions this food is good for"],
  "avoidIf": ["Health conditions that should avoid this food"],
  "alternatives": ["Healthier alternatives if applicable"],
  "preparation": "How this food appears to be prepared",
  "ingredients": ["Likely ingredients"]
}"""

_CONDITION_NOTES = """Important considerations:
- For DIABETES: focus on carbs, sugar content, glycemic index
- For HYPERTENSION: focus on sodium content
- For PCOS/PCOD: consider anti-inflammatory properties, sugar content
- For THYROID: consider iodine content, goitrogenic foods
- For WEIGHT MANAGEMENT: consider calorie density, satiety"""


def build_prompt(health_conditions: List[str], food_name: Optional[str] = None) -> str:
    conditions = [c.strip() for c in health_conditions if c and c.strip()]
    conditions_text = f"User has these health conditions: {', '.join(conditions)}. " if conditions else ""
    subject = f'the food "{food_name}"' if food_name else "this food image"
    return (
        f"Analyze {subject} and provide a comprehensive nutritional analysis. {conditions_text}\n\n"
        f"Respond with JSON only, in this format:\n{_RESPONSE_SHAPE}\n\n{_CONDITION_NOTES}\n\n"
        "Be specific about health recommendations based on the user's conditions."
    )


def extract_text(data: object) -> str:
    """Concatenate text parts of the first candidate."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str))


_JSON_RE = re.compile(r"\{[\s\S]*\}")
_NUM_RE = re.compile(r"-?\d+(?:\.\d+)?")


def parse_json_object(text: str) -> Dict[str, Any]:
    match = _JSON_RE.search(text or "")
    if not match:
        raise ValueError("Model output does not contain a JSON object")
    parsed = json.loads(match.group(0))
    if not isinstance(parsed, dict):
        raise ValueError("Model output is not a JSON object")
    return parsed


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        m = _NUM_RE.search(value.replace(",", ""))
        return float(m.group(0)) if m else None
    return None


def _first_present(obj: Dict[str, Any], keys: List[str]) -> Any:
    for k in keys:
        if k in obj:
            return obj.get(k)
    return None


def normalize_analysis(parsed: Dict[str, Any]) -> Dict[str, Any]:
    """Map camelCase / loosely typed model output onto FoodAnalysis fields."""
    facts_raw = _first_present(parsed, ["nutritionFacts", "nutrition_facts", "nutrition"]) or {}
    facts: Dict[str, float] = {}
    if isinstance(facts_raw, dict):
        aliases = {"carbohydrates": "carbs", "carb": "carbs", "sugars": "sugar", "salt": "sodium"}
        for key, value in facts_raw.items():
            name = aliases.get(str(key).lower(), str(key).lower())
            if name not in NutritionFacts.model_fields:
                continue
            number = _coerce_float(value)
            if number is not None:
                facts[name] = max(0.0, number)

    out: Dict[str, Any] = {"nutrition_facts": facts}
    food_name = _first_present(parsed, ["foodName", "food_name", "name"])
    if isinstance(food_name, str) and food_name.strip():
        out["food_name"] = food_name.strip()

    calories = _coerce_float(parsed.get("calories"))
    if calories is not None:
        out["calories"] = max(0.0, calories)

    score = _coerce_float(_first_present(parsed, ["healthScore", "health_score"]))
    if score is not None:
        out["health_score"] = min(10.0, max(0.0, score))

    healthy = _first_present(parsed, ["isHealthy", "is_healthy"])
    if isinstance(healthy, bool):
        out["is_healthy"] = healthy
    elif isinstance(healthy, str):
        out["is_healthy"] = healthy.strip().lower() in {"true", "yes", "1"}

    text_fields = {
        "serving_size": ["servingSize", "serving_size"],
        "recommendation": ["recommendation"],
        "preparation": ["preparation"],
    }
    for field, keys in text_fields.items():
        value = _first_present(parsed, keys)
        if value is not None and str(value).strip():
            out[field] = str(value).strip()

    list_fields = {
        "health_warnings": ["healthWarnings", "health_warnings"],
        "health_benefits": ["healthBenefits", "health_benefits"],
        "suitable_for": ["suitableFor", "suitable_for"],
        "avoid_if": ["avoidIf", "avoid_if"],
        "alternatives": ["alternatives"],
        "ingredients": ["ingredients"],
    }
    for field, keys in list_fields.items():
        value = _first_present(parsed, keys)
        if value is not None:
            out[field] = value
    return out


def fallback_analysis(reason: str, food_name: Optional[str] = None) -> FoodAnalysis:
    if food_name:
        recommendation = f"Unable to analyze {food_name} right now. Please try again later."
    else:
        recommendation = "Unable to analyze image. Please try uploading a clearer photo."
    return FoodAnalysis(
        food_name=food_name or "Food Item",
        calories=None,
        serving_size="1 serving",
        health_score=5,
        is_healthy=True,
        recommendation=recommendation,
        health_warnings=["Image analysis failed" if not food_name else "Food analysis failed"],
        source="fallback",
        warnings=[reason],
    )


def _generate(parts: List[Dict[str, Any]], cfg: GeminiSettings, transport: httpx.BaseTransport | None) -> str:
    url = f"{cfg.base_url}/models/{cfg.model}:generateContent"
    payload = {
        "contents": [{"role": "user", "parts": parts}],
        "generationConfig": {"temperature": 0.2, "responseMimeType": "application/json"},
    }
    with httpx.Client(timeout=cfg.timeout, transport=transport) as client:
        resp = client.post(url, headers={"x-goog-api-key": cfg.api_key or ""}, json=payload)
        resp.raise_for_status()
        data = resp.json()
    text = extract_text(data)
    if not text:
        raise ValueError("Model response has no text")
    return text


def _analyze(
    parts: List[Dict[str, Any]],
    food_name: Optional[str],
    transport: httpx.BaseTransport | None,
) -> FoodAnalysis:
    cfg = resolve_gemini_settings()
    if not cfg.api_key:
        logger.warning("GEMINI_API_KEY is not set; returning fallback food analysis")
        return fallback_analysis("Food analysis is not configured", food_name)
    try:
        text = _generate(parts, cfg, transport)
        normalized = normalize_analysis(parse_json_object(text))
        return FoodAnalysis.model_validate({**normalized, "source": "gemini", "model": cfg.model})
    except httpx.HTTPStatusError as exc:
        # Status only: the exception text carries the request URL.
        logger.warning("Gemini request failed with HTTP %s", exc.response.status_code)
        return fallback_analysis(f"Model call failed: HTTP {exc.response.status_code}", food_name)
    except httpx.HTTPError as exc:
        logger.warning("Gemini request failed: %s", type(exc).__name__)
        return fallback_analysis(f"Model call failed: {type(exc).__name__}", food_name)
    except ValueError as exc:
        # json.JSONDecodeError and pydantic.ValidationError are ValueErrors too.
        logger.warning("Gemini output could not be parsed: %s", exc)
        return fallback_analysis("Model output could not be parsed", food_name)


def analyze_food_image(
    image_bytes: bytes,
    image_mime: str,
    health_conditions: List[str],
    transport: httpx.BaseTransport | None = None,
) -> FoodAnalysis:
    parts = [
        {"text": build_prompt(health_conditions)},
        {"inline_data": {"mime_type": image_mime, "data": base64.b64encode(image_bytes).decode("ascii")}},
    ]
    return _analyze(parts, None, transport)


def analyze_food_name(
    food_name: str,
    health_conditions: List[str],
    transport: httpx.BaseTransport | None = None,
) -> FoodAnalysis:
    return _analyze([{"text": build_prompt(health_conditions, food_name=food_name)}], food_name, transport)
