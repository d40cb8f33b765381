# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict

from fastapi.testclient import TestClient

ADMIN_KEY = "test-admin-key"


class TestTrackingApi(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="rainscare-test-"))
        data_root = cls._tmp / "data"
        os.environ["RAINSCARE_DATA_ROOT"] = str(data_root)
        os.environ["RAINSCARE_DB_PATH"] = str(data_root / "rainscare.db")
        os.environ["RAINSCARE_JWT_SECRET"] = "test-secret"
        os.environ["RAINSCARE_ADMIN_KEY"] = ADMIN_KEY
        os.environ.pop("RAINSCARE_STORE_ROOT", None)
        # No Firestore: every document lands in the local JSON store.
        os.environ.pop("FIREBASE_CREDENTIALS", None)
        os.environ.pop("GEMINI_API_KEY", None)

        # Ensure settings/app reflect the env vars above.
        for name in list(sys.modules.keys()):
            if name.startswith("rainscare."):
                sys.modules.pop(name, None)

        from rainscare.api import app  # noqa: WPS433 (import inside test for env control)

        cls.client = TestClient(app)
        cls.today = datetime.now(timezone.utc).date()

    @classmethod
    def tearDownClass(cls) -> None:
        try:
            cls.client.close()
        except Exception:
            pass
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def _register(self, email: str) -> Dict[str, str]:
        resp = self.client.post(
            "/api/auth/register",
            json={"email": email, "password": "password123", "display_name": email.split("@")[0]},
        )
        self.assertEqual(resp.status_code, 200)
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    def test_auth_required(self) -> None:
        from rainscare.api import app  # noqa: WPS433

        unauth = TestClient(app)
        for path in ("/api/intake/today", "/api/goals", "/api/health/dashboard", "/api/user/export"):
            resp = unauth.get(path)
            self.assertEqual(resp.status_code, 401, path)
        resp = unauth.post("/api/auth/login", json={"email": "nobody@example.com", "password": "wrong"})
        self.assertEqual(resp.status_code, 401)
        unauth.close()

    def test_register_login_and_me(self) -> None:
        self._register("me@example.com")
        resp = self.client.post("/api/auth/register", json={"email": "me@example.com", "password": "password123"})
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post("/api/auth/login", json={"email": "me@example.com", "password": "password123"})
        self.assertEqual(resp.status_code, 200)
        headers = {"Authorization": f"Bearer {resp.json()['token']}"}
        resp = self.client.get("/api/auth/me", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["display_name"], "me")

    def test_email_is_normalized_and_logins_are_recorded(self) -> None:
        resp = self.client.post(
            "/api/auth/register",
            json={"email": "  Mixed.Case@Example.COM ", "password": "password123", "display_name": "  Ana   Lee "},
        )
        self.assertEqual(resp.status_code, 200)
        user = resp.json()["user"]
        self.assertEqual(user["email"], "mixed.case@example.com")
        self.assertEqual(user["display_name"], "Ana Lee")
        self.assertIsNone(user["last_login_at"])
        self.assertTrue(resp.json()["expires_at"])

        resp = self.client.post("/api/auth/register", json={"email": "MIXED.case@example.com", "password": "password123"})
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post("/api/auth/register", json={"email": "not-an-email", "password": "password123"})
        self.assertEqual(resp.status_code, 422)

        resp = self.client.post("/api/auth/login", json={"email": "MIXED.CASE@example.com", "password": "password123"})
        self.assertEqual(resp.status_code, 200)
        self.assertIsNotNone(resp.json()["user"]["last_login_at"])
        headers = {"Authorization": f"Bearer {resp.json()['token']}"}
        resp = self.client.get("/api/auth/me", headers=headers)
        self.assertIsNotNone(resp.json()["last_login_at"])

        resp = self.client.patch("/api/auth/me", headers=headers, json={"display_name": " Ana "})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["display_name"], "Ana")

    def test_tampered_token_is_rejected(self) -> None:
        from rainscare.api import app  # noqa: WPS433

        token = self._register("tamper@example.com")["Authorization"].split(" ", 1)[1]
        header, claims, sig = token.split(".")
        forged = f"{header}.{claims}.{'B' if sig[0] == 'A' else 'A'}{sig[1:]}"
        anon = TestClient(app)
        for bad in (forged, f"{header}.{claims}", "garbage", f"{header}.{claims}.{sig}.extra"):
            resp = anon.get("/api/auth/me", headers={"Authorization": f"Bearer {bad}"})
            self.assertEqual(resp.status_code, 401, bad)
        resp = anon.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 200)
        anon.close()

    def test_food_entries_update_daily_totals(self) -> None:
        headers = self._register("food@example.com")
        other = self._register("food-other@example.com")

        resp = self.client.get("/api/intake/today", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["total_calories"], 0)
        self.assertEqual(resp.json()["mood"], "neutral")

        resp = self.client.post(
            "/api/intake/entries",
            headers=headers,
            json={"name": "Oatmeal", "calories": 150, "protein": "5g", "carbs": 27, "fat": 3, "meal_type": "breakfast"},
        )
        self.assertEqual(resp.status_code, 200)
        first = resp.json()["entry"]
        self.assertEqual(first["protein"], 5.0)
        self.assertEqual(first["serving_size"], "1 serving")

        resp = self.client.post("/api/intake/entries", headers=headers, json={"name": "Pasta", "calories": 300})
        self.assertEqual(resp.status_code, 200)
        day = resp.json()["day"]
        self.assertEqual(day["total_calories"], 450)
        self.assertEqual(len(day["food_entries"]), 2)

        # Someone else's entry looks missing.
        resp = self.client.delete(f"/api/intake/entries/{first['id']}", headers=other)
        self.assertEqual(resp.status_code, 404)

        resp = self.client.delete(f"/api/intake/entries/{first['id']}", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["total_calories"], 300)
        self.assertEqual(resp.json()["total_protein"], 0)
        self.assertEqual([e["name"] for e in resp.json()["food_entries"]], ["Pasta"])

        resp = self.client.delete(f"/api/intake/entries/{first['id']}", headers=headers)
        self.assertEqual(resp.status_code, 404)

    def test_water_and_metrics(self) -> None:
        headers = self._register("water@example.com")

        resp = self.client.post("/api/intake/water", headers=headers, json={})
        self.assertEqual(resp.json()["water"], 1)
        resp = self.client.post("/api/intake/water", headers=headers, json={"amount": 2})
        self.assertEqual(resp.json()["water"], 3)
        # Removing more than was logged stops at zero.
        resp = self.client.post("/api/intake/water", headers=headers, json={"amount": -5})
        self.assertEqual(resp.json()["water"], 0)

        resp = self.client.post("/api/intake/metrics", headers=headers, json={"metric": "sleep", "value": "7.5"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["sleep"], 7.5)
        resp = self.client.post("/api/intake/metrics", headers=headers, json={"metric": "mood", "value": "happy"})
        self.assertEqual(resp.json()["mood"], "happy")
        resp = self.client.post("/api/intake/metrics", headers=headers, json={"metric": "mood", "value": "   "})
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post("/api/intake/metrics", headers=headers, json={"metric": "weight", "value": 70})
        self.assertEqual(resp.status_code, 422)

        # A value with no number in it is rejected and leaves the stored count alone.
        resp = self.client.post("/api/intake/metrics", headers=headers, json={"metric": "steps", "value": 4200})
        self.assertEqual(resp.json()["steps"], 4200)
        resp = self.client.post("/api/intake/metrics", headers=headers, json={"metric": "steps", "value": "lots"})
        self.assertEqual(resp.status_code, 400)
        resp = self.client.get("/api/intake/today", headers=headers)
        self.assertEqual(resp.json()["steps"], 4200)

        # Mood is a word, not a score.
        resp = self.client.post("/api/intake/metrics", headers=headers, json={"metric": "mood", "value": 5})
        self.assertEqual(resp.status_code, 400)
        resp = self.client.get("/api/intake/today", headers=headers)
        self.assertEqual(resp.json()["mood"], "happy")

    def test_day_ranges(self) -> None:
        headers = self._register("ranges@example.com")
        resp = self.client.post(
            "/api/intake/entries", headers=headers, json={"name": "Salad", "calories": 500, "date": "2024-03-09"}
        )
        self.assertEqual(resp.status_code, 200)

        resp = self.client.get("/api/intake/week?end=2024-03-10", headers=headers)
        self.assertEqual(resp.status_code, 200)
        week = resp.json()
        self.assertEqual(week["start"], "2024-03-04")
        self.assertEqual(len(week["days"]), 7)
        self.assertEqual(week["days"][5]["date"], "2024-03-09")
        self.assertEqual(week["days"][5]["total_calories"], 500)
        self.assertEqual(week["totals"]["total_calories"], 500)
        self.assertEqual(week["totals"]["active_days"], 1)
        self.assertEqual(week["averages"]["total_calories"], 500)

        resp = self.client.get("/api/intake/month?end=2024-03-10", headers=headers)
        self.assertEqual(len(resp.json()["days"]), 30)
        self.assertEqual(resp.json()["start"], "2024-02-10")

        resp = self.client.get("/api/intake/days/2024-03-09", headers=headers)
        self.assertEqual(resp.json()["food_entries"][0]["name"], "Salad")
        resp = self.client.get("/api/intake/days/2024-02-30", headers=headers)
        self.assertEqual(resp.status_code, 400)
        resp = self.client.get("/api/intake/range?start=2024-03-10&end=2024-03-01", headers=headers)
        self.assertEqual(resp.status_code, 400)
        resp = self.client.get("/api/intake/range?start=2022-01-01&end=2024-01-01", headers=headers)
        self.assertEqual(resp.status_code, 400)

    def test_goals_default_and_update(self) -> None:
        headers = self._register("goals@example.com")
        resp = self.client.get("/api/goals", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["is_default"])
        self.assertEqual(resp.json()["goals"]["calorie_goal"], 2000)
        self.assertEqual(resp.json()["goals"]["steps_goal"], 10000)

        resp = self.client.put(
            "/api/goals", headers=headers, json={"calorie_goal": 1800, "target_weight": 70, "weight_goal_type": "lose"}
        )
        self.assertEqual(resp.status_code, 200)
        resp = self.client.get("/api/goals", headers=headers)
        goals = resp.json()
        self.assertFalse(goals["is_default"])
        self.assertEqual(goals["goals"]["calorie_goal"], 1800)
        self.assertEqual(goals["goals"]["water_goal"], 8)
        self.assertEqual(goals["goals"]["weight_goal_type"], "lose")

        resp = self.client.put("/api/goals", headers=headers, json={"sleep_goal": 30})
        self.assertEqual(resp.status_code, 422)

    def test_steps(self) -> None:
        headers = self._register("steps@example.com")

        resp = self.client.post("/api/steps/manual", headers=headers, json={"steps": 150000})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Invalid step count")
        resp = self.client.post("/api/steps/manual", headers=headers, json={"steps": -1})
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post("/api/steps/manual", headers=headers, json={"steps": 4200})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["day"]["steps"], 4200)

        samples = [
            {"x": 0, "y": 0, "z": 9.8, "t_ms": 0},
            {"x": 0, "y": 0, "z": 12.0, "t_ms": 100},
            {"x": 0, "y": 0, "z": 9.8, "t_ms": 200},
            {"x": 0, "y": 0, "z": 12.0, "t_ms": 500},
        ]
        resp = self.client.post("/api/steps/detect", headers=headers, json={"samples": samples})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["steps"], 2)
        self.assertEqual(resp.json()["day"]["steps"], 4202)

        resp = self.client.post(
            "/api/steps/sync", headers={**headers, "User-Agent": "curl/8.0"}, json={"provider": "auto"}
        )
        self.assertEqual(resp.status_code, 400)

        iphone = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X)"
        resp = self.client.post("/api/steps/sync", headers={**headers, "User-Agent": iphone}, json={})
        self.assertEqual(resp.status_code, 200)
        synced = resp.json()
        self.assertEqual(synced["source"], "Apple Health")
        self.assertGreaterEqual(synced["steps"], 3000)
        self.assertLessEqual(synced["steps"], 7999)
        # A platform sync replaces the day's count.
        self.assertEqual(synced["day"]["steps"], synced["steps"])

        resp = self.client.get("/api/steps/status", headers=headers)
        status = resp.json()
        self.assertEqual(status["last_source"], "Apple Health")
        self.assertEqual(status["today_steps"], synced["steps"])
        self.assertEqual(status["auto_sync_minutes"], 15)

    def test_health_metrics(self) -> None:
        headers = self._register("metrics@example.com")
        other = self._register("metrics-other@example.com")

        resp = self.client.post(
            "/api/health/metrics",
            headers=headers,
            json={"weight": 70, "height": 175, "blood_pressure": {"systolic": 120, "diastolic": 80}, "stress_level": 3},
        )
        self.assertEqual(resp.status_code, 201)
        metric = resp.json()
        self.assertEqual(metric["bmi"], 22.9)
        self.assertEqual(metric["date"], self.today.isoformat())

        resp = self.client.post("/api/health/metrics", headers=headers, json={"stress_level": 11})
        self.assertEqual(resp.status_code, 422)

        resp = self.client.get("/api/health/metrics", headers=headers)
        listing = resp.json()
        self.assertEqual(listing["count"], 1)
        self.assertEqual(listing["stats"]["weight"]["current"], 70)
        self.assertEqual(listing["stats"]["blood_pressure"]["avg_systolic"], 120)

        resp = self.client.put(f"/api/health/metrics/{metric['id']}", headers=other, json={"weight": 60})
        self.assertEqual(resp.status_code, 403)
        resp = self.client.delete(f"/api/health/metrics/{metric['id']}", headers=other)
        self.assertEqual(resp.status_code, 403)

        resp = self.client.put(f"/api/health/metrics/{metric['id']}", headers=headers, json={"weight": 80})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["bmi"], 26.1)
        self.assertEqual(resp.json()["height"], 175)

        resp = self.client.delete(f"/api/health/metrics/{metric['id']}", headers=headers)
        self.assertEqual(resp.status_code, 200)
        resp = self.client.delete(f"/api/health/metrics/{metric['id']}", headers=headers)
        self.assertEqual(resp.status_code, 404)

    def test_progress_and_dashboard(self) -> None:
        headers = self._register("progress@example.com")
        self.client.put("/api/goals", headers=headers, json={"target_weight": 70, "calorie_goal": 2000})

        yesterday = (self.today - timedelta(days=1)).isoformat()
        self.client.post("/api/health/metrics", headers=headers, json={"weight": 80, "height": 175, "date": yesterday})
        self.client.post("/api/health/metrics", headers=headers, json={"weight": 78, "height": 175})
        self.client.post("/api/intake/entries", headers=headers, json={"name": "Lunch", "calories": 1000, "protein": 40})
        self.client.post("/api/intake/water", headers=headers, json={"amount": 2})

        resp = self.client.get("/api/health/progress?days=7", headers=headers)
        self.assertEqual(resp.status_code, 200)
        progress = resp.json()
        self.assertEqual(progress["consistency"]["metrics_tracked"], 2)
        self.assertEqual(progress["consistency"]["food_tracked"], 1)
        self.assertEqual(progress["weight"]["total_change"], -2.0)
        self.assertEqual(progress["weight"]["remaining_change"], -8.0)
        self.assertEqual(progress["weight"]["progress_percentage"], 20)
        self.assertEqual(progress["nutrition"]["avg_calories"], 1000)
        self.assertEqual(progress["nutrition"]["calorie_goal_adherence"], 50)

        resp = self.client.get("/api/health/progress?days=3", headers=headers)
        self.assertEqual(resp.status_code, 422)

        resp = self.client.get("/api/health/dashboard", headers=headers)
        self.assertEqual(resp.status_code, 200)
        dashboard = resp.json()
        self.assertEqual(dashboard["today"]["date"], self.today.isoformat())
        self.assertEqual(dashboard["today"]["metrics"]["weight"], 78)
        self.assertEqual(dashboard["today"]["nutrition"]["calories"], 1000)
        self.assertEqual(dashboard["today"]["food_entries"], 1)
        self.assertEqual(dashboard["goal_progress"]["calories"], 50.0)
        self.assertEqual(dashboard["goal_progress"]["water"], 25.0)
        self.assertEqual(dashboard["trends"]["weight"], -2.0)
        self.assertEqual(dashboard["summary"]["total_days_tracked"], 2)
        self.assertEqual(dashboard["summary"]["last_weight_entry"]["value"], 78)

    def test_recipes(self) -> None:
        headers = self._register("cook@example.com")
        other = self._register("cook-other@example.com")
        admin = {"x-admin-api-key": ADMIN_KEY}

        favorite = {"recipe_id": "spoon-123", "title": "Lentil Soup", "calories": 320}
        resp = self.client.post("/api/recipes/favorites", headers=headers, json=favorite)
        self.assertEqual(resp.status_code, 201)
        fav_id = resp.json()["id"]
        resp = self.client.post("/api/recipes/favorites", headers=headers, json=favorite)
        self.assertEqual(resp.status_code, 400)
        resp = self.client.get("/api/recipes/favorites", headers=headers)
        self.assertEqual(resp.json()["count"], 1)
        resp = self.client.delete(f"/api/recipes/favorites/{fav_id}", headers=other)
        self.assertEqual(resp.status_code, 403)
        resp = self.client.delete(f"/api/recipes/favorites/{fav_id}", headers=headers)
        self.assertEqual(resp.status_code, 200)
        resp = self.client.delete(f"/api/recipes/favorites/{fav_id}", headers=headers)
        self.assertEqual(resp.status_code, 404)

        shared = {
            "title": "Green Smoothie",
            "ingredients": ["spinach", "banana"],
            "instructions": ["blend"],
            "cooking_time": 5,
            "servings": 1,
            "difficulty": "Easy",
            "tags": ["Vegan"],
        }
        resp = self.client.post("/api/recipes/shared", headers=headers, json=shared)
        self.assertEqual(resp.status_code, 201)
        recipe = resp.json()
        self.assertFalse(recipe["is_approved"])
        self.assertEqual(recipe["author_name"], "cook")

        resp = self.client.get("/api/recipes/shared", headers=other)
        self.assertNotIn(recipe["id"], [r["id"] for r in resp.json()["data"]])
        resp = self.client.get("/api/recipes/shared/mine", headers=headers)
        self.assertEqual(resp.json()["count"], 1)

        # Pending recipes cannot collect likes yet.
        resp = self.client.post(f"/api/recipes/shared/{recipe['id']}/like", headers=other)
        self.assertEqual(resp.status_code, 404)

        resp = self.client.put(f"/api/admin/shared-recipes/{recipe['id']}/approve")
        self.assertEqual(resp.status_code, 401)
        resp = self.client.get("/api/admin/shared-recipes/pending", headers=admin)
        self.assertIn(recipe["id"], [r["id"] for r in resp.json()])
        resp = self.client.put(f"/api/admin/shared-recipes/{recipe['id']}/approve", headers=admin)
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["is_approved"])

        resp = self.client.get("/api/recipes/shared?tags=vegan&difficulty=Easy", headers=other)
        self.assertEqual([r["id"] for r in resp.json()["data"]], [recipe["id"]])

        resp = self.client.post(f"/api/recipes/shared/{recipe['id']}/like", headers=other)
        self.assertEqual(resp.status_code, 200)
        resp = self.client.post(f"/api/recipes/shared/{recipe['id']}/like", headers=other)
        self.assertEqual(resp.status_code, 400)
        resp = self.client.get("/api/recipes/shared?sort_by=likes", headers=other)
        self.assertEqual(resp.json()["data"][0]["likes"], 1)
        resp = self.client.delete(f"/api/recipes/shared/{recipe['id']}/like", headers=other)
        self.assertEqual(resp.status_code, 200)
        resp = self.client.delete(f"/api/recipes/shared/{recipe['id']}/like", headers=other)
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post("/api/recipes/shared/missing/like", headers=other)
        self.assertEqual(resp.status_code, 404)

        # The count never drops below zero, even when it drifted out of step with the likes.
        from rainscare.store import get_store  # noqa: WPS433

        resp = self.client.post(f"/api/recipes/shared/{recipe['id']}/like", headers=headers)
        self.assertEqual(resp.status_code, 200)
        get_store().update("sharedRecipes", recipe["id"], {"likes": 0})
        resp = self.client.delete(f"/api/recipes/shared/{recipe['id']}/like", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(get_store().get("sharedRecipes", recipe["id"])["likes"], 0)

    def test_food_analysis_without_gemini_key(self) -> None:
        headers = self._register("analysis@example.com")
        resp = self.client.post(
            "/api/food/analyze-text", headers=headers, json={"food_name": "Biryani", "health_conditions": ["diabetes"]}
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["source"], "fallback")
        self.assertEqual(resp.json()["food_name"], "Biryani")

        resp = self.client.post(
            "/api/food/analyze",
            headers=headers,
            json={"image_mime": "image/png", "image_base64": "this is not base64 at all!!"},
        )
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post(
            "/api/food/analyze",
            headers=headers,
            json={"image_mime": "image/gif", "image_base64": "aGVsbG8gd29ybGQgaGVsbG8="},
        )
        self.assertEqual(resp.status_code, 422)

    def test_export(self) -> None:
        headers = self._register("export@example.com")
        resp = self.client.get("/api/user/export", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(resp.json()["goals"])
        self.assertEqual(resp.json()["summary"]["total_food_entries"], 0)

        self.client.post("/api/intake/entries", headers=headers, json={"name": "Toast", "calories": 120})
        self.client.post("/api/health/metrics", headers=headers, json={"weight": 65})
        self.client.put("/api/goals", headers=headers, json={"water_goal": 10})

        resp = self.client.get("/api/user/export", headers=headers)
        export = resp.json()
        self.assertEqual(export["profile"]["email"], "export@example.com")
        self.assertNotIn("password_hash", export["profile"])
        self.assertEqual(export["goals"]["water_goal"], 10)
        self.assertEqual(export["summary"]["total_food_entries"], 1)
        self.assertEqual(export["summary"]["total_daily_records"], 1)
        self.assertEqual(export["summary"]["total_health_metrics"], 1)
        self.assertEqual(export["food_diary"][0]["name"], "Toast")

    def test_delete_user_data(self) -> None:
        headers = self._register("forget@example.com")
        other = self._register("forget-other@example.com")
        for who in (headers, other):
            self.client.post("/api/intake/entries", headers=who, json={"name": "Rice", "calories": 200})
            self.client.post("/api/intake/entries", headers=who, json={"name": "Beans", "calories": 150})
            self.client.post("/api/health/metrics", headers=who, json={"weight": 70})
        self.client.post("/api/intake/water", headers=headers, json={"amount": 3})
        self.client.put("/api/goals", headers=headers, json={"water_goal": 12})

        def delete(body, who=headers):
            return self.client.request("DELETE", "/api/user/data", headers=who, json=body)

        resp = delete({"data_types": ["food_diary"]})
        self.assertEqual(resp.status_code, 400)
        resp = delete({"data_types": ["food_diary"], "confirm_delete": "yes"})
        self.assertEqual(resp.status_code, 400)
        resp = delete({"data_types": ["food_diary", "passwords"], "confirm_delete": True})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("passwords", resp.json()["detail"])
        resp = delete({"data_types": [], "confirm_delete": True})
        self.assertEqual(resp.status_code, 400)
        # Nothing was removed by the rejected requests.
        resp = self.client.get("/api/user/export", headers=headers)
        self.assertEqual(resp.json()["summary"]["total_food_entries"], 2)

        resp = delete({"data_types": ["food_diary", "goals"], "confirm_delete": True})
        self.assertEqual(resp.status_code, 200)
        payload = resp.json()
        self.assertTrue(payload["success"])
        self.assertEqual(payload["deleted_counts"], {"food_diary": 2, "goals": 1})

        # Totals follow the diary; the rest of the day stays.
        resp = self.client.get("/api/intake/today", headers=headers)
        self.assertEqual(resp.json()["total_calories"], 0)
        self.assertEqual(resp.json()["food_entries"], [])
        self.assertEqual(resp.json()["water"], 3)

        export = self.client.get("/api/user/export", headers=headers).json()
        self.assertIsNone(export["goals"])
        self.assertEqual(export["summary"]["total_health_metrics"], 1)

        # Another user's data is untouched.
        export = self.client.get("/api/user/export", headers=other).json()
        self.assertEqual(export["summary"]["total_food_entries"], 2)

        resp = delete({"data_types": ["health_metrics", "goals"], "confirm_delete": True})
        self.assertEqual(resp.json()["deleted_counts"], {"health_metrics": 1, "goals": 0})


if __name__ == "__main__":
    unittest.main()
