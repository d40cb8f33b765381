# -*- coding: utf-8 -*-

from __future__ import annotations

import random
import unittest

from rainscare.steps.detector import StepDetector, count_steps
from rainscare.steps.sync import StepSyncError, provider_for_user_agent, simulate_provider_steps


class TestStepDetector(unittest.TestCase):
    def test_first_sample_only_sets_baseline(self) -> None:
        detector = StepDetector()
        self.assertFalse(detector.feed(0.0, 0.0, 9.8, 0))
        self.assertEqual(detector.steps, 0)

    def test_threshold_and_debounce(self) -> None:
        detector = StepDetector(threshold=1.2, min_interval_ms=300)
        detector.feed(0.0, 0.0, 9.8, 0)
        self.assertTrue(detector.feed(0.0, 0.0, 12.0, 100))  # delta 2.2
        self.assertFalse(detector.feed(0.0, 0.0, 9.8, 200))  # too soon after the last step
        self.assertTrue(detector.feed(0.0, 0.0, 12.0, 500))
        self.assertFalse(detector.feed(0.0, 0.0, 12.5, 900))  # delta 0.5 under threshold
        self.assertEqual(detector.steps, 2)

    def test_delta_equal_to_threshold_is_not_a_step(self) -> None:
        detector = StepDetector(threshold=1.0, min_interval_ms=0)
        detector.feed_magnitude(10.0, 0)
        self.assertFalse(detector.feed_magnitude(11.0, 1000))
        self.assertTrue(detector.feed_magnitude(12.5, 2000))

    def test_count_steps_orders_samples_by_time(self) -> None:
        samples = [
            (0.0, 0.0, 12.0, 400),
            (0.0, 0.0, 9.8, 0),
            (0.0, 0.0, 9.8, 800),
            (0.0, 0.0, 12.0, 1200),
        ]
        self.assertEqual(count_steps(samples), 3)
        self.assertEqual(count_steps([]), 0)

    def test_rejects_non_positive_threshold(self) -> None:
        with self.assertRaises(ValueError):
            StepDetector(threshold=0)


class TestStepSyncHelpers(unittest.TestCase):
    def test_provider_for_user_agent(self) -> None:
        self.assertEqual(provider_for_user_agent("Mozilla/5.0 (iPhone; CPU iPhone OS 17_0)"), "apple_health")
        self.assertEqual(provider_for_user_agent("Mozilla/5.0 (iPad; CPU OS 16_0)"), "apple_health")
        self.assertEqual(provider_for_user_agent("Mozilla/5.0 (Linux; Android 14)"), "google_fit")
        self.assertIsNone(provider_for_user_agent("curl/8.0"))

    def test_simulated_steps_stay_in_range(self) -> None:
        rng = random.Random(7)
        for _ in range(200):
            steps = simulate_provider_steps("samsung_health", rng=rng)
            self.assertGreaterEqual(steps, 3000)
            self.assertLessEqual(steps, 7999)
        with self.assertRaises(StepSyncError):
            simulate_provider_steps("fitbit")


if __name__ == "__main__":
    unittest.main()
