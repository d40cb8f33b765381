"""Step detection from accelerometer samples.

A step is counted when the change in acceleration magnitude between two
consecutive samples exceeds `threshold` (m/s^2) and at least
`min_interval_ms` has passed since the previous step.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

DEFAULT_THRESHOLD = 1.2
DEFAULT_MIN_INTERVAL_MS = 300

Sample = Tuple[float, float, float, float]  # (x, y, z, t_ms)


class StepDetector:
    def __init__(self, threshold: float = DEFAULT_THRESHOLD, min_interval_ms: float = DEFAULT_MIN_INTERVAL_MS) -> None:
        if threshold <= 0:
            raise ValueError("threshold must be positive")
        if min_interval_ms < 0:
            raise ValueError("min_interval_ms must be non-negative")
        self.threshold = float(threshold)
        self.min_interval_ms = float(min_interval_ms)
        self.steps = 0
        self._last_magnitude: Optional[float] = None
        self._last_step_ms: Optional[float] = None

    def reset(self) -> None:
        self.steps = 0
        self._last_magnitude = None
        self._last_step_ms = None

    def feed_magnitude(self, magnitude: float, t_ms: float) -> bool:
        previous = self._last_magnitude
        self._last_magnitude = magnitude
        # First sample only sets the baseline.
        if previous is None:
            return False
        if abs(magnitude - previous) <= self.threshold:
            return False
        if self._last_step_ms is not None and t_ms - self._last_step_ms <= self.min_interval_ms:
            return False
        self.steps += 1
        self._last_step_ms = t_ms
        return True

    def feed(self, x: float, y: float, z: float, t_ms: float) -> bool:
        return self.feed_magnitude(math.sqrt(x * x + y * y + z * z), t_ms)


def magnitudes(samples: Sequence[Sample]) -> np.ndarray:
    if not samples:
        return np.zeros(0, dtype=float)
    arr = np.asarray(samples, dtype=float)
    return np.sqrt(np.sum(arr[:, :3] ** 2, axis=1))


def count_steps(
    samples: Iterable[Sample],
    threshold: float = DEFAULT_THRESHOLD,
    min_interval_ms: float = DEFAULT_MIN_INTERVAL_MS,
) -> int:
    ordered = sorted(samples, key=lambda s: s[3])
    detector = StepDetector(threshold=threshold, min_interval_ms=min_interval_ms)
    for mag, sample in zip(magnitudes(ordered), ordered):
        detector.feed_magnitude(float(mag), float(sample[3]))
    return detector.steps
