"""Retry delay strategies, in seconds."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

BASE_DELAY = 1.0
MAX_DELAY = 20.0
MIN_OSCILLATION = 5
MAX_OSCILLATION = 30
OSCILLATION = 10
JITTER_FACTOR = 0.1


def exponential_backoff(attempts: int) -> float:
    """Return 2**attempts whole seconds."""
    return float(int(2.0 ** attempts))


@dataclass
class SinusBackoff:
    """Delay that follows a sine wave between BASE_DELAY and MAX_DELAY, plus jitter."""

    oscillation: int
    phase_shift: float
    jitter_factor: float

    @classmethod
    def create(cls) -> SinusBackoff:
        steps = (int(MAX_DELAY / BASE_DELAY) + MAX_OSCILLATION // MIN_OSCILLATION) // 2
        steps = max(MIN_OSCILLATION, min(MAX_OSCILLATION, steps))
        return cls(
            oscillation=steps,
            phase_shift=random.random(),
            jitter_factor=random.random() * JITTER_FACTOR,
        )

    def calculate(self, attempt: int) -> float:
        """Return the delay in seconds before the given attempt."""
        sin_factor = math.sin(attempt * (math.pi / self.oscillation)
                              + self.phase_shift - math.pi / 2)
        delay = BASE_DELAY + (sin_factor + 1.0) * (MAX_DELAY - BASE_DELAY) / 2.0
        return delay + self.jitter_factor * delay