"""
Deterministic pseudo-random generator for reproducible voter sampling.

Linear congruential generator with the Numerical Recipes parameters. The
draw sequence is part of the sampling contract: the same seed must always
produce the same voters.
"""

import math
from typing import Tuple

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
UINT32_MASK = 0xFFFFFFFF
ZERO_SEED_REPLACEMENT = 123456789
MIN_BOX_MULLER_UNIFORM = 1e-12


def lcg_step(state: int) -> Tuple[float, int]:
    """
    Advance a 32-bit LCG state by one step.

    Args:
        state: Current 32-bit state

    Returns:
        Tuple of (value in [0, 1], next state)
    """
    next_state = (LCG_MULTIPLIER * state + LCG_INCREMENT) & UINT32_MASK
    return next_state / UINT32_MASK, next_state


class LcgRng:
    """
    Seeded generator owned by a single simulation run.
    """

    def __init__(self, seed: int):
        """
        Initialize generator state from an integer seed.

        Args:
            seed: Any integer; reduced to 32 bits. Zero is remapped to a fixed
                non-zero constant.
        """
        self._state = int(seed) & UINT32_MASK
        if self._state == 0:
            self._state = ZERO_SEED_REPLACEMENT

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        value, self._state = lcg_step(self._state)
        return value

    def uniform(self, min_value: float = 0.0, max_value: float = 1.0) -> float:
        return min_value + (max_value - min_value) * self.next()

    def normal(self, mean: float = 0.0, std: float = 1.0) -> float:
        """
        Draw from N(mean, std) with the Box-Muller transform.

        Always consumes exactly two uniform draws.
        """
        u1 = max(self.next(), MIN_BOX_MULLER_UNIFORM)
        u2 = self.next()
        magnitude = math.sqrt(-2.0 * math.log(u1))
        return mean + std * magnitude * math.cos(2 * math.pi * u2)
