"""
Random source used for the "variance for realism" noise.

Anything with a ``random()`` method returning a float in [0, 1) works:
``numpy.random.Generator``, ``random.Random`` or a test double.
"""

from __future__ import annotations

from typing import Optional, Protocol

import numpy as np


class RandomSource(Protocol):
    def random(self) -> float: ...


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Default production random source; pass a seed for reproducible runs."""
    return np.random.default_rng(seed)


def noise(rng: RandomSource, width: float) -> float:
    """Uniform noise in [-width/2, +width/2]."""
    return (float(rng.random()) - 0.5) * width


def uniform(rng: RandomSource, low: float, high: float) -> float:
    return low + float(rng.random()) * (high - low)
