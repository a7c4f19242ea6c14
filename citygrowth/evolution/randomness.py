"""Random draws used by the transition rules.

Rules never touch a global RNG.  They take any object with a
``random()`` method returning a uniform float in ``[0, 1)``; a NumPy
``Generator`` is the production source, and tests substitute scripted
sources to force particular branches.
"""

from __future__ import annotations

import math
from typing import Protocol

import numpy as np
from numpy.random import Generator


class RandomSource(Protocol):
    """Anything that yields uniform floats in ``[0, 1)``."""

    def random(self) -> float: ...


def chance(rng: RandomSource, probability: float) -> bool:
    """Return True with the given probability (one uniform draw)."""
    return float(rng.random()) < probability


def rand_int(rng: RandomSource, low: int, high: int) -> int:
    """Draw an integer uniformly from the half-open range ``[low, high)``.

    Computed as ``floor(u * (high - low)) + low`` so that a draw of 0
    always maps to ``low``.
    """
    return math.floor(float(rng.random()) * (high - low)) + low


def cell_stream(seed: int, generation: int, x: int, y: int) -> Generator:
    """Return an independent generator keyed by seed, generation and coordinate.

    Parallel steps give every parcel its own stream, so the result does
    not depend on which worker evaluates which parcel.
    """
    return np.random.default_rng([seed, generation, y, x])
