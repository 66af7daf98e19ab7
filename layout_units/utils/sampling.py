"""Random sampling for the ``random`` behaviours.

Calculators accept an explicit ``numpy.random.Generator``; when none is given
they share the process default, seeded from ``LAYOUT_UNITS_RANDOM_SEED``.
"""

from __future__ import annotations

import numpy as np

from layout_units.config import settings

_default_rng: np.random.Generator | None = None


def get_default_rng() -> np.random.Generator:
    global _default_rng
    if _default_rng is None:
        _default_rng = np.random.default_rng(settings.layout_units_random_seed)
    return _default_rng


def reseed(seed: int | None) -> np.random.Generator:
    """Replace the process default generator (tests use this for reproducible draws)."""
    global _default_rng
    _default_rng = np.random.default_rng(seed)
    return _default_rng


def uniform(low: float, high: float, rng: np.random.Generator | None = None) -> float:
    """One sample in [low, high)."""
    gen = rng if rng is not None else get_default_rng()
    if high <= low:
        return float(low)
    return float(gen.uniform(low, high))
