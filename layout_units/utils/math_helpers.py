"""Small numeric helpers shared by the calculators."""

from __future__ import annotations

import math


def clamp(value: float, lo: float | None = None, hi: float | None = None) -> float:
    """Clamp value into [lo, hi]; a None bound is open."""
    if lo is not None and value < lo:
        return lo
    if hi is not None and value > hi:
        return hi
    return value


def safe_ratio(numerator: float | None, denominator: float | None, default: float = 1.0) -> float:
    """numerator / denominator, or default when either side is missing or the denominator is zero."""
    if numerator is None or denominator is None or denominator == 0:
        return default
    return numerator / denominator


def format_number(value: float) -> str:
    """Render 100.0 as "100" and infinities as "inf"/"-inf" for human-readable messages."""
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if float(value).is_integer():
        return str(int(value))
    return str(value)
