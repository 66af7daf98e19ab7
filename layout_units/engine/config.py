"""Engine configuration: tunables a factory hands to the calculators it builds."""

from __future__ import annotations

from dataclasses import dataclass, field

from layout_units.config import settings
from layout_units.engine.constants import (
    RANDOM_SCALE_MAX,
    RANDOM_SCALE_MIN,
    RANDOM_SIZE_MAX,
    RANDOM_SIZE_MIN,
)


@dataclass
class EngineConfig:
    """Defaults used when a calculator carries no constraints of its own."""

    # `random` size draws when min/max size are unset
    random_size_min: float = RANDOM_SIZE_MIN
    random_size_max: float = RANDOM_SIZE_MAX

    # `random` scale draws when min/max scale are unset
    random_scale_min: float = RANDOM_SCALE_MIN
    random_scale_max: float = RANDOM_SCALE_MAX

    # Wrap factory-built calculators in CachedCalculator
    cache_results: bool = False
    cache_size: int = field(default_factory=lambda: settings.layout_units_cache_size)
