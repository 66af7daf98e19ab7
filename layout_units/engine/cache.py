"""CachedCalculator: LRU memo around any calculator's ``calculate``.

Contexts are frozen dataclasses, so they key the cache directly. The
wrapped calculator's descriptor state (offset, constraints, behaviour) is
part of the key, so ``set_offset`` on the wrapped object never serves a stale
value. ``random`` and custom behaviours bypass the cache.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Any

from layout_units.config import settings
from layout_units.engine.behavior import CustomBehavior
from layout_units.engine.calculators.base import UnitCalculator
from layout_units.engine.context import LayoutContext

logger = logging.getLogger(__name__)


class CachedCalculator:
    def __init__(self, calculator: UnitCalculator, max_entries: int | None = None) -> None:
        self.calculator = calculator
        self.max_entries = max_entries if max_entries is not None else settings.layout_units_cache_size
        self._cache: OrderedDict[Any, float] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __getattr__(self, name: str) -> Any:
        # Only called for attributes not found on the wrapper itself
        return getattr(self.calculator, name)

    def _cacheable(self) -> bool:
        behavior = self.calculator.behavior
        # Custom strategies may sample or be re-registered
        if isinstance(behavior, CustomBehavior):
            return False
        return getattr(behavior, "value", None) != "random"

    def _key(self, context: LayoutContext) -> tuple:
        return (context, tuple(sorted(self.calculator.describe().items())))

    def calculate(self, context: LayoutContext) -> float:
        if not self._cacheable() or self.max_entries <= 0:
            return self.calculator.calculate(context)

        key = self._key(context)
        if key in self._cache:
            self.hits += 1
            self._cache.move_to_end(key)
            return self._cache[key]

        self.misses += 1
        value = self.calculator.calculate(context)
        self._cache[key] = value
        if len(self._cache) > self.max_entries:
            self._cache.popitem(last=False)
            logger.debug("Evicted cache entry for %s", self.calculator.id)
        return value

    def clear_cache(self) -> None:
        self._cache.clear()
        self.hits = 0
        self.misses = 0

    def cache_stats(self) -> dict[str, Any]:
        total = self.hits + self.misses
        return {
            "size": len(self._cache),
            "max_entries": self.max_entries,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hits / total if total else 0.0,
        }

    def __repr__(self) -> str:
        return f"CachedCalculator({self.calculator!r})"
