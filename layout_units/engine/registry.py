"""Strategy registry: every built-in behaviour is a plain function registered via decorator.

Usage:
    @strategy(id="fill-size", kind=UnitType.SIZE, behaviors={SizeValue.FILL}, requires_any=("parent", "scene"))
    def fill_size(behavior, basis, axis, ctx: LayoutContext) -> float:
        ...

The calculators dispatch straight to these functions; the registry lets new
behaviours be added (and looked up by priority) without touching them.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable

from layout_units.engine.behavior import CustomBehavior, is_literal
from layout_units.engine.constants import PRIORITY_DEFAULT
from layout_units.engine.enums import UnitType
from layout_units.engine.errors import UnknownStrategyError

if TYPE_CHECKING:
    from layout_units.engine.context import LayoutContext

logger = logging.getLogger(__name__)

StrategyFn = Callable[[Any, Any, Any, "LayoutContext"], float]


@dataclass(frozen=True)
class StrategySpec:
    id: str
    kind: UnitType
    fn: StrategyFn
    # Named behaviours resolved; empty means reachable only by id, as a CustomBehavior
    behaviors: frozenset = field(default_factory=frozenset)
    # Empty means "any"
    bases: frozenset = field(default_factory=frozenset)
    axes: frozenset = field(default_factory=frozenset)
    priority: int = PRIORITY_DEFAULT
    # Context rectangles that must all be present / at least one present
    requires: tuple[str, ...] = ()
    requires_any: tuple[str, ...] = ()
    literals: bool = False
    description: str = ""

    def can_handle(self, behavior: Any, basis: Any, axis: Any) -> bool:
        if isinstance(behavior, CustomBehavior):
            return behavior.strategy_id == self.id
        if is_literal(behavior):
            if not self.literals:
                return False
        elif behavior not in self.behaviors:
            return False
        if self.bases and basis not in self.bases:
            return False
        if self.axes and axis not in self.axes:
            return False
        return True

    @property
    def standalone(self) -> bool:
        """True when the strategy needs no named or literal behaviour, so it can be referenced by id."""
        return not self.behaviors and not self.literals

    def calculate(self, behavior: Any, basis: Any, axis: Any, ctx: LayoutContext) -> float:
        return float(self.fn(behavior, basis, axis, ctx))

    def validate_context(self, ctx: LayoutContext) -> bool:
        if ctx.missing(self.requires):
            return False
        if self.requires_any and len(ctx.missing(self.requires_any)) == len(self.requires_any):
            return False
        return True


class StrategyRegistry:
    """Registry of value calculation strategies, keyed by strategy id."""

    def __init__(self, specs: Iterable[StrategySpec] = ()) -> None:
        self._strategies: dict[str, StrategySpec] = {}
        for spec in specs:
            self.register(spec)

    def register(self, spec: StrategySpec) -> bool:
        if spec.id in self._strategies:
            logger.warning("Strategy already registered: %s", spec.id)
            return False
        self._strategies[spec.id] = spec
        logger.debug("Registered strategy %s (%s, priority %d)", spec.id, spec.kind.value, spec.priority)
        return True

    def unregister(self, strategy_id: str) -> bool:
        removed = self._strategies.pop(strategy_id, None)
        if removed is not None:
            logger.debug("Unregistered strategy %s", strategy_id)
        return removed is not None

    def get(self, strategy_id: str) -> StrategySpec:
        try:
            return self._strategies[strategy_id]
        except KeyError:
            raise UnknownStrategyError(strategy_id) from None

    def has(self, strategy_id: str) -> bool:
        return strategy_id in self._strategies

    def strategies_for(self, kind: UnitType, behavior: Any, basis: Any, axis: Any) -> list[StrategySpec]:
        """All strategies that can handle the triple, lowest priority number first."""
        matches = [
            s for s in self._strategies.values()
            if s.kind == kind and s.can_handle(behavior, basis, axis)
        ]
        matches.sort(key=lambda s: (s.priority, s.id))
        logger.debug(
            "Found %d strategies for %s/%s/%s: %s",
            len(matches), kind.value, behavior, basis, [s.id for s in matches],
        )
        return matches

    def best_strategy(self, kind: UnitType, behavior: Any, basis: Any, axis: Any) -> StrategySpec | None:
        matches = self.strategies_for(kind, behavior, basis, axis)
        return matches[0] if matches else None

    def all(self) -> list[StrategySpec]:
        return sorted(self._strategies.values(), key=lambda s: (s.kind.value, s.priority, s.id))

    def by_kind(self, kind: UnitType) -> list[StrategySpec]:
        return [s for s in self.all() if s.kind == kind]

    def clear(self) -> None:
        logger.debug("Clearing %d strategies", len(self._strategies))
        self._strategies.clear()

    def copy(self) -> StrategyRegistry:
        return StrategyRegistry(self._strategies.values())

    def statistics(self) -> dict[str, Any]:
        by_kind = Counter(s.kind.value for s in self._strategies.values())
        by_behavior: Counter[str] = Counter()
        for s in self._strategies.values():
            for b in s.behaviors:
                by_behavior[getattr(b, "value", str(b))] += 1
        return {
            "total_strategies": len(self._strategies),
            "by_kind": dict(by_kind),
            "by_behavior": dict(by_behavior),
        }

    @property
    def count(self) -> int:
        return len(self._strategies)


# Module-level registry of built-in strategies
_registry = StrategyRegistry()


def get_registry() -> StrategyRegistry:
    return _registry


def strategy(
    *,
    id: str,
    kind: UnitType,
    behaviors: Iterable[Any] = (),
    bases: Iterable[Any] = (),
    axes: Iterable[Any] = (),
    priority: int = PRIORITY_DEFAULT,
    requires: Iterable[str] = (),
    requires_any: Iterable[str] = (),
    literals: bool = False,
    description: str = "",
    registry: StrategyRegistry | None = None,
):
    """Decorator to register a strategy function."""

    def decorator(fn: StrategyFn):
        spec = StrategySpec(
            id=id,
            kind=kind,
            fn=fn,
            behaviors=frozenset(behaviors),
            bases=frozenset(bases),
            axes=frozenset(axes),
            priority=priority,
            requires=tuple(requires),
            requires_any=tuple(requires_any),
            literals=literals,
            description=description,
        )
        (registry or _registry).register(spec)
        return fn

    return decorator
