"""UnitCalculator: shared resolution path for size, position and scale descriptors.

A descriptor pairs a measurement basis with a behaviour:

    literal  -> behavior + offset, context ignored
    named    -> the kind's dispatch table (same functions the registry holds)
    custom   -> StrategyRegistry lookup by id

Anything the engine cannot resolve falls back to the kind's constant and is
logged; only axis mismatches on position descriptors raise.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import numpy as np

from layout_units.engine.behavior import Behavior, BehaviorKind, CustomBehavior, classify_behavior
from layout_units.engine.config import EngineConfig
from layout_units.engine.context import LayoutContext
from layout_units.engine.enums import UnitType
from layout_units.engine.errors import UnknownStrategyError
from layout_units.engine.registry import StrategyRegistry, get_registry

logger = logging.getLogger(__name__)


class UnitCalculator:
    """Base class; subclasses set the class attributes and the axis handling."""

    unit_type: UnitType
    # Resolved value when a behaviour or strategy cannot be resolved
    fallback_value: float = 0.0
    dispatch: dict[Any, Callable[..., float]] = {}
    # Random behaviour of this kind, if any; gets the calculator's rng and range
    random_behavior: Any = None

    def __init__(
        self,
        id: str,
        name: str,
        basis: Any,
        behavior: Behavior,
        *,
        registry: StrategyRegistry | None = None,
        rng: np.random.Generator | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        classify_behavior(behavior)
        self.id = id
        self.name = name
        self.basis = basis
        self.behavior = behavior
        self.offset: float = 0.0
        self.alignment: str | None = None
        # Inactive calculators are skipped by UnitGroup
        self.active = True
        self.registry = registry
        self.rng = rng
        self.config = config or EngineConfig()

    # -- descriptor shape -------------------------------------------------

    @property
    def unit(self) -> Any:
        return self.basis

    @property
    def value(self) -> Behavior:
        return self.behavior

    @property
    def behavior_kind(self) -> BehaviorKind:
        return classify_behavior(self.behavior)

    def is_responsive(self) -> bool:
        return self.behavior_kind is not BehaviorKind.LITERAL

    def set_offset(self, offset: float) -> None:
        self.offset = float(offset)

    def get_offset(self) -> float:
        return self.offset

    def set_alignment(self, alignment: str | None) -> None:
        self.alignment = alignment

    def get_alignment(self) -> str | None:
        return self.alignment

    # -- resolution -------------------------------------------------------

    def calculate(self, context: LayoutContext) -> float:
        raise NotImplementedError

    def _strategy_registry(self) -> StrategyRegistry:
        return self.registry if self.registry is not None else get_registry()

    def _random_kwargs(self) -> dict[str, Any]:
        return {"rng": self.rng}

    def _finish(self, value: float) -> float:
        """Post-processing applied to every resolved value (constraints for size/scale)."""
        return value

    def _resolve(self, axis: Any, ctx: LayoutContext) -> float:
        kind = classify_behavior(self.behavior)
        if kind is BehaviorKind.LITERAL:
            return self._finish(float(self.behavior) + self.offset)
        if kind is BehaviorKind.CUSTOM:
            value = self._resolve_custom(self.behavior, axis, ctx)
        else:
            value = self._resolve_named(axis, ctx)
        return self._finish(value + self.offset)

    def _resolve_named(self, axis: Any, ctx: LayoutContext) -> float:
        fn = self.dispatch.get(self.behavior)
        if fn is None:
            logger.warning(
                "%s %s: no %s resolver for %r, using fallback %s",
                type(self).__name__, self.id, self.unit_type.value, self.behavior, self.fallback_value,
            )
            return self.fallback_value
        if self.random_behavior is not None and self.behavior is self.random_behavior:
            return float(fn(self.behavior, self.basis, axis, ctx, **self._random_kwargs()))
        return float(fn(self.behavior, self.basis, axis, ctx))

    def _resolve_custom(self, behavior: CustomBehavior, axis: Any, ctx: LayoutContext) -> float:
        try:
            spec = self._strategy_registry().get(behavior.strategy_id)
        except UnknownStrategyError as e:
            logger.warning("%s %s: %s, using fallback %s", type(self).__name__, self.id, e, self.fallback_value)
            return self.fallback_value
        if spec.kind is not self.unit_type:
            logger.warning(
                "%s %s: strategy %s resolves %s, not %s; using fallback",
                type(self).__name__, self.id, spec.id, spec.kind.value, self.unit_type.value,
            )
            return self.fallback_value
        if not spec.standalone:
            # Built-in strategies read the named behaviour; select them with that behaviour instead
            logger.warning(
                "%s %s: strategy %s resolves named behaviours and cannot be used by id; using fallback",
                type(self).__name__, self.id, spec.id,
            )
            return self.fallback_value
        if not spec.validate_context(ctx):
            logger.debug("Strategy %s missing context for %s", spec.id, self.id)
        try:
            return spec.calculate(behavior, self.basis, axis, ctx)
        except Exception:
            logger.exception("Strategy %s failed for %s, using fallback", spec.id, self.id)
            return self.fallback_value

    # -- pre-flight -------------------------------------------------------

    def required_context(self) -> tuple[str, ...]:
        """Context rectangles the basis or behaviour reads."""
        return ()

    def validate(self, context: LayoutContext) -> bool:
        """False iff a rectangle this descriptor reads is absent. Calculation still falls back."""
        if isinstance(self.behavior, CustomBehavior):
            registry = self._strategy_registry()
            if not registry.has(self.behavior.strategy_id):
                return False
            return registry.get(self.behavior.strategy_id).validate_context(context)
        missing = context.missing(self.required_context())
        if missing:
            logger.debug("%s %s missing context: %s", type(self).__name__, self.id, missing)
        return not missing

    # -- copies and debugging ---------------------------------------------

    def _init_kwargs(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "basis": self.basis, "behavior": self.behavior}

    def _copy_state(self, other: UnitCalculator) -> None:
        other.offset = self.offset
        other.alignment = self.alignment
        other.active = self.active

    def clone(self, **overrides: Any) -> UnitCalculator:
        """New calculator with the same descriptor; keyword overrides replace fields."""
        offset = overrides.pop("offset", None)
        alignment = overrides.pop("alignment", None)
        kwargs = {**self._init_kwargs(), **overrides}
        cloned = type(self)(registry=self.registry, rng=self.rng, config=self.config, **kwargs)
        self._copy_state(cloned)
        if offset is not None:
            cloned.set_offset(offset)
        if alignment is not None:
            cloned.set_alignment(alignment)
        return cloned

    def describe(self) -> dict[str, Any]:
        behavior = self.behavior
        return {
            "id": self.id,
            "name": self.name,
            "unit_type": self.unit_type.value,
            "basis": getattr(self.basis, "value", self.basis),
            "behavior": getattr(behavior, "value", str(behavior) if isinstance(behavior, CustomBehavior) else behavior),
            "behavior_kind": self.behavior_kind.value,
            "offset": self.offset,
            "alignment": self.alignment,
            "responsive": self.is_responsive(),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {getattr(self.basis, 'value', self.basis)})"
