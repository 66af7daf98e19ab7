"""ScaleUnitCalculator: dimensionless multipliers."""

from __future__ import annotations

import logging
from typing import Any

from layout_units.engine.behavior import Behavior
from layout_units.engine.calculators.base import UnitCalculator
from layout_units.engine.constants import FALLBACK_SCALE
from layout_units.engine.context import LayoutContext
from layout_units.engine.enums import Dimension, ScaleUnit, ScaleValue, UnitType
from layout_units.engine.strategies.scale import BASIS_REQUIRES, REQUIRED_RECTS, SCALE_DISPATCH
from layout_units.utils.math_helpers import clamp, safe_ratio

logger = logging.getLogger(__name__)

# Behaviours that may scale each axis independently
_NON_UNIFORM = frozenset({ScaleValue.STRETCH, ScaleValue.IGNORE_ASPECT})


def default_scale_behavior(basis: ScaleUnit) -> Behavior:
    if basis is ScaleUnit.PERCENTAGE:
        return ScaleValue.FACTOR
    return ScaleValue(basis.value)


class ScaleUnitCalculator(UnitCalculator):
    unit_type = UnitType.SCALE
    fallback_value = FALLBACK_SCALE
    dispatch = SCALE_DISPATCH
    random_behavior = ScaleValue.RANDOM

    def __init__(
        self,
        id: str,
        name: str,
        basis: ScaleUnit,
        behavior: Behavior | None = None,
        maintain_aspect_ratio: bool = False,
        **kwargs: Any,
    ) -> None:
        basis = ScaleUnit(basis)
        if behavior is None:
            behavior = default_scale_behavior(basis)
        super().__init__(id, name, basis, behavior, **kwargs)
        self.maintain_aspect_ratio = maintain_aspect_ratio
        self.uniform_scaling = False
        self.min_scale: float | None = None
        self.max_scale: float | None = None

    def calculate(self, context: LayoutContext) -> float:
        return self._resolve(Dimension.BOTH, context)

    def _is_non_uniform(self) -> bool:
        return (
            self.behavior in _NON_UNIFORM
            and not self.uniform_scaling
            and not self.maintain_aspect_ratio
        )

    def calculate_scale_x(self, context: LayoutContext) -> float:
        if self._is_non_uniform():
            return self._resolve(Dimension.WIDTH, context)
        return self.calculate(context)

    def calculate_scale_y(self, context: LayoutContext) -> float:
        if self._is_non_uniform():
            return self._resolve(Dimension.HEIGHT, context)
        return self.calculate(context)

    def calculate_both(self, context: LayoutContext) -> dict[str, float]:
        if self._is_non_uniform():
            return {"scale_x": self.calculate_scale_x(context), "scale_y": self.calculate_scale_y(context)}
        scale = self.calculate(context)
        return {"scale_x": scale, "scale_y": scale}

    # -- constraints ------------------------------------------------------

    def set_scale_constraints(self, min_scale: float | None = None, max_scale: float | None = None) -> None:
        if min_scale is not None and max_scale is not None and min_scale > max_scale:
            raise ValueError(f"min_scale {min_scale} is greater than max_scale {max_scale}")
        self.min_scale = min_scale
        self.max_scale = max_scale

    def get_min_scale(self) -> float | None:
        return self.min_scale

    def get_max_scale(self) -> float | None:
        return self.max_scale

    def has_constraints(self) -> bool:
        return self.min_scale is not None or self.max_scale is not None

    def get_constraint_info(self) -> dict[str, Any]:
        return {"min": self.min_scale, "max": self.max_scale, "has_constraints": self.has_constraints()}

    def validate_scale(self, value: float) -> bool:
        if self.min_scale is not None and value < self.min_scale:
            return False
        if self.max_scale is not None and value > self.max_scale:
            return False
        return True

    def set_uniform_scaling(self, uniform: bool) -> None:
        self.uniform_scaling = uniform

    def is_uniform_scaling(self) -> bool:
        return self.uniform_scaling

    def calculate_optimal_scale(
        self,
        content_width: float,
        content_height: float,
        container_width: float,
        container_height: float,
    ) -> float:
        """Largest uniform scale that fits the content inside the container."""
        return min(
            safe_ratio(container_width, content_width),
            safe_ratio(container_height, content_height),
        )

    def _finish(self, value: float) -> float:
        return clamp(value, self.min_scale, self.max_scale)

    def _random_kwargs(self) -> dict[str, Any]:
        low = self.min_scale if self.min_scale is not None else self.config.random_scale_min
        high = self.max_scale if self.max_scale is not None else self.config.random_scale_max
        return {"low": low, "high": high, "rng": self.rng}

    def required_context(self) -> tuple[str, ...]:
        needed = list(BASIS_REQUIRES.get(self.basis, ()))
        if isinstance(self.behavior, ScaleValue):
            needed.extend(r for r in REQUIRED_RECTS.get(self.behavior, ()) if r not in needed)
        return tuple(needed)

    def _init_kwargs(self) -> dict[str, Any]:
        return {**super()._init_kwargs(), "maintain_aspect_ratio": self.maintain_aspect_ratio}

    def _copy_state(self, other: UnitCalculator) -> None:
        super()._copy_state(other)
        other.min_scale = self.min_scale
        other.max_scale = self.max_scale
        other.uniform_scaling = self.uniform_scaling

    def describe(self) -> dict[str, Any]:
        return {
            **super().describe(),
            "maintain_aspect_ratio": self.maintain_aspect_ratio,
            "uniform_scaling": self.uniform_scaling,
            **self.get_constraint_info(),
        }

    def __repr__(self) -> str:
        return f"ScaleUnitCalculator({self.name!r}, {self.basis.value})"
