"""SizeUnitCalculator: pixels for a width, a height, or both."""

from __future__ import annotations

import logging
from typing import Any

from layout_units.engine.behavior import Behavior
from layout_units.engine.calculators.base import UnitCalculator
from layout_units.engine.constants import FALLBACK_SIZE
from layout_units.engine.context import LayoutContext
from layout_units.engine.enums import SIZE_DIMENSIONS, Dimension, SizeUnit, SizeValue, UnitType
from layout_units.engine.strategies.size import REQUIRED_RECTS, SIZE_DISPATCH
from layout_units.utils.math_helpers import clamp

logger = logging.getLogger(__name__)


class SizeUnitCalculator(UnitCalculator):
    """Sizes are configured with a dimension up front, so there is no axis mismatch.

    ``maintain_aspect_ratio`` is carried for callers; the calculator itself
    returns an unconstrained scalar and leaves aspect reconciliation to them.
    """

    unit_type = UnitType.SIZE
    fallback_value = FALLBACK_SIZE
    dispatch = SIZE_DISPATCH
    random_behavior = SizeValue.RANDOM

    def __init__(
        self,
        id: str,
        name: str,
        basis: SizeUnit,
        dimension: Dimension,
        behavior: Behavior | None = None,
        maintain_aspect_ratio: bool = False,
        **kwargs: Any,
    ) -> None:
        basis = SizeUnit(basis)
        dimension = Dimension(dimension)
        if dimension not in SIZE_DIMENSIONS:
            raise ValueError(f"Size dimension must be one of width, height, both, got {dimension!r}")
        if behavior is None:
            behavior = SizeValue(basis.value)
        super().__init__(id, name, basis, behavior, **kwargs)
        self.dimension = dimension
        self.maintain_aspect_ratio = maintain_aspect_ratio
        self.min_size: float | None = None
        self.max_size: float | None = None

    def calculate(self, context: LayoutContext) -> float:
        return self._resolve(self.dimension, context)

    def calculate_size(self, context: LayoutContext) -> float:
        return self.calculate(context)

    def calculate_width(self, context: LayoutContext) -> float:
        return self.calculate(context)

    def calculate_height(self, context: LayoutContext) -> float:
        return self.calculate(context)

    def set_size_constraints(self, min_size: float | None = None, max_size: float | None = None) -> None:
        if min_size is not None and max_size is not None and min_size > max_size:
            raise ValueError(f"min_size {min_size} is greater than max_size {max_size}")
        self.min_size = min_size
        self.max_size = max_size

    def get_min_size(self) -> float | None:
        return self.min_size

    def get_max_size(self) -> float | None:
        return self.max_size

    def _finish(self, value: float) -> float:
        return clamp(value, self.min_size, self.max_size)

    def _random_kwargs(self) -> dict[str, Any]:
        low = self.min_size if self.min_size is not None else self.config.random_size_min
        high = self.max_size if self.max_size is not None else self.config.random_size_max
        return {"low": low, "high": high, "rng": self.rng}

    def required_context(self) -> tuple[str, ...]:
        if not isinstance(self.behavior, SizeValue):
            return ()
        return REQUIRED_RECTS.get(self.behavior, ())

    def _init_kwargs(self) -> dict[str, Any]:
        return {
            **super()._init_kwargs(),
            "dimension": self.dimension,
            "maintain_aspect_ratio": self.maintain_aspect_ratio,
        }

    def _copy_state(self, other: UnitCalculator) -> None:
        super()._copy_state(other)
        other.min_size = self.min_size
        other.max_size = self.max_size

    def describe(self) -> dict[str, Any]:
        return {
            **super().describe(),
            "dimension": self.dimension.value,
            "maintain_aspect_ratio": self.maintain_aspect_ratio,
            "min_size": self.min_size,
            "max_size": self.max_size,
        }

    def __repr__(self) -> str:
        return f"SizeUnitCalculator({self.name!r}, {self.basis.value}, {self.dimension.value})"
