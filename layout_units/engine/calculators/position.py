"""PositionUnitCalculator: pixels along X, Y or both."""

from __future__ import annotations

import logging
from typing import Any

from layout_units.engine.behavior import Behavior, is_literal
from layout_units.engine.calculators.base import UnitCalculator
from layout_units.engine.constants import AXIS_MISMATCH_X, AXIS_MISMATCH_Y, FALLBACK_POSITION
from layout_units.engine.context import LayoutContext, stage_extent
from layout_units.engine.enums import POSITION_AXES, AxisUnit, Dimension, PositionUnit, PositionValue, UnitType
from layout_units.engine.errors import AxisMismatchError
from layout_units.engine.strategies.position import POSITION_DISPATCH, REQUIRED_RECT

logger = logging.getLogger(__name__)


def default_position_behavior(basis: PositionUnit) -> Behavior:
    """Behaviour implied by a basis when none is given: pixel -> 0, otherwise the same-named value."""
    if basis is PositionUnit.PIXEL:
        return 0
    return PositionValue(basis.value)


class PositionUnitCalculator(UnitCalculator):
    unit_type = UnitType.POSITION
    fallback_value = FALLBACK_POSITION
    dispatch = POSITION_DISPATCH
    random_behavior = PositionValue.RANDOM

    def __init__(
        self,
        id: str,
        name: str,
        basis: PositionUnit,
        axis: Dimension,
        behavior: Behavior | None = None,
        **kwargs: Any,
    ) -> None:
        basis = PositionUnit(basis)
        axis = Dimension(axis)
        if axis not in POSITION_AXES:
            raise ValueError(f"Position axis must be one of x, y, xy, got {axis!r}")
        if behavior is None:
            behavior = default_position_behavior(basis)
        super().__init__(id, name, basis, behavior, **kwargs)
        self.axis = axis

    @property
    def dimension(self) -> Dimension:
        return self.axis

    def calculate(self, context: LayoutContext) -> float:
        # XY descriptors resolve along X when no axis is requested
        axis = AxisUnit.Y if self.axis is Dimension.Y else AxisUnit.X
        return self._resolve(axis, context)

    def calculate_x(self, context: LayoutContext) -> float:
        if self.axis is Dimension.Y:
            raise AxisMismatchError(AXIS_MISMATCH_X)
        return self._resolve(AxisUnit.X, context)

    def calculate_y(self, context: LayoutContext) -> float:
        if self.axis is Dimension.X:
            raise AxisMismatchError(AXIS_MISMATCH_Y)
        return self._resolve(AxisUnit.Y, context)

    def calculate_both(self, context: LayoutContext) -> dict[str, float]:
        if self.axis is Dimension.X:
            return {"x": self.calculate_x(context), "y": 0.0}
        if self.axis is Dimension.Y:
            return {"x": 0.0, "y": self.calculate_y(context)}
        return {"x": self.calculate_x(context), "y": self.calculate_y(context)}

    def is_within_bounds(self, position: float, context: LayoutContext) -> bool:
        if self.axis is Dimension.XY:
            return True
        axis = AxisUnit.X if self.axis is Dimension.X else AxisUnit.Y
        return 0 <= position <= stage_extent(context, axis)

    def get_position_range(self, context: LayoutContext) -> dict[str, float]:
        if self.axis is Dimension.XY:
            return {"min": 0.0, "max": 0.0}
        axis = AxisUnit.X if self.axis is Dimension.X else AxisUnit.Y
        return {"min": 0.0, "max": stage_extent(context, axis)}

    def required_context(self) -> tuple[str, ...]:
        if is_literal(self.behavior) or not isinstance(self.behavior, PositionValue):
            return ()
        rect = REQUIRED_RECT.get(self.behavior.value)
        return (rect,) if rect else ()

    def _init_kwargs(self) -> dict[str, Any]:
        return {**super()._init_kwargs(), "axis": self.axis}

    def describe(self) -> dict[str, Any]:
        return {**super().describe(), "axis": self.axis.value}

    def __repr__(self) -> str:
        return f"PositionUnitCalculator({self.name!r}, {self.basis.value}, {self.axis.value})"
