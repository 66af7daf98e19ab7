"""Size, position and scale calculators."""

from layout_units.engine.calculators.base import UnitCalculator
from layout_units.engine.calculators.position import PositionUnitCalculator
from layout_units.engine.calculators.scale import ScaleUnitCalculator
from layout_units.engine.calculators.size import SizeUnitCalculator

__all__ = [
    "UnitCalculator",
    "PositionUnitCalculator",
    "ScaleUnitCalculator",
    "SizeUnitCalculator",
]
