"""Unit calculation engine."""

from layout_units.engine.registry import strategy, StrategyRegistry, StrategySpec, get_registry
from layout_units.engine.context import Area, Breakpoint, LayoutContext, Rect
from layout_units.engine.behavior import CustomBehavior
import layout_units.engine.strategies  # noqa: F401  registers the built-in strategies
from layout_units.engine.calculators import (
    PositionUnitCalculator,
    ScaleUnitCalculator,
    SizeUnitCalculator,
    UnitCalculator,
)
from layout_units.engine.cache import CachedCalculator
from layout_units.engine.composite import UnitGroup
from layout_units.engine.factory import UnitCalculatorFactory

__all__ = [
    "strategy",
    "StrategyRegistry",
    "StrategySpec",
    "get_registry",
    "Area",
    "Breakpoint",
    "LayoutContext",
    "Rect",
    "CustomBehavior",
    "PositionUnitCalculator",
    "ScaleUnitCalculator",
    "SizeUnitCalculator",
    "UnitCalculator",
    "CachedCalculator",
    "UnitGroup",
    "UnitCalculatorFactory",
]
