"""Descriptor behaviours: a closed union of literal, named and custom.

    NumericLiteral  -> 42, 1.5          taken at face value, context ignored
    NamedBehavior   -> SizeValue.FILL   resolved by the calculator's dispatch table
    CustomBehavior  -> CustomBehavior("my-strategy")  resolved via the strategy registry
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from layout_units.engine.enums import PositionValue, ScaleValue, SizeValue


@dataclass(frozen=True)
class CustomBehavior:
    """Handle to a strategy registered under ``strategy_id``."""

    strategy_id: str

    def __str__(self) -> str:
        return self.strategy_id


NamedBehavior = Union[PositionValue, SizeValue, ScaleValue]
Behavior = Union[int, float, NamedBehavior, CustomBehavior]


class BehaviorKind(enum.Enum):
    LITERAL = "literal"
    NAMED = "named"
    CUSTOM = "custom"


def is_literal(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def classify_behavior(value: object) -> BehaviorKind:
    if is_literal(value):
        return BehaviorKind.LITERAL
    if isinstance(value, (PositionValue, SizeValue, ScaleValue)):
        return BehaviorKind.NAMED
    if isinstance(value, CustomBehavior):
        return BehaviorKind.CUSTOM
    raise TypeError(f"Unsupported behaviour {value!r} ({type(value).__name__})")
