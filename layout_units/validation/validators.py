"""Chain-of-responsibility validators for resolved values and unit descriptors.

Each validator returns a ValidationOutcome instead of keeping a "last error"
field, so one instance can be shared between callers.

    chain = RangeValidator("size", 0, 500)
    chain.set_next(TypeValidator("types", allowed_types={UnitType.SIZE}))
    outcome = chain.validate(calculator)
    if not outcome:
        log(outcome.message)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from layout_units.engine.behavior import CustomBehavior, is_literal
from layout_units.engine.constants import FALLBACK_POSITION, FALLBACK_SCALE, FALLBACK_SIZE
from layout_units.engine.enums import (
    Dimension,
    PositionUnit,
    PositionValue,
    ScaleUnit,
    ScaleValue,
    SizeUnit,
    SizeValue,
    UnitType,
)
from layout_units.utils.math_helpers import format_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationOutcome:
    ok: bool
    message: str | None = None
    validator: str | None = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def passed(cls, validator: str | None = None) -> ValidationOutcome:
        return cls(True, None, validator)

    @classmethod
    def failed(cls, message: str, validator: str | None = None) -> ValidationOutcome:
        return cls(False, message, validator)


# -- duck-typed input helpers ---------------------------------------------

def _field(obj: Any, *names: str) -> Any:
    """First present attribute / key among names, else None."""
    for name in names:
        if isinstance(obj, Mapping):
            if name in obj:
                return obj[name]
        elif hasattr(obj, name):
            return getattr(obj, name)
    return None


def is_unit_shaped(obj: Any) -> bool:
    """Mapping or object carrying both ``unit`` and ``value``."""
    if isinstance(obj, Mapping):
        return "unit" in obj and "value" in obj
    return hasattr(obj, "unit") and hasattr(obj, "value")


_KIND_FALLBACKS = {
    UnitType.SIZE: FALLBACK_SIZE,
    UnitType.POSITION: FALLBACK_POSITION,
    UnitType.SCALE: FALLBACK_SCALE,
}


def unit_type_of(obj: Any) -> UnitType | None:
    """Unit kind from an explicit unit_type, or from the class of its unit / value enums."""
    explicit = _field(obj, "unit_type", "unitType")
    if explicit is not None:
        try:
            return UnitType(explicit)
        except ValueError:
            return None
    for candidate in (_field(obj, "unit"), _field(obj, "value")):
        if isinstance(candidate, (SizeUnit, SizeValue)):
            return UnitType.SIZE
        if isinstance(candidate, (PositionUnit, PositionValue)):
            return UnitType.POSITION
        if isinstance(candidate, (ScaleUnit, ScaleValue)):
            return UnitType.SCALE
    return None


def numeric_value(obj: Any) -> float | None:
    """Number behind a raw value, ``{"value": n}`` wrapper or descriptor.

    Named and custom behaviours are not numbers; they map to the fallback
    constant of the unit kind (size 100, position 0, scale 1.0).
    """
    if is_literal(obj):
        return float(obj)
    value = _field(obj, "value")
    if value is None:
        return None
    if is_literal(value):
        return float(value)
    if isinstance(value, (SizeValue, PositionValue, ScaleValue, CustomBehavior, str)):
        kind = unit_type_of(obj)
        return _KIND_FALLBACKS.get(kind, FALLBACK_SIZE)
    return None


# -- validators ------------------------------------------------------------

class UnitValidator:
    """Base link in a validation chain.

    A validator that cannot handle an input passes it down the chain; a
    passing validator does too. The first failure stops the chain.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.next: UnitValidator | None = None

    def set_next(self, validator: UnitValidator) -> UnitValidator:
        self.next = validator
        return validator

    def can_handle(self, input: Any) -> bool:
        raise NotImplementedError

    def check(self, input: Any, context: Any = None) -> ValidationOutcome:
        raise NotImplementedError

    def validate(self, input: Any, context: Any = None) -> ValidationOutcome:
        if self.can_handle(input):
            outcome = self.check(input, context)
            if not outcome:
                logger.debug("%s rejected %r: %s", self.name, input, outcome.message)
                return outcome
        if self.next is not None:
            return self.next.validate(input, context)
        return ValidationOutcome.passed(self.name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class RangeValidator(UnitValidator):
    """Numeric bounds check; brackets in the message show inclusivity."""

    def __init__(
        self,
        name: str,
        min: float = -math.inf,
        max: float = math.inf,
        inclusive: bool = True,
    ) -> None:
        super().__init__(name)
        self.min = min
        self.max = max
        self.inclusive = inclusive

    def can_handle(self, input: Any) -> bool:
        if is_literal(input):
            return True
        if isinstance(input, Mapping) and "value" in input and is_literal(input["value"]):
            return True
        return is_unit_shaped(input)

    def in_range(self, value: float) -> bool:
        if self.inclusive:
            return self.min <= value <= self.max
        return self.min < value < self.max

    def range_text(self) -> str:
        lo, hi = ("[", "]") if self.inclusive else ("(", ")")
        return f"{lo}{format_number(self.min)}, {format_number(self.max)}{hi}"

    def check(self, input: Any, context: Any = None) -> ValidationOutcome:
        value = numeric_value(input)
        if value is None:
            return ValidationOutcome.failed(f"No numeric value in {input!r}", self.name)
        if self.in_range(value):
            return ValidationOutcome.passed(self.name)
        return ValidationOutcome.failed(
            f"Value {format_number(value)} is outside the allowed range {self.range_text()}",
            self.name,
        )

    def configuration(self) -> dict[str, Any]:
        return {"name": self.name, "min": self.min, "max": self.max, "inclusive": self.inclusive}

    def update_configuration(
        self,
        min: float | None = None,
        max: float | None = None,
        inclusive: bool | None = None,
    ) -> None:
        if min is not None:
            self.min = min
        if max is not None:
            self.max = max
        if inclusive is not None:
            self.inclusive = inclusive


class TypeValidator(UnitValidator):
    """Allow-lists for unit kind and dimension/axis.

    Strict mode also rejects inputs that are neither numbers, strings, nor
    carry a unit kind or a numeric value.
    """

    def __init__(
        self,
        name: str,
        allowed_types: Iterable[UnitType | str] | None = None,
        allowed_dimensions: Iterable[Dimension | str] | None = None,
        strict: bool = False,
    ) -> None:
        super().__init__(name)
        self.allowed_types = frozenset(UnitType(t) for t in allowed_types) if allowed_types else frozenset()
        self.allowed_dimensions = (
            frozenset(Dimension(d) for d in allowed_dimensions) if allowed_dimensions else frozenset()
        )
        self.strict = strict

    def can_handle(self, input: Any) -> bool:
        return input is not None

    def check(self, input: Any, context: Any = None) -> ValidationOutcome:
        if is_literal(input) or isinstance(input, str):
            return ValidationOutcome.passed(self.name)

        unit_type = unit_type_of(input)
        if unit_type is not None and self.allowed_types and unit_type not in self.allowed_types:
            return ValidationOutcome.failed(f"Unit type {unit_type.value} is not allowed", self.name)

        dimension = _field(input, "dimension", "axis")
        if dimension is not None and self.allowed_dimensions:
            try:
                dimension = Dimension(dimension)
            except ValueError:
                return ValidationOutcome.failed(f"Unknown dimension {dimension!r}", self.name)
            if dimension not in self.allowed_dimensions:
                return ValidationOutcome.failed(f"Dimension {dimension.value} is not allowed", self.name)

        if self.strict and unit_type is None and numeric_value(input) is None:
            return ValidationOutcome.failed(f"Input {input!r} has no unit type or numeric value", self.name)
        return ValidationOutcome.passed(self.name)

    def configuration(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "allowed_types": sorted(t.value for t in self.allowed_types),
            "allowed_dimensions": sorted(d.value for d in self.allowed_dimensions),
            "strict": self.strict,
        }
