"""UnitCalculatorFactory: builds calculators from arguments or flat configuration.

The factory is an ordinary object: create one per engine (or per test) and
pass it where it is needed. It keeps the calculators it built, keyed by id,
for lookup, bulk validation and stats.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Iterable, Mapping

import numpy as np
from pydantic import ValidationError

from layout_units.engine.behavior import Behavior, CustomBehavior, is_literal
from layout_units.engine.cache import CachedCalculator
from layout_units.engine.calculators import (
    PositionUnitCalculator,
    ScaleUnitCalculator,
    SizeUnitCalculator,
    UnitCalculator,
)
from layout_units.engine.composite import UnitGroup
from layout_units.engine.config import EngineConfig
from layout_units.engine.context import LayoutContext
from layout_units.engine.enums import (
    BEHAVIOR_ENUMS,
    Dimension,
    GroupRule,
    PositionUnit,
    ScaleUnit,
    SizeUnit,
    UnitType,
)
from layout_units.engine.errors import InvalidUnitConfigError
from layout_units.engine.registry import StrategyRegistry, get_registry
from layout_units.models.unit_config import (
    CONFIG_MODELS,
    UNIT_KEYS,
    PositionUnitConfig,
    ScaleUnitConfig,
    SizeUnitConfig,
)

logger = logging.getLogger(__name__)


class UnitCalculatorFactory:
    def __init__(
        self,
        registry: StrategyRegistry | None = None,
        rng: np.random.Generator | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.registry = registry
        self.rng = rng
        self.config = config or EngineConfig()
        self._calculators: dict[str, UnitCalculator | CachedCalculator | UnitGroup] = {}

    # -- behaviour coercion -----------------------------------------------

    def _strategy_registry(self) -> StrategyRegistry:
        return self.registry if self.registry is not None else get_registry()

    def coerce_behavior(self, unit_type: UnitType, value: Any) -> Behavior | None:
        """Turn a config value into a behaviour: number, named enum, or CustomBehavior.

        Strings name a behaviour of the unit kind, a standalone registered strategy
        (built-in behaviour strategies raise InvalidUnitConfigError), or a
        number. Anything else becomes a CustomBehavior that falls back at
        calculation time.
        """
        if value is None or is_literal(value) or isinstance(value, CustomBehavior):
            return value
        enum_cls = BEHAVIOR_ENUMS[unit_type]
        if isinstance(value, enum_cls):
            return value
        text = str(getattr(value, "value", value))
        try:
            return enum_cls(text)
        except ValueError:
            pass
        registry = self._strategy_registry()
        if registry.has(text):
            spec = registry.get(text)
            if not spec.standalone:
                named = sorted(getattr(b, "value", str(b)) for b in spec.behaviors)
                raise InvalidUnitConfigError(
                    f"Strategy {text!r} resolves named behaviours; use one of {named} instead"
                )
            return CustomBehavior(text)
        try:
            return float(text)
        except ValueError:
            logger.warning("Unknown %s behaviour %r; it will resolve to the fallback value", unit_type.value, text)
            return CustomBehavior(text)

    def _common(self) -> dict[str, Any]:
        return {"registry": self.registry, "rng": self.rng, "config": self.config}

    def _track(self, calculator: UnitCalculator) -> UnitCalculator | CachedCalculator:
        built: UnitCalculator | CachedCalculator = calculator
        if self.config.cache_results:
            built = CachedCalculator(calculator, self.config.cache_size)
        if calculator.id in self._calculators:
            logger.debug("Replacing calculator %s", calculator.id)
        self._calculators[calculator.id] = built
        logger.debug("Created %r", calculator)
        return built

    # -- direct construction ----------------------------------------------

    def create_size_unit(
        self,
        id: str,
        name: str,
        basis: SizeUnit | str,
        dimension: Dimension | str = Dimension.WIDTH,
        behavior: Any = None,
        maintain_aspect_ratio: bool = False,
    ) -> SizeUnitCalculator:
        calc = SizeUnitCalculator(
            id,
            name,
            SizeUnit(basis),
            Dimension(dimension),
            self.coerce_behavior(UnitType.SIZE, behavior),
            maintain_aspect_ratio=maintain_aspect_ratio,
            **self._common(),
        )
        return self._track(calc)

    def create_position_unit(
        self,
        id: str,
        name: str,
        basis: PositionUnit | str,
        axis: Dimension | str = Dimension.X,
        behavior: Any = None,
    ) -> PositionUnitCalculator:
        calc = PositionUnitCalculator(
            id,
            name,
            PositionUnit(basis),
            Dimension(axis),
            self.coerce_behavior(UnitType.POSITION, behavior),
            **self._common(),
        )
        return self._track(calc)

    def create_scale_unit(
        self,
        id: str,
        name: str,
        basis: ScaleUnit | str,
        behavior: Any = None,
        maintain_aspect_ratio: bool = False,
    ) -> ScaleUnitCalculator:
        calc = ScaleUnitCalculator(
            id,
            name,
            ScaleUnit(basis),
            self.coerce_behavior(UnitType.SCALE, behavior),
            maintain_aspect_ratio=maintain_aspect_ratio,
            **self._common(),
        )
        return self._track(calc)

    def create_unit(self, unit_type: UnitType | str, id: str, name: str, config: Mapping[str, Any]):
        """Build a calculator of an explicit kind from the remaining config keys."""
        unit_type = UnitType(unit_type)
        return self.create_from_config({**config, "id": id, "name": name, "unitType": unit_type.value})

    # -- flat configuration -----------------------------------------------

    @staticmethod
    def _parse(model: type, data: Mapping[str, Any]):
        try:
            return model.model_validate(dict(data))
        except ValidationError as e:
            raise InvalidUnitConfigError(f"Invalid {model.__name__}: {e}") from e

    def _apply_common(self, calc: UnitCalculator, cfg) -> None:
        if cfg.offset:
            calc.set_offset(cfg.offset)
        if cfg.alignment is not None:
            calc.set_alignment(cfg.alignment)

    def create_size_unit_from_config(self, data: Mapping[str, Any]):
        cfg: SizeUnitConfig = self._parse(SizeUnitConfig, data)
        calc = SizeUnitCalculator(
            cfg.id,
            cfg.name,
            cfg.size_unit,
            cfg.dimension,
            self.coerce_behavior(UnitType.SIZE, cfg.base_value),
            maintain_aspect_ratio=cfg.maintain_aspect_ratio,
            **self._common(),
        )
        calc.set_size_constraints(cfg.min_size, cfg.max_size)
        self._apply_common(calc, cfg)
        return self._track(calc)

    def create_position_unit_from_config(self, data: Mapping[str, Any]):
        cfg: PositionUnitConfig = self._parse(PositionUnitConfig, data)
        calc = PositionUnitCalculator(
            cfg.id,
            cfg.name,
            cfg.position_unit,
            cfg.axis,
            self.coerce_behavior(UnitType.POSITION, cfg.base_value),
            **self._common(),
        )
        self._apply_common(calc, cfg)
        return self._track(calc)

    def create_scale_unit_from_config(self, data: Mapping[str, Any]):
        cfg: ScaleUnitConfig = self._parse(ScaleUnitConfig, data)
        calc = ScaleUnitCalculator(
            cfg.id,
            cfg.name,
            cfg.scale_unit,
            self.coerce_behavior(UnitType.SCALE, cfg.base_value),
            maintain_aspect_ratio=cfg.maintain_aspect_ratio,
            **self._common(),
        )
        calc.set_scale_constraints(cfg.min_scale, cfg.max_scale)
        calc.set_uniform_scaling(cfg.uniform_scaling)
        self._apply_common(calc, cfg)
        return self._track(calc)

    def infer_unit_type(self, data: Mapping[str, Any]) -> UnitType:
        explicit = data.get("unitType", data.get("unit_type"))
        if explicit is not None:
            try:
                return UnitType(explicit)
            except ValueError:
                raise InvalidUnitConfigError(f"Unknown unit type: {explicit!r}") from None
        for unit_type, keys in UNIT_KEYS.items():
            if any(k in data for k in keys):
                return unit_type
        raise InvalidUnitConfigError(
            f"Config {data.get('id', '?')!r} has no sizeUnit, positionUnit or scaleUnit"
        )

    def create_from_config(self, data: Mapping[str, Any]):
        unit_type = self.infer_unit_type(data)
        builders = {
            UnitType.SIZE: self.create_size_unit_from_config,
            UnitType.POSITION: self.create_position_unit_from_config,
            UnitType.SCALE: self.create_scale_unit_from_config,
        }
        logger.debug("Building %s unit from %s", unit_type.value, CONFIG_MODELS[unit_type].__name__)
        return builders[unit_type](data)

    def create_group(
        self,
        id: str,
        name: str,
        rule: GroupRule | str = GroupRule.SUM,
        children: Iterable[Any] = (),
        unit_type: UnitType | str = UnitType.SIZE,
        base_value: float = 0.0,
    ) -> UnitGroup:
        """Group existing calculators (or groups) under one combining rule; tracked like any unit."""
        group = UnitGroup(id, name, unit_type, base_value, rule)
        for child in children:
            group.add_child(child)
        if id in self._calculators:
            logger.debug("Replacing calculator %s", id)
        self._calculators[id] = group
        logger.debug("Created %r", group)
        return group

    # -- bookkeeping ------------------------------------------------------

    def get_calculator(self, id: str) -> UnitCalculator | CachedCalculator | UnitGroup | None:
        return self._calculators.get(id)

    def all_calculators(self) -> list[UnitCalculator | CachedCalculator | UnitGroup]:
        return list(self._calculators.values())

    def calculators_by_type(self, unit_type: UnitType | str) -> list[UnitCalculator | CachedCalculator | UnitGroup]:
        unit_type = UnitType(unit_type)
        return [c for c in self._calculators.values() if c.unit_type is unit_type]

    def remove_calculator(self, id: str) -> bool:
        return self._calculators.pop(id, None) is not None

    def clear_calculators(self) -> None:
        self._calculators.clear()

    def validate_all(self, context: LayoutContext) -> tuple[list[str], list[str]]:
        """(valid ids, invalid ids) for every tracked calculator against one context."""
        valid: list[str] = []
        invalid: list[str] = []
        for calc_id, calc in self._calculators.items():
            (valid if calc.validate(context) else invalid).append(calc_id)
        if invalid:
            logger.info("%d of %d calculators lack context: %s", len(invalid), len(self._calculators), invalid)
        return valid, invalid

    def calculator_stats(self) -> dict[str, Any]:
        by_type = Counter(c.unit_type.value for c in self._calculators.values())
        responsive = sum(1 for c in self._calculators.values() if c.is_responsive())
        return {
            "total": len(self._calculators),
            "by_type": dict(by_type),
            "responsive": responsive,
            "static": len(self._calculators) - responsive,
        }

    # -- batch ------------------------------------------------------------

    def calculate_batch(
        self,
        calculators: Iterable[UnitCalculator | CachedCalculator | UnitGroup],
        context: LayoutContext,
    ) -> list[float]:
        """One value per calculator; a failing calculator contributes its fallback."""
        results: list[float] = []
        for calc in calculators:
            try:
                results.append(calc.calculate(context))
            except Exception:
                logger.warning("Batch calculation failed for %s, using fallback", calc.id, exc_info=True)
                results.append(calc.fallback_value)
        return results
