"""Tests for UnitCalculatorFactory."""

import pytest

from layout_units.engine.behavior import CustomBehavior
from layout_units.engine.cache import CachedCalculator
from layout_units.engine.calculators import PositionUnitCalculator, ScaleUnitCalculator, SizeUnitCalculator
from layout_units.engine.config import EngineConfig
from layout_units.engine.context import Area, LayoutContext
from layout_units.engine.enums import Dimension, PositionUnit, PositionValue, ScaleValue, SizeUnit, SizeValue, UnitType
from layout_units.engine.errors import InvalidUnitConfigError
from layout_units.engine.factory import UnitCalculatorFactory
from layout_units.engine.registry import get_registry, strategy
from tests.conftest import FULL_CONTEXT, SCENE_ONLY


def test_create_position_unit_from_strings(factory):
    calc = factory.create_position_unit("title-x", "Title X", "pixel", "x", "center")
    assert isinstance(calc, PositionUnitCalculator)
    assert calc.behavior is PositionValue.CENTER
    assert calc.calculate(SCENE_ONLY) == 500


def test_create_size_and_scale_units(factory):
    size = factory.create_size_unit("w", "Width", SizeUnit.FILL, Dimension.WIDTH)
    scale = factory.create_scale_unit("s", "Scale", "factor", 1.5)
    assert isinstance(size, SizeUnitCalculator)
    assert size.behavior is SizeValue.FILL
    assert isinstance(scale, ScaleUnitCalculator)
    assert scale.calculate(FULL_CONTEXT) == 1.5


def test_create_from_config_camel_case(factory):
    calc = factory.create_from_config({
        "id": "panel-w",
        "name": "Panel width",
        "sizeUnit": "parent-width",
        "dimension": "width",
        "baseValue": "parent-width",
        "maintainAspectRatio": True,
        "minSize": 10,
        "maxSize": 150,
        "offset": 5,
    })
    assert isinstance(calc, SizeUnitCalculator)
    assert calc.maintain_aspect_ratio
    assert calc.get_offset() == 5
    assert calc.calculate(FULL_CONTEXT) == 150  # 200 + 5 clamped


def test_create_from_config_snake_case(factory):
    calc = factory.create_from_config({
        "id": "title-y",
        "position_unit": "parent-top",
        "axis": "y",
        "alignment": "top",
    })
    assert isinstance(calc, PositionUnitCalculator)
    assert calc.name == "title-y"
    assert calc.behavior is PositionValue.PARENT_TOP
    assert calc.get_alignment() == "top"
    assert calc.calculate(FULL_CONTEXT) == 50


def test_create_scale_from_config(factory):
    calc = factory.create_from_config({
        "id": "logo",
        "scaleUnit": "stretch",
        "minScale": 0.5,
        "maxScale": 4,
        "uniformScaling": True,
    })
    assert calc.behavior is ScaleValue.STRETCH
    assert calc.is_uniform_scaling()
    assert calc.calculate(FULL_CONTEXT) == 4


def test_numeric_string_base_value_is_literal(factory):
    calc = factory.create_from_config({"id": "gap", "sizeUnit": "pixel", "baseValue": "25"})
    assert calc.behavior == 25.0
    assert not calc.is_responsive()


def test_config_without_unit_key_rejected(factory):
    with pytest.raises(InvalidUnitConfigError, match="no sizeUnit, positionUnit or scaleUnit"):
        factory.create_from_config({"id": "orphan", "baseValue": 10})


@pytest.mark.parametrize(
    "config",
    [
        {"id": "bad-dim", "sizeUnit": "pixel", "dimension": "x"},
        {"id": "bad-axis", "positionUnit": "pixel", "axis": "both"},
        {"id": "bad-range", "sizeUnit": "pixel", "minSize": 10, "maxSize": 1},
        {"id": "bad-unit", "sizeUnit": "furlongs"},
        {"sizeUnit": "pixel"},
    ],
)
def test_invalid_configs_raise(factory, config):
    with pytest.raises(InvalidUnitConfigError):
        factory.create_from_config(config)


def test_explicit_unit_type(factory):
    calc = factory.create_unit(UnitType.POSITION, "p", "P", {"positionUnit": "center", "axis": "y"})
    assert isinstance(calc, PositionUnitCalculator)
    assert calc.calculate(SCENE_ONLY) == 250
    with pytest.raises(InvalidUnitConfigError):
        factory.create_from_config({"id": "x", "unitType": "colour", "sizeUnit": "pixel"})


def test_unknown_behavior_string_resolves_to_fallback(factory):
    calc = factory.create_size_unit("w", "W", "pixel", "width", "wobbly")
    assert calc.behavior == CustomBehavior("wobbly")
    assert calc.calculate(FULL_CONTEXT) == 100


def test_registered_strategy_name_becomes_custom_behavior():
    reg = get_registry().copy()

    @strategy(id="third-of-scene", kind=UnitType.SIZE, registry=reg, requires=("scene",))
    def third_of_scene(behavior, basis, axis, ctx):
        return ctx.scene.width / 3 if ctx.scene else 100

    factory = UnitCalculatorFactory(registry=reg)
    calc = factory.create_size_unit("w", "W", "pixel", "width", "third-of-scene")
    assert calc.behavior == CustomBehavior("third-of-scene")
    assert calc.calculate(LayoutContext(scene=Area(900, 100))) == 300
    assert calc.validate(SCENE_ONLY)
    assert not calc.validate(LayoutContext())
    assert not get_registry().has("third-of-scene")


def test_failing_custom_strategy_falls_back():
    reg = get_registry().copy()

    @strategy(id="explodes", kind=UnitType.POSITION, registry=reg)
    def explodes(behavior, basis, axis, ctx):
        raise RuntimeError("boom")

    calc = UnitCalculatorFactory(registry=reg).create_position_unit("p", "P", "pixel", "x", "explodes")
    calc.set_offset(4)
    assert calc.calculate(FULL_CONTEXT) == 4


def test_bookkeeping(factory):
    factory.create_size_unit("w", "W", "fill", "width")
    factory.create_position_unit("x", "X", "parent-left", "x")
    factory.create_scale_unit("s", "S", "factor", 2)

    assert factory.get_calculator("w").id == "w"
    assert factory.get_calculator("missing") is None
    assert len(factory.all_calculators()) == 3
    assert [c.id for c in factory.calculators_by_type("position")] == ["x"]

    valid, invalid = factory.validate_all(SCENE_ONLY)
    assert invalid == ["x"]
    assert sorted(valid) == ["s", "w"]

    assert factory.calculator_stats() == {
        "total": 3,
        "by_type": {"size": 1, "position": 1, "scale": 1},
        "responsive": 2,
        "static": 1,
    }

    assert factory.remove_calculator("w")
    assert not factory.remove_calculator("w")
    factory.clear_calculators()
    assert factory.all_calculators() == []


class _Broken:
    id = "broken"
    fallback_value = 42.0

    def calculate(self, context):
        raise RuntimeError("host handed over garbage")


def test_calculate_batch_uses_fallback_for_failures(factory):
    good = factory.create_size_unit("w", "W", "fill", "width")
    results = factory.calculate_batch([good, _Broken()], SCENE_ONLY)
    assert results == [1000, 42.0]


def test_factory_can_wrap_in_cache():
    factory = UnitCalculatorFactory(config=EngineConfig(cache_results=True, cache_size=8))
    calc = factory.create_size_unit("w", "W", "fill", "width")
    assert isinstance(calc, CachedCalculator)
    assert calc.max_entries == 8
    calc.calculate(SCENE_ONLY)
    calc.calculate(SCENE_ONLY)
    assert calc.cache_stats()["hits"] == 1
    assert factory.calculator_stats()["total"] == 1


def test_factories_are_independent():
    a = UnitCalculatorFactory()
    b = UnitCalculatorFactory()
    a.create_size_unit("w", "W", "fill", "width")
    assert b.get_calculator("w") is None


@pytest.mark.parametrize(
    "kind, strategy_id",
    [
        ("position", "scene-position"),
        ("position", "parent-position"),
        ("position", "stage-edge-position"),
        ("size", "parent-size"),
        ("size", "literal-size"),
    ],
)
def test_builtin_strategy_ids_are_rejected_as_behaviours(factory, kind, strategy_id):
    with pytest.raises(InvalidUnitConfigError, match="resolves named behaviours"):
        factory.coerce_behavior(UnitType(kind), strategy_id)


def test_builtin_strategy_id_error_names_the_behaviours(factory):
    with pytest.raises(InvalidUnitConfigError, match="scene-center-x"):
        factory.create_position_unit("p", "P", "pixel", "x", "scene-position")


def test_builtin_strategy_handle_resolves_to_fallback():
    calc = PositionUnitCalculator(
        "p", "P", PositionUnit.PIXEL, Dimension.X, CustomBehavior("scene-position")
    )
    calc.set_offset(3)
    assert calc.calculate(SCENE_ONLY) == 3
