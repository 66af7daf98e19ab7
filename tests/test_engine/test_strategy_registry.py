"""Tests for the strategy registry and the built-in strategies."""

import pytest

from layout_units.engine.behavior import CustomBehavior
from layout_units.engine.context import Area, LayoutContext, Rect
from layout_units.engine.enums import AxisUnit, Dimension, PositionUnit, PositionValue, SizeValue, UnitType
from layout_units.engine.errors import UnknownStrategyError
from layout_units.engine.registry import StrategyRegistry, StrategySpec, get_registry, strategy


def _const(value):
    def fn(behavior, basis, axis, ctx):
        return value
    return fn


def test_register_and_get():
    reg = StrategyRegistry()
    spec = StrategySpec(id="s1", kind=UnitType.SIZE, fn=_const(1), behaviors=frozenset({SizeValue.FILL}))
    assert reg.register(spec)
    assert reg.get("s1") is spec
    assert reg.has("s1")
    assert reg.count == 1


def test_duplicate_registration_is_ignored():
    reg = StrategyRegistry()
    first = StrategySpec(id="s1", kind=UnitType.SIZE, fn=_const(1))
    second = StrategySpec(id="s1", kind=UnitType.SIZE, fn=_const(2))
    assert reg.register(first)
    assert not reg.register(second)
    assert reg.get("s1") is first


def test_get_unknown_raises():
    reg = StrategyRegistry()
    with pytest.raises(UnknownStrategyError, match="Unknown strategy: nope"):
        reg.get("nope")
    with pytest.raises(KeyError):
        reg.get("nope")


def test_unregister():
    reg = StrategyRegistry([StrategySpec(id="s1", kind=UnitType.SIZE, fn=_const(1))])
    assert reg.unregister("s1")
    assert not reg.unregister("s1")
    assert reg.count == 0


def test_strategies_sorted_by_priority():
    reg = StrategyRegistry()
    fill = frozenset({SizeValue.FILL})
    reg.register(StrategySpec(id="late", kind=UnitType.SIZE, fn=_const(3), behaviors=fill, priority=50))
    reg.register(StrategySpec(id="early", kind=UnitType.SIZE, fn=_const(1), behaviors=fill, priority=5))
    reg.register(StrategySpec(id="other", kind=UnitType.SIZE, fn=_const(2), behaviors=frozenset({SizeValue.AUTO})))
    matches = reg.strategies_for(UnitType.SIZE, SizeValue.FILL, None, Dimension.WIDTH)
    assert [s.id for s in matches] == ["early", "late"]
    assert reg.best_strategy(UnitType.SIZE, SizeValue.FILL, None, Dimension.WIDTH).id == "early"
    assert reg.best_strategy(UnitType.SIZE, SizeValue.RANDOM, None, Dimension.WIDTH) is None


def test_basis_and_axis_filters():
    spec = StrategySpec(
        id="s",
        kind=UnitType.POSITION,
        fn=_const(0),
        behaviors=frozenset({PositionValue.CENTER}),
        bases=frozenset({PositionUnit.PIXEL}),
        axes=frozenset({AxisUnit.X}),
    )
    assert spec.can_handle(PositionValue.CENTER, PositionUnit.PIXEL, AxisUnit.X)
    assert not spec.can_handle(PositionValue.CENTER, PositionUnit.CENTER, AxisUnit.X)
    assert not spec.can_handle(PositionValue.CENTER, PositionUnit.PIXEL, AxisUnit.Y)
    assert not spec.can_handle(5, PositionUnit.PIXEL, AxisUnit.X)


def test_custom_behavior_matches_by_id():
    spec = StrategySpec(id="mine", kind=UnitType.SIZE, fn=_const(0))
    assert spec.can_handle(CustomBehavior("mine"), None, None)
    assert not spec.can_handle(CustomBehavior("theirs"), None, None)


def test_validate_context():
    spec = StrategySpec(id="s", kind=UnitType.SIZE, fn=_const(0), requires=("parent",), requires_any=("scene", "viewport"))
    assert not spec.validate_context(LayoutContext(parent=Rect(1, 1)))
    assert not spec.validate_context(LayoutContext(scene=Area(1, 1)))
    assert spec.validate_context(LayoutContext(parent=Rect(1, 1), viewport=Area(1, 1)))


def test_statistics_and_by_kind():
    reg = StrategyRegistry()
    reg.register(StrategySpec(id="a", kind=UnitType.SIZE, fn=_const(0), behaviors=frozenset({SizeValue.FILL})))
    reg.register(StrategySpec(id="b", kind=UnitType.POSITION, fn=_const(0), behaviors=frozenset({PositionValue.LEFT})))
    stats = reg.statistics()
    assert stats["total_strategies"] == 2
    assert stats["by_kind"] == {"size": 1, "position": 1}
    assert stats["by_behavior"] == {"fill": 1, "left": 1}
    assert [s.id for s in reg.by_kind(UnitType.SIZE)] == ["a"]


def test_copy_is_independent():
    reg = StrategyRegistry([StrategySpec(id="a", kind=UnitType.SIZE, fn=_const(0))])
    dup = reg.copy()
    dup.clear()
    assert reg.count == 1
    assert dup.count == 0


def test_decorator_registers_into_given_registry():
    reg = StrategyRegistry()

    @strategy(id="half-scene", kind=UnitType.SIZE, registry=reg, requires=("scene",))
    def half_scene(behavior, basis, axis, ctx):
        return ctx.scene.width / 2

    spec = reg.get("half-scene")
    assert spec.fn is half_scene
    assert spec.calculate(CustomBehavior("half-scene"), None, None, LayoutContext(scene=Area(300, 10))) == 150


def test_builtins_registered():
    reg = get_registry()
    for strategy_id in ("fill-size", "content-size", "center-position", "parent-position",
                        "factor-scale", "breakpoint-scale", "reference-point-position"):
        assert reg.has(strategy_id)
    assert reg.statistics()["by_kind"].keys() == {"size", "position", "scale"}


def test_reference_point_alternative_ranks_last():
    matches = get_registry().strategies_for(UnitType.POSITION, PositionValue.CENTER, PositionUnit.PARENT_RIGHT, AxisUnit.X)
    assert [s.id for s in matches] == ["center-position", "reference-point-position"]


def test_reference_point_alternative_semantics():
    alt = get_registry().get("reference-point-position")
    ctx = LayoutContext(parent=Rect(width=200, height=100, x=100, y=50), content=Area(50, 80), scene=Area(1000, 500))
    assert alt.calculate(PositionValue.LEFT, PositionUnit.PARENT_RIGHT, AxisUnit.X, ctx) == 300
    assert alt.calculate(PositionValue.CENTER, PositionUnit.CENTER, AxisUnit.Y, ctx) == 250
    assert alt.calculate(PositionValue.STATIC, PositionUnit.PARENT_RIGHT, AxisUnit.X, ctx) == 0
    assert alt.calculate(PositionValue.CONTENT_RIGHT, PositionUnit.PARENT_LEFT, AxisUnit.X, ctx) == 50
    assert 0 <= alt.calculate(PositionValue.RANDOM, PositionUnit.PIXEL, AxisUnit.X, ctx) < 1000


def test_reference_point_without_parent_uses_stage():
    alt = get_registry().get("reference-point-position")
    ctx = LayoutContext(scene=Area(1000, 500))
    assert alt.calculate(PositionValue.CENTER, PositionUnit.PARENT_CENTER_X, AxisUnit.X, ctx) == 500


def test_standalone_strategies():
    assert StrategySpec(id="mine", kind=UnitType.SIZE, fn=_const(0)).standalone
    assert not StrategySpec(id="lit", kind=UnitType.SIZE, fn=_const(0), literals=True).standalone
    assert not get_registry().get("scene-position").standalone


def test_empty_behaviours_match_no_named_behaviour():
    spec = StrategySpec(id="mine", kind=UnitType.SIZE, fn=_const(0))
    assert not spec.can_handle(SizeValue.FILL, None, Dimension.WIDTH)
    assert not spec.can_handle(12, None, Dimension.WIDTH)
