"""Tests for ValidationManager."""

import pytest

from layout_units.engine.calculators import SizeUnitCalculator
from layout_units.engine.enums import Dimension, SizeUnit, UnitType
from layout_units.validation.manager import ValidationManager
from layout_units.validation.validators import RangeValidator, TypeValidator


def _size(id="s", value=120):
    return SizeUnitCalculator(id, "size", SizeUnit.PIXEL, Dimension.WIDTH, value)


def test_no_validators_passes_everything():
    manager = ValidationManager()
    assert manager.validate_unit(_size())
    stats = manager.statistics()
    assert stats["total_validations"] == 1
    assert stats["successful_validations"] == 1
    assert stats["success_rate"] == 100.0


def test_success_rate_zero_before_any_validation():
    assert ValidationManager().statistics()["success_rate"] == 0.0


def test_add_validator_rejects_non_validators():
    with pytest.raises(TypeError):
        ValidationManager().add_validator(object())


def test_chain_and_error_log():
    manager = ValidationManager()
    manager.add_validator(TypeValidator("types", allowed_types=[UnitType.SIZE]))
    manager.add_validator(RangeValidator("range", 0, 200))
    assert manager.validator_count == 2

    assert manager.validate_unit(_size("ok", 150))
    outcome = manager.validate_unit(_size("too-big", 900))
    assert not outcome

    assert manager.error_count == 1
    assert manager.errors() == [
        "Unit validation failed: too-big (size): Value 900 is outside the allowed range [0, 200]"
    ]
    stats = manager.statistics()
    assert stats["total_validations"] == 2
    assert stats["failed_validations"] == 1
    assert stats["success_rate"] == 50.0

    manager.clear_errors()
    assert manager.error_count == 0


def test_validate_batch():
    manager = ValidationManager([RangeValidator("range", 0, 100)])
    results = manager.validate_batch([_size("a", 10), _size("b", 500), 50, {"value": -1}])
    assert results == [True, False, True, False]
    assert manager.statistics()["failed_validations"] == 2
    assert "Unit validation failed: b (size)" in manager.errors()[0]


def test_validate_input_starts_at_first_capable_validator():
    manager = ValidationManager()
    manager.add_validator(RangeValidator("range", 0, 10))
    manager.add_validator(TypeValidator("strict", strict=True))
    # Range cannot handle a shapeless mapping, so strict typing judges it
    outcome = manager.validate_input({"colour": "red"})
    assert not outcome
    assert outcome.validator == "strict"
    assert manager.validate_input(5)


def test_remove_validator_relinks_chain():
    first = RangeValidator("first", 0, 10)
    second = RangeValidator("second", 0, 5)
    third = RangeValidator("third", 0, 100)
    manager = ValidationManager([first, second, third])
    assert first.next is second

    assert manager.remove_validator("second")
    assert first.next is third
    assert not manager.remove_validator(second)
    assert manager.validate_unit(8)

    manager.clear_validators()
    assert manager.validators() == []
    assert first.next is None


def test_reset_statistics():
    manager = ValidationManager([RangeValidator("r", 0, 1)])
    manager.validate_unit(5)
    manager.reset_statistics()
    assert manager.statistics()["total_validations"] == 0
    assert manager.error_count == 1
