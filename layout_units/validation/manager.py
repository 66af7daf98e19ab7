"""ValidationManager: owns a validator chain, a running error log and counters."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from layout_units.validation.validators import UnitValidator, ValidationOutcome, unit_type_of

logger = logging.getLogger(__name__)


def _describe_input(unit: Any) -> tuple[str, str]:
    """(id, type) labels for the error log."""
    if isinstance(unit, Mapping):
        unit_id = unit.get("id")
    else:
        unit_id = getattr(unit, "id", None)
    unit_type = unit_type_of(unit)
    type_label = unit_type.value if unit_type is not None else type(unit).__name__
    return (str(unit_id) if unit_id is not None else repr(unit)), type_label


class ValidationManager:
    def __init__(self, validators: Iterable[UnitValidator] = ()) -> None:
        self._validators: list[UnitValidator] = []
        self._errors: list[str] = []
        self.total_validations = 0
        self.successful_validations = 0
        self.failed_validations = 0
        for v in validators:
            self.add_validator(v)

    # -- chain ------------------------------------------------------------

    def _relink(self) -> None:
        for current, following in zip(self._validators, self._validators[1:]):
            if hasattr(current, "set_next"):
                current.set_next(following)
        if self._validators and hasattr(self._validators[-1], "next"):
            self._validators[-1].next = None

    def add_validator(self, validator: UnitValidator) -> UnitValidator:
        if not callable(getattr(validator, "validate", None)):
            raise TypeError(f"{validator!r} has no validate() method")
        self._validators.append(validator)
        self._relink()
        logger.debug("Added validator %s (%d in chain)", getattr(validator, "name", validator), len(self._validators))
        return validator

    def remove_validator(self, validator: UnitValidator | str) -> bool:
        for i, v in enumerate(self._validators):
            if v is validator or getattr(v, "name", None) == validator:
                del self._validators[i]
                v.next = None
                self._relink()
                return True
        return False

    def validators(self) -> list[UnitValidator]:
        return list(self._validators)

    @property
    def validator_count(self) -> int:
        return len(self._validators)

    def clear_validators(self) -> None:
        for v in self._validators:
            v.next = None
        self._validators.clear()

    # -- validation -------------------------------------------------------

    def _record(self, unit: Any, outcome: ValidationOutcome) -> ValidationOutcome:
        self.total_validations += 1
        if outcome:
            self.successful_validations += 1
        else:
            self.failed_validations += 1
            unit_id, unit_type = _describe_input(unit)
            entry = f"Unit validation failed: {unit_id} ({unit_type})"
            if outcome.message:
                entry = f"{entry}: {outcome.message}"
            self._errors.append(entry)
            logger.info(entry)
        return outcome

    def validate_unit(self, unit: Any, context: Any = None) -> ValidationOutcome:
        """Run the whole chain. With no validators every unit passes."""
        if not self._validators:
            return self._record(unit, ValidationOutcome.passed())
        return self._record(unit, self._validators[0].validate(unit, context))

    def validate_input(self, input: Any, context: Any = None) -> ValidationOutcome:
        """Start the chain at the first validator able to handle the input."""
        for v in self._validators:
            can_handle = getattr(v, "can_handle", None)
            if can_handle is None or can_handle(input):
                return self._record(input, v.validate(input, context))
        return self._record(input, ValidationOutcome.passed())

    def validate_batch(self, units: Iterable[Any], context: Any = None) -> list[bool]:
        results = [bool(self.validate_unit(u, context)) for u in units]
        logger.info("Validated batch of %d: %d failed", len(results), results.count(False))
        return results

    # -- error log and statistics -----------------------------------------

    def errors(self) -> list[str]:
        return list(self._errors)

    @property
    def error_count(self) -> int:
        return len(self._errors)

    def clear_errors(self) -> None:
        self._errors.clear()

    def reset_statistics(self) -> None:
        self.total_validations = 0
        self.successful_validations = 0
        self.failed_validations = 0

    def statistics(self) -> dict[str, Any]:
        total = self.total_validations
        return {
            "total_validations": total,
            "successful_validations": self.successful_validations,
            "failed_validations": self.failed_validations,
            "success_rate": (self.successful_validations / total * 100.0) if total else 0.0,
            "validator_count": len(self._validators),
            "error_count": len(self._errors),
        }
