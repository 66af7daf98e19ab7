"""Exceptions raised across the engine boundary.

Missing context and unknown behaviours never raise; they resolve to the
fallback constants. Only programmer errors surface as exceptions.
"""

from __future__ import annotations


class UnitError(Exception):
    """Base class for unit engine errors."""


class AxisMismatchError(UnitError, ValueError):
    """An axis-specific calculation was requested on a descriptor restricted to the other axis."""


class UnknownStrategyError(UnitError, KeyError):
    """No strategy is registered under the requested id."""

    def __init__(self, strategy_id: str) -> None:
        super().__init__(strategy_id)
        self.strategy_id = strategy_id

    def __str__(self) -> str:
        return f"Unknown strategy: {self.strategy_id}"


class InvalidUnitConfigError(UnitError, ValueError):
    """A flat unit configuration could not be turned into a calculator."""
