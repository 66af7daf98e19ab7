"""UnitGroup: a tree of calculators whose results combine into one number.

    group = UnitGroup("gutter", "Gutter", rule=GroupRule.MAX)
    group.add_child(margin_calc)
    group.add_child(padding_calc)
    group.calculate(ctx)   # max of the active children

Groups nest; a child group contributes its own combined result.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Callable, Iterator, Protocol, Sequence

from layout_units.engine.context import Area, LayoutContext, Rect
from layout_units.engine.enums import GroupRule, UnitType

logger = logging.getLogger(__name__)

Reducer = Callable[[Sequence[float]], float]

# Context group_stats() samples children against when none is given
STATS_SAMPLE_CONTEXT = LayoutContext(
    parent=Rect(width=800, height=600, x=0, y=0),
    scene=Area(width=1200, height=800),
)


class Unit(Protocol):
    id: str
    unit_type: UnitType
    active: bool

    def calculate(self, context: LayoutContext) -> float: ...

    def is_responsive(self) -> bool: ...

    def validate(self, context: LayoutContext) -> bool: ...


def _sum(results: Sequence[float]) -> float:
    return float(sum(results))


def _average(results: Sequence[float]) -> float:
    return float(sum(results)) / len(results)


_REDUCERS: dict[GroupRule, Reducer] = {
    GroupRule.SUM: _sum,
    GroupRule.AVERAGE: _average,
    GroupRule.MIN: min,
    GroupRule.MAX: max,
}


class UnitGroup:
    def __init__(
        self,
        id: str,
        name: str,
        unit_type: UnitType | str = UnitType.SIZE,
        base_value: float = 0.0,
        rule: GroupRule | str = GroupRule.SUM,
    ) -> None:
        self.id = id
        self.name = name
        self.unit_type = UnitType(unit_type)
        self.base_value = float(base_value)
        self.rule = GroupRule(rule)
        self.reducer: Reducer | None = None
        self.active = True
        self.parent: UnitGroup | None = None
        self.depth = 0
        self._children: list[Unit] = []

    @property
    def fallback_value(self) -> float:
        return self.base_value

    # -- calculation ------------------------------------------------------

    def _child_results(self, context: LayoutContext) -> list[float]:
        results: list[float] = []
        for child in self.active_children():
            try:
                results.append(float(child.calculate(context)))
            except Exception:
                logger.warning("Group %s: child %s failed, skipping", self.id, child.id, exc_info=True)
        return results

    def combine(self, results: Sequence[float]) -> float:
        """Apply the group rule; CUSTOM without a reducer sums."""
        if self.rule is GroupRule.CUSTOM:
            if self.reducer is None:
                logger.debug("Group %s has no custom reducer, summing", self.id)
                return _sum(results)
            return float(self.reducer(results))
        return float(_REDUCERS[self.rule](results))

    def calculate(self, context: LayoutContext) -> float:
        """Combined result of the active children, or base_value when there is none."""
        results = self._child_results(context)
        if not results:
            return self.base_value
        return self.combine(results)

    def set_rule(self, rule: GroupRule | str) -> None:
        self.rule = GroupRule(rule)

    def set_reducer(self, reducer: Reducer) -> None:
        self.reducer = reducer
        self.rule = GroupRule.CUSTOM

    def is_responsive(self) -> bool:
        return any(child.is_responsive() for child in self._children)

    def validate(self, context: LayoutContext) -> bool:
        return all(child.validate(context) for child in self._children)

    # -- tree -------------------------------------------------------------

    def add_child(self, unit: Unit) -> None:
        if any(c is unit for c in self._children):
            return
        if isinstance(unit, UnitGroup) and (unit is self or unit in self.path_from_root()):
            raise ValueError(f"Adding group {unit.id} under {self.id} would create a cycle")
        self._children.append(unit)
        if isinstance(unit, UnitGroup):
            unit.set_parent(self)

    def remove_child(self, unit: Unit) -> bool:
        for i, child in enumerate(self._children):
            if child is unit:
                del self._children[i]
                if isinstance(unit, UnitGroup):
                    unit.set_parent(None)
                return True
        return False

    def set_parent(self, parent: UnitGroup | None) -> None:
        self.parent = parent
        self._set_depth(parent.depth + 1 if parent is not None else 0)

    def _set_depth(self, depth: int) -> None:
        self.depth = depth
        for child in self._children:
            if isinstance(child, UnitGroup):
                child._set_depth(depth + 1)

    def children(self) -> list[Unit]:
        return list(self._children)

    def child_by_id(self, id: str) -> Unit | None:
        return next((c for c in self._children if c.id == id), None)

    def has_children(self) -> bool:
        return bool(self._children)

    @property
    def child_count(self) -> int:
        return len(self._children)

    def is_leaf(self) -> bool:
        return not self._children

    def _walk(self) -> Iterator[Unit]:
        for child in self._children:
            yield child
            if isinstance(child, UnitGroup):
                yield from child._walk()

    def descendants(self) -> list[Unit]:
        return list(self._walk())

    def find_by_id(self, id: str) -> Unit | None:
        return next((u for u in self._walk() if u.id == id), None)

    def total_unit_count(self) -> int:
        """Every unit in the subtree, this group included."""
        return 1 + sum(1 for _ in self._walk())

    def root(self) -> UnitGroup:
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def path_from_root(self) -> list[UnitGroup]:
        path = [self]
        while path[0].parent is not None:
            path.insert(0, path[0].parent)
        return path

    # -- filtering and summaries ------------------------------------------

    def children_by_type(self, unit_type: UnitType | str) -> list[Unit]:
        unit_type = UnitType(unit_type)
        return [c for c in self._children if c.unit_type is unit_type]

    def responsive_children(self) -> list[Unit]:
        return [c for c in self._children if c.is_responsive()]

    def active_children(self) -> list[Unit]:
        return [c for c in self._children if getattr(c, "active", True)]

    def set_all_children_active(self, active: bool) -> None:
        for child in self._children:
            child.active = active

    def group_stats(self, context: LayoutContext | None = None) -> dict[str, Any]:
        results = self._child_results(context if context is not None else STATS_SAMPLE_CONTEXT)
        return {
            "total_children": len(self._children),
            "active_children": len(self.active_children()),
            "responsive_children": len(self.responsive_children()),
            "average_result": _average(results) if results else 0.0,
            "min_result": min(results) if results else 0.0,
            "max_result": max(results) if results else 0.0,
        }

    def composition_summary(self) -> dict[str, Any]:
        return {
            "total_units": len(self._children),
            "unit_types": dict(Counter(c.unit_type.value for c in self._children)),
            "responsive_units": len(self.responsive_children()),
            "active_units": len(self.active_children()),
        }

    def describe(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "unit_type": self.unit_type.value,
            "rule": self.rule.value,
            "base_value": self.base_value,
            "children": [c.id for c in self._children],
            "depth": self.depth,
            "responsive": self.is_responsive(),
        }

    def __repr__(self) -> str:
        return f"UnitGroup({self.name!r}, {self.rule.value}, {len(self._children)} children)"
