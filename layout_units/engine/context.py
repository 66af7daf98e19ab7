"""LayoutContext: the read-only snapshot every calculation runs against.

The host fills it from its live scene graph (parent bounds, stage and device
size, measured content, active breakpoint). Every field is optional; the
engine falls back to the constants in ``engine.constants`` when one is absent.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping

from layout_units.engine.constants import FALLBACK_SCENE_SIZE
from layout_units.engine.enums import AxisUnit, Dimension

RECT_FIELDS = ("parent", "scene", "viewport", "content")


@dataclass(frozen=True)
class Area:
    """Width/height pair for scene, viewport and content boxes."""

    width: float
    height: float

    def extent(self, axis: AxisUnit) -> float:
        return self.width if axis is AxisUnit.X else self.height


@dataclass(frozen=True)
class Rect(Area):
    """Positioned box: the immediate parent container."""

    x: float = 0.0
    y: float = 0.0

    def origin(self, axis: AxisUnit) -> float:
        return self.x if axis is AxisUnit.X else self.y


@dataclass(frozen=True)
class Breakpoint:
    name: str
    width: float
    height: float


@dataclass(frozen=True)
class LayoutContext:
    """Per-calculation snapshot. Frozen so it can key caches."""

    parent: Rect | None = None
    scene: Area | None = None
    viewport: Area | None = None
    content: Area | None = None
    breakpoint: Breakpoint | None = None
    # Axis the caller is resolving; informational for strategy lookups
    dimension: Dimension | None = None

    def has(self, field_name: str) -> bool:
        return getattr(self, field_name) is not None

    def missing(self, field_names) -> list[str]:
        return [name for name in field_names if getattr(self, name) is None]

    def replace(self, **changes: Any) -> LayoutContext:
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LayoutContext:
        """Build a context from plain mappings, e.g. ``{"scene": {"width": 800, "height": 600}}``."""
        parent = data.get("parent")
        scene = data.get("scene")
        viewport = data.get("viewport")
        content = data.get("content")
        breakpoint = data.get("breakpoint")
        dimension = data.get("dimension")
        return cls(
            parent=_rect(parent) if parent is not None else None,
            scene=_area(scene) if scene is not None else None,
            viewport=_area(viewport) if viewport is not None else None,
            content=_area(content) if content is not None else None,
            breakpoint=_breakpoint(breakpoint) if breakpoint is not None else None,
            dimension=Dimension(dimension) if dimension is not None else None,
        )


def _breakpoint(data: Breakpoint | Mapping[str, Any]) -> Breakpoint:
    if isinstance(data, Breakpoint):
        return data
    return Breakpoint(
        name=str(data.get("name", "")),
        width=float(data.get("width", 0.0)),
        height=float(data.get("height", 0.0)),
    )


def _area(data: Area | Mapping[str, Any]) -> Area:
    if isinstance(data, Area):
        return data
    return Area(width=float(data.get("width", 0.0)), height=float(data.get("height", 0.0)))


def _rect(data: Rect | Mapping[str, Any]) -> Rect:
    if isinstance(data, Rect):
        return data
    return Rect(
        width=float(data.get("width", 0.0)),
        height=float(data.get("height", 0.0)),
        x=float(data.get("x", 0.0)),
        y=float(data.get("y", 0.0)),
    )


def stage(ctx: LayoutContext) -> Area | None:
    """The top-level stage: scene first, then viewport."""
    return ctx.scene or ctx.viewport


def stage_extent(ctx: LayoutContext, axis: AxisUnit) -> float:
    """Stage size along an axis, falling back scene → viewport → constant."""
    area = stage(ctx)
    if area is None:
        return FALLBACK_SCENE_SIZE
    return area.extent(axis)
