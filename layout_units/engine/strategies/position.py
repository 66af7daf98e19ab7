"""Built-in position strategies.

Each function resolves a named PositionValue to pixels along one axis,
before the descriptor's offset is added. PositionUnitCalculator dispatches to
these same functions through POSITION_DISPATCH.
"""

from __future__ import annotations

import logging

from layout_units.engine.constants import (
    FALLBACK_CONTENT_SIZE,
    FALLBACK_POSITION,
    FALLBACK_VIEWPORT_SIZE,
    PRIORITY_ALTERNATIVE,
    PRIORITY_DEFAULT,
    PRIORITY_LITERAL,
)
from layout_units.engine.context import LayoutContext, Rect, stage_extent
from layout_units.engine.enums import AxisUnit, PositionUnit, PositionValue, UnitType
from layout_units.engine.registry import strategy
from layout_units.utils.sampling import uniform

logger = logging.getLogger(__name__)

V = PositionValue

# Rectangle each edge behaviour reads from, and which edge of it.
_EDGES: dict[str, tuple[str, str]] = {
    "parent-left": ("parent", "left"),
    "parent-right": ("parent", "right"),
    "parent-top": ("parent", "top"),
    "parent-bottom": ("parent", "bottom"),
    "parent-center-x": ("parent", "center-x"),
    "parent-center-y": ("parent", "center-y"),
    "scene-left": ("scene", "left"),
    "scene-right": ("scene", "right"),
    "scene-top": ("scene", "top"),
    "scene-bottom": ("scene", "bottom"),
    "scene-center-x": ("scene", "center-x"),
    "scene-center-y": ("scene", "center-y"),
    "viewport-left": ("viewport", "left"),
    "viewport-right": ("viewport", "right"),
    "viewport-top": ("viewport", "top"),
    "viewport-bottom": ("viewport", "bottom"),
    "content-left": ("content", "left"),
    "content-right": ("content", "right"),
    "content-top": ("content", "top"),
    "content-bottom": ("content", "bottom"),
}

PARENT_VALUES = frozenset(v for v in V if _EDGES.get(v.value, ("",))[0] == "parent")
SCENE_VALUES = frozenset(v for v in V if _EDGES.get(v.value, ("",))[0] == "scene")
VIEWPORT_VALUES = frozenset(v for v in V if _EDGES.get(v.value, ("",))[0] == "viewport")
CONTENT_VALUES = frozenset(v for v in V if _EDGES.get(v.value, ("",))[0] == "content")
FLOW_VALUES = frozenset({V.PIXEL, V.STATIC, V.RELATIVE, V.ABSOLUTE, V.FIXED})

# Context rectangle a position behaviour (or basis) depends on.
REQUIRED_RECT: dict[str, str] = {name: rect for name, (rect, _) in _EDGES.items()}


def box_for(source: str, ctx: LayoutContext) -> Rect:
    """The rectangle an edge reads from, with fallbacks for a missing one.

    parent:   parent, else the stage as a box at the origin
    scene:    scene, else viewport, else FALLBACK_SCENE_SIZE
    viewport: viewport, else FALLBACK_VIEWPORT_SIZE
    content:  content, else FALLBACK_CONTENT_SIZE
    """
    if source == "parent":
        if ctx.parent is not None:
            return ctx.parent
        return Rect(width=stage_extent(ctx, AxisUnit.X), height=stage_extent(ctx, AxisUnit.Y))
    if source == "scene":
        return Rect(width=stage_extent(ctx, AxisUnit.X), height=stage_extent(ctx, AxisUnit.Y))
    if source == "viewport":
        vp = ctx.viewport
        if vp is None:
            return Rect(width=FALLBACK_VIEWPORT_SIZE, height=FALLBACK_VIEWPORT_SIZE)
        return Rect(width=vp.width, height=vp.height)
    content = ctx.content
    if content is None:
        return Rect(width=FALLBACK_CONTENT_SIZE, height=FALLBACK_CONTENT_SIZE)
    return Rect(width=content.width, height=content.height)


def edge_point(source: str, edge: str, axis: AxisUnit, ctx: LayoutContext) -> float:
    box = box_for(source, ctx)
    if source == "parent":
        # Parent edges are absolute coordinates on either axis
        if edge == "left":
            return box.x
        if edge == "right":
            return box.x + box.width
        if edge == "top":
            return box.y
        if edge == "bottom":
            return box.y + box.height
        if edge == "center-x":
            return box.x + box.width / 2
        return box.y + box.height / 2

    # Stage-like boxes sit at the origin; far edges count only on their own axis
    if edge == "right":
        return box.width if axis is AxisUnit.X else FALLBACK_POSITION
    if edge == "bottom":
        return box.height if axis is AxisUnit.Y else FALLBACK_POSITION
    if edge == "center-x":
        return box.width / 2
    if edge == "center-y":
        return box.height / 2
    return FALLBACK_POSITION


@strategy(
    id="literal-position",
    kind=UnitType.POSITION,
    literals=True,
    priority=PRIORITY_LITERAL,
    description="Numeric literal taken at face value",
)
def literal_position(behavior, basis, axis, ctx: LayoutContext) -> float:
    return float(behavior)


@strategy(
    id="center-position",
    kind=UnitType.POSITION,
    behaviors={V.CENTER},
    description="Half the stage extent along the axis",
)
def center_position(behavior, basis, axis, ctx: LayoutContext) -> float:
    return stage_extent(ctx, axis) / 2


@strategy(
    id="stage-edge-position",
    kind=UnitType.POSITION,
    behaviors={V.LEFT, V.RIGHT, V.TOP, V.BOTTOM},
    description="Stage edges; right/bottom only on their own axis",
)
def stage_edge_position(behavior, basis, axis, ctx: LayoutContext) -> float:
    if behavior is V.RIGHT and axis is AxisUnit.X:
        return stage_extent(ctx, AxisUnit.X)
    if behavior is V.BOTTOM and axis is AxisUnit.Y:
        return stage_extent(ctx, AxisUnit.Y)
    return FALLBACK_POSITION


@strategy(
    id="parent-position",
    kind=UnitType.POSITION,
    behaviors=PARENT_VALUES,
    requires=("parent",),
    description="Edges and centres of the parent box",
)
def parent_position(behavior, basis, axis, ctx: LayoutContext) -> float:
    return edge_point("parent", _EDGES[behavior.value][1], axis, ctx)


@strategy(
    id="scene-position",
    kind=UnitType.POSITION,
    behaviors=SCENE_VALUES,
    requires=("scene",),
    description="Edges and centres of the scene",
)
def scene_position(behavior, basis, axis, ctx: LayoutContext) -> float:
    return edge_point("scene", _EDGES[behavior.value][1], axis, ctx)


@strategy(
    id="viewport-position",
    kind=UnitType.POSITION,
    behaviors=VIEWPORT_VALUES,
    requires=("viewport",),
    description="Edges of the viewport",
)
def viewport_position(behavior, basis, axis, ctx: LayoutContext) -> float:
    return edge_point("viewport", _EDGES[behavior.value][1], axis, ctx)


@strategy(
    id="content-position",
    kind=UnitType.POSITION,
    behaviors=CONTENT_VALUES,
    requires=("content",),
    description="Edges of the measured content",
)
def content_position(behavior, basis, axis, ctx: LayoutContext) -> float:
    return edge_point("content", _EDGES[behavior.value][1], axis, ctx)


@strategy(
    id="flow-position",
    kind=UnitType.POSITION,
    behaviors=FLOW_VALUES,
    description="Positioning schemes that leave placement to the offset",
)
def flow_position(behavior, basis, axis, ctx: LayoutContext) -> float:
    return FALLBACK_POSITION


@strategy(
    id="random-position",
    kind=UnitType.POSITION,
    behaviors={V.RANDOM},
    description="Uniform sample in [0, stage extent)",
)
def random_position(behavior, basis, axis, ctx: LayoutContext, rng=None) -> float:
    return uniform(0.0, stage_extent(ctx, axis), rng)


def reference_point(basis: PositionUnit, axis: AxisUnit, ctx: LayoutContext) -> float:
    """Point the measurement basis names, before any behaviour applies."""
    if basis is PositionUnit.CENTER:
        return stage_extent(ctx, axis) / 2
    edge = _EDGES.get(basis.value)
    if edge is None:
        return FALLBACK_POSITION
    return edge_point(edge[0], edge[1], axis, ctx)


@strategy(
    id="reference-point-position",
    kind=UnitType.POSITION,
    behaviors=frozenset(V),
    priority=PRIORITY_ALTERNATIVE,
    description="Resolve the basis to a reference point, then apply the behaviour to it",
)
def reference_point_position(behavior, basis, axis, ctx: LayoutContext) -> float:
    if behavior in FLOW_VALUES - {V.PIXEL}:
        return FALLBACK_POSITION
    if behavior is V.RANDOM:
        return uniform(0.0, stage_extent(ctx, axis))
    if behavior in CONTENT_VALUES:
        return edge_point("content", _EDGES[behavior.value][1], axis, ctx)
    return reference_point(basis, axis, ctx)


# Named behaviour -> resolver, used by PositionUnitCalculator
POSITION_DISPATCH = {
    V.CENTER: center_position,
    **{v: stage_edge_position for v in (V.LEFT, V.RIGHT, V.TOP, V.BOTTOM)},
    **{v: parent_position for v in PARENT_VALUES},
    **{v: scene_position for v in SCENE_VALUES},
    **{v: viewport_position for v in VIEWPORT_VALUES},
    **{v: content_position for v in CONTENT_VALUES},
    **{v: flow_position for v in FLOW_VALUES},
    V.RANDOM: random_position,
}
