"""Built-in size strategies.

Each resolver returns pixels for a named SizeValue along the configured
Dimension (width, height or both), before offset and constraints.
"""

from __future__ import annotations

import logging

from layout_units.engine.constants import (
    FALLBACK_CONTENT_SIZE,
    FALLBACK_PARENT_SIZE,
    FALLBACK_SCENE_SIZE,
    FALLBACK_SIZE,
    FALLBACK_VIEWPORT_SIZE,
    PRIORITY_LITERAL,
    RANDOM_SIZE_MAX,
    RANDOM_SIZE_MIN,
)
from layout_units.engine.context import Area, LayoutContext
from layout_units.engine.enums import Dimension, SizeValue, UnitType
from layout_units.engine.registry import strategy
from layout_units.utils.sampling import uniform

logger = logging.getLogger(__name__)

V = SizeValue


def pick(area: Area, dimension: Dimension, both=max) -> float:
    """Width, height, or both combined with ``both``."""
    if dimension is Dimension.HEIGHT:
        return area.height
    if dimension is Dimension.BOTH:
        return both(area.width, area.height)
    return area.width


def available(dimension: Dimension, ctx: LayoutContext) -> float:
    """Space the stage offers: scene, viewport (both -> min), then parent (both -> max)."""
    if ctx.scene is not None:
        return pick(ctx.scene, dimension, min)
    if ctx.viewport is not None:
        return pick(ctx.viewport, dimension, min)
    if ctx.parent is not None:
        return pick(ctx.parent, dimension, max)
    return FALLBACK_SCENE_SIZE


def content_extent(dimension: Dimension, ctx: LayoutContext) -> float:
    if ctx.content is None:
        return FALLBACK_CONTENT_SIZE
    return pick(ctx.content, dimension, max)


@strategy(
    id="literal-size",
    kind=UnitType.SIZE,
    literals=True,
    priority=PRIORITY_LITERAL,
    description="Numeric literal in pixels",
)
def literal_size(behavior, basis, dimension, ctx: LayoutContext) -> float:
    return float(behavior)


@strategy(
    id="pixel-size",
    kind=UnitType.SIZE,
    behaviors={V.PIXEL},
    description="Pixel basis without a literal: the default size",
)
def pixel_size(behavior, basis, dimension, ctx: LayoutContext) -> float:
    return FALLBACK_SIZE


@strategy(
    id="fill-size",
    kind=UnitType.SIZE,
    behaviors={V.FILL},
    requires_any=("scene", "viewport", "parent"),
    description="Fill the available stage",
)
def fill_size(behavior, basis, dimension, ctx: LayoutContext) -> float:
    return available(dimension, ctx)


@strategy(
    id="stretch-size",
    kind=UnitType.SIZE,
    behaviors={V.STRETCH},
    requires_any=("scene", "viewport", "parent"),
    description="Stretch to the available stage",
)
def stretch_size(behavior, basis, dimension, ctx: LayoutContext) -> float:
    return available(dimension, ctx)


@strategy(
    id="content-size",
    kind=UnitType.SIZE,
    behaviors={V.AUTO, V.CONTENT, V.INTRINSIC},
    requires=("content",),
    description="Measured content size; both -> larger side",
)
def content_size(behavior, basis, dimension, ctx: LayoutContext) -> float:
    return content_extent(dimension, ctx)


@strategy(
    id="fit-size",
    kind=UnitType.SIZE,
    behaviors={V.FIT},
    requires=("content",),
    description="Content size, capped by the available stage",
)
def fit_size(behavior, basis, dimension, ctx: LayoutContext) -> float:
    return min(content_extent(dimension, ctx), available(dimension, ctx))


@strategy(
    id="parent-size",
    kind=UnitType.SIZE,
    behaviors={V.PARENT_WIDTH, V.PARENT_HEIGHT},
    requires=("parent",),
    description="Parent width or height",
)
def parent_size(behavior, basis, dimension, ctx: LayoutContext) -> float:
    if ctx.parent is None:
        return FALLBACK_PARENT_SIZE
    return ctx.parent.width if behavior is V.PARENT_WIDTH else ctx.parent.height


@strategy(
    id="scene-size",
    kind=UnitType.SIZE,
    behaviors={V.SCENE_WIDTH, V.SCENE_HEIGHT},
    requires=("scene",),
    description="Scene width or height",
)
def scene_size(behavior, basis, dimension, ctx: LayoutContext) -> float:
    if ctx.scene is None:
        return FALLBACK_SCENE_SIZE
    return ctx.scene.width if behavior is V.SCENE_WIDTH else ctx.scene.height


@strategy(
    id="viewport-size",
    kind=UnitType.SIZE,
    behaviors={V.VIEWPORT_WIDTH, V.VIEWPORT_HEIGHT},
    requires=("viewport",),
    description="Viewport width or height",
)
def viewport_size(behavior, basis, dimension, ctx: LayoutContext) -> float:
    if ctx.viewport is None:
        return FALLBACK_VIEWPORT_SIZE
    return ctx.viewport.width if behavior is V.VIEWPORT_WIDTH else ctx.viewport.height


@strategy(
    id="random-size",
    kind=UnitType.SIZE,
    behaviors={V.RANDOM},
    description="Uniform sample in [min, max), default 50..200",
)
def random_size(behavior, basis, dimension, ctx: LayoutContext, low=None, high=None, rng=None) -> float:
    lo = RANDOM_SIZE_MIN if low is None else low
    hi = RANDOM_SIZE_MAX if high is None else high
    return uniform(lo, hi, rng)


# Named behaviour -> resolver, used by SizeUnitCalculator
SIZE_DISPATCH = {
    V.PIXEL: pixel_size,
    V.FILL: fill_size,
    V.STRETCH: stretch_size,
    V.AUTO: content_size,
    V.CONTENT: content_size,
    V.INTRINSIC: content_size,
    V.FIT: fit_size,
    V.PARENT_WIDTH: parent_size,
    V.PARENT_HEIGHT: parent_size,
    V.SCENE_WIDTH: scene_size,
    V.SCENE_HEIGHT: scene_size,
    V.VIEWPORT_WIDTH: viewport_size,
    V.VIEWPORT_HEIGHT: viewport_size,
    V.RANDOM: random_size,
}

# Context rectangles a size behaviour needs to resolve without a fallback
REQUIRED_RECTS: dict[SizeValue, tuple[str, ...]] = {
    V.PARENT_WIDTH: ("parent",),
    V.PARENT_HEIGHT: ("parent",),
    V.SCENE_WIDTH: ("scene",),
    V.SCENE_HEIGHT: ("scene",),
    V.VIEWPORT_WIDTH: ("viewport",),
    V.VIEWPORT_HEIGHT: ("viewport",),
    V.CONTENT: ("content",),
    V.INTRINSIC: ("content",),
}
