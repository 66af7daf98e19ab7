"""Built-in scale strategies.

Scales are dimensionless multipliers. Resolution has two steps:
the measurement basis gives a base scale (ratio between two context
rectangles), then the behaviour either returns that base scale (``factor``)
or computes its own content-vs-container ratio.
"""

from __future__ import annotations

import logging

from layout_units.engine.constants import (
    BREAKPOINT_SCALES,
    FALLBACK_CONTENT_SIZE,
    FALLBACK_SCALE,
    MOBILE_MAX_WIDTH,
    PRIORITY_LITERAL,
    RANDOM_SCALE_MAX,
    RANDOM_SCALE_MIN,
    TABLET_MAX_WIDTH,
)
from layout_units.engine.context import Area, LayoutContext, stage_extent
from layout_units.engine.enums import AxisUnit, Dimension, ScaleUnit, ScaleValue, UnitType
from layout_units.engine.registry import strategy
from layout_units.utils.math_helpers import safe_ratio
from layout_units.utils.sampling import uniform

logger = logging.getLogger(__name__)

V = ScaleValue

# ratio basis -> (numerator rect, denominator rect, which side)
_RATIOS: dict[str, tuple[str, str, str]] = {
    "parent-scale": ("parent", "scene", "both"),
    "parent-width-scale": ("parent", "scene", "width"),
    "parent-height-scale": ("parent", "scene", "height"),
    "scene-scale": ("scene", "viewport", "both"),
    "scene-width-scale": ("scene", "viewport", "width"),
    "scene-height-scale": ("scene", "viewport", "height"),
    "viewport-scale": ("viewport", "scene", "both"),
    "viewport-width-scale": ("viewport", "scene", "width"),
    "viewport-height-scale": ("viewport", "scene", "height"),
}

RATIO_VALUES = frozenset(v for v in V if v.value in _RATIOS)

# Context rectangles a ratio basis reads
BASIS_REQUIRES: dict[ScaleUnit, tuple[str, ...]] = {
    ScaleUnit(name): (num,) for name, (num, _, _) in _RATIOS.items()
}


def rect_ratio(name: str, ctx: LayoutContext) -> float:
    """Ratio named by a ``*-scale`` basis or behaviour; 1.0 when either rectangle is missing."""
    num_name, den_name, side = _RATIOS[name]
    num: Area | None = getattr(ctx, num_name)
    den: Area | None = getattr(ctx, den_name)
    if num is None or den is None:
        return FALLBACK_SCALE
    sx = safe_ratio(num.width, den.width)
    sy = safe_ratio(num.height, den.height)
    if side == "width":
        return sx
    if side == "height":
        return sy
    return min(sx, sy)


def base_scale(basis: ScaleUnit | None, ctx: LayoutContext) -> float:
    """Scale implied by the measurement basis alone."""
    if basis is not None and basis.value in _RATIOS:
        return rect_ratio(basis.value, ctx)
    return FALLBACK_SCALE


def content_ratios(ctx: LayoutContext) -> tuple[float, float]:
    """(stage width / content width, stage height / content height)."""
    content = ctx.content or Area(FALLBACK_CONTENT_SIZE, FALLBACK_CONTENT_SIZE)
    sx = safe_ratio(stage_extent(ctx, AxisUnit.X), content.width)
    sy = safe_ratio(stage_extent(ctx, AxisUnit.Y), content.height)
    return sx, sy


@strategy(
    id="literal-scale",
    kind=UnitType.SCALE,
    literals=True,
    priority=PRIORITY_LITERAL,
    description="Numeric literal multiplier",
)
def literal_scale(behavior, basis, axis, ctx: LayoutContext) -> float:
    return float(behavior)


@strategy(
    id="factor-scale",
    kind=UnitType.SCALE,
    behaviors={V.FACTOR},
    description="Base scale from the measurement basis",
)
def factor_scale(behavior, basis, axis, ctx: LayoutContext) -> float:
    return base_scale(basis, ctx)


@strategy(
    id="fit-scale",
    kind=UnitType.SCALE,
    behaviors={V.FIT, V.MAINTAIN_ASPECT},
    description="Largest uniform scale that keeps content inside the stage",
)
def fit_scale(behavior, basis, axis, ctx: LayoutContext) -> float:
    return min(content_ratios(ctx))


@strategy(
    id="stretch-scale",
    kind=UnitType.SCALE,
    behaviors={V.STRETCH, V.FILL, V.IGNORE_ASPECT},
    description="Scale that covers the stage; per-axis when asked for width or height",
)
def stretch_scale(behavior, basis, axis, ctx: LayoutContext) -> float:
    sx, sy = content_ratios(ctx)
    if axis is Dimension.WIDTH:
        return sx
    if axis is Dimension.HEIGHT:
        return sy
    return max(sx, sy)


@strategy(
    id="content-scale",
    kind=UnitType.SCALE,
    behaviors={V.CONTENT_SCALE},
    requires=("parent", "content"),
    description="Shrink content to fit its parent, never enlarge",
)
def content_scale(behavior, basis, axis, ctx: LayoutContext) -> float:
    if ctx.parent is None or ctx.content is None:
        return FALLBACK_SCALE
    sx = safe_ratio(ctx.parent.width, ctx.content.width)
    sy = safe_ratio(ctx.parent.height, ctx.content.height)
    return min(sx, sy, 1.0)


@strategy(
    id="intrinsic-scale",
    kind=UnitType.SCALE,
    behaviors={V.INTRINSIC_SCALE},
    description="Original size",
)
def intrinsic_scale(behavior, basis, axis, ctx: LayoutContext) -> float:
    return FALLBACK_SCALE


@strategy(
    id="ratio-scale",
    kind=UnitType.SCALE,
    behaviors=RATIO_VALUES,
    description="Ratio between parent, scene and viewport rectangles",
)
def ratio_scale(behavior, basis, axis, ctx: LayoutContext) -> float:
    return rect_ratio(behavior.value, ctx)


@strategy(
    id="breakpoint-scale",
    kind=UnitType.SCALE,
    behaviors={V.BREAKPOINT_SCALE},
    requires=("breakpoint",),
    description="Scale for the active responsive breakpoint",
)
def breakpoint_scale(behavior, basis, axis, ctx: LayoutContext) -> float:
    bp = ctx.breakpoint
    if bp is None:
        return FALLBACK_SCALE
    named = BREAKPOINT_SCALES.get(bp.name.lower())
    if named is not None:
        return named
    if bp.width < MOBILE_MAX_WIDTH:
        return BREAKPOINT_SCALES["mobile"]
    if bp.width < TABLET_MAX_WIDTH:
        return BREAKPOINT_SCALES["tablet"]
    return BREAKPOINT_SCALES["desktop"]


@strategy(
    id="device-scale",
    kind=UnitType.SCALE,
    behaviors={V.DEVICE_SCALE},
    requires=("breakpoint",),
    requires_any=("viewport", "scene"),
    description="Device area relative to the breakpoint's design size",
)
def device_scale(behavior, basis, axis, ctx: LayoutContext) -> float:
    bp = ctx.breakpoint
    device = ctx.viewport or ctx.scene
    if bp is None or device is None:
        return FALLBACK_SCALE
    return min(safe_ratio(device.width, bp.width), safe_ratio(device.height, bp.height))


@strategy(
    id="random-scale",
    kind=UnitType.SCALE,
    behaviors={V.RANDOM},
    description="Uniform sample in [min, max), default 0.5..2.0",
)
def random_scale(behavior, basis, axis, ctx: LayoutContext, low=None, high=None, rng=None) -> float:
    lo = RANDOM_SCALE_MIN if low is None else low
    hi = RANDOM_SCALE_MAX if high is None else high
    return uniform(lo, hi, rng)


# Named behaviour -> resolver, used by ScaleUnitCalculator
SCALE_DISPATCH = {
    V.FACTOR: factor_scale,
    V.FIT: fit_scale,
    V.MAINTAIN_ASPECT: fit_scale,
    V.STRETCH: stretch_scale,
    V.FILL: stretch_scale,
    V.IGNORE_ASPECT: stretch_scale,
    V.CONTENT_SCALE: content_scale,
    V.INTRINSIC_SCALE: intrinsic_scale,
    **{v: ratio_scale for v in RATIO_VALUES},
    V.BREAKPOINT_SCALE: breakpoint_scale,
    V.DEVICE_SCALE: device_scale,
    V.RANDOM: random_scale,
}

# Context rectangles a scale behaviour needs to resolve without a fallback
REQUIRED_RECTS: dict[ScaleValue, tuple[str, ...]] = {
    V.CONTENT_SCALE: ("content",),
    V.INTRINSIC_SCALE: ("content",),
    V.BREAKPOINT_SCALE: ("breakpoint",),
    V.DEVICE_SCALE: ("breakpoint",),
    **{v: (_RATIOS[v.value][0],) for v in RATIO_VALUES},
}
