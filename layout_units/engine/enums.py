"""Unit vocabularies: measurement bases and behaviours for each unit kind.

A *basis* (``*Unit``) says how a value is measured; a *behaviour* (``*Value``)
says what the value means. Values are the kebab-case strings used in flat
configuration so ``SizeValue("fill")`` round-trips.
"""

from __future__ import annotations

import enum


class UnitType(str, enum.Enum):
    SIZE = "size"
    POSITION = "position"
    SCALE = "scale"


class Dimension(str, enum.Enum):
    WIDTH = "width"
    HEIGHT = "height"
    BOTH = "both"
    X = "x"
    Y = "y"
    XY = "xy"


SIZE_DIMENSIONS = frozenset({Dimension.WIDTH, Dimension.HEIGHT, Dimension.BOTH})
POSITION_AXES = frozenset({Dimension.X, Dimension.Y, Dimension.XY})


class AxisUnit(str, enum.Enum):
    X = "x"
    Y = "y"


class PositionUnit(str, enum.Enum):
    PIXEL = "pixel"
    CENTER = "center"
    PARENT_LEFT = "parent-left"
    PARENT_RIGHT = "parent-right"
    PARENT_TOP = "parent-top"
    PARENT_BOTTOM = "parent-bottom"
    PARENT_CENTER_X = "parent-center-x"
    PARENT_CENTER_Y = "parent-center-y"
    SCENE_LEFT = "scene-left"
    SCENE_RIGHT = "scene-right"
    SCENE_TOP = "scene-top"
    SCENE_BOTTOM = "scene-bottom"
    SCENE_CENTER_X = "scene-center-x"
    SCENE_CENTER_Y = "scene-center-y"
    VIEWPORT_LEFT = "viewport-left"
    VIEWPORT_RIGHT = "viewport-right"
    VIEWPORT_TOP = "viewport-top"
    VIEWPORT_BOTTOM = "viewport-bottom"
    CONTENT_LEFT = "content-left"
    CONTENT_RIGHT = "content-right"
    CONTENT_TOP = "content-top"
    CONTENT_BOTTOM = "content-bottom"


class PositionValue(str, enum.Enum):
    PIXEL = "pixel"
    # Alignment keywords
    CENTER = "center"
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"
    # CSS-like positioning schemes
    STATIC = "static"
    RELATIVE = "relative"
    ABSOLUTE = "absolute"
    FIXED = "fixed"
    PARENT_LEFT = "parent-left"
    PARENT_RIGHT = "parent-right"
    PARENT_TOP = "parent-top"
    PARENT_BOTTOM = "parent-bottom"
    PARENT_CENTER_X = "parent-center-x"
    PARENT_CENTER_Y = "parent-center-y"
    SCENE_LEFT = "scene-left"
    SCENE_RIGHT = "scene-right"
    SCENE_TOP = "scene-top"
    SCENE_BOTTOM = "scene-bottom"
    SCENE_CENTER_X = "scene-center-x"
    SCENE_CENTER_Y = "scene-center-y"
    VIEWPORT_LEFT = "viewport-left"
    VIEWPORT_RIGHT = "viewport-right"
    VIEWPORT_TOP = "viewport-top"
    VIEWPORT_BOTTOM = "viewport-bottom"
    RANDOM = "random"
    CONTENT_LEFT = "content-left"
    CONTENT_RIGHT = "content-right"
    CONTENT_TOP = "content-top"
    CONTENT_BOTTOM = "content-bottom"


class SizeUnit(str, enum.Enum):
    PIXEL = "pixel"
    PARENT_WIDTH = "parent-width"
    PARENT_HEIGHT = "parent-height"
    SCENE_WIDTH = "scene-width"
    SCENE_HEIGHT = "scene-height"
    VIEWPORT_WIDTH = "viewport-width"
    VIEWPORT_HEIGHT = "viewport-height"
    AUTO = "auto"
    FILL = "fill"
    FIT = "fit"
    STRETCH = "stretch"


class SizeValue(str, enum.Enum):
    PIXEL = "pixel"
    FILL = "fill"
    AUTO = "auto"
    FIT = "fit"
    STRETCH = "stretch"
    PARENT_WIDTH = "parent-width"
    PARENT_HEIGHT = "parent-height"
    SCENE_WIDTH = "scene-width"
    SCENE_HEIGHT = "scene-height"
    VIEWPORT_WIDTH = "viewport-width"
    VIEWPORT_HEIGHT = "viewport-height"
    CONTENT = "content"
    INTRINSIC = "intrinsic"
    RANDOM = "random"


class ScaleUnit(str, enum.Enum):
    FACTOR = "factor"
    PERCENTAGE = "percentage"
    PARENT_SCALE = "parent-scale"
    PARENT_WIDTH_SCALE = "parent-width-scale"
    PARENT_HEIGHT_SCALE = "parent-height-scale"
    SCENE_SCALE = "scene-scale"
    SCENE_WIDTH_SCALE = "scene-width-scale"
    SCENE_HEIGHT_SCALE = "scene-height-scale"
    VIEWPORT_SCALE = "viewport-scale"
    VIEWPORT_WIDTH_SCALE = "viewport-width-scale"
    VIEWPORT_HEIGHT_SCALE = "viewport-height-scale"
    CONTENT_SCALE = "content-scale"
    INTRINSIC_SCALE = "intrinsic-scale"
    FIT = "fit"
    STRETCH = "stretch"
    RANDOM = "random"


class ScaleValue(str, enum.Enum):
    FACTOR = "factor"
    FIT = "fit"
    STRETCH = "stretch"
    FILL = "fill"
    MAINTAIN_ASPECT = "maintain-aspect"
    IGNORE_ASPECT = "ignore-aspect"
    CONTENT_SCALE = "content-scale"
    INTRINSIC_SCALE = "intrinsic-scale"
    PARENT_SCALE = "parent-scale"
    PARENT_WIDTH_SCALE = "parent-width-scale"
    PARENT_HEIGHT_SCALE = "parent-height-scale"
    SCENE_SCALE = "scene-scale"
    SCENE_WIDTH_SCALE = "scene-width-scale"
    SCENE_HEIGHT_SCALE = "scene-height-scale"
    VIEWPORT_SCALE = "viewport-scale"
    VIEWPORT_WIDTH_SCALE = "viewport-width-scale"
    VIEWPORT_HEIGHT_SCALE = "viewport-height-scale"
    BREAKPOINT_SCALE = "breakpoint-scale"
    DEVICE_SCALE = "device-scale"
    RANDOM = "random"


class GroupRule(str, enum.Enum):
    """How a UnitGroup combines its children's results."""

    SUM = "sum"
    AVERAGE = "average"
    MIN = "min"
    MAX = "max"
    CUSTOM = "custom"


# Behaviour enum per unit kind, used when parsing flat configuration.
BEHAVIOR_ENUMS: dict[UnitType, type[enum.Enum]] = {
    UnitType.SIZE: SizeValue,
    UnitType.POSITION: PositionValue,
    UnitType.SCALE: ScaleValue,
}
