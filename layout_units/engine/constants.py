"""Fallback constants used when a context rectangle is missing.

Each rectangle kind has its own stand-in size so a descriptor that points at
an absent parent, scene, viewport or content box still resolves to a number.
"""

# Sizes (pixels)
FALLBACK_SIZE = 100.0
FALLBACK_CONTENT_SIZE = 400.0
FALLBACK_PARENT_SIZE = 800.0
FALLBACK_SCENE_SIZE = 1200.0
FALLBACK_VIEWPORT_SIZE = 1200.0

# Positions (pixels)
FALLBACK_POSITION = 0.0

# Scales (dimensionless)
FALLBACK_SCALE = 1.0

# Random ranges when a calculator has no constraints of its own
RANDOM_SIZE_MIN = 50.0
RANDOM_SIZE_MAX = 200.0
RANDOM_SCALE_MIN = 0.5
RANDOM_SCALE_MAX = 2.0

# Responsive breakpoints: widths below MOBILE_MAX_WIDTH are mobile,
# below TABLET_MAX_WIDTH tablet, anything wider desktop.
MOBILE_MAX_WIDTH = 768.0
TABLET_MAX_WIDTH = 1024.0
BREAKPOINT_SCALES: dict[str, float] = {
    "mobile": 0.8,
    "tablet": 0.9,
    "desktop": 1.0,
}

# Lower number wins when several strategies match.
PRIORITY_LITERAL = 1
PRIORITY_DEFAULT = 10
PRIORITY_ALTERNATIVE = 100

AXIS_MISMATCH_X = "Cannot calculate X position for Y-only axis"
AXIS_MISMATCH_Y = "Cannot calculate Y position for X-only axis"
