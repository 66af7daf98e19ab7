"""layout-units: resolve declarative size, position and scale units against a layout context."""

__version__ = "0.1.0"
