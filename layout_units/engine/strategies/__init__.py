"""Built-in strategies. Importing this package registers them."""

from layout_units.engine.strategies import position, scale, size  # noqa: F401
