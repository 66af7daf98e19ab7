"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from layout_units.engine.context import Area, Breakpoint, LayoutContext, Rect
from layout_units.engine.factory import UnitCalculatorFactory


# Layout snapshots a host might hand over

FULL_CONTEXT = LayoutContext(
    parent=Rect(width=200, height=100, x=100, y=50),
    scene=Area(width=1000, height=500),
    viewport=Area(width=800, height=600),
    content=Area(width=50, height=80),
    breakpoint=Breakpoint(name="tablet", width=900, height=700),
)

SCENE_ONLY = LayoutContext(scene=Area(width=1000, height=500))

VIEWPORT_ONLY = LayoutContext(viewport=Area(width=800, height=600))

PARENT_ONLY = LayoutContext(parent=Rect(width=200, height=100, x=100, y=50))

EMPTY_CONTEXT = LayoutContext()

ALL_CONTEXTS = [FULL_CONTEXT, SCENE_ONLY, VIEWPORT_ONLY, PARENT_ONLY, EMPTY_CONTEXT]


@pytest.fixture
def full_context() -> LayoutContext:
    return FULL_CONTEXT


@pytest.fixture
def scene_only() -> LayoutContext:
    return SCENE_ONLY


@pytest.fixture
def empty_context() -> LayoutContext:
    return EMPTY_CONTEXT


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def factory(rng) -> UnitCalculatorFactory:
    return UnitCalculatorFactory(rng=rng)
