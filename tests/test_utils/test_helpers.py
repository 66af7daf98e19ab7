"""Tests for numeric helpers, sampling and logging setup."""

import logging
import math

import numpy as np

from layout_units.logging_config import LOG_FORMAT, configure_logging
from layout_units.utils.math_helpers import clamp, format_number, safe_ratio
from layout_units.utils.sampling import get_default_rng, reseed, uniform


def test_clamp_open_bounds():
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10
    assert clamp(1e9, None, None) == 1e9
    assert clamp(-3, None, 2) == -3


def test_safe_ratio_defaults():
    assert safe_ratio(10, 4) == 2.5
    assert safe_ratio(10, 0) == 1.0
    assert safe_ratio(None, 4, default=0.5) == 0.5


def test_format_number():
    assert format_number(100.0) == "100"
    assert format_number(-5) == "-5"
    assert format_number(0.25) == "0.25"
    assert format_number(math.inf) == "inf"
    assert format_number(-math.inf) == "-inf"


def test_reseed_makes_draws_reproducible():
    reseed(7)
    first = [uniform(0, 1) for _ in range(3)]
    reseed(7)
    assert [uniform(0, 1) for _ in range(3)] == first
    gen = reseed(7)
    assert get_default_rng() is gen


def test_uniform_with_explicit_generator():
    rng = np.random.default_rng(3)
    for _ in range(20):
        assert 10 <= uniform(10, 20, rng) < 20
    assert uniform(5, 5, rng) == 5.0
    assert uniform(8, 2, rng) == 8.0


def test_configure_logging_uses_shared_format(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
    configure_logging("debug")
    assert calls == {"level": logging.DEBUG, "format": LOG_FORMAT}
