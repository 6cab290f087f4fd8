import sys
from pathlib import Path

import pytest

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from newton_fractal.classify import closest_zero
from newton_fractal.complex_math import Complex

CUBE_ROOTS = [Complex(1, 0), Complex(-0.5, 0.8660254), Complex(-0.5, -0.8660254)]


def test_point_on_a_zero():
    for i, z in enumerate(CUBE_ROOTS):
        assert closest_zero(z, CUBE_ROOTS) == i


def test_nearest_by_squared_distance():
    assert closest_zero(Complex(0.9, 0.05), CUBE_ROOTS) == 0
    assert closest_zero(Complex(-0.4, 0.7), CUBE_ROOTS) == 1
    assert closest_zero(Complex(-0.6, -1.2), CUBE_ROOTS) == 2


def test_ties_go_to_lowest_index():
    zeros = [Complex(1, 0), Complex(-1, 0), Complex(0, 5)]
    # origin is equidistant from the first two
    assert closest_zero(Complex(0, 0), zeros) == 0
    # duplicated zero: the first copy wins
    assert closest_zero(Complex(2, 2), [Complex(2, 2), Complex(2, 2)]) == 0
    assert closest_zero(Complex(2, 2), [Complex(9, 9), Complex(2, 2), Complex(2, 2)]) == 1


def test_single_zero_always_index_zero():
    zeros = [Complex(100, -100)]
    for point in [Complex(0, 0), Complex(1e9, 1e9), Complex(100, -100)]:
        assert closest_zero(point, zeros) == 0


def test_empty_zero_set_is_rejected():
    with pytest.raises(ValueError):
        closest_zero(Complex(0, 0), [])


def test_nan_point_falls_back_to_first_zero():
    """NaN distances never compare smaller, so the first zero is kept."""
    nan = float("nan")
    assert closest_zero(Complex(nan, nan), CUBE_ROOTS) == 0
