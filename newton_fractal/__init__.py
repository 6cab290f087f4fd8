"""Newton fractal rendering: complex arithmetic, polynomials, Newton's method."""

from newton_fractal.classify import FAILED, closest_zero
from newton_fractal.complex_math import Complex, ComplexDivisionByZero
from newton_fractal.config import FractalConfig, Viewport, load_config
from newton_fractal.newton import newton
from newton_fractal.polynomial import Polynomial, multiply
from newton_fractal.render import render_fractal

__all__ = [
    "Complex",
    "ComplexDivisionByZero",
    "FAILED",
    "FractalConfig",
    "Polynomial",
    "Viewport",
    "closest_zero",
    "load_config",
    "multiply",
    "newton",
    "render_fractal",
]
