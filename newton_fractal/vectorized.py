"""
Vectorized Newton fractal over a whole grid with numpy.

Same algorithm as render.render_fractal but every pixel is iterated at once
on a complex128 array. Zero derivatives turn into inf/nan silently (numpy
errstate) and are reported as FAILED by classify_array.
"""

import numpy as np

from newton_fractal.classify import FAILED


def sample_grid(viewport, width, height):
    """(height, width) complex128 array with z[y, x] = viewport.sample(x, y)."""
    xs = np.arange(width) / width * (viewport.r_max - viewport.r_min) + viewport.r_min
    ys = np.arange(height) / height * (viewport.i_max - viewport.i_min) + viewport.i_min
    return xs[None, :] + 1j * ys[:, None]


def _as_array(values):
    return np.array([v.to_builtin() for v in values], dtype=np.complex128)


def evaluate(polynomial, z, use_zeros=True):
    z = np.asarray(z, dtype=np.complex128)

    if use_zeros and polynomial.zeros is not None:
        zeros = _as_array(polynomial.zeros)
        result = z - zeros[0]
        for zero in zeros[1:]:
            result = result * (z - zero)
        return result

    coeffs = _as_array(polynomial.coefficients)
    if coeffs.size == 0:
        return np.zeros_like(z)
    result = np.full_like(z, coeffs[0])
    z_pow = z.copy()
    for c in coeffs[1:]:
        result = result + c * z_pow
        z_pow = z_pow * z
    return result


def newton_array(polynomial, z, iterations=100):
    derivative = polynomial.derivative()
    z = np.array(z, dtype=np.complex128, copy=True)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for _ in range(iterations):
            z = z - evaluate(polynomial, z) / evaluate(derivative, z)
    return z


def classify_array(z, zeros):
    """
    Nearest zero index per element (lowest index on ties), FAILED where
    z is not finite.
    """
    if len(zeros) == 0:
        raise ValueError("classify_array needs at least one candidate zero")
    z = np.asarray(z, dtype=np.complex128)
    zs = _as_array(zeros)

    with np.errstate(invalid="ignore", over="ignore"):
        d2 = np.stack([(z.real - c.real) ** 2 + (z.imag - c.imag) ** 2 for c in zs], axis=0)
    # argmin returns the first minimum, matching the strict < tie break
    indices = np.argmin(d2, axis=0).astype(np.int32)
    indices[~np.isfinite(z)] = FAILED
    return indices


def newton_grid(polynomial, viewport, width, height, iterations=100, zeros=None):
    if width <= 0 or height <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
    zeros = zeros if zeros is not None else polynomial.zeros
    if not zeros:
        raise ValueError("newton_grid needs a non-empty list of zeros to classify against.")

    z0 = sample_grid(viewport, width, height)
    z = newton_array(polynomial, z0, iterations)
    return classify_array(z, zeros)
