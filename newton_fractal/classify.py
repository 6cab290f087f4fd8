"""
Root classification: which known zero did an iterate end up nearest to.
"""

from typing import Sequence, Tuple

from newton_fractal.complex_math import (
    Complex,
    ComplexDivisionByZero,
    is_finite,
    norm2,
    sub,
)

# Index reported for pixels whose iteration failed (zero derivative, inf/nan).
FAILED = -1


def closest_zero(point: Complex, zeros: Sequence[Complex]) -> int:
    """
    Index of the zero with the smallest squared distance to `point`.

    Ties go to the lowest index. Raises ValueError when `zeros` is empty.
    """
    if len(zeros) == 0:
        raise ValueError("closest_zero needs at least one candidate zero")

    closest = 0
    closest_d2 = norm2(sub(point, zeros[0]))
    for i in range(1, len(zeros)):
        d2 = norm2(sub(point, zeros[i]))
        if d2 < closest_d2:
            closest_d2 = d2
            closest = i
    return closest


def classify_point(polynomial, sample, zeros, iterations, solver, tolerance=1e-12) -> Tuple[int, int]:
    """
    Run `solver` from `sample` and classify the result.

    Returns (zero index, iterations used). A division by zero or a
    non-finite final iterate gives FAILED, counting the updates made
    before the failure.
    """
    try:
        z, n = solver(polynomial, sample, zeros, iterations, tolerance)
    except ComplexDivisionByZero as e:
        return FAILED, e.iterations if e.iterations is not None else iterations

    if not is_finite(z):
        return FAILED, n
    return closest_zero(z, zeros), n
