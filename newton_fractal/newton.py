from typing import List, Sequence, Tuple

from newton_fractal.complex_math import Complex, ComplexDivisionByZero, as_complex, div, norm2, sub
from newton_fractal.polynomial import Polynomial


def _check_iterations(iterations):
    if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations < 0:
        raise ValueError(f"iterations must be a non-negative integer, got {iterations!r}")


def newton_step(polynomial: Polynomial, guess: Complex) -> Complex:
    """One update: guess - f(guess) / f'(guess)."""
    return sub(guess, div(polynomial.at(guess), polynomial.derivative().at(guess)))


def newton(polynomial: Polynomial, guess, iterations: int = 100) -> Complex:
    """
    Apply exactly `iterations` Newton updates starting from `guess`.

    There is no convergence test and no guard against a vanishing
    derivative: ComplexDivisionByZero propagates to the caller, with its
    `iterations` attribute set to the number of updates completed.
    """
    _check_iterations(iterations)
    z = as_complex(guess)
    for n in range(iterations):
        try:
            z = newton_step(polynomial, z)
        except ComplexDivisionByZero as e:
            e.iterations = n
            raise
    return z


def newton_trajectory(polynomial: Polynomial, guess, iterations: int = 100) -> List[Complex]:
    """
    Same update as newton(), returning every iterate after the start point.
    """
    _check_iterations(iterations)
    z = as_complex(guess)
    traj = []
    for _ in range(iterations):
        z = newton_step(polynomial, z)
        traj.append(z)
    return traj


def newton_until_converged(
    polynomial: Polynomial,
    guess,
    zeros: Sequence[Complex],
    max_iterations: int = 100,
    tolerance: float = 1e-12,
) -> Tuple[Complex, int]:
    """
    Iterate until within sqrt(tolerance) of one of `zeros`, or until
    `max_iterations` updates have been made.

    Returns (last iterate, number of updates applied).
    """
    _check_iterations(max_iterations)
    z = as_complex(guess)
    for n in range(max_iterations):
        if any(norm2(sub(z, zero)) < tolerance for zero in zeros):
            return z, n
        try:
            z = newton_step(polynomial, z)
        except ComplexDivisionByZero as e:
            e.iterations = n
            raise
    return z, max_iterations


def pick_solver(mode: str):
    """Return a solver matching the renderer's expected signature:
    solver(polynomial, guess, zeros, iterations, tolerance) -> (z, n_iters)
    """
    name = mode.lower()

    if name == "fixed":
        def solver(polynomial, guess, zeros, iterations, tolerance):
            return newton(polynomial, guess, iterations), iterations
        return solver

    if name == "converge":
        def solver(polynomial, guess, zeros, iterations, tolerance):
            return newton_until_converged(polynomial, guess, zeros, iterations, tolerance)
        return solver

    raise ValueError(f"Unknown solver mode: {mode}")
