"""
Complex arithmetic used by the polynomial and Newton layers.

Complex is an immutable (real, imag) pair of floats. Every operation returns
a new value. The free functions are the primary API; the operator overloads
on Complex simply forward to them so polynomial code reads naturally.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


class ComplexDivisionByZero(ZeroDivisionError):
    """Raised when dividing by a complex value of zero magnitude."""

    # set by the Newton solvers to the number of updates completed first
    iterations = None


@dataclass(frozen=True)
class Complex:
    real: float
    imag: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "real", float(self.real))
        object.__setattr__(self, "imag", float(self.imag))

    def __add__(self, other):
        return add(self, as_complex(other))

    def __radd__(self, other):
        return add(as_complex(other), self)

    def __sub__(self, other):
        return sub(self, as_complex(other))

    def __rsub__(self, other):
        return sub(as_complex(other), self)

    def __mul__(self, other):
        return mul(self, as_complex(other))

    def __rmul__(self, other):
        return mul(as_complex(other), self)

    def __truediv__(self, other):
        return div(self, as_complex(other))

    def __rtruediv__(self, other):
        return div(as_complex(other), self)

    def __neg__(self):
        return neg(self)

    def __pow__(self, n):
        return cpow(self, n)

    def norm2(self) -> float:
        return norm2(self)

    def to_builtin(self) -> complex:
        return complex(self.real, self.imag)

    def __str__(self):
        return f"{self.real}+{self.imag}i"


def add(a: Complex, b: Complex) -> Complex:
    return Complex(a.real + b.real, a.imag + b.imag)


def sub(a: Complex, b: Complex) -> Complex:
    return Complex(a.real - b.real, a.imag - b.imag)


def mul(a: Complex, b: Complex) -> Complex:
    return Complex(a.real * b.real - a.imag * b.imag,
                   a.real * b.imag + a.imag * b.real)


def neg(a: Complex) -> Complex:
    return Complex(-a.real, -a.imag)


def cpow(a: Complex, n: int) -> Complex:
    """
    Integer power by repeated multiplication.

    cpow(a, 0) is 1+0i for every a (including zero).
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise ValueError(f"Exponent must be a non-negative integer, got {n!r}")
    result = ONE
    for _ in range(n):
        result = mul(result, a)
    return result


def div(a: Complex, b: Complex) -> Complex:
    """
    Complex division via multiplication by the conjugate.

    Raises ComplexDivisionByZero when b.real**2 + b.imag**2 is zero.
    """
    denom = b.real * b.real + b.imag * b.imag
    if denom == 0.0:
        raise ComplexDivisionByZero(f"complex division by {b}")
    return Complex((a.real * b.real + a.imag * b.imag) / denom,
                   (a.imag * b.real - a.real * b.imag) / denom)


def norm2(a: Complex) -> float:
    """Squared magnitude (no square root, used for distance comparisons)."""
    return a.real * a.real + a.imag * a.imag


def is_finite(a: Complex) -> bool:
    return math.isfinite(a.real) and math.isfinite(a.imag)


def as_complex(value) -> Complex:
    """
    Coerce Complex, builtin complex, int/float or a (real, imag) pair.
    """
    if isinstance(value, Complex):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Cannot interpret {value!r} as a complex number")
    if isinstance(value, (int, float)):
        return Complex(float(value), 0.0)
    if isinstance(value, complex):
        return Complex(value.real, value.imag)
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return Complex(float(value[0]), float(value[1]))
    # numpy scalars (np.complex128, np.float64) end up here
    if hasattr(value, "real") and hasattr(value, "imag"):
        return Complex(float(value.real), float(value.imag))
    raise TypeError(f"Cannot interpret {value!r} as a complex number")


ZERO = Complex(0.0, 0.0)
ONE = Complex(1.0, 0.0)
