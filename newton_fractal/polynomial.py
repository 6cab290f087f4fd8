"""
Polynomials over Complex.

A Polynomial keeps its coefficients (index = power of x). When it was built
from known zeros it also keeps them, and evaluation then uses the product
of (x - z_i) directly instead of the expanded coefficients.
"""

from __future__ import annotations

import threading
from typing import Iterable, Optional, Tuple

from newton_fractal.complex_math import (
    Complex,
    ONE,
    ZERO,
    add,
    as_complex,
    mul,
    neg,
    sub,
)


class Polynomial:
    def __init__(self, coefficients: Iterable = ()):
        self.coefficients: Tuple[Complex, ...] = tuple(as_complex(c) for c in coefficients)
        # only from_zeros sets this, after expanding the product
        self._zeros: Optional[Tuple[Complex, ...]] = None
        self._derivative: Optional[Polynomial] = None
        self._derivative_lock = threading.Lock()

    @property
    def zeros(self) -> Optional[Tuple[Complex, ...]]:
        return self._zeros

    @classmethod
    def from_zeros(cls, zeros: Iterable) -> "Polynomial":
        """
        Build prod(x - z_i) by repeated multiplication of monomials.

        The returned polynomial carries both the expanded coefficients and
        the zeros. An empty zero list gives the zero polynomial.
        """
        zeros = tuple(as_complex(z) for z in zeros)
        if not zeros:
            return cls([])

        result = cls([neg(zeros[0]), ONE])
        for zero in zeros[1:]:
            result = multiply(result, cls([neg(zero), ONE]))
        result._zeros = zeros
        return result

    @property
    def degree(self) -> int:
        return len(self.coefficients) - 1

    def derivative(self) -> "Polynomial":
        """
        d/dx of this polynomial, computed on first use and cached.
        """
        if self._derivative is None:
            with self._derivative_lock:
                if self._derivative is None:
                    self._derivative = Polynomial(
                        [mul(Complex(i, 0.0), c) for i, c in enumerate(self.coefficients) if i > 0]
                    )
        return self._derivative

    def at(self, x) -> Complex:
        x = as_complex(x)

        if self.zeros is not None:
            result = sub(x, self.zeros[0])
            for zero in self.zeros[1:]:
                result = mul(result, sub(x, zero))
            return result

        if not self.coefficients:
            return ZERO

        result = self.coefficients[0]
        x_pow = x
        for c in self.coefficients[1:]:
            result = add(result, mul(c, x_pow))
            x_pow = mul(x_pow, x)
        return result

    __call__ = at

    def to_string(self) -> str:
        if not self.coefficients:
            return "0"
        terms = []
        for power, c in enumerate(self.coefficients):
            var = "" if power == 0 else f"x^{power}"
            terms.append(f"({c}){var}")
        return " + ".join(terms)

    def describe(self) -> str:
        """Multi-line dump of the polynomial, its zeros and its derivative."""
        zeros = "none" if self.zeros is None else ", ".join(str(z) for z in self.zeros)
        return "\n".join([
            "{",
            f"  polynomial = {self.to_string()}",
            f"  zeros = [{zeros}]",
            f"  derivative = {self.derivative().to_string()}",
            "}",
        ])

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        if self.zeros is not None:
            return f"Polynomial.from_zeros({list(self.zeros)!r})"
        return f"Polynomial({list(self.coefficients)!r})"


def multiply(a: Polynomial, b: Polynomial) -> Polynomial:
    """
    Product of two polynomials by convolving their coefficients.

    The product only carries coefficients; zeros are not propagated.
    """
    A = len(a.coefficients)
    B = len(b.coefficients)
    if A == 0 or B == 0:
        return Polynomial([])

    result = [ZERO] * (A + B - 1)
    for i, ca in enumerate(a.coefficients):
        for j, cb in enumerate(b.coefficients):
            result[i + j] = add(result[i + j], mul(ca, cb))
    return Polynomial(result)
