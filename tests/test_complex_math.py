import math
import sys
from pathlib import Path

import numpy as np
import pytest

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from newton_fractal.complex_math import (
    Complex,
    ComplexDivisionByZero,
    ONE,
    add,
    as_complex,
    cpow,
    div,
    mul,
    neg,
    norm2,
    sub,
)
from newton_fractal.utils import parse_complex, parse_complex_list

SAMPLES = [
    Complex(1.0, 0.0),
    Complex(-0.5, 0.8660254),
    Complex(2.5, -3.25),
    Complex(0.0, 1.0),
    Complex(-1e-3, 7.0),
]


def _close(a, b, tol=1e-12):
    return norm2(sub(a, b)) < tol


def test_add_is_commutative():
    for a in SAMPLES:
        for b in SAMPLES:
            assert add(a, b) == add(b, a)


def test_mul_matches_builtin_complex():
    a = Complex(2.0, 3.0)
    b = Complex(-1.0, 4.0)
    expected = complex(2, 3) * complex(-1, 4)
    np.testing.assert_allclose(mul(a, b).to_builtin(), expected, rtol=1e-15)


def test_div_round_trip():
    """mul(a, div(c, a)) gives back c for non-zero a."""
    for a in SAMPLES:
        for c in SAMPLES:
            assert _close(mul(a, div(c, a)), c, tol=1e-20)


def test_div_by_zero_raises():
    with pytest.raises(ComplexDivisionByZero):
        div(Complex(1.0, 1.0), Complex(0.0, 0.0))
    # still a ZeroDivisionError for callers that only know the builtin
    with pytest.raises(ZeroDivisionError):
        Complex(1.0, 0.0) / 0


def test_pow_zero_is_one():
    for a in SAMPLES + [Complex(0.0, 0.0)]:
        assert cpow(a, 0) == Complex(1, 0)


def test_pow_recurrence():
    for a in SAMPLES:
        for n in range(1, 6):
            assert cpow(a, n) == mul(a, cpow(a, n - 1))


def test_pow_rejects_negative_exponent():
    with pytest.raises(ValueError):
        cpow(ONE, -1)
    with pytest.raises(ValueError):
        cpow(ONE, 1.5)


def test_neg_and_norm2():
    a = Complex(3.0, -4.0)
    assert neg(a) == Complex(-3.0, 4.0)
    assert norm2(a) == 25.0
    assert a.norm2() == 25.0


def test_operators_forward_to_functions():
    a = Complex(1.5, -2.0)
    b = Complex(0.25, 3.0)
    assert a + b == add(a, b)
    assert a - b == sub(a, b)
    assert a * b == mul(a, b)
    assert a / b == div(a, b)
    assert -a == neg(a)
    assert a ** 3 == cpow(a, 3)
    assert 2 * a == Complex(3.0, -4.0)
    assert 1 - a == Complex(-0.5, 2.0)


def test_values_are_immutable():
    a = Complex(1.0, 2.0)
    with pytest.raises(Exception):
        a.real = 5.0


def test_as_complex_coercions():
    assert as_complex(2) == Complex(2.0, 0.0)
    assert as_complex(1 + 2j) == Complex(1.0, 2.0)
    assert as_complex([0.5, -0.5]) == Complex(0.5, -0.5)
    assert as_complex(np.complex128(3 - 1j)) == Complex(3.0, -1.0)
    with pytest.raises(TypeError):
        as_complex("1+2j")
    with pytest.raises(TypeError):
        as_complex(True)


def test_str_format():
    assert str(Complex(1, -2)) == "1.0+-2.0i"


def test_parse_complex():
    assert parse_complex("0.3+0.5j") == Complex(0.3, 0.5)
    assert parse_complex(" -0.4 - 0.6j ") == Complex(-0.4, -0.6)
    assert parse_complex("2i") == Complex(0.0, 2.0)
    assert parse_complex("1.5") == Complex(1.5, 0.0)
    assert parse_complex([1, 2]) == Complex(1.0, 2.0)
    with pytest.raises(ValueError):
        parse_complex("one")
    with pytest.raises(ValueError):
        parse_complex("")


def test_parse_complex_list():
    zs = parse_complex_list("1;-0.5+0.866j; -0.5-0.866j;")
    assert zs == [Complex(1, 0), Complex(-0.5, 0.866), Complex(-0.5, -0.866)]
    assert all(math.isfinite(z.real) for z in zs)
