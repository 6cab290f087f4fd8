# newton_fractal/utils.py
from newton_fractal.complex_math import Complex, as_complex


def parse_complex(s) -> Complex:
    """
    Parse strings like '0.3+0.5j', '-0.4-0.6j', '2j' or '1.5' into a Complex.

    Non-string values ([r, i] pairs, numbers) are passed to as_complex.
    """
    if not isinstance(s, str):
        return as_complex(s)
    s = s.strip().lower().replace(" ", "").replace("i", "j")
    if not s:
        raise ValueError("Empty complex number string")
    try:
        return as_complex(complex(s))
    except ValueError:
        raise ValueError(f"Cannot parse complex number: {s!r}") from None


def parse_complex_list(s: str):
    """
    Parse a semicolon separated list, e.g. '1;-0.5+0.866j;-0.5-0.866j'.
    """
    return [parse_complex(part) for part in s.split(";") if part.strip()]
