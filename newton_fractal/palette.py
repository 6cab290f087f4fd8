# newton_fractal/palette.py
import re

import numpy as np

from newton_fractal.classify import FAILED

REFERENCE_PALETTE = (
    (255, 0, 0),
    (0, 255, 0),
    (0, 0, 255),
)

SENTINEL_COLOR = (0, 0, 0)

# golden ratio conjugate, spreads generated hues evenly
_HUE_STEP = 0.618033988749895

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


def hsv_to_rgb(h, s, v):
    """
    h,s,v in [0,1]. Returns uint8 RGB array with shape (..., 3)
    """
    h = np.asarray(h, dtype=np.float64)
    s = np.broadcast_to(np.asarray(s, dtype=np.float64), h.shape)
    v = np.broadcast_to(np.asarray(v, dtype=np.float64), h.shape)

    i = np.floor(h * 6).astype(int)
    f = h * 6 - i
    p = v * (1 - s)
    q = v * (1 - f * s)
    t = v * (1 - (1 - f) * s)
    i_mod = np.mod(i, 6)

    conds = [i_mod == k for k in range(6)]
    r = np.select(conds, [v, q, p, p, t, v])
    g = np.select(conds, [t, v, v, q, p, p])
    b = np.select(conds, [p, p, t, v, v, q])
    rgb = np.stack([r, g, b], axis=-1)
    return (np.clip(rgb, 0, 1) * 255).round().astype(np.uint8)


def parse_color(value):
    """
    Accept (r, g, b) with ints in [0, 255] or a '#rrggbb' string.
    """
    if isinstance(value, str):
        m = _HEX_RE.match(value.strip())
        if not m:
            raise ValueError(f"Bad colour string: {value!r}")
        digits = m.group(1)
        return tuple(int(digits[k:k + 2], 16) for k in (0, 2, 4))

    try:
        parts = [int(c) for c in value]
    except (TypeError, ValueError):
        raise ValueError(f"Bad colour: {value!r}") from None
    if len(parts) != 3 or any(c < 0 or c > 255 for c in parts):
        raise ValueError(f"Colour must be three ints in [0, 255], got {value!r}")
    return tuple(parts)


class Palette:
    """
    Maps a zero index to an RGB colour.

    Indices past the end of `colors` get generated colours (golden-ratio hue
    steps); FAILED maps to the sentinel colour.
    """

    def __init__(self, colors=REFERENCE_PALETTE, sentinel=SENTINEL_COLOR):
        self.colors = tuple(parse_color(c) for c in colors)
        self.sentinel = parse_color(sentinel)

    def __len__(self):
        return len(self.colors)

    def color_for(self, index: int):
        if index == FAILED:
            return self.sentinel
        if index < 0:
            raise ValueError(f"Invalid zero index: {index}")
        if index < len(self.colors):
            return self.colors[index]
        return extension_color(index)


def extension_color(index: int):
    hue = (index * _HUE_STEP) % 1.0
    rgb = hsv_to_rgb(hue, 0.85, 0.95)
    return tuple(int(c) for c in rgb)
