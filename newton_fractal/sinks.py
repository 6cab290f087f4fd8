"""
Pixel sinks: the only thing the renderer writes finished colours to.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image


class PixelSink:
    """Anything with a width, a height and set_pixel(x, y, color)."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height

    def set_pixel(self, x: int, y: int, color):
        raise NotImplementedError

    def _check(self, x, y):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} sink")


class ArraySink(PixelSink):
    """Writes into a (height, width, 3) uint8 array, row y / column x."""

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.pixels = np.zeros((height, width, 3), dtype=np.uint8)

    def set_pixel(self, x, y, color):
        self._check(x, y)
        self.pixels[y, x] = color

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)

    def save(self, path) -> Path:
        out_path = Path(path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        self.to_image().save(out_path)
        return out_path


class RecordingSink(PixelSink):
    """Keeps every (x, y, color) call in order."""

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.calls = []

    def set_pixel(self, x, y, color):
        self._check(x, y)
        self.calls.append((x, y, tuple(color)))
