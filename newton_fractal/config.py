"""
Render configuration: viewport geometry and the YAML-backed FractalConfig.

A config file looks like:

    width: 800
    height: 600
    r_range: 5.0
    origin: [0.0, 0.0]
    zeros:
      - [1.0, 0.0]
      - [-0.5, 0.86602540378]
      - [-0.5, -0.86602540378]
    colors: ["#ff0000", "#00ff00", "#0000ff"]
    iterations: 100
    mode: fixed

Instead of `r_range`/`origin` a config may give an explicit window with
`r_min`, `r_max`, `i_min`, `i_max`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

import yaml

from newton_fractal.complex_math import Complex, as_complex
from newton_fractal.palette import REFERENCE_PALETTE, SENTINEL_COLOR, Palette, parse_color
from newton_fractal.polynomial import Polynomial
from newton_fractal.utils import parse_complex

SOLVER_MODES = ("fixed", "converge")


@dataclass(frozen=True)
class Viewport:
    """Rectangular window of the complex plane."""
    r_min: float
    r_max: float
    i_min: float
    i_max: float

    @classmethod
    def from_dimensions(cls, width: int, height: int, r_range: float = 5.0, origin=0.0) -> "Viewport":
        """
        Window of real extent `r_range` centred on `origin`, with the
        imaginary extent scaled to keep the pixel aspect ratio.
        """
        origin = as_complex(origin)
        i_range = r_range / width * height
        return cls(
            r_min=origin.real - r_range / 2,
            r_max=origin.real + r_range / 2,
            i_min=origin.imag - i_range / 2,
            i_max=origin.imag + i_range / 2,
        )

    def sample(self, x: int, y: int, width: int, height: int) -> Complex:
        real = x / width * (self.r_max - self.r_min) + self.r_min
        imag = y / height * (self.i_max - self.i_min) + self.i_min
        return Complex(real, imag)

    def validate(self):
        bounds = (self.r_min, self.r_max, self.i_min, self.i_max)
        if not all(math.isfinite(b) for b in bounds):
            raise ValueError(f"Viewport bounds must be finite, got {bounds}")
        if self.r_max <= self.r_min or self.i_max <= self.i_min:
            raise ValueError(f"Viewport ranges must be non-empty, got {bounds}")


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


@dataclass
class FractalConfig:
    width: int = 800
    height: int = 600
    r_range: float = 5.0
    origin: Complex = field(default_factory=lambda: Complex(0.0, 0.0))
    viewport: Optional[Viewport] = None  # overrides r_range/origin when set
    zeros: Optional[List[Complex]] = None
    coefficients: Optional[List[Complex]] = None
    colors: Optional[Sequence] = None
    iterations: int = 100
    mode: str = "fixed"
    tolerance: float = 1e-12
    output: Optional[str] = None

    def validate(self) -> "FractalConfig":
        """Fail fast on anything that would make the render meaningless."""
        if not _is_positive_int(self.width) or not _is_positive_int(self.height):
            raise ValueError(f"Grid dimensions must be positive integers, got {self.width}x{self.height}")
        if not _is_positive_int(self.iterations):
            raise ValueError(f"iterations must be a positive integer, got {self.iterations!r}")
        if self.mode not in SOLVER_MODES:
            raise ValueError(f"Unknown mode {self.mode!r}; expected one of {SOLVER_MODES}")
        if not (self.tolerance > 0 and math.isfinite(self.tolerance)):
            raise ValueError(f"tolerance must be positive, got {self.tolerance!r}")

        if self.viewport is not None:
            self.viewport.validate()
        elif not (self.r_range > 0 and math.isfinite(self.r_range)):
            raise ValueError(f"r_range must be a positive finite number, got {self.r_range!r}")

        if self.zeros is None and self.coefficients is None:
            raise ValueError("Config needs either 'zeros' or 'coefficients'")
        if not self.zeros:
            # coefficient-only polynomials have nothing to classify against
            raise ValueError("Config needs a non-empty 'zeros' list to classify pixels")
        if self.colors is not None:
            if not isinstance(self.colors, (list, tuple)):
                raise ValueError(f"'colors' must be a list, got {self.colors!r}")
            if len(self.colors) != len(self.zeros):
                raise ValueError(
                    f"Got {len(self.colors)} colours for {len(self.zeros)} zeros"
                )
            for c in self.colors:
                parse_color(c)
        return self

    def build_polynomial(self) -> Polynomial:
        if self.coefficients is not None:
            return Polynomial(self.coefficients)
        return Polynomial.from_zeros(self.zeros)

    def build_viewport(self) -> Viewport:
        if self.viewport is not None:
            return self.viewport
        return Viewport.from_dimensions(self.width, self.height, self.r_range, self.origin)

    def build_palette(self) -> Palette:
        return Palette(self.colors if self.colors is not None else REFERENCE_PALETTE, SENTINEL_COLOR)


def _complex_list(values, key):
    if values is None:
        return None
    if not isinstance(values, (list, tuple)):
        raise ValueError(f"'{key}' must be a list")
    try:
        return [parse_complex(v) for v in values]
    except TypeError as e:
        raise ValueError(f"Bad entry in '{key}': {e}") from None


def _float(cfg, key, default):
    value = cfg.get(key, default)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"'{key}' must be a number, got {value!r}") from None


def config_from_dict(cfg: dict) -> FractalConfig:
    cfg = cfg or {}

    viewport = None
    window_keys = ("r_min", "r_max", "i_min", "i_max")
    if any(k in cfg for k in window_keys):
        missing = [k for k in window_keys if k not in cfg]
        if missing:
            raise ValueError(f"Explicit viewport is missing {missing}")
        viewport = Viewport(*(_float(cfg, k, None) for k in window_keys))

    try:
        origin = parse_complex(cfg.get("origin", 0.0))
    except TypeError as e:
        raise ValueError(f"Bad origin: {e}") from None

    config = FractalConfig(
        width=cfg.get("width", 800),
        height=cfg.get("height", 600),
        r_range=_float(cfg, "r_range", 5.0),
        origin=origin,
        viewport=viewport,
        zeros=_complex_list(cfg.get("zeros"), "zeros"),
        coefficients=_complex_list(cfg.get("coefficients"), "coefficients"),
        colors=cfg.get("colors"),
        iterations=cfg.get("iterations", 100),
        mode=str(cfg.get("mode", "fixed")).lower(),
        tolerance=_float(cfg, "tolerance", 1e-12),
        output=cfg.get("output"),
    )
    return config.validate()


def load_config(config_path) -> FractalConfig:
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        cfg = yaml.safe_load(f)

    if cfg is not None and not isinstance(cfg, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return config_from_dict(cfg)
