import sys
from pathlib import Path

import pytest
import yaml

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from newton_fractal.complex_math import Complex
from newton_fractal.config import FractalConfig, Viewport, config_from_dict, load_config

CUBE_ROOTS = [[1.0, 0.0], [-0.5, 0.8660254], [-0.5, -0.8660254]]


def _write(tmp_path, cfg):
    path = tmp_path / "fractal.yaml"
    path.write_text(yaml.safe_dump(cfg))
    return path


def test_viewport_preserves_aspect_ratio():
    vp = Viewport.from_dimensions(800, 600, r_range=5.0, origin=Complex(0, 0))
    assert vp.r_min == -2.5 and vp.r_max == 2.5
    assert vp.i_max - vp.i_min == pytest.approx(5.0 / 800 * 600)
    assert (vp.i_min + vp.i_max) / 2 == pytest.approx(0.0)


def test_viewport_centred_on_origin():
    vp = Viewport.from_dimensions(100, 100, r_range=2.0, origin=1 - 1j)
    assert vp == Viewport(0.0, 2.0, -2.0, 0.0)


def test_viewport_sample_corners():
    vp = Viewport(-2.0, 2.0, -2.0, 2.0)
    assert vp.sample(0, 0, 2, 2) == Complex(-2.0, -2.0)
    assert vp.sample(1, 1, 2, 2) == Complex(0.0, 0.0)
    assert vp.sample(1, 0, 4, 4) == Complex(-1.0, -2.0)


def test_load_config_round_trip(tmp_path):
    path = _write(tmp_path, {
        "width": 40,
        "height": 30,
        "r_range": 4.0,
        "origin": "0.5-0.25j",
        "zeros": CUBE_ROOTS,
        "colors": ["#ff0000", [0, 255, 0], "0000ff"],
        "iterations": 25,
        "mode": "Converge",
        "tolerance": "1e-10",
        "output": "figures/out.png",
    })
    config = load_config(path)
    assert config.width == 40 and config.height == 30
    assert config.origin == Complex(0.5, -0.25)
    assert config.zeros[1] == Complex(-0.5, 0.8660254)
    assert config.mode == "converge"
    assert config.tolerance == 1e-10

    polynomial = config.build_polynomial()
    assert polynomial.zeros == tuple(config.zeros)
    palette = config.build_palette()
    assert palette.colors == ((255, 0, 0), (0, 255, 0), (0, 0, 255))
    vp = config.build_viewport()
    assert vp.r_min == pytest.approx(-1.5) and vp.r_max == pytest.approx(2.5)


def test_defaults():
    config = config_from_dict({"zeros": CUBE_ROOTS})
    assert (config.width, config.height) == (800, 600)
    assert config.iterations == 100
    assert config.mode == "fixed"
    assert len(config.build_palette()) == 3


def test_explicit_window(tmp_path):
    path = _write(tmp_path, {
        "width": 10, "height": 10,
        "r_min": -1, "r_max": 1, "i_min": -3, "i_max": 3,
        "zeros": CUBE_ROOTS,
    })
    assert load_config(path).build_viewport() == Viewport(-1.0, 1.0, -3.0, 3.0)


def test_coefficients_with_zeros_evaluate_in_coefficient_form():
    config = config_from_dict({"coefficients": [-1, 0, 0, 1], "zeros": CUBE_ROOTS})
    polynomial = config.build_polynomial()
    assert polynomial.zeros is None
    assert polynomial.degree == 3


@pytest.mark.parametrize("bad", [
    {"width": 0},
    {"height": -5},
    {"width": 10.5},
    {"iterations": 0},
    {"r_range": -1.0},
    {"mode": "bisect"},
    {"tolerance": 0},
    {"zeros": None},
    {"zeros": []},
    {"colors": ["#ff0000"]},
    {"colors": [[300, 0, 0], [0, 0, 0], [0, 0, 0]]},
    {"r_min": 1.0, "r_max": -1.0, "i_min": 0.0, "i_max": 1.0},
    {"r_min": 1.0},
    {"r_range": [1, 2]},
    {"tolerance": None},
    {"r_min": "left", "r_max": 1.0, "i_min": 0.0, "i_max": 1.0},
    {"colors": 5},
    {"origin": {"re": 1}},
])
def test_invalid_configs_fail_fast(bad):
    cfg = {"width": 10, "height": 10, "zeros": CUBE_ROOTS}
    cfg.update(bad)
    if cfg.get("zeros") is None:
        cfg.pop("zeros")
    with pytest.raises(ValueError):
        config_from_dict(cfg)


def test_coefficients_only_is_rejected():
    with pytest.raises(ValueError):
        config_from_dict({"coefficients": [-1, 0, 0, 1]})


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_non_mapping_config(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError):
        load_config(path)


def test_shipped_configs_load():
    for name in ("cube_roots.yaml", "quintic.yaml"):
        config = load_config(ROOT / "configs" / name)
        assert config.zeros
        assert isinstance(config, FractalConfig)
