"""
Experiment: basin fractions vs. Newton iteration count

For every iteration count in the config's `sweep.iterations` list, render the
fractal with the vectorized solver and record which fraction of the grid
lands in each zero's basin (plus pixels that failed to produce a finite
value).

Output:
- basin_sweep.csv
- basin_sweep.png
"""

import argparse
import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import yaml

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from newton_fractal.config import config_from_dict  # noqa: E402
from newton_fractal.render import basin_fractions  # noqa: E402
from newton_fractal.vectorized import newton_grid  # noqa: E402


def run_basin_sweep(config_path: str, outdir: str):
    with open(config_path, "r") as f:
        cfg = yaml.safe_load(f) or {}

    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    sweep = cfg.pop("sweep", {}) or {}
    iteration_counts = [int(n) for n in sweep.get("iterations", [1, 2, 5, 10, 20, 50, 100])]
    if not iteration_counts or min(iteration_counts) < 1:
        raise ValueError(f"sweep.iterations must be positive integers, got {iteration_counts}")

    config = config_from_dict(cfg)
    polynomial = config.build_polynomial()
    viewport = config.build_viewport()
    zeros = config.zeros

    print(f"[sweep] {config.width}x{config.height} | zeros={len(zeros)} | iterations={iteration_counts}")

    rows = []
    for n_iter in iteration_counts:
        indices = newton_grid(polynomial, viewport, config.width, config.height,
                              iterations=n_iter, zeros=zeros)
        fractions, failed = basin_fractions(indices, len(zeros))
        row = {"iterations": n_iter, "failed_fraction": failed}
        for k, frac in enumerate(fractions):
            row[f"zero_{k}"] = float(frac)
        rows.append(row)
        print(f"[sweep] iterations={n_iter:4d} | " +
              " ".join(f"z{k}={f:.3f}" for k, f in enumerate(fractions)) +
              f" | failed={failed:.3f}")

    df = pd.DataFrame(rows)
    csv_path = outdir / "basin_sweep.csv"
    df.to_csv(csv_path, index=False)

    fig, ax = plt.subplots(figsize=(7, 4))
    for k in range(len(zeros)):
        ax.plot(df["iterations"], df[f"zero_{k}"], marker="o", label=f"zero {k}: {zeros[k]}")
    ax.plot(df["iterations"], df["failed_fraction"], marker="x", linestyle="--", color="k", label="failed")
    ax.set_xscale("log")
    ax.set_ylim(0.0, 1.0)
    ax.set_xlabel("Newton iterations")
    ax.set_ylabel("Fraction of pixels")
    ax.set_title("Basin fractions")
    ax.legend(fontsize=8)
    fig.tight_layout()
    png_path = outdir / "basin_sweep.png"
    fig.savefig(png_path, dpi=150)
    plt.close(fig)

    print(f"[sweep] wrote {csv_path} and {png_path}")
    return df


def main():
    parser = argparse.ArgumentParser(description="Basin fractions vs. iteration count")
    parser.add_argument("--config", required=True, help="Path to a fractal YAML config with a 'sweep' section")
    parser.add_argument("--outdir", default="results/basin_sweep")
    args = parser.parse_args()

    config_path = Path(args.config)
    if not config_path.exists():
        print(f"Error: Config file not found: {config_path}")
        return 1

    try:
        run_basin_sweep(str(config_path), args.outdir)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
