import argparse
from pathlib import Path
import os
import sys

# Ensure repository root is on sys.path so `from newton_fractal...` works when
# running this script directly (e.g. `python scripts/make_image.py`).
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from newton_fractal.config import config_from_dict, load_config
from newton_fractal.render import render_config
from newton_fractal.utils import parse_complex_list

CUBE_ROOTS = "1;-0.5+0.86602540378j;-0.5-0.86602540378j"


def build_config(args):
    if args.config:
        config = load_config(args.config)
        if args.outfile:
            config.output = args.outfile
        return config

    zeros = parse_complex_list(args.zeros)
    cfg = {
        "width": args.width,
        "height": args.height,
        "r_range": args.r_range,
        "origin": args.origin,
        "zeros": [[z.real, z.imag] for z in zeros],
        "iterations": args.max_iter,
        "mode": args.mode,
        "tolerance": args.tol,
        "output": args.outfile,
    }
    return config_from_dict(cfg)


def main():
    parser = argparse.ArgumentParser(description="Render a Newton fractal to a PNG.")
    parser.add_argument("--config", type=str, default=None,
                        help="YAML config; inline flags below are ignored when given")
    parser.add_argument("--width", type=int, default=800)
    parser.add_argument("--height", type=int, default=600)
    parser.add_argument("--r_range", type=float, default=5.0)
    parser.add_argument("--origin", type=str, default="0+0j")
    parser.add_argument("--zeros", type=str, default=CUBE_ROOTS,
                        help="semicolon separated zeros, e.g. '1;-1;1j'")
    parser.add_argument("--max_iter", type=int, default=100)
    parser.add_argument("--mode", type=str, default="fixed", choices=["fixed", "converge"])
    parser.add_argument("--tol", type=float, default=1e-12)
    parser.add_argument("--outfile", type=str, default=None)

    args = parser.parse_args()

    try:
        config = build_config(args)
    except (ValueError, FileNotFoundError) as e:
        print(f"[run] config error: {e}")
        return 1

    if not config.output:
        print("[run] config error: no output path (use --outfile or 'output:' in the config)")
        return 1

    out_path = Path(config.output)
    print(f"[run] {config.width}x{config.height}, zeros={len(config.zeros)}, saving to {out_path}")

    sink, result = render_config(config)
    sink.save(out_path)
    print("[run] done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
