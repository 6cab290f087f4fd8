import time
from dataclasses import dataclass

import numpy as np

from newton_fractal.classify import FAILED, classify_point
from newton_fractal.newton import pick_solver
from newton_fractal.palette import Palette
from newton_fractal.sinks import ArraySink


@dataclass
class RenderResult:
    indices: np.ndarray  # (height, width) zero index per pixel, FAILED where the iteration broke
    total_iterations: int
    failed_pixels: int
    elapsed: float


def _candidate_zeros(polynomial, zeros):
    candidates = zeros if zeros is not None else polynomial.zeros
    if not candidates:
        raise ValueError("Rendering needs a non-empty list of zeros to classify against.")
    return tuple(candidates)


def render_columns(
    polynomial,
    viewport,
    width,
    height,
    x_start,
    x_stop,
    *,
    zeros,
    iterations=100,
    mode="fixed",
    tolerance=1e-12,
):
    """
    Yield (x, y, zero_index, n_iters) for columns x_start <= x < x_stop.

    Each pixel depends only on its own sample point, so disjoint column
    ranges can be computed independently once the derivative is cached.
    """
    solver = pick_solver(mode)
    for x in range(x_start, x_stop):
        for y in range(height):
            sample = viewport.sample(x, y, width, height)
            index, n = classify_point(polynomial, sample, zeros, iterations, solver, tolerance)
            yield x, y, index, n


def render_fractal(
    polynomial,
    viewport,
    sink,
    *,
    iterations=100,
    zeros=None,
    palette=None,
    mode="fixed",
    tolerance=1e-12,
    verbose=False,
):
    """
    Colour every pixel of `sink` by the zero Newton's method reaches from it.

    zeros:
      candidate zeros for classification; defaults to polynomial.zeros
    mode:
      "fixed"     -> exactly `iterations` Newton updates per pixel
      "converge"  -> stop early once within sqrt(tolerance) of a zero

    Pixels whose iteration divides by zero or ends non-finite get the
    palette's sentinel colour; they never abort the render.
    """
    width, height = sink.width, sink.height
    if width <= 0 or height <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
    if iterations < 1:
        raise ValueError(f"iterations must be >= 1, got {iterations}")
    zeros = _candidate_zeros(polynomial, zeros)
    pick_solver(mode)  # reject unknown modes before any work
    if palette is None:
        palette = Palette()

    # fill the derivative cache once, before the pixel loop reads it
    polynomial.derivative()

    if verbose:
        print(f"[render] {width}x{height} | iterations={iterations} | mode={mode} | zeros={len(zeros)}")

    start = time.time()
    indices = np.full((height, width), FAILED, dtype=np.int32)
    total_iters = 0
    failed = 0

    for x, y, index, n in render_columns(
        polynomial, viewport, width, height, 0, width,
        zeros=zeros, iterations=iterations, mode=mode, tolerance=tolerance,
    ):
        indices[y, x] = index
        total_iters += n
        if index == FAILED:
            failed += 1
        sink.set_pixel(x, y, palette.color_for(index))

    elapsed = time.time() - start
    if verbose:
        print(f"[render] done in {elapsed:.2f}s | total iterations={total_iters} | failed pixels={failed}")

    return RenderResult(indices=indices, total_iterations=total_iters, failed_pixels=failed, elapsed=elapsed)


def render_config(config, sink=None, verbose=True):
    """
    Render a validated FractalConfig. Returns (sink, RenderResult).
    """
    polynomial = config.build_polynomial()
    viewport = config.build_viewport()
    palette = config.build_palette()
    if sink is None:
        sink = ArraySink(config.width, config.height)

    if verbose:
        print(polynomial.describe())

    result = render_fractal(
        polynomial,
        viewport,
        sink,
        iterations=config.iterations,
        zeros=config.zeros,
        palette=palette,
        mode=config.mode,
        tolerance=config.tolerance,
        verbose=verbose,
    )
    return sink, result


def basin_fractions(indices, n_zeros):
    """
    Fraction of pixels assigned to each zero, plus the failed fraction.

    Returns (fractions array of length n_zeros, failed fraction).
    """
    indices = np.asarray(indices)
    total = indices.size
    if total == 0:
        return np.zeros(n_zeros, dtype=float), 0.0
    valid = indices[indices >= 0]
    counts = np.bincount(valid, minlength=n_zeros)[:n_zeros]
    return counts / total, float(np.count_nonzero(indices == FAILED)) / total
