"""Multiply-accumulate engine producing real output values.

The engine mirrors the geometry panels exactly: output cell (ox, oy)
reads the padded input starting at (ox * stride, oy * stride), with
taps `dilation` cells apart, and padding cells read as zero.
"""

from __future__ import annotations

import numpy as np

from conv_explorer.model.geometry import output_dimensions
from conv_explorer.model.rounding import round_half_up
from conv_explorer.model.types import HyperparameterSet


def pad_input(input_grid: np.ndarray, padding: int) -> np.ndarray:
    """Surround the input with `padding` rings of zeros."""
    return np.pad(np.asarray(input_grid, dtype=np.float64), padding, mode="constant", constant_values=0.0)


def convolve(input_grid: np.ndarray, kernel_weights: np.ndarray, params: HyperparameterSet) -> np.ndarray:
    """Convolve (cross-correlate) one channel and round to integers.

    Only kernel indices inside the weight matrix's own bounds contribute.
    Preset matrices are 3x3, so with kernel_size 5 the outer taps still
    appear in the receptive field but add nothing to the sum.

    Returns an `int64` array of shape (out_h, out_w), or an empty (0, 0)
    array when the parameters produce no output.
    """
    dims = output_dimensions(params)
    if not dims.is_valid:
        return np.zeros((0, 0), dtype=np.int64)

    weights = np.asarray(kernel_weights, dtype=np.float64)
    padded = pad_input(input_grid, params.padding)
    stride = params.stride
    dilation = params.dilation

    # Sum one shifted, strided view of the padded input per kernel tap.
    # Each view has exactly the output shape because the last placement
    # ends inside the padded input by construction of the output formula.
    acc = np.zeros((dims.height, dims.width), dtype=np.float64)
    rows_used = min(params.kernel_size, weights.shape[0])
    cols_used = min(params.kernel_size, weights.shape[1])
    for ky in range(rows_used):
        y0 = ky * dilation
        y1 = y0 + (dims.height - 1) * stride + 1
        for kx in range(cols_used):
            x0 = kx * dilation
            x1 = x0 + (dims.width - 1) * stride + 1
            acc += weights[ky, kx] * padded[y0:y1:stride, x0:x1:stride]

    return round_half_up(acc)


def convolve_at(
    input_grid: np.ndarray,
    kernel_weights: np.ndarray,
    params: HyperparameterSet,
    output_x: int,
    output_y: int,
) -> list[tuple[int, int, float, float]]:
    """Break one output cell into its per-tap terms.

    Returns `(padded_x, padded_y, sample, weight)` for every kernel index,
    in row-major kernel order. Taps outside the weight matrix report a
    weight of 0.0 so the listed products always add up to the output value
    before rounding.
    """
    grid = np.asarray(input_grid)
    weights = np.asarray(kernel_weights, dtype=np.float64)
    height, width = grid.shape
    start_x = output_x * params.stride
    start_y = output_y * params.stride

    terms: list[tuple[int, int, float, float]] = []
    for ky in range(params.kernel_size):
        for kx in range(params.kernel_size):
            px = start_x + kx * params.dilation
            py = start_y + ky * params.dilation
            ix = px - params.padding
            iy = py - params.padding
            sample = float(grid[iy, ix]) if 0 <= ix < width and 0 <= iy < height else 0.0
            in_bounds = ky < weights.shape[0] and kx < weights.shape[1]
            weight = float(weights[ky, kx]) if in_bounds else 0.0
            terms.append((px, py, sample, weight))
    return terms
