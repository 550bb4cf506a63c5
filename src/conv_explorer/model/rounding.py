"""Rounding shared by the input generator and the convolution engine."""

from __future__ import annotations

import numpy as np


def round_half_up(values: np.ndarray) -> np.ndarray:
    """Round to the nearest integer, with .5 going up (toward +inf).

    `np.rint` rounds halves to even, which would shift some displayed
    values by one compared to what users compute by hand.
    """
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5).astype(np.int64)
