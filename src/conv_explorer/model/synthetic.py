"""Deterministic sample input used when the explorer shows real values.

The pattern is a radial gradient: bright (255) at the grid center and
fading to 0 toward the corners. It depends only on (width, height), so
results are cached per size and shared between redraws.
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np

from conv_explorer.model.rounding import round_half_up


@lru_cache(maxsize=64)
def generate_input(width: int, height: int) -> np.ndarray:
    """Build a `height x width` grid of integer samples in [0, 255].

    Steps:
    1) Measure each cell's Euclidean distance to the center (width/2, height/2).
    2) Divide by the center-to-corner distance so values land in [0, 1].
    3) Invert and scale to [0, 255], round, then clamp.

    The returned array is read-only because the same object is handed
    to every caller asking for this size.
    """
    center_x = width / 2.0
    center_y = height / 2.0
    max_dist = float(np.sqrt(center_x**2 + center_y**2))

    rows, cols = np.indices((height, width), dtype=np.float64)
    dist = np.sqrt((cols - center_x) ** 2 + (rows - center_y) ** 2)
    if max_dist > 0.0:
        scaled = 255.0 * (1.0 - dist / max_dist)
    else:
        scaled = np.full((height, width), 255.0)

    grid = np.clip(round_half_up(scaled), 0, 255)
    grid.setflags(write=False)
    return grid
