"""Tests for the deterministic radial sample input."""

from __future__ import annotations

import math

import pytest

from conv_explorer.model.synthetic import generate_input


def _expected(x: int, y: int, width: int, height: int) -> int:
    # Same recipe spelled out with the math module, cell by cell.
    cx, cy = width / 2, height / 2
    dist = math.sqrt((x - cx) ** 2 + (y - cy) ** 2)
    max_dist = math.sqrt(cx**2 + cy**2)
    return max(0, min(255, math.floor(255 * (1 - dist / max_dist) + 0.5)))


def test_grid_shape_is_height_by_width() -> None:
    grid = generate_input(7, 4)
    assert grid.shape == (4, 7)


def test_values_match_radial_recipe() -> None:
    width, height = 9, 6
    grid = generate_input(width, height)
    for y in range(height):
        for x in range(width):
            assert int(grid[y, x]) == _expected(x, y, width, height)


def test_center_is_brightest_and_corner_darkest() -> None:
    grid = generate_input(12, 12)
    assert int(grid[6, 6]) == 255
    assert int(grid[0, 0]) == 0
    assert int(grid.max()) == 255
    assert int(grid.min()) >= 0


def test_same_size_returns_same_cached_grid() -> None:
    first = generate_input(10, 8)
    second = generate_input(10, 8)
    assert first is second


def test_cached_grid_is_read_only() -> None:
    grid = generate_input(5, 5)
    with pytest.raises(ValueError):
        grid[0, 0] = 1


def test_single_cell_grid() -> None:
    # Center (0.5, 0.5) is the cell's own corner distance away.
    grid = generate_input(1, 1)
    assert grid.shape == (1, 1)
    assert int(grid[0, 0]) == _expected(0, 0, 1, 1)
