"""Canvas helpers for drawing the padded-input and output grids."""

from __future__ import annotations

import tkinter as tk
from typing import NamedTuple

from conv_explorer.ui.constants import CELL_FONT


class CellStyle(NamedTuple):
    fill: str
    outline: str
    text: str = ""
    text_color: str = "#334155"


def draw_cell_grid(
    canvas: tk.Canvas,
    cells: list[list[CellStyle]],
    margin: int,
    cell_size: int,
) -> None:
    """Draw a grid of styled cells on a canvas.

    Rectangle and text items are cached on the canvas and only the cells
    whose style changed since the last draw are reconfigured. That keeps
    scan ticks cheap: moving the selection by one cell touches only the
    cells entering or leaving the receptive field.
    """
    rows = len(cells)
    cols = len(cells[0]) if rows else 0
    key = (rows, cols, margin, cell_size)
    cache = getattr(canvas, "_cell_grid_cache", None)

    if cache is None or cache.get("key") != key:
        canvas.delete("all")
        ids: list[list[tuple[int, int]]] = []
        for r in range(rows):
            row_ids: list[tuple[int, int]] = []
            for c in range(cols):
                x0 = margin + c * cell_size
                y0 = margin + r * cell_size
                rect_id = canvas.create_rectangle(
                    x0,
                    y0,
                    x0 + cell_size,
                    y0 + cell_size,
                    fill="#ffffff",
                    outline="#e2e8f0",
                )
                text_id = canvas.create_text(
                    x0 + cell_size / 2,
                    y0 + cell_size / 2,
                    text="",
                    font=CELL_FONT,
                )
                row_ids.append((rect_id, text_id))
            ids.append(row_ids)

        cache = {
            "key": key,
            "ids": ids,
            "last": [[None] * cols for _ in range(rows)],
        }
        setattr(canvas, "_cell_grid_cache", cache)

    ids = cache["ids"]
    last = cache["last"]
    for r in range(rows):
        for c in range(cols):
            style = cells[r][c]
            if last[r][c] == style:
                continue
            rect_id, text_id = ids[r][c]
            canvas.itemconfigure(rect_id, fill=style.fill, outline=style.outline)
            canvas.itemconfigure(text_id, text=style.text, fill=style.text_color)
            last[r][c] = style


def clear_cell_grid(canvas: tk.Canvas) -> None:
    """Remove all grid items (used when there is no output to show)."""
    canvas.delete("all")
    setattr(canvas, "_cell_grid_cache", None)


def cell_at(
    px: float,
    py: float,
    margin: int,
    cell_size: int,
    rows: int,
    cols: int,
) -> tuple[int, int] | None:
    """Map a canvas pixel to a (col, row) cell, or None outside the grid."""
    if px < margin or py < margin:
        return None
    col = int((px - margin) // cell_size)
    row = int((py - margin) // cell_size)
    if row >= rows or col >= cols:
        return None
    return col, row
