"""Reusable classification/color/text helpers for grid rendering.

These helpers are pure functions (no UI state), which makes them easy
to test and lets the CLI report reuse the same wording as the window.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from conv_explorer.model.geometry import is_kernel_tap, is_valid_kernel_anchor, kernel_center
from conv_explorer.model.presets import KernelPreset
from conv_explorer.model.types import ConvGeometry, HyperparameterSet, ReceptiveField


class CellRole(str, Enum):
    """What one padded-input cell means for the current selection."""

    CENTER = "center"
    TAP = "tap"
    SKIPPED = "skipped"
    STRIDE_ANCHOR = "stride_anchor"
    PADDING = "padding"
    PLAIN = "plain"


def is_padding_cell(x: int, y: int, params: HyperparameterSet) -> bool:
    """True for cells of the zero border around the real input."""
    p = params.padding
    return x < p or x >= p + params.input_width or y < p or y >= p + params.input_height


def classify_padded_cell(
    x: int,
    y: int,
    params: HyperparameterSet,
    field: ReceptiveField | None,
    show_padding: bool = True,
    show_stride_grid: bool = True,
) -> CellRole:
    """Pick the role that decides a padded-input cell's color.

    Priority: receptive-field roles first (center, tap, skipped), then the
    stride grid, then the padding border.
    """
    if field is not None and field.contains(x, y):
        if (x, y) == kernel_center(field):
            return CellRole.CENTER
        if is_kernel_tap(x, y, field, params.dilation):
            return CellRole.TAP
        # Inside the field but between dilated taps.
        return CellRole.SKIPPED

    padding_cell = is_padding_cell(x, y, params)
    if not padding_cell and show_stride_grid and params.stride > 1:
        if is_valid_kernel_anchor(x, y, params.padding, params.input_width, params.input_height, params.stride):
            return CellRole.STRIDE_ANCHOR
    if padding_cell and show_padding:
        return CellRole.PADDING
    return CellRole.PLAIN


def padded_cell_text(
    x: int,
    y: int,
    role: CellRole,
    params: HyperparameterSet,
    input_grid: np.ndarray | None = None,
    show_numbers: bool = False,
    show_values: bool = False,
) -> str:
    """Short label drawn inside a padded-input cell ("" for none)."""
    if show_numbers:
        return f"{y},{x}"
    if show_values and input_grid is not None and not is_padding_cell(x, y, params):
        return str(int(input_grid[y - params.padding, x - params.padding]))
    if role is CellRole.CENTER:
        return "⊗"
    if role is CellRole.SKIPPED:
        return "·"
    if role is CellRole.PADDING:
        return "0"
    if role is CellRole.STRIDE_ANCHOR:
        return "•"
    return ""


def mix_with_white(hex_color: str, intensity: float) -> str:
    """Blend a color with white based on intensity in [0,1].

    intensity=0 -> white
    intensity=1 -> original color
    """
    # Clamp value so invalid inputs still produce valid color output.
    intensity = float(np.clip(intensity, 0.0, 1.0))
    hex_color = hex_color.lstrip("#")
    r = int(hex_color[0:2], 16)
    g = int(hex_color[2:4], 16)
    b = int(hex_color[4:6], 16)
    # Linear interpolation channel-by-channel toward white (255,255,255).
    rr = int((255 * (1.0 - intensity)) + (r * intensity))
    gg = int((255 * (1.0 - intensity)) + (g * intensity))
    bb = int((255 * (1.0 - intensity)) + (b * intensity))
    return f"#{rr:02x}{gg:02x}{bb:02x}"


def value_intensities(grid: np.ndarray) -> np.ndarray:
    """Map grid values onto [0, 1] for shading (min -> 0, max -> 1).

    A constant grid maps to all zeros.
    """
    values = np.asarray(grid, dtype=np.float64)
    if values.size == 0:
        return values
    lo = float(values.min())
    span = float(values.max()) - lo
    if span <= 0.0:
        return np.zeros_like(values)
    return (values - lo) / span


def format_formulas(params: HyperparameterSet, geometry: ConvGeometry) -> list[str]:
    """Formula lines with current numbers substituted in."""
    out = geometry.output
    lines = [
        f"effective_kernel = (kernel - 1) · dilation + 1 = {geometry.effective_kernel}",
        f"outW = ⌊(inW + 2·padding − effective_kernel) / stride⌋ + 1 = {out.width}",
        f"outH = ⌊(inH + 2·padding − effective_kernel) / stride⌋ + 1 = {out.height}",
    ]
    if out.is_valid:
        lines.append(f"Output shape: {out.height} × {out.width}")
    else:
        lines.append(
            "(Parameters currently yield no valid output; try reducing kernel / padding "
            "or increasing input.)"
        )
    lines.append(f"Padded input: {params.padded_height} × {params.padded_width}")
    return lines


def format_selection(
    selected: tuple[int, int] | None,
    field: ReceptiveField | None,
    kernel: KernelPreset | None = None,
) -> str:
    """One-paragraph summary of the selected output cell.

    Coordinates are printed (row, col) to match the grid labels.
    """
    if selected is None or field is None:
        return "No output cell selected."
    x, y = selected
    text = (
        f"Selected output: ({y}, {x}) → RF bounds on padded input: "
        f"[y: {field.start_y}..{field.end_y}], [x: {field.start_x}..{field.end_x}]"
    )
    if kernel is not None:
        rows = [" ".join(f"{w:5.1f}" for w in row) for row in kernel.weights]
        text += f"\nKernel: {kernel.label}\n" + "\n".join(rows)
    return text


def format_grid(grid: np.ndarray) -> str:
    """Right-aligned text table of an integer grid."""
    values = np.asarray(grid)
    if values.size == 0:
        return "(empty)"
    cell = max(len(str(int(v))) for v in values.flat)
    return "\n".join(" ".join(f"{int(v):>{cell}}" for v in row) for row in values)
