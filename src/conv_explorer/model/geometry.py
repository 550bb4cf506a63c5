"""Pure geometry helpers for a single 2-D convolution.

These functions are the math behind every panel of the explorer:
output size, which padded-input cells one output cell reads, which of
those cells are actual kernel taps, and where the kernel can anchor.

All coordinates here live in *padded* input space: cell (0, 0) is the
top-left padding cell, and the first real input sample sits at
(padding, padding).
"""

from __future__ import annotations

from conv_explorer.model.types import ConvGeometry, HyperparameterSet, OutputDimensions, ReceptiveField


def effective_kernel_size(kernel_size: int, dilation: int) -> int:
    """Footprint of a kernel once dilation spacing is applied.

    effective = (kernel_size - 1) * dilation + 1

    An odd kernel always has an odd footprint, so the kernel center is a
    real cell rather than a point between two cells.
    """
    return (kernel_size - 1) * dilation + 1


def output_dimension(input_size: int, padding: int, effective_kernel: int, stride: int) -> int:
    """Number of kernel placements along one axis.

    out = floor((input + 2 * padding - effective_kernel) / stride) + 1

    Python's `//` floors toward negative infinity, which is what the formula
    needs when the kernel overhangs the padded input. The result can be zero
    or negative; callers treat that as "no valid output".
    """
    return (input_size + 2 * padding - effective_kernel) // stride + 1


def output_dimensions(params: HyperparameterSet) -> OutputDimensions:
    """Output width and height for a full hyperparameter snapshot."""
    eff = effective_kernel_size(params.kernel_size, params.dilation)
    return OutputDimensions(
        width=output_dimension(params.input_width, params.padding, eff, params.stride),
        height=output_dimension(params.input_height, params.padding, eff, params.stride),
    )


def describe_geometry(params: HyperparameterSet) -> ConvGeometry:
    """Bundle every derived size for one snapshot."""
    return ConvGeometry(
        effective_kernel=effective_kernel_size(params.kernel_size, params.dilation),
        padded_width=params.padded_width,
        padded_height=params.padded_height,
        output=output_dimensions(params),
    )


def receptive_field(output_x: int, output_y: int, stride: int, effective_kernel: int) -> ReceptiveField:
    """Padded-input region read to produce output cell (output_x, output_y).

    Defined for any coordinate, including ones outside the current output
    grid; range checks belong to the caller.
    """
    start_x = output_x * stride
    start_y = output_y * stride
    return ReceptiveField(
        start_x=start_x,
        start_y=start_y,
        end_x=start_x + effective_kernel - 1,
        end_y=start_y + effective_kernel - 1,
    )


def kernel_tap_set(field: ReceptiveField, dilation: int) -> frozenset[tuple[int, int]]:
    """Cells inside `field` that the kernel actually samples.

    Taps start at the field's top-left corner and are `dilation` cells
    apart on each axis, so a field of footprint E holds
    ((E - 1) // dilation + 1) ** 2 == kernel_size ** 2 taps.
    """
    span = range(0, field.size, dilation)
    return frozenset((field.start_x + dx, field.start_y + dy) for dy in span for dx in span)


def is_kernel_tap(x: int, y: int, field: ReceptiveField, dilation: int) -> bool:
    """Membership test equivalent to `(x, y) in kernel_tap_set(field, dilation)`."""
    rel_x = x - field.start_x
    rel_y = y - field.start_y
    if rel_x < 0 or rel_x >= field.size or rel_y < 0 or rel_y >= field.size:
        return False
    return rel_x % dilation == 0 and rel_y % dilation == 0


def kernel_center(field: ReceptiveField) -> tuple[int, int]:
    """Middle cell of a receptive field, as (x, y)."""
    return (field.start_x + field.end_x) // 2, (field.start_y + field.end_y) // 2


def is_valid_kernel_anchor(
    padded_x: int,
    padded_y: int,
    padding: int,
    input_width: int,
    input_height: int,
    stride: int,
) -> bool:
    """Whether a padded-input cell lies on the stride grid of real input cells.

    Used to mark the cells a kernel placement can start from when the
    stride is larger than one.
    """
    if padded_x < padding or padded_x >= padding + input_width:
        return False
    if padded_y < padding or padded_y >= padding + input_height:
        return False
    return (padded_x - padding) % stride == 0 and (padded_y - padding) % stride == 0
