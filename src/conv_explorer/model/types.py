"""Value types shared by the geometry, convolution, and scan modules.

Everything here is immutable. A hyperparameter edit never mutates an
existing object; it produces a new snapshot that downstream pure functions
consume from scratch.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class HyperparameterSet:
    """One complete snapshot of the convolution settings.

    Attributes:
        input_width: Unpadded input width in cells
        input_height: Unpadded input height in cells
        kernel_size: Side length of the square kernel, in taps
        stride: Step between successive kernel placements
        padding: Zero cells added on every side
        dilation: Spacing between consecutive kernel taps
    """

    input_width: int = 12
    input_height: int = 12
    kernel_size: int = 3
    stride: int = 1
    padding: int = 1
    dilation: int = 1

    def __post_init__(self) -> None:
        """Reject values outside each field's domain.

        Combinations that merely produce no output (kernel larger than the
        padded input, for example) are allowed; only impossible values fail.
        """
        if self.input_width < 1 or self.input_height < 1:
            raise ValueError(
                f"input size must be positive, got {self.input_width}x{self.input_height}"
            )
        if self.kernel_size < 1:
            raise ValueError(f"kernel_size must be positive, got {self.kernel_size}")
        if self.stride < 1:
            raise ValueError(f"stride must be positive, got {self.stride}")
        if self.padding < 0:
            raise ValueError(f"padding must be non-negative, got {self.padding}")
        if self.dilation < 1:
            raise ValueError(f"dilation must be positive, got {self.dilation}")

    @property
    def padded_width(self) -> int:
        return self.input_width + 2 * self.padding

    @property
    def padded_height(self) -> int:
        return self.input_height + 2 * self.padding

    def with_changes(self, **changes: int) -> HyperparameterSet:
        """Return a new snapshot with some fields replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class OutputDimensions:
    """Output grid size. Zero or negative values mean "no valid output"."""

    width: int
    height: int

    @property
    def is_valid(self) -> bool:
        return self.width > 0 and self.height > 0

    @property
    def cell_count(self) -> int:
        return self.width * self.height if self.is_valid else 0


@dataclass(frozen=True)
class ReceptiveField:
    """Inclusive bounds of the padded-input region read by one output cell."""

    start_x: int
    start_y: int
    end_x: int
    end_y: int

    @property
    def size(self) -> int:
        # Fields are always square: both axes span the effective kernel.
        return self.end_x - self.start_x + 1

    def contains(self, x: int, y: int) -> bool:
        return self.start_x <= x <= self.end_x and self.start_y <= y <= self.end_y


@dataclass(frozen=True)
class ConvGeometry:
    """Derived geometry for one hyperparameter snapshot."""

    effective_kernel: int
    padded_width: int
    padded_height: int
    output: OutputDimensions


@dataclass(frozen=True)
class ScanState:
    """Snapshot of the scan controller returned by every controller call.

    `selected` is an `(x, y)` output coordinate, or `None` when the current
    geometry has no valid output.
    """

    selected: tuple[int, int] | None
    running: bool
    interval_ms: int

    def __str__(self) -> str:
        where = "none" if self.selected is None else f"({self.selected[0]}, {self.selected[1]})"
        mode = "scanning" if self.running else "idle"
        return f"Scan: {mode}, selected={where}, interval={self.interval_ms}ms"
