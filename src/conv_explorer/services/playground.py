"""One explorer instance: current snapshot, derived values, and the scan.

The UI and the CLI talk only to this class. It holds the current
hyperparameter snapshot and re-derives everything downstream from it on
each replacement, so nothing shown can come from a stale snapshot. The
synthetic input is the one cached value (see `generate_input`).
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from conv_explorer.model.convolution import convolve, convolve_at
from conv_explorer.model.geometry import describe_geometry, kernel_center, kernel_tap_set, receptive_field
from conv_explorer.model.presets import HyperparameterPreset, KernelPreset
from conv_explorer.model.synthetic import generate_input
from conv_explorer.model.types import (
    ConvGeometry,
    HyperparameterSet,
    OutputDimensions,
    ReceptiveField,
    ScanState,
)
from conv_explorer.model.validation import validate
from conv_explorer.services.scan import SCAN_DEFAULT_INTERVAL_MS, ScanController, Scheduler


class ConvPlayground:
    """Read/replace interface over a hyperparameter snapshot plus its scan."""

    def __init__(
        self,
        scheduler: Scheduler,
        params: HyperparameterSet | None = None,
        kernel: KernelPreset = KernelPreset.EDGE_DETECT,
        interval_ms: int = SCAN_DEFAULT_INTERVAL_MS,
        on_tick: Callable[[ScanState], None] | None = None,
    ) -> None:
        self._params = params if params is not None else HyperparameterSet()
        self._kernel = kernel
        self._recompute()
        self._scan = ScanController(
            scheduler,
            self._geometry.output.width,
            self._geometry.output.height,
            interval_ms=interval_ms,
            on_tick=on_tick,
        )

    # ------------------------------
    # Snapshot read / replace
    # ------------------------------
    @property
    def params(self) -> HyperparameterSet:
        return self._params

    def replace_params(self, params: HyperparameterSet) -> ScanState:
        """Swap in a new snapshot and keep the selection valid for it."""
        self._params = params
        self._recompute()
        return self._scan.resize(self._geometry.output.width, self._geometry.output.height)

    def update(self, **changes: int) -> ScanState:
        """Replace a few fields. Raises ValueError for out-of-domain values."""
        return self.replace_params(self._params.with_changes(**changes))

    def apply_preset(self, preset: HyperparameterPreset) -> ScanState:
        return self.replace_params(preset.apply(self._params))

    @property
    def kernel(self) -> KernelPreset:
        return self._kernel

    def set_kernel(self, kernel: KernelPreset) -> None:
        self._kernel = kernel
        self._output_grid = convolve(self.input_grid, kernel.weights, self._params)

    # ------------------------------
    # Derived values
    # ------------------------------
    @property
    def geometry(self) -> ConvGeometry:
        return self._geometry

    @property
    def effective_kernel_size(self) -> int:
        return self._geometry.effective_kernel

    @property
    def output_dimensions(self) -> OutputDimensions:
        return self._geometry.output

    @property
    def diagnostics(self) -> list[str]:
        return list(self._diagnostics)

    @property
    def input_grid(self) -> np.ndarray:
        return generate_input(self._params.input_width, self._params.input_height)

    @property
    def output_grid(self) -> np.ndarray:
        return self._output_grid

    def receptive_field(self, x: int | None = None, y: int | None = None) -> ReceptiveField | None:
        """Field for (x, y), or for the current selection when omitted."""
        target = self._target(x, y)
        if target is None:
            return None
        return receptive_field(target[0], target[1], self._params.stride, self._geometry.effective_kernel)

    def kernel_taps(self, x: int | None = None, y: int | None = None) -> frozenset[tuple[int, int]]:
        field = self.receptive_field(x, y)
        if field is None:
            return frozenset()
        return kernel_tap_set(field, self._params.dilation)

    def kernel_center(self, x: int | None = None, y: int | None = None) -> tuple[int, int] | None:
        field = self.receptive_field(x, y)
        return None if field is None else kernel_center(field)

    def tap_terms(self, x: int | None = None, y: int | None = None) -> list[tuple[int, int, float, float]]:
        """Per-tap (padded_x, padded_y, sample, weight) for one output cell."""
        target = self._target(x, y)
        if target is None:
            return []
        return convolve_at(self.input_grid, self._kernel.weights, self._params, target[0], target[1])

    # ------------------------------
    # Scan controller
    # ------------------------------
    @property
    def scan_state(self) -> ScanState:
        return self._scan.state

    def start_scan(self, interval_ms: int | None = None) -> ScanState:
        return self._scan.start(interval_ms)

    def stop_scan(self) -> ScanState:
        return self._scan.stop()

    def select(self, x: int, y: int) -> ScanState:
        return self._scan.select(x, y)

    def close(self) -> None:
        """Cancel any pending scan tick before the instance is discarded."""
        self._scan.close()

    # ------------------------------
    # Internal helpers
    # ------------------------------
    def _recompute(self) -> None:
        self._geometry = describe_geometry(self._params)
        self._diagnostics = validate(self._params)
        self._output_grid = convolve(self.input_grid, self._kernel.weights, self._params)

    def _target(self, x: int | None, y: int | None) -> tuple[int, int] | None:
        if x is not None and y is not None:
            return x, y
        return self._scan.state.selected
