"""Named kernels and named hyperparameter combinations.

Both tables are closed enums so the UI can list every option and tests
can check them exhaustively. Members only carry data.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from conv_explorer.model.types import HyperparameterSet

_NINTH = 1.0 / 9.0


class KernelPreset(Enum):
    """3x3 weight matrices offered in the kernel picker."""

    EDGE_DETECT = ("Edge Detection", ((-1, -1, -1), (-1, 8, -1), (-1, -1, -1)))
    BLUR = ("Blur", ((_NINTH, _NINTH, _NINTH), (_NINTH, _NINTH, _NINTH), (_NINTH, _NINTH, _NINTH)))
    SHARPEN = ("Sharpen", ((0, -1, 0), (-1, 5, -1), (0, -1, 0)))
    IDENTITY = ("Identity", ((0, 0, 0), (0, 1, 0), (0, 0, 0)))
    EMBOSS = ("Emboss", ((-2, -1, 0), (-1, 1, 1), (0, 1, 2)))

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def weights(self) -> np.ndarray:
        """Fresh read-only float array; callers cannot alter the table."""
        arr = np.array(self.value[1], dtype=np.float64)
        arr.setflags(write=False)
        return arr

    @classmethod
    def from_name(cls, name: str) -> KernelPreset:
        """Look up by member name (`"edge_detect"`) or display label (`"Edge Detection"`)."""
        key = name.strip()
        for preset in cls:
            if key.lower() in (preset.name.lower(), preset.label.lower()):
                return preset
        raise ValueError(f"Unknown kernel preset: {name!r}")


class HyperparameterPreset(Enum):
    """Quick-start kernel/stride/padding/dilation combinations.

    Value layout: (label, description, kernel_size, stride, padding, dilation).
    """

    SAME_PADDING = ("Same Padding", "Maintains input size", 3, 1, 1, 1)
    VALID_PADDING = ("Valid Padding", "No padding", 3, 1, 0, 1)
    DOWNSAMPLE_2X = ("Downsample 2x", "Halves spatial size", 3, 2, 1, 1)
    LARGE_KERNEL = ("Large Kernel", "5x5 convolution", 5, 1, 2, 1)
    DILATED_CONV = ("Dilated Conv", "Expands receptive field", 3, 1, 2, 2)

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def description(self) -> str:
        return self.value[1]

    def apply(self, params: HyperparameterSet) -> HyperparameterSet:
        """Return `params` with this preset's settings; input size is kept."""
        _label, _desc, kernel_size, stride, padding, dilation = self.value
        return params.with_changes(
            kernel_size=kernel_size,
            stride=stride,
            padding=padding,
            dilation=dilation,
        )
