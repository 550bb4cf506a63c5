"""Tests for the immutable value types."""

from __future__ import annotations

import dataclasses

import pytest

from conv_explorer.model.types import HyperparameterSet, OutputDimensions, ReceptiveField, ScanState


def test_hyperparameter_defaults_match_playground_start() -> None:
    params = HyperparameterSet()
    assert (params.input_width, params.input_height) == (12, 12)
    assert (params.kernel_size, params.stride, params.padding, params.dilation) == (3, 1, 1, 1)
    assert (params.padded_width, params.padded_height) == (14, 14)


@pytest.mark.parametrize(
    ("changes", "message"),
    [
        ({"input_width": 0}, "input size must be positive"),
        ({"input_height": -1}, "input size must be positive"),
        ({"kernel_size": 0}, "kernel_size must be positive"),
        ({"stride": 0}, "stride must be positive"),
        ({"padding": -1}, "padding must be non-negative"),
        ({"dilation": 0}, "dilation must be positive"),
    ],
)
def test_hyperparameter_set_rejects_out_of_domain_values(changes: dict[str, int], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        HyperparameterSet(**changes)


def test_even_kernel_is_accepted() -> None:
    # The sliders only offer odd kernels, but the engine must not rely on it.
    assert HyperparameterSet(kernel_size=4).kernel_size == 4


def test_with_changes_returns_new_snapshot() -> None:
    params = HyperparameterSet()
    changed = params.with_changes(stride=2, padding=0)
    assert changed is not params
    assert (changed.stride, changed.padding) == (2, 0)
    # Original snapshot is untouched and frozen.
    assert params.stride == 1
    with pytest.raises(dataclasses.FrozenInstanceError):
        params.stride = 3  # type: ignore[misc]


def test_with_changes_validates() -> None:
    with pytest.raises(ValueError):
        HyperparameterSet().with_changes(dilation=0)


def test_output_dimensions_validity() -> None:
    assert OutputDimensions(5, 2).is_valid
    assert OutputDimensions(5, 2).cell_count == 10
    assert not OutputDimensions(0, 4).is_valid
    assert not OutputDimensions(3, -2).is_valid
    assert OutputDimensions(3, -2).cell_count == 0


def test_receptive_field_contains_inclusive_bounds() -> None:
    field = ReceptiveField(start_x=2, start_y=0, end_x=4, end_y=2)
    assert field.size == 3
    assert field.contains(2, 0)
    assert field.contains(4, 2)
    assert not field.contains(5, 2)
    assert not field.contains(3, 3)


def test_scan_state_string() -> None:
    assert str(ScanState((1, 2), True, 350)) == "Scan: scanning, selected=(1, 2), interval=350ms"
    assert str(ScanState(None, False, 60)) == "Scan: idle, selected=none, interval=60ms"
