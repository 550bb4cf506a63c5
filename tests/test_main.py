"""Tests for the command entrypoint and its text report."""

from __future__ import annotations

import pytest

import conv_explorer.__main__ as entry
from conv_explorer.model.presets import KernelPreset
from conv_explorer.model.types import HyperparameterSet


def test_report_lists_geometry_and_selection(capsys) -> None:
    entry.print_report(HyperparameterSet(), None, (2, 3))
    out = capsys.readouterr().out

    assert out.startswith("Input 12 × 12, kernel 3, stride 1, padding 1, dilation 1")
    assert "Output shape: 12 × 12" in out
    assert "Selected output: (3, 2)" in out
    assert "Kernel center: (3, 4)  taps: 9" in out
    assert "Output values:" not in out


def test_report_with_weights_prints_output_grid(capsys) -> None:
    params = HyperparameterSet(input_width=4, input_height=4, padding=1)
    entry.print_report(params, KernelPreset.IDENTITY, None)
    out = capsys.readouterr().out

    assert "Kernel: Identity" in out
    assert "Selected value: " in out
    assert "Output values:" in out
    # Identity reproduces the 4 x 4 synthetic input, one line per row.
    grid_lines = out.split("Output values:\n", 1)[1].strip().splitlines()
    assert len(grid_lines) == 4


def test_report_lists_parameter_issues(capsys) -> None:
    entry.print_report(HyperparameterSet(input_width=4, input_height=4, kernel_size=9, padding=0), None, None)
    out = capsys.readouterr().out

    assert "Parameter issues:" in out
    assert "  • Invalid parameters produce no output" in out
    assert "No output cell selected." in out


def test_main_report_mode_applies_preset(capsys) -> None:
    entry.main(["--report", "--preset", "downsample_2x", "--weights", "blur"])
    out = capsys.readouterr().out

    assert "stride 2" in out
    assert "Output shape: 6 × 6" in out
    assert "Kernel: Blur" in out


def test_main_rejects_out_of_domain_flags(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        entry.main(["--report", "--stride", "0"])
    assert excinfo.value.code == 2
    assert "stride must be positive" in capsys.readouterr().err


def test_main_rejects_unknown_weights() -> None:
    with pytest.raises(SystemExit):
        entry.main(["--report", "--weights", "laplacian"])


def test_main_launches_ui_without_report(monkeypatch) -> None:
    launched: list[HyperparameterSet] = []
    monkeypatch.setattr(entry, "ui_main", launched.append)

    entry.main(["--kernel", "5", "--padding", "2"])

    assert launched == [HyperparameterSet(kernel_size=5, padding=2)]
