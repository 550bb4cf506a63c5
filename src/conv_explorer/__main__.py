"""Command entrypoint for the conv_explorer package."""

from __future__ import annotations

import argparse

from conv_explorer.app import main as ui_main
from conv_explorer.model.presets import HyperparameterPreset, KernelPreset
from conv_explorer.model.types import HyperparameterSet
from conv_explorer.services.playground import ConvPlayground
from conv_explorer.ui.render import format_formulas, format_grid, format_selection


class _NoTimer:
    """Scheduler for report mode, where nothing is ever animated."""

    def after(self, delay_ms: int, callback) -> None:  # noqa: ANN001 - never called in report mode
        raise RuntimeError("report mode does not schedule scan ticks")

    def after_cancel(self, job) -> None:  # noqa: ANN001 - never called in report mode
        return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convolution hyperparameter explorer")
    parser.add_argument(
        "--report",
        action="store_true",
        help="Print geometry, diagnostics and (optionally) output values instead of launching the UI.",
    )
    defaults = HyperparameterSet()
    parser.add_argument("--width", type=int, default=defaults.input_width, help="Input width in cells.")
    parser.add_argument("--height", type=int, default=defaults.input_height, help="Input height in cells.")
    parser.add_argument("--kernel", type=int, default=defaults.kernel_size, help="Kernel size (taps per side).")
    parser.add_argument("--stride", type=int, default=defaults.stride)
    parser.add_argument("--padding", type=int, default=defaults.padding)
    parser.add_argument("--dilation", type=int, default=defaults.dilation)
    parser.add_argument(
        "--preset",
        choices=[preset.name.lower() for preset in HyperparameterPreset],
        help="Apply a named kernel/stride/padding/dilation preset on top of the flags above.",
    )
    parser.add_argument(
        "--weights",
        type=KernelPreset.from_name,
        help=f"Kernel preset for output values: {', '.join(p.name.lower() for p in KernelPreset)}.",
    )
    parser.add_argument(
        "--select",
        nargs=2,
        type=int,
        metavar=("X", "Y"),
        help="Output cell whose receptive field is reported (default 0 0).",
    )
    return parser


def params_from_args(args: argparse.Namespace) -> HyperparameterSet:
    """Raises ValueError when a flag is outside its domain."""
    params = HyperparameterSet(
        input_width=args.width,
        input_height=args.height,
        kernel_size=args.kernel,
        stride=args.stride,
        padding=args.padding,
        dilation=args.dilation,
    )
    if args.preset:
        params = HyperparameterPreset[args.preset.upper()].apply(params)
    return params


def print_report(params: HyperparameterSet, weights: KernelPreset | None, select: tuple[int, int] | None) -> None:
    """Print the same information the window shows, as plain text."""
    playground = ConvPlayground(scheduler=_NoTimer(), params=params, kernel=weights or KernelPreset.EDGE_DETECT)
    if select is not None:
        playground.select(*select)

    print(
        f"Input {params.input_height} × {params.input_width}, kernel {params.kernel_size}, "
        f"stride {params.stride}, padding {params.padding}, dilation {params.dilation}"
    )
    for line in format_formulas(params, playground.geometry):
        print(line)

    issues = playground.diagnostics
    if issues:
        print("Parameter issues:")
        for issue in issues:
            print(f"  • {issue}")

    state = playground.scan_state
    print(format_selection(state.selected, playground.receptive_field(), weights))
    if state.selected is not None:
        print(f"Kernel center: {playground.kernel_center()}  taps: {len(playground.kernel_taps())}")

    if weights is not None and playground.output_dimensions.is_valid:
        if state.selected is not None:
            terms = playground.tap_terms()
            total = sum(sample * weight for _x, _y, sample, weight in terms)
            x, y = state.selected
            print(f"Selected value: {int(playground.output_grid[y, x])} (raw sum {total:.3f})")
        print("Output values:")
        print(format_grid(playground.output_grid))


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        params = params_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    if args.report:
        print_report(params, args.weights, tuple(args.select) if args.select else None)
        return

    ui_main(params)


if __name__ == "__main__":
    main()
