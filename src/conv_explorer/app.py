from __future__ import annotations

"""Interactive convolution hyperparameter explorer.

The UI lets users:
- move kernel size / stride / padding / dilation / input size sliders
- read the output-size formulas with live numbers
- click an output cell to highlight its receptive field and kernel taps
- animate a scan over every output cell
- optionally see real sample values and convolution results for a preset kernel

All math lives in `conv_explorer.model`; this class only wires widgets
to a `ConvPlayground` instance and redraws from its current snapshot.
"""

import sys
import tkinter as tk
from pathlib import Path

# Allow running this file directly (e.g. `python src/conv_explorer/app.py`)
# by ensuring `src/` is on sys.path for absolute package imports.
if __package__ in (None, ""):
    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from conv_explorer.model.presets import HyperparameterPreset, KernelPreset
from conv_explorer.model.types import HyperparameterSet, ScanState
from conv_explorer.services.playground import ConvPlayground
from conv_explorer.ui.canvas import CellStyle, cell_at, clear_cell_grid, draw_cell_grid
from conv_explorer.ui.constants import (
    CELL_COLORS,
    COLOR_BG,
    COLOR_CELL_TEXT,
    COLOR_CELL_TEXT_ON_DARK,
    COLOR_OUTPUT_SELECTED,
    COLOR_OUTPUT_VALUE,
    COLOR_STATUS_INFO_BG,
    COLOR_STATUS_INFO_FG,
    COLOR_STATUS_WARN_BG,
    COLOR_STATUS_WARN_FG,
    GRID_CELL_SIZE,
    GRID_MARGIN,
    SCAN_SPEED_DEFAULT,
    WINDOW_MIN_SIZE,
    WINDOW_SIZE,
)
from conv_explorer.ui.layout import bind_shortcuts, build_layout, configure_styles
from conv_explorer.ui.render import (
    CellRole,
    classify_padded_cell,
    format_formulas,
    format_selection,
    mix_with_white,
    padded_cell_text,
    value_intensities,
)


class ConvPlaygroundUI:
    """Main application class for the convolution explorer.

    Think of this class as:
    - the "controller" (responds to slider, checkbox, and click events),
    - the "view" updater (redraws both grids and the text panels),
    - the owner of the `ConvPlayground` engine instance.
    """

    def __init__(self, root: tk.Tk, params: HyperparameterSet | None = None) -> None:
        self.root = root
        self.root.title("CNN Hyperparameter Playground")
        self.root.geometry(WINDOW_SIZE)
        self.root.minsize(*WINDOW_MIN_SIZE)
        self.root.configure(bg=COLOR_BG)

        self.status_var = tk.StringVar(value="Ready.")

        # The Tk root doubles as the scan scheduler: it already provides
        # after(...) / after_cancel(...).
        self.playground = ConvPlayground(
            scheduler=self.root,
            params=params,
            interval_ms=SCAN_SPEED_DEFAULT,
            on_tick=self._on_scan_tick,
        )

        configure_styles(self.root)
        build_layout(self)
        bind_shortcuts(self)

        self.root.protocol("WM_DELETE_WINDOW", self._on_close)
        self.refresh()

    def _set_status(self, message: str, level: str = "info") -> None:
        """Update bottom status banner text + color based on severity."""
        self.status_var.set(message)
        if level == "warn":
            self.status_label.configure(bg=COLOR_STATUS_WARN_BG, fg=COLOR_STATUS_WARN_FG)
        else:
            self.status_label.configure(bg=COLOR_STATUS_INFO_BG, fg=COLOR_STATUS_INFO_FG)

    # ------------------------------
    # Input interactions
    # ------------------------------
    def _read_params(self) -> HyperparameterSet:
        """Build a snapshot from the slider variables.

        Raises ValueError (bad value) or tk.TclError (unreadable widget text).
        """
        return HyperparameterSet(
            input_width=int(self.width_var.get()),
            input_height=int(self.height_var.get()),
            kernel_size=int(self.kernel_var.get()),
            stride=int(self.stride_var.get()),
            padding=int(self.padding_var.get()),
            dilation=int(self.dilation_var.get()),
        )

    def _sync_param_vars(self) -> None:
        """Push the playground snapshot back into the slider variables."""
        params = self.playground.params
        self.width_var.set(params.input_width)
        self.height_var.set(params.input_height)
        self.kernel_var.set(params.kernel_size)
        self.stride_var.set(params.stride)
        self.padding_var.set(params.padding)
        self.dilation_var.set(params.dilation)

    def on_params_changed(self) -> None:
        """Replace the snapshot after any slider move."""
        try:
            params = self._read_params()
        except (ValueError, tk.TclError) as exc:
            self._set_status(f"Invalid parameter: {exc}", level="warn")
            return
        if params == self.playground.params:
            return
        self.playground.replace_params(params)
        self.refresh()

    def apply_preset(self, preset: HyperparameterPreset) -> None:
        self.playground.apply_preset(preset)
        self._sync_param_vars()
        self.refresh()
        if not self.playground.diagnostics:
            self._set_status(f"Applied preset: {preset.label} ({preset.description}).", level="info")

    def on_display_changed(self) -> None:
        """Re-render after a checkbox toggle; kernel picker follows "show values"."""
        self.kernel_combo.configure(state="readonly" if self.show_values_var.get() else "disabled")
        self.refresh()

    def toggle_option(self, var: tk.BooleanVar) -> None:
        var.set(not var.get())
        self.on_display_changed()

    def on_kernel_changed(self) -> None:
        try:
            kernel = KernelPreset.from_name(self.kernel_name_var.get())
        except ValueError as exc:
            self._set_status(str(exc), level="warn")
            return
        self.playground.set_kernel(kernel)
        self.refresh()

    def on_speed_changed(self) -> None:
        """Restart a running scan so the new delay applies immediately."""
        if self.playground.scan_state.running:
            self.playground.start_scan(int(self.speed_var.get()))
            self.refresh()

    def toggle_scan(self) -> None:
        if self.playground.scan_state.running:
            self.stop_scan()
            return
        state = self.playground.start_scan(int(self.speed_var.get()))
        self.refresh()
        if not state.running:
            self._set_status("Nothing to scan: parameters produce no output.", level="warn")

    def stop_scan(self) -> None:
        self.playground.stop_scan()
        self.refresh()

    def move_selection(self, dx: int, dy: int) -> None:
        selected = self.playground.scan_state.selected
        if selected is None:
            return
        self.playground.select(selected[0] + dx, selected[1] + dy)
        self.refresh()

    def _on_output_click(self, event: tk.Event) -> None:
        """Select the clicked output cell."""
        dims = self.playground.output_dimensions
        if not dims.is_valid:
            return
        cell = cell_at(event.x, event.y, GRID_MARGIN, GRID_CELL_SIZE, dims.height, dims.width)
        if cell is None:
            return
        self.playground.select(*cell)
        self.refresh()

    def _on_scan_tick(self, _state: ScanState) -> None:
        # Only the selection moved; formulas and diagnostics are unchanged.
        self._draw_input_grid()
        self._draw_output_grid()
        self._update_selection_text()

    def _on_close(self) -> None:
        """Cancel any pending scan tick and close the Tk window cleanly."""
        self.playground.close()
        self.root.destroy()

    # ------------------------------
    # Render
    # ------------------------------
    def refresh(self) -> None:
        """Redraw every panel from the current snapshot."""
        playground = self.playground
        params = playground.params
        dims = playground.output_dimensions

        self.formula_var.set("\n".join(format_formulas(params, playground.geometry)))
        self.input_title_var.set(f"Padded Input ({params.padded_height} × {params.padded_width})")
        self.output_title_var.set(f"Output ({dims.height} × {dims.width})")

        running = playground.scan_state.running
        self.scan_button.configure(text="Stop animation" if running else "Animate scan")
        self.scan_button.state(["!disabled"] if dims.is_valid else ["disabled"])

        issues = playground.diagnostics
        if issues:
            self._set_status("Parameter issues: " + "; ".join(issues), level="warn")
        else:
            self._set_status(
                f"Output {dims.height} × {dims.width}, effective kernel {playground.effective_kernel_size}.",
                level="info",
            )

        self._draw_input_grid()
        self._draw_output_grid()
        self._update_selection_text()

    def _update_selection_text(self) -> None:
        kernel = self.playground.kernel if self.show_values_var.get() else None
        self.selection_var.set(
            format_selection(self.playground.scan_state.selected, self.playground.receptive_field(), kernel)
        )

    def _draw_input_grid(self) -> None:
        """Render the padded input with receptive-field coloring."""
        playground = self.playground
        params = playground.params
        field = playground.receptive_field()
        show_values = bool(self.show_values_var.get())
        input_grid = playground.input_grid if show_values else None

        cells: list[list[CellStyle]] = []
        for y in range(params.padded_height):
            row: list[CellStyle] = []
            for x in range(params.padded_width):
                role = classify_padded_cell(
                    x,
                    y,
                    params,
                    field,
                    show_padding=bool(self.show_padding_var.get()),
                    show_stride_grid=bool(self.show_stride_grid_var.get()),
                )
                fill, outline = CELL_COLORS[role.value]
                text = padded_cell_text(
                    x,
                    y,
                    role,
                    params,
                    input_grid=input_grid,
                    show_numbers=bool(self.show_numbers_var.get()),
                    show_values=show_values,
                )
                color = COLOR_CELL_TEXT_ON_DARK if role is CellRole.CENTER else COLOR_CELL_TEXT
                row.append(CellStyle(fill, outline, text, color))
            cells.append(row)
        draw_cell_grid(self.input_canvas, cells, margin=GRID_MARGIN, cell_size=GRID_CELL_SIZE)

    def _draw_output_grid(self) -> None:
        """Render output cells, shading by value when values are shown."""
        playground = self.playground
        dims = playground.output_dimensions
        if not dims.is_valid:
            clear_cell_grid(self.output_canvas)
            return

        selected = playground.scan_state.selected
        show_values = bool(self.show_values_var.get())
        show_numbers = bool(self.show_numbers_var.get())
        output_grid = playground.output_grid
        shade = value_intensities(output_grid) if show_values else None

        cells: list[list[CellStyle]] = []
        for y in range(dims.height):
            row: list[CellStyle] = []
            for x in range(dims.width):
                if show_numbers:
                    text = f"{y},{x}"
                elif show_values:
                    text = str(int(output_grid[y, x]))
                else:
                    text = ""
                if selected == (x, y):
                    row.append(CellStyle(COLOR_OUTPUT_SELECTED, "#047857", text, COLOR_CELL_TEXT_ON_DARK))
                elif shade is not None:
                    fill = mix_with_white(COLOR_OUTPUT_VALUE, 0.6 * float(shade[y, x]))
                    row.append(CellStyle(fill, "#e2e8f0", text, COLOR_CELL_TEXT))
                else:
                    row.append(CellStyle("#ffffff", "#e2e8f0", text, COLOR_CELL_TEXT))
            cells.append(row)
        draw_cell_grid(self.output_canvas, cells, margin=GRID_MARGIN, cell_size=GRID_CELL_SIZE)


def main(params: HyperparameterSet | None = None) -> None:
    root = tk.Tk()
    ConvPlaygroundUI(root, params=params)
    root.mainloop()


if __name__ == "__main__":
    main()
