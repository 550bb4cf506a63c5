"""Layout, style, and key-binding helpers for the convolution explorer UI."""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from conv_explorer.model.presets import HyperparameterPreset, KernelPreset
from conv_explorer.ui.constants import (
    COLOR_BG,
    COLOR_CARD,
    COLOR_EDGE,
    COLOR_INK,
    COLOR_NEUTRAL_BTN,
    COLOR_NEUTRAL_BTN_HOVER,
    COLOR_NEUTRAL_BTN_PRESS,
    COLOR_STATUS_INFO_BG,
    COLOR_STATUS_INFO_FG,
    COLOR_SUB,
    DILATION_RANGE,
    GRID_CANVAS_SIZE,
    INPUT_SIZE_RANGE,
    KERNEL_RANGE,
    KERNEL_STEP,
    PADDING_RANGE,
    SCAN_SPEED_DEFAULT,
    SCAN_SPEED_RANGE,
    STRIDE_RANGE,
)


def configure_styles(root: tk.Tk) -> None:
    """Define ttk style rules so widgets share one visual language."""
    style = ttk.Style(root)
    style.theme_use("clam")

    style.configure("App.TFrame", background=COLOR_BG)
    style.configure("Card.TFrame", background=COLOR_CARD)

    style.configure(
        "Title.TLabel",
        background=COLOR_BG,
        foreground=COLOR_INK,
        font=("Avenir Next", 20, "bold"),
    )
    style.configure(
        "Subtitle.TLabel",
        background=COLOR_BG,
        foreground=COLOR_SUB,
        font=("Avenir Next", 11),
    )
    style.configure(
        "Section.TLabel",
        background=COLOR_CARD,
        foreground=COLOR_INK,
        font=("Avenir Next", 11, "bold"),
    )
    style.configure(
        "Body.TLabel",
        background=COLOR_CARD,
        foreground=COLOR_SUB,
        font=("Avenir Next", 10),
    )
    style.configure(
        "Formula.TLabel",
        background="#f8fafc",
        foreground=COLOR_INK,
        font=("Menlo", 11),
        padding=8,
    )

    style.configure(
        "Card.TLabelframe",
        background=COLOR_CARD,
        foreground=COLOR_INK,
        borderwidth=1,
        relief="solid",
    )
    style.configure(
        "Card.TLabelframe.Label",
        background=COLOR_CARD,
        foreground=COLOR_INK,
        font=("Avenir Next", 10, "bold"),
    )
    style.configure("Card.TCheckbutton", background=COLOR_CARD, foreground=COLOR_SUB)

    style.configure(
        "Neutral.TButton",
        background=COLOR_NEUTRAL_BTN,
        foreground="#1f2937",
        borderwidth=1,
        font=("Avenir Next", 10, "bold"),
        padding=(12, 8),
    )
    style.map(
        "Neutral.TButton",
        background=[("active", COLOR_NEUTRAL_BTN_HOVER), ("pressed", COLOR_NEUTRAL_BTN_PRESS)],
        foreground=[("disabled", "#9ca3af"), ("!disabled", "#111827")],
    )
    style.configure(
        "Preset.TButton",
        background="#f8fafc",
        foreground=COLOR_INK,
        borderwidth=1,
        font=("Avenir Next", 9),
        padding=(8, 4),
    )


def bind_shortcuts(ui: object) -> None:
    """Register keyboard shortcuts for fast interaction."""
    ui.root.bind("<space>", lambda _e: ui.toggle_scan())
    ui.root.bind("<Escape>", lambda _e: ui.stop_scan())
    ui.root.bind("<Left>", lambda _e: ui.move_selection(-1, 0))
    ui.root.bind("<Right>", lambda _e: ui.move_selection(1, 0))
    ui.root.bind("<Up>", lambda _e: ui.move_selection(0, -1))
    ui.root.bind("<Down>", lambda _e: ui.move_selection(0, 1))
    ui.root.bind("n", lambda _e: ui.toggle_option(ui.show_numbers_var))
    ui.root.bind("N", lambda _e: ui.toggle_option(ui.show_numbers_var))
    ui.root.bind("v", lambda _e: ui.toggle_option(ui.show_values_var))
    ui.root.bind("V", lambda _e: ui.toggle_option(ui.show_values_var))


def build_layout(ui: object) -> None:
    """Create top-level layout containers and major UI sections."""
    outer = ttk.Frame(ui.root, padding=14, style="App.TFrame")
    outer.pack(fill="both", expand=True)

    _build_header(outer)
    top = ttk.Frame(outer, style="App.TFrame")
    top.pack(fill="x", pady=(0, 10))
    _build_parameters(ui, top)
    _build_formulas(ui, top)
    _build_grids(ui, outer)
    _build_status(ui, outer)


def _build_header(parent: ttk.Frame) -> None:
    header = ttk.Frame(parent, style="App.TFrame")
    header.pack(fill="x", pady=(0, 10))

    ttk.Label(
        header,
        text="CNN Hyperparameter Playground",
        style="Title.TLabel",
    ).pack(anchor="w")
    ttk.Label(
        header,
        text=(
            "Explore how kernel size, stride, padding, and dilation affect output size "
            "and the receptive field. Click an output cell to see which input cells it reads."
        ),
        style="Subtitle.TLabel",
    ).pack(anchor="w", pady=(2, 0))


def _add_slider(
    ui: object,
    parent: ttk.Frame,
    row: int,
    label: str,
    var: tk.IntVar,
    bounds: tuple[int, int],
    step: int = 1,
) -> None:
    ttk.Label(parent, text=label, style="Body.TLabel").grid(row=row, column=0, padx=(0, 8), sticky="w")
    tk.Scale(
        parent,
        from_=bounds[0],
        to=bounds[1],
        resolution=step,
        orient="horizontal",
        variable=var,
        command=lambda _value: ui.on_params_changed(),
        length=260,
        showvalue=True,
        bg=COLOR_CARD,
        highlightthickness=0,
    ).grid(row=row, column=1, sticky="we")


def _build_parameters(ui: object, parent: ttk.Frame) -> None:
    params = ui.playground.params
    card = ttk.LabelFrame(parent, text="Parameters", padding=12, style="Card.TLabelframe")
    card.pack(side="left", fill="both", expand=True, padx=(0, 10))
    card.grid_columnconfigure(1, weight=1)

    ui.width_var = tk.IntVar(value=params.input_width)
    ui.height_var = tk.IntVar(value=params.input_height)
    ui.kernel_var = tk.IntVar(value=params.kernel_size)
    ui.stride_var = tk.IntVar(value=params.stride)
    ui.padding_var = tk.IntVar(value=params.padding)
    ui.dilation_var = tk.IntVar(value=params.dilation)

    _add_slider(ui, card, 0, "Input W", ui.width_var, INPUT_SIZE_RANGE)
    _add_slider(ui, card, 1, "Input H", ui.height_var, INPUT_SIZE_RANGE)
    _add_slider(ui, card, 2, "Kernel", ui.kernel_var, KERNEL_RANGE, step=KERNEL_STEP)
    _add_slider(ui, card, 3, "Stride", ui.stride_var, STRIDE_RANGE)
    _add_slider(ui, card, 4, "Padding", ui.padding_var, PADDING_RANGE)
    _add_slider(ui, card, 5, "Dilation", ui.dilation_var, DILATION_RANGE)

    ui.show_numbers_var = tk.BooleanVar(value=False)
    ui.show_padding_var = tk.BooleanVar(value=True)
    ui.show_values_var = tk.BooleanVar(value=False)
    ui.show_stride_grid_var = tk.BooleanVar(value=True)

    toggles = ttk.Frame(card, style="Card.TFrame")
    toggles.grid(row=6, column=0, columnspan=2, sticky="w", pady=(8, 0))
    for col, (text, var) in enumerate(
        [
            ("Show numbers", ui.show_numbers_var),
            ("Show padding", ui.show_padding_var),
            ("Show values", ui.show_values_var),
            ("Show stride grid", ui.show_stride_grid_var),
        ]
    ):
        ttk.Checkbutton(
            toggles,
            text=text,
            variable=var,
            command=ui.on_display_changed,
            style="Card.TCheckbutton",
        ).grid(row=0, column=col, padx=(0, 10), sticky="w")

    ui.kernel_name_var = tk.StringVar(value=ui.playground.kernel.label)
    ttk.Label(card, text="Kernel weights", style="Body.TLabel").grid(row=7, column=0, sticky="w", pady=(8, 0))
    ui.kernel_combo = ttk.Combobox(
        card,
        textvariable=ui.kernel_name_var,
        values=[preset.label for preset in KernelPreset],
        state="disabled",
        width=18,
    )
    ui.kernel_combo.grid(row=7, column=1, sticky="w", pady=(8, 0))
    ui.kernel_combo.bind("<<ComboboxSelected>>", lambda _e: ui.on_kernel_changed())

    presets = ttk.Frame(card, style="Card.TFrame")
    presets.grid(row=8, column=0, columnspan=2, sticky="we", pady=(10, 0))
    ttk.Label(presets, text="Quick Presets", style="Section.TLabel").grid(row=0, column=0, columnspan=3, sticky="w")
    for i, preset in enumerate(HyperparameterPreset):
        ttk.Button(
            presets,
            text=f"{preset.label}\n{preset.description}",
            command=lambda p=preset: ui.apply_preset(p),
            style="Preset.TButton",
        ).grid(row=1 + i // 3, column=i % 3, padx=(0, 6), pady=(4, 0), sticky="we")


def _build_formulas(ui: object, parent: ttk.Frame) -> None:
    card = ttk.LabelFrame(parent, text="Formulas & Output", padding=12, style="Card.TLabelframe")
    card.pack(side="left", fill="both", expand=True)

    ui.formula_var = tk.StringVar(value="")
    ttk.Label(card, textvariable=ui.formula_var, style="Formula.TLabel", justify="left").pack(fill="x")

    controls = ttk.Frame(card, style="Card.TFrame")
    controls.pack(fill="x", pady=(10, 0))
    ui.scan_button = ttk.Button(
        controls,
        text="Animate scan",
        command=ui.toggle_scan,
        style="Neutral.TButton",
    )
    ui.scan_button.pack(side="left")

    ui.speed_var = tk.IntVar(value=SCAN_SPEED_DEFAULT)
    ttk.Label(controls, text="Delay (ms)", style="Body.TLabel").pack(side="left", padx=(12, 4))
    tk.Scale(
        controls,
        from_=SCAN_SPEED_RANGE[0],
        to=SCAN_SPEED_RANGE[1],
        resolution=20,
        orient="horizontal",
        variable=ui.speed_var,
        command=lambda _value: ui.on_speed_changed(),
        length=180,
        bg=COLOR_CARD,
        highlightthickness=0,
    ).pack(side="left")

    ui.selection_var = tk.StringVar(value="")
    ttk.Label(card, textvariable=ui.selection_var, style="Body.TLabel", justify="left").pack(
        anchor="w", pady=(10, 0)
    )


def _build_grids(ui: object, parent: ttk.Frame) -> None:
    grids = ttk.Frame(parent, style="App.TFrame")
    grids.pack(fill="both", expand=True)

    ui.input_title_var = tk.StringVar(value="Padded Input")
    input_frame = ttk.LabelFrame(grids, text="Padded Input", padding=8, style="Card.TLabelframe")
    input_frame.pack(side="left", fill="both", expand=True, padx=(0, 10))
    ttk.Label(input_frame, textvariable=ui.input_title_var, style="Section.TLabel").pack(anchor="w")
    ui.input_canvas = tk.Canvas(
        input_frame,
        width=GRID_CANVAS_SIZE,
        height=GRID_CANVAS_SIZE,
        bg=COLOR_CARD,
        highlightthickness=1,
        highlightbackground=COLOR_EDGE,
    )
    ui.input_canvas.pack(fill="both", expand=True)

    ui.output_title_var = tk.StringVar(value="Output")
    output_frame = ttk.LabelFrame(grids, text="Output", padding=8, style="Card.TLabelframe")
    output_frame.pack(side="left", fill="both", expand=True)
    ttk.Label(output_frame, textvariable=ui.output_title_var, style="Section.TLabel").pack(anchor="w")
    ui.output_canvas = tk.Canvas(
        output_frame,
        width=GRID_CANVAS_SIZE,
        height=GRID_CANVAS_SIZE,
        bg=COLOR_CARD,
        highlightthickness=1,
        highlightbackground=COLOR_EDGE,
        cursor="hand2",
    )
    ui.output_canvas.pack(fill="both", expand=True)
    ui.output_canvas.bind("<Button-1>", ui._on_output_click)


def _build_status(ui: object, parent: ttk.Frame) -> None:
    status_frame = ttk.Frame(parent, style="App.TFrame")
    status_frame.pack(fill="x", pady=(8, 0))

    ui.status_label = tk.Label(
        status_frame,
        textvariable=ui.status_var,
        bg=COLOR_STATUS_INFO_BG,
        fg=COLOR_STATUS_INFO_FG,
        font=("Avenir Next", 10, "bold"),
        padx=10,
        pady=8,
        anchor="w",
        relief="flat",
    )
    ui.status_label.pack(fill="x", anchor="w")
