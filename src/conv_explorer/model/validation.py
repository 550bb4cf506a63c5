"""Advisory diagnostics for a hyperparameter snapshot."""

from __future__ import annotations

from conv_explorer.model.geometry import effective_kernel_size, output_dimensions
from conv_explorer.model.types import HyperparameterSet

NO_OUTPUT_MESSAGE = "Invalid parameters produce no output"


def validate(params: HyperparameterSet) -> list[str]:
    """Return human-readable issues, in display order.

    The list is informational only. Every other operation stays defined
    when it is non-empty, so hosts should keep accepting edits and only
    choose whether to disable actions such as the scan button.
    """
    issues: list[str] = []
    eff = effective_kernel_size(params.kernel_size, params.dilation)

    if eff > params.padded_width:
        issues.append(
            f"Effective kernel ({eff}) larger than padded input width ({params.padded_width})"
        )
    if eff > params.padded_height:
        issues.append(
            f"Effective kernel ({eff}) larger than padded input height ({params.padded_height})"
        )

    if not output_dimensions(params).is_valid:
        issues.append(NO_OUTPUT_MESSAGE)
    return issues
