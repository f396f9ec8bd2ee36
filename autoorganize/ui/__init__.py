"""User interface components."""

from autoorganize.ui.console import ConsoleUI, console
from autoorganize.ui.display import (
    display_results,
    display_summary,
    format_status,
    get_status_counts,
)

__all__ = [
    "ConsoleUI",
    "console",
    "display_results",
    "display_summary",
    "format_status",
    "get_status_counts",
]
