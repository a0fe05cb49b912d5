"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from fileops.tree.models import TreeResult

THEME = Theme(
    {
        "info": "#0ec1c8",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "muted": "#b2bec3",
        "header": "bold #69B9A1",
    }
)


def _detect_color_system() -> str | None:
    """Return "truecolor" for interactive terminals, None to let Rich decide."""
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def create_result_table(title: str) -> Table:
    """Create a pre-configured table for operation results.

    Args:
        title: Table title.

    Returns:
        Rich Table with Path, Status and Details columns.
    """
    table = Table(title=title, show_header=True, header_style="header")
    table.add_column("Path", style="bold")
    table.add_column("Status", width=10)
    table.add_column("Details", style="muted")
    return table


def format_tree_result(result: TreeResult) -> tuple[str, str, str]:
    """Format a tree result as a table row with Rich markup.

    Args:
        result: The tree result to format.

    Returns:
        Tuple of (path, status, details).
    """
    if result.skipped:
        return (result.path, "[warning]skipped[/]", result.note or "Nothing to do")
    if result.success:
        return (result.path, "[success]done[/]", "")
    return (result.path, "[error]failed[/]", result.error or "Unknown error")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
