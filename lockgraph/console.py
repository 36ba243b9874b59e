"""Rich console utilities for lockgraph.

This module provides a shared Rich Console instance and helpers that render
analysis results as tables for the command line.
"""

from typing import Any, List, Tuple

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from ._analysis.models import Application, Relationship

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "direct": "bold green",
        "indirect": "cyan",
        "unknown": "dim",
    }
)

# Shared console instance
console = Console(theme=custom_theme, color_system="auto")

# Errors and notices go to stderr so stdout only carries the report
err_console = Console(theme=custom_theme, color_system="auto", stderr=True)


def print_summary_table(
    title: str,
    data: List[Tuple[str, Any]],
    show_if_empty: bool = False,
) -> None:
    """
    Print a summary table.

    Args:
        title: Table title
        data: List of (label, value) tuples
        show_if_empty: Whether to show the table if all values are 0/empty
    """
    if not show_if_empty:
        data = [(label, value) for label, value in data if value]

    if not data:
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    for label, value in data:
        table.add_row(label, str(value))

    console.print(table)


def print_application_table(app: Application) -> None:
    """Print the packages of one lock file with their relationship and edges."""
    table = Table(title=f"{app.file_path} ({app.type})", show_header=True, header_style="bold")
    table.add_column("Package")
    table.add_column("Version")
    table.add_column("Relationship")
    table.add_column("Depends on")

    for package in app.packages:
        relationship = package.relationship.value
        table.add_row(
            package.name,
            package.version,
            f"[{relationship}]{relationship}[/{relationship}]",
            ", ".join(package.depends_on),
        )

    console.print(table)

    counts = {r: sum(1 for p in app.packages if p.relationship is r) for r in Relationship}
    print_summary_table(
        "Summary",
        [
            ("Packages", len(app.packages)),
            ("Direct", counts[Relationship.DIRECT]),
            ("Indirect", counts[Relationship.INDIRECT]),
            ("Unclassified", counts[Relationship.UNKNOWN]),
        ],
    )


def print_error(message: str) -> None:
    err_console.print(f"[error]Error:[/error] {message}")


def print_notice(message: str) -> None:
    err_console.print(f"[info]Notice:[/info] {message}")
