"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

if TYPE_CHECKING:
    from syspkg.models.package import PackageInfo

_THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "bold_header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "#f53263",
        "info": "#0ec1c8",
        "status.installed": "#69B9A1",
        "status.upgradable": "#faf870",
        "status.available": "#b2bec3",
        "status.removed": "#f53263",
    }
)


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=_THEME, color_system=_detect_color_system())
err_console = Console(theme=_THEME, stderr=True, color_system=_detect_color_system())


def create_package_table(title: str = "Packages") -> Table:
    """Create a pre-configured table for displaying packages.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for package display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],  # Zebra striping for readability
    )
    table.add_column("Package", no_wrap=True)
    table.add_column("Version", style="muted")
    table.add_column("New Version", style="info")
    table.add_column("Arch", style="muted")
    table.add_column("Status")
    table.add_column("Description", style="text", overflow="ellipsis")
    return table


def format_package_row(pkg: PackageInfo) -> tuple[str, str, str, str, str, str]:
    """Format a package as a table row with proper styling.

    Args:
        pkg: The package to format.

    Returns:
        Tuple of (name, version, new_version, arch, status, description)
        with Rich markup.
    """
    status_style = f"status.{pkg.status.value}"
    return (
        f"[{status_style}]{escape(pkg.name)}[/]",
        escape(pkg.version or "-"),
        escape(pkg.new_version or "-"),
        escape(pkg.arch or "-"),
        f"[{status_style}]{pkg.status.value}[/]",
        escape(pkg.description or "-"),
    )


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
