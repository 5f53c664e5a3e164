"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

import json
from dataclasses import replace
from enum import Enum

import typer

from syspkg.core.config import SyspkgConfig, get_default_config
from syspkg.managers.apt import AptPackageManager
from syspkg.managers.base import PackageManager, PackageManagerUnavailableError
from syspkg.models.options import Options
from syspkg.models.package import PackageInfo
from syspkg.utils.formatting import console, create_package_table, format_package_row, print_info


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def get_manager() -> PackageManager:
    """Create the package manager backing the CLI."""
    return AptPackageManager()


def require_manager() -> PackageManager:
    """Get the package manager, checking that it is installed.

    Returns:
        An available PackageManager.

    Raises:
        PackageManagerUnavailableError: If the package manager binary is missing.
    """
    manager = get_manager()
    if not manager.is_available():
        msg = f"{manager.name.upper()} package manager is not available on this system"
        raise PackageManagerUnavailableError(msg)
    return manager


def get_config(ctx: typer.Context) -> SyspkgConfig:
    """Return the config loaded by the main callback."""
    obj = ctx.find_root().obj or {}
    return obj.get("config") or get_default_config()


def build_options(
    ctx: typer.Context,
    *,
    dry_run: bool | None = None,
    interactive: bool | None = None,
) -> Options:
    """Combine config file defaults with command-line flags.

    A flag given on the command line (either form, e.g. --dry-run or
    --no-dry-run) replaces the config value; None keeps it.
    """
    obj = ctx.find_root().obj or {}
    opts = get_config(ctx).to_options()
    overrides = {
        name: value
        for name, value in (("dry_run", dry_run), ("interactive", interactive))
        if value is not None
    }
    if obj.get("verbose"):
        overrides["verbose"] = True
    return replace(opts, **overrides)


def show_packages(
    packages: list[PackageInfo],
    title: str,
    output_format: OutputFormat = OutputFormat.TABLE,
) -> None:
    """Print packages as a table or as JSON.

    Args:
        packages: Packages to display, in order.
        title: Table title.
        output_format: Table or JSON.
    """
    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps([pkg.to_dict() for pkg in packages], indent=2))
        return

    if not packages:
        print_info("No packages found.")
        return

    table = create_package_table(title)
    for pkg in packages:
        table.add_row(*format_package_row(pkg))
    console.print(table)
