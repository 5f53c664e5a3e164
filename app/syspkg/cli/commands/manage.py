"""Commands that change installed packages.

install, remove, upgrade and autoremove accept --dry-run/--no-dry-run and
--interactive/--no-interactive; refresh and clean accept the latter. A flag
left out falls back to the config file.
"""

from typing import Annotated

import typer

from syspkg.cli.types import build_options, require_manager, show_packages
from syspkg.managers.base import PackageManagerError
from syspkg.models.options import Options
from syspkg.models.package import PackageInfo
from syspkg.utils.formatting import print_error, print_info, print_success

DryRunOption = Annotated[
    bool | None,
    typer.Option(
        "--dry-run/--no-dry-run",
        "-n",
        help="Simulate the operation without changing the system (default from config).",
        show_default=False,
    ),
]
InteractiveOption = Annotated[
    bool | None,
    typer.Option(
        "--interactive/--no-interactive",
        "-i",
        help="Attach apt to the terminal; output is shown live and not parsed.",
        show_default=False,
    ),
]


def _report(packages: list[PackageInfo], opts: Options, title: str) -> None:
    """Show the outcome of a change operation."""
    if opts.interactive:
        print_success("Operation completed")
        return
    if not packages:
        print_info("No packages changed.")
        return
    show_packages(packages, f"{title} (dry run)" if opts.dry_run else title)


def install(
    ctx: typer.Context,
    packages: Annotated[list[str], typer.Argument(help="Packages to install.")],
    dry_run: DryRunOption = None,
    interactive: InteractiveOption = None,
) -> None:
    """Install packages.

    Examples:
        syspkg install htop
        syspkg install --dry-run htop neovim
    """
    opts = build_options(ctx, dry_run=dry_run, interactive=interactive)
    try:
        result = require_manager().install(packages, opts)
    except PackageManagerError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    _report(result, opts, "Installed Packages")


def remove(
    ctx: typer.Context,
    packages: Annotated[list[str], typer.Argument(help="Packages to remove.")],
    dry_run: DryRunOption = None,
    interactive: InteractiveOption = None,
) -> None:
    """Remove packages together with dependencies no longer needed."""
    opts = build_options(ctx, dry_run=dry_run, interactive=interactive)
    try:
        result = require_manager().delete(packages, opts)
    except PackageManagerError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    _report(result, opts, "Removed Packages")


def upgrade(
    ctx: typer.Context,
    dry_run: DryRunOption = None,
    interactive: InteractiveOption = None,
) -> None:
    """Upgrade all upgradable packages."""
    opts = build_options(ctx, dry_run=dry_run, interactive=interactive)
    try:
        result = require_manager().upgrade(opts)
    except PackageManagerError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    _report(result, opts, "Upgraded Packages")


def autoremove(
    ctx: typer.Context,
    dry_run: DryRunOption = None,
    interactive: InteractiveOption = None,
) -> None:
    """Remove automatically installed packages that are no longer needed."""
    opts = build_options(ctx, dry_run=dry_run, interactive=interactive)
    try:
        result = require_manager().autoremove(opts)
    except PackageManagerError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    _report(result, opts, "Removed Packages")


def refresh(
    ctx: typer.Context,
    interactive: InteractiveOption = None,
) -> None:
    """Refresh the package index (apt update)."""
    opts = build_options(ctx, interactive=interactive)
    try:
        require_manager().refresh(opts)
    except PackageManagerError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success("Package index refreshed")


def clean(
    ctx: typer.Context,
    interactive: InteractiveOption = None,
) -> None:
    """Remove obsolete package files from the cache (apt autoclean)."""
    opts = build_options(ctx, interactive=interactive)
    try:
        require_manager().clean(opts)
    except PackageManagerError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success("Package cache cleaned")
