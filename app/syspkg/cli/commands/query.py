"""Read-only commands: search, list and info."""

import json
from typing import Annotated

import typer

from syspkg.cli.types import OutputFormat, build_options, require_manager, show_packages
from syspkg.managers.base import PackageManagerError
from syspkg.utils.formatting import print_error

FormatOption = Annotated[
    OutputFormat,
    typer.Option(
        "--format",
        "-f",
        help="Output format: table or json.",
        case_sensitive=False,
    ),
]


def search(
    ctx: typer.Context,
    keywords: Annotated[list[str], typer.Argument(help="Search keywords.")],
    output_format: FormatOption = OutputFormat.TABLE,
) -> None:
    """Search available packages.

    Examples:
        syspkg search editor
        syspkg search --format json vim
    """
    opts = build_options(ctx)
    try:
        packages = require_manager().find(keywords, opts)
    except PackageManagerError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    show_packages(packages, f"Search: {' '.join(keywords)}", output_format)


def list_packages(
    ctx: typer.Context,
    upgradable: Annotated[
        bool,
        typer.Option("--upgradable", "-u", help="Only show packages with a newer version."),
    ] = False,
    output_format: FormatOption = OutputFormat.TABLE,
) -> None:
    """List installed or upgradable packages.

    Examples:
        syspkg list
        syspkg list --upgradable
    """
    opts = build_options(ctx)
    try:
        manager = require_manager()
        packages = manager.list_upgradable(opts) if upgradable else manager.list_installed(opts)
    except PackageManagerError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    title = "Upgradable Packages" if upgradable else "Installed Packages"
    show_packages(packages, title, output_format)


def info(
    ctx: typer.Context,
    package: Annotated[str, typer.Argument(help="Package name.")],
    output_format: FormatOption = OutputFormat.TABLE,
) -> None:
    """Show details of a package."""
    opts = build_options(ctx)
    try:
        pkg = require_manager().get_package_info(package, opts)
    except PackageManagerError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if pkg is None:
        print_error(f"No information found for package '{package}'")
        raise typer.Exit(code=1)

    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps(pkg.to_dict(), indent=2))
        return
    show_packages([pkg], f"Package: {pkg.name}")
