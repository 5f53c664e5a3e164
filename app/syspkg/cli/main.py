"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from syspkg import __version__
from syspkg.cli.commands import manage, query
from syspkg.core.config import ConfigError, ConfigNotFoundError, get_default_config, load_config
from syspkg.utils.formatting import err_console, print_error

# Create main Typer app
app = typer.Typer(
    name="syspkg",
    help="Structured access to the apt package manager.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"syspkg version {__version__}")
        raise typer.Exit()


def configure_logging(level: str) -> None:
    """Route log records to stderr through Rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log commands and their captured output.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: ~/.config/syspkg/config.toml).",
        ),
    ] = None,
) -> None:
    """syspkg - structured access to the apt package manager.

    Install, remove, upgrade and query packages, with apt's output
    turned into tables or JSON.
    """
    try:
        config = load_config(config_path)
    except ConfigNotFoundError as e:
        if config_path is not None:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        config = get_default_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    configure_logging("DEBUG" if verbose else config.log_level)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose


# Register commands
app.command("install")(manage.install)
app.command("remove")(manage.remove)
app.command("upgrade")(manage.upgrade)
app.command("autoremove")(manage.autoremove)
app.command("refresh")(manage.refresh)
app.command("clean")(manage.clean)
app.command("search")(query.search)
app.command("list")(query.list_packages)
app.command("info")(query.info)


if __name__ == "__main__":
    app()
