"""APT package manager implementation.

Runs apt, apt-cache and dpkg-query and parses their output into
PackageInfo records.

See https://wiki.debian.org/Apt
"""

import logging
import os
from collections.abc import Sequence

from syspkg.managers.base import CommandExecutionError, Operation, PackageManager
from syspkg.models.options import Options, resolve_options
from syspkg.models.package import PackageInfo
from syspkg.parsers.apt import (
    parse_deleted_output,
    parse_find_output,
    parse_install_output,
    parse_list_installed_output,
    parse_list_upgradable_output,
    parse_package_info_output,
)
from syspkg.utils.shell import CommandRunner, SubprocessRunner, command_exists

logger = logging.getLogger(__name__)

APT = "apt"
APT_CACHE = "apt-cache"
DPKG_QUERY = "dpkg-query"

ARGS_ASSUME_YES = "-y"
ARGS_DRY_RUN = "--dry-run"
ARGS_FIX_BROKEN = "-f"
ARGS_AUTOREMOVE = "--autoremove"

DPKG_QUERY_FORMAT = "${binary:Package} ${Version}\n"

# Complete environment contract for captured runs
NONINTERACTIVE_ENV: dict[str, str] = {
    "LC_ALL": "C",
    "DEBIAN_FRONTEND": "noninteractive",
    "DEBCONF_NONINTERACTIVE_SEEN": "true",
}

_BASE_ARGS: dict[Operation, tuple[str, ...]] = {
    Operation.INSTALL: (APT, "install", ARGS_FIX_BROKEN),
    Operation.REMOVE: (APT, "remove", ARGS_FIX_BROKEN, ARGS_AUTOREMOVE),
    Operation.UPGRADE: (APT, "upgrade"),
    Operation.AUTOREMOVE: (APT, "autoremove"),
    Operation.REFRESH: (APT, "update"),
    Operation.CLEAN: (APT, "autoclean"),
    Operation.SEARCH: (APT, "search"),
    Operation.LIST_INSTALLED: (DPKG_QUERY, "-W", "-f", DPKG_QUERY_FORMAT),
    Operation.LIST_UPGRADABLE: (APT, "list", "--upgradable"),
    Operation.GET_INFO: (APT_CACHE, "show"),
}


def build_command(
    operation: Operation,
    targets: Sequence[str] = (),
    opts: Options | None = None,
) -> list[str]:
    """Build the full argument list for an operation.

    Mutating operations get --dry-run when opts.dry_run is set, and -y
    unless opts.interactive is set so a captured run never blocks on a
    prompt. Other operations ignore opts.

    Args:
        operation: Operation to run.
        targets: Package names or search keywords, appended after the base flags.
        opts: Options; None means DEFAULT_OPTIONS.

    Returns:
        Command and arguments, starting with the binary name.
    """
    opts = resolve_options(opts)
    args = [*_BASE_ARGS[operation], *targets]

    if operation.is_mutating:
        if opts.dry_run:
            args.append(ARGS_DRY_RUN)
        if not opts.interactive:
            args.append(ARGS_ASSUME_YES)

    return args


def noninteractive_env() -> dict[str, str]:
    """Environment for captured runs.

    Only PATH is taken from the caller, so the child can locate the
    helpers it spawns (dpkg, debconf).
    """
    return {"PATH": os.environ.get("PATH", os.defpath), **NONINTERACTIVE_ENV}


class AptPackageManager(PackageManager):
    """Package manager for Debian/Ubuntu systems.

    Uses apt for changes, searches and upgradable listings, dpkg-query
    for the installed list and apt-cache for package details. Changing
    the system requires root privileges; this class does not elevate.

    Attributes:
        runner: CommandRunner used to launch the tools.
    """

    def __init__(self, runner: CommandRunner | None = None) -> None:
        """Initialize the manager.

        Args:
            runner: Command runner. Defaults to a SubprocessRunner.
        """
        self._runner: CommandRunner = runner if runner is not None else SubprocessRunner()

    @property
    def runner(self) -> CommandRunner:
        """Return the command runner in use."""
        return self._runner

    @property
    def name(self) -> str:
        """Return 'apt' as the package manager name."""
        return APT

    def is_available(self) -> bool:
        """Check if apt is on the search path."""
        return command_exists(APT)

    def install(self, packages: list[str], opts: Options | None = None) -> list[PackageInfo]:
        """Install packages using apt install -f."""
        opts = resolve_options(opts)
        output = self._execute(Operation.INSTALL, packages, opts)
        if output is None:
            return []
        return parse_install_output(output, opts)

    def delete(self, packages: list[str], opts: Options | None = None) -> list[PackageInfo]:
        """Remove packages using apt remove -f --autoremove."""
        opts = resolve_options(opts)
        output = self._execute(Operation.REMOVE, packages, opts)
        if output is None:
            return []
        return parse_deleted_output(output, opts)

    def upgrade(self, opts: Options | None = None) -> list[PackageInfo]:
        """Upgrade installed packages using apt upgrade."""
        opts = resolve_options(opts)
        output = self._execute(Operation.UPGRADE, (), opts)
        if output is None:
            return []
        return parse_install_output(output, opts)

    def autoremove(self, opts: Options | None = None) -> list[PackageInfo]:
        """Remove unneeded dependencies using apt autoremove."""
        opts = resolve_options(opts)
        output = self._execute(Operation.AUTOREMOVE, (), opts)
        if output is None:
            return []
        return parse_deleted_output(output, opts)

    def refresh(self, opts: Options | None = None) -> None:
        """Refresh the package index using apt update."""
        self._execute(Operation.REFRESH, (), resolve_options(opts))

    def clean(self, opts: Options | None = None) -> None:
        """Clean the package cache using apt autoclean."""
        self._execute(Operation.CLEAN, (), resolve_options(opts))

    def find(self, keywords: list[str], opts: Options | None = None) -> list[PackageInfo]:
        """Search packages using apt search."""
        opts = resolve_options(opts)
        output = self._capture(build_command(Operation.SEARCH, keywords, opts), opts)
        return parse_find_output(output, opts)

    def list_installed(self, opts: Options | None = None) -> list[PackageInfo]:
        """List installed packages using dpkg-query."""
        opts = resolve_options(opts)
        output = self._capture(build_command(Operation.LIST_INSTALLED, (), opts), opts)
        return parse_list_installed_output(output, opts)

    def list_upgradable(self, opts: Options | None = None) -> list[PackageInfo]:
        """List upgradable packages using apt list --upgradable."""
        opts = resolve_options(opts)
        output = self._capture(build_command(Operation.LIST_UPGRADABLE, (), opts), opts)
        return parse_list_upgradable_output(output, opts)

    def get_package_info(self, package: str, opts: Options | None = None) -> PackageInfo | None:
        """Show package details using apt-cache show."""
        opts = resolve_options(opts)
        output = self._capture(build_command(Operation.GET_INFO, [package], opts), opts)
        return parse_package_info_output(output, opts)

    def _execute(
        self,
        operation: Operation,
        targets: Sequence[str],
        opts: Options,
    ) -> str | None:
        """Run an operation that may be attached to the terminal.

        Returns:
            Captured stdout, or None for an interactive run.

        Raises:
            CommandExecutionError: If the command fails to start or exits non-zero.
        """
        args = build_command(operation, targets, opts)

        logger.info(
            "Executing APT %s%s (dry_run=%s, interactive=%s)",
            operation.value,
            f" for packages: {', '.join(targets)}" if targets else "",
            opts.dry_run,
            opts.interactive,
        )

        if opts.interactive:
            self._run_interactive(args)
            return None
        return self._capture(args, opts)

    def _run_interactive(self, args: list[str]) -> None:
        try:
            returncode = self._runner.run_interactive(args)
        except OSError as e:
            raise CommandExecutionError(args) from e

        if returncode != 0:
            raise CommandExecutionError(args, returncode)

    def _capture(self, args: list[str], opts: Options) -> str:
        """Run a command under the non-interactive environment and return stdout.

        Raises:
            CommandExecutionError: If the command fails to start or exits non-zero.
        """
        logger.debug("Running: %s", " ".join(args))
        try:
            result = self._runner.run(args, env=noninteractive_env())
        except OSError as e:
            raise CommandExecutionError(args) from e

        if not result.success:
            raise CommandExecutionError(args, result.returncode, result.stderr)

        if opts.verbose:
            logger.info("%s output:\n%s", " ".join(args[:2]), result.stdout.rstrip())

        return result.stdout
