"""Abstract base class for package managers.

This module defines the PackageManager interface that every backend
implements, and the errors those backends raise.
"""

from abc import ABC, abstractmethod
from enum import Enum

from syspkg.models.options import Options
from syspkg.models.package import PackageInfo


class Operation(str, Enum):
    """Operations supported by a package manager."""

    INSTALL = "install"
    REMOVE = "remove"
    UPGRADE = "upgrade"
    AUTOREMOVE = "autoremove"
    REFRESH = "refresh"
    CLEAN = "clean"
    SEARCH = "search"
    LIST_INSTALLED = "list-installed"
    LIST_UPGRADABLE = "list-upgradable"
    GET_INFO = "get-info"

    @property
    def is_mutating(self) -> bool:
        """Check if the operation changes installed packages."""
        return self in (
            Operation.INSTALL,
            Operation.REMOVE,
            Operation.UPGRADE,
            Operation.AUTOREMOVE,
        )


class PackageManagerError(Exception):
    """Base exception for package manager errors."""


class CommandExecutionError(PackageManagerError):
    """Raised when a package manager command could not run or exited non-zero.

    Attributes:
        command: The full argument list that was executed.
        returncode: Exit code, or None if the process never started.
        stderr: Captured standard error (empty for interactive runs).
    """

    def __init__(
        self,
        command: list[str],
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr

        cmd = " ".join(command)
        if returncode is None:
            msg = f"Failed to run '{cmd}'"
        else:
            msg = f"'{cmd}' exited with code {returncode}"
        if stderr.strip():
            msg = f"{msg}: {stderr.strip()}"
        super().__init__(msg)


class PackageManagerUnavailableError(PackageManagerError):
    """Raised when a package manager is not installed on this system."""


class PackageManager(ABC):
    """Abstract base class for all package managers.

    Every operation takes an optional Options object; None means
    DEFAULT_OPTIONS. Failures raise CommandExecutionError.

    Example:
        >>> manager = AptPackageManager()
        >>> if manager.is_available():
        ...     for pkg in manager.list_upgradable():
        ...         print(f"{pkg.name}: {pkg.version} -> {pkg.new_version}")
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the package manager (e.g. 'apt')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this package manager is available on the system.

        Returns:
            True if the package manager can be used, False otherwise.
        """

    @abstractmethod
    def install(self, packages: list[str], opts: Options | None = None) -> list[PackageInfo]:
        """Install one or more packages.

        Returns:
            Packages the tool reported as installed (empty when interactive).
        """

    @abstractmethod
    def delete(self, packages: list[str], opts: Options | None = None) -> list[PackageInfo]:
        """Remove one or more packages.

        Returns:
            Packages the tool reported as removed (empty when interactive).
        """

    @abstractmethod
    def refresh(self, opts: Options | None = None) -> None:
        """Refresh the package index."""

    @abstractmethod
    def find(self, keywords: list[str], opts: Options | None = None) -> list[PackageInfo]:
        """Search available packages by keyword."""

    @abstractmethod
    def list_installed(self, opts: Options | None = None) -> list[PackageInfo]:
        """List installed packages."""

    @abstractmethod
    def list_upgradable(self, opts: Options | None = None) -> list[PackageInfo]:
        """List packages with a newer version available."""

    @abstractmethod
    def upgrade(self, opts: Options | None = None) -> list[PackageInfo]:
        """Upgrade all upgradable packages."""

    @abstractmethod
    def clean(self, opts: Options | None = None) -> None:
        """Remove obsolete files from the package cache."""

    @abstractmethod
    def get_package_info(self, package: str, opts: Options | None = None) -> PackageInfo | None:
        """Show details of a single package.

        Returns:
            PackageInfo, or None if the tool printed no package record.
        """

    @abstractmethod
    def autoremove(self, opts: Options | None = None) -> list[PackageInfo]:
        """Remove automatically installed packages that are no longer needed."""
