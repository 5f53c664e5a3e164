"""Package models returned by package manager operations.

This module defines the record produced when package manager output
is parsed into structured data.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum


class PackageStatus(str, Enum):
    """State of a package as reported by the package manager."""

    INSTALLED = "installed"
    UPGRADABLE = "upgradable"
    AVAILABLE = "available"
    REMOVED = "removed"


@dataclass(frozen=True, slots=True)
class PackageInfo:
    """A single package entry parsed from package manager output.

    This is an immutable data structure. Parsers build new instances
    (or use dataclasses.replace) instead of mutating existing ones.

    Attributes:
        name: Package name (e.g., 'vim', 'libc6')
        version: Version string as printed by the tool. Opaque, may be empty.
        status: Package state (installed, upgradable, available, removed)
        new_version: Upgrade target when it differs from version
        arch: Architecture (e.g., 'amd64', 'all')
        description: Human-readable summary
        category: Repository suite or archive section
        package_manager: Name of the backend that produced the record
    """

    name: str
    version: str
    status: PackageStatus
    new_version: str | None = field(default=None)
    arch: str | None = field(default=None)
    description: str | None = field(default=None)
    category: str | None = field(default=None)
    package_manager: str = field(default="apt")

    def __post_init__(self) -> None:
        """Validate package data after initialization."""
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)

    @property
    def is_installed(self) -> bool:
        """Check if package is currently installed."""
        return self.status in (PackageStatus.INSTALLED, PackageStatus.UPGRADABLE)

    @property
    def is_upgradable(self) -> bool:
        """Check if a newer version is available."""
        return self.status == PackageStatus.UPGRADABLE

    def to_dict(self) -> dict[str, str | None]:
        """Convert to a JSON-serializable dictionary."""
        data = asdict(self)
        data["status"] = self.status.value
        return data
