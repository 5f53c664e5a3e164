"""Package manager backends.

This module exports the PackageManager interface and the apt backend.
"""

from syspkg.managers.apt import AptPackageManager, build_command
from syspkg.managers.base import (
    CommandExecutionError,
    Operation,
    PackageManager,
    PackageManagerError,
    PackageManagerUnavailableError,
)

__all__ = [
    "AptPackageManager",
    "CommandExecutionError",
    "Operation",
    "PackageManager",
    "PackageManagerError",
    "PackageManagerUnavailableError",
    "build_command",
]
