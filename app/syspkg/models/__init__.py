"""Data models for syspkg.

This module exports the core data structures used throughout the application.
"""

from syspkg.models.options import DEFAULT_OPTIONS, Options, resolve_options
from syspkg.models.package import PackageInfo, PackageStatus

__all__ = [
    "DEFAULT_OPTIONS",
    "Options",
    "PackageInfo",
    "PackageStatus",
    "resolve_options",
]
