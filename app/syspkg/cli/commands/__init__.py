"""CLI commands for syspkg.

This package contains all subcommand implementations.
"""

from syspkg.cli.commands import manage, query

__all__ = ["manage", "query"]
