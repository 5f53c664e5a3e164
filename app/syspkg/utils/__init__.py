"""Utility modules for syspkg.

This module exports commonly used utility functions.
"""

from syspkg.utils.formatting import (
    console,
    create_package_table,
    err_console,
    format_package_row,
    print_error,
    print_info,
    print_success,
)
from syspkg.utils.shell import (
    CommandResult,
    CommandRunner,
    SubprocessRunner,
    command_exists,
    run_command,
    run_interactive,
)

__all__ = [
    "CommandResult",
    "CommandRunner",
    "SubprocessRunner",
    "command_exists",
    "console",
    "create_package_table",
    "err_console",
    "format_package_row",
    "print_error",
    "print_info",
    "print_success",
    "run_command",
    "run_interactive",
]
