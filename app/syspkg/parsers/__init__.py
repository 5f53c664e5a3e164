"""Output parsers for package manager tools.

This module exports the parse functions used by the package managers.
"""

from syspkg.parsers.apt import (
    LineRule,
    parse_deleted_output,
    parse_find_output,
    parse_install_output,
    parse_lines,
    parse_list_installed_output,
    parse_list_upgradable_output,
    parse_package_info_output,
)

__all__ = [
    "LineRule",
    "parse_deleted_output",
    "parse_find_output",
    "parse_install_output",
    "parse_lines",
    "parse_list_installed_output",
    "parse_list_upgradable_output",
    "parse_package_info_output",
]
