"""Utility modules for fileops.

This module exports commonly used utility functions.
"""

from fileops.utils.formatting import (
    console,
    create_result_table,
    err_console,
    format_tree_result,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_result_table",
    "err_console",
    "format_tree_result",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
