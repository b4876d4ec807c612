"""Utility modules for batl.

This module exports commonly used utility functions.
"""

from batl.utils.formatting import (
    console,
    create_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from batl.utils.shell import run_interactive, run_script

__all__ = [
    "console",
    "create_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_interactive",
    "run_script",
]
