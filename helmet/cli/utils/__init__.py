"""CLI utilities"""

from .output import (
    console,
    print_error,
    print_warning,
    print_command,
    format_yaml,
    format_toolchain_table,
)

__all__ = [
    "console",
    "print_error",
    "print_warning",
    "print_command",
    "format_yaml",
    "format_toolchain_table",
]
