"""Utility functions for climan."""

from .output import (
    handle_error,
    print_error,
    print_success,
    write_text_file,
)

__all__ = [
    "handle_error",
    "print_error",
    "print_success",
    "write_text_file",
]
