"""Formatting and writing of results."""

from .files import write_file_set
from .formatter import format_diagnostics, format_groups

__all__ = ["format_diagnostics", "format_groups", "write_file_set"]
