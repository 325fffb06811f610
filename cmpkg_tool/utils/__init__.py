# cmpkg_tool/utils/__init__.py
"""Utility functions for cmpkg-tool"""

from .file_utils import (
    list_file_names,
    format_size,
    ensure_directory,
    delete_with_prefix,
    relative_name,
    create_zip,
)
from .async_utils import run_async

__all__ = [
    "list_file_names",
    "format_size",
    "ensure_directory",
    "delete_with_prefix",
    "relative_name",
    "create_zip",
    "run_async",
]
