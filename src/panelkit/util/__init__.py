"""
Shared utility helpers for filesystem access.
"""

from .filesystem import (
    atomic_copy_directory,
    file_lock,
    is_readable_file,
    is_relative_to,
    mime_type,
    modified,
    read_text,
    remove_directory,
)

__all__ = [
    "atomic_copy_directory",
    "file_lock",
    "is_readable_file",
    "is_relative_to",
    "mime_type",
    "modified",
    "read_text",
    "remove_directory",
]
