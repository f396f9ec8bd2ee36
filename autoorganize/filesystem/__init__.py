"""Filesystem operations for episode organization."""

from autoorganize.filesystem.file_ops import (
    LocalFileSystem,
    sanitize_filename,
    is_video_file,
    get_file_name_without_extension,
    get_directory_name,
)
from autoorganize.filesystem.monitor import LibraryMonitor

__all__ = [
    "LocalFileSystem",
    "sanitize_filename",
    "is_video_file",
    "get_file_name_without_extension",
    "get_directory_name",
    "LibraryMonitor",
]
