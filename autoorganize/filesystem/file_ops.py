"""File operations for moving, copying and renaming episode files."""

import shutil
from pathlib import Path
from typing import List

from loguru import logger
from pathvalidate import sanitize_filename as pv_sanitize_filename

from autoorganize.config.settings import EXT_VIDEO


def sanitize_filename(name: str) -> str:
    """
    Strip characters that are invalid in file names on any platform.

    Args:
        name: Raw file or folder name.

    Returns:
        Cross-platform safe name (may be empty).
    """
    if not name:
        return ""
    return str(pv_sanitize_filename(name, platform="universal"))


def is_video_file(path: str) -> bool:
    """Check if a path has a known video extension."""
    return Path(path).suffix.lower().lstrip('.') in EXT_VIDEO


def get_file_name_without_extension(path: str) -> str:
    """Return the base name of a path without its last extension."""
    return Path(path).stem


def get_directory_name(path: str) -> str:
    """Return the folder part of a path."""
    return str(Path(path).parent)


class LocalFileSystem:
    """
    Filesystem access for the organization pipeline.

    All mutating methods raise OSError subclasses on failure so callers can
    record the error on the organization result.
    """

    def file_exists(self, path: str) -> bool:
        return Path(path).is_file()

    def get_file_size(self, path: str) -> int:
        """
        Size of a file in bytes.

        Returns:
            The size, or 0 when the file does not exist.
        """
        try:
            return Path(path).stat().st_size
        except FileNotFoundError:
            return 0

    def copy_file(self, source: str, destination: str, overwrite: bool = True) -> None:
        """
        Copy a file, keeping its metadata.

        Args:
            source: Source file path.
            destination: Destination file path.
            overwrite: If False, refuse to replace an existing destination.

        Raises:
            FileExistsError: If destination exists and overwrite is False.
        """
        if not overwrite and Path(destination).exists():
            raise FileExistsError(f"Destination file exists: {destination}")

        shutil.copy2(source, destination)
        logger.info(f"File copied: {source} -> {destination}")

    def move_file(self, source: str, destination: str) -> None:
        """Move a file, across filesystems if needed."""
        shutil.move(source, destination)
        logger.info(f"File moved: {source} -> {destination}")

    def delete_file(self, path: str) -> None:
        Path(path).unlink()
        logger.info(f"File deleted: {path}")

    def create_directory(self, path: str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def get_file_paths(self, directory: str) -> List[str]:
        """
        List the files directly inside a directory.

        Raises:
            FileNotFoundError: If the directory does not exist.
        """
        return sorted(str(p) for p in Path(directory).iterdir() if p.is_file())

    def sanitize_filename(self, name: str) -> str:
        return sanitize_filename(name)

    def is_video_file(self, path: str) -> bool:
        return is_video_file(path)
