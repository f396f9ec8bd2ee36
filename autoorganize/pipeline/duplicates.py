"""Detection of library files holding the same episode as a target path."""

from typing import List, Optional

from autoorganize.filesystem.file_ops import get_directory_name, get_file_name_without_extension
from autoorganize.interfaces import Catalog, FileSystem
from autoorganize.models.library import Series


class DuplicateLocator:
    """Lists other paths that claim the same (season, episode, ending)."""

    def __init__(self, catalog: Catalog, fs: FileSystem) -> None:
        self.catalog = catalog
        self.fs = fs

    def find_duplicates(
        self,
        target_path: str,
        series: Series,
        season: Optional[int],
        episode: Optional[int],
        ending_episode: Optional[int] = None
    ) -> List[str]:
        """
        Find duplicates of an episode.

        Catalog episodes on disk with the same numbers are duplicates, as
        are video files next to the target that share its base name with a
        different extension.

        Args:
            target_path: Destination of the file being organized.
            series: Series of the episode.
            season: Season number.
            episode: Episode number.
            ending_episode: Last episode number of a multi-episode file.

        Returns:
            Duplicate paths, without the target and without repeats
            (both compared case-insensitively).
        """
        if season is None or episode is None:
            return []

        paths = [
            item.path for item in self.catalog.get_episodes(series)
            if item.is_on_disk
            and item.parent_index_number == season
            and item.index_number == episode
            and item.index_number_end == ending_episode
        ]

        folder = get_directory_name(target_path)
        target_stem = get_file_name_without_extension(target_path).lower()
        try:
            paths.extend(
                path for path in self.fs.get_file_paths(folder)
                if self.fs.is_video_file(path)
                and get_file_name_without_extension(path).lower() == target_stem
            )
        except OSError:
            # Season folder not created yet
            pass

        seen = {target_path.lower()}
        duplicates = []
        for path in paths:
            if path.lower() in seen:
                continue
            seen.add(path.lower())
            duplicates.append(path)
        return duplicates
