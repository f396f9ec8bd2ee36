"""In-memory series catalog built from library folders."""

import re
import threading
from pathlib import Path
from typing import Dict, List, Optional, Union

from loguru import logger

from autoorganize.api.exceptions import APIError
from autoorganize.classification.text_processing import comparable_name, parse_series_name
from autoorganize.config.settings import SEASON_FOLDER_NAMES, SPECIALS_FOLDER_NAMES
from autoorganize.filesystem.file_ops import is_video_file
from autoorganize.interfaces import EpisodeParser, MetadataProvider
from autoorganize.models.library import Episode, LibraryFolder, LocationType, Season, Series
from autoorganize.utils.hash import path_id

# Provider id tags in folder names, e.g. "Show (2008) [tmdbid-1396]"
PROVIDER_TAG_PATTERN = re.compile(r'[\[{](?P<provider>tmdb|tvdb|imdb)(?:id)?[-=](?P<id>[\w]+)[\]}]', re.IGNORECASE)

PROVIDER_NAMES = {'tmdb': 'Tmdb', 'tvdb': 'Tvdb', 'imdb': 'Imdb'}


def parse_season_folder(name: str) -> Optional[int]:
    """
    Season number of a season folder name.

    Args:
        name: Folder name such as "Season 2", "Saison 02" or "Specials".

    Returns:
        Season number, 0 for specials, None if not a season folder.
    """
    lowered = name.strip().lower()
    if lowered in SPECIALS_FOLDER_NAMES:
        return 0

    parts = lowered.split()
    if len(parts) == 2 and parts[0] in SEASON_FOLDER_NAMES and parts[1].isdigit():
        return int(parts[1])
    return None


def parse_series_folder(name: str) -> tuple:
    """
    Split a series folder name into (name, year, provider_ids).

    Examples:
        >>> parse_series_folder("Breaking Bad (2008) [tmdbid-1396]")
        ('Breaking Bad', 2008, {'Tmdb': '1396'})
    """
    provider_ids = {
        PROVIDER_NAMES[m.group('provider').lower()]: m.group('id')
        for m in PROVIDER_TAG_PATTERN.finditer(name)
    }
    cleaned = PROVIDER_TAG_PATTERN.sub('', name).strip()
    series_name, year = parse_series_name(cleaned)
    return series_name, year, provider_ids


class LibraryCatalog:
    """
    Catalog of series found in one or more library folders.

    Each sub-folder of a library root is a series; its season folders and
    video files become Season and Episode children. Series added with
    add_child are kept even before their folder exists.

    Attributes:
        roots: Library folders.
        parser: Parser used to number existing episode files.
        provider: Optional metadata provider used by refresh_metadata to
            fill in missing provider ids.
    """

    def __init__(
        self,
        roots: List[Path],
        parser: EpisodeParser,
        provider: Optional[MetadataProvider] = None
    ) -> None:
        self.roots = [LibraryFolder(path=str(root), name=Path(root).name) for root in roots]
        self.parser = parser
        self.provider = provider
        self._lock = threading.RLock()
        self._series: Dict[str, Series] = {}
        self._children: Dict[str, List[Union[Season, Episode]]] = {}

    def scan(self) -> int:
        """
        Load every series folder under the library roots.

        Returns:
            Number of series in the catalog.
        """
        for root in self.roots:
            root_path = Path(root.path)
            if not root_path.is_dir():
                logger.warning(f"Library folder not found: {root_path}")
                continue

            for folder in sorted(p for p in root_path.iterdir() if p.is_dir()):
                name, year, provider_ids = parse_series_folder(folder.name)
                series = Series(
                    id=path_id(str(folder)),
                    name=name,
                    production_year=year,
                    path=str(folder),
                    provider_ids=provider_ids,
                )
                with self._lock:
                    self._series[series.id] = series
                self._scan_children(series)

        logger.info(f"{len(self._series)} series in catalog")
        return len(self._series)

    def _scan_children(self, series: Series) -> None:
        """Rebuild the season and episode nodes of a series from disk."""
        children: List[Union[Season, Episode]] = []
        series_path = Path(series.path)

        if series_path.is_dir():
            try:
                for item in sorted(series_path.iterdir()):
                    if item.is_dir():
                        season_number = parse_season_folder(item.name)
                        if season_number is None:
                            continue
                        children.append(Season(index_number=season_number, path=str(item)))
                        children.extend(self._scan_episodes(item, season_number))
                    elif is_video_file(str(item)):
                        children.extend(self._scan_episodes_files([item], None))
            except OSError as e:
                logger.warning(f"Error scanning series folder {series_path}: {e}")

        with self._lock:
            self._children[series.id] = children

    def _scan_episodes(self, folder: Path, season_number: int) -> List[Episode]:
        files = [p for p in sorted(folder.iterdir()) if p.is_file() and is_video_file(str(p))]
        return self._scan_episodes_files(files, season_number)

    def _scan_episodes_files(self, files: List[Path], season_number: Optional[int]) -> List[Episode]:
        episodes = []
        for file in files:
            info = self.parser.parse(str(file))
            season = info.season_number if info.season_number is not None else season_number
            episodes.append(Episode(
                parent_index_number=season,
                index_number=info.episode_number,
                index_number_end=info.ending_episode_number,
                path=str(file),
            ))
        return episodes

    def list_series(self, name: Optional[str] = None) -> List[Series]:
        """
        All series, optionally only those whose name matches.

        Args:
            name: Series name, compared case and punctuation insensitively.
        """
        with self._lock:
            series = list(self._series.values())
        if name is None:
            return series
        wanted = comparable_name(name)
        return [s for s in series if comparable_name(s.name) == wanted]

    def get_by_id(self, item_id: str) -> Optional[Series]:
        with self._lock:
            return self._series.get(item_id)

    def find_by_path(self, path: str) -> Optional[LibraryFolder]:
        """Library root registered at this path, if any."""
        wanted = Path(path)
        return next((root for root in self.roots if Path(root.path) == wanted), None)

    def add_child(self, parent: LibraryFolder, item: Series) -> None:
        """Register a new series under a library root."""
        with self._lock:
            self._series[item.id] = item
            self._children.setdefault(item.id, [])
        logger.info(f"Series added to {parent.path}: {item.name}")

    def get_children(self, series: Series) -> List[Union[Season, Episode]]:
        """Seasons and loose episodes directly under the series folder."""
        with self._lock:
            children = list(self._children.get(series.id, []))
        return [
            child for child in children
            if isinstance(child, Season) or Path(child.path).parent == Path(series.path)
        ]

    def get_episodes(self, series: Series) -> List[Episode]:
        with self._lock:
            children = list(self._children.get(series.id, []))
        return [child for child in children if isinstance(child, Episode)]

    def refresh_metadata(self, item: Series) -> None:
        """
        Reload a series from disk and look up missing provider ids.

        Args:
            item: Series to refresh.
        """
        if self.provider is not None and not item.provider_ids:
            try:
                candidates = self.provider.search_series(item.name, item.production_year)
            except APIError as e:
                logger.warning(f"Metadata refresh failed for {item.name}: {e}")
                candidates = []
            if candidates:
                item.provider_ids = dict(candidates[0].provider_ids)
                if item.production_year is None:
                    item.production_year = candidates[0].production_year

        self._scan_children(item)
        logger.debug(f"Metadata refreshed for {item.name}")

    def refresh_path(self, path: str) -> None:
        """Rescan the series containing a changed path."""
        changed = Path(path)
        with self._lock:
            series = list(self._series.values())
        for item in series:
            if item.path and Path(item.path) in changed.parents:
                self._scan_children(item)
                return
