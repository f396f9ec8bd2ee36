"""Capabilities the organization pipeline needs from its collaborators.

The pipeline only calls the methods listed here. Any catalog, provider or
store offering them can be plugged in.
"""

from typing import List, Optional, Protocol, Union

from autoorganize.models.library import (
    Episode,
    EpisodeQuery,
    LibraryFolder,
    ParsedEpisodeInfo,
    RemoteEpisode,
    RemoteSearchResult,
    Season,
    Series,
)
from autoorganize.models.result import OrganizationResult


class EpisodeParser(Protocol):
    def parse(self, path: str) -> ParsedEpisodeInfo: ...


class Catalog(Protocol):
    def list_series(self, name: Optional[str] = None) -> List[Series]: ...

    def get_by_id(self, item_id: str) -> Optional[Series]: ...

    def find_by_path(self, path: str) -> Optional[LibraryFolder]: ...

    def add_child(self, parent: LibraryFolder, item: Series) -> None: ...

    def refresh_metadata(self, item: Series) -> None: ...

    def get_children(self, series: Series) -> List[Union[Season, Episode]]: ...

    def get_episodes(self, series: Series) -> List[Episode]: ...


class MetadataProvider(Protocol):
    def search_series(self, name: str, year: Optional[int] = None) -> List[RemoteSearchResult]: ...

    def search_episode(self, query: EpisodeQuery) -> List[RemoteEpisode]: ...


class FileSystem(Protocol):
    def file_exists(self, path: str) -> bool: ...

    def get_file_size(self, path: str) -> int: ...

    def copy_file(self, source: str, destination: str, overwrite: bool = True) -> None: ...

    def move_file(self, source: str, destination: str) -> None: ...

    def delete_file(self, path: str) -> None: ...

    def create_directory(self, path: str) -> None: ...

    def get_file_paths(self, directory: str) -> List[str]: ...

    def sanitize_filename(self, name: str) -> str: ...

    def is_video_file(self, path: str) -> bool: ...


class LibraryMonitor(Protocol):
    def is_path_locked(self, path: str) -> bool: ...

    def report_change_beginning(self, path: str) -> None: ...

    def report_change_complete(self, path: str, refresh: bool = True) -> None: ...


class ResultStore(Protocol):
    def get_by_source_path(self, path: str) -> Optional[OrganizationResult]: ...

    def get_by_id(self, result_id: str) -> Optional[OrganizationResult]: ...

    def assign_id(self, result: OrganizationResult) -> str: ...

    def save(self, result: OrganizationResult) -> None: ...

    def try_begin(self, result: OrganizationResult, is_new: bool) -> bool: ...

    def end(self, result: OrganizationResult) -> None: ...
