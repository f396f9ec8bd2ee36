"""Catalog entities and metadata provider records."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, Optional


class LocationType(str, Enum):
    """Where a catalog item lives."""

    FILE_SYSTEM = "FileSystem"
    VIRTUAL = "Virtual"
    REMOTE = "Remote"


@dataclass
class LibraryFolder:
    """A library root that series folders are created in."""

    path: str
    name: str = ''


@dataclass
class Series:
    """
    A TV series known to the catalog.

    Attributes:
        id: Catalog identifier.
        name: Display name.
        production_year: First air year, if known.
        path: Series folder.
        provider_ids: External ids keyed by provider name (e.g. "Tmdb").
    """

    id: str
    name: str
    production_year: Optional[int] = None
    path: str = ''
    provider_ids: Dict[str, str] = field(default_factory=dict)


@dataclass
class Season:
    """A season node of a series."""

    index_number: Optional[int]
    path: str = ''
    location_type: LocationType = LocationType.FILE_SYSTEM


@dataclass
class Episode:
    """
    An episode node of a series.

    Attributes:
        parent_index_number: Season number.
        index_number: Episode number.
        index_number_end: Last episode number for multi-episode files.
        path: File path.
        location_type: On disk, virtual (known but missing) or remote.
    """

    parent_index_number: Optional[int]
    index_number: Optional[int]
    index_number_end: Optional[int] = None
    path: str = ''
    location_type: LocationType = LocationType.FILE_SYSTEM

    @property
    def is_on_disk(self) -> bool:
        return self.location_type not in (LocationType.REMOTE, LocationType.VIRTUAL)


@dataclass
class RemoteSearchResult:
    """A series candidate returned by the metadata provider."""

    name: str
    provider_ids: Dict[str, str] = field(default_factory=dict)
    production_year: Optional[int] = None


@dataclass
class EpisodeQuery:
    """Episode lookup keyed by series provider ids and numbers or air date.

    series_name and series_year let a provider find the series itself when
    none of the provider ids are its own.
    """

    series_provider_ids: Dict[str, str]
    series_name: str = ''
    series_year: Optional[int] = None
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    ending_episode_number: Optional[int] = None
    premiere_date: Optional[date] = None


@dataclass
class RemoteEpisode:
    """An episode returned by the metadata provider."""

    name: str
    season_number: Optional[int] = None
    episode_number: Optional[int] = None


@dataclass
class ParsedEpisodeInfo:
    """Identity extracted from an episode file name."""

    series_name: Optional[str] = None
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    ending_episode_number: Optional[int] = None
    is_by_date: bool = False
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None

    @property
    def premiere_date(self) -> Optional[date]:
        """Air date for date-based episodes."""
        if not self.is_by_date or not (self.year and self.month and self.day):
            return None
        return date(self.year, self.month, self.day)
