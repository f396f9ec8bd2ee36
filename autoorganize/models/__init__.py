"""Data models for episode organization."""

from autoorganize.models.library import (
    Episode,
    EpisodeQuery,
    LibraryFolder,
    LocationType,
    ParsedEpisodeInfo,
    RemoteEpisode,
    RemoteSearchResult,
    Season,
    Series,
)
from autoorganize.models.result import (
    EpisodeFileOrganizationRequest,
    FileOrganizerType,
    FileSortingStatus,
    OrganizationResult,
)

__all__ = [
    "Episode",
    "EpisodeQuery",
    "LibraryFolder",
    "LocationType",
    "ParsedEpisodeInfo",
    "RemoteEpisode",
    "RemoteSearchResult",
    "Season",
    "Series",
    "EpisodeFileOrganizationRequest",
    "FileOrganizerType",
    "FileSortingStatus",
    "OrganizationResult",
]
