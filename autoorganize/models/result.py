"""Organization result records and correction requests."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional


class FileOrganizerType(str, Enum):
    """Kind of media an organizer handles."""

    EPISODE = "Episode"


class FileSortingStatus(str, Enum):
    """Outcome of one organization attempt."""

    SUCCESS = "Success"
    FAILURE = "Failure"
    SKIPPED_EXISTING = "SkippedExisting"


@dataclass
class OrganizationResult:
    """
    One record per source file processing attempt.

    Attributes:
        id: Unique identifier, assigned on first persistence.
        date: Creation timestamp (UTC).
        original_path: Source path of the file.
        original_file_name: File name of the source.
        file_size: Size of the source in bytes.
        type: Organizer kind.
        extracted_name: Series name read from the file name, year removed.
        extracted_year: Year found in the series name.
        extracted_season_number: Season read from the file name.
        extracted_episode_number: Episode read from the file name.
        extracted_ending_episode_number: Last episode of a multi-episode file.
        target_path: Computed destination.
        status: Final status, None while pending.
        status_message: Human-readable outcome.
        duplicate_paths: Other paths holding the same episode.
    """

    id: Optional[str] = None
    date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    original_path: str = ''
    original_file_name: str = ''
    file_size: int = 0
    type: FileOrganizerType = FileOrganizerType.EPISODE
    extracted_name: Optional[str] = None
    extracted_year: Optional[int] = None
    extracted_season_number: Optional[int] = None
    extracted_episode_number: Optional[int] = None
    extracted_ending_episode_number: Optional[int] = None
    target_path: Optional[str] = None
    status: Optional[FileSortingStatus] = None
    status_message: str = ''
    duplicate_paths: List[str] = field(default_factory=list)

    def mark(self, status: FileSortingStatus, message: str = '') -> None:
        """Set status and message together."""
        self.status = status
        self.status_message = message

    def copy(self) -> "OrganizationResult":
        """Return an independent copy of this record."""
        return replace(self, duplicate_paths=list(self.duplicate_paths))


@dataclass
class EpisodeFileOrganizationRequest:
    """
    A user correction for a previous organization result.

    Either series_id names an existing catalog series, or the new_series_*
    fields describe a series to create first.
    """

    result_id: str
    series_id: Optional[str] = None
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    ending_episode_number: Optional[int] = None
    remember_correction: bool = False
    new_series_name: Optional[str] = None
    new_series_year: Optional[str] = None
    new_series_provider_ids: Dict[str, str] = field(default_factory=dict)
    target_folder: Optional[str] = None
