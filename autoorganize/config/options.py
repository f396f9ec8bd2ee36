"""Auto-organize options and their JSON persistence."""

import json
import threading
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Optional

from loguru import logger

from autoorganize.config.settings import (
    DEFAULT_EPISODE_NAME_PATTERN,
    DEFAULT_MULTI_EPISODE_NAME_PATTERN,
    DEFAULT_OPTIONS_FILE,
    DEFAULT_SEASON_FOLDER_PATTERN,
    DEFAULT_SEASON_ZERO_FOLDER_NAME,
    DEFAULT_SERIES_FOLDER_PATTERN,
)
from autoorganize.models.result import FileOrganizerType


@dataclass
class SmartMatchInfo:
    """
    Learned aliases for one catalog series.

    Attributes:
        item_name: Name of the catalog series the aliases point to.
        organizer_type: Kind of media the entry applies to.
        display_name: Name shown to the user.
        match_strings: Free-text names known to mean this series.
    """

    item_name: str = ''
    organizer_type: FileOrganizerType = FileOrganizerType.EPISODE
    display_name: str = ''
    match_strings: List[str] = field(default_factory=list)

    def matches(self, name: str) -> bool:
        """Check if a name is one of the match strings (case-insensitive)."""
        lowered = name.lower()
        return any(s.lower() == lowered for s in self.match_strings)


@dataclass
class TvFileOrganizationOptions:
    """
    Naming and transfer options for episode files.

    Attributes:
        default_series_library_path: Library folder new series are created in.
        auto_detect_series: Create unknown series from remote search results.
        copy_original_file: Copy instead of move, keeping the source.
        series_folder_pattern: Pattern for new series folders.
        season_folder_pattern: Pattern for season folders.
        season_zero_folder_name: Folder name for specials.
        episode_name_pattern: Pattern for single episode file names.
        multi_episode_name_pattern: Pattern for multi-episode file names.
    """

    default_series_library_path: str = ''
    auto_detect_series: bool = False
    copy_original_file: bool = False
    series_folder_pattern: str = DEFAULT_SERIES_FOLDER_PATTERN
    season_folder_pattern: str = DEFAULT_SEASON_FOLDER_PATTERN
    season_zero_folder_name: str = DEFAULT_SEASON_ZERO_FOLDER_NAME
    episode_name_pattern: str = DEFAULT_EPISODE_NAME_PATTERN
    multi_episode_name_pattern: str = DEFAULT_MULTI_EPISODE_NAME_PATTERN


@dataclass
class AutoOrganizeOptions:
    """Top-level options: TV naming options plus the smart match table."""

    tv_options: TvFileOrganizationOptions = field(default_factory=TvFileOrganizationOptions)
    smart_match_infos: List[SmartMatchInfo] = field(default_factory=list)

    def find_smart_match(self, name: str) -> Optional[SmartMatchInfo]:
        """Return the first smart match entry listing this name."""
        return next((info for info in self.smart_match_infos if info.matches(name)), None)

    def to_dict(self) -> dict:
        data = asdict(self)
        for info in data['smart_match_infos']:
            info['organizer_type'] = info['organizer_type'].value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AutoOrganizeOptions":
        tv_data = data.get('tv_options', {})
        known = TvFileOrganizationOptions.__dataclass_fields__
        tv_options = TvFileOrganizationOptions(**{k: v for k, v in tv_data.items() if k in known})

        infos = []
        for entry in data.get('smart_match_infos', []):
            infos.append(SmartMatchInfo(
                item_name=entry.get('item_name', ''),
                organizer_type=FileOrganizerType(entry.get('organizer_type', FileOrganizerType.EPISODE.value)),
                display_name=entry.get('display_name', ''),
                match_strings=list(entry.get('match_strings', [])),
            ))

        return cls(tv_options=tv_options, smart_match_infos=infos)


class OptionsStore:
    """
    Loads and saves AutoOrganizeOptions as a JSON file.

    Attributes:
        path: Location of the JSON file.
    """

    def __init__(self, path: Path = DEFAULT_OPTIONS_FILE) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def load(self) -> AutoOrganizeOptions:
        """
        Read options from disk.

        Returns:
            Stored options, or defaults when the file is missing or unreadable.
        """
        if not self.path.exists():
            logger.debug(f"No options file at {self.path}, using defaults")
            return AutoOrganizeOptions()

        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
            return AutoOrganizeOptions.from_dict(data)
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Error reading options file {self.path}: {e}")
            return AutoOrganizeOptions()

    def save(self, options: AutoOrganizeOptions) -> None:
        """Write options to disk."""
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(options.to_dict(), indent=2, ensure_ascii=False),
                encoding='utf-8'
            )
        logger.debug(f"Options saved to {self.path}")
