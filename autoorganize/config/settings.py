"""Configuration settings and constants for the autoorganize package."""

from pathlib import Path
from typing import Set

# Video file extensions (archives are left out, transport streams in)
EXT_VIDEO: Set[str] = {
    "mkv", "avi", "wmv", "mpeg", "mpg", "m4v", "mp4", "flv", "ts", "tp", "rm", "rmvb",
    "mov", "webm", "ogv", "3gp", "iso", "m2ts", "vob", "divx", "xvid", "asf", "dvr-ms",
}

# Default locations
DEFAULT_LIBRARY_DIR = Path('/media/library/Series')
DEFAULT_OPTIONS_FILE = Path('autoorganize.json')
DEFAULT_RESULTS_DB = Path('autoorganize.db')
DEFAULT_CACHE_DB = Path('cache.db')

# Naming pattern defaults
DEFAULT_SERIES_FOLDER_PATTERN = "%fn"
DEFAULT_SEASON_FOLDER_PATTERN = "Season %s"
DEFAULT_SEASON_ZERO_FOLDER_NAME = "Season 0"
DEFAULT_EPISODE_NAME_PATTERN = "%sn - %sx%0e - %en.%ext"
DEFAULT_MULTI_EPISODE_NAME_PATTERN = "%sn - %sx%0e-x%0ed - %en.%ext"

# Season folder names recognized when scanning an existing library
SEASON_FOLDER_NAMES: Set[str] = {"season", "saison", "series", "staffel", "temporada"}
SPECIALS_FOLDER_NAMES: Set[str] = {"specials", "extras", "season 0", "season 00"}

# Series matching
SERIES_MATCH_THRESHOLD: float = 92.0
EXACT_MATCH_SCORE: int = 100
YEAR_MATCH_BONUS: int = 10

# Smart match strings shorter than this are never remembered
MIN_SMART_MATCH_LENGTH: int = 3

# Cache expiration time in seconds (24 hours)
CACHE_EXPIRATION_SECONDS: int = 86400

# Request timeout in seconds
REQUEST_TIMEOUT_SECONDS: int = 10
