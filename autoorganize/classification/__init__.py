"""Series name handling and episode identity extraction."""

from autoorganize.classification.text_processing import (
    normalize_accents,
    parse_series_name,
    comparable_name,
    get_match_score,
)
from autoorganize.classification.episode_parser import GuessitEpisodeParser

__all__ = [
    "normalize_accents",
    "parse_series_name",
    "comparable_name",
    "get_match_score",
    "GuessitEpisodeParser",
]
