"""Episode identity extraction from file names using guessit."""

from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional, Tuple

import guessit
from loguru import logger

from autoorganize.models.library import ParsedEpisodeInfo


def _number_range(value: Any) -> Tuple[Optional[int], Optional[int]]:
    """Return (first, last) for a guessit number that may be a list."""
    if value is None or value == '':
        return None, None
    if isinstance(value, list):
        numbers = sorted(int(v) for v in value)
        if not numbers:
            return None, None
        last = numbers[-1] if len(numbers) > 1 else None
        return numbers[0], last
    return int(value), None


class GuessitEpisodeParser:
    """
    Extracts series name, season, episode and air date with guessit.

    The series year guessit splits off the title is appended back as
    "Name (Year)" so that the resolver sees it the way it appears in
    library folder names.
    """

    def parse(self, path: str) -> ParsedEpisodeInfo:
        """
        Parse an episode file path.

        Args:
            path: Path of the file to parse.

        Returns:
            ParsedEpisodeInfo, with series_name None when no title was found.
        """
        file_name = Path(path).name
        infos = guessit.guessit(file_name, {'type': 'episode'})

        title = str(infos.get('title', '')).strip(' -')
        if not title:
            logger.warning(f"No series title detected for {file_name}")
            return ParsedEpisodeInfo()

        year = infos.get('year')
        if isinstance(year, list):
            year = year[0] if year else None

        air_date = infos.get('date')
        if isinstance(air_date, datetime):
            air_date = air_date.date()

        season, _ = _number_range(infos.get('season'))
        episode, ending = _number_range(infos.get('episode'))

        if isinstance(air_date, date) and episode is None:
            return ParsedEpisodeInfo(
                series_name=title,
                season_number=season,
                is_by_date=True,
                year=air_date.year,
                month=air_date.month,
                day=air_date.day,
            )

        series_name = f"{title} ({year})" if year else title

        return ParsedEpisodeInfo(
            series_name=series_name,
            season_number=season,
            episode_number=episode,
            ending_episode_number=ending,
        )
