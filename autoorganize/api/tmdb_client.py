"""TMDB (The Movie Database) API client for TV series and episodes."""

from datetime import date
from typing import Any, Dict, List, Optional

import requests
from loguru import logger

from autoorganize.api.cache_db import CacheDB
from autoorganize.api.exceptions import (
    APIConfigurationError,
    APIConnectionError,
    APIResponseError,
)
from autoorganize.config.settings import REQUEST_TIMEOUT_SECONDS
from autoorganize.models.library import EpisodeQuery, RemoteEpisode, RemoteSearchResult

PROVIDER_NAME = 'Tmdb'


def _year_of(air_date: Optional[str]) -> Optional[int]:
    """Year of a TMDB "YYYY-MM-DD" date, if present."""
    if air_date and len(air_date) >= 4 and air_date[:4].isdigit():
        return int(air_date[:4])
    return None


class TmdbClient:
    """
    Client for The Movie Database (TMDB) TV API.

    Implements series search and episode lookup for the organizer.

    Attributes:
        api_key: TMDB API key for authentication.
        language: Language code for results.
        cache: Optional response cache.
    """

    BASE_URL = 'https://api.themoviedb.org/3'
    SEARCH_TV_ENDPOINT = '/search/tv'
    DEFAULT_LANGUAGE = 'en-US'
    USER_AGENT = 'autoorganize/0.3'

    def __init__(
        self,
        api_key: Optional[str] = None,
        language: str = DEFAULT_LANGUAGE,
        cache: Optional[CacheDB] = None
    ) -> None:
        """
        Initialize TMDB client.

        Args:
            api_key: TMDB API key. Requests raise APIConfigurationError without it.
            language: Language code for results (default: en-US).
            cache: Cache for raw responses.
        """
        self.api_key = api_key
        self.language = language
        self.cache = cache

    def _get(self, endpoint: str, **params: Any) -> Optional[Dict]:
        """
        Perform a GET request against the API.

        Args:
            endpoint: Path below BASE_URL.
            **params: Query parameters (None values are dropped).

        Returns:
            Decoded JSON body, or None when TMDB answers 404.

        Raises:
            APIConfigurationError: If no API key is set.
            APIConnectionError: On network errors.
            APIResponseError: On other error statuses or invalid JSON.
        """
        if not self.api_key:
            raise APIConfigurationError("TMDB API key missing")

        query = {k: v for k, v in params.items() if v is not None}
        query['language'] = self.language
        cache_key = f"{endpoint}?{sorted(query.items())}"

        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        try:
            response = requests.get(
                f'{self.BASE_URL}{endpoint}',
                params={**query, 'api_key': self.api_key},
                headers={'User-Agent': self.USER_AGENT},
                timeout=REQUEST_TIMEOUT_SECONDS
            )
        except requests.RequestException as e:
            raise APIConnectionError(f"Request error on {endpoint}: {e}") from e

        if response.status_code == 404:
            logger.debug(f"TMDB returned 404 for {endpoint}")
            return None
        if response.status_code != 200:
            raise APIResponseError(
                f"API request error on {endpoint}: {response.status_code}",
                status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise APIResponseError(f"Invalid JSON from {endpoint}: {e}") from e

        if self.cache is not None:
            self.cache.set(cache_key, data)
        return data

    def search_series(self, name: str, year: Optional[int] = None) -> List[RemoteSearchResult]:
        """
        Search TV series by name.

        Args:
            name: Series name.
            year: First air year to narrow the search.

        Returns:
            Candidates in TMDB relevance order.
        """
        data = self._get(self.SEARCH_TV_ENDPOINT, query=name, first_air_date_year=year) or {}

        results = []
        for item in data.get('results', []):
            if 'id' not in item:
                continue
            results.append(RemoteSearchResult(
                name=item.get('name') or item.get('original_name', ''),
                provider_ids={PROVIDER_NAME: str(item['id'])},
                production_year=_year_of(item.get('first_air_date')),
            ))

        logger.debug(f"TMDB search '{name}' ({year}): {len(results)} result(s)")
        return results

    def search_episode(self, query: EpisodeQuery) -> List[RemoteEpisode]:
        """
        Look up an episode by season/episode numbers or by air date.

        Args:
            query: Episode query. The series is taken from its Tmdb provider
                id, or searched by name when it has none.

        Returns:
            Matching episodes (empty when nothing was found).
        """
        series_id = query.series_provider_ids.get(PROVIDER_NAME)
        if not series_id and query.series_name:
            candidates = self.search_series(query.series_name, query.series_year)
            if candidates:
                series_id = candidates[0].provider_ids[PROVIDER_NAME]
        if not series_id:
            logger.debug(f"No TMDB id for series '{query.series_name}'")
            return []

        if query.premiere_date is not None:
            return self._find_by_air_date(series_id, query.premiere_date, query.season_number)

        if query.season_number is None or query.episode_number is None:
            return []

        data = self._get(
            f'/tv/{series_id}/season/{query.season_number}/episode/{query.episode_number}'
        )
        if not data:
            return []

        return [RemoteEpisode(
            name=data.get('name', ''),
            season_number=data.get('season_number', query.season_number),
            episode_number=data.get('episode_number', query.episode_number),
        )]

    def _find_by_air_date(
        self,
        series_id: str,
        air_date: date,
        season_hint: Optional[int] = None
    ) -> List[RemoteEpisode]:
        """Scan seasons of a series for episodes aired on a given date."""
        if season_hint is not None:
            season_numbers = [season_hint]
        else:
            details = self._get(f'/tv/{series_id}') or {}
            season_numbers = [
                s['season_number'] for s in details.get('seasons', [])
                if 'season_number' in s and (_year_of(s.get('air_date')) or air_date.year) <= air_date.year
            ]

        wanted = air_date.isoformat()
        matches = []
        for season_number in reversed(season_numbers):
            season = self._get(f'/tv/{series_id}/season/{season_number}') or {}
            for episode in season.get('episodes', []):
                if episode.get('air_date') == wanted:
                    matches.append(RemoteEpisode(
                        name=episode.get('name', ''),
                        season_number=episode.get('season_number', season_number),
                        episode_number=episode.get('episode_number'),
                    ))
            if matches:
                break

        return matches
