"""Resolution of extracted series names to catalog series."""

import asyncio
import os
import threading
from typing import Dict, List, Optional, Set

from loguru import logger

from autoorganize.api.exceptions import APIError
from autoorganize.classification.text_processing import get_match_score, parse_series_name
from autoorganize.config.options import AutoOrganizeOptions
from autoorganize.interfaces import Catalog, MetadataProvider
from autoorganize.models.library import RemoteSearchResult, Series
from autoorganize.models.result import OrganizationResult
from autoorganize.pipeline.naming import render_series_folder
from autoorganize.utils.hash import path_id

# One series creation at a time across the whole process
_SERIES_CREATION_LOCK = threading.Lock()


def split_series_name(series_name: str, year: Optional[int] = None) -> tuple:
    """
    Split the year off an extracted series name.

    Args:
        series_name: Name as extracted from the file name.
        year: Year known from elsewhere, used when the name has none.

    Returns:
        Tuple of (name without year, year or None).
    """
    name, year_in_name = parse_series_name(series_name)
    if not name or not name.strip():
        name = series_name
    return name, year_in_name if year_in_name is not None else year


def pick_consensus(
    first: List[RemoteSearchResult],
    second: List[RemoteSearchResult]
) -> Optional[RemoteSearchResult]:
    """
    Pick the series two remote searches agree on.

    Each search may return at most one candidate. When both return one, they
    must share at least one provider id and the first candidate wins. When
    only one search returns a candidate, that candidate is used.

    Args:
        first: Results of the search on the unaltered name.
        second: Results of the search with dots replaced by underscores.

    Returns:
        The accepted candidate, or None.
    """
    if len(first) > 1 or len(second) > 1:
        return None

    result_one = first[0] if first else None
    result_two = second[0] if second else None

    if result_one is not None and result_two is not None:
        for key, value in result_one.provider_ids.items():
            if result_two.provider_ids.get(key) == value:
                return result_one
        return None

    return result_one or result_two


class SeriesResolver:
    """
    Finds the catalog series an extracted name refers to.

    Lookup order: scored catalog match, smart match aliases, then (when
    enabled) remote auto-detection which creates the series in the library.

    Attributes:
        catalog: Series catalog.
        provider: Metadata provider used for auto-detection, if any.
    """

    def __init__(self, catalog: Catalog, provider: Optional[MetadataProvider] = None) -> None:
        self.catalog = catalog
        self.provider = provider
        self._refresh_tasks: Set[asyncio.Task] = set()

    def find_matching_series(
        self,
        series_name: str,
        options: AutoOrganizeOptions,
        result: Optional[OrganizationResult] = None
    ) -> Optional[Series]:
        """
        Match a name against the catalog, then the smart match table.

        Args:
            series_name: Extracted series name, possibly with a year.
            options: Options holding the smart match table.
            result: Result to record the extracted name and year on.

        Returns:
            Best matching series, or None.
        """
        name, year = split_series_name(series_name)

        if result is not None:
            result.extracted_name = name
            result.extracted_year = year

        best: Optional[Series] = None
        best_score = 0
        for series in self.catalog.list_series():
            score = get_match_score(name, year, series)
            # Strictly greater keeps the first of equal scores
            if score > best_score:
                best, best_score = series, score

        if best is not None:
            logger.debug(f"Series '{name}' matched '{best.name}' (score {best_score})")
            return best

        info = options.find_smart_match(name)
        if info is not None:
            matches = self.catalog.list_series(info.item_name)
            if matches:
                logger.debug(f"Series '{name}' matched '{matches[0].name}' by smart match")
                return matches[0]

        return None

    async def resolve(
        self,
        series_name: str,
        options: AutoOrganizeOptions,
        result: Optional[OrganizationResult] = None
    ) -> Optional[Series]:
        """Find a series by name, falling back to auto-detection."""
        series = await asyncio.to_thread(self.find_matching_series, series_name, options, result)
        if series is None:
            series = await self.auto_detect(series_name, None, options)
        return series

    async def _search(self, name: str, year: Optional[int]) -> List[RemoteSearchResult]:
        try:
            return await asyncio.to_thread(self.provider.search_series, name, year)
        except APIError as e:
            logger.warning(f"Series search failed for '{name}': {e}")
            return []

    async def auto_detect(
        self,
        series_name: str,
        year: Optional[int],
        options: AutoOrganizeOptions
    ) -> Optional[Series]:
        """
        Create a series from remote search results.

        Searches the name as is and with dots replaced by underscores, since
        some providers do not treat dots as separators, and only accepts a
        candidate both searches agree on (see pick_consensus).

        Returns:
            The created (or concurrently created) series, or None.
        """
        if not options.tv_options.auto_detect_series or self.provider is None:
            return None

        name, year = split_series_name(series_name, year)

        first, second = await asyncio.gather(
            self._search(name, year),
            self._search(name.replace('.', '_'), year),
        )

        candidate = pick_consensus(first, second)
        if candidate is None:
            logger.info(
                f"Auto-detect found no single series for '{name}' "
                f"({len(first)} and {len(second)} result(s))"
            )
            return None

        logger.info(f"Auto-detected series '{candidate.name}' for '{name}'")
        return await self.create_series(
            candidate.name,
            str(candidate.production_year) if candidate.production_year else None,
            candidate.provider_ids,
            options.tv_options.default_series_library_path,
            options,
        )

    async def create_series(
        self,
        name: str,
        year: Optional[str],
        provider_ids: Dict[str, str],
        target_folder: Optional[str],
        options: AutoOrganizeOptions
    ) -> Optional[Series]:
        """
        Create a series in the library unless a matching one already exists.

        Args:
            name: Series name.
            year: Production year as text, ignored when not a number.
            provider_ids: External ids of the series.
            target_folder: Library folder to create it in (defaults to the
                configured series library).
            options: Current options.

        Returns:
            The existing or newly created series.
        """
        folder = target_folder or options.tv_options.default_series_library_path
        series = await asyncio.to_thread(
            self._create_series_locked, name, year, provider_ids, folder, options
        )

        if series is not None:
            self._schedule_refresh(series)
        return series

    def _create_series_locked(
        self,
        name: str,
        year: Optional[str],
        provider_ids: Dict[str, str],
        target_folder: str,
        options: AutoOrganizeOptions
    ) -> Optional[Series]:
        try:
            production_year: Optional[int] = int(year) if year else None
        except ValueError:
            production_year = None

        with _SERIES_CREATION_LOCK:
            series = self.find_matching_series(name, options)
            if series is not None:
                return series

            folder_name = render_series_folder(
                options.tv_options.series_folder_pattern, name, production_year
            )
            series_path = os.path.join(target_folder, folder_name)
            series = Series(
                id=path_id(series_path),
                name=name,
                production_year=production_year,
                path=series_path,
                provider_ids=dict(provider_ids),
            )

            library_folder = self.catalog.find_by_path(target_folder)
            if library_folder is not None:
                self.catalog.add_child(library_folder, series)
            else:
                logger.warning(f"No library folder at {target_folder}, series {name} not added")

        logger.info(f"Created series {name} at {series_path}")
        return series

    def _schedule_refresh(self, series: Series) -> None:
        """Refresh series metadata in the background."""
        task = asyncio.create_task(asyncio.to_thread(self.catalog.refresh_metadata, series))
        self._refresh_tasks.add(task)
        task.add_done_callback(self._on_refresh_done)

    def _on_refresh_done(self, task: asyncio.Task) -> None:
        self._refresh_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.opt(exception=error).error(f"Metadata refresh failed: {error}")

    async def wait_for_refreshes(self) -> None:
        """Wait for background metadata refreshes to finish."""
        if self._refresh_tasks:
            await asyncio.gather(*self._refresh_tasks, return_exceptions=True)
