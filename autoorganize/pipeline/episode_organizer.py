"""Automatic and corrected organization of episode files."""

import asyncio
import os
from functools import partial
from typing import Optional

from loguru import logger

from autoorganize.config.options import AutoOrganizeOptions, OptionsStore, SmartMatchInfo
from autoorganize.config.settings import MIN_SMART_MATCH_LENGTH
from autoorganize.exceptions import (
    EpisodeExtractionError,
    OrganizeBusyError,
    ResultNotFoundError,
    SeriesResolutionError,
)
from autoorganize.interfaces import EpisodeParser, FileSystem, LibraryMonitor, ResultStore
from autoorganize.models.library import Series
from autoorganize.models.result import (
    EpisodeFileOrganizationRequest,
    FileOrganizerType,
    FileSortingStatus,
    OrganizationResult,
)
from autoorganize.pipeline.series_resolver import SeriesResolver
from autoorganize.pipeline.sort_executor import SortExecutor

LOCKED_MESSAGE = "Path is locked by other processes. Please try again later."
CANCELLED_MESSAGE = "Organization was cancelled."


def _is_repeat(previous: Optional[OrganizationResult], result: OrganizationResult) -> bool:
    """True when an attempt failed or was skipped exactly like the stored one."""
    return (previous is not None
            and previous.status == result.status
            and previous.status_message == result.status_message
            and result.status != FileSortingStatus.SUCCESS)


class EpisodeFileOrganizer:
    """
    Entry point for organizing episode files.

    Attributes:
        parser: File name parser.
        resolver: Series resolution.
        executor: File sorting.
        store: Result persistence.
        fs: Filesystem.
        monitor: Library change monitor.
        options_store: Where options are saved when a correction is
            remembered (not saved when None).
    """

    def __init__(
        self,
        parser: EpisodeParser,
        resolver: SeriesResolver,
        executor: SortExecutor,
        store: ResultStore,
        fs: FileSystem,
        monitor: LibraryMonitor,
        options_store: Optional[OptionsStore] = None
    ) -> None:
        self.parser = parser
        self.resolver = resolver
        self.executor = executor
        self.store = store
        self.fs = fs
        self.monitor = monitor
        self.options_store = options_store

    async def organize_episode_file(
        self,
        path: str,
        options: AutoOrganizeOptions,
        overwrite: bool = False
    ) -> OrganizationResult:
        """
        Organize one episode file.

        Args:
            path: Source file path.
            options: Current options.
            overwrite: Replace existing episodes and remove duplicates.

        Returns:
            The result of this attempt, or the stored one when this attempt
            failed exactly like the previous one.
        """
        logger.info(f"Sorting file {path}")

        result = OrganizationResult(
            original_path=path,
            original_file_name=os.path.basename(path),
            type=FileOrganizerType.EPISODE,
            file_size=await asyncio.to_thread(self.fs.get_file_size, path),
        )

        try:
            if self.monitor.is_path_locked(path):
                result.mark(FileSortingStatus.FAILURE, LOCKED_MESSAGE)
                logger.info(f"Auto-organize: {LOCKED_MESSAGE}")
                return result

            previous = await asyncio.to_thread(self.store.get_by_source_path, path)
            await self._organize(path, options, overwrite, result)
        except asyncio.CancelledError:
            result.mark(FileSortingStatus.FAILURE, CANCELLED_MESSAGE)
            await self._save(result)
            raise
        except EpisodeExtractionError as e:
            result.mark(FileSortingStatus.FAILURE, str(e))
            logger.warning(str(e))
        except OrganizeBusyError as e:
            result.mark(FileSortingStatus.FAILURE, str(e))
            logger.warning(f"{path}: {e}")
            return result
        except Exception as e:
            result.mark(FileSortingStatus.FAILURE, str(e))
            logger.exception(f"Error organizing file {path}")
            return result

        if _is_repeat(previous, result):
            logger.debug(f"Same outcome as the stored result for {path}, not saved")
            if result.id is not None:
                # The pending record written while sorting replaced the stored one
                await self._save(previous)
            return previous

        await self._save(result)
        return result

    async def _organize(
        self,
        path: str,
        options: AutoOrganizeOptions,
        overwrite: bool,
        result: OrganizationResult
    ) -> None:
        info = await asyncio.to_thread(self.parser.parse, path)

        series_name = info.series_name
        if not series_name:
            raise EpisodeExtractionError(f"Unable to determine series name from {path}")

        season = info.season_number
        episode = info.episode_number
        result.extracted_season_number = season
        result.extracted_episode_number = episode

        premiere_date = info.premiere_date
        if premiere_date is None and (season is None or episode is None):
            raise EpisodeExtractionError(f"Unable to determine episode number from {path}")

        if premiere_date is not None:
            logger.debug(f"Extracted information from {path}. Series name {series_name}, Date {premiere_date}")
        else:
            logger.debug(
                f"Extracted information from {path}. Series name {series_name}, "
                f"Season {season}, Episode {episode}"
            )

        result.extracted_ending_episode_number = info.ending_episode_number

        series = await self.resolver.resolve(series_name, options, result)
        if series is None:
            msg = f"Unable to find series in library matching name {series_name}"
            result.mark(FileSortingStatus.FAILURE, msg)
            logger.warning(msg)
            return

        await self.executor.execute(
            result, series, season, episode, info.ending_episode_number, premiere_date,
            options, overwrite
        )

    async def organize_with_correction(
        self,
        request: EpisodeFileOrganizationRequest,
        options: AutoOrganizeOptions
    ) -> OrganizationResult:
        """
        Organize a previously processed file again with user corrections.

        Args:
            request: Corrected series and numbers.
            options: Current options.

        Returns:
            The updated result, or the stored one when the correction
            failed exactly like the previous attempt.

        Raises:
            ResultNotFoundError: If no result has the requested id.
        """
        result = await asyncio.to_thread(self.store.get_by_id, request.result_id)
        if result is None:
            raise ResultNotFoundError(f"No organization result with id {request.result_id}")
        previous = result.copy()

        try:
            series: Optional[Series] = None
            if request.new_series_provider_ids:
                series = await self.resolver.create_series(
                    request.new_series_name,
                    request.new_series_year,
                    request.new_series_provider_ids,
                    request.target_folder,
                    options,
                )

            if series is None:
                series = await asyncio.to_thread(self.resolver.catalog.get_by_id, request.series_id)
                if series is None:
                    raise SeriesResolutionError(f"Unable to find series with id {request.series_id}")

            on_sorted = None
            if request.remember_correction:
                on_sorted = partial(self.save_smart_match_string, result.extracted_name, series, options)

            await self.executor.execute(
                result,
                series,
                request.season_number,
                request.episode_number,
                request.ending_episode_number,
                None,
                options,
                True,
                on_sorted,
            )
        except asyncio.CancelledError:
            result.mark(FileSortingStatus.FAILURE, CANCELLED_MESSAGE)
            await self._save(result)
            raise
        except Exception as e:
            result.mark(FileSortingStatus.FAILURE, str(e))
            logger.warning(f"Correction of {result.original_path} failed: {e}")
            return result

        if _is_repeat(previous, result):
            logger.debug(f"Same outcome as the stored result for {result.original_path}, not saved")
            return previous

        await self._save(result)
        return result

    def save_smart_match_string(
        self,
        match_string: Optional[str],
        series: Series,
        options: AutoOrganizeOptions
    ) -> None:
        """
        Remember a name as an alias of a series.

        Names shorter than MIN_SMART_MATCH_LENGTH are ignored, and a name
        already listed (case-insensitively) is not added twice.
        """
        if not match_string or len(match_string) < MIN_SMART_MATCH_LENGTH:
            return

        info = next(
            (i for i in options.smart_match_infos if i.item_name.lower() == series.name.lower()),
            None
        )
        if info is None:
            info = SmartMatchInfo(
                item_name=series.name,
                organizer_type=FileOrganizerType.EPISODE,
                display_name=series.name,
            )
            options.smart_match_infos.append(info)

        if info.matches(match_string):
            return

        info.match_strings.append(match_string)
        logger.info(f"Remembered '{match_string}' for series {series.name}")
        if self.options_store is not None:
            self.options_store.save(options)

    async def _save(self, result: OrganizationResult) -> None:
        """Persist a result; cancelling the caller does not interrupt the write."""
        try:
            await asyncio.shield(asyncio.to_thread(self.store.save, result))
        except Exception as e:
            logger.exception(f"Error saving result for {result.original_path}")
            result.mark(FileSortingStatus.FAILURE, str(e))
