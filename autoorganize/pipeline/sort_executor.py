"""Moving an episode file to its target path."""

import asyncio
import os
from datetime import date
from typing import Callable, List, Optional

from loguru import logger

from autoorganize.config.options import AutoOrganizeOptions, TvFileOrganizationOptions
from autoorganize.exceptions import FileSortingError, OrganizeBusyError
from autoorganize.filesystem.file_ops import get_directory_name, get_file_name_without_extension
from autoorganize.interfaces import FileSystem, LibraryMonitor, ResultStore
from autoorganize.models.library import Series
from autoorganize.models.result import FileSortingStatus, OrganizationResult
from autoorganize.pipeline.duplicates import DuplicateLocator
from autoorganize.pipeline.path_planner import PathPlanner

BUSY_MESSAGE = "File is currently processed otherwise. Please try again later."


class SortExecutor:
    """
    Sorts one file into the library, guarded against concurrent runs.

    Attributes:
        store: Result store holding the in-progress registry.
        planner: Target path computation.
        locator: Duplicate detection.
        fs: Filesystem.
        monitor: Library change monitor.
    """

    def __init__(
        self,
        store: ResultStore,
        planner: PathPlanner,
        locator: DuplicateLocator,
        fs: FileSystem,
        monitor: LibraryMonitor
    ) -> None:
        self.store = store
        self.planner = planner
        self.locator = locator
        self.fs = fs
        self.monitor = monitor

    async def execute(
        self,
        result: OrganizationResult,
        series: Series,
        season: Optional[int],
        episode: Optional[int],
        ending_episode: Optional[int],
        premiere_date: Optional[date],
        options: AutoOrganizeOptions,
        overwrite: bool = False,
        on_sorted: Optional[Callable[[], None]] = None
    ) -> OrganizationResult:
        """
        Sort a file and record the outcome on its result.

        Args:
            result: Result of the file being organized.
            series: Target series.
            season: Season number, if known.
            episode: Episode number, if known.
            ending_episode: Last episode of a multi-episode file.
            premiere_date: Air date for date-based episodes.
            options: Current options.
            overwrite: Replace an existing target and remove duplicates.
            on_sorted: Called once the file has been transferred, not when
                sorting stopped early, failed or raised.

        Returns:
            The updated result.

        Raises:
            OrganizeBusyError: If the same source file is already being
                organized. Nothing is changed in that case.
        """
        logger.info(f"Sorting file {result.original_path} into series {series.path}")

        is_new = not result.id
        self.store.assign_id(result)
        if not self.store.try_begin(result, is_new):
            raise OrganizeBusyError(BUSY_MESSAGE)

        try:
            if is_new:
                await asyncio.to_thread(self.store.save, result)

            completed = await self._sort(
                result, series, season, episode, ending_episode, premiere_date,
                options.tv_options, overwrite
            )
        except Exception as e:
            result.mark(FileSortingStatus.FAILURE, str(e))
            logger.warning(str(e))
            return result
        finally:
            self.store.end(result)

        if completed and on_sorted is not None:
            await asyncio.to_thread(on_sorted)
        return result

    async def _sort(
        self,
        result: OrganizationResult,
        series: Series,
        season: Optional[int],
        episode: Optional[int],
        ending_episode: Optional[int],
        premiere_date: Optional[date],
        options: TvFileOrganizationOptions,
        overwrite: bool
    ) -> bool:
        """Run the decision sequence; False when sorting stopped early."""
        source_path = result.original_path
        new_path = await self.planner.plan(
            source_path, series, season, episode, ending_episode, premiere_date, options
        )
        if not new_path:
            raise FileSortingError(
                f"Unable to sort {source_path} because target path could not be determined."
            )

        logger.info(f"Sorting file {source_path} to new path {new_path}")
        result.target_path = new_path

        if source_path.lower() == new_path.lower():
            logger.info(f"File {source_path} is already at its target path")
            result.mark(FileSortingStatus.SUCCESS)
            return False

        file_exists = await asyncio.to_thread(self.fs.file_exists, new_path)
        duplicates = await asyncio.to_thread(
            self.locator.find_duplicates, new_path, series, season, episode, ending_episode
        )

        if not overwrite:
            if options.copy_original_file and file_exists and await asyncio.to_thread(
                self._is_same_episode, source_path, new_path
            ):
                msg = f"File '{source_path}' already copied to new path '{new_path}', stopping organization"
                logger.info(msg)
                result.mark(FileSortingStatus.SKIPPED_EXISTING, msg)
                return False

            if file_exists:
                msg = f"File '{source_path}' already exists as '{new_path}', stopping organization"
                logger.info(msg)
                result.mark(FileSortingStatus.SKIPPED_EXISTING, msg)
                return False

            if duplicates:
                joined = "', '".join(duplicates)
                msg = f"File '{source_path}' already exists as these:'{joined}'. Stopping organization"
                logger.info(msg)
                result.mark(FileSortingStatus.SKIPPED_EXISTING, msg)
                result.duplicate_paths = list(duplicates)
                return False

        if not await asyncio.to_thread(self._perform_file_sorting, options, result):
            return False

        if overwrite:
            await self._remove_duplicates(duplicates, result.target_path)

        return True

    def _is_same_episode(self, source_path: str, new_path: str) -> bool:
        try:
            return self.fs.get_file_size(source_path) == self.fs.get_file_size(new_path)
        except OSError as e:
            logger.error(f"Error comparing {source_path} with {new_path}: {e}")
            return False

    def _perform_file_sorting(self, options: TvFileOrganizationOptions, result: OrganizationResult) -> bool:
        """Copy or move the source to the target path; False when the transfer failed."""
        target_path = result.target_path

        self.monitor.report_change_beginning(target_path)
        try:
            self.fs.create_directory(get_directory_name(target_path))
            target_already_exists = self.fs.file_exists(target_path)

            if target_already_exists or options.copy_original_file:
                self.fs.copy_file(result.original_path, target_path, True)
            else:
                self.fs.move_file(result.original_path, target_path)

            result.mark(FileSortingStatus.SUCCESS)
        except OSError as e:
            msg = f"Failed to move file from {result.original_path} to {target_path}: {e}"
            result.mark(FileSortingStatus.FAILURE, msg)
            logger.error(msg)
            return False
        finally:
            self.monitor.report_change_complete(target_path, True)

        if target_already_exists and not options.copy_original_file:
            try:
                self.fs.delete_file(result.original_path)
            except OSError as e:
                logger.error(f"Error deleting {result.original_path}: {e}")

        return True

    async def _remove_duplicates(self, duplicates: List[str], target_path: str) -> None:
        """Delete duplicates, renaming the sidecars of the first one next to the target."""
        has_renamed_files = False
        target_dir = get_directory_name(target_path).lower()

        for path in duplicates:
            logger.debug(f"Removing duplicate episode {path}")
            self.monitor.report_change_beginning(path)

            rename_related = not has_renamed_files and get_directory_name(path).lower() == target_dir
            if rename_related:
                has_renamed_files = True

            try:
                await asyncio.to_thread(self._delete_library_file, path, rename_related, target_path)
            except OSError as e:
                logger.error(f"Error removing duplicate episode {path}: {e}")
            finally:
                self.monitor.report_change_complete(path, True)

    def _delete_library_file(self, path: str, rename_related: bool, target_path: str) -> None:
        if rename_related:
            self._rename_related_files(path, target_path)
        self.fs.delete_file(path)

    def _rename_related_files(self, path: str, target_path: str) -> None:
        """
        Give the sidecar files of a duplicate the target's base name.

        Sidecars are the files whose base name starts with the duplicate's
        (subtitles, artwork, metadata); that prefix is swapped for the
        target's base name.
        """
        original_stem = get_file_name_without_extension(path)
        directory = get_directory_name(path)
        if not original_stem.strip() or not directory.strip():
            return

        target_stem = get_file_name_without_extension(target_path)
        excluded = {path.lower(), target_path.lower()}

        for file in self.fs.get_file_paths(directory):
            if file.lower() in excluded:
                continue
            if not get_file_name_without_extension(file).lower().startswith(original_stem.lower()):
                continue

            file_name = os.path.basename(file)
            new_name = target_stem + file_name[len(original_stem):]
            if new_name == file_name:
                continue

            destination = os.path.join(get_directory_name(file), new_name)
            if self.fs.file_exists(destination):
                logger.debug(f"Not renaming {file}, {destination} exists")
                continue

            try:
                self.fs.move_file(file, destination)
            except OSError as e:
                logger.error(f"Error renaming {file} to {destination}: {e}")
