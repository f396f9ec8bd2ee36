"""Computation of the destination path of an episode file."""

import asyncio
import os
from datetime import date
from typing import Optional

from loguru import logger

from autoorganize.config.options import TvFileOrganizationOptions
from autoorganize.exceptions import MetadataNotFoundError
from autoorganize.interfaces import Catalog, FileSystem, MetadataProvider
from autoorganize.models.library import Episode, EpisodeQuery, LocationType, Season, Series
from autoorganize.pipeline.naming import render_episode_filename, render_season_folder


class PathPlanner:
    """
    Builds target paths from provider metadata and naming patterns.

    Attributes:
        catalog: Catalog used to find existing season folders.
        provider: Metadata provider for episode titles.
        fs: Filesystem, for file name sanitization.
    """

    def __init__(
        self,
        catalog: Catalog,
        provider: Optional[MetadataProvider],
        fs: FileSystem
    ) -> None:
        self.catalog = catalog
        self.provider = provider
        self.fs = fs

    async def plan(
        self,
        source_path: str,
        series: Series,
        season: Optional[int],
        episode: Optional[int],
        ending_episode: Optional[int],
        premiere_date: Optional[date],
        options: TvFileOrganizationOptions
    ) -> str:
        """
        Compute where an episode file should go.

        Args:
            source_path: Current path of the file.
            series: Series the episode belongs to.
            season: Season number, if known.
            episode: Episode number, if known.
            ending_episode: Last episode number of a multi-episode file.
            premiere_date: Air date for date-based episodes.
            options: Naming options.

        Returns:
            Target path, or an empty string when no file name could be built.

        Raises:
            MetadataNotFoundError: If the provider knows no such episode.
        """
        query = EpisodeQuery(
            series_provider_ids=dict(series.provider_ids),
            series_name=series.name,
            series_year=series.production_year,
            season_number=season,
            episode_number=episode,
            ending_episode_number=ending_episode,
            premiere_date=premiere_date,
        )

        remote_episodes = []
        if self.provider is not None:
            remote_episodes = await asyncio.to_thread(self.provider.search_episode, query)

        msg = f"No provider metadata found for {series.name} season {season} episode {episode}"
        if not remote_episodes:
            logger.warning(msg)
            raise MetadataNotFoundError(msg)

        remote = remote_episodes[0]
        if season is None:
            season = remote.season_number
        if episode is None:
            episode = remote.episode_number
        if season is None or episode is None:
            logger.warning(msg)
            raise MetadataNotFoundError(msg)

        folder = await asyncio.to_thread(self.season_folder_path, series, season, options)

        pattern = options.multi_episode_name_pattern if ending_episode is not None else options.episode_name_pattern
        file_name = render_episode_filename(
            pattern,
            series.name,
            season,
            episode,
            ending_episode,
            remote.name,
            source_path,
            sanitize=self.fs.sanitize_filename,
        )
        if not file_name:
            return ''

        return os.path.join(folder, file_name)

    def season_folder_path(self, series: Series, season: int, options: TvFileOrganizationOptions) -> str:
        """
        Folder an episode of a given season goes to.

        An existing season folder with that number wins. A series keeping
        episode files directly in its folder gets new ones there too.
        """
        children = self.catalog.get_children(series)

        for child in children:
            if (isinstance(child, Season)
                    and child.location_type == LocationType.FILE_SYSTEM
                    and child.index_number == season):
                return child.path

        if any(isinstance(child, Episode) for child in children):
            return series.path

        if season == 0:
            return os.path.join(series.path, self.fs.sanitize_filename(options.season_zero_folder_name))

        folder_name = render_season_folder(
            options.season_folder_pattern, season, sanitize=self.fs.sanitize_filename
        )
        return os.path.join(series.path, folder_name)
