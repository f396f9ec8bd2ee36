"""Episode organization pipeline."""

from autoorganize.pipeline.naming import (
    render_episode_filename,
    render_season_folder,
    render_series_folder,
)
from autoorganize.pipeline.duplicates import DuplicateLocator
from autoorganize.pipeline.series_resolver import SeriesResolver, pick_consensus
from autoorganize.pipeline.path_planner import PathPlanner
from autoorganize.pipeline.sort_executor import SortExecutor
from autoorganize.pipeline.episode_organizer import EpisodeFileOrganizer

__all__ = [
    "render_episode_filename",
    "render_season_folder",
    "render_series_folder",
    "DuplicateLocator",
    "SeriesResolver",
    "pick_consensus",
    "PathPlanner",
    "SortExecutor",
    "EpisodeFileOrganizer",
]
