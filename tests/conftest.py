"""Pytest configuration and fixtures."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from autoorganize.classification import GuessitEpisodeParser
from autoorganize.config.options import AutoOrganizeOptions, TvFileOrganizationOptions
from autoorganize.filesystem import LibraryMonitor, LocalFileSystem
from autoorganize.library import LibraryCatalog
from autoorganize.models import RemoteEpisode, Series
from autoorganize.pipeline import (
    DuplicateLocator,
    EpisodeFileOrganizer,
    PathPlanner,
    SeriesResolver,
    SortExecutor,
)
from autoorganize.utils import ResultStore


@pytest.fixture
def library_dir(tmp_path):
    """Empty series library folder."""
    path = tmp_path / "library"
    path.mkdir()
    return path


@pytest.fixture
def incoming_dir(tmp_path):
    """Folder holding files to organize."""
    path = tmp_path / "incoming"
    path.mkdir()
    return path


@pytest.fixture
def make_file():
    """Create a file with some content, parents included."""
    def _make(path: Path, content: bytes = b"fake video content") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path
    return _make


@pytest.fixture
def options(library_dir):
    """Options with simple, predictable patterns."""
    return AutoOrganizeOptions(tv_options=TvFileOrganizationOptions(
        default_series_library_path=str(library_dir),
        series_folder_pattern="%sn",
        season_folder_pattern="Season %0s",
        episode_name_pattern="%sn S%0sE%0e.%ext",
        multi_episode_name_pattern="%sn S%0sE%0e-E%0ed.%ext",
    ))


@pytest.fixture
def provider():
    """Metadata provider mock knowing every episode."""
    mock = Mock()
    mock.search_series.return_value = []
    mock.search_episode.side_effect = lambda query: [
        RemoteEpisode(
            name="Some Title",
            season_number=query.season_number,
            episode_number=query.episode_number,
        )
    ]
    return mock


@pytest.fixture
def catalog(library_dir, provider):
    """Catalog over the library folder."""
    return LibraryCatalog([library_dir], GuessitEpisodeParser(), provider)


@pytest.fixture
def show_series(library_dir, catalog):
    """Series "Show Name" registered in the catalog, folder not yet created."""
    series = Series(
        id="show-name",
        name="Show Name",
        path=str(library_dir / "Show Name"),
        provider_ids={"Tmdb": "1234"},
    )
    catalog.add_child(catalog.roots[0], series)
    return series


@pytest.fixture
def result_store(tmp_path):
    store = ResultStore(tmp_path / "results.db")
    yield store
    store.close()


@pytest.fixture
def fs():
    return LocalFileSystem()


@pytest.fixture
def monitor():
    return LibraryMonitor()


@pytest.fixture
def executor(result_store, catalog, provider, fs, monitor):
    planner = PathPlanner(catalog, provider, fs)
    return SortExecutor(result_store, planner, DuplicateLocator(catalog, fs), fs, monitor)


@pytest.fixture
def organizer(catalog, provider, executor, result_store, fs, monitor):
    resolver = SeriesResolver(catalog, provider)
    return EpisodeFileOrganizer(GuessitEpisodeParser(), resolver, executor, result_store, fs, monitor)
