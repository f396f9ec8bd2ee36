"""Tests for duplicate episode detection."""

import pytest

from autoorganize.models import Episode, LocationType
from autoorganize.pipeline.duplicates import DuplicateLocator


@pytest.fixture
def locator(catalog, fs):
    return DuplicateLocator(catalog, fs)


@pytest.fixture
def season_dir(library_dir):
    return library_dir / "Show Name" / "Season 01"


class TestFindDuplicates:
    """Tests for DuplicateLocator.find_duplicates."""

    def test_no_duplicates(self, locator, show_series, season_dir):
        target = str(season_dir / "Show Name S01E02.mkv")
        assert locator.find_duplicates(target, show_series, 1, 2) == []

    def test_missing_numbers(self, locator, show_series, season_dir):
        target = str(season_dir / "Show Name S01E02.mkv")
        assert locator.find_duplicates(target, show_series, None, 2) == []
        assert locator.find_duplicates(target, show_series, 1, None) == []

    def test_catalog_episode_with_same_numbers(self, locator, catalog, show_series, season_dir, make_file):
        existing = make_file(season_dir / "Show Name S01E02 Old Title.avi")
        catalog.refresh_metadata(show_series)
        target = str(season_dir / "Show Name S01E02.mkv")

        assert locator.find_duplicates(target, show_series, 1, 2) == [str(existing)]

    def test_other_episode_not_duplicate(self, locator, catalog, show_series, season_dir, make_file):
        make_file(season_dir / "Show Name S01E03.avi")
        catalog.refresh_metadata(show_series)
        target = str(season_dir / "Show Name S01E02.mkv")

        assert locator.find_duplicates(target, show_series, 1, 2) == []

    def test_ending_number_must_match(self, locator, catalog, show_series, season_dir, make_file):
        make_file(season_dir / "Show Name S01E02-E03.avi")
        catalog.refresh_metadata(show_series)
        target = str(season_dir / "Show Name S01E02.mkv")

        assert locator.find_duplicates(target, show_series, 1, 2) == []

    def test_virtual_episodes_ignored(self, locator, catalog, show_series, season_dir):
        catalog.get_episodes = lambda series: [
            Episode(1, 2, path=str(season_dir / "Show Name S01E02.avi"), location_type=LocationType.VIRTUAL)
        ]
        target = str(season_dir / "Show Name S01E02.mkv")

        assert locator.find_duplicates(target, show_series, 1, 2) == []

    def test_same_stem_video_in_target_folder(self, locator, show_series, season_dir, make_file):
        other = make_file(season_dir / "show name s01e02.avi")
        make_file(season_dir / "Show Name S01E02.srt")
        target = str(season_dir / "Show Name S01E02.mkv")

        assert locator.find_duplicates(target, show_series, 1, 2) == [str(other)]

    def test_target_excluded(self, locator, catalog, show_series, season_dir, make_file):
        target = make_file(season_dir / "Show Name S01E02.mkv")
        catalog.refresh_metadata(show_series)

        assert locator.find_duplicates(str(target), show_series, 1, 2) == []

    def test_reported_once(self, locator, catalog, show_series, season_dir, make_file):
        existing = make_file(season_dir / "Show Name S01E02.avi")
        catalog.refresh_metadata(show_series)
        target = str(season_dir / "Show Name S01E02.mkv")

        assert locator.find_duplicates(target, show_series, 1, 2) == [str(existing)]
