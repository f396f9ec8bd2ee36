"""Tests for the autoorganize package entry point."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from autoorganize.__main__ import apply_cli_overrides, main, setup_logging
from autoorganize.config import DEFAULT_LIBRARY_DIR, AutoOrganizeOptions, CLIArgs
from autoorganize.models import FileSortingStatus, OrganizationResult, RemoteEpisode
from autoorganize.utils import ResultStore


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default(self):
        """Sets up logging with default level."""
        with patch("autoorganize.__main__.logger") as mock_logger:
            setup_logging(debug=False)
            mock_logger.remove.assert_called_once()
            assert mock_logger.add.call_count == 2
            assert mock_logger.add.call_args_list[0][1]["level"] == "INFO"

    def test_setup_logging_debug(self):
        with patch("autoorganize.__main__.logger") as mock_logger:
            setup_logging(debug=True)
            assert mock_logger.add.call_args_list[0][1]["level"] == "DEBUG"


class TestApplyCliOverrides:
    """Tests for apply_cli_overrides function."""

    def test_library_from_cli(self):
        options = apply_cli_overrides(AutoOrganizeOptions(), CLIArgs(library_dir=Path("/media/tv")))
        assert options.tv_options.default_series_library_path == str(Path("/media/tv"))

    def test_default_library(self):
        options = apply_cli_overrides(AutoOrganizeOptions(), CLIArgs())
        assert options.tv_options.default_series_library_path == str(DEFAULT_LIBRARY_DIR)

    def test_stored_library_kept(self):
        options = AutoOrganizeOptions()
        options.tv_options.default_series_library_path = "/stored"
        apply_cli_overrides(options, CLIArgs())
        assert options.tv_options.default_series_library_path == "/stored"

    def test_flags(self):
        options = apply_cli_overrides(AutoOrganizeOptions(), CLIArgs(copy=True, auto_detect=True))
        assert options.tv_options.copy_original_file is True
        assert options.tv_options.auto_detect_series is True

    def test_unset_flags_keep_options(self):
        options = AutoOrganizeOptions()
        options.tv_options.copy_original_file = True
        apply_cli_overrides(options, CLIArgs())
        assert options.tv_options.copy_original_file is True


@pytest.fixture
def base_argv(tmp_path, library_dir):
    return [
        "--config", str(tmp_path / "options.json"),
        "--db", str(tmp_path / "results.db"),
        "--cache", str(tmp_path / "cache.db"),
        "--library", str(library_dir),
    ]


@pytest.fixture
def quiet():
    """Skip log file setup and .env loading."""
    with patch("autoorganize.__main__.setup_logging"), patch("autoorganize.__main__.load_dotenv"):
        yield


@pytest.fixture
def tmdb(monkeypatch):
    monkeypatch.setenv("TMDB_API_KEY", "test_key")
    client = MagicMock()
    client.search_series.return_value = []
    client.search_episode.side_effect = lambda query: [
        RemoteEpisode(name="Pilot", season_number=query.season_number, episode_number=query.episode_number)
    ]
    with patch("autoorganize.__main__.TmdbClient", return_value=client):
        yield client


class TestMain:
    """Tests for main function."""

    def test_organize(self, quiet, tmdb, base_argv, library_dir, incoming_dir, make_file):
        (library_dir / "Show Name").mkdir()
        source = make_file(incoming_dir / "Show.Name.S01E01.mkv")

        exit_code = main(base_argv + ["organize", str(source)])

        assert exit_code == 0
        assert (library_dir / "Show Name" / "Season 1" / "Show Name - 1x01 - Pilot.mkv").exists()
        assert not source.exists()

    def test_organize_failure_exit_code(self, quiet, tmdb, base_argv, incoming_dir, make_file):
        source = make_file(incoming_dir / "Unknown.Show.S01E01.mkv")
        assert main(base_argv + ["organize", str(source)]) == 1

    def test_results_listed(self, quiet, base_argv, tmp_path):
        with ResultStore(tmp_path / "results.db") as store:
            result = OrganizationResult(original_path="/in/a.mkv", original_file_name="a.mkv")
            result.mark(FileSortingStatus.FAILURE, "failed")
            store.save(result)

        with patch("autoorganize.__main__.display_results") as mock_display:
            assert main(base_argv + ["results"]) == 0

        results = mock_display.call_args[0][0]
        assert [r.original_path for r in results] == ["/in/a.mkv"]
        assert mock_display.call_args[1]["show_ids"] is True

    def test_new_series_needs_provider_id(self, quiet, base_argv):
        assert main(base_argv + ["correct", "abc", "--new-series", "Show"]) == 2

    def test_correct_unknown_result(self, quiet, tmdb, base_argv):
        assert main(base_argv + ["correct", "missing", "--series-id", "x"]) == 1

    def test_correct(self, quiet, tmdb, base_argv, library_dir, incoming_dir, make_file, tmp_path):
        source = make_file(incoming_dir / "Other.Show.S01E01.mkv")
        assert main(base_argv + ["organize", str(source)]) == 1
        with ResultStore(tmp_path / "results.db") as store:
            result_id = store.get_by_source_path(str(source.resolve())).id

        exit_code = main(base_argv + [
            "correct", result_id, "--new-series", "Show Name", "--provider-id", "Tmdb=1",
            "--season", "1", "--episode", "1", "--remember",
        ])

        assert exit_code == 0
        assert (library_dir / "Show Name" / "Season 1" / "Show Name - 1x01 - Pilot.mkv").exists()
        assert "Other Show" in (tmp_path / "options.json").read_text()
