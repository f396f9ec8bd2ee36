"""Tests for options and their JSON persistence."""

import json

from autoorganize.config.options import (
    AutoOrganizeOptions,
    OptionsStore,
    SmartMatchInfo,
    TvFileOrganizationOptions,
)
from autoorganize.config.settings import DEFAULT_EPISODE_NAME_PATTERN
from autoorganize.models import FileOrganizerType


class TestSmartMatchInfo:
    """Tests for SmartMatchInfo.matches."""

    def test_case_insensitive(self):
        info = SmartMatchInfo(item_name="Show Name", match_strings=["show.name"])
        assert info.matches("SHOW.NAME")

    def test_no_match(self):
        info = SmartMatchInfo(item_name="Show Name", match_strings=["show.name"])
        assert not info.matches("other")


class TestAutoOrganizeOptions:
    """Tests for AutoOrganizeOptions."""

    def test_defaults(self):
        options = AutoOrganizeOptions()
        assert options.tv_options.episode_name_pattern == DEFAULT_EPISODE_NAME_PATTERN
        assert options.tv_options.auto_detect_series is False
        assert options.smart_match_infos == []

    def test_find_smart_match(self):
        wanted = SmartMatchInfo(item_name="B", match_strings=["bee"])
        options = AutoOrganizeOptions(smart_match_infos=[
            SmartMatchInfo(item_name="A", match_strings=["ay"]),
            wanted,
        ])
        assert options.find_smart_match("Bee") is wanted
        assert options.find_smart_match("cee") is None

    def test_dict_round_trip_keeps_smart_matches(self):
        options = AutoOrganizeOptions(
            tv_options=TvFileOrganizationOptions(copy_original_file=True),
            smart_match_infos=[SmartMatchInfo(item_name="A", display_name="A", match_strings=["x"])],
        )
        restored = AutoOrganizeOptions.from_dict(json.loads(json.dumps(options.to_dict())))
        assert restored == options
        assert restored.smart_match_infos[0].organizer_type == FileOrganizerType.EPISODE

    def test_from_dict_ignores_unknown_keys(self):
        options = AutoOrganizeOptions.from_dict({"tv_options": {"unknown": 1, "auto_detect_series": True}})
        assert options.tv_options.auto_detect_series is True


class TestOptionsStore:
    """Tests for OptionsStore."""

    def test_missing_file_gives_defaults(self, tmp_path):
        store = OptionsStore(tmp_path / "missing.json")
        assert store.load() == AutoOrganizeOptions()

    def test_invalid_file_gives_defaults(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        assert OptionsStore(path).load() == AutoOrganizeOptions()

    def test_save_and_load(self, tmp_path):
        store = OptionsStore(tmp_path / "sub" / "options.json")
        options = AutoOrganizeOptions(smart_match_infos=[SmartMatchInfo(item_name="A", match_strings=["a1"])])
        options.tv_options.season_folder_pattern = "S%0s"

        store.save(options)

        loaded = store.load()
        assert loaded.tv_options.season_folder_pattern == "S%0s"
        assert loaded.smart_match_infos[0].match_strings == ["a1"]
