"""Tests for hash utilities."""

import hashlib

from autoorganize.utils.hash import path_id


class TestPathId:
    """Tests for the path_id() function."""

    def test_md5_hex(self):
        assert path_id("/in/file.mkv") == hashlib.md5(b"/in/file.mkv").hexdigest()

    def test_stable(self):
        assert path_id("/in/file.mkv") == path_id("/in/file.mkv")

    def test_distinct_paths(self):
        assert path_id("/in/a.mkv") != path_id("/in/b.mkv")

    def test_accepts_path_objects(self, tmp_path):
        path = tmp_path / "a.mkv"
        assert path_id(path) == path_id(str(path))
