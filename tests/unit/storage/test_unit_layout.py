# tests/unit/storage/test_unit_layout.py - v1
"""Tests for storage/layout.py."""

from __future__ import annotations

from fnmatch import fnmatch
from pathlib import Path

from sonar.storage import layout


class TestLayout:
    def test_artifact_path(self):
        path = layout.artifact_path(Path("/srv/css"), "bartik", "sonar-bartik-abc")
        assert path == Path("/srv/css/bartik/sonar-bartik-abc.css")

    def test_temp_source_path(self):
        path = layout.temp_source_path(Path("/srv/css"), "bartik", "sonar-bartik-abc", 1700000000)
        assert path == Path("/srv/css/bartik/tmp.sonar-bartik-abc.1700000000.scss")

    def test_temp_glob_matches_temp_names_only(self):
        temp = layout.temp_source_path(Path("/r"), "t", "k", 1).name
        artifact = layout.artifact_path(Path("/r"), "t", "k").name
        assert fnmatch(temp, layout.TEMP_GLOB)
        assert not fnmatch(artifact, layout.TEMP_GLOB)

    def test_temp_source_glob_is_key_scoped(self):
        mine = layout.temp_source_path(Path("/r"), "t", "sonar-t-abc", 1).name
        other = layout.temp_source_path(Path("/r"), "t", "sonar-t-xyz", 1).name
        assert fnmatch(mine, layout.temp_source_glob("sonar-t-abc"))
        assert not fnmatch(other, layout.temp_source_glob("sonar-t-abc"))
