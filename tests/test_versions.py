"""Tests for version selection and ~= specifiers."""

from __future__ import annotations

from packaging.version import Version

from pydepsync.engine.versions import compatible_specifier, parse_versions, select_version


class TestSelectVersion:
    def test_newest_stable(self):
        assert select_version(["1.0", "1.10", "1.9", "2.0rc1"]) == Version("1.10")

    def test_prerelease_only(self):
        assert select_version(["0.1a1", "0.1b2", "0.1.dev3"]) == Version("0.1b2")

    def test_nothing_parseable(self):
        assert select_version(["not-a-version", ""]) is None
        assert select_version([]) is None

    def test_invalid_entries_skipped(self):
        assert parse_versions(["1.0", "bogus", "2.0"]) == [Version("1.0"), Version("2.0")]


class TestCompatibleSpecifier:
    def test_three_components(self):
        assert compatible_specifier(Version("5.1.6")) == "~=5.1.6"

    def test_two_components(self):
        assert compatible_specifier(Version("3.15")) == "~=3.15"

    def test_single_component_is_padded(self):
        assert compatible_specifier(Version("5")) == "~=5.0"

    def test_extra_components_truncated(self):
        assert compatible_specifier(Version("1.2.3.4")) == "~=1.2.3"

    def test_prerelease_kept(self):
        assert compatible_specifier(Version("2.0.0b1")) == "~=2.0.0b1"
        assert compatible_specifier(Version("1.0.dev2")) == "~=1.0.dev2"

    def test_post_release_dropped(self):
        assert compatible_specifier(Version("1.4.2.post1")) == "~=1.4.2"

    def test_epoch_kept(self):
        assert compatible_specifier(Version("1!2.0")) == "~=1!2.0"
