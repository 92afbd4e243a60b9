"""Tests for lazy_changesets.versions."""

from __future__ import annotations

import pytest

from lazy_changesets.versions import (
    bump_patch,
    bump_version,
    display_version,
    is_pre_first_major,
    parse_version,
)


class TestParseVersion:
    def test_full_semver(self) -> None:
        v = parse_version("1.2.3")
        assert (v.major, v.minor, v.patch) == (1, 2, 3)

    def test_two_part_version(self) -> None:
        v = parse_version("1.2")
        assert (v.major, v.minor, v.patch) == (1, 2, 0)

    def test_single_part_version(self) -> None:
        v = parse_version("5")
        assert (v.major, v.minor, v.patch) == (5, 0, 0)

    @pytest.mark.parametrize("version", ["0.1.0a1", "0.1.0.dev3", "0.1.0.post2"])
    def test_pre_and_post_releases_use_release_segment(self, version: str) -> None:
        v = parse_version(version)
        assert (v.major, v.minor, v.patch) == (0, 1, 0)


class TestBumpVersion:
    @pytest.mark.parametrize(
        ("version", "bump", "expected"),
        [
            ("1.2.3", "major", "2.0.0"),
            ("1.2.3", "minor", "1.3.0"),
            ("1.2.3", "patch", "1.2.4"),
            ("0.9.0", "major", "1.0.0"),
            ("0.9", "minor", "0.10.0"),
            ("1.0.0rc1", "patch", "1.0.1"),
            ("0.1.0a1", "major", "1.0.0"),
        ],
    )
    def test_bumps(self, version: str, bump: str, expected: str) -> None:
        assert bump_version(version, bump) == expected

    def test_bump_patch(self) -> None:
        assert bump_patch("1") == "1.0.1"

    def test_dynamic_version_stays_unknown(self) -> None:
        assert bump_version(None, "minor") is None
        assert bump_patch(None) is None


class TestIsPreFirstMajor:
    def test_zero_major(self) -> None:
        assert is_pre_first_major("0.9.0")

    def test_zero_version(self) -> None:
        assert is_pre_first_major("0.0.0")

    def test_exactly_one(self) -> None:
        assert not is_pre_first_major("1.0.0")

    def test_above_one(self) -> None:
        assert not is_pre_first_major("2.1")

    def test_pre_release_below_one(self) -> None:
        assert is_pre_first_major("0.1.0a1")

    def test_release_candidate_of_one(self) -> None:
        assert not is_pre_first_major("1.0.0rc1")

    def test_dynamic_version(self) -> None:
        assert is_pre_first_major(None)


class TestDisplayVersion:
    def test_static(self) -> None:
        assert display_version("1.2.3") == "1.2.3"

    def test_dynamic(self) -> None:
        assert display_version(None) == "dynamic"
