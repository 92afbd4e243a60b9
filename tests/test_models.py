"""Tests for lazy_changesets.models."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from lazy_changesets.models import Changeset, Dependent, Package, Release


class TestPackage:
    def test_create_with_required_fields(self) -> None:
        pkg = Package(name="foo", version="1.0.0")
        assert pkg.path == "."
        assert pkg.maintainers == []
        assert pkg.deps == {}

    def test_create_with_deps(self) -> None:
        pkg = Package(name="bar", version="2.1.0", deps={"foo": "foo>=1.0"})
        assert pkg.deps == {"foo": "foo>=1.0"}


class TestRelease:
    def test_rejects_unknown_bump_type(self) -> None:
        with pytest.raises(ValidationError):
            Release(name="foo", type="huge")


class TestChangeset:
    def test_rejects_empty_summary(self) -> None:
        with pytest.raises(ValidationError, match="summary"):
            Changeset(summary="", releases=[])

    def test_rejects_whitespace_summary(self) -> None:
        with pytest.raises(ValidationError, match="summary"):
            Changeset(summary="   \n", releases=[])

    def test_json_uses_release_notes_alias(self) -> None:
        changeset = Changeset(
            summary="Fix things",
            releases=[Release(name="foo", type="patch")],
            dependents=[Dependent(name="bar", type="none", dependencies=["foo"])],
        )
        data = json.loads(changeset.model_dump_json(by_alias=True))
        assert data == {
            "releases": [{"name": "foo", "type": "patch"}],
            "dependents": [{"name": "bar", "type": "none", "dependencies": ["foo"]}],
            "releaseNotes": None,
            "summary": "Fix things",
        }
