"""Data models for lazy-changesets.

These Pydantic models represent the packages read from the workspace and
the changeset record the authoring workflow produces.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

BumpType = Literal["major", "minor", "patch"]
DependentBumpType = Literal["major", "minor", "patch", "none"]


class Package(BaseModel):
    """Metadata for a single package in the monorepo workspace.

    Attributes:
        name: Canonical (PEP 503) package name, unique within the workspace.
        version: Current version string from pyproject.toml, or None when
                 the version is dynamic.
        path: Relative path from workspace root to the package directory.
        maintainers: Human-readable maintainer entries, e.g. "Ada <ada@x.org>".
        deps: Internal (workspace) dependency name → raw PEP 508 requirement
              string. External deps are not tracked.
    """

    name: str
    version: str | None
    path: str = "."
    maintainers: list[str] = Field(default_factory=list)
    deps: dict[str, str] = Field(default_factory=dict)


class RootPackage(BaseModel):
    """The monorepo root project."""

    name: str
    dir: str


class Release(BaseModel):
    """An explicit bump request for one package."""

    name: str
    type: BumpType


class Dependent(BaseModel):
    """A package affected by a release it depends on.

    Attributes:
        name: The dependent package.
        type: "patch" when its requirement no longer admits the new version
              of a dependency, otherwise "none".
        dependencies: Released packages this dependent depends on.
    """

    name: str
    type: DependentBumpType
    dependencies: list[str] = Field(default_factory=list)


class ChangesetData(BaseModel):
    """Releases plus the dependents derived from them."""

    model_config = ConfigDict(populate_by_name=True)

    releases: list[Release]
    dependents: list[Dependent] = Field(default_factory=list)
    release_notes: Any = Field(default=None, alias="releaseNotes")


class Changeset(ChangesetData):
    """A proposed version-bump plan with its changelog summary."""

    summary: str

    @field_validator("summary")
    @classmethod
    def _summary_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("summary must not be empty")
        return value
