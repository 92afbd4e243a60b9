"""Version parsing and bumping utilities.

Versions are read as PEP 440 (what pyproject.toml holds) and bumped on
their release segment as semver objects, with special handling for
incomplete versions (e.g., "1.0" → "1.0.0"). A version of None means
the package declares it dynamic, so it is unknown until build time.
"""

from __future__ import annotations

import semver
from packaging.version import Version

from .models import BumpType

DYNAMIC = "dynamic"


def parse_version(version_str: str) -> semver.Version:
    """Parse a PEP 440 version string into a semver.Version object.

    Only the release segment is used, padded with zeros:
    - "1" → "1.0.0"
    - "1.2" → "1.2.0"
    - "0.1.0a1" → "0.1.0"
    - "1.2.3.post1" → "1.2.3"

    Raises:
        packaging.version.InvalidVersion: If the string is not PEP 440.
    """
    release = Version(version_str).release
    major, minor, patch = (*release, 0, 0)[:3]
    return semver.Version(major, minor, patch)


def bump_version(version_str: str | None, bump: BumpType) -> str | None:
    """Apply a major, minor or patch bump and return the new version.

    A dynamic (None) version stays unknown.

    Examples:
        bump_version("1.2.3", "major") → "2.0.0"
        bump_version("0.9", "minor") → "0.10.0"
        bump_version("1.0.0rc1", "patch") → "1.0.1"
    """
    if version_str is None:
        return None
    version = parse_version(version_str)
    if bump == "major":
        return str(version.bump_major())
    if bump == "minor":
        return str(version.bump_minor())
    return str(version.bump_patch())


def bump_patch(version_str: str | None) -> str | None:
    """Increment the patch version and return as a string."""
    return bump_version(version_str, "patch")


def is_pre_first_major(version_str: str | None) -> bool:
    """True if a major bump would (or, for a dynamic version, might) be
    the package's first major release."""
    if version_str is None:
        return True
    return Version(version_str).release < (1, 0, 0)


def display_version(version_str: str | None) -> str:
    return version_str if version_str is not None else DYNAMIC
