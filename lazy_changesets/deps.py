"""Dependency handling utilities.

Provides functions for parsing PEP 508 dependency strings and checking
whether a bumped version still satisfies a dependent's requirement.
"""

from __future__ import annotations

from packaging.requirements import Requirement
from packaging.utils import canonicalize_name


def dep_canonical_name(dep_str: str) -> str:
    """Extract the canonical package name from a PEP 508 dependency string.

    Handles version specifiers, extras, and normalizes the name per PEP 503
    (lowercase, hyphens instead of underscores).

    Examples:
        "requests>=2.0" → "requests"
        "My_Package[extra]~=1.0" → "my-package"
    """
    return canonicalize_name(Requirement(dep_str).name)


def satisfies(dep_str: str, version: str | None) -> bool:
    """Check whether ``version`` is admitted by a dependency's specifier.

    A requirement without a version specifier accepts any version. An
    unknown (dynamic, None) version is only accepted by such requirements.

    Examples:
        satisfies("pkg>=1.0,<2", "1.5.0") → True
        satisfies("pkg~=0.9", "1.0.0") → False
        satisfies("pkg", "9.0.0") → True
        satisfies("pkg>=1.0", None) → False
    """
    specifier = Requirement(dep_str).specifier
    if version is None:
        return not specifier
    return specifier.contains(version, prereleases=True)
