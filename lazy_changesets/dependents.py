"""Changeset construction: releases → dependents.

Given the explicit releases, works out which other workspace packages are
affected because they depend on a released package. A dependent whose
requirement no longer admits the new version must itself be patch
bumped, and that bump propagates further in turn. A package with a
dynamic version has an unknown new version, which only a requirement
without a specifier admits.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence

from .deps import satisfies
from .graph import reverse_deps
from .models import ChangesetData, Dependent, Package, Release, RootPackage
from .versions import bump_patch, bump_version

SEVERITY = {"patch": 0, "minor": 1, "major": 2}


class UnknownPackageError(LookupError):
    """A release names a package that is not in the workspace."""


def normalize_releases(releases: Sequence[Release]) -> list[Release]:
    """Collapse releases to one per package, keeping the highest bump.

    First-appearance order is preserved.
    """
    merged: dict[str, Release] = {}
    for release in releases:
        current = merged.get(release.name)
        if current is None or SEVERITY[release.type] > SEVERITY[current.type]:
            merged[release.name] = Release(name=release.name, type=release.type)
    return list(merged.values())


def build_changeset_data(
    releases: Sequence[Release],
    packages: Sequence[Package],
    root: RootPackage,
) -> ChangesetData:
    """Compute the dependents of a set of releases.

    Args:
        releases: Explicit bump requests.
        packages: The full workspace catalog, in topological order.
        root: The monorepo root. Only workspace members are considered as
              dependents; the root itself is never bumped.

    Returns:
        Normalized releases, their dependents in catalog order, and an
        empty release-notes slot.

    Raises:
        UnknownPackageError: If a release names an unknown package.
    """
    by_name = {p.name: p for p in packages}
    normalized = normalize_releases(releases)
    for release in normalized:
        if release.name not in by_name:
            raise UnknownPackageError(
                f"{release.name} is not a package in workspace {root.name}"
            )

    released = {r.name for r in normalized}
    new_versions = {
        r.name: bump_version(by_name[r.name].version, r.type) for r in normalized
    }
    dependents_of = reverse_deps(by_name)
    found: dict[str, Dependent] = {}

    # Breadth-first over bumped packages; patch-bumped dependents rejoin the queue
    queue = deque(r.name for r in normalized)
    while queue:
        name = queue.popleft()
        for dependent_name in dependents_of[name]:
            if dependent_name in released:
                continue
            dependent = found.setdefault(
                dependent_name, Dependent(name=dependent_name, type="none")
            )
            if name not in dependent.dependencies:
                dependent.dependencies.append(name)
            requirement = by_name[dependent_name].deps[name]
            if dependent.type == "none" and not satisfies(
                requirement, new_versions[name]
            ):
                dependent.type = "patch"
                new_versions[dependent_name] = bump_patch(
                    by_name[dependent_name].version
                )
                queue.append(dependent_name)

    order = {p.name: i for i, p in enumerate(packages)}
    return ChangesetData(
        releases=normalized,
        dependents=sorted(found.values(), key=lambda d: order[d.name]),
    )
