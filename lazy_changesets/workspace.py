"""Workspace catalog: discover → root → changed.

Reads the uv workspace rooted at the project directory:
1. Resolve the project directory from a working directory
2. Read the root project descriptor
3. Discover all member packages (name, version, maintainers, deps)
4. Detect which packages changed since a base ref
"""

from __future__ import annotations

import glob
from collections.abc import Sequence
from pathlib import Path

from .deps import dep_canonical_name
from .graph import topo_sort
from .models import Package, RootPackage
from .shell import git
from .toml import (
    get_all_dependency_strings,
    get_project_maintainers,
    get_project_name,
    get_project_version,
    get_workspace,
    get_workspace_exclude_globs,
    get_workspace_member_globs,
    load_pyproject,
)


class WorkspaceError(RuntimeError):
    """The workspace layout cannot be resolved or read."""


def find_project_dir(cwd: Path) -> Path:
    """Find the monorepo root for ``cwd``.

    Walks up from ``cwd`` looking for a pyproject.toml that declares a
    [tool.uv.workspace]. If there is none, the nearest directory holding
    any pyproject.toml is the root (a single-package project).

    Raises:
        WorkspaceError: If no pyproject.toml exists in ``cwd`` or above it.
    """
    cwd = cwd.resolve()
    nearest: Path | None = None
    for d in (cwd, *cwd.parents):
        pyproject = d / "pyproject.toml"
        if not pyproject.is_file():
            continue
        if nearest is None:
            nearest = d
        if get_workspace(load_pyproject(pyproject)) is not None:
            return d
    if nearest is None:
        raise WorkspaceError(f"No pyproject.toml found in {cwd} or its parents")
    return nearest


def read_root(project_dir: Path) -> RootPackage:
    """Read the root project descriptor.

    Missing or malformed pyproject.toml errors propagate unchanged.
    """
    doc = load_pyproject(project_dir / "pyproject.toml")
    return RootPackage(
        name=get_project_name(doc, project_dir.name), dir=str(project_dir)
    )


def _member_dirs(
    project_dir: Path, members: list[str], exclude: list[str]
) -> list[Path]:
    excluded: set[Path] = set()
    for pattern in exclude:
        matches = glob.glob(str(project_dir / pattern))
        excluded.update(Path(m).resolve() for m in matches)

    dirs: list[Path] = []
    for pattern in members:
        for match in sorted(glob.glob(str(project_dir / pattern))):
            p = Path(match)
            if p.resolve() in excluded or p in dirs:
                continue
            if (p / "pyproject.toml").exists():
                dirs.append(p)
    return dirs


def discover_packages(project_dir: Path) -> list[Package]:
    """Scan the workspace and discover all packages.

    Reads [tool.uv.workspace].members from the root pyproject.toml to find
    package directories, then extracts name, version, maintainers and
    internal deps from each package's pyproject.toml. A root without a
    workspace table is treated as a catalog of one: the root project.

    Returns:
        Packages in topological order (dependencies first), or sorted by
        name when internal dependencies form a cycle.

    Raises:
        WorkspaceError: If the workspace members match no packages.
    """
    root_doc = load_pyproject(project_dir / "pyproject.toml")

    if get_workspace(root_doc) is None:
        member_dirs = [project_dir]
    else:
        member_dirs = _member_dirs(
            project_dir,
            get_workspace_member_globs(root_doc),
            get_workspace_exclude_globs(root_doc),
        )
        if not member_dirs:
            raise WorkspaceError("No packages found matching workspace members")

    # First pass: collect basic info from each package
    packages: dict[str, Package] = {}
    raw_deps: dict[str, list[str]] = {}

    for d in member_dirs:
        doc = load_pyproject(d / "pyproject.toml")
        name = get_project_name(doc, d.name)
        if name in packages:
            raise WorkspaceError(
                f"Duplicate package name {name!r} ({packages[name].path}, "
                f"{d.relative_to(project_dir)})"
            )
        packages[name] = Package(
            name=name,
            version=get_project_version(doc),
            path=str(d.relative_to(project_dir)),
            maintainers=get_project_maintainers(doc),
        )
        raw_deps[name] = get_all_dependency_strings(doc)

    # Second pass: keep internal deps only, first requirement per name
    for name, deps in raw_deps.items():
        for dep_str in deps:
            dep_name = dep_canonical_name(dep_str)
            if dep_name in packages and dep_name != name:
                packages[name].deps.setdefault(dep_name, dep_str)

    # Optional and dev dependencies can form cycles; fall back to name order
    try:
        order = topo_sort(packages)
    except RuntimeError:
        order = sorted(packages)
    return [packages[name] for name in order]


def _changed_files(project_dir: Path, since: str) -> set[str]:
    """Files changed between ``since`` and HEAD, plus uncommitted ones.

    Paths are relative to ``project_dir``.
    """
    committed = git(
        "diff", "--name-only", "--relative", f"{since}...HEAD", cwd=project_dir
    )
    files = set(committed.splitlines())
    # Porcelain lines look like "XY path" or "XY old -> new"
    status = git("status", "--porcelain", "--untracked-files=all", cwd=project_dir)
    prefix = git("rev-parse", "--show-prefix", cwd=project_dir)
    for line in status.splitlines():
        path = line.split(maxsplit=1)[1].split(" -> ")[-1].strip('"')
        if path.startswith(prefix):
            files.add(path[len(prefix):])
    return files


def detect_changed_packages(
    packages: Sequence[Package], project_dir: Path, since: str
) -> list[str]:
    """Determine which packages have files changed since ``since``.

    A file belongs to the package whose directory contains it. For a
    single-package project (path "."), any change marks it changed.

    Raises:
        subprocess.CalledProcessError: If git fails (e.g., unknown ref).
    """
    changed_files = _changed_files(project_dir, since)
    changed: list[str] = []
    for pkg in packages:
        if pkg.path == ".":
            if changed_files:
                changed.append(pkg.name)
            continue
        prefix = pkg.path.rstrip("/") + "/"
        if any(f.startswith(prefix) for f in changed_files):
            changed.append(pkg.name)
    return changed
