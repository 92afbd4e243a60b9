"""TOML reading utilities.

Uses tomlkit to read pyproject.toml files, both for the workspace layout
and for per-package metadata.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from packaging.utils import canonicalize_name


def load_pyproject(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a pyproject.toml file.

    Raises:
        FileNotFoundError: If the file does not exist.
        tomlkit.exceptions.ParseError: If the file is not valid TOML.
    """
    return tomlkit.parse(path.read_text())


def get_project_name(doc: tomlkit.TOMLDocument, fallback: str) -> str:
    """Extract the canonical package name from [project].name.

    Names are normalized per PEP 503 (lowercase, hyphens instead of
    underscores) for consistent comparison.

    Args:
        doc: Parsed pyproject.toml document.
        fallback: Value to use if name is not specified.
    """
    return canonicalize_name(doc.get("project", {}).get("name", fallback))


def get_project_version(doc: tomlkit.TOMLDocument) -> str | None:
    """Extract version from [project].version, defaulting to '0.0.0'.

    Returns None when the version is listed in [project].dynamic.
    """
    project = doc.get("project", {})
    if "version" not in project and "version" in project.get("dynamic", []):
        return None
    return str(project.get("version", "0.0.0"))


def get_project_maintainers(doc: tomlkit.TOMLDocument) -> list[str]:
    """Render [project].maintainers as display strings.

    PEP 621 maintainers are tables with optional ``name`` and ``email``:
    - {name = "Ada", email = "ada@x.org"} → "Ada <ada@x.org>"
    - {name = "Ada"} → "Ada"
    - {email = "ada@x.org"} → "ada@x.org"
    """
    rendered: list[str] = []
    for entry in doc.get("project", {}).get("maintainers", []):
        name = entry.get("name")
        email = entry.get("email")
        if name and email:
            rendered.append(f"{name} <{email}>")
        elif name or email:
            rendered.append(str(name or email))
    return rendered


def get_all_dependency_strings(doc: tomlkit.TOMLDocument) -> list[str]:
    """Collect all dependency strings from a pyproject.toml.

    Gathers dependencies from three locations:
    - [project].dependencies (main runtime deps)
    - [project].optional-dependencies.* (extras like [dev], [test])
    - [dependency-groups].* (PEP 735 dependency groups)

    Returns raw PEP 508 strings like "requests>=2.0" or "pkg[extra]~=1.0".
    PEP 735 ``{include-group = ...}`` tables are skipped.
    """
    project = doc.get("project", {})
    deps: list[str] = [str(d) for d in project.get("dependencies", [])]
    for group_deps in project.get("optional-dependencies", {}).values():
        deps.extend(str(d) for d in group_deps)
    for group_deps in doc.get("dependency-groups", {}).values():
        deps.extend(str(d) for d in group_deps if isinstance(d, str))
    return deps


def get_workspace(doc: tomlkit.TOMLDocument) -> dict[str, Any] | None:
    """Return the [tool.uv.workspace] table, or None if the root has none."""
    workspace = doc.get("tool", {}).get("uv", {}).get("workspace")
    if workspace is None:
        return None
    return dict(workspace)


def get_workspace_member_globs(doc: tomlkit.TOMLDocument) -> list[str]:
    """Extract workspace member glob patterns from [tool.uv.workspace].

    These patterns (e.g., "packages/*", "libs/*") define which directories
    contain workspace packages. Returns an empty list if none are defined.
    """
    return [str(m) for m in (get_workspace(doc) or {}).get("members", [])]


def get_workspace_exclude_globs(doc: tomlkit.TOMLDocument) -> list[str]:
    """Extract [tool.uv.workspace].exclude glob patterns."""
    return [str(m) for m in (get_workspace(doc) or {}).get("exclude", [])]


def get_tool_table(doc: tomlkit.TOMLDocument, tool: str) -> dict[str, Any]:
    """Return [tool.<tool>] as a plain dict (empty if absent)."""
    table = doc.get("tool", {}).get(tool)
    return table.unwrap() if table is not None else {}
