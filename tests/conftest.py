"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import tomlkit

from lazy_changesets.models import Package


class ScriptedPrompter:
    """Prompter that replays canned answers and records every prompt.

    Answers are consumed in order; each call appends (kind, message,
    choices) to ``calls``.
    """

    def __init__(self, *answers: Any) -> None:
        self.answers = list(answers)
        self.calls: list[tuple[str, str, Any]] = []

    def _next(self, kind: str, message: str, choices: Any = None) -> Any:
        self.calls.append((kind, message, choices))
        if not self.answers:
            raise AssertionError(f"Unexpected {kind} prompt: {message}")
        return self.answers.pop(0)

    def ask_checkbox(self, message, choices, format_selection=None):
        return self._next("checkbox", message, list(choices))

    def ask_confirm(self, message):
        return self._next("confirm", message)

    def ask_question(self, message):
        return self._next("question", message)

    def kinds(self) -> list[str]:
        return [kind for kind, _, _ in self.calls]


@pytest.fixture
def sample_packages() -> list[Package]:
    """A small catalog: pkg-b depends on pkg-a, pkg-c on pkg-b."""
    return [
        Package(name="pkg-a", version="0.9.0", path="packages/a", maintainers=["Ada"]),
        Package(
            name="pkg-b",
            version="2.1.0",
            path="packages/b",
            deps={"pkg-a": "pkg-a>=0.9,<0.10"},
        ),
        Package(
            name="pkg-c",
            version="1.0.0",
            path="packages/c",
            deps={"pkg-b": "pkg-b>=2.0"},
        ),
    ]


@pytest.fixture
def make_workspace(tmp_path: Path) -> Callable[..., Path]:
    """Build a uv workspace under tmp_path.

    ``members`` maps directory name → [project] table contents.
    """

    def _make(members: dict[str, dict[str, Any]], root_name: str = "monorepo") -> Path:
        root_doc = tomlkit.document()
        root_doc["project"] = {"name": root_name, "version": "0.0.0"}
        root_doc["tool"] = {"uv": {"workspace": {"members": ["packages/*"]}}}
        (tmp_path / "pyproject.toml").write_text(tomlkit.dumps(root_doc))
        for dirname, project in members.items():
            pkg_dir = tmp_path / "packages" / dirname
            pkg_dir.mkdir(parents=True)
            doc = tomlkit.document()
            doc["project"] = project
            (pkg_dir / "pyproject.toml").write_text(tomlkit.dumps(doc))
        return tmp_path

    return _make


@pytest.fixture
def tmp_pyproject(tmp_path: Path) -> Path:
    """Create a temporary pyproject.toml file."""
    content = """\
[project]
name = "test-package"
version = "1.0.0"
maintainers = [
    {name = "Ada Lovelace", email = "ada@example.org"},
    {name = "Grace"},
    {email = "ops@example.org"},
]
dependencies = [
    "requests>=2.0",
    "internal-dep>=1.0",
]

[project.optional-dependencies]
dev = ["pytest>=8.0", "another-internal>=0.5"]

[dependency-groups]
test = ["pytest>=8.0", "group-internal>=0.1", {include-group = "dev"}]
"""
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(content)
    return pyproject


@pytest.fixture
def sample_toml_doc() -> tomlkit.TOMLDocument:
    """Create a sample TOML document."""
    content = """\
[project]
name = "my-package"
version = "2.0.0"
dependencies = ["click>=8.0", "pydantic>=2.0"]

[project.optional-dependencies]
dev = ["pytest>=8.0"]
docs = ["sphinx>=7.0"]

[dependency-groups]
test = ["hypothesis>=6.0"]

[tool.uv.workspace]
members = ["packages/*", "libs/*"]
exclude = ["packages/legacy"]

[tool.lazy-changesets]
base-ref = "origin/main"
"""
    return tomlkit.parse(content)


@pytest.fixture
def scripted() -> type[ScriptedPrompter]:
    """The ScriptedPrompter class, for building prompters with answers."""
    return ScriptedPrompter
