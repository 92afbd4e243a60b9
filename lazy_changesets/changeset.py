"""Changeset authoring: select → classify → summarize → assemble.

This module walks the operator through one changeset:
1. Select which packages the changeset releases
2. Classify each selected package as a major, minor or patch bump
3. Capture a summary for the changelog
4. Assemble the releases, summary and workspace into a Changeset

Bump classification runs three passes over a pool of packages still
awaiting a bump type. Each pass takes the pool and returns the releases
it recorded plus the pool that is left, so a package ends up in exactly
one release.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from pathlib import Path
from typing import TypeVar

from .dependents import build_changeset_data
from .models import Changeset, Package, Release, RootPackage
from .prompts import Choice, ChoiceGroup, ClickPrompter, Prompter
from .shell import bold, colored, error, log, warn
from .versions import display_version, is_pre_first_major
from .workspace import discover_packages, find_project_dir, read_root

CHANGED_GROUP = "changed packages"
UNCHANGED_GROUP = "unchanged packages"
GROUP_HEADERS = frozenset({CHANGED_GROUP, UNCHANGED_GROUP})

Pool = tuple[str, ...]

T = TypeVar("T")


def ask_until(
    ask: Callable[[], T],
    accept: Callable[[T], bool],
    on_reject: Callable[[], None],
) -> T:
    """Repeat ``ask`` until ``accept`` approves the answer.

    ``on_reject`` runs before each re-ask. There is no retry limit; the
    operator ends the loop by answering, or aborts through the prompter.
    """
    answer = ask()
    while not accept(answer):
        on_reject()
        answer = ask()
    return answer


def strip_group_headers(names: Iterable[str]) -> list[str]:
    """Drop group headers and duplicates, keeping order."""
    return [n for n in dict.fromkeys(names) if n not in GROUP_HEADERS]


def format_selection(names: list[str]) -> str:
    return ", ".join(colored(n, "cyan") for n in strip_group_headers(names))


def format_pkg_name_and_version(name: str, version: str | None) -> str:
    return f"{bold(name)}@{bold(display_version(version))}"


def select_packages(
    prompter: Prompter, changed: Iterable[str], packages: Sequence[Package]
) -> list[str]:
    """Ask which packages the changeset should release.

    A single-package workspace needs no selection. Otherwise the operator
    picks from a "changed packages" group and an "unchanged packages"
    group (empty groups are left out), and is asked again until at least
    one package is picked.

    Returns:
        Selected package names, never a group header.
    """
    if len(packages) == 1:
        return [packages[0].name]

    changed_set = set(changed)
    groups = [
        ChoiceGroup(
            name=CHANGED_GROUP,
            choices=[p.name for p in packages if p.name in changed_set],
        ),
        ChoiceGroup(
            name=UNCHANGED_GROUP,
            choices=[p.name for p in packages if p.name not in changed_set],
        ),
    ]
    choices = [g for g in groups if g.choices]

    def rejected() -> None:
        error("You must select at least one package to release")
        error("(You most likely hit enter instead of space!)")

    return ask_until(
        lambda: strip_group_headers(
            prompter.ask_checkbox(
                "Which packages would you like to include?",
                choices,
                format_selection,
            )
        ),
        bool,
        rejected,
    )


def _bump_choices(pool: Pool, packages: Mapping[str, Package]) -> list[Choice]:
    return [
        Choice(
            name=name,
            message=format_pkg_name_and_version(name, packages[name].version),
        )
        for name in pool
    ]


def _confirm_first_major(prompter: Prompter, package: Package) -> bool:
    maintainers = ""
    if package.maintainers:
        maintainers = f" ({', '.join(package.maintainers)})"
    name = colored(package.name, "green")
    first_major = colored("first major release", "red")
    if package.version is None:
        warn(
            f"WARNING: {name} has a dynamic version, so a major version "
            f"could be its {first_major}."
        )
    else:
        warn(
            f"WARNING: Releasing a major version for {name} "
            f"will be its {first_major}."
        )
    warn(
        "If you are unsure if this is correct, contact the package's "
        f"maintainers{maintainers} "
        f"{colored('before committing this changeset', 'red')}."
    )
    return prompter.ask_confirm(
        bold(
            f"Are you sure you want to release the "
            f"{colored('first major release', 'red')} of {package.name}?"
        )
    )


def _in_pool(answer: Iterable[str], pool: Pool) -> list[str]:
    return [n for n in dict.fromkeys(answer) if n in pool]


def major_pass(
    prompter: Prompter, pool: Pool, packages: Mapping[str, Package]
) -> tuple[list[Release], Pool]:
    """Record the packages that get a major bump.

    A package below 1.0.0, or with a dynamic version, is only released as
    major after the operator confirms it; if they decline, it stays in the
    pool for the later passes.
    """
    chosen = _in_pool(
        prompter.ask_checkbox(
            bold(f"Which packages should have a {colored('major', 'red')} bump?"),
            _bump_choices(pool, packages),
        ),
        pool,
    )
    releases: list[Release] = []
    for name in chosen:
        package = packages[name]
        if is_pre_first_major(package.version) and not _confirm_first_major(
            prompter, package
        ):
            continue
        releases.append(Release(name=name, type="major"))
    recorded = {r.name for r in releases}
    return releases, tuple(n for n in pool if n not in recorded)


def minor_pass(
    prompter: Prompter, pool: Pool, packages: Mapping[str, Package]
) -> tuple[list[Release], Pool]:
    """Record the packages that get a minor bump. Skipped for an empty pool."""
    if not pool:
        return [], pool
    chosen = _in_pool(
        prompter.ask_checkbox(
            bold(f"Which packages should have a {colored('minor', 'green')} bump?"),
            _bump_choices(pool, packages),
        ),
        pool,
    )
    releases = [Release(name=name, type="minor") for name in chosen]
    return releases, tuple(n for n in pool if n not in chosen)


def patch_pass(
    pool: Pool, packages: Mapping[str, Package]
) -> tuple[list[Release], Pool]:
    """Everything left in the pool is patch bumped. No prompt."""
    if not pool:
        return [], pool
    log(f"The following packages will be {colored('patch', 'blue')} bumped:")
    for name in pool:
        log(format_pkg_name_and_version(name, packages[name].version))
    return [Release(name=name, type="patch") for name in pool], ()


def classify(
    prompter: Prompter, selected: Sequence[str], packages: Mapping[str, Package]
) -> list[Release]:
    """Assign exactly one bump type to every selected package.

    Passes run major → minor → patch; once past the major pass a package
    can no longer become major.
    """
    pool: Pool = tuple(dict.fromkeys(selected))
    majors, pool = major_pass(prompter, pool, packages)
    minors, pool = minor_pass(prompter, pool, packages)
    patches, pool = patch_pass(pool, packages)
    return majors + minors + patches


def ask_summary(prompter: Prompter) -> str:
    """Ask for the changelog summary until a non-blank one is given."""
    log("Please enter a summary for this change (this will be in the changelogs)")
    return ask_until(
        lambda: prompter.ask_question("Summary"),
        lambda summary: bool(summary.strip()),
        lambda: error("A summary is required for the changelog!"),
    )


def assemble(
    releases: Sequence[Release],
    packages: Sequence[Package],
    summary: str,
    root: RootPackage,
) -> Changeset:
    """Combine releases, their dependents and the summary into a Changeset."""
    data = build_changeset_data(releases, packages, root)
    return Changeset(summary=summary, **dict(data))


def create_changeset(
    changed: Iterable[str],
    *,
    cwd: Path | None = None,
    prompter: Prompter | None = None,
) -> Changeset:
    """Run one interactive authoring session.

    Args:
        changed: Names of packages with changes (pre-grouped for selection).
        cwd: Working directory inside the monorepo; defaults to the process cwd.
        prompter: Source of operator answers; defaults to terminal prompts.

    Returns:
        The assembled Changeset. Nothing is written to disk.

    Raises:
        WorkspaceError: If the workspace cannot be resolved.
        click.Abort: If the operator aborts a prompt.
    """
    prompter = prompter or ClickPrompter()
    project_dir = find_project_dir(cwd or Path.cwd())
    packages = discover_packages(project_dir)
    by_name = {p.name: p for p in packages}

    selected = select_packages(prompter, changed, packages)
    releases = classify(prompter, selected, by_name)
    summary = ask_summary(prompter)
    root = read_root(project_dir)
    return assemble(releases, packages, summary, root)
