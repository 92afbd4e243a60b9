"""CLI entry point for lazy-changesets."""

from __future__ import annotations

import subprocess
from pathlib import Path

import click
from packaging.utils import canonicalize_name

from lazy_changesets.changeset import create_changeset
from lazy_changesets.config import load_config
from lazy_changesets.toml import load_pyproject
from lazy_changesets.versions import display_version
from lazy_changesets.workspace import (
    WorkspaceError,
    detect_changed_packages,
    discover_packages,
    find_project_dir,
)

cwd_option = click.option(
    "--cwd",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory inside the monorepo. Defaults to the current directory.",
)


@click.group()
@click.version_option(package_name="lazy-changesets")
def cli() -> None:
    """Author changesets for a uv workspace monorepo."""


@cli.command()
@cwd_option
@click.option(
    "--since",
    default=None,
    help="Git ref to detect changed packages against. (default: base-ref config)",
)
@click.option(
    "--changed",
    "changed_names",
    multiple=True,
    help="Treat this package as changed instead of asking git (repeatable).",
)
def add(cwd: Path | None, since: str | None, changed_names: tuple[str, ...]) -> None:
    """Interactively create a changeset and print it as JSON."""
    root = find_root(cwd)
    if changed_names:
        changed = [canonicalize_name(name) for name in changed_names]
    else:
        config = load_config(load_pyproject(root / "pyproject.toml"))
        ref = since or config.base_ref
        try:
            changed = detect_changed_packages(discover_packages(root), root, ref)
        except WorkspaceError as exc:
            raise click.ClickException(str(exc)) from exc
        except subprocess.CalledProcessError as exc:
            raise click.ClickException(
                f"Could not detect changed packages against {ref!r}: "
                f"{(exc.stderr or '').strip()}"
            ) from exc

    try:
        changeset = create_changeset(changed, cwd=root)
    except WorkspaceError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(changeset.model_dump_json(by_alias=True, indent=2))


@cli.command(name="list")
@cwd_option
def list_packages(cwd: Path | None) -> None:
    """List the packages in the workspace."""
    root = find_root(cwd)
    try:
        packages = discover_packages(root)
    except WorkspaceError as exc:
        raise click.ClickException(str(exc)) from exc

    for pkg in packages:
        deps = f" → [{', '.join(pkg.deps)}]" if pkg.deps else ""
        click.echo(f"{pkg.name} {display_version(pkg.version)} ({pkg.path}){deps}")


def find_root(cwd: Path | None) -> Path:
    try:
        return find_project_dir(cwd or Path.cwd())
    except WorkspaceError as exc:
        raise click.ClickException(str(exc)) from exc
