"""Shell, git and terminal output utilities.

Provides a thin wrapper around git subprocess calls, plus output
helpers used by the authoring workflow to talk to the operator.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

import click


def git(*args: str, cwd: Path | None = None, check: bool = True) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "status", "--short").
        cwd: Directory to run git in; defaults to the process cwd.
        check: If True (default), raise on non-zero exit. Set to False
               for commands that may legitimately fail (e.g., unknown ref).

    Returns:
        Stripped stdout from the git command.
    """
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=check
    )
    return result.stdout.strip()


def log(msg: str) -> None:
    """Print an informational line for the operator."""
    click.echo(msg, err=True)


def warn(msg: str) -> None:
    """Print a warning in yellow."""
    click.echo(click.style(msg, fg="yellow"), err=True)


def error(msg: str) -> None:
    """Print an error in red.

    Used for problems the operator can fix by answering again, not for
    fatal errors (those are raised).
    """
    click.echo(click.style(msg, fg="red"), err=True)


def bold(text: str) -> str:
    return click.style(text, bold=True)


def colored(text: str, color: str) -> str:
    return click.style(text, fg=color)
