"""CLI command for linting an existing commit message."""

import sys
from pathlib import Path
from typing import Optional

import typer

from commitmend.git import GitError, get_repo_root
from commitmend.lint import CommitLinter, LintConfigError, load_lint_config


def lint_command(
    message_file: Optional[Path] = typer.Argument(
        None,
        help="File containing the commit message (reads stdin when omitted)",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Check a commit message against the repository's lint rules."""
    message = message_file.read_text(encoding="utf-8") if message_file else sys.stdin.read()

    try:
        repo_root = get_repo_root()
    except GitError:
        repo_root = Path.cwd()

    try:
        config = load_lint_config(repo_root)
    except LintConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)

    result = CommitLinter(config.rules).lint(message)

    for error in result.errors:
        typer.echo(typer.style(f"✖ {error}", fg=typer.colors.RED), err=True)
    for warning in result.warnings:
        typer.echo(typer.style(f"⚠ {warning}", fg=typer.colors.YELLOW), err=True)

    if not result.is_valid:
        typer.echo(f"Found {len(result.errors)} problem(s), {len(result.warnings)} warning(s)", err=True)
        raise typer.Exit(1)

    typer.echo("Commit message is valid.", err=True)
