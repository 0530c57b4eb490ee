"""Main CLI command: author and commit a message for the staged changes."""

import typer
from dotenv import find_dotenv, load_dotenv

from commitmend.adapter import CommitizenAdapter
from commitmend.git import GitCommitRepository, GitError, NoStagedChangesError, get_repo_root
from commitmend.interaction import UserCancelledError
from commitmend.lint.config import LintConfigError
from commitmend.logging_config import configure_logging
from commitmend.store import ConfigStoreError


def _committer(repository: GitCommitRepository, dry_run: bool):
    def commit(message: str) -> None:
        if dry_run:
            typer.echo(message)
            return
        typer.echo("Committing...", err=True)
        output = repository.commit(message)
        if output:
            typer.echo(output, err=True)
        typer.echo(typer.style("Commit successful!", fg=typer.colors.GREEN), err=True)

    return commit


def main_command(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the final message instead of committing",
    ),
    manual: bool = typer.Option(
        False,
        "--manual",
        help="Write the message by hand for this run",
    ),
) -> None:
    """Write a conventional commit message for the staged changes."""
    configure_logging("DEBUG" if verbose else None)
    load_dotenv(find_dotenv(usecwd=True))

    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    try:
        repo_root = get_repo_root()
        repository = GitCommitRepository(cwd=repo_root)
        repository.ensure_staged_changes()

        adapter = CommitizenAdapter.for_repository(repo_root, force_manual=manual)
        adapter.prompter(_committer(repository, dry_run))

    except UserCancelledError:
        typer.echo("Operation cancelled by user", err=True)
        raise typer.Exit(0)
    except NoStagedChangesError:
        typer.echo("nothing to commit (no changes staged for commit)", err=True)
        typer.echo("", err=True)
        typer.echo("Stage your changes first with:", err=True)
        typer.echo("  git add <file>...", err=True)
        raise typer.Exit(1)
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)
    except (ConfigStoreError, LintConfigError) as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)
