"""CLI entry point for commitmend.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from commitmend.cli.config import config_app
from commitmend.cli.lint import lint_command
from commitmend.cli.main import main_command

# Main application
app = typer.Typer(
    name="commitmend",
    help="commitmend: AI-assisted conventional commits with lint-driven repair",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Add individual commands
app.command("lint")(lint_command)

# Set the main callback for default behavior
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "config_app",
    "lint_command",
    "main_command",
]
