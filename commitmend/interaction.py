"""Interactive terminal primitives built on questionary and typer.

Contains:
- UserCancelledError: raised when the user aborts a prompt
- Choice: a labelled select option
- CliInterface: select/text/confirm/password prompts and status output
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

import questionary
import typer

# Returns an error message, or None if the value is acceptable.
Validator = Callable[[str], Optional[str]]


class UserCancelledError(Exception):
    """Raised when an interactive prompt is cancelled (e.g. Ctrl-C)."""
    pass


@dataclass(frozen=True)
class Choice:
    label: str
    value: Any


def _answer(result: Any) -> Any:
    if result is None:
        raise UserCancelledError("Operation cancelled by user")
    return result


class CliInterface:
    """Prompts and messages for the interactive commit flow.

    Output goes to stderr so that stdout stays free for piping.
    """

    def select(self, prompt: str, choices: Sequence[Choice], default: Any = None) -> Any:
        options = [questionary.Choice(title=choice.label, value=choice.value) for choice in choices]
        return _answer(questionary.select(prompt, choices=options, default=default).ask())

    def text(
        self,
        prompt: str,
        hint: Optional[str] = None,
        default: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> str:
        def check(value: str):
            error = validate(value) if validate else None
            return error or True

        return _answer(
            questionary.text(prompt, default=default or "", instruction=hint, validate=check).ask()
        )

    def password(self, prompt: str, hint: Optional[str] = None) -> str:
        return _answer(questionary.password(prompt, instruction=hint).ask())

    def confirm(self, prompt: str, default: bool = False) -> bool:
        return _answer(questionary.confirm(prompt, default=default).ask())

    def info(self, message: str) -> None:
        typer.echo(message, err=True)

    def success(self, message: str) -> None:
        typer.echo(typer.style(message, fg=typer.colors.GREEN), err=True)

    def warn(self, message: str) -> None:
        typer.echo(typer.style(message, fg=typer.colors.YELLOW), err=True)

    def error(self, message: str) -> None:
        typer.echo(typer.style(message, fg=typer.colors.RED), err=True)

    def note(self, title: str, body: str) -> None:
        """Print a titled block, e.g. a commit message preview."""
        rule = "-" * 50
        typer.echo(typer.style(title, bold=True), err=True)
        typer.echo(rule, err=True)
        typer.echo(body, err=True)
        typer.echo(rule, err=True)
