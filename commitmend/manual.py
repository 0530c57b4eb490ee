"""Guided manual entry of a commit message."""

import logging
from typing import Optional

from commitmend.config import DEFAULT_TYPES
from commitmend.context import PromptContext
from commitmend.interaction import Choice, CliInterface
from commitmend.message import CommitMessage

logger = logging.getLogger(__name__)

TYPE_PROMPT = "Select the type of change that you're committing:"
SCOPE_PROMPT = (
    "What is the scope of this change:\n"
    "  - Use component, directory or area of codebase\n"
    "  - Use comma-separated list for multiple areas\n"
    '  - Type "global" for project-wide changes\n'
    "  - Press enter to skip if scope is not applicable"
)
SUBJECT_PROMPT = "Write a short, imperative mood description of the change:"
BODY_PROMPT = "Provide a longer description of the change: (press enter to skip)"
BREAKING_PROMPT = "Are there any breaking changes?"
BREAKING_DESCRIPTION_PROMPT = "Describe the breaking changes:"
CONFIRM_PROMPT = "Are you sure you want to proceed with the commit above?"


def type_choices(context: PromptContext) -> list[Choice]:
    """Build ``type: description emoji`` choices for the type prompt."""
    types = context.type_enum or list(DEFAULT_TYPES)
    descriptions = context.type_descriptions or {}

    choices = []
    for commit_type in types:
        info = descriptions.get(commit_type)
        if info is None:
            choices.append(Choice(label=commit_type, value=commit_type))
            continue

        description = info.description
        if info.emoji and description.startswith(info.emoji):
            description = description[len(info.emoji):].strip()
        label = f"{commit_type}: {description}"
        if info.emoji:
            label = f"{label} {info.emoji}"
        choices.append(Choice(label=label, value=commit_type))
    return choices


def subject_validator(context: PromptContext):
    min_length = context.subject.min_length
    max_length = context.subject.max_length

    def validate(value: str) -> Optional[str]:
        value = value.strip()
        if not value:
            return "Subject is required"
        if min_length and len(value) < min_length:
            return f"Subject must be at least {min_length} characters"
        if max_length and len(value) > max_length:
            return f"Subject must be at most {max_length} characters"
        return None

    return validate


class ManualCommitFlow:
    """Asks the user for each part of a commit message.

    The flow repeats until the user confirms the previewed message.
    UserCancelledError from the prompts propagates to the caller.
    """

    def __init__(self, cli: CliInterface):
        self.cli = cli

    def execute(self, context: PromptContext) -> CommitMessage:
        while True:
            message = self._ask(context)
            self.cli.note("Your commit message:", str(message))
            if self.cli.confirm(CONFIRM_PROMPT, default=True):
                return message
            logger.debug("Manual commit message rejected, starting over")

    def _ask(self, context: PromptContext) -> CommitMessage:
        commit_type = self.cli.select(context.type_description or TYPE_PROMPT, type_choices(context))
        scope = self.cli.text(context.scope_description or SCOPE_PROMPT)
        subject = self.cli.text(
            context.subject.description or SUBJECT_PROMPT,
            validate=subject_validator(context),
        )
        content = self.cli.text(context.body.description or BODY_PROMPT)

        breaking_change = None
        if self.cli.confirm(BREAKING_PROMPT, default=False):
            breaking_change = self.cli.text(BREAKING_DESCRIPTION_PROMPT)

        return CommitMessage.from_parts(
            commit_type=commit_type,
            subject=subject,
            scope=scope or None,
            content=content or None,
            breaking_change=breaking_change or None,
        )
