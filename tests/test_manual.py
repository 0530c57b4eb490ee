"""Tests for commitmend.manual module."""

import pytest

from commitmend.config import DEFAULT_TYPES
from commitmend.context import extract_context
from commitmend.interaction import Choice, UserCancelledError
from commitmend.manual import (
    BREAKING_DESCRIPTION_PROMPT,
    CONFIRM_PROMPT,
    SCOPE_PROMPT,
    TYPE_PROMPT,
    ManualCommitFlow,
    subject_validator,
    type_choices,
)
from commitmend.message import CommitMessage


class TestTypeChoices:
    """Tests for type_choices."""

    def test_emoji_descriptions(self, conventional_rules, conventional_prompt):
        """Test the leading emoji moves to the end of the label."""
        choices = type_choices(extract_context(conventional_rules, conventional_prompt))
        feat = next(choice for choice in choices if choice.value == "feat")
        assert feat == Choice(label="feat: A new feature ✨", value="feat")

    def test_types_without_descriptions(self, simple_rules):
        """Test plain type names are offered without prompt settings."""
        choices = type_choices(extract_context(simple_rules))
        assert choices == [Choice("feat", "feat"), Choice("fix", "fix")]

    def test_defaults_without_type_enum(self):
        """Test the conventional types are offered when unrestricted."""
        assert [choice.value for choice in type_choices(extract_context({}))] == DEFAULT_TYPES


class TestSubjectValidator:
    """Tests for subject_validator."""

    def test_bounds(self):
        """Test required, minimum and maximum length checks."""
        validate = subject_validator(
            extract_context({"subject-min-length": [2, "always", 3], "subject-max-length": [2, "always", 10]})
        )
        assert validate("  ") == "Subject is required"
        assert validate("ab") == "Subject must be at least 3 characters"
        assert validate("a" * 11) == "Subject must be at most 10 characters"
        assert validate("add parser") is None


class TestManualCommitFlow:
    """Tests for ManualCommitFlow."""

    def test_builds_message(self, make_cli, simple_rules):
        """Test answers are assembled into a commit message."""
        cli = make_cli(["feat", "parser", "add array support", "Handles nested arrays.", False, True])

        message = ManualCommitFlow(cli).execute(extract_context(simple_rules))

        assert message == CommitMessage.from_parts(
            "feat", "add array support", scope="parser", content="Handles nested arrays."
        )
        assert [kind for kind, _ in cli.prompts] == ["select", "text", "text", "text", "confirm", "confirm"]
        assert cli.prompts[0][1] == TYPE_PROMPT
        assert cli.prompts[1][1] == SCOPE_PROMPT
        assert cli.prompts[-1][1] == CONFIRM_PROMPT
        assert cli.notes == [("Your commit message:", "feat(parser): add array support\n\nHandles nested arrays.")]

    def test_breaking_change(self, make_cli, simple_rules):
        """Test the breaking change description is asked for and kept."""
        cli = make_cli(["fix", "", "drop legacy flag", "", True, "--legacy is gone", True])

        message = ManualCommitFlow(cli).execute(extract_context(simple_rules))

        assert str(message) == "fix: drop legacy flag\n\nBREAKING CHANGE: --legacy is gone"
        assert ("text", BREAKING_DESCRIPTION_PROMPT) in cli.prompts

    def test_restarts_when_not_confirmed(self, make_cli, simple_rules):
        """Test declining the preview starts over."""
        cli = make_cli([
            "feat", "", "first try", "", False, False,
            "fix", "", "second try", "", False, True,
        ])

        message = ManualCommitFlow(cli).execute(extract_context(simple_rules))

        assert str(message) == "fix: second try"
        assert len(cli.notes) == 2

    def test_prompt_descriptions_from_config(self, make_cli, conventional_rules, conventional_prompt):
        """Test configured question texts replace the defaults."""
        prompt = dict(conventional_prompt)
        prompt["questions"] = dict(prompt["questions"], scope={"description": "Which package?"})
        cli = make_cli(["docs", "", "fix typos", "", False, True])

        ManualCommitFlow(cli).execute(extract_context(conventional_rules, prompt))

        assert cli.prompts[0][1] == "Select the type of change that you're committing:"
        assert cli.prompts[1][1] == "Which package?"

    def test_cancellation_propagates(self, make_cli, simple_rules):
        """Test a cancelled prompt aborts the flow."""
        cli = make_cli(["feat", UserCancelledError("cancelled")])

        with pytest.raises(UserCancelledError):
            ManualCommitFlow(cli).execute(extract_context(simple_rules))
