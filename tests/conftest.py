"""Shared test fixtures and configuration."""

import logging
import tempfile
from pathlib import Path

import pytest

from commitmend.config import LLMProvider
from commitmend.interaction import UserCancelledError
from commitmend.lint.config import DEFAULT_PROMPT, DEFAULT_RULES
from commitmend.llm.base import BaseLLMProvider


class ScriptedCli:
    """CliInterface stand-in that answers prompts from a script.

    Each prompt pops the next answer. An exception instance in the script
    is raised instead of returned.
    """

    def __init__(self, answers=None):
        self.answers = list(answers or [])
        self.prompts = []
        self.messages = []
        self.notes = []

    def _next(self, kind, prompt):
        self.prompts.append((kind, prompt))
        if not self.answers:
            raise UserCancelledError(f"No scripted answer for {kind}: {prompt}")
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer

    def select(self, prompt, choices, default=None):
        self.last_choices = list(choices)
        return self._next("select", prompt)

    def text(self, prompt, hint=None, default=None, validate=None):
        answer = self._next("text", prompt)
        if validate is not None:
            error = validate(answer)
            assert error is None, f"Scripted answer {answer!r} rejected: {error}"
        return answer

    def password(self, prompt, hint=None):
        return self._next("password", prompt)

    def confirm(self, prompt, default=False):
        return self._next("confirm", prompt)

    def info(self, message):
        self.messages.append(("info", message))

    def success(self, message):
        self.messages.append(("success", message))

    def warn(self, message):
        self.messages.append(("warn", message))

    def error(self, message):
        self.messages.append(("error", message))

    def note(self, title, body):
        self.notes.append((title, body))

    def said(self, text):
        """True if any output message contains text."""
        return any(text in message for _, message in self.messages)


class FakeProvider(BaseLLMProvider):
    """Provider returning (or raising) scripted outcomes in order.

    The last outcome repeats once the script runs out.
    """

    def __init__(self, outcomes, provider=LLMProvider.OPENAI):
        self.provider = provider
        self.outcomes = list(outcomes)
        self.calls = []

    def generate(self, context, configuration):
        self.calls.append((context, configuration))
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_git_commands(mocker):
    """Mock subprocess.run for git commands."""
    mock_run = mocker.patch("subprocess.run")
    return mock_run


@pytest.fixture
def make_cli():
    """Factory for ScriptedCli instances."""
    return ScriptedCli


@pytest.fixture
def make_provider():
    """Factory for FakeProvider instances."""
    return FakeProvider


@pytest.fixture
def simple_rules():
    """Type enum plus subject length, as used in the end-to-end examples."""
    return {
        "type-enum": [2, "always", ["feat", "fix"]],
        "subject-max-length": [2, "always", 72],
    }


@pytest.fixture
def conventional_rules():
    """The built-in conventional rule set."""
    return dict(DEFAULT_RULES)


@pytest.fixture
def conventional_prompt():
    """The built-in prompt settings with emoji type descriptions."""
    return dict(DEFAULT_PROMPT)


@pytest.fixture(autouse=True)
def no_api_keys(monkeypatch):
    """Keep real API keys from the environment out of tests."""
    for name in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "GOOGLE_API_KEY", "OLLAMA_API_KEY", "OLLAMA_HOST",
                 "AZURE_OPENAI_API_KEY", "AZURE_OPENAI_ENDPOINT", "AZURE_OPENAI_API_VERSION",
                 "AWS_BEDROCK_CREDENTIALS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler and level changes made by configure_logging."""
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield
    root.setLevel(level)
    root.handlers[:] = handlers
