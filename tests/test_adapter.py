"""Tests for commitmend.adapter module."""

from unittest.mock import MagicMock

import pytest

from commitmend.adapter import CommitizenAdapter
from commitmend.config import CommitMode, LLMProvider
from commitmend.interaction import UserCancelledError
from commitmend.lint.config import LintConfig
from commitmend.llm.exceptions import LLMError
from commitmend.llm.gateway import GenerationGateway
from commitmend.message import CommitMessage
from commitmend.store import ConfigStore, StoredConfig

API_KEY = "sk-test-key-0123456789"
MANUAL_ANSWERS = ["fix", "", "enter it by hand", "", False, True]


@pytest.fixture
def repository(temp_dir):
    """A repository stand-in with one staged file."""
    repository = MagicMock()
    repository.get_repo_root.return_value = temp_dir
    repository.get_staged_diff.return_value = "diff --git a/parser.py b/parser.py\n+def parse(): ..."
    repository.get_staged_files.return_value = ["parser.py"]
    return repository


@pytest.fixture
def store(temp_dir):
    """A config store in the temporary repository."""
    return ConfigStore(temp_dir)


@pytest.fixture
def commits():
    """Collects committed messages."""
    return []


def _adapter(cli, repository, store, provider, rules, **kwargs):
    gateway = GenerationGateway(providers={provider.provider: provider}, sleep=lambda seconds: None)
    return CommitizenAdapter(
        cli=cli,
        repository=repository,
        store=store,
        lint_config=LintConfig(rules=rules),
        gateway=gateway,
        **kwargs,
    )


class TestAutoMode:
    """Tests for AI-powered commits."""

    def test_first_run_setup_and_commit(
        self, make_cli, make_provider, repository, store, simple_rules, commits, monkeypatch
    ):
        """Test setup, generation, confirmation and commit on a fresh repository."""
        monkeypatch.setenv("OPENAI_API_KEY", API_KEY)
        provider = make_provider([CommitMessage.from_parts("feat", "add parser", content="Parses input.")])
        cli = make_cli([CommitMode.AUTO, LLMProvider.OPENAI, "gpt-4o", False, True])

        _adapter(cli, repository, store, provider, simple_rules).prompter(commits.append)

        assert commits == ["feat: add parser\n\nParses input."]
        assert cli.said("No configuration found. Let's set it up!")
        assert cli.said("AI generated commit message successfully!")
        assert cli.notes == [("Generated commit message:", "feat: add parser\n\nParses input.")]
        assert store.get().provider == LLMProvider.OPENAI

        context, configuration = provider.calls[0]
        assert context.diff.startswith("diff --git")
        assert context.files == ["parser.py"]
        assert context.type_enum == ["feat", "fix"]
        assert configuration.api_key.value == API_KEY

    def test_invalid_message_repaired_by_llm(
        self, make_cli, make_provider, repository, store, simple_rules, commits, monkeypatch
    ):
        """Test a generated message failing lint is fixed through the provider."""
        monkeypatch.setenv("OPENAI_API_KEY", API_KEY)
        store.set(StoredConfig(provider=LLMProvider.OPENAI))
        provider = make_provider([
            CommitMessage.from_parts("docs", "update readme"),
            CommitMessage.from_parts("fix", "update readme"),
        ])
        cli = make_cli([True, True])

        _adapter(cli, repository, store, provider, simple_rules).prompter(commits.append)

        assert commits == ["fix: update readme"]
        assert len(provider.calls) == 2
        repair_context = provider.calls[1][0]
        assert repair_context.is_fixing()
        assert repair_context.diff is None
        assert repair_context.repair.validation_errors == ["type must be one of [feat, fix]"]

    def test_generation_exhausted_falls_back_to_manual(
        self, make_cli, make_provider, repository, store, simple_rules, commits, monkeypatch
    ):
        """Test failed generation switches to manual entry."""
        monkeypatch.setenv("OPENAI_API_KEY", API_KEY)
        store.set(StoredConfig(provider=LLMProvider.OPENAI, max_retries=2, validation_max_retries=3))
        provider = make_provider([LLMError("boom")])
        cli = make_cli([True] + MANUAL_ANSWERS)

        _adapter(cli, repository, store, provider, simple_rules).prompter(commits.append)

        assert commits == ["fix: enter it by hand"]
        assert len(provider.calls) == 2
        assert ("warn", "Attempt 1/2 failed: boom. Retrying...") in cli.messages
        assert ("error", "Failed to generate commit message after 2 attempt(s): boom") in cli.messages
        assert ("warn", "Falling back to manual commit entry...") in cli.messages

    def test_unrepairable_message_falls_back_to_manual(
        self, make_cli, make_provider, repository, store, simple_rules, commits, monkeypatch
    ):
        """Test a message that stays invalid switches to manual entry."""
        monkeypatch.setenv("OPENAI_API_KEY", API_KEY)
        store.set(StoredConfig(provider=LLMProvider.OPENAI))
        provider = make_provider([CommitMessage.from_parts("docs", "update readme")])
        cli = make_cli([True] + MANUAL_ANSWERS)

        _adapter(cli, repository, store, provider, simple_rules).prompter(commits.append)

        assert commits == ["fix: enter it by hand"]
        assert cli.said("Could not generate a valid commit message. Switching to manual mode...")
        # one generation plus validation_max_retries - 1 repair requests
        assert len(provider.calls) == 3

    def test_declined_message_switches_to_manual(
        self, make_cli, make_provider, repository, store, simple_rules, commits, monkeypatch
    ):
        """Test rejecting the AI message opens the manual flow."""
        monkeypatch.setenv("OPENAI_API_KEY", API_KEY)
        store.set(StoredConfig(provider=LLMProvider.OPENAI))
        provider = make_provider([CommitMessage.from_parts("feat", "add parser")])
        cli = make_cli([True, False] + MANUAL_ANSWERS)

        _adapter(cli, repository, store, provider, simple_rules).prompter(commits.append)

        assert commits == ["fix: enter it by hand"]
        assert cli.said("Switching to manual mode to edit the message...")

    def test_missing_key_is_prompted(
        self, make_cli, make_provider, repository, store, simple_rules, commits
    ):
        """Test the key is asked for when the environment has none."""
        store.set(StoredConfig(provider=LLMProvider.ANTHROPIC))
        provider = make_provider([CommitMessage.from_parts("feat", "add parser")], provider=LLMProvider.ANTHROPIC)
        cli = make_cli([True, "sk-ant-typed-0123456789", True])

        _adapter(cli, repository, store, provider, simple_rules).prompter(commits.append)

        assert commits == ["feat: add parser"]
        assert cli.said("API key not found in ANTHROPIC_API_KEY environment variable.")
        assert provider.calls[0][1].api_key.value == "sk-ant-typed-0123456789"

    def test_reconfigure_when_declined(
        self, make_cli, make_provider, repository, store, simple_rules, commits, monkeypatch
    ):
        """Test declining the stored configuration runs setup again."""
        monkeypatch.setenv("OPENAI_API_KEY", API_KEY)
        store.set(StoredConfig(provider=LLMProvider.GOOGLE))
        provider = make_provider([CommitMessage.from_parts("feat", "add parser")])
        cli = make_cli([False, CommitMode.AUTO, LLMProvider.OPENAI, "gpt-4o-mini", False, True])

        _adapter(cli, repository, store, provider, simple_rules).prompter(commits.append)

        assert commits == ["feat: add parser"]
        assert cli.said("Let's reconfigure...")
        assert store.get().provider == LLMProvider.OPENAI
        assert provider.calls[0][1].model == "gpt-4o-mini"


class TestManualMode:
    """Tests for manual commits."""

    def test_stored_manual_mode(self, make_cli, make_provider, repository, store, simple_rules, commits):
        """Test manual mode skips the provider entirely."""
        store.set(StoredConfig(mode=CommitMode.MANUAL))
        provider = make_provider([CommitMessage.from_parts("feat", "unused")])
        cli = make_cli([True] + MANUAL_ANSWERS)

        _adapter(cli, repository, store, provider, simple_rules).prompter(commits.append)

        assert commits == ["fix: enter it by hand"]
        assert cli.prompts[0] == ("confirm", "Found existing configuration (manual mode). Use it?")
        assert cli.said("Using manual commit mode...")
        assert provider.calls == []

    def test_force_manual_without_configuration(
        self, make_cli, make_provider, repository, store, simple_rules, commits
    ):
        """Test --manual works before any setup and does not save anything."""
        provider = make_provider([CommitMessage.from_parts("feat", "unused")])
        cli = make_cli(MANUAL_ANSWERS)

        _adapter(cli, repository, store, provider, simple_rules, force_manual=True).prompter(commits.append)

        assert commits == ["fix: enter it by hand"]
        assert not store.exists()
        assert provider.calls == []

    def test_cancellation_propagates(self, make_cli, make_provider, repository, store, simple_rules, commits):
        """Test a cancelled prompt aborts without committing."""
        store.set(StoredConfig(mode=CommitMode.MANUAL))
        cli = make_cli([UserCancelledError("cancelled")])

        with pytest.raises(UserCancelledError):
            _adapter(cli, repository, store, make_provider([None]), simple_rules).prompter(commits.append)
        assert commits == []


class TestLintConfigLoading:
    """Tests for lint configuration discovery."""

    def test_loads_rules_from_repository_root(self, make_cli, repository, store, temp_dir, commits):
        """Test rules are read from the repository when not given."""
        (temp_dir / ".commitlintrc.yaml").write_text("rules:\n  type-enum: [2, always, [fix, chore]]\n")
        cli = make_cli(["chore", "", "bump deps", "", False, True])
        adapter = CommitizenAdapter(cli=cli, repository=repository, store=store, force_manual=True)

        adapter.prompter(commits.append)

        assert commits == ["chore: bump deps"]
        assert [choice.value for choice in cli.last_choices] == ["fix", "chore"]

    def test_for_repository(self, temp_dir):
        """Test the factory wires components to the repository root."""
        adapter = CommitizenAdapter.for_repository(temp_dir, force_manual=True)

        assert adapter.store.repo_root == temp_dir
        assert adapter.repository.cwd == temp_dir
        assert adapter.lint_config.source is None
        assert adapter.force_manual
