"""Commit flow orchestration.

CommitizenAdapter.prompter runs one interactive commit: load lint config,
build the prompt context, resolve the LLM configuration, then either the
manual flow or AI generation plus the repair loop, and finally hand the
confirmed message to the commit callback.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from commitmend.config import DEFAULT_PROVIDER, CommitMode, get_api_key_env_var
from commitmend.configure import ConfigureLLM
from commitmend.context import PromptContext, extract_context
from commitmend.git.repository import GitCommitRepository
from commitmend.interaction import CliInterface
from commitmend.lint.config import LintConfig, load_lint_config
from commitmend.lint.linter import CommitLinter
from commitmend.llm.configuration import LLMConfiguration
from commitmend.llm.exceptions import GenerationExhaustedError, LLMError
from commitmend.llm.gateway import GenerationGateway
from commitmend.manual import ManualCommitFlow
from commitmend.message import CommitMessage
from commitmend.repair import CommitValidator, ValidateCommitMessage
from commitmend.store import ConfigStore

logger = logging.getLogger(__name__)

CommitCallback = Callable[[str], object]


class CommitizenAdapter:
    """Drives the interactive commit flow.

    Args:
        cli: Prompts and output.
        repository: Source of the staged diff and file list.
        store: Persisted configuration.
        lint_config: Rules and prompt settings. Loaded from the
            repository root when None.
        gateway: LLM generation gateway.
        force_manual: Use manual entry for this run regardless of the
            stored mode.
    """

    def __init__(
        self,
        cli: CliInterface,
        repository: GitCommitRepository,
        store: ConfigStore,
        lint_config: Optional[LintConfig] = None,
        gateway: Optional[GenerationGateway] = None,
        force_manual: bool = False,
    ):
        self.cli = cli
        self.repository = repository
        self.store = store
        self.lint_config = lint_config
        self.gateway = gateway or GenerationGateway()
        self.force_manual = force_manual
        self.configure = ConfigureLLM(store, cli)
        self.manual = ManualCommitFlow(cli)

    @classmethod
    def for_repository(cls, repo_root: Path, cli: Optional[CliInterface] = None, force_manual: bool = False):
        return cls(
            cli=cli or CliInterface(),
            repository=GitCommitRepository(cwd=repo_root),
            store=ConfigStore(repo_root),
            lint_config=load_lint_config(repo_root),
            force_manual=force_manual,
        )

    def prompter(self, commit: CommitCallback) -> None:
        """Run the commit flow and pass the final message to commit.

        Raises:
            UserCancelledError: If the user aborts any prompt.
            GitError: If the staged changes cannot be read.
        """
        lint_config = self.lint_config or load_lint_config(self.repository.get_repo_root())
        context = extract_context(lint_config.rules, lint_config.prompt).with_changes(
            self.repository.get_staged_diff(),
            self.repository.get_staged_files(),
        )

        configuration = self.resolve_configuration()

        if configuration.is_manual_mode():
            self.cli.info("Using manual commit mode...")
            commit(str(self.manual.execute(context)))
            return

        self.cli.info("Using AI-powered commit mode...")
        message = self._generate_and_validate(context, configuration, lint_config)
        if message is None:
            commit(str(self.manual.execute(context)))
            return

        self.cli.success("AI generated commit message successfully!")
        self.cli.note("Generated commit message:", str(message))
        if self.cli.confirm("Do you want to proceed with this commit message?", default=True):
            commit(str(message))
            return

        self.cli.info("Switching to manual mode to edit the message...")
        commit(str(self.manual.execute(context)))

    def resolve_configuration(self) -> LLMConfiguration:
        """Load, confirm or create the configuration, then fill in the API key."""
        if self.force_manual:
            stored = self.configure.load_stored_configuration()
            return (stored or LLMConfiguration(provider=DEFAULT_PROVIDER)).with_mode(CommitMode.MANUAL)

        if not self.store.exists():
            self.cli.info("No configuration found. Let's set it up!")
            configuration = self.configure.configure_interactively()
            return self.configure.prompt_api_key(configuration)

        stored = self.configure.load_stored_configuration()
        description = f"{stored.mode.value} mode"
        if stored.is_auto_mode():
            description += f", {stored.provider.value} provider"

        if not self.cli.confirm(f"Found existing configuration ({description}). Use it?", default=True):
            self.cli.info("Let's reconfigure...")
            configuration = self.configure.configure_interactively()
            return self.configure.prompt_api_key(configuration)

        configuration = self.configure.get_current_configuration()
        if configuration is None:
            self.cli.warn(f"API key not found in {get_api_key_env_var(stored.provider)} environment variable.")
            configuration = self.configure.load_stored_configuration()
        return self.configure.prompt_api_key(configuration)

    def _generate_and_validate(
        self,
        context: PromptContext,
        configuration: LLMConfiguration,
        lint_config: LintConfig,
    ) -> Optional[CommitMessage]:
        def on_retry(attempt: int, max_retries: int, error: Exception) -> None:
            self.cli.warn(f"Attempt {attempt}/{max_retries} failed: {error}. Retrying...")

        try:
            generated = self.gateway.execute(context, configuration, on_retry=on_retry)
        except GenerationExhaustedError as e:
            self.cli.error(str(e))
            self.cli.warn("Falling back to manual commit entry...")
            return None
        except LLMError as e:
            self.cli.error(f"Error generating commit with AI: {e}")
            self.cli.warn("Falling back to manual commit entry...")
            return None

        self.cli.success("AI generated initial commit message")

        validator = CommitValidator(CommitLinter(lint_config.rules), gateway=self.gateway)
        validated = ValidateCommitMessage(validator).execute(
            generated,
            attempt_fix=True,
            max_retries=configuration.validation_max_retries,
            context=context,
            configuration=configuration,
        )
        if validated is None:
            self.cli.warn("Could not generate a valid commit message. Switching to manual mode...")
        return validated
