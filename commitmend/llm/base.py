"""Base class shared by the LLM providers."""

from abc import ABC, abstractmethod

from commitmend.config import LLMProvider, get_api_key_env_var
from commitmend.context import PromptContext
from commitmend.llm.configuration import LLMConfiguration
from commitmend.llm.exceptions import MissingAPIKeyError
from commitmend.llm.prompts import build_system_prompt, build_user_prompt
from commitmend.message import CommitMessage


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers.

    Subclasses set ``provider`` and implement ``generate``; they must raise
    an LLMError subclass on every failure, including unparsable output.
    """

    provider: LLMProvider
    display_name: str = "LLM"

    def supports(self, configuration: LLMConfiguration) -> bool:
        """Check whether this provider handles the given configuration."""
        return configuration.provider == self.provider

    @abstractmethod
    def generate(self, context: PromptContext, configuration: LLMConfiguration) -> CommitMessage:
        """Generate a commit message.

        Args:
            context: The prompt context (rules, diff or repair record).
            configuration: The run's LLM configuration.

        Returns:
            The parsed CommitMessage.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            MalformedResponseError: If the response cannot be parsed.
            LLMError: For other LLM-related errors.
        """
        pass

    def build_prompts(self, context: PromptContext) -> tuple[str, str]:
        """Return the (system, user) prompt pair for the context."""
        return build_system_prompt(context), build_user_prompt(context)

    def _require_api_key(self, configuration: LLMConfiguration) -> str:
        if configuration.api_key is None:
            raise MissingAPIKeyError(
                f"{self.display_name} API key not found. Set {get_api_key_env_var(self.provider)} "
                f"or enter it when prompted."
            )
        return configuration.api_key.value
