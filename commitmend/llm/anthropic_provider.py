"""Anthropic Claude provider implementation."""

from anthropic import Anthropic

from commitmend.config import MAX_TOKENS, TEMPERATURE, LLMProvider
from commitmend.context import PromptContext
from commitmend.llm.base import BaseLLMProvider
from commitmend.llm.configuration import LLMConfiguration
from commitmend.llm.exceptions import LLMError
from commitmend.llm.parsing import parse_commit_response
from commitmend.message import CommitMessage


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude LLM provider."""

    provider = LLMProvider.ANTHROPIC
    display_name = "Anthropic"

    def generate(self, context: PromptContext, configuration: LLMConfiguration) -> CommitMessage:
        """Generate a commit message using Anthropic Claude.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            MalformedResponseError: If the response cannot be parsed.
            LLMError: For other LLM-related errors.
        """
        api_key = self._require_api_key(configuration)
        client = Anthropic(api_key=api_key)
        system_prompt, user_prompt = self.build_prompts(context)

        try:
            message = client.messages.create(
                model=configuration.effective_model(),
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
            raw_response = message.content[0].text
        except Exception as e:
            raise LLMError(f"Anthropic API call failed: {e}")

        return parse_commit_response(raw_response)
