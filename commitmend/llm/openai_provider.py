"""OpenAI GPT provider implementation."""

from openai import OpenAI

from commitmend.config import MAX_TOKENS, TEMPERATURE, LLMProvider
from commitmend.context import PromptContext
from commitmend.llm.base import BaseLLMProvider
from commitmend.llm.configuration import LLMConfiguration
from commitmend.llm.exceptions import LLMError
from commitmend.llm.parsing import parse_commit_response
from commitmend.message import CommitMessage


class OpenAIProvider(BaseLLMProvider):
    """OpenAI GPT LLM provider."""

    provider = LLMProvider.OPENAI
    display_name = "OpenAI"

    def create_client(self, configuration: LLMConfiguration) -> OpenAI:
        return OpenAI(api_key=self._require_api_key(configuration))

    def generate(self, context: PromptContext, configuration: LLMConfiguration) -> CommitMessage:
        """Generate a commit message using the chat completions API.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            MalformedResponseError: If the response cannot be parsed.
            LLMError: For other LLM-related errors.
        """
        client = self.create_client(configuration)
        system_prompt, user_prompt = self.build_prompts(context)

        try:
            response = client.chat.completions.create(
                model=configuration.effective_model(),
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
            )
            raw_response = response.choices[0].message.content
        except Exception as e:
            raise LLMError(f"{self.display_name} API call failed: {e}")

        if not raw_response:
            raise LLMError(f"No response from {self.display_name}")

        return parse_commit_response(raw_response)
