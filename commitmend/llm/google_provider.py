"""Google Gemini provider implementation."""

from google import genai
from google.genai import types

from commitmend.config import MAX_TOKENS, TEMPERATURE, LLMProvider
from commitmend.context import PromptContext
from commitmend.llm.base import BaseLLMProvider
from commitmend.llm.configuration import LLMConfiguration
from commitmend.llm.exceptions import LLMError
from commitmend.llm.parsing import parse_commit_response
from commitmend.message import CommitMessage


class GoogleProvider(BaseLLMProvider):
    """Google Gemini LLM provider."""

    provider = LLMProvider.GOOGLE
    display_name = "Google Gemini"

    def generate(self, context: PromptContext, configuration: LLMConfiguration) -> CommitMessage:
        """Generate a commit message using Google Gemini.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            MalformedResponseError: If the response cannot be parsed.
            LLMError: For other LLM-related errors, including blocked or
                truncated responses.
        """
        api_key = self._require_api_key(configuration)
        client = genai.Client(api_key=api_key)
        system_prompt, user_prompt = self.build_prompts(context)

        try:
            response = client.models.generate_content(
                model=configuration.effective_model(),
                contents=user_prompt,
                config=types.GenerateContentConfig(
                    system_instruction=system_prompt,
                    max_output_tokens=MAX_TOKENS,
                    temperature=TEMPERATURE,
                ),
            )
        except Exception as e:
            raise LLMError(f"Google Gemini API call failed: {e}")

        if not response.candidates:
            raise LLMError("Google Gemini returned no candidates in response")

        finish_reason = str(getattr(response.candidates[0], "finish_reason", ""))
        if "SAFETY" in finish_reason:
            raise LLMError(f"Google Gemini blocked response due to safety filters: {finish_reason}")
        if "MAX_TOKENS" in finish_reason:
            raise LLMError("Google Gemini response was truncated due to max tokens limit.")

        raw_response = response.text
        if not raw_response or not raw_response.strip():
            raise LLMError("Google Gemini returned empty response")

        return parse_commit_response(raw_response)
