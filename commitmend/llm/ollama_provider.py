"""Ollama provider using its OpenAI-compatible endpoint."""

import os

from openai import OpenAI

from commitmend.config import OLLAMA_DEFAULT_HOST, LLMProvider
from commitmend.llm.configuration import LLMConfiguration
from commitmend.llm.openai_provider import OpenAIProvider

# Ollama ignores the key, but the OpenAI client refuses an empty one.
PLACEHOLDER_API_KEY = "ollama"


class OllamaProvider(OpenAIProvider):
    """Local Ollama models served at OLLAMA_HOST."""

    provider = LLMProvider.OLLAMA
    display_name = "Ollama"

    def create_client(self, configuration: LLMConfiguration) -> OpenAI:
        api_key = configuration.api_key.value if configuration.api_key else PLACEHOLDER_API_KEY
        base_url = os.environ.get("OLLAMA_HOST") or OLLAMA_DEFAULT_HOST
        return OpenAI(api_key=api_key, base_url=base_url)
