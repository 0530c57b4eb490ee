"""LLM provider module for commitmend.

This module provides a unified interface to the supported LLM providers
and the retrying generation gateway.
"""

from dotenv import load_dotenv

from commitmend.config import LLMProvider
from commitmend.llm.base import BaseLLMProvider
from commitmend.llm.configuration import ApiKey, LLMConfiguration
from commitmend.llm.exceptions import (
    GenerationExhaustedError,
    LLMError,
    MalformedResponseError,
    MissingAPIKeyError,
    UnsupportedProviderError,
)

# Load environment variables from .env file
load_dotenv()


def get_provider(provider: LLMProvider) -> BaseLLMProvider:
    """Get an LLM provider instance.

    Args:
        provider: The provider to use.

    Returns:
        An instance of the matching provider implementation.

    Raises:
        UnsupportedProviderError: If the provider is not supported.
    """
    if provider == LLMProvider.ANTHROPIC:
        from commitmend.llm.anthropic_provider import AnthropicProvider

        return AnthropicProvider()

    elif provider == LLMProvider.OPENAI:
        from commitmend.llm.openai_provider import OpenAIProvider

        return OpenAIProvider()

    elif provider == LLMProvider.GOOGLE:
        from commitmend.llm.google_provider import GoogleProvider

        return GoogleProvider()

    elif provider == LLMProvider.OLLAMA:
        from commitmend.llm.ollama_provider import OllamaProvider

        return OllamaProvider()

    elif provider == LLMProvider.AZURE_OPENAI:
        from commitmend.llm.azure_openai_provider import AzureOpenAIProvider

        return AzureOpenAIProvider()

    elif provider == LLMProvider.AWS_BEDROCK:
        from commitmend.llm.bedrock_provider import BedrockProvider

        return BedrockProvider()

    else:
        raise UnsupportedProviderError(f"Unsupported provider: {provider}")


__all__ = [
    "ApiKey",
    "BaseLLMProvider",
    "GenerationExhaustedError",
    "LLMConfiguration",
    "LLMError",
    "MalformedResponseError",
    "MissingAPIKeyError",
    "UnsupportedProviderError",
    "get_provider",
]
