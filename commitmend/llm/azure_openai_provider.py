"""Azure OpenAI provider.

Uses the same chat completions API as OpenAI; the configured model is
the deployment name on the Azure resource at AZURE_OPENAI_ENDPOINT.
"""

import os

from openai import AzureOpenAI

from commitmend.config import (
    AZURE_OPENAI_API_VERSION_ENV_VAR,
    AZURE_OPENAI_DEFAULT_API_VERSION,
    AZURE_OPENAI_ENDPOINT_ENV_VAR,
    LLMProvider,
)
from commitmend.llm.configuration import LLMConfiguration
from commitmend.llm.exceptions import LLMError
from commitmend.llm.openai_provider import OpenAIProvider


class AzureOpenAIProvider(OpenAIProvider):
    """OpenAI models deployed on an Azure OpenAI resource."""

    provider = LLMProvider.AZURE_OPENAI
    display_name = "Azure OpenAI"

    def create_client(self, configuration: LLMConfiguration) -> AzureOpenAI:
        api_key = self._require_api_key(configuration)
        endpoint = os.environ.get(AZURE_OPENAI_ENDPOINT_ENV_VAR, "").strip()
        if not endpoint:
            raise LLMError(
                f"Azure OpenAI endpoint not found. Set {AZURE_OPENAI_ENDPOINT_ENV_VAR} "
                f"to your resource URL (https://<resource>.openai.azure.com)."
            )
        api_version = os.environ.get(AZURE_OPENAI_API_VERSION_ENV_VAR) or AZURE_OPENAI_DEFAULT_API_VERSION
        return AzureOpenAI(api_key=api_key, azure_endpoint=endpoint, api_version=api_version)
