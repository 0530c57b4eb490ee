"""Configuration constants for commitmend.

The persisted run configuration lives in <repo>/.commitmend/config.yaml
(see commitmend.store). This module only holds enums, defaults and the
per-provider tables used to build an LLMConfiguration.
"""

from enum import Enum


class LLMProvider(Enum):
    """Supported LLM providers."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GOOGLE = "google"
    OLLAMA = "ollama"
    AZURE_OPENAI = "azure-openai"
    AWS_BEDROCK = "aws-bedrock"


class CommitMode(Enum):
    """How the commit message is produced."""

    AUTO = "auto"
    MANUAL = "manual"


# ============================================================
# RETRY AND GENERATION DEFAULTS
# ============================================================

DEFAULT_MAX_RETRIES = 3
DEFAULT_VALIDATION_MAX_RETRIES = 3
MIN_RETRY_COUNT = 1
MAX_RETRY_COUNT = 10

# Fixed pause between generation attempts (rate-limited APIs)
RETRY_DELAY_SECONDS = 1.0

MAX_TOKENS = 2048
TEMPERATURE = 0.7

# Staged diff is cut to this size before it goes into the prompt
MAX_DIFF_CHARS = 3000
DIFF_TRUNCATION_MARKER = "\n... (truncated)"

DEFAULT_PROVIDER = LLMProvider.OPENAI

# Conventional types used when the lint config has no type-enum rule
DEFAULT_TYPES = [
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "build",
    "ci",
    "chore",
    "revert",
]


# ============================================================
# AVAILABLE MODELS PER PROVIDER
# ============================================================

AVAILABLE_MODELS = {
    LLMProvider.OPENAI: [
        "gpt-4.1",
        "gpt-4.1-mini",
        "gpt-4.1-nano",
        "gpt-4o",
        "gpt-4o-mini",
        "gpt-4-turbo",
        "o3-mini",
        "o4-mini",
    ],
    LLMProvider.ANTHROPIC: [
        "claude-sonnet-4-20250514",
        "claude-opus-4-20250514",
        "claude-3-7-sonnet-latest",
        "claude-3-5-sonnet-latest",
        "claude-3-5-haiku-latest",
    ],
    LLMProvider.GOOGLE: [
        "gemini-2.5-pro",
        "gemini-2.5-flash",
        "gemini-2.0-flash",
        "gemini-2.0-flash-lite",
    ],
    LLMProvider.OLLAMA: [
        "llama3.2",
        "llama3.1",
        "qwen2.5",
        "mistral",
        "codellama",
        "deepseek-coder",
    ],
    LLMProvider.AZURE_OPENAI: [
        "gpt-4.1",
        "gpt-4.1-mini",
        "gpt-4o",
        "gpt-4o-mini",
        "o3-mini",
        "o4-mini",
    ],
    LLMProvider.AWS_BEDROCK: [
        "anthropic.claude-3-5-sonnet-20241022-v2:0",
        "anthropic.claude-3-5-haiku-20241022-v1:0",
        "anthropic.claude-3-haiku-20240307-v1:0",
        "meta.llama3-1-70b-instruct-v1:0",
        "amazon.nova-pro-v1:0",
        "amazon.nova-lite-v1:0",
        "amazon.titan-text-premier-v1:0",
        "mistral.mistral-large-2407-v1:0",
    ],
}

DEFAULT_MODELS = {
    LLMProvider.OPENAI: "gpt-4o",
    LLMProvider.ANTHROPIC: "claude-sonnet-4-20250514",
    LLMProvider.GOOGLE: "gemini-2.0-flash",
    LLMProvider.OLLAMA: "llama3.2",
    LLMProvider.AZURE_OPENAI: "gpt-4o",
    LLMProvider.AWS_BEDROCK: "anthropic.claude-3-5-sonnet-20241022-v2:0",
}

# Deprecated model ids rewritten when a stored configuration is loaded
MODEL_MIGRATIONS = {
    "claude-2.0": "claude-3-5-sonnet-latest",
    "claude-2.1": "claude-3-5-sonnet-latest",
    "claude-3-sonnet-20240229": "claude-3-5-sonnet-latest",
    "claude-3-haiku-20240307": "claude-3-5-haiku-latest",
    "claude-3-5-sonnet-20241022": "claude-3-5-sonnet-latest",
    "claude-3-5-haiku-20241022": "claude-3-5-haiku-latest",
    "gpt-4-0613": "gpt-4.1",
    "gpt-4-1106-preview": "gpt-4-turbo",
    "gpt-4-0125-preview": "gpt-4-turbo",
    "gpt-4o-2024-05-13": "gpt-4o",
    "gemini-1.0-pro": "gemini-2.0-flash",
    "gemini-1.5-flash": "gemini-2.0-flash",
    "gemini-1.5-pro": "gemini-2.5-pro",
}


# ============================================================
# API KEY ENVIRONMENT VARIABLES
# ============================================================

API_KEY_ENV_VARS = {
    LLMProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.GOOGLE: "GOOGLE_API_KEY",
    LLMProvider.OLLAMA: "OLLAMA_API_KEY",
    LLMProvider.AZURE_OPENAI: "AZURE_OPENAI_API_KEY",
    LLMProvider.AWS_BEDROCK: "AWS_BEDROCK_CREDENTIALS",
}

# Providers that run locally and accept any key
KEYLESS_PROVIDERS = {LLMProvider.OLLAMA}

OLLAMA_DEFAULT_HOST = "http://localhost:11434/v1"

# Azure OpenAI: the model name is the deployment name on this resource
AZURE_OPENAI_ENDPOINT_ENV_VAR = "AZURE_OPENAI_ENDPOINT"
AZURE_OPENAI_API_VERSION_ENV_VAR = "AZURE_OPENAI_API_VERSION"
AZURE_OPENAI_DEFAULT_API_VERSION = "2024-10-21"

# Bedrock credentials are entered as one value: region|access-key-id|secret-access-key
AWS_BEDROCK_CREDENTIAL_SEPARATOR = "|"


def get_api_key_env_var(provider: LLMProvider) -> str:
    """Get the environment variable name for the API key.

    Args:
        provider: The LLM provider.

    Returns:
        The environment variable name.
    """
    return API_KEY_ENV_VARS[provider]
