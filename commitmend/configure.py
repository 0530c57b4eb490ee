"""Interactive setup and loading of the LLM configuration.

Contains:
- api_key_prompt_info: prompt text and hint for entering a provider key
- ConfigureLLM: first-run setup, loading with migrations, mode updates
"""

import logging
import os
from typing import Mapping, Optional

from commitmend.config import (
    AVAILABLE_MODELS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MODELS,
    DEFAULT_PROVIDER,
    DEFAULT_VALIDATION_MAX_RETRIES,
    KEYLESS_PROVIDERS,
    MAX_RETRY_COUNT,
    MIN_RETRY_COUNT,
    MODEL_MIGRATIONS,
    CommitMode,
    LLMProvider,
    get_api_key_env_var,
)
from commitmend.interaction import Choice, CliInterface
from commitmend.llm.configuration import ApiKey, LLMConfiguration
from commitmend.store import ConfigStore, StoredConfig

logger = logging.getLogger(__name__)

MODE_CHOICES = [
    Choice(label="Auto (AI-powered)", value=CommitMode.AUTO),
    Choice(label="Manual", value=CommitMode.MANUAL),
]

PROVIDER_CHOICES = [
    Choice(label="OpenAI (GPT-4.1, GPT-4o)", value=LLMProvider.OPENAI),
    Choice(label="Anthropic (Claude)", value=LLMProvider.ANTHROPIC),
    Choice(label="Google (Gemini)", value=LLMProvider.GOOGLE),
    Choice(label="Ollama (local models)", value=LLMProvider.OLLAMA),
    Choice(label="Azure OpenAI (deployed models)", value=LLMProvider.AZURE_OPENAI),
    Choice(label="AWS Bedrock (Claude, Llama, Nova, Titan, Mistral)", value=LLMProvider.AWS_BEDROCK),
]

RETRY_RANGE_ERROR = f"Please enter a number between {MIN_RETRY_COUNT} and {MAX_RETRY_COUNT}"


def api_key_prompt_info(provider: LLMProvider) -> tuple[str, str]:
    """Return (prompt, hint) for asking the user for a provider's API key."""
    if provider == LLMProvider.ANTHROPIC:
        return "Enter your Anthropic API key for this session:", "sk-ant-..."
    elif provider == LLMProvider.OPENAI:
        return "Enter your OpenAI API key for this session:", "sk-..."
    elif provider == LLMProvider.GOOGLE:
        return "Enter your Google AI API key for this session:", "AIza..."
    elif provider == LLMProvider.OLLAMA:
        return "Enter your Ollama API key (or press Enter to skip):", "Usually not required for local Ollama"
    elif provider == LLMProvider.AZURE_OPENAI:
        return "Enter your Azure OpenAI API key for this session:", "Your Azure OpenAI API key"
    elif provider == LLMProvider.AWS_BEDROCK:
        return (
            "Enter your AWS Bedrock credentials for this session:",
            "region|access-key-id|secret-access-key",
        )
    return f"Enter your {provider.value} API key:", "API key"


def validate_retry_count(value: str) -> Optional[str]:
    try:
        count = int(value.strip())
    except ValueError:
        return RETRY_RANGE_ERROR
    if not MIN_RETRY_COUNT <= count <= MAX_RETRY_COUNT:
        return RETRY_RANGE_ERROR
    return None


def validate_api_key(value: str) -> Optional[str]:
    if not value or not value.strip():
        return "API key is required"
    return None


class ConfigureLLM:
    """Resolves the per-run LLMConfiguration from the store, the
    environment and the user.

    Args:
        store: Where the configuration is persisted.
        cli: Interactive prompts and output.
        environ: Environment used to look up API keys.
    """

    def __init__(self, store: ConfigStore, cli: CliInterface, environ: Optional[Mapping[str, str]] = None):
        self.store = store
        self.cli = cli
        self.environ = os.environ if environ is None else environ

    def env_api_key(self, provider: LLMProvider) -> Optional[ApiKey]:
        value = self.environ.get(get_api_key_env_var(provider), "")
        if not value.strip():
            return None
        return ApiKey(value)

    def configure_interactively(self) -> LLMConfiguration:
        """Ask for mode, provider, model and retry counts, then save them.

        Returns:
            The new configuration. Its api_key is taken from the
            environment when available and is None otherwise.
        """
        mode = self.cli.select("Select commit mode:", MODE_CHOICES, default=CommitMode.AUTO)

        if mode == CommitMode.MANUAL:
            configuration = LLMConfiguration(provider=DEFAULT_PROVIDER, mode=CommitMode.MANUAL)
            self.save_configuration(configuration)
            self.cli.success("Configuration saved successfully!")
            return configuration

        self.cli.info("Setting up AI-powered commit mode...")
        provider = self.cli.select("Select your LLM provider:", PROVIDER_CHOICES)
        model = self.cli.select(
            "Select model:",
            [Choice(label=name, value=name) for name in AVAILABLE_MODELS[provider]],
            default=DEFAULT_MODELS[provider],
        )

        env_var = get_api_key_env_var(provider)
        api_key = self.env_api_key(provider)
        if api_key is not None:
            self.cli.success(f"Found API key in environment variable: {env_var}")
        elif provider not in KEYLESS_PROVIDERS:
            self.cli.info(f"API key will be read from {env_var} environment variable or prompted each time.")

        max_retries = DEFAULT_MAX_RETRIES
        validation_max_retries = DEFAULT_VALIDATION_MAX_RETRIES
        if self.cli.confirm("Would you like to configure advanced settings (retry counts)?", default=False):
            max_retries = int(self.cli.text(
                f"Max retries for AI generation (default: {DEFAULT_MAX_RETRIES}):",
                default=str(DEFAULT_MAX_RETRIES),
                validate=validate_retry_count,
            ).strip())
            validation_max_retries = int(self.cli.text(
                f"Max retries for validation fixes (default: {DEFAULT_VALIDATION_MAX_RETRIES}):",
                default=str(DEFAULT_VALIDATION_MAX_RETRIES),
                validate=validate_retry_count,
            ).strip())

        configuration = LLMConfiguration(
            provider=provider,
            api_key=api_key,
            mode=CommitMode.AUTO,
            model=model,
            max_retries=max_retries,
            validation_max_retries=validation_max_retries,
        )
        self.save_configuration(configuration)
        self.cli.success("Configuration saved successfully!")
        return configuration

    def get_current_configuration(self) -> Optional[LLMConfiguration]:
        """Load the stored configuration for this run.

        Missing retry counts are filled with defaults and saved back, and
        deprecated models are migrated.

        Returns:
            The configuration, or None if nothing is stored or auto mode
            needs an API key that is not in the environment.
        """
        stored = self.store.get()
        if stored is None:
            return None

        if not stored.has_retry_settings():
            logger.info("Adding default retry settings to stored configuration")
            self.store.set(stored)

        model = stored.model
        if model in MODEL_MIGRATIONS:
            migrated = MODEL_MIGRATIONS[model]
            self.store.set_property("model", migrated)
            self.cli.warn(f"Migrated deprecated model {model} to {migrated}")
            model = migrated

        configuration = LLMConfiguration(
            provider=stored.provider,
            mode=stored.mode,
            model=model,
            max_retries=stored.max_retries,
            validation_max_retries=stored.validation_max_retries,
        )
        if configuration.is_manual_mode():
            return configuration

        api_key = self.env_api_key(stored.provider)
        if api_key is None and stored.provider not in KEYLESS_PROVIDERS:
            return None
        return configuration.with_api_key(api_key) if api_key else configuration

    def save_configuration(self, configuration: LLMConfiguration) -> None:
        """Persist everything except the API key."""
        self.store.set(StoredConfig(
            provider=configuration.provider,
            mode=configuration.mode,
            model=configuration.model,
            max_retries=configuration.max_retries,
            validation_max_retries=configuration.validation_max_retries,
        ))

    def update_mode(self, mode: CommitMode) -> LLMConfiguration:
        """Persist a new commit mode, creating a default configuration if needed.

        Raises:
            ConfigStoreError: If the configuration cannot be written.
        """
        self.store.set_property("mode", mode.value)
        logger.info("Commit mode set to %s", mode.value)
        return self.load_stored_configuration()

    def load_stored_configuration(self) -> Optional[LLMConfiguration]:
        """The stored settings as a configuration without an API key."""
        stored = self.store.get()
        if stored is None:
            return None
        return LLMConfiguration(
            provider=stored.provider,
            mode=stored.mode,
            model=MODEL_MIGRATIONS.get(stored.model, stored.model),
            max_retries=stored.max_retries,
            validation_max_retries=stored.validation_max_retries,
        )

    def prompt_api_key(self, configuration: LLMConfiguration) -> LLMConfiguration:
        """Ask for the API key when auto mode still lacks one.

        Keyless providers accept an empty answer.
        """
        if configuration.is_manual_mode() or configuration.api_key is not None:
            return configuration

        provider = configuration.provider
        prompt, hint = api_key_prompt_info(provider)
        value = self.cli.password(prompt, hint=hint)
        if provider in KEYLESS_PROVIDERS:
            return configuration.with_api_key(ApiKey(value)) if value.strip() else configuration

        while validate_api_key(value):
            self.cli.error(validate_api_key(value))
            value = self.cli.password(prompt, hint=hint)
        return configuration.with_api_key(ApiKey(value))
