"""Provider selection and bounded retry around commit message generation."""

import logging
import time
from typing import Callable, Optional

from commitmend.config import LLMProvider, RETRY_DELAY_SECONDS
from commitmend.context import PromptContext
from commitmend.llm import get_provider
from commitmend.llm.base import BaseLLMProvider
from commitmend.llm.configuration import LLMConfiguration
from commitmend.llm.exceptions import (
    GenerationExhaustedError,
    LLMError,
    MissingAPIKeyError,
    UnsupportedProviderError,
)
from commitmend.message import CommitMessage

logger = logging.getLogger(__name__)

RetryCallback = Callable[[int, int, Exception], None]


class GenerationGateway:
    """Generates commit messages through the configured provider.

    Args:
        providers: Provider instances keyed by provider id. When None,
            providers are created on demand with get_provider().
        sleep: Function used to wait between attempts.
    """

    def __init__(
        self,
        providers: Optional[dict[LLMProvider, BaseLLMProvider]] = None,
        sleep: Callable[[float], None] = time.sleep,
        retry_delay: float = RETRY_DELAY_SECONDS,
    ):
        self.providers = providers
        self.sleep = sleep
        self.retry_delay = retry_delay

    def select_provider(self, configuration: LLMConfiguration) -> BaseLLMProvider:
        """Return the provider for the configuration.

        Raises:
            UnsupportedProviderError: If no provider supports it.
        """
        if self.providers is None:
            provider = get_provider(configuration.provider)
        else:
            provider = self.providers.get(configuration.provider)

        if provider is None or not provider.supports(configuration):
            raise UnsupportedProviderError(
                f"No LLM provider supports configuration for {configuration.provider}"
            )
        return provider

    def generate_once(self, context: PromptContext, configuration: LLMConfiguration) -> CommitMessage:
        """Single generation attempt, no retry."""
        return self.select_provider(configuration).generate(context, configuration)

    def execute(
        self,
        context: PromptContext,
        configuration: LLMConfiguration,
        on_retry: Optional[RetryCallback] = None,
    ) -> CommitMessage:
        """Generate a commit message, retrying transient failures.

        Args:
            context: The prompt context.
            configuration: The run's LLM configuration; max_retries bounds
                the number of attempts.
            on_retry: Called as on_retry(attempt, max_retries, error) before
                each retry.

        Returns:
            The first successfully generated CommitMessage.

        Raises:
            UnsupportedProviderError: Immediately, if no provider matches.
            MissingAPIKeyError: Immediately, if the key is missing.
            GenerationExhaustedError: After max_retries failed attempts.
        """
        provider = self.select_provider(configuration)
        max_retries = max(1, configuration.max_retries)
        last_error: Optional[Exception] = None

        for attempt in range(1, max_retries + 1):
            try:
                message = provider.generate(context, configuration)
                if attempt > 1:
                    logger.info("Generated commit message on attempt %d/%d", attempt, max_retries)
                return message
            except (MissingAPIKeyError, UnsupportedProviderError):
                raise
            except LLMError as e:
                last_error = e
                logger.warning("Generation attempt %d/%d failed: %s", attempt, max_retries, e)

            if attempt == max_retries:
                break

            if on_retry is not None:
                try:
                    on_retry(attempt, max_retries, last_error)
                except Exception:
                    logger.exception("Retry callback failed")
            self.sleep(self.retry_delay)

        raise GenerationExhaustedError(attempts=max_retries, last_error=last_error)
