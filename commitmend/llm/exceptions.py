"""LLM-related exception classes.

Contains all exception classes for LLM operations:
- LLMError: Base exception for LLM-related errors
- MissingAPIKeyError: Raised when API key is not set
- UnsupportedProviderError: Raised when no provider handles the configuration
- MalformedResponseError: Raised when LLM response cannot be parsed
- GenerationExhaustedError: Raised when every generation attempt failed
"""

from typing import Optional


class LLMError(Exception):
    """Base exception for LLM-related errors."""

    pass


class MissingAPIKeyError(LLMError):
    """Raised when the required API key is not set."""

    pass


class UnsupportedProviderError(LLMError):
    """Raised when no provider implementation supports the configuration."""

    pass


class MalformedResponseError(LLMError):
    """Raised when the LLM response is neither valid JSON nor a commit header."""

    pass


class GenerationExhaustedError(LLMError):
    """Raised when all generation attempts failed.

    Attributes:
        attempts: Number of attempts made.
        last_error: The error raised by the final attempt.
    """

    def __init__(self, attempts: int, last_error: Optional[Exception]):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Failed to generate commit message after {attempts} attempt(s): {last_error}")
