"""Per-run LLM configuration value objects.

Contains:
- ApiKey: Non-empty API key with a masked representation for display
- LLMConfiguration: Provider, key, mode, model and retry budgets for one run
"""

from dataclasses import dataclass, replace
from typing import Optional

from commitmend.config import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_MODELS,
    DEFAULT_VALIDATION_MAX_RETRIES,
    CommitMode,
    LLMProvider,
)

MASK_VISIBLE_CHARS = 4


@dataclass(frozen=True)
class ApiKey:
    """An API key. Never persisted; resolved per run."""

    value: str

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise ValueError("API key cannot be empty")
        object.__setattr__(self, "value", self.value.strip())

    def masked(self) -> str:
        """Return the key with everything but the edges hidden."""
        if len(self.value) <= MASK_VISIBLE_CHARS * 2:
            return "****"
        return f"{self.value[:MASK_VISIBLE_CHARS]}...{self.value[-MASK_VISIBLE_CHARS:]}"

    def __repr__(self) -> str:
        return f"ApiKey({self.masked()!r})"


@dataclass(frozen=True)
class LLMConfiguration:
    """Immutable LLM settings threaded through one CLI invocation.

    Attributes:
        provider: The LLM provider to call.
        api_key: The key for the provider, or None when it still has to be
            prompted for (or is not needed, as in manual mode).
        mode: Auto (AI-powered) or manual commit entry.
        model: Model id; the provider default is used when None.
        max_retries: Generation attempts before giving up.
        validation_max_retries: Budget of the validate/repair loop.
    """

    provider: LLMProvider
    api_key: Optional[ApiKey] = None
    mode: CommitMode = CommitMode.AUTO
    model: Optional[str] = None
    max_retries: int = DEFAULT_MAX_RETRIES
    validation_max_retries: int = DEFAULT_VALIDATION_MAX_RETRIES

    def is_auto_mode(self) -> bool:
        return self.mode == CommitMode.AUTO

    def is_manual_mode(self) -> bool:
        return self.mode == CommitMode.MANUAL

    def effective_model(self) -> str:
        """The configured model, or the provider's default."""
        return self.model or DEFAULT_MODELS[self.provider]

    def with_mode(self, mode: CommitMode) -> "LLMConfiguration":
        return replace(self, mode=mode)

    def with_model(self, model: str) -> "LLMConfiguration":
        return replace(self, model=model)

    def with_api_key(self, api_key: ApiKey) -> "LLMConfiguration":
        return replace(self, api_key=api_key)
