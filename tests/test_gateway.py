"""Tests for commitmend.llm.gateway module."""

import pytest

from commitmend.config import LLMProvider
from commitmend.context import PromptContext
from commitmend.llm import ApiKey, LLMConfiguration
from commitmend.llm.exceptions import (
    GenerationExhaustedError,
    LLMError,
    MalformedResponseError,
    MissingAPIKeyError,
    UnsupportedProviderError,
)
from commitmend.llm.gateway import GenerationGateway
from commitmend.message import CommitMessage

MESSAGE = CommitMessage.from_parts("feat", "add parser")


@pytest.fixture
def configuration():
    """An OpenAI configuration with three attempts."""
    return LLMConfiguration(provider=LLMProvider.OPENAI, api_key=ApiKey("sk-test-key-123456"), max_retries=3)


@pytest.fixture
def sleeps():
    """Records requested sleeps instead of waiting."""
    return []


def _gateway(provider, sleeps):
    return GenerationGateway(providers={provider.provider: provider}, sleep=sleeps.append, retry_delay=1.0)


class TestSelectProvider:
    """Tests for provider selection."""

    def test_selects_from_map(self, make_provider, configuration, sleeps):
        """Test the provider registered for the configuration is used."""
        provider = make_provider([MESSAGE])
        assert _gateway(provider, sleeps).select_provider(configuration) is provider

    def test_missing_provider_raises(self, make_provider, sleeps):
        """Test an unmapped provider raises UnsupportedProviderError."""
        gateway = _gateway(make_provider([MESSAGE]), sleeps)
        with pytest.raises(UnsupportedProviderError):
            gateway.select_provider(LLMConfiguration(provider=LLMProvider.GOOGLE))

    def test_provider_refusing_configuration_raises(self, make_provider, configuration, sleeps):
        """Test a mapped provider that does not support the configuration."""
        provider = make_provider([MESSAGE], provider=LLMProvider.ANTHROPIC)
        gateway = GenerationGateway(providers={LLMProvider.OPENAI: provider}, sleep=sleeps.append)
        with pytest.raises(UnsupportedProviderError):
            gateway.select_provider(configuration)

    def test_default_lookup_uses_get_provider(self, configuration):
        """Test providers are created on demand without a map."""
        from commitmend.llm.openai_provider import OpenAIProvider

        assert isinstance(GenerationGateway().select_provider(configuration), OpenAIProvider)


class TestExecute:
    """Tests for GenerationGateway.execute."""

    def test_first_attempt_succeeds(self, make_provider, configuration, sleeps):
        """Test no retry happens on success."""
        provider = make_provider([MESSAGE])
        result = _gateway(provider, sleeps).execute(PromptContext(), configuration)

        assert result == MESSAGE
        assert len(provider.calls) == 1
        assert sleeps == []

    def test_retries_until_success(self, make_provider, configuration, sleeps):
        """Test transient failures are retried with a pause in between."""
        provider = make_provider([LLMError("timeout"), MalformedResponseError("junk"), MESSAGE])
        retries = []

        result = _gateway(provider, sleeps).execute(
            PromptContext(), configuration, on_retry=lambda a, m, e: retries.append((a, m, str(e)))
        )

        assert result == MESSAGE
        assert len(provider.calls) == 3
        assert retries == [(1, 3, "timeout"), (2, 3, "junk")]
        assert sleeps == [1.0, 1.0]

    def test_exhausted(self, make_provider, configuration, sleeps):
        """Test every attempt failing raises GenerationExhaustedError."""
        provider = make_provider([LLMError("boom")])

        with pytest.raises(GenerationExhaustedError) as exc_info:
            _gateway(provider, sleeps).execute(PromptContext(), configuration)

        assert exc_info.value.attempts == 3
        assert str(exc_info.value.last_error) == "boom"
        assert "after 3 attempt(s)" in str(exc_info.value)
        assert len(provider.calls) == 3
        assert sleeps == [1.0, 1.0]

    def test_single_attempt_does_not_sleep(self, make_provider, configuration, sleeps):
        """Test max_retries=1 means one call and no pause."""
        provider = make_provider([LLMError("boom")])
        config = LLMConfiguration(provider=LLMProvider.OPENAI, api_key=configuration.api_key, max_retries=1)

        with pytest.raises(GenerationExhaustedError):
            _gateway(provider, sleeps).execute(PromptContext(), config)
        assert len(provider.calls) == 1
        assert sleeps == []

    def test_missing_key_is_not_retried(self, make_provider, configuration, sleeps):
        """Test MissingAPIKeyError propagates immediately."""
        provider = make_provider([MissingAPIKeyError("no key")])

        with pytest.raises(MissingAPIKeyError):
            _gateway(provider, sleeps).execute(PromptContext(), configuration)
        assert len(provider.calls) == 1

    def test_unexpected_exceptions_propagate(self, make_provider, configuration, sleeps):
        """Test non-LLM errors are not retried."""
        provider = make_provider([KeyError("bug")])

        with pytest.raises(KeyError):
            _gateway(provider, sleeps).execute(PromptContext(), configuration)
        assert len(provider.calls) == 1

    def test_failing_callback_does_not_stop_retries(self, make_provider, configuration, sleeps):
        """Test an exception in on_retry is logged and ignored."""
        provider = make_provider([LLMError("timeout"), MESSAGE])

        def broken_callback(attempt, max_retries, error):
            raise RuntimeError("display broke")

        result = _gateway(provider, sleeps).execute(PromptContext(), configuration, on_retry=broken_callback)
        assert result == MESSAGE
