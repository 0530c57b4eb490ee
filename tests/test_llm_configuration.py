"""Tests for commitmend.llm.configuration module."""

import pytest

from commitmend.config import CommitMode, LLMProvider
from commitmend.llm import ApiKey, LLMConfiguration


class TestApiKey:
    """Tests for ApiKey."""

    def test_masked(self):
        """Test only the edges of a long key are shown."""
        assert ApiKey("sk-abcdefghijkl-wxyz").masked() == "sk-a...wxyz"

    def test_short_key_fully_masked(self):
        """Test short keys are hidden completely."""
        assert ApiKey("12345678").masked() == "****"

    def test_repr_does_not_leak(self):
        """Test repr shows the masked key."""
        assert "abcdefghijkl" not in repr(ApiKey("sk-abcdefghijkl-wxyz"))

    @pytest.mark.parametrize("value", ["", "   "])
    def test_empty_rejected(self, value):
        """Test blank keys are invalid."""
        with pytest.raises(ValueError):
            ApiKey(value)


class TestLLMConfiguration:
    """Tests for LLMConfiguration."""

    def test_defaults(self):
        """Test default mode, retries and model."""
        configuration = LLMConfiguration(provider=LLMProvider.GOOGLE)
        assert configuration.is_auto_mode()
        assert configuration.max_retries == 3
        assert configuration.validation_max_retries == 3
        assert configuration.effective_model() == "gemini-2.0-flash"

    def test_with_helpers_return_copies(self):
        """Test with_* derive new configurations."""
        base = LLMConfiguration(provider=LLMProvider.OPENAI)
        updated = base.with_mode(CommitMode.MANUAL).with_model("gpt-4.1").with_api_key(ApiKey("sk-key-00000000"))

        assert updated.is_manual_mode()
        assert updated.effective_model() == "gpt-4.1"
        assert updated.api_key.value == "sk-key-00000000"
        assert base.is_auto_mode()
        assert base.api_key is None
