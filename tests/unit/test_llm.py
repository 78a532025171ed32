"""Unit tests for the LLM provider layer (OpenAI client mocked)."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from workflow_ui_generator.core.config import LLMConfig
from workflow_ui_generator.llm import LLMFactory
from workflow_ui_generator.llm.openai_provider import OpenAIProvider


def _completion(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def test_openai_provider_requires_api_key() -> None:
    with pytest.raises(ValueError, match="API key"):
        OpenAIProvider(LLMConfig(openai_api_key=None))


def test_generate_sends_single_user_message(llm_config: LLMConfig) -> None:
    client = Mock()
    client.chat.completions.create.return_value = _completion("function App() {}")
    provider = OpenAIProvider(llm_config, client=client)

    result = provider.generate("Build a form", model="preview-model", temperature=0.1)

    assert result == "function App() {}"
    client.chat.completions.create.assert_called_once_with(
        model="preview-model",
        messages=[{"role": "user", "content": "Build a form"}],
        max_tokens=None,
        temperature=0.1,
    )


def test_chat_falls_back_to_configured_defaults(llm_config: LLMConfig) -> None:
    client = Mock()
    client.chat.completions.create.return_value = _completion(None)
    provider = OpenAIProvider(llm_config.model_copy(update={"max_tokens": 2048}), client=client)

    assert provider.chat([{"role": "user", "content": "hi"}]) == ""

    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "app-model"
    assert kwargs["temperature"] == 0.3
    assert kwargs["max_tokens"] == 2048


def test_count_tokens_is_a_character_estimate(llm_config: LLMConfig) -> None:
    provider = OpenAIProvider(llm_config, client=Mock())

    assert provider.count_tokens("x" * 40) == 10


def test_factory_creates_openai_provider(llm_config: LLMConfig) -> None:
    assert isinstance(LLMFactory.create(llm_config), OpenAIProvider)


def test_factory_rejects_unknown_provider(llm_config: LLMConfig) -> None:
    config = llm_config.model_copy(update={"provider": "local"})

    with pytest.raises(ValueError, match="Unsupported LLM provider"):
        LLMFactory.create(config)
