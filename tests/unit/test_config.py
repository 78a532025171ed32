"""Unit tests for configuration."""

import pytest

from workflow_ui_generator.core.config import (
    GeneratorConfig,
    HostingConfig,
    LLMConfig,
    WorkflowEndpointConfig,
)
from workflow_ui_generator.pipeline.workflow import DEFAULT_WEBHOOK_NODE_TYPES


def test_llm_config_defaults() -> None:
    """Test LLM config default values."""
    config = LLMConfig(openai_api_key="test-key")

    assert config.provider == "openai"
    assert config.preview_model == "gpt-4o-mini"
    assert config.app_model == "gpt-4"
    assert config.temperature == 0.3
    assert config.max_tokens is None


def test_llm_config_rejects_out_of_range_temperature() -> None:
    with pytest.raises(ValueError):
        LLMConfig(temperature=3.5)


def test_hosting_config_defaults() -> None:
    """Test hosting config default values."""
    config = HostingConfig(token="test-token")

    assert config.token == "test-token"
    assert config.api_base_url == "https://api.vercel.com"
    assert config.framework == "create-react-app"
    assert config.output_directory == "build"
    assert config.poll_interval_seconds == 10.0
    assert config.max_poll_attempts == 30
    assert config.url_prefix == "https://"


def test_hosting_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WORKFLOW_UI_HOSTING_TOKEN", "env-token")
    monkeypatch.setenv("WORKFLOW_UI_HOSTING_MAX_POLL_ATTEMPTS", "5")

    config = GeneratorConfig()

    assert config.hosting.token == "env-token"
    assert config.hosting.max_poll_attempts == 5


def test_endpoint_config_defaults() -> None:
    config = WorkflowEndpointConfig()

    assert config.webhook_node_types == DEFAULT_WEBHOOK_NODE_TYPES


def test_generator_config_composition() -> None:
    """Test generator config with nested configs."""
    config = GeneratorConfig(
        log_level="DEBUG",
        debug=True,
    )

    assert config.log_level == "DEBUG"
    assert config.debug is True
    assert isinstance(config.llm, LLMConfig)
    assert isinstance(config.hosting, HostingConfig)
    assert isinstance(config.endpoints, WorkflowEndpointConfig)
