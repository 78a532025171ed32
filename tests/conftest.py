"""Test configuration and fixtures."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

import pytest

from workflow_ui_generator.core.config import (
    GeneratorConfig,
    HostingConfig,
    LLMConfig,
    WorkflowEndpointConfig,
)
from workflow_ui_generator.llm.provider import LLMProvider
from workflow_ui_generator.pipeline.workflow import WorkflowSpec, parse_workflow


class FakeClock:
    """Clock that returns instantly and records every wait."""

    def __init__(self) -> None:
        self.waits: list[float] = []

    def wait(self, seconds: float, cancel_event: threading.Event | None = None) -> bool:
        if cancel_event is not None and cancel_event.is_set():
            return True
        self.waits.append(seconds)
        return False


class ScriptedProvider(LLMProvider):
    """LLM provider that answers from a script and records each call."""

    def __init__(self, responses: list[str] | Callable[[str], str]) -> None:
        self._responses = responses
        self.calls: list[dict[str, Any]] = []

    def generate(
        self,
        prompt: str,
        *,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
        **kwargs: Any,
    ) -> str:
        self.calls.append({"prompt": prompt, "model": model, "temperature": temperature})
        if callable(self._responses):
            return self._responses(prompt)
        return self._responses.pop(0)

    def chat(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
        **kwargs: Any,
    ) -> str:
        return self.generate(messages[-1]["content"], model=model, temperature=temperature)

    def count_tokens(self, text: str) -> int:
        return len(text.split())


@pytest.fixture
def sample_workflow() -> dict[str, Any]:
    """A small n8n export: form trigger -> HTTP request -> code node."""
    return {
        "name": "Lead Capture Flow",
        "nodes": [
            {
                "id": "1",
                "name": "Form",
                "type": "n8n-nodes-base.formTrigger",
                "webhookId": "abc-123",
                "parameters": {"formTitle": "Contact us"},
            },
            {"id": "2", "name": "Enrich", "type": "n8n-nodes-base.httpRequest"},
            {"id": "3", "name": "Score", "type": "n8n-nodes-base.code"},
        ],
        "connections": {
            "Form": {"main": [[{"node": "Enrich", "type": "main", "index": 0}]]},
            "Enrich": {"main": [[{"node": "Score", "type": "main", "index": 0}]]},
        },
    }


@pytest.fixture
def workflow_spec(sample_workflow: dict[str, Any]) -> WorkflowSpec:
    return parse_workflow(sample_workflow)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def llm_config() -> LLMConfig:
    """Provide a test LLM configuration."""
    return LLMConfig(
        provider="openai",
        openai_api_key="test-key",
        preview_model="preview-model",
        app_model="app-model",
    )


@pytest.fixture
def hosting_config() -> HostingConfig:
    """Provide a test hosting configuration."""
    return HostingConfig(token="test-token", poll_interval_seconds=10, max_poll_attempts=30)


@pytest.fixture
def endpoint_config() -> WorkflowEndpointConfig:
    return WorkflowEndpointConfig(webhook_base_url="https://hooks.example.test/webhook")


@pytest.fixture
def generator_config(
    llm_config: LLMConfig,
    hosting_config: HostingConfig,
    endpoint_config: WorkflowEndpointConfig,
) -> GeneratorConfig:
    """Provide a test generator configuration."""
    return GeneratorConfig(
        log_level="DEBUG",
        debug=True,
        llm=llm_config,
        hosting=hosting_config,
        endpoints=endpoint_config,
    )


@pytest.fixture
def scripted_provider() -> type[ScriptedProvider]:
    """Factory for LLM providers that answer from a script."""
    return ScriptedProvider
