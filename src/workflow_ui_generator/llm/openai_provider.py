"""OpenAI LLM provider implementation."""

import logging
from typing import Any

from openai import OpenAI

from workflow_ui_generator.core.config import LLMConfig
from workflow_ui_generator.llm.provider import LLMProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """OpenAI chat-completions provider."""

    def __init__(self, config: LLMConfig, client: OpenAI | None = None) -> None:
        """Initialize the OpenAI provider.

        Args:
            config: LLM configuration.
            client: Pre-built client (tests); created from the API key otherwise.

        Raises:
            ValueError: If no client is given and the API key is missing.
        """
        if client is None and not config.openai_api_key:
            raise ValueError("OpenAI API key is required")

        self.config = config
        self.client = client or OpenAI(api_key=config.openai_api_key)
        self.model = config.app_model
        self.temperature = config.temperature

        logger.info("OpenAI provider initialized", extra={"model": self.model})

    def generate(
        self,
        prompt: str,
        *,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
        **kwargs: Any,
    ) -> str:
        return self.chat(
            [{"role": "user", "content": prompt}],
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            **kwargs,
        )

    def chat(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
        **kwargs: Any,
    ) -> str:
        chosen = model or self.model
        temp = temperature if temperature is not None else self.temperature
        limit = max_tokens if max_tokens is not None else self.config.max_tokens

        logger.debug(
            "Requesting chat completion",
            extra={"model": chosen, "message_count": len(messages)},
        )

        response = self.client.chat.completions.create(
            model=chosen,
            messages=messages,  # type: ignore[arg-type]
            max_tokens=limit,
            temperature=temp,
            **kwargs,
        )

        content = response.choices[0].message.content or ""
        logger.debug("Completion received", extra={"model": chosen, "chars": len(content)})
        return content

    def count_tokens(self, text: str) -> int:
        # Rough approximation: 1 token ≈ 4 characters
        return len(text) // 4
