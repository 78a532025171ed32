"""Factory for creating LLM providers."""

import logging

from workflow_ui_generator.core.config import LLMConfig
from workflow_ui_generator.llm.openai_provider import OpenAIProvider
from workflow_ui_generator.llm.provider import LLMProvider

logger = logging.getLogger(__name__)


class LLMFactory:
    """Factory for creating LLM provider instances."""

    @staticmethod
    def create(config: LLMConfig) -> LLMProvider:
        """Create an LLM provider based on configuration.

        Raises:
            ValueError: If provider type is not supported or misconfigured.
        """
        logger.info("Creating LLM provider", extra={"provider": config.provider})

        if config.provider == "openai":
            return OpenAIProvider(config)
        raise ValueError(f"Unsupported LLM provider: {config.provider}")
