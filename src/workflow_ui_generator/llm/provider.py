"""Abstract base class for LLM providers."""

from abc import ABC, abstractmethod
from typing import Any


class LLMProvider(ABC):
    """Interface to the text-generation service.

    Output is untrusted text; callers always run it through extraction.
    """

    @abstractmethod
    def generate(
        self,
        prompt: str,
        *,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
        **kwargs: Any,
    ) -> str:
        """Generate text from a single user prompt.

        Args:
            prompt: The input prompt.
            model: Model override; the provider default when None.
            max_tokens: Maximum tokens to generate.
            temperature: Sampling temperature.
            **kwargs: Additional provider-specific parameters.

        Returns:
            Raw generated text.
        """

    @abstractmethod
    def chat(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
        **kwargs: Any,
    ) -> str:
        """Generate a reply from a list of ``{"role", "content"}`` messages."""

    @abstractmethod
    def count_tokens(self, text: str) -> int:
        """Count the number of tokens in text."""
