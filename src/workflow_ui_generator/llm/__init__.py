"""LLM package initialization."""

from workflow_ui_generator.llm.factory import LLMFactory
from workflow_ui_generator.llm.provider import LLMProvider

__all__ = [
    "LLMFactory",
    "LLMProvider",
]
