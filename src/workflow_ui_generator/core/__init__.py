"""Core package initialization."""

from workflow_ui_generator.core.builder import PreviewResult, WorkflowAppBuilder
from workflow_ui_generator.core.config import GeneratorConfig

__all__ = [
    "GeneratorConfig",
    "PreviewResult",
    "WorkflowAppBuilder",
]
