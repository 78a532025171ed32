"""Workflow UI Generator.

Turns an n8n workflow description into:
- a previewable React component
- a downloadable multi-file React project
- a deployment on a hosting provider
"""

__version__ = "0.1.0"

from workflow_ui_generator.core.config import GeneratorConfig

__all__ = ["__version__", "GeneratorConfig"]
