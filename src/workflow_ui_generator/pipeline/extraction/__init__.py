"""Heuristic recovery of a component from generated text."""

from workflow_ui_generator.pipeline.extraction.passes import detect_component_name
from workflow_ui_generator.pipeline.extraction.pipeline import (
    ExtractionMode,
    ExtractionOptions,
    ExtractionPass,
    build_passes,
    normalize,
)

__all__ = [
    "ExtractionMode",
    "ExtractionOptions",
    "ExtractionPass",
    "build_passes",
    "detect_component_name",
    "normalize",
]
