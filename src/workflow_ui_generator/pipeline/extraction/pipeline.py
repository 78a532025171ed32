"""Mode-driven composition of the extraction passes."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from types import MappingProxyType

from workflow_ui_generator.pipeline.extraction import passes

logger = logging.getLogger(__name__)

PREVIEW_RESERVED_NAMES: Mapping[str, str] = MappingProxyType({"App": "WorkflowApp"})


class ExtractionMode(str, Enum):
    PREVIEW = "preview"
    PACKAGING = "packaging"


@dataclass(frozen=True, slots=True)
class ExtractionPass:
    tag: str
    apply: Callable[[str], str]


@dataclass(frozen=True, slots=True)
class ExtractionOptions:
    """Knobs shared by the passes.

    ``reserved_names`` only applies in preview mode, where the host owns the
    rendering root.
    """

    reserved_names: Mapping[str, str] = field(default_factory=lambda: PREVIEW_RESERVED_NAMES)
    prose_line_threshold: int = passes.PROSE_LINE_THRESHOLD
    fallback_name: str = passes.FALLBACK_COMPONENT_NAME


def build_passes(
    mode: ExtractionMode, options: ExtractionOptions | None = None
) -> list[ExtractionPass]:
    opts = options or ExtractionOptions()

    if mode is ExtractionMode.PREVIEW:
        return [
            ExtractionPass("fence-strip", passes.strip_fences),
            ExtractionPass("boilerplate-strip", passes.strip_boilerplate),
            ExtractionPass("definition-isolate", passes.isolate_definition),
            ExtractionPass("rename", partial(passes.rename_reserved, reserved=opts.reserved_names)),
            ExtractionPass(
                "mount-ensure", partial(passes.ensure_mount, fallback_name=opts.fallback_name)
            ),
        ]

    return [
        ExtractionPass("fence-strip", passes.strip_fences),
        ExtractionPass(
            "definition-isolate", partial(passes.isolate_definition, keep_module_frame=True)
        ),
        ExtractionPass(
            "prose-filter", partial(passes.filter_prose, threshold=opts.prose_line_threshold)
        ),
        ExtractionPass(
            "wrap-complete", partial(passes.complete_module, fallback_name=opts.fallback_name)
        ),
    ]


def run_passes(text: str, pipeline: list[ExtractionPass]) -> str:
    """Apply ``pipeline`` in order. A failing pass is skipped, never raised."""

    current = text
    for step in pipeline:
        try:
            current = step.apply(current)
        except Exception:
            logger.exception("Extraction pass failed; keeping previous text", extra={"tag": step.tag})
    return current.strip()


def normalize(
    raw: str | None,
    mode: ExtractionMode = ExtractionMode.PACKAGING,
    options: ExtractionOptions | None = None,
) -> str:
    """Recover a single self-contained component from generated text.

    Never raises. An empty string means nothing usable was found and callers
    should present an explicit empty state.
    """

    if not isinstance(raw, str) or not raw.strip():
        return ""

    result = run_passes(raw, build_passes(mode, options))
    if not result:
        logger.warning(
            "Normalization produced an empty component",
            extra={"mode": mode.value, "raw_length": len(raw)},
        )
    return result
