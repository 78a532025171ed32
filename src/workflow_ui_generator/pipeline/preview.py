"""Preview adapter: package a component for an external sandboxed evaluator.

This module never executes generated code. It produces the snippet plus a
JSON-serialisable description of the scope the evaluator must inject.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from workflow_ui_generator.pipeline.extraction.pipeline import (
    ExtractionMode,
    ExtractionOptions,
    build_passes,
    run_passes,
)
from workflow_ui_generator.pipeline.workflow import WorkflowSpec

logger = logging.getLogger(__name__)

PREVIEW_PRIMITIVES: tuple[str, ...] = ("useState", "useEffect", "useMemo")
PREVIEW_PASS_TAGS: frozenset[str] = frozenset({"boilerplate-strip", "rename", "mount-ensure"})

_FORCED_HEADERS: Mapping[str, str] = MappingProxyType({"Content-Type": "application/json"})


@dataclass(frozen=True, slots=True)
class NetworkCapability:
    """The only network primitive generated code receives.

    Transport semantics are fixed here; whatever the generated code passes
    for the content type or request mode is overridden.
    """

    headers: Mapping[str, str] = field(default_factory=lambda: _FORCED_HEADERS)
    mode: str = "cors"

    def build_request(self, url: str, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        request: dict[str, Any] = dict(options or {})
        caller_headers = request.get("headers") or {}
        if not isinstance(caller_headers, Mapping):
            caller_headers = {}

        forced = {key.lower() for key in self.headers}
        headers = {k: v for k, v in caller_headers.items() if str(k).lower() not in forced}
        headers.update(self.headers)

        request["url"] = url
        request["headers"] = headers
        request["mode"] = self.mode
        return request

    def describe(self) -> dict[str, Any]:
        return {"headers": dict(self.headers), "mode": self.mode}


@dataclass(frozen=True, slots=True)
class CapabilitySet:
    workflow: WorkflowSpec
    primitives: tuple[str, ...] = PREVIEW_PRIMITIVES
    network: NetworkCapability = field(default_factory=NetworkCapability)

    def to_scope(self) -> dict[str, Any]:
        return {
            "primitives": list(self.primitives),
            "workflow": self.workflow.model_dump(mode="json", by_alias=True, exclude_none=True),
            "fetch": self.network.describe(),
        }


@dataclass(frozen=True, slots=True)
class EvaluableSnippet:
    code: str
    scope: dict[str, Any]

    @property
    def is_empty(self) -> bool:
        return not self.code.strip()


def for_preview(
    text: str, bindings: CapabilitySet, options: ExtractionOptions | None = None
) -> EvaluableSnippet:
    """Make ``text`` evaluable inside the sandbox described by ``bindings``."""

    steps = [
        step
        for step in build_passes(ExtractionMode.PREVIEW, options)
        if step.tag in PREVIEW_PASS_TAGS
    ]
    code = run_passes(text or "", steps)
    if not code:
        logger.info("Nothing to preview", extra={"workflow": bindings.workflow.name})
    return EvaluableSnippet(code=code, scope=bindings.to_scope())
