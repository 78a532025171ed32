"""Generation service: prompts -> LLM -> NormalizedComponent."""

from __future__ import annotations

import logging
from datetime import datetime

from workflow_ui_generator.core.config import LLMConfig, WorkflowEndpointConfig
from workflow_ui_generator.llm.provider import LLMProvider
from workflow_ui_generator.pipeline import prompts
from workflow_ui_generator.pipeline.assembly import (
    ProjectTree,
    assemble,
    component_name_for_node_type,
)
from workflow_ui_generator.pipeline.errors import GenerationError
from workflow_ui_generator.pipeline.extraction import ExtractionMode, ExtractionOptions, normalize
from workflow_ui_generator.pipeline.workflow import WorkflowNode, WorkflowSpec, resolve_webhook_url

logger = logging.getLogger(__name__)


class CodeGenerator:
    """Runs every generation request through the extraction pipeline.

    Provider failures surface as a single ``GenerationError``; nothing is
    retried here. An empty normalized result is returned as-is.
    """

    def __init__(
        self,
        *,
        provider: LLMProvider,
        config: LLMConfig | None = None,
        endpoints: WorkflowEndpointConfig | None = None,
        extraction_options: ExtractionOptions | None = None,
    ) -> None:
        self._provider = provider
        self._config = config or LLMConfig()
        self._endpoints = endpoints or WorkflowEndpointConfig()
        self._options = extraction_options

    def webhook_url(self, spec: WorkflowSpec) -> str | None:
        return resolve_webhook_url(
            spec,
            self._endpoints.webhook_base_url,
            self._endpoints.webhook_node_types,
        )

    def _complete(self, prompt: str, *, model: str, purpose: str) -> str:
        logger.debug(
            "Requesting completion",
            extra={
                "purpose": purpose,
                "model": model,
                "prompt_tokens": self._provider.count_tokens(prompt),
            },
        )
        try:
            return self._provider.generate(
                prompt,
                model=model,
                max_tokens=self._config.max_tokens,
                temperature=self._config.temperature,
            )
        except Exception as exc:
            logger.error(
                "Text generation failed",
                extra={"purpose": purpose, "model": model, "error": str(exc)},
            )
            raise GenerationError(f"Text generation failed ({purpose}): {exc}") from exc

    def generate_preview(self, spec: WorkflowSpec) -> str:
        raw = self._complete(
            prompts.build_preview_prompt(spec, self.webhook_url(spec)),
            model=self._config.preview_model,
            purpose="preview",
        )
        return normalize(raw, ExtractionMode.PREVIEW, self._options)

    def generate_app_component(self, spec: WorkflowSpec) -> str:
        raw = self._complete(
            prompts.build_app_prompt(spec, self.webhook_url(spec)),
            model=self._config.app_model,
            purpose="app",
        )
        return normalize(raw, ExtractionMode.PACKAGING, self._options)

    def generate_node_components(self, spec: WorkflowSpec) -> list[tuple[str, str]]:
        """One component per distinct node type, in first-seen order."""

        by_type: dict[str, list[WorkflowNode]] = {}
        for node in spec.nodes:
            by_type.setdefault(node.type, []).append(node)

        components: list[tuple[str, str]] = []
        for node_type, nodes in by_type.items():
            name = component_name_for_node_type(node_type)
            raw = self._complete(
                prompts.build_node_component_prompt(node_type, name, nodes),
                model=self._config.app_model,
                purpose=f"component:{name}",
            )
            components.append((name, normalize(raw, ExtractionMode.PACKAGING, self._options)))
        return components

    def build_project(
        self, spec: WorkflowSpec, *, generated_at: datetime | None = None
    ) -> ProjectTree:
        main_component = self.generate_app_component(spec)
        node_components = self.generate_node_components(spec)
        return assemble(spec, main_component, node_components, generated_at=generated_at)

    def modify_component(
        self,
        spec: WorkflowSpec,
        current: str,
        instruction: str,
        mode: ExtractionMode = ExtractionMode.PREVIEW,
    ) -> str:
        model = (
            self._config.preview_model
            if mode is ExtractionMode.PREVIEW
            else self._config.app_model
        )
        raw = self._complete(
            prompts.build_modification_prompt(spec, current, instruction),
            model=model,
            purpose="modification",
        )
        return normalize(raw, mode, self._options)
