"""Facade wiring configuration, generation, packaging and publishing."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from workflow_ui_generator.core.config import GeneratorConfig
from workflow_ui_generator.llm.factory import LLMFactory
from workflow_ui_generator.llm.provider import LLMProvider
from workflow_ui_generator.pipeline.assembly import ProjectTree
from workflow_ui_generator.pipeline.extraction import ExtractionMode
from workflow_ui_generator.pipeline.generation import CodeGenerator
from workflow_ui_generator.pipeline.packager import Archive, pack
from workflow_ui_generator.pipeline.preview import CapabilitySet, EvaluableSnippet, for_preview
from workflow_ui_generator.pipeline.publish import (
    Clock,
    DeploymentRecord,
    HostingClient,
    HostingTarget,
    PublishService,
)
from workflow_ui_generator.pipeline.publish.service import RecordListener
from workflow_ui_generator.pipeline.session import ModificationSession
from workflow_ui_generator.pipeline.workflow import (
    WorkflowSpec,
    WorkflowSummary,
    analyze_workflow,
    parse_workflow,
)

logger = logging.getLogger(__name__)

WorkflowInput = str | Mapping[str, Any] | WorkflowSpec


@dataclass(frozen=True, slots=True)
class PreviewResult:
    spec: WorkflowSpec
    code: str
    snippet: EvaluableSnippet


class WorkflowAppBuilder:
    """Turns a workflow description into previews, projects, archives and deployments.

    Workflow input is parsed (and rejected when malformed) before any
    generation call. The LLM provider and hosting client are created lazily
    so that ``analyze`` works without credentials.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        *,
        provider: LLMProvider | None = None,
        hosting_client: HostingClient | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self._provider = provider
        self._hosting_client = hosting_client
        self._clock = clock
        self._generator: CodeGenerator | None = None

    @property
    def generator(self) -> CodeGenerator:
        if self._generator is None:
            provider = self._provider or LLMFactory.create(self.config.llm)
            self._generator = CodeGenerator(
                provider=provider,
                config=self.config.llm,
                endpoints=self.config.endpoints,
            )
        return self._generator

    @property
    def hosting_client(self) -> HostingClient:
        if self._hosting_client is None:
            hosting = self.config.hosting
            if not hosting.token:
                raise ValueError("Hosting token is required (WORKFLOW_UI_HOSTING_TOKEN)")
            self._hosting_client = HostingClient(
                token=hosting.token,
                base_url=hosting.api_base_url,
                team_id=hosting.team_id,
                timeout_seconds=hosting.request_timeout_seconds,
            )
        return self._hosting_client

    def hosting_target(self) -> HostingTarget:
        return HostingTarget.from_config(self.config.hosting)

    def analyze(self, workflow: WorkflowInput) -> WorkflowSummary:
        return analyze_workflow(parse_workflow(workflow))

    def preview(self, workflow: WorkflowInput) -> PreviewResult:
        spec = parse_workflow(workflow)
        code = self.generator.generate_preview(spec)
        return PreviewResult(spec=spec, code=code, snippet=self.preview_snippet(spec, code))

    def preview_snippet(self, workflow: WorkflowInput, code: str) -> EvaluableSnippet:
        return for_preview(code, CapabilitySet(workflow=parse_workflow(workflow)))

    def build_project(self, workflow: WorkflowInput) -> ProjectTree:
        spec = parse_workflow(workflow)
        tree = self.generator.build_project(spec)
        logger.info(
            "Project generated",
            extra={"workflow": spec.name, "project_id": tree.name, "file_count": len(tree)},
        )
        return tree

    def package(self, workflow: WorkflowInput) -> Archive:
        return pack(self.build_project(workflow))

    def publish_service(self, on_update: RecordListener | None = None) -> PublishService:
        return PublishService(client=self.hosting_client, clock=self._clock, on_update=on_update)

    def publish(
        self,
        tree: ProjectTree,
        *,
        cancel_event: threading.Event | None = None,
        on_update: RecordListener | None = None,
    ) -> DeploymentRecord:
        service = self.publish_service(on_update)
        return service.publish(tree, self.hosting_target(), cancel_event=cancel_event)

    def modification_session(
        self,
        workflow: WorkflowInput,
        initial: str,
        mode: ExtractionMode = ExtractionMode.PREVIEW,
    ) -> ModificationSession:
        return ModificationSession(
            generator=self.generator,
            spec=parse_workflow(workflow),
            initial=initial,
            mode=mode,
        )

    def close(self) -> None:
        if self._hosting_client is not None:
            self._hosting_client.close()
