"""FastAPI app factory.

Endpoints are thin wrappers over ``WorkflowAppBuilder``.
"""

from __future__ import annotations

import logging
from typing import Any, NoReturn

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

from workflow_ui_generator import __version__
from workflow_ui_generator.core.builder import WorkflowAppBuilder
from workflow_ui_generator.core.config import GeneratorConfig
from workflow_ui_generator.pipeline.assembly import (
    InvalidProjectPath,
    ProjectTree,
    project_id_from_name,
)
from workflow_ui_generator.pipeline.errors import (
    ArchiveError,
    GenerationError,
    MalformedWorkflowError,
)
from workflow_ui_generator.pipeline.packager import ARCHIVE_MEDIA_TYPE, pack
from workflow_ui_generator.server.config import ServerSettings
from workflow_ui_generator.server.job_store import JobStore
from workflow_ui_generator.server.models import (
    DownloadRequest,
    ModifyRequest,
    PreviewResponse,
    ProjectResponse,
    PublishJob,
    PublishRequest,
    WorkflowRequest,
    WorkflowSummaryResponse,
)
from workflow_ui_generator.server.publish_runner import PublishRunner

logger = logging.getLogger(__name__)


def _raise_http(exc: Exception) -> NoReturn:
    if isinstance(exc, MalformedWorkflowError):
        raise HTTPException(
            status_code=400, detail={"field": exc.field, "message": exc.message}
        ) from exc
    if isinstance(exc, InvalidProjectPath):
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if isinstance(exc, GenerationError):
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    if isinstance(exc, ArchiveError):
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    if isinstance(exc, ValueError):
        # Missing credentials for the LLM or hosting provider.
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    raise exc


def _tree_from_request(
    builder: WorkflowAppBuilder,
    *,
    workflow: dict[str, Any] | None,
    project_name: str | None,
    files: dict[str, str] | None,
) -> ProjectTree:
    if files:
        return ProjectTree.from_files(project_id_from_name(project_name or ""), files)
    if workflow is not None:
        return builder.build_project(workflow)
    raise HTTPException(status_code=400, detail="Provide either 'workflow' or 'files'")


def create_app(
    *,
    settings: ServerSettings | None = None,
    builder: WorkflowAppBuilder | None = None,
) -> FastAPI:
    settings = settings or ServerSettings()

    app = FastAPI(
        title="Workflow UI Generator",
        version=__version__,
        description="Generate, download and publish React UIs for n8n workflows.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.state.settings = settings
    app.state.builder = builder or WorkflowAppBuilder(GeneratorConfig())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.parsed_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    job_store = JobStore(settings.jobs_state_file)
    runner = PublishRunner(job_store=job_store)
    app.state.publish_runner = runner

    def _builder() -> WorkflowAppBuilder:
        return app.state.builder

    @app.get("/api/v1/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/v1/workflows/analyze", response_model=WorkflowSummaryResponse)
    def analyze_workflow(req: WorkflowRequest) -> WorkflowSummaryResponse:
        try:
            summary = _builder().analyze(req.workflow)
        except MalformedWorkflowError as e:
            _raise_http(e)
        return WorkflowSummaryResponse(
            total_nodes=summary.total_nodes,
            node_types=summary.node_types,
            has_connections=summary.has_connections,
            is_multi_step=summary.is_multi_step,
        )

    @app.post("/api/v1/generate-ui", response_model=PreviewResponse)
    def generate_ui(req: WorkflowRequest) -> PreviewResponse:
        try:
            result = _builder().preview(req.workflow)
        except (MalformedWorkflowError, GenerationError, ValueError) as e:
            _raise_http(e)
        return PreviewResponse(
            code=result.code,
            preview=result.snippet.code,
            scope=result.snippet.scope,
            empty=result.snippet.is_empty,
        )

    @app.post("/api/v1/generate-ui/modify", response_model=PreviewResponse)
    def modify_ui(req: ModifyRequest) -> PreviewResponse:
        """Apply one instruction to ``req.code``.

        The server keeps no modification history: every request starts a fresh
        session from the code it carries, so callers own the revision log.
        """
        builder = _builder()
        try:
            session = builder.modification_session(req.workflow, req.code)
            entry = session.modify(req.instruction)
        except (MalformedWorkflowError, GenerationError, ValueError) as e:
            _raise_http(e)
        result = builder.preview_snippet(req.workflow, entry.component)
        return PreviewResponse(
            code=entry.component,
            preview=result.code,
            scope=result.scope,
            empty=result.is_empty,
        )

    @app.post("/api/v1/generate-app", response_model=ProjectResponse)
    def generate_app(req: WorkflowRequest) -> ProjectResponse:
        try:
            tree = _builder().build_project(req.workflow)
        except (MalformedWorkflowError, GenerationError, ValueError) as e:
            _raise_http(e)
        return ProjectResponse(project_name=tree.name, files=dict(tree.files))

    @app.post("/api/v1/download")
    def download(req: DownloadRequest) -> Response:
        try:
            tree = _tree_from_request(
                _builder(),
                workflow=req.workflow,
                project_name=req.project_name,
                files=req.files,
            )
            archive = pack(tree)
        except (MalformedWorkflowError, GenerationError, ArchiveError, ValueError) as e:
            _raise_http(e)
        return Response(
            content=archive.data,
            media_type=ARCHIVE_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{archive.filename}"'},
        )

    @app.post("/api/v1/publish", response_model=PublishJob, status_code=202)
    def publish(req: PublishRequest) -> PublishJob:
        builder = _builder()
        try:
            tree = _tree_from_request(
                builder,
                workflow=req.workflow,
                project_name=req.project_name,
                files=req.files,
            )
            job_id = runner.start(tree=tree, builder=builder)
        except (MalformedWorkflowError, GenerationError, ValueError) as e:
            _raise_http(e)

        job = job_store.get(job_id)
        if job is None:
            raise HTTPException(status_code=500, detail="Job creation failed")
        return PublishJob.model_validate(job.model_dump(mode="json"))

    @app.get("/api/v1/publish/{job_id}", response_model=PublishJob)
    def get_publish_job(job_id: str) -> PublishJob:
        job = job_store.get(job_id)
        if job is None:
            raise HTTPException(status_code=404, detail="Job not found")
        return PublishJob.model_validate(job.model_dump(mode="json"))

    @app.post("/api/v1/publish/{job_id}/cancel", response_model=PublishJob)
    def cancel_publish_job(job_id: str) -> PublishJob:
        job = job_store.get(job_id)
        if job is None:
            raise HTTPException(status_code=404, detail="Job not found")
        if not runner.cancel(job_id):
            raise HTTPException(status_code=409, detail=f"Job is not running ({job.status})")
        logger.info("Publish job cancellation requested", extra={"job_id": job_id})
        return PublishJob.model_validate(job.model_dump(mode="json"))

    return app
