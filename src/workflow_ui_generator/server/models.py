"""Pydantic models for the REST server."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class WorkflowRequest(BaseModel):
    workflow: dict[str, Any]


class WorkflowSummaryResponse(BaseModel):
    total_nodes: int
    node_types: dict[str, int] = Field(default_factory=dict)
    has_connections: bool = False
    is_multi_step: bool = False


class PreviewResponse(BaseModel):
    code: str
    preview: str
    scope: dict[str, Any]
    empty: bool


class ModifyRequest(BaseModel):
    workflow: dict[str, Any]
    code: str
    instruction: str = Field(min_length=1)


class ProjectResponse(BaseModel):
    project_name: str = Field(serialization_alias="projectName")
    files: dict[str, str]


class DownloadRequest(BaseModel):
    """Either a workflow to generate from, or an already generated project."""

    workflow: dict[str, Any] | None = None
    project_name: str | None = Field(default=None, alias="projectName")
    files: dict[str, str] | None = None

    model_config = ConfigDict(populate_by_name=True)


class PublishRequest(BaseModel):
    workflow: dict[str, Any] | None = None
    project_name: str | None = Field(default=None, alias="projectName")
    files: dict[str, str] | None = None

    model_config = ConfigDict(populate_by_name=True)


JobStatus = Literal["queued", "running", "succeeded", "failed", "timed_out", "cancelled"]


class PublishJob(BaseModel):
    job_id: str
    project_name: str
    status: JobStatus
    created_at: str
    updated_at: str

    deployment_id: str | None = None
    deployment_status: str | None = None
    url: str | None = None
    attempts: int = 0
    summary: str | None = None
    error: str | None = None
