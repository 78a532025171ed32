"""Core configuration for the generator."""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from workflow_ui_generator.pipeline.logging import configure_logging
from workflow_ui_generator.pipeline.workflow import DEFAULT_WEBHOOK_NODE_TYPES


class LLMConfig(BaseSettings):
    """Configuration for the text-generation service."""

    provider: Literal["openai"] = Field(
        default="openai",
        description="LLM provider to use",
    )
    openai_api_key: str | None = Field(
        default=None,
        description="OpenAI API key",
    )
    preview_model: str = Field(
        default="gpt-4o-mini",
        description="Model used for single-component previews",
    )
    app_model: str = Field(
        default="gpt-4",
        description="Model used for packaged app and node components",
    )
    temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        description="Sampling temperature",
    )
    max_tokens: int | None = Field(
        default=None,
        gt=0,
        description="Completion token limit (None = provider default)",
    )

    model_config = SettingsConfigDict(
        env_prefix="WORKFLOW_UI_LLM_",
        env_file=".env",
        extra="ignore",
    )


class HostingConfig(BaseSettings):
    """Configuration for the hosting provider used by publish."""

    provider: Literal["vercel"] = Field(default="vercel")
    token: str | None = Field(
        default=None,
        description="Bearer token for the hosting API",
    )
    api_base_url: str = Field(default="https://api.vercel.com")
    team_id: str | None = Field(default=None)

    framework: str = Field(default="create-react-app")
    build_command: str = Field(default="npm run build")
    output_directory: str = Field(default="build")
    install_command: str = Field(default="npm install")
    target: str = Field(default="production")

    poll_interval_seconds: float = Field(default=10.0, ge=0.0)
    max_poll_attempts: int = Field(default=30, ge=1)
    request_timeout_seconds: float = Field(default=30.0, gt=0.0)
    url_prefix: str = Field(
        default="https://",
        description="Prefix joined onto the provider-assigned hostname",
    )

    model_config = SettingsConfigDict(
        env_prefix="WORKFLOW_UI_HOSTING_",
        env_file=".env",
        extra="ignore",
    )


class WorkflowEndpointConfig(BaseSettings):
    """Where the generated apps send form submissions."""

    webhook_base_url: str | None = Field(
        default=None,
        description="Base URL of the workflow engine's webhook endpoint",
    )
    webhook_node_types: tuple[str, ...] = Field(default=DEFAULT_WEBHOOK_NODE_TYPES)

    model_config = SettingsConfigDict(
        env_prefix="WORKFLOW_UI_N8N_",
        env_file=".env",
        extra="ignore",
    )


class GeneratorConfig(BaseSettings):
    """Main configuration for the generator."""

    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    llm: LLMConfig = Field(default_factory=LLMConfig)
    hosting: HostingConfig = Field(default_factory=HostingConfig)
    endpoints: WorkflowEndpointConfig = Field(default_factory=WorkflowEndpointConfig)

    model_config = SettingsConfigDict(
        env_prefix="WORKFLOW_UI_",
        env_file=".env",
        extra="ignore",
    )

    def setup_logging(self) -> None:
        """Configure JSON logging based on settings."""
        configure_logging(self.log_level)

        if self.debug:
            logging.getLogger("workflow_ui_generator").setLevel(logging.DEBUG)
