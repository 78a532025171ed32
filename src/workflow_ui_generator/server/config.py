"""Configuration for the REST server.

The server starts without LLM or hosting credentials; endpoints that need them
validate at request time.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """Settings for the REST API."""

    jobs_state_file: Path = Field(
        default=Path(".state/publish_jobs.json"),
        validation_alias="WORKFLOW_UI_JOBS_FILE",
    )

    # Dev-friendly CORS (Vite). Override via WORKFLOW_UI_CORS_ORIGINS=...
    cors_origins: str = Field(
        default="http://localhost:5173,http://127.0.0.1:5173",
        validation_alias="WORKFLOW_UI_CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins.",
    )

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    def parsed_cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
