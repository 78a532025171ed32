"""Hosting provider REST client (Vercel deployments API)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import requests

from workflow_ui_generator.pipeline.errors import HostingAPIError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BuildSettings:
    framework: str = "create-react-app"
    build_command: str = "npm run build"
    output_directory: str = "build"
    install_command: str = "npm install"

    def to_payload(self) -> dict[str, str]:
        return {
            "framework": self.framework,
            "buildCommand": self.build_command,
            "outputDirectory": self.output_directory,
            "installCommand": self.install_command,
        }


@dataclass(frozen=True, slots=True)
class SubmittedDeployment:
    id: str
    url: str


def _error_message(resp: requests.Response) -> str:
    """Provider error text, verbatim where the body carries one."""

    try:
        body = resp.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        if isinstance(body.get("message"), str):
            return body["message"]
    text = resp.text.strip()
    return text or f"HTTP {resp.status_code}"


class HostingClient:
    """Thin wrapper around the two deployment endpoints we need."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = "https://api.vercel.com",
        team_id: str | None = None,
        timeout_seconds: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        if not token:
            raise ValueError("Hosting token is required")

        self._base_url = base_url.rstrip("/")
        self._team_id = team_id
        self._timeout = timeout_seconds
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
                "User-Agent": "workflow-ui-generator",
            }
        )

    def _params(self) -> dict[str, str] | None:
        return {"teamId": self._team_id} if self._team_id else None

    def create_deployment(
        self,
        *,
        name: str,
        files: Mapping[str, str],
        settings: BuildSettings,
        target: str = "production",
    ) -> SubmittedDeployment:
        """Submit a deployment. Non-2xx raises HostingAPIError; never retried."""

        payload: dict[str, Any] = {
            "name": name,
            "files": [{"file": path, "data": content} for path, content in files.items()],
            "projectSettings": settings.to_payload(),
            "target": target,
        }
        url = f"{self._base_url}/v13/deployments"
        resp = self._session.post(url, json=payload, params=self._params(), timeout=self._timeout)
        if not resp.ok:
            message = _error_message(resp)
            logger.warning(
                "Deployment submission rejected",
                extra={"project": name, "status_code": resp.status_code},
            )
            raise HostingAPIError(resp.status_code, message)

        data: dict[str, Any] = resp.json()
        deployment_id = data.get("id")
        if not isinstance(deployment_id, str) or not deployment_id:
            raise HostingAPIError(resp.status_code, "Unexpected deployment response: missing id")
        hostname = data.get("url")
        logger.info(
            "Deployment submitted",
            extra={"project": name, "deployment_id": deployment_id, "file_count": len(files)},
        )
        return SubmittedDeployment(
            id=deployment_id, url=hostname if isinstance(hostname, str) else ""
        )

    def get_ready_state(self, deployment_id: str) -> str | None:
        """Return the provider readyState. Transport errors and non-2xx propagate."""

        if not deployment_id:
            raise ValueError("deployment_id is required")
        url = f"{self._base_url}/v13/deployments/{deployment_id}"
        resp = self._session.get(url, params=self._params(), timeout=self._timeout)
        resp.raise_for_status()
        data: dict[str, Any] = resp.json()
        state = data.get("readyState")
        return state if isinstance(state, str) else None

    def close(self) -> None:
        self._session.close()
