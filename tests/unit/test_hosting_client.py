"""Unit tests for the hosting REST client (HTTP layer mocked)."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import Mock

import pytest
import requests

from workflow_ui_generator.pipeline.errors import HostingAPIError
from workflow_ui_generator.pipeline.publish import BuildSettings, HostingClient


def _response(status_code: int, body: Any) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    resp.encoding = "utf-8"
    resp._content = (body if isinstance(body, str) else json.dumps(body)).encode("utf-8")
    return resp


@pytest.fixture
def session() -> requests.Session:
    s = requests.Session()
    s.post = Mock()  # type: ignore[method-assign]
    s.get = Mock()  # type: ignore[method-assign]
    return s


def test_token_is_required() -> None:
    with pytest.raises(ValueError, match="token"):
        HostingClient(token="")


def test_session_carries_bearer_token(session: requests.Session) -> None:
    HostingClient(token="secret", session=session)

    assert session.headers["Authorization"] == "Bearer secret"
    assert session.headers["Content-Type"] == "application/json"


def test_create_deployment_payload(session: requests.Session) -> None:
    session.post.return_value = _response(200, {"id": "dpl_1", "url": "demo.vercel.app"})  # type: ignore[attr-defined]
    client = HostingClient(
        token="secret", base_url="https://api.example.test/", team_id="team_9", session=session
    )

    submitted = client.create_deployment(
        name="demo",
        files={"package.json": "{}", "src/index.js": "x;"},
        settings=BuildSettings(),
    )

    assert submitted.id == "dpl_1"
    assert submitted.url == "demo.vercel.app"
    session.post.assert_called_once_with(  # type: ignore[attr-defined]
        "https://api.example.test/v13/deployments",
        json={
            "name": "demo",
            "files": [
                {"file": "package.json", "data": "{}"},
                {"file": "src/index.js", "data": "x;"},
            ],
            "projectSettings": {
                "framework": "create-react-app",
                "buildCommand": "npm run build",
                "outputDirectory": "build",
                "installCommand": "npm install",
            },
            "target": "production",
        },
        params={"teamId": "team_9"},
        timeout=30.0,
    )


@pytest.mark.parametrize(
    ("status_code", "body", "message"),
    [
        (403, {"error": {"code": "forbidden", "message": "Not authorized"}}, "Not authorized"),
        (400, {"message": "Invalid files"}, "Invalid files"),
        (502, "Bad gateway", "Bad gateway"),
        (500, "", "HTTP 500"),
    ],
)
def test_rejected_submission_carries_provider_message(
    session: requests.Session, status_code: int, body: Any, message: str
) -> None:
    session.post.return_value = _response(status_code, body)  # type: ignore[attr-defined]
    client = HostingClient(token="secret", session=session)

    with pytest.raises(HostingAPIError) as excinfo:
        client.create_deployment(name="demo", files={}, settings=BuildSettings())

    assert excinfo.value.status_code == status_code
    assert excinfo.value.message == message


def test_submission_without_id_is_rejected(session: requests.Session) -> None:
    session.post.return_value = _response(200, {"url": "demo.vercel.app"})  # type: ignore[attr-defined]
    client = HostingClient(token="secret", session=session)

    with pytest.raises(HostingAPIError, match="missing id"):
        client.create_deployment(name="demo", files={}, settings=BuildSettings())


def test_get_ready_state(session: requests.Session) -> None:
    session.get.return_value = _response(200, {"id": "dpl_1", "readyState": "BUILDING"})  # type: ignore[attr-defined]
    client = HostingClient(token="secret", session=session)

    assert client.get_ready_state("dpl_1") == "BUILDING"
    session.get.assert_called_once_with(  # type: ignore[attr-defined]
        "https://api.vercel.com/v13/deployments/dpl_1", params=None, timeout=30.0
    )


def test_get_ready_state_propagates_http_errors(session: requests.Session) -> None:
    session.get.return_value = _response(500, {"error": {"message": "oops"}})  # type: ignore[attr-defined]
    client = HostingClient(token="secret", session=session)

    with pytest.raises(requests.HTTPError):
        client.get_ready_state("dpl_1")
    with pytest.raises(ValueError):
        client.get_ready_state("")
