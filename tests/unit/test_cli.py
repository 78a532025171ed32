"""CLI tests: argument handling and exit codes (LLM and hosting API stubbed)."""

from __future__ import annotations

import json
import re
import zipfile
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest

from workflow_ui_generator.core.builder import WorkflowAppBuilder
from workflow_ui_generator.core.config import GeneratorConfig
from workflow_ui_generator.pipeline import main as cli
from workflow_ui_generator.pipeline.errors import HostingAPIError
from workflow_ui_generator.pipeline.publish import HostingClient, SubmittedDeployment


def _respond(prompt: str) -> str:
    match = re.search(r"Component name: (\w+)", prompt)
    name = match.group(1) if match else "App"
    return f"function {name}() {{\n  return <div className=\"p-4\">{name}</div>;\n}}"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("WORKFLOW_UI_HOSTING_TOKEN", raising=False)
    monkeypatch.setattr(GeneratorConfig, "setup_logging", lambda self: None)


@pytest.fixture
def workflow_file(tmp_path: Path, sample_workflow: dict[str, Any]) -> Path:
    path = tmp_path / "workflow.json"
    path.write_text(json.dumps(sample_workflow), encoding="utf-8")
    return path


@pytest.fixture
def hosting() -> Mock:
    mock = Mock(spec=HostingClient)
    mock.create_deployment.return_value = SubmittedDeployment(id="dpl_1", url="demo.vercel.app")
    mock.get_ready_state.return_value = "READY"
    return mock


@pytest.fixture
def install_builder(monkeypatch: pytest.MonkeyPatch, scripted_provider, fake_clock):
    def _install(responses: Any = _respond, hosting: Mock | None = None) -> None:
        def factory(config: GeneratorConfig) -> WorkflowAppBuilder:
            return WorkflowAppBuilder(
                config,
                provider=scripted_provider(responses),
                hosting_client=hosting,
                clock=fake_clock,
            )

        monkeypatch.setattr(cli, "WorkflowAppBuilder", factory)

    return _install


def test_analyze_prints_summary(install_builder, workflow_file: Path, capsys) -> None:
    install_builder()

    assert cli.main(["analyze", str(workflow_file)]) == cli.EXIT_OK

    summary = json.loads(capsys.readouterr().out)
    assert summary["total_nodes"] == 3
    assert summary["is_multi_step"] is True


def test_malformed_workflow_exits_invalid(install_builder, tmp_path: Path, capsys) -> None:
    install_builder()
    bad = tmp_path / "bad.json"
    bad.write_text('{"nodes": []}', encoding="utf-8")

    assert cli.main(["analyze", str(bad)]) == cli.EXIT_INVALID
    assert "Workflow must have a name" in capsys.readouterr().err


def test_missing_workflow_file_exits_invalid(install_builder, tmp_path: Path) -> None:
    install_builder()

    assert cli.main(["analyze", str(tmp_path / "missing.json")]) == cli.EXIT_INVALID


def test_generate_ui_writes_component(install_builder, workflow_file: Path, tmp_path: Path) -> None:
    install_builder()
    out = tmp_path / "out" / "WorkflowApp.jsx"

    assert cli.main(["generate-ui", str(workflow_file), "--out", str(out)]) == cli.EXIT_OK

    code = out.read_text(encoding="utf-8")
    assert code.startswith("function WorkflowApp() {")
    assert "render(<WorkflowApp />);" in code


def test_generate_ui_with_nothing_to_preview_fails(install_builder, workflow_file: Path) -> None:
    install_builder(lambda _prompt: "I'm unable to do that.")

    assert cli.main(["generate-ui", str(workflow_file)]) == cli.EXIT_FAILED


def test_generation_error_exits_failed(install_builder, workflow_file: Path, capsys) -> None:
    def fail(_prompt: str) -> str:
        raise RuntimeError("rate limited")

    install_builder(fail)

    assert cli.main(["generate-app", str(workflow_file)]) == cli.EXIT_FAILED
    assert "rate limited" in capsys.readouterr().err


def test_generate_app_writes_archive(install_builder, workflow_file: Path, tmp_path: Path) -> None:
    install_builder()
    out_dir = tmp_path / "dist"

    assert cli.main(["generate-app", str(workflow_file), "--out", str(out_dir)]) == cli.EXIT_OK

    with zipfile.ZipFile(out_dir / "lead-capture-flow.zip") as archive:
        names = archive.namelist()
    assert names[0] == "package.json"
    assert "src/components/CodeComponent.jsx" in names


def test_publish_ready(install_builder, workflow_file: Path, hosting: Mock, capsys) -> None:
    install_builder(hosting=hosting)

    assert cli.main(["publish", str(workflow_file)]) == cli.EXIT_OK
    assert "Deployed: https://demo.vercel.app" in capsys.readouterr().out


def test_publish_timeout_has_distinct_exit_code(
    install_builder, workflow_file: Path, hosting: Mock, capsys
) -> None:
    hosting.get_ready_state.return_value = "BUILDING"
    install_builder(hosting=hosting)

    assert cli.main(["publish", str(workflow_file)]) == cli.EXIT_TIMED_OUT
    assert hosting.get_ready_state.call_count == 30
    assert "Still building after 30 checks" in capsys.readouterr().out


def test_publish_rejected(install_builder, workflow_file: Path, hosting: Mock, capsys) -> None:
    hosting.create_deployment.side_effect = HostingAPIError(400, "Project name is invalid")
    install_builder(hosting=hosting)

    assert cli.main(["publish", str(workflow_file)]) == cli.EXIT_FAILED
    assert "Deployment failed: Project name is invalid" in capsys.readouterr().out


def test_publish_no_wait(install_builder, workflow_file: Path, hosting: Mock) -> None:
    install_builder(hosting=hosting)

    assert cli.main(["publish", str(workflow_file), "--no-wait"]) == cli.EXIT_OK
    hosting.create_deployment.assert_called_once()


def test_publish_without_token_exits_invalid(install_builder, workflow_file: Path, capsys) -> None:
    install_builder(hosting=None)

    assert cli.main(["publish", str(workflow_file)]) == cli.EXIT_INVALID
    assert "WORKFLOW_UI_HOSTING_TOKEN" in capsys.readouterr().err
