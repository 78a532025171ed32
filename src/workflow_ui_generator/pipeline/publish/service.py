"""Publish Orchestrator: submit a ProjectTree and poll until a terminal status."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import requests
from pydantic import BaseModel

from workflow_ui_generator.pipeline.assembly.tree import ProjectTree
from workflow_ui_generator.pipeline.errors import HostingAPIError
from workflow_ui_generator.pipeline.publish.client import BuildSettings, HostingClient
from workflow_ui_generator.pipeline.publish.clock import Clock, SystemClock
from workflow_ui_generator.pipeline.publish.state_machine import (
    DeploymentStatus,
    status_for_provider_state,
    transition,
)

if TYPE_CHECKING:
    from workflow_ui_generator.core.config import HostingConfig

logger = logging.getLogger(__name__)

RecordListener = Callable[["DeploymentRecord"], None]


@dataclass(frozen=True, slots=True)
class HostingTarget:
    """Where and how a project is published."""

    build: BuildSettings = field(default_factory=BuildSettings)
    environment: str = "production"
    url_prefix: str = "https://"
    poll_interval_seconds: float = 10.0
    max_poll_attempts: int = 30

    def __post_init__(self) -> None:
        if self.poll_interval_seconds < 0:
            raise ValueError("poll_interval_seconds must be >= 0")
        if self.max_poll_attempts < 1:
            raise ValueError("max_poll_attempts must be >= 1")

    @classmethod
    def from_config(cls, config: HostingConfig) -> HostingTarget:
        return cls(
            build=BuildSettings(
                framework=config.framework,
                build_command=config.build_command,
                output_directory=config.output_directory,
                install_command=config.install_command,
            ),
            environment=config.target,
            url_prefix=config.url_prefix,
            poll_interval_seconds=config.poll_interval_seconds,
            max_poll_attempts=config.max_poll_attempts,
        )


def _utc_iso_now() -> str:
    return datetime.now(tz=UTC).isoformat()


class DeploymentRecord(BaseModel):
    project_name: str
    submitted_at: str
    target_url_prefix: str
    status: DeploymentStatus = DeploymentStatus.SUBMITTED

    id: str | None = None
    hostname: str | None = None
    result_url: str | None = None
    attempts: int = 0
    last_ready_state: str | None = None
    error: str | None = None
    cancelled: bool = False

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def summary(self) -> str:
        if self.status is DeploymentStatus.READY:
            return f"Deployed: {self.result_url}"
        if self.status is DeploymentStatus.ERROR:
            return f"Deployment failed: {self.error or 'Unknown error'}"
        if self.status is DeploymentStatus.TIMED_OUT:
            return (
                f"Still building after {self.attempts} checks; "
                f"it may finish at {self.target_url_prefix}{self.hostname or ''}"
            )
        if self.cancelled:
            return f"Stopped watching deployment {self.id}; it continues on the provider"
        return f"Deployment {self.id or self.project_name} is {self.status.value}"


def _advance(record: DeploymentRecord, to: DeploymentStatus, **updates: object) -> DeploymentRecord:
    status = transition(current=record.status, to=to)
    return record.model_copy(update={"status": status, **updates})


class PublishHandle:
    """A publish running on a worker thread."""

    def __init__(self, *, project_name: str, cancel_event: threading.Event) -> None:
        self.project_name = project_name
        self._cancel_event = cancel_event
        self._thread: threading.Thread | None = None
        self._result: DeploymentRecord | None = None
        self._error: BaseException | None = None

    def cancel(self) -> None:
        """Stop polling. The submitted deployment keeps building remotely."""

        self._cancel_event.set()

    @property
    def cancel_requested(self) -> bool:
        return self._cancel_event.is_set()

    @property
    def done(self) -> bool:
        return self._thread is not None and not self._thread.is_alive()

    def result(self, timeout: float | None = None) -> DeploymentRecord | None:
        """Wait for the worker and return its record (None if still running)."""

        if self._thread is not None:
            self._thread.join(timeout)
        if self._error is not None:
            raise self._error
        return self._result


class PublishService:
    def __init__(
        self,
        *,
        client: HostingClient,
        clock: Clock | None = None,
        on_update: RecordListener | None = None,
    ) -> None:
        self._client = client
        self._clock = clock or SystemClock()
        self._on_update = on_update

    def _emit(self, record: DeploymentRecord) -> DeploymentRecord:
        if self._on_update is not None:
            self._on_update(record)
        return record

    def publish(
        self,
        tree: ProjectTree,
        target: HostingTarget,
        *,
        cancel_event: threading.Event | None = None,
    ) -> DeploymentRecord:
        """Submit ``tree`` and poll for a terminal deployment status.

        Semantics:
            - a rejected submission goes straight to ERROR with the provider
              message verbatim; it is never retried.
            - every poll, successful or not, consumes one attempt.
            - READY stops polling immediately; ERROR/CANCELED provider states
              end as ERROR.
            - running out of attempts ends as TIMED_OUT.
            - cancellation stops polling and leaves the record BUILDING.
        """

        record = self._emit(
            DeploymentRecord(
                project_name=tree.name,
                submitted_at=_utc_iso_now(),
                target_url_prefix=target.url_prefix,
            )
        )

        try:
            submitted = self._client.create_deployment(
                name=tree.name,
                files=tree.files,
                settings=target.build,
                target=target.environment,
            )
        except HostingAPIError as exc:
            logger.warning(
                "Deployment submission failed",
                extra={"project": tree.name, "status_code": exc.status_code},
            )
            return self._emit(_advance(record, DeploymentStatus.ERROR, error=exc.message))
        except requests.RequestException as exc:
            logger.warning(
                "Deployment submission could not reach the provider",
                extra={"project": tree.name, "error": str(exc)},
            )
            return self._emit(_advance(record, DeploymentStatus.ERROR, error=str(exc)))

        record = self._emit(
            _advance(record, DeploymentStatus.BUILDING, id=submitted.id, hostname=submitted.url)
        )

        for attempt in range(1, target.max_poll_attempts + 1):
            if self._clock.wait(target.poll_interval_seconds, cancel_event):
                logger.info(
                    "Publish polling cancelled",
                    extra={"deployment_id": record.id, "attempts": record.attempts},
                )
                return self._emit(record.model_copy(update={"cancelled": True}))

            try:
                ready_state = self._client.get_ready_state(submitted.id)
            except (requests.RequestException, ValueError) as exc:
                logger.info(
                    "Deployment status check inconclusive",
                    extra={"deployment_id": submitted.id, "attempt": attempt, "error": str(exc)},
                )
                record = self._emit(record.model_copy(update={"attempts": attempt}))
                continue

            record = self._emit(
                record.model_copy(update={"attempts": attempt, "last_ready_state": ready_state})
            )
            terminal = status_for_provider_state(ready_state)
            if terminal is DeploymentStatus.READY:
                logger.info(
                    "Deployment ready",
                    extra={"deployment_id": submitted.id, "attempts": attempt},
                )
                return self._emit(
                    _advance(
                        record,
                        DeploymentStatus.READY,
                        result_url=f"{target.url_prefix}{submitted.url}",
                    )
                )
            if terminal is DeploymentStatus.ERROR:
                logger.warning(
                    "Deployment failed on provider",
                    extra={"deployment_id": submitted.id, "ready_state": ready_state},
                )
                return self._emit(
                    _advance(
                        record,
                        DeploymentStatus.ERROR,
                        error=f"Deployment ended in state {ready_state}",
                    )
                )

        logger.warning(
            "Timed out waiting for deployment",
            extra={"deployment_id": submitted.id, "attempts": target.max_poll_attempts},
        )
        return self._emit(_advance(record, DeploymentStatus.TIMED_OUT))

    def start(self, tree: ProjectTree, target: HostingTarget) -> PublishHandle:
        """Run ``publish`` on a daemon thread and return a cancellable handle."""

        cancel_event = threading.Event()
        handle = PublishHandle(project_name=tree.name, cancel_event=cancel_event)

        def _run() -> None:
            try:
                handle._result = self.publish(tree, target, cancel_event=cancel_event)
            except BaseException as exc:
                logger.exception("Publish worker failed", extra={"project": tree.name})
                handle._error = exc

        thread = threading.Thread(target=_run, name=f"publish-{tree.name}", daemon=True)
        handle._thread = thread
        thread.start()
        return handle
