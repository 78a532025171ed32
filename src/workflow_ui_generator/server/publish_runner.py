"""Background publish jobs with per-job cancellation."""

from __future__ import annotations

import logging
import threading
import uuid

from workflow_ui_generator.core.builder import WorkflowAppBuilder
from workflow_ui_generator.pipeline.assembly import ProjectTree
from workflow_ui_generator.pipeline.publish import (
    DeploymentRecord,
    DeploymentStatus,
    HostingTarget,
    PublishService,
)
from workflow_ui_generator.server.job_store import JobStore

logger = logging.getLogger(__name__)


def job_status_for(record: DeploymentRecord) -> str:
    if record.status is DeploymentStatus.READY:
        return "succeeded"
    if record.status is DeploymentStatus.ERROR:
        return "failed"
    if record.status is DeploymentStatus.TIMED_OUT:
        return "timed_out"
    if record.cancelled:
        return "cancelled"
    return "running"


class PublishRunner:
    """Starts publish jobs on daemon threads and tracks their cancel events."""

    def __init__(self, *, job_store: JobStore) -> None:
        self._job_store = job_store
        self._lock = threading.Lock()
        self._cancel_events: dict[str, threading.Event] = {}

    def start(self, *, tree: ProjectTree, builder: WorkflowAppBuilder) -> str:
        """Queue a publish of ``tree``; raises ValueError when hosting is not configured."""

        job_id = uuid.uuid4().hex
        cancel_event = threading.Event()

        def _on_update(record: DeploymentRecord) -> None:
            self._job_store.update(
                job_id,
                status=job_status_for(record),
                deployment_id=record.id,
                deployment_status=record.status.value,
                url=record.result_url,
                attempts=record.attempts,
                summary=record.summary(),
                error=record.error,
            )

        service = builder.publish_service(on_update=_on_update)
        target = builder.hosting_target()

        self._job_store.create(job_id=job_id, project_name=tree.name)
        with self._lock:
            self._cancel_events[job_id] = cancel_event

        thread = threading.Thread(
            target=self._run_job,
            name=f"publish-{tree.name}-{job_id}",
            daemon=True,
            kwargs={
                "job_id": job_id,
                "tree": tree,
                "service": service,
                "target": target,
                "cancel_event": cancel_event,
            },
        )
        thread.start()
        return job_id

    def _run_job(
        self,
        *,
        job_id: str,
        tree: ProjectTree,
        service: PublishService,
        target: HostingTarget,
        cancel_event: threading.Event,
    ) -> None:
        try:
            record = service.publish(tree, target, cancel_event=cancel_event)
            logger.info(
                "Publish job finished",
                extra={"job_id": job_id, "project": tree.name, "status": record.status.value},
            )
        except Exception as e:
            logger.exception("Publish job failed", extra={"job_id": job_id, "project": tree.name})
            self._job_store.update(job_id, status="failed", error=str(e))
        finally:
            with self._lock:
                self._cancel_events.pop(job_id, None)

    def cancel(self, job_id: str) -> bool:
        """Stop polling for ``job_id``. False when the job is not running here."""

        with self._lock:
            event = self._cancel_events.get(job_id)
        if event is None:
            return False
        event.set()
        return True
