"""Publish job bookkeeping for the REST server.

Jobs live in memory, keyed by id, and every change is mirrored to a JSON file
so status can still be read after a restart. Polling itself cannot survive a
restart: jobs found unfinished on load are marked failed.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

UNFINISHED_STATUSES = frozenset({"queued", "running"})
INTERRUPTED_ERROR = "Interrupted by server restart; the deployment may still finish remotely"


class PublishJobRecord(BaseModel):
    job_id: str
    project_name: str
    status: str
    created_at: str
    updated_at: str

    deployment_id: str | None = None
    deployment_status: str | None = None
    url: str | None = None
    attempts: int = 0
    summary: str | None = None
    error: str | None = None


def _now() -> str:
    return datetime.now(tz=UTC).isoformat()


class JobStore:
    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = threading.Lock()
        self._jobs: dict[str, PublishJobRecord] = self._read()
        self._fail_interrupted()

    def _read(self) -> dict[str, PublishJobRecord]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            jobs = [PublishJobRecord.model_validate(item) for item in raw.get("jobs", [])]
        except (json.JSONDecodeError, AttributeError, ValidationError) as e:
            logger.warning(
                "Ignoring unreadable job state file",
                extra={"path": str(self.path), "error": str(e)},
            )
            return {}
        return {job.job_id: job for job in jobs}

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"jobs": [job.model_dump(mode="json") for job in self._jobs.values()]}
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        os.replace(tmp, self.path)

    def _fail_interrupted(self) -> None:
        stale = [job for job in self._jobs.values() if job.status in UNFINISHED_STATUSES]
        if not stale:
            return
        now = _now()
        for job in stale:
            self._jobs[job.job_id] = job.model_copy(
                update={"status": "failed", "error": INTERRUPTED_ERROR, "updated_at": now}
            )
        self._flush()
        logger.info("Marked interrupted publish jobs as failed", extra={"count": len(stale)})

    def list(self) -> list[PublishJobRecord]:
        with self._lock:
            return list(self._jobs.values())

    def get(self, job_id: str) -> PublishJobRecord | None:
        with self._lock:
            return self._jobs.get(job_id)

    def create(self, *, job_id: str, project_name: str) -> PublishJobRecord:
        now = _now()
        record = PublishJobRecord(
            job_id=job_id,
            project_name=project_name,
            status="queued",
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            if job_id in self._jobs:
                raise ValueError(f"Duplicate job id: {job_id}")
            self._jobs[job_id] = record
            self._flush()
        return record

    def update(self, job_id: str, **updates: object) -> PublishJobRecord:
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                raise KeyError(job_id)
            merged = job.model_copy(update={**updates, "updated_at": _now()})
            self._jobs[job_id] = merged
            self._flush()
            return merged
