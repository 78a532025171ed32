"""Iterative modification as an append-only log of artifacts."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import UTC, datetime

from workflow_ui_generator.pipeline.extraction import ExtractionMode
from workflow_ui_generator.pipeline.generation import CodeGenerator
from workflow_ui_generator.pipeline.workflow import WorkflowSpec

logger = logging.getLogger(__name__)

INITIAL_INSTRUCTION = ""


@dataclass(frozen=True, slots=True)
class ModificationEntry:
    instruction: str
    component: str
    created_at: datetime


class ModificationSession:
    """Each instruction is applied to the latest artifact and appended.

    Concurrent ``modify`` calls on one session run one at a time; entries are
    never edited once recorded.
    """

    def __init__(
        self,
        *,
        generator: CodeGenerator,
        spec: WorkflowSpec,
        initial: str,
        mode: ExtractionMode = ExtractionMode.PREVIEW,
    ) -> None:
        self._generator = generator
        self._spec = spec
        self._mode = mode
        self._lock = threading.Lock()
        self._entries: list[ModificationEntry] = [
            ModificationEntry(
                instruction=INITIAL_INSTRUCTION,
                component=initial,
                created_at=datetime.now(tz=UTC),
            )
        ]

    @property
    def current(self) -> str:
        with self._lock:
            return self._entries[-1].component

    def history(self) -> list[ModificationEntry]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def modify(self, instruction: str) -> ModificationEntry:
        if not instruction or not instruction.strip():
            raise ValueError("instruction is required")

        with self._lock:
            latest = self._entries[-1].component
            component = self._generator.modify_component(
                self._spec, latest, instruction, mode=self._mode
            )
            entry = ModificationEntry(
                instruction=instruction.strip(),
                component=component,
                created_at=datetime.now(tz=UTC),
            )
            self._entries.append(entry)

        logger.info(
            "Modification applied",
            extra={
                "workflow": self._spec.name,
                "revision": len(self._entries) - 1,
                "empty": not component,
            },
        )
        return entry
