from __future__ import annotations

from enum import Enum


class DeploymentStatus(str, Enum):
    SUBMITTED = "submitted"
    BUILDING = "building"
    READY = "ready"
    ERROR = "error"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES: frozenset[DeploymentStatus] = frozenset(
    {DeploymentStatus.READY, DeploymentStatus.ERROR, DeploymentStatus.TIMED_OUT}
)

ALLOWED_TRANSITIONS: dict[DeploymentStatus, set[DeploymentStatus]] = {
    DeploymentStatus.SUBMITTED: {DeploymentStatus.BUILDING, DeploymentStatus.ERROR},
    DeploymentStatus.BUILDING: {
        DeploymentStatus.READY,
        DeploymentStatus.ERROR,
        DeploymentStatus.TIMED_OUT,
    },
    DeploymentStatus.READY: set(),
    DeploymentStatus.ERROR: set(),
    DeploymentStatus.TIMED_OUT: set(),
}

# Provider readyState values that end polling.
PROVIDER_TERMINAL_STATES: dict[str, DeploymentStatus] = {
    "READY": DeploymentStatus.READY,
    "ERROR": DeploymentStatus.ERROR,
    "CANCELED": DeploymentStatus.ERROR,
}


class IllegalTransitionError(ValueError):
    pass


def transition(*, current: DeploymentStatus, to: DeploymentStatus) -> DeploymentStatus:
    allowed = ALLOWED_TRANSITIONS.get(current, set())
    if to not in allowed:
        raise IllegalTransitionError(f"Illegal transition: {current.value} -> {to.value}")
    return to


def status_for_provider_state(ready_state: str | None) -> DeploymentStatus | None:
    """Map a provider readyState onto a terminal status, or None to keep polling."""

    if not ready_state:
        return None
    return PROVIDER_TERMINAL_STATES.get(ready_state.strip().upper())
