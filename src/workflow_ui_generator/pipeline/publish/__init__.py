"""Publish Orchestrator."""

from workflow_ui_generator.pipeline.publish.client import (
    BuildSettings,
    HostingClient,
    SubmittedDeployment,
)
from workflow_ui_generator.pipeline.publish.clock import Clock, SystemClock
from workflow_ui_generator.pipeline.publish.service import (
    DeploymentRecord,
    HostingTarget,
    PublishHandle,
    PublishService,
)
from workflow_ui_generator.pipeline.publish.state_machine import (
    DeploymentStatus,
    IllegalTransitionError,
)

__all__ = [
    "BuildSettings",
    "Clock",
    "DeploymentRecord",
    "DeploymentStatus",
    "HostingClient",
    "HostingTarget",
    "IllegalTransitionError",
    "PublishHandle",
    "PublishService",
    "SubmittedDeployment",
    "SystemClock",
]
