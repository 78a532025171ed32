"""Workflow description models.

A workflow arrives as n8n-style JSON: a name, a list of nodes and a
connections map. The core only reads it; unknown fields are preserved so the
serialized form handed to the text-generation service matches what the caller
supplied.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from workflow_ui_generator.pipeline.errors import MalformedWorkflowError

logger = logging.getLogger(__name__)

DEFAULT_WEBHOOK_NODE_TYPES: tuple[str, ...] = (
    "n8n-nodes-base.formTrigger",
    "n8n-nodes-base.webhook",
)


class WorkflowNode(BaseModel):
    """A single workflow node."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    id: str = Field(default="")
    name: str = Field(default="")
    type: str
    webhook_id: str | None = Field(default=None, alias="webhookId")

    @property
    def type_suffix(self) -> str:
        """Last dotted segment of the node type (``formTrigger`` for ``n8n-nodes-base.formTrigger``)."""

        return self.type.split(".")[-1] or self.type


class WorkflowSpec(BaseModel):
    """Caller-owned workflow description. Read-only to the pipeline."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    name: str
    nodes: list[WorkflowNode] = Field(default_factory=list)
    connections: dict[str, Any] = Field(default_factory=dict)

    def node_by_key(self, key: str) -> WorkflowNode | None:
        """Look a node up by id, falling back to its display name."""

        for node in self.nodes:
            if node.id and node.id == key:
                return node
        for node in self.nodes:
            if node.name and node.name == key:
                return node
        return None

    def downstream(self, key: str) -> list[WorkflowNode]:
        """Nodes directly connected after ``key``.

        Connection targets that do not name an existing node are ignored.
        """

        raw = self.connections.get(key)
        if raw is None:
            node = self.node_by_key(key)
            if node is not None:
                raw = self.connections.get(node.name) or self.connections.get(node.id)

        targets: list[WorkflowNode] = []
        for target_key in _iter_connection_targets(raw):
            target = self.node_by_key(target_key)
            if target is not None and target not in targets:
                targets.append(target)
        return targets


def _iter_connection_targets(raw: object) -> Iterable[str]:
    # Accepts plain id lists as well as n8n's {"main": [[{"node": "X", ...}]]} shape.
    if isinstance(raw, str):
        yield raw
    elif isinstance(raw, Mapping):
        target = raw.get("node")
        if isinstance(target, str):
            yield target
            return
        for value in raw.values():
            yield from _iter_connection_targets(value)
    elif isinstance(raw, list | tuple):
        for item in raw:
            yield from _iter_connection_targets(item)


def parse_workflow(raw: str | Mapping[str, Any] | WorkflowSpec) -> WorkflowSpec:
    """Validate caller input into a :class:`WorkflowSpec`.

    Raises:
        MalformedWorkflowError: with the offending field, before any generation call.
    """

    if isinstance(raw, WorkflowSpec):
        return raw

    data: object = raw
    if isinstance(raw, str):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise MalformedWorkflowError("workflow", f"Invalid JSON format ({e.msg})") from e

    if not isinstance(data, Mapping):
        raise MalformedWorkflowError("workflow", "Workflow must be a JSON object")

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise MalformedWorkflowError("name", "Workflow must have a name")

    nodes = data.get("nodes", [])
    if not isinstance(nodes, list):
        raise MalformedWorkflowError("nodes", "Workflow nodes must be a list")

    connections = data.get("connections", {})
    if connections is not None and not isinstance(connections, Mapping):
        raise MalformedWorkflowError("connections", "Workflow connections must be an object")

    try:
        return WorkflowSpec.model_validate({**data, "connections": connections or {}})
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ())) or "workflow"
        raise MalformedWorkflowError(location, first.get("msg", "Invalid value")) from e


def serialize_workflow(spec: WorkflowSpec) -> str:
    """Compact JSON used both in prompts and for dependency sniffing."""

    return spec.model_dump_json(by_alias=True, exclude_none=True)


@dataclass(frozen=True, slots=True)
class WorkflowSummary:
    total_nodes: int
    node_types: dict[str, int] = field(default_factory=dict)
    has_connections: bool = False
    is_multi_step: bool = False


def analyze_workflow(spec: WorkflowSpec) -> WorkflowSummary:
    counts = Counter(node.type_suffix for node in spec.nodes)
    has_connections = bool(spec.connections)
    return WorkflowSummary(
        total_nodes=len(spec.nodes),
        node_types=dict(counts),
        has_connections=has_connections,
        is_multi_step=has_connections and len(spec.nodes) > 1,
    )


def find_webhook_node(
    spec: WorkflowSpec, node_types: Iterable[str] = DEFAULT_WEBHOOK_NODE_TYPES
) -> WorkflowNode | None:
    wanted = set(node_types)
    for node in spec.nodes:
        if node.type in wanted:
            return node
    return None


def resolve_webhook_url(
    spec: WorkflowSpec,
    base_url: str | None,
    node_types: Iterable[str] = DEFAULT_WEBHOOK_NODE_TYPES,
) -> str | None:
    """Join the configured webhook base URL with the workflow's trigger webhook id."""

    if not base_url or not base_url.strip():
        return None
    node = find_webhook_node(spec, node_types)
    if node is None or not node.webhook_id:
        logger.debug("No webhook trigger node with an id", extra={"workflow": spec.name})
        return None
    return f"{base_url.strip().rstrip('/')}/{node.webhook_id}"
