"""Project assembly: workflow metadata + generated components -> ProjectTree.

Dependency selection is keyword sniffing over the serialized workflow; the base
React stack is always present.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from workflow_ui_generator.pipeline.assembly import templates
from workflow_ui_generator.pipeline.assembly.tree import ENTRY_PATH, MANIFEST_PATH, ProjectTree
from workflow_ui_generator.pipeline.workflow import WorkflowSpec, serialize_workflow

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_ID = "workflow-app"
COMPONENT_SUFFIX = "Component"
COMPONENTS_DIR = "src/components"

BASE_DEPENDENCIES: dict[str, str] = {
    "react": "^18.2.0",
    "react-dom": "^18.2.0",
    "react-scripts": "5.0.1",
    "prop-types": "^15.8.1",
}


@dataclass(frozen=True, slots=True)
class DependencyRule:
    package: str
    version: str
    markers: tuple[str, ...]

    def matches(self, serialized_workflow: str) -> bool:
        return any(marker in serialized_workflow for marker in self.markers)


DEPENDENCY_RULES: tuple[DependencyRule, ...] = (
    DependencyRule("axios", "^1.6.0", ("webhook", "http")),
    DependencyRule("react-syntax-highlighter", "^15.5.0", ("function", "Function")),
)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")


def project_id_from_name(name: str) -> str:
    """Filesystem-safe project identifier derived from a workflow name."""

    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or DEFAULT_PROJECT_ID


def component_name_for_node_type(node_type: str) -> str:
    """``n8n-nodes-base.formTrigger`` -> ``FormTriggerComponent``."""

    suffix = node_type.split(".")[-1] or node_type
    words = [w for w in re.split(r"[^A-Za-z0-9]+", suffix) if w]
    pascal = "".join(word[:1].upper() + word[1:] for word in words)
    if not pascal or pascal[0].isdigit():
        pascal = f"Node{pascal}"
    return f"{pascal}{COMPONENT_SUFFIX}"


def sniff_dependencies(
    serialized_workflow: str, rules: Sequence[DependencyRule] = DEPENDENCY_RULES
) -> dict[str, str]:
    dependencies = dict(BASE_DEPENDENCIES)
    for rule in rules:
        if rule.matches(serialized_workflow):
            dependencies[rule.package] = rule.version
    return dependencies


def assemble(
    spec: WorkflowSpec,
    main_component: str,
    per_node_components: Sequence[tuple[str, str]],
    *,
    generated_at: datetime | None = None,
) -> ProjectTree:
    """Build the deterministic file layout for one generated project.

    Only the README carries a timestamp; every other file is a pure function
    of the inputs.
    """

    project_id = project_id_from_name(spec.name)
    dependencies = sniff_dependencies(serialize_workflow(spec))
    stamp = generated_at or datetime.now(tz=UTC)

    app_source = main_component.strip()
    if not app_source:
        logger.warning(
            "Main component is empty; writing placeholder App",
            extra={"project_id": project_id},
        )
        app_source = templates.PLACEHOLDER_APP

    tree = ProjectTree(name=project_id)
    tree.add(MANIFEST_PATH, templates.package_json(project_id, spec.name, dependencies))
    tree.add("public/index.html", templates.index_html(spec.name))
    tree.add(ENTRY_PATH, templates.INDEX_JS)
    tree.add("src/App.jsx", app_source)
    tree.add("src/index.css", templates.INDEX_CSS)
    tree.add("README.md", templates.readme(spec, stamp))
    tree.add(".gitignore", templates.GITIGNORE)

    for name, source in per_node_components:
        if not _IDENTIFIER_RE.match(name):
            logger.warning("Skipping component with invalid name", extra={"component": name})
            continue
        if not source.strip():
            logger.warning("Skipping empty node component", extra={"component": name})
            continue
        path = f"{COMPONENTS_DIR}/{name}.jsx"
        if path in tree.files:
            logger.warning("Skipping duplicate node component", extra={"component": name})
            continue
        tree.add(path, source.strip())

    logger.info(
        "Project assembled",
        extra={
            "project_id": project_id,
            "file_count": len(tree),
            "dependencies": sorted(dependencies),
        },
    )
    return tree
