"""Multi-file project synthesis."""

from workflow_ui_generator.pipeline.assembly.assembler import (
    assemble,
    component_name_for_node_type,
    project_id_from_name,
    sniff_dependencies,
)
from workflow_ui_generator.pipeline.assembly.tree import (
    ENTRY_PATH,
    MANIFEST_PATH,
    InvalidProjectPath,
    ProjectTree,
)

__all__ = [
    "ENTRY_PATH",
    "MANIFEST_PATH",
    "InvalidProjectPath",
    "ProjectTree",
    "assemble",
    "component_name_for_node_type",
    "project_id_from_name",
    "sniff_dependencies",
]
