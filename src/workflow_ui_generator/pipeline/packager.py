"""Archive Packager: ProjectTree -> single zip blob."""

from __future__ import annotations

import io
import logging
import zipfile
from dataclasses import dataclass

from workflow_ui_generator.pipeline.assembly.tree import ProjectTree
from workflow_ui_generator.pipeline.errors import ArchiveError
from workflow_ui_generator.pipeline.extraction import passes

logger = logging.getLogger(__name__)

ARCHIVE_EXTENSION = "zip"
ARCHIVE_MEDIA_TYPE = "application/zip"
SOURCE_EXTENSIONS: tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx")


@dataclass(frozen=True, slots=True)
class Archive:
    filename: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


def clean_entry(path: str, content: str) -> str:
    """Re-apply fence stripping (and prose filtering for source files) to one entry."""

    if path.endswith(SOURCE_EXTENSIONS):
        return passes.filter_prose(passes.strip_fences(content))
    if content.lstrip().startswith(passes.FENCE):
        return passes.strip_fences(content)
    return content


def pack(tree: ProjectTree) -> Archive:
    """Serialize ``tree`` into a deflated zip, entries in tree order.

    Any failure discards the in-memory buffer and raises ``ArchiveError``.
    """

    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
            for path, content in tree:
                archive.writestr(path, clean_entry(path, content))
    except Exception as exc:
        logger.error(
            "Failed to build project archive",
            extra={"project_id": tree.name, "error": str(exc)},
        )
        raise ArchiveError(f"Failed to package project '{tree.name}': {exc}") from exc

    data = buffer.getvalue()
    logger.info(
        "Project archive built",
        extra={"project_id": tree.name, "entries": len(tree), "bytes": len(data)},
    )
    return Archive(filename=f"{tree.name}.{ARCHIVE_EXTENSION}", data=data)
