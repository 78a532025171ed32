"""In-memory project tree: relative path -> text content, in insertion order."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

MANIFEST_PATH = "package.json"
ENTRY_PATH = "src/index.js"


class InvalidProjectPath(ValueError):
    pass


def validate_project_path(path: str) -> str:
    """Return ``path`` if it is a clean, relative, forward-slash path."""

    if not path or not path.strip():
        raise InvalidProjectPath("path is required")
    if "\\" in path:
        raise InvalidProjectPath(f"path must use forward slashes: {path!r}")
    if path.startswith("/"):
        raise InvalidProjectPath(f"path must be relative: {path!r}")
    if any(part in {"", ".", ".."} for part in path.split("/")):
        raise InvalidProjectPath(f"path has empty or dot segments: {path!r}")
    return path


@dataclass
class ProjectTree:
    name: str
    files: dict[str, str] = field(default_factory=dict)

    def add(self, path: str, content: str) -> None:
        validate_project_path(path)
        if path in self.files:
            raise InvalidProjectPath(f"duplicate path: {path!r}")
        self.files[path] = content

    @classmethod
    def from_files(cls, name: str, files: Mapping[str, str]) -> ProjectTree:
        tree = cls(name=name)
        for path, content in files.items():
            tree.add(path, content)
        return tree

    @property
    def is_complete(self) -> bool:
        return MANIFEST_PATH in self.files and ENTRY_PATH in self.files

    def paths(self) -> list[str]:
        return list(self.files)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.files.items())

    def __len__(self) -> int:
        return len(self.files)
