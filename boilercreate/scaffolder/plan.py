"""Plan data types shared by the planners, the materializer and the CLI."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from boilercreate.errors import DuplicateFilePath
from boilercreate.selection import Selection

from .manifest import InstallCommandSet, Manifest


class FileEntry(BaseModel):
    """One file to write: POSIX path relative to the project root, and its content."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str

    @property
    def parent(self) -> str:
        """Parent directory of the file, ``""`` for files at the project root."""
        parent = PurePosixPath(self.path).parent.as_posix()
        return "" if parent == "." else parent


class FilePlanBuilder:
    """Accumulates file entries, refusing a second entry for the same path."""

    def __init__(self) -> None:
        self._entries: dict[str, FileEntry] = {}

    def add(self, path: str, content: str) -> FileEntry:
        if path in self._entries:
            raise DuplicateFilePath(path)
        entry = FileEntry(path=path, content=content)
        self._entries[path] = entry
        return entry

    def extend(self, entries: Iterable[FileEntry]) -> None:
        for entry in entries:
            self.add(entry.path, entry.content)

    def build(self) -> tuple[FileEntry, ...]:
        return tuple(self._entries.values())

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class ScaffoldPlan(BaseModel):
    """Everything derived from a selection, ready to be materialized."""

    model_config = ConfigDict(frozen=True)

    selection: Selection
    folders: tuple[str, ...]
    files: tuple[FileEntry, ...]
    manifest: Manifest
    install_commands: InstallCommandSet

    def file_paths(self) -> list[str]:
        return [entry.path for entry in self.files]
