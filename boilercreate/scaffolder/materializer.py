"""Materialization: turn a plan into files on disk.

The only module in the scaffolder that touches the filesystem.  Steps run in a
fixed order (root, folders, files, ``package.json``) and the first failure
stops the run.  Nothing is rolled back: a ``WriteFailure`` can leave a
partially populated project directory behind.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Iterable

from boilercreate.errors import ProjectAlreadyExists, WriteFailure

from .manifest import Manifest
from .plan import FileEntry

PACKAGE_JSON = "package.json"


async def materialize(
    root: str | Path,
    folders: Iterable[str],
    files: Iterable[FileEntry],
    manifest: Manifest,
    *,
    max_parallel_writes: int = 8,
    dependency_version: str = "latest",
) -> Path:
    """Create the project at *root* from its folder plan, file plan and manifest.

    Args:
        root: Project root directory; must not exist yet.
        folders: Relative directories to create.  All of them exist before the
            first file is written.
        files: Entries to write; each parent must be *root* or a planned folder.
        manifest: Serialized to ``package.json`` once every file is written.
        max_parallel_writes: Upper bound on concurrent file writes.
        dependency_version: Version specifier written for each dependency.

    Returns:
        The project root path.

    Raises:
        ProjectAlreadyExists: *root* exists; nothing has been written.
        WriteFailure: A directory or file could not be written.
    """
    root_path = Path(root)
    await create_root(root_path)
    await create_folders(root_path, folders)
    await write_files(root_path, files, max_parallel_writes=max_parallel_writes)
    await write_manifest(root_path, manifest, dependency_version=dependency_version)
    return root_path


async def create_root(root: Path) -> None:
    """Create *root*, refusing to reuse an existing directory."""
    if root.exists():
        raise ProjectAlreadyExists(root)
    try:
        await asyncio.to_thread(root.mkdir, parents=True, exist_ok=False)
    except FileExistsError:
        raise ProjectAlreadyExists(root) from None
    except OSError as exc:
        raise WriteFailure(root, exc) from exc


async def create_folders(root: Path, folders: Iterable[str]) -> None:
    """Create every planned folder under *root*; existing ones are tolerated."""

    async def _mkdir(folder: str) -> None:
        path = root / folder
        try:
            await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise WriteFailure(path, exc) from exc

    await asyncio.gather(*[_mkdir(folder) for folder in folders])


async def write_files(
    root: Path,
    files: Iterable[FileEntry],
    *,
    max_parallel_writes: int = 8,
) -> list[Path]:
    """Write every entry under *root* with at most *max_parallel_writes* in flight.

    Parents are not created here: a file whose directory is not in the folder
    plan fails with ``WriteFailure``.
    """
    semaphore = asyncio.Semaphore(max(1, max_parallel_writes))

    async def _write(entry: FileEntry) -> Path:
        path = root / entry.path
        async with semaphore:
            try:
                await asyncio.to_thread(_write_file, path, entry.content)
            except OSError as exc:
                raise WriteFailure(path, exc) from exc
        return path

    return list(await asyncio.gather(*[_write(entry) for entry in files]))


async def write_manifest(
    root: Path, manifest: Manifest, *, dependency_version: str = "latest"
) -> Path:
    """Serialize *manifest* to ``<root>/package.json``."""
    path = root / PACKAGE_JSON
    content = json.dumps(
        manifest.to_package_json(dependency_version), indent=2, ensure_ascii=False
    )
    try:
        await asyncio.to_thread(_write_file, path, content + "\n")
    except OSError as exc:
        raise WriteFailure(path, exc) from exc
    return path


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create *path* (never overwrite) with LF line endings."""
    with path.open("x", encoding="utf-8", newline="\n") as handle:
        handle.write(content)
