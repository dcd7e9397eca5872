"""Error taxonomy for scaffold generation.

Every failure a run can hit derives from :class:`ScaffoldError`.  All of them
are terminal: the orchestrator never retries, and the CLI reports the first
one raised.  Everything except :class:`WriteFailure` is detected while
planning, before the filesystem is touched.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every error raised while generating a project."""


class InvalidProjectName(ScaffoldError):
    """The project name contains characters outside ``[A-Za-z0-9_-]``."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Invalid project name {name!r}: use only letters, digits, '-' and '_'"
        )


class ProjectAlreadyExists(ScaffoldError):
    """The target project directory is already present on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(
            f"Project directory already exists: {self.path} "
            "(remove it or choose another name)"
        )


class UnresolvedIdentifier(ScaffoldError):
    """A selected identifier has no entry in the content registry."""

    def __init__(self, category: str, identifier: str) -> None:
        self.category = category
        self.identifier = identifier
        super().__init__(f"Unknown {category} {identifier!r}: no template registered")


class DuplicateFilePath(ScaffoldError):
    """Two file derivations target the same relative path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Duplicate file path in plan: {path}")


class UnknownPackageManager(ScaffoldError):
    """The package manager is not one of npm, yarn or pnpm."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Unknown package manager {name!r} (expected one of: npm, yarn, pnpm)"
        )


class WriteFailure(ScaffoldError):
    """Writing a planned file failed after materialization had started.

    Files written before the failure are left in place.  Inspect and delete
    the project directory before retrying.
    """

    def __init__(self, path: str | Path, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to write {self.path}: {cause}")
