"""Folder planning: every directory a selection needs.

The plan is an ordered, de-duplicated tuple of POSIX-style relative paths.
Base directories come first, followed by the conditional groups in a fixed
order, so identical selections always produce identical plans.
"""

from __future__ import annotations

from boilercreate.catalog import STATIC_ASSET_DIR, STATIC_ASSET_MIDDLEWARE, Category
from boilercreate.selection import Selection

FolderPlan = tuple[str, ...]

BASE_FOLDERS: tuple[str, ...] = (
    "src",
    "src/config",
    "src/controllers",
    "src/models",
    "src/routes",
    "src/utils",
    "test",
)

TYPES_FOLDERS: tuple[str, ...] = ("src/types", "test/types")
DOCKER_FOLDER = "docker"
WORKFLOWS_FOLDER = ".github/workflows"


def component_folder(category: Category) -> str:
    """Directory receiving the generated modules of *category*."""
    return f"src/{category.source_dir}"


def plan_folders(selection: Selection) -> FolderPlan:
    """Derive the complete, ordered set of directories for *selection*.

    Component directories are only planned for non-empty categories; the
    static-asset directory only when a middleware that serves from it is
    selected.
    """
    folders: list[str] = list(BASE_FOLDERS)

    for category in Category:
        if selection.identifiers(category):
            folders.append(component_folder(category))

    if selection.use_typescript:
        folders.extend(TYPES_FOLDERS)

    if STATIC_ASSET_MIDDLEWARE.intersection(selection.middleware):
        folders.append(STATIC_ASSET_DIR)

    if selection.use_docker:
        folders.append(DOCKER_FOLDER)

    if selection.use_cicd:
        folders.append(WORKFLOWS_FOLDER)

    return tuple(dict.fromkeys(folders))
