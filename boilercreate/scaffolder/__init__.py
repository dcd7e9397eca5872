"""Boilercreate scaffolder -- plans and generates backend project skeletons.

Turns a ``Selection`` into a folder plan, a file plan and a package manifest,
then writes them to disk.

Quick usage::

    from boilercreate.selection import Selection
    from boilercreate.scaffolder import ProjectGenerator

    selection = Selection(
        project_name="demo",
        middleware=["cors", "helmet"],
        package_manager="npm",
    )
    generator = ProjectGenerator(selection)
    project_path = await generator.generate()
"""

from boilercreate.scaffolder.entry_point import synthesize_entry_point
from boilercreate.scaffolder.files import plan_files
from boilercreate.scaffolder.folders import plan_folders
from boilercreate.scaffolder.generator import ProjectGenerator
from boilercreate.scaffolder.manifest import Manifest, assemble_manifest
from boilercreate.scaffolder.materializer import materialize
from boilercreate.scaffolder.plan import FileEntry, ScaffoldPlan
from boilercreate.scaffolder.templates import TemplateRenderer

__all__ = [
    "FileEntry",
    "Manifest",
    "ProjectGenerator",
    "ScaffoldPlan",
    "TemplateRenderer",
    "assemble_manifest",
    "materialize",
    "plan_files",
    "plan_folders",
    "synthesize_entry_point",
]
