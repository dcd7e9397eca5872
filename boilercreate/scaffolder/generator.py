"""Main scaffolding orchestrator.

Takes a ``Selection`` and generates a complete Express backend project,
composing the planners in a fixed order:

validate -> plan folders -> plan files (registry + entry point) ->
assemble manifest -> materialize.

Planning is pure and raises every validation error before the filesystem is
touched; only :meth:`ProjectGenerator.generate` writes anything.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from boilercreate.config import ScaffoldConfig
from boilercreate.registry import ContentRegistry, load_default_registry
from boilercreate.selection import Selection, validate_project_name

from .files import plan_files
from .folders import plan_folders
from .manifest import assemble_manifest
from .materializer import materialize
from .plan import ScaffoldPlan
from .templates import TemplateRenderer


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a ``Selection``, generates a directory tree containing:
    - an ES-module entry point wiring every selected library
    - one module per selected library, middleware and service
    - index stubs, a test, README, ``.gitignore`` and ``.env.example``
    - optional TypeScript, Docker, GitHub Actions, ESLint and Prettier files
    - ``package.json`` listing exactly the selected packages
    """

    def __init__(
        self,
        selection: Selection,
        config: Optional[ScaffoldConfig] = None,
        registry: Optional[ContentRegistry] = None,
    ) -> None:
        self.selection = selection
        self.config = config or ScaffoldConfig()
        self.registry = registry or load_default_registry()
        self.renderer = TemplateRenderer()

    @property
    def project_root(self) -> Path:
        return self.config.project_root(self.selection.project_name)

    # -- Public API --------------------------------------------------------

    def plan(self) -> ScaffoldPlan:
        """Derive every folder, file and manifest entry without writing anything.

        Raises:
            InvalidProjectName, ProjectAlreadyExists: From name validation,
                which runs first.
            UnresolvedIdentifier, DuplicateFilePath, UnknownPackageManager:
                From the planners.
        """
        validate_project_name(self.selection.project_name, self.config.output_dir)

        folders = plan_folders(self.selection)
        files = plan_files(self.selection, self.registry, self.config, self.renderer)
        manifest, commands = assemble_manifest(self.selection, self.config)

        return ScaffoldPlan(
            selection=self.selection,
            folders=folders,
            files=files,
            manifest=manifest,
            install_commands=commands,
        )

    async def generate(self, plan: Optional[ScaffoldPlan] = None) -> Path:
        """Generate the project and return its root directory.

        Args:
            plan: A plan previously returned by :meth:`plan`.  Computed when
                omitted.

        Raises:
            WriteFailure: A file could not be written.  Files written before
                the failure are left on disk.
        """
        plan = plan or self.plan()
        return await materialize(
            self.project_root,
            plan.folders,
            plan.files,
            plan.manifest,
            max_parallel_writes=self.config.max_parallel_writes,
            dependency_version=self.config.dependency_version,
        )
