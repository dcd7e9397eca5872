"""Docker file generation for the generated project.

Uses the Jinja2 templates under ``docker/`` to produce the ``Dockerfile``,
``.dockerignore`` and ``docker-compose.yml``.  The compose file is
parameterized by the project name and adds a container for each backing
store the selected components talk to (MongoDB, PostgreSQL, Redis).
"""

from __future__ import annotations

from typing import Any

from boilercreate.config import ScaffoldConfig
from boilercreate.selection import Selection

from .manifest import entry_path, project_install_command, resolve_package_manager, run_script_command
from .plan import FileEntry
from .templates import TemplateRenderer


# Component id -> compose service for the store it connects to.
_BACKING_SERVICES: dict[str, dict[str, Any]] = {
    "mongoose": {"name": "mongo", "image": "mongo:7", "port": 27017},
    "typeorm": {"name": "postgres", "image": "postgres:16-alpine", "port": 5432},
    "redis": {"name": "redis", "image": "redis:7-alpine", "port": 6379},
}


class DockerGenerator:
    """Plans the Docker files for a selection."""

    # Template name -> output file name
    _DOCKER_FILES: dict[str, str] = {
        "docker/Dockerfile.j2": "Dockerfile",
        "docker/dockerignore.j2": ".dockerignore",
        "docker/docker-compose.yml.j2": "docker-compose.yml",
    }

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def build_context(self, selection: Selection, config: ScaffoldConfig) -> dict[str, Any]:
        """Template context for the Docker templates."""
        manager = resolve_package_manager(selection.package_manager)
        return {
            "project_name": selection.project_name,
            "port": config.port,
            "node_version": config.node_version,
            "package_manager": manager.value,
            "install_command": project_install_command(manager),
            "build_command": run_script_command(manager, "build"),
            "typescript": selection.use_typescript,
            "main": entry_path(selection),
            "backing_services": backing_services(selection),
        }

    def generate(self, selection: Selection, config: ScaffoldConfig) -> list[FileEntry]:
        """Render every Docker file.  Returns nothing when Docker is disabled."""
        if not selection.use_docker:
            return []
        context = self.build_context(selection, config)
        return [
            FileEntry(path=output_name, content=self.renderer.render(template_name, context))
            for template_name, output_name in self._DOCKER_FILES.items()
        ]


def backing_services(selection: Selection) -> list[dict[str, Any]]:
    """Compose services for the stores the selected components use, de-duplicated."""
    services: dict[str, dict[str, Any]] = {}
    for _, identifier in selection.components():
        service = _BACKING_SERVICES.get(identifier)
        if service is not None:
            services.setdefault(service["name"], service)
    return list(services.values())
