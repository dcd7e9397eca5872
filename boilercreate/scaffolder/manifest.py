"""Package manifest assembly.

Derives the generated project's ``package.json`` contents and the two install
commands for the chosen package manager.  Runtime dependencies are exactly
the framework plus every selected component; dev-dependencies come only from
the toggles.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from boilercreate.catalog import Framework, PackageManager
from boilercreate.config import ScaffoldConfig
from boilercreate.errors import UnknownPackageManager
from boilercreate.selection import Selection

InstallCommandSet = tuple[str, ...]

SCRIPT_ORDER: tuple[str, ...] = ("start", "dev", "build", "test", "lint", "format")

# Scripts npm runs without the ``run`` verb.
_NPM_BUILTIN_SCRIPTS = frozenset({"start", "test"})

# Jest only loads ES modules through Node's VM modules API.
JEST_COMMAND = "node --experimental-vm-modules node_modules/jest/bin/jest.js"


# ---------------------------------------------------------------------------
# Manifest model
# ---------------------------------------------------------------------------


class Manifest(BaseModel):
    """The generated project's package descriptor."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str = Field(default="1.0.0")
    description: str = Field(default="")
    main: str
    type: str = Field(default="module")
    scripts: dict[str, str] = Field(default_factory=dict)
    dependencies: tuple[str, ...] = Field(default=())
    dev_dependencies: tuple[str, ...] = Field(default=())
    keywords: tuple[str, ...] = Field(default=())
    author: str = Field(default="")
    license: str = Field(default="ISC")

    def to_package_json(self, dependency_version: str = "latest") -> dict[str, Any]:
        """Return the ``package.json`` payload with a fixed key order.

        Dependency maps are sorted by package name, the way package managers
        write them back.
        """
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "main": self.main,
            "type": self.type,
            "scripts": dict(self.scripts),
            "keywords": list(self.keywords),
            "author": self.author,
            "license": self.license,
            "dependencies": {
                name: dependency_version for name in sorted(self.dependencies)
            },
            "devDependencies": {
                name: dependency_version for name in sorted(self.dev_dependencies)
            },
        }


# ---------------------------------------------------------------------------
# Package manager helpers
# ---------------------------------------------------------------------------


def resolve_package_manager(name: str | PackageManager) -> PackageManager:
    """Map *name* to a ``PackageManager``; raise ``UnknownPackageManager`` otherwise."""
    if isinstance(name, PackageManager):
        return name
    try:
        return PackageManager(str(name).strip().lower())
    except ValueError:
        raise UnknownPackageManager(str(name)) from None


def project_install_command(package_manager: str | PackageManager) -> str:
    """Command that installs everything already listed in ``package.json``."""
    return f"{resolve_package_manager(package_manager).value} install"


def run_script_command(package_manager: str | PackageManager, script: str) -> str:
    """Return the command that runs *script* with *package_manager*.

    Examples::

        run_script_command("npm", "dev")   -> "npm run dev"
        run_script_command("npm", "test")  -> "npm test"
        run_script_command("yarn", "dev")  -> "yarn dev"
    """
    manager = resolve_package_manager(package_manager)
    if manager is PackageManager.NPM and script not in _NPM_BUILTIN_SCRIPTS:
        return f"npm run {script}"
    return f"{manager.value} {script}"


# ---------------------------------------------------------------------------
# Derivations
# ---------------------------------------------------------------------------


def derive_dependencies(selection: Selection) -> tuple[str, ...]:
    """Framework first, then libraries, middleware and services in selection order."""
    ordered = [selection.framework.value]
    ordered.extend(identifier for _, identifier in selection.components())
    return tuple(dict.fromkeys(ordered))


def derive_dev_dependencies(selection: Selection) -> tuple[str, ...]:
    """Tooling packages implied by the TypeScript / ESLint / Prettier toggles."""
    dev: list[str] = []
    if selection.use_typescript:
        dev.extend(
            ["typescript", "tsx", "@types/node", "@types/express", "@types/jest", "ts-jest"]
        )
    else:
        dev.append("nodemon")
    dev.append("jest")
    if selection.use_eslint:
        dev.append("eslint")
        if selection.use_typescript:
            dev.extend(["@typescript-eslint/parser", "@typescript-eslint/eslint-plugin"])
    if selection.use_prettier:
        dev.append("prettier")

    runtime = set(derive_dependencies(selection))
    return tuple(name for name in dict.fromkeys(dev) if name not in runtime)


def derive_scripts(selection: Selection) -> dict[str, str]:
    """Build the ``scripts`` map; keys for disabled toggles are left out."""
    if selection.use_typescript:
        scripts = {
            "start": "node dist/app.js",
            "dev": "tsx watch src/app.ts",
            "build": "tsc",
        }
    else:
        scripts = {
            "start": "node src/app.js",
            "dev": "nodemon src/app.js",
        }
    scripts["test"] = JEST_COMMAND
    if selection.use_eslint:
        scripts["lint"] = "eslint ."
    if selection.use_prettier:
        scripts["format"] = "prettier --write ."
    return {name: scripts[name] for name in SCRIPT_ORDER if name in scripts}


def entry_path(selection: Selection) -> str:
    """Path of the file ``node`` runs: compiled output for TypeScript projects."""
    return "dist/app.js" if selection.use_typescript else "src/app.js"


def install_commands(
    package_manager: str | PackageManager,
    dependencies: tuple[str, ...],
    dev_dependencies: tuple[str, ...],
) -> InstallCommandSet:
    """Return ``(install runtime deps, install dev deps)`` for *package_manager*."""
    manager = resolve_package_manager(package_manager)
    prefix = f"{manager.value} {manager.install_verb}"
    return (
        f"{prefix} {' '.join(dependencies)}",
        f"{prefix} {manager.dev_flag} {' '.join(dev_dependencies)}",
    )


def assemble_manifest(
    selection: Selection, config: Optional[ScaffoldConfig] = None
) -> tuple[Manifest, InstallCommandSet]:
    """Derive the package manifest and install commands for *selection*.

    Raises:
        UnknownPackageManager: If ``selection.package_manager`` is not npm,
            yarn or pnpm.  Checked before anything else is derived.
    """
    config = config or ScaffoldConfig()
    manager = resolve_package_manager(selection.package_manager)
    framework = Framework.parse(selection.framework)

    dependencies = derive_dependencies(selection)
    dev_dependencies = derive_dev_dependencies(selection)

    manifest = Manifest(
        name=selection.project_name,
        version=config.version,
        description=f"A {framework.label} backend project created with Boilercreate",
        main=entry_path(selection),
        scripts=derive_scripts(selection),
        dependencies=dependencies,
        dev_dependencies=dev_dependencies,
        keywords=(framework.value, "backend", "boilercreate"),
        author=config.author,
        license=config.license,
    )
    return manifest, install_commands(manager, dependencies, dev_dependencies)
