"""File planning: every (path, content) pair a selection produces.

Combines four sources:

* component modules copied verbatim from the content registry,
* synthesized files (entry point, index stubs, README, env example),
* conditional tooling files gated on the selection toggles,
* Docker files from :class:`~boilercreate.scaffolder.docker_gen.DockerGenerator`.

All selected identifiers are resolved against the registry before a single
entry is planned, so an unknown identifier fails the whole plan.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from boilercreate.catalog import (
    ENV_VARS,
    STATIC_ASSET_DIR,
    STATIC_ASSET_MIDDLEWARE,
    Category,
    label_for,
    module_stem,
)
from boilercreate.config import ScaffoldConfig
from boilercreate.registry import ContentRegistry, Found
from boilercreate.selection import Selection

from .docker_gen import DockerGenerator
from .entry_point import synthesize_entry_point
from .folders import WORKFLOWS_FOLDER, component_folder
from .manifest import (
    derive_dependencies,
    derive_dev_dependencies,
    derive_scripts,
    install_commands,
    project_install_command,
    resolve_package_manager,
    run_script_command,
)
from .plan import FileEntry, FilePlanBuilder
from .templates import TemplateRenderer


# Base subsystem directory -> heading of its index stub
_SUBSYSTEM_HEADINGS: dict[str, str] = {
    "config": "Configuration settings",
    "controllers": "Export all controllers",
    "models": "Export all models",
    "routes": "Define and export routes",
    "utils": "Utility functions",
}

_COMPONENT_HEADINGS: dict[Category, str] = {
    Category.LIBRARY: "Export all libraries",
    Category.MIDDLEWARE: "Export all custom middlewares",
    Category.SERVICE: "Export all services",
}

_GROUP_TITLES: dict[Category, str] = {
    Category.LIBRARY: "Libraries",
    Category.MIDDLEWARE: "Middleware",
    Category.SERVICE: "Services",
}

_PRETTIER_CONFIG: dict[str, Any] = {"singleQuote": True, "trailingComma": "es5"}


def resolve_components(
    selection: Selection, registry: ContentRegistry
) -> list[tuple[Category, Found]]:
    """Look up every selected component, in selection order.

    Raises:
        UnresolvedIdentifier: For the first identifier missing from *registry*.
    """
    return [
        (category, registry.require(category, identifier))
        for category, identifier in selection.components()
    ]


def plan_files(
    selection: Selection,
    registry: ContentRegistry,
    config: Optional[ScaffoldConfig] = None,
    renderer: Optional[TemplateRenderer] = None,
) -> tuple[FileEntry, ...]:
    """Derive the complete file plan for *selection*.

    Raises:
        UnresolvedIdentifier: A selected identifier has no registry entry.
        DuplicateFilePath: Two derivations target the same path.
        UnknownPackageManager: The package manager is not recognised.
    """
    config = config or ScaffoldConfig()
    renderer = renderer or TemplateRenderer()
    resolved = resolve_components(selection, registry)
    ext = selection.extension
    context = _build_context(selection, config, resolved)

    builder = FilePlanBuilder()

    # 1. Entry point
    builder.add(
        f"src/app.{ext}",
        synthesize_entry_point(
            selection.framework,
            selection.libraries,
            port=config.port,
            renderer=renderer,
        ),
    )

    # 2. Base subsystem index stubs
    for subsystem, heading in _SUBSYSTEM_HEADINGS.items():
        builder.add(
            f"src/{subsystem}/index.{ext}",
            renderer.render("src/index.j2", {"heading": heading, "modules": []}),
        )

    # 3. Component modules, verbatim from the registry, plus their index
    for category in Category:
        found = [entry for cat, entry in resolved if cat is category]
        if not found:
            continue
        folder = component_folder(category)
        stems = [module_stem(item.entry.value) for item in found]
        for stem, item in zip(stems, found):
            builder.add(f"{folder}/{stem}.{ext}", item.content)
        builder.add(
            f"{folder}/index.{ext}",
            renderer.render(
                "src/index.j2",
                {"heading": _COMPONENT_HEADINGS[category], "modules": stems},
            ),
        )

    # 4. Tests and project files
    builder.add(f"test/app.test.{ext}", renderer.render("src/app.test.j2", context))
    builder.add("README.md", renderer.render("README.md.j2", context))
    builder.add(".gitignore", renderer.render("gitignore.j2", context))
    builder.add(".env.example", renderer.render("env.example.j2", context))

    builder.add("jest.config.json", _dump_json(jest_config(selection.use_typescript)))

    if STATIC_ASSET_MIDDLEWARE.intersection(selection.middleware):
        builder.add(f"{STATIC_ASSET_DIR}/.gitkeep", "")

    # 5. TypeScript
    if selection.use_typescript:
        builder.add("tsconfig.json", _dump_json(tsconfig()))
        builder.add("src/types/index.ts", renderer.render("src/types.j2", context))

    # 6. Docker
    builder.extend(DockerGenerator(renderer).generate(selection, config))

    # 7. CI/CD
    if selection.use_cicd:
        builder.add(
            f"{WORKFLOWS_FOLDER}/main.yml",
            renderer.render("github/main.yml.j2", context),
        )

    # 8. Linting and formatting
    if selection.use_eslint:
        builder.add(".eslintrc.json", _dump_json(eslint_config(selection.use_typescript)))
    if selection.use_prettier:
        builder.add(".prettierrc", _dump_json(_PRETTIER_CONFIG))

    return builder.build()


# ---------------------------------------------------------------------------
# Config file payloads
# ---------------------------------------------------------------------------


def tsconfig() -> dict[str, Any]:
    """``tsconfig.json`` for an ES-module Node.js project compiled to ``dist/``.

    Strict mode stays off: component modules are written as untyped
    JavaScript and only renamed to ``.ts``.
    """
    return {
        "compilerOptions": {
            "target": "ES2022",
            "module": "NodeNext",
            "moduleResolution": "NodeNext",
            "outDir": "./dist",
            "rootDir": "./src",
            "strict": False,
            "esModuleInterop": True,
            "skipLibCheck": True,
            "forceConsistentCasingInFileNames": True,
        },
        "include": ["src/**/*"],
        "exclude": ["node_modules", "dist", "**/*.spec.ts", "**/*.test.ts"],
    }


def jest_config(use_typescript: bool) -> dict[str, Any]:
    """``jest.config.json`` running the tests as native ES modules.

    JavaScript projects disable Babel so imports reach Node untouched.
    TypeScript projects use the ts-jest ESM preset and map the ``.js``
    import specifiers back to their ``.ts`` sources.
    """
    if not use_typescript:
        return {"testEnvironment": "node", "transform": {}}
    return {
        "preset": "ts-jest/presets/default-esm",
        "testEnvironment": "node",
        "extensionsToTreatAsEsm": [".ts"],
        "moduleNameMapper": {"^(\\.{1,2}/.*)\\.js$": "$1"},
        "transform": {
            "^.+\\.ts$": ["ts-jest", {"useESM": True, "isolatedModules": True}]
        },
    }


def eslint_config(use_typescript: bool) -> dict[str, Any]:
    """``.eslintrc.json``; the TypeScript variant adds the typescript-eslint parser."""
    config: dict[str, Any] = {
        "env": {"node": True, "es2022": True, "jest": True},
        "extends": ["eslint:recommended"],
        "parserOptions": {"ecmaVersion": "latest", "sourceType": "module"},
        "rules": {},
    }
    if use_typescript:
        config["parser"] = "@typescript-eslint/parser"
        config["plugins"] = ["@typescript-eslint"]
        config["extends"].append("plugin:@typescript-eslint/recommended")
    return config


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _build_context(
    selection: Selection,
    config: ScaffoldConfig,
    resolved: list[tuple[Category, Found]],
) -> dict[str, Any]:
    """Template context shared by the README, env, test and CI templates."""
    manager = resolve_package_manager(selection.package_manager)
    scripts = derive_scripts(selection)

    groups = []
    for category in Category:
        items = [
            {"id": item.entry.value, "label": label_for(item.entry.value)}
            for cat, item in resolved
            if cat is category
        ]
        if items:
            groups.append({"title": _GROUP_TITLES[category], "items": items})

    env_vars: dict[str, None] = {}
    for _, item in resolved:
        for name in ENV_VARS.get(item.entry.value, ()):
            env_vars.setdefault(name, None)

    ci_steps = []
    if selection.use_eslint:
        ci_steps.append(run_script_command(manager, "lint"))
    if selection.use_typescript:
        ci_steps.append(run_script_command(manager, "build"))
    ci_steps.append(run_script_command(manager, "test"))

    return {
        "project_name": selection.project_name,
        "description": "Backend project created with Boilercreate.",
        "framework_label": selection.framework.label,
        "typescript": selection.use_typescript,
        "package_manager": manager.value,
        "port": config.port,
        "node_version": config.node_version,
        "component_groups": groups,
        "env_vars": list(env_vars),
        "scripts": scripts,
        "run_commands": {name: run_script_command(manager, name) for name in scripts},
        "install_commands": install_commands(
            manager,
            derive_dependencies(selection),
            derive_dev_dependencies(selection),
        ),
        "install_command": project_install_command(manager),
        "steps": ci_steps,
    }


def _dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, indent=2) + "\n"
