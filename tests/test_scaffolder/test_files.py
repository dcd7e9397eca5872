"""Tests for file planning (boilercreate.scaffolder.files and .plan)."""

from __future__ import annotations

import json

import pytest

from boilercreate.catalog import Category
from boilercreate.errors import DuplicateFilePath, UnknownPackageManager, UnresolvedIdentifier
from boilercreate.registry import ContentRegistry
from boilercreate.scaffolder.entry_point import synthesize_entry_point
from boilercreate.scaffolder.files import (
    eslint_config,
    jest_config,
    plan_files,
    resolve_components,
    tsconfig,
)
from boilercreate.scaffolder.folders import plan_folders
from boilercreate.scaffolder.plan import FileEntry, FilePlanBuilder
from boilercreate.selection import Selection

pytestmark = pytest.mark.unit


def _paths(entries: tuple[FileEntry, ...]) -> list[str]:
    return [entry.path for entry in entries]


def _content(entries: tuple[FileEntry, ...], path: str) -> str:
    return next(entry.content for entry in entries if entry.path == path)


# ---------------------------------------------------------------------------
# Component resolution
# ---------------------------------------------------------------------------


class TestResolveComponents:
    def test_unknown_middleware(self, registry: ContentRegistry) -> None:
        with pytest.raises(UnresolvedIdentifier) as exc_info:
            plan_files(Selection(middleware=["cors", "left-pad"]), registry)
        assert exc_info.value.category == "middleware"
        assert exc_info.value.identifier == "left-pad"

    def test_identifier_in_wrong_category(self, registry: ContentRegistry) -> None:
        with pytest.raises(UnresolvedIdentifier):
            plan_files(Selection(libraries=["cors"]), registry)

    def test_missing_body(self, tiny_registry: ContentRegistry) -> None:
        with pytest.raises(UnresolvedIdentifier):
            resolve_components(Selection(middleware=["morgan"]), tiny_registry)

    def test_order(self, registry: ContentRegistry, full_selection: Selection) -> None:
        resolved = resolve_components(full_selection, registry)
        assert [(cat, found.entry.value) for cat, found in resolved] == list(
            full_selection.components()
        )


# ---------------------------------------------------------------------------
# plan_files
# ---------------------------------------------------------------------------


class TestPlanFiles:
    def test_minimal_javascript(self, registry: ContentRegistry, minimal_selection: Selection) -> None:
        paths = _paths(plan_files(minimal_selection, registry))
        assert paths == [
            "src/app.js",
            "src/config/index.js",
            "src/controllers/index.js",
            "src/models/index.js",
            "src/routes/index.js",
            "src/utils/index.js",
            "test/app.test.js",
            "README.md",
            ".gitignore",
            ".env.example",
            "jest.config.json",
            ".eslintrc.json",
            ".prettierrc",
        ]

    def test_component_modules_are_verbatim(self, registry: ContentRegistry, security_selection: Selection) -> None:
        entries = plan_files(security_selection, registry)
        assert _content(entries, "src/middlewares/cors.js") == registry.require(
            Category.MIDDLEWARE, "cors"
        ).content
        assert "src/middlewares/helmet.js" in _paths(entries)

    def test_component_index_reexports_in_order(self, registry: ContentRegistry) -> None:
        entries = plan_files(Selection(middleware=["helmet", "cors"]), registry)
        index = _content(entries, "src/middlewares/index.js")
        assert index.index("./helmet.js") < index.index("./cors.js")
        assert "src/lib/index.js" not in _paths(entries)

    def test_typescript_extension(self, registry: ContentRegistry) -> None:
        paths = _paths(plan_files(Selection(use_typescript=True, libraries=["mongoose"]), registry))
        assert "src/app.ts" in paths
        assert "src/lib/mongoose.ts" in paths
        assert "tsconfig.json" in paths
        assert "src/types/index.ts" in paths
        assert not any(path.endswith(".js") for path in paths)

    def test_entry_point_text_shared_by_both_languages(self, registry: ContentRegistry) -> None:
        libraries = ["socket.io", "mongoose"]
        ts = _content(plan_files(Selection(use_typescript=True, libraries=libraries), registry), "src/app.ts")
        js = _content(plan_files(Selection(libraries=libraries), registry), "src/app.js")
        assert ts == js == synthesize_entry_point("express", libraries)

    def test_camel_case_selection_uses_hyphenated_file(self, registry: ContentRegistry) -> None:
        paths = _paths(plan_files(Selection(middleware=["expressRateLimit"]), registry))
        assert "src/middlewares/express-rate-limit.js" in paths

    def test_socket_io_file_name(self, registry: ContentRegistry) -> None:
        entries = plan_files(Selection(libraries=["socket.io"]), registry)
        assert "src/lib/socket.io.js" in _paths(entries)
        assert "export * from './socket.io.js';" in _content(entries, "src/lib/index.js")
        assert "import { applySocketIo } from './lib/socket.io.js';" in _content(
            entries, "src/app.js"
        )

    def test_toggles_off(self, registry: ContentRegistry) -> None:
        paths = _paths(
            plan_files(Selection(use_eslint=False, use_prettier=False), registry)
        )
        assert ".eslintrc.json" not in paths
        assert ".prettierrc" not in paths
        assert "Dockerfile" not in paths
        assert ".github/workflows/main.yml" not in paths

    def test_full_selection_extras(self, registry: ContentRegistry, full_selection: Selection) -> None:
        paths = _paths(plan_files(full_selection, registry))
        for path in (
            "Dockerfile",
            ".dockerignore",
            "docker-compose.yml",
            ".github/workflows/main.yml",
            "public/.gitkeep",
        ):
            assert path in paths

    def test_paths_unique(self, registry: ContentRegistry, full_selection: Selection) -> None:
        paths = _paths(plan_files(full_selection, registry))
        assert len(paths) == len(set(paths))

    @pytest.mark.parametrize(
        "selection",
        [
            Selection(),
            Selection(use_typescript=True, use_docker=True, use_cicd=True),
            Selection(
                libraries=["typeorm"],
                middleware=["serve-favicon", "cors"],
                services=["passport"],
                use_docker=True,
            ),
        ],
    )
    def test_every_parent_is_a_planned_folder(self, registry: ContentRegistry, selection: Selection) -> None:
        folders = set(plan_folders(selection))
        for entry in plan_files(selection, registry):
            assert entry.parent == "" or entry.parent in folders, entry.path

    def test_unknown_package_manager(self, registry: ContentRegistry) -> None:
        with pytest.raises(UnknownPackageManager):
            plan_files(Selection(package_manager="bun"), registry)


# ---------------------------------------------------------------------------
# Synthesized content
# ---------------------------------------------------------------------------


class TestSynthesizedContent:
    def test_readme_mentions_project_and_components(self, registry: ContentRegistry, full_selection: Selection) -> None:
        readme = _content(plan_files(full_selection, registry), "README.md")
        assert "# full-stack" in readme
        assert "`mongoose`" in readme
        assert "pnpm add --save-dev" in readme

    def test_env_example_lists_component_variables(self, registry: ContentRegistry) -> None:
        env = _content(
            plan_files(Selection(libraries=["mongoose"], services=["redis"]), registry),
            ".env.example",
        )
        assert "PORT=3000" in env
        assert "MONGODB_URI=" in env
        assert "REDIS_URL=" in env

    def test_env_example_variables_not_repeated(self, registry: ContentRegistry) -> None:
        env = _content(
            plan_files(Selection(services=["jsonwebtoken", "passport"]), registry),
            ".env.example",
        )
        assert env.count("JWT_SECRET=") == 1

    def test_gitignore_dist_for_typescript(self, registry: ContentRegistry) -> None:
        assert "dist" in _content(plan_files(Selection(use_typescript=True), registry), ".gitignore")
        assert "dist" not in _content(plan_files(Selection(), registry), ".gitignore")

    def test_base_index_stub(self, registry: ContentRegistry) -> None:
        stub = _content(plan_files(Selection(), registry), "src/routes/index.js")
        assert stub.startswith("// ")

    def test_json_files_parse(self, registry: ContentRegistry) -> None:
        entries = plan_files(Selection(use_typescript=True), registry)
        for path in ("tsconfig.json", "jest.config.json", ".eslintrc.json", ".prettierrc"):
            content = _content(entries, path)
            assert content.endswith("\n")
            json.loads(content)

    def test_tsconfig(self) -> None:
        options = tsconfig()["compilerOptions"]
        assert options["outDir"] == "./dist"
        assert options["module"] == "NodeNext"
        assert options["strict"] is False

    def test_jest_config_javascript_skips_babel(self, registry: ContentRegistry) -> None:
        config = json.loads(_content(plan_files(Selection(), registry), "jest.config.json"))
        assert config == {"testEnvironment": "node", "transform": {}}

    def test_jest_config_typescript_uses_esm_preset(self) -> None:
        config = jest_config(True)
        assert config["preset"] == "ts-jest/presets/default-esm"
        assert config["extensionsToTreatAsEsm"] == [".ts"]
        assert config["transform"]["^.+\\.ts$"][1]["useESM"] is True
        mapper = config["moduleNameMapper"]["^(\\.{1,2}/.*)\\.js$"]
        assert mapper == "$1"

    def test_eslint_config(self) -> None:
        assert "parser" not in eslint_config(False)
        ts = eslint_config(True)
        assert ts["parser"] == "@typescript-eslint/parser"
        assert ts["parserOptions"]["sourceType"] == "module"


# ---------------------------------------------------------------------------
# FilePlanBuilder / FileEntry
# ---------------------------------------------------------------------------


class TestFilePlanBuilder:
    def test_duplicate_path_rejected(self) -> None:
        builder = FilePlanBuilder()
        builder.add("src/app.js", "a")
        with pytest.raises(DuplicateFilePath) as exc_info:
            builder.add("src/app.js", "b")
        assert exc_info.value.path == "src/app.js"

    def test_extend_rejects_duplicates(self) -> None:
        builder = FilePlanBuilder()
        builder.add("Dockerfile", "x")
        with pytest.raises(DuplicateFilePath):
            builder.extend([FileEntry(path="Dockerfile", content="y")])

    def test_build_keeps_insertion_order(self) -> None:
        builder = FilePlanBuilder()
        builder.add("b", "")
        builder.add("a", "")
        assert [entry.path for entry in builder.build()] == ["b", "a"]
        assert "a" in builder
        assert len(builder) == 2

    def test_entry_parent(self) -> None:
        assert FileEntry(path="README.md", content="").parent == ""
        assert FileEntry(path="src/lib/x.js", content="").parent == "src/lib"
