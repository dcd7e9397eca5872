"""Shared pytest fixtures for the Boilercreate test suite.

Provides reusable fixtures for:
- Temporary output directories
- Selections covering the common toggle combinations
- A small in-memory content registry
- Configuration pointing at the temporary output directory
"""

from __future__ import annotations

from pathlib import Path

import pytest

from boilercreate.catalog import Category
from boilercreate.config import ScaffoldConfig
from boilercreate.registry import ContentRegistry, load_default_registry
from boilercreate.scaffolder.templates import TemplateRenderer
from boilercreate.selection import Selection


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Parent directory that generated projects are written into."""
    out = tmp_path / "output"
    out.mkdir()
    return out


@pytest.fixture
def scaffold_config(output_dir: Path) -> ScaffoldConfig:
    """Configuration writing into the temporary output directory."""
    return ScaffoldConfig(output_dir=output_dir)


# ---------------------------------------------------------------------------
# Selections
# ---------------------------------------------------------------------------

@pytest.fixture
def minimal_selection() -> Selection:
    """Nothing selected, every toggle at its default."""
    return Selection(project_name="demo")


@pytest.fixture
def security_selection() -> Selection:
    """Two middleware, npm, JavaScript."""
    return Selection(
        project_name="demo",
        middleware=["cors", "helmet"],
        package_manager="npm",
    )


@pytest.fixture
def full_selection() -> Selection:
    """Every category populated and every toggle switched on."""
    return Selection(
        project_name="full-stack",
        libraries=["mongoose", "socket.io"],
        middleware=["cors", "express-rate-limit", "serve-favicon"],
        services=["redis", "jsonwebtoken"],
        use_typescript=True,
        use_docker=True,
        use_cicd=True,
        package_manager="pnpm",
    )


# ---------------------------------------------------------------------------
# Registry & rendering
# ---------------------------------------------------------------------------

@pytest.fixture
def registry() -> ContentRegistry:
    """The registry built from the shipped content files."""
    return load_default_registry()


@pytest.fixture
def tiny_registry() -> ContentRegistry:
    """A registry holding only a handful of bodies."""
    return ContentRegistry(
        {
            Category.LIBRARY: {"mongoose": "export function applyMongoose(app) {}\n"},
            Category.MIDDLEWARE: {
                "cors": "export function applyCors(app) {}\n",
                "helmet": "export function applyHelmet(app) {}\n",
            },
            Category.SERVICE: {},
        }
    )


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()
