"""Boilercreate configuration.

A single, immutable settings object threaded explicitly through the
orchestrator.  Uses a Pydantic v2 model so values are validated at
construction time and can be built from environment variables without
boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ScaffoldConfig(BaseModel):
    """Global generation settings.

    Instances are created once by the CLI (usually via :meth:`from_env`) and
    passed to ``ProjectGenerator``; nothing else reads process-wide state.
    """

    model_config = ConfigDict(frozen=True)

    output_dir: Path = Field(default=Path("."), description="Parent of generated projects")
    version: str = Field(default="1.0.0", description="Initial version in package.json")
    author: str = Field(default="")
    license: str = Field(default="ISC")
    port: int = Field(default=3000, ge=1, le=65535, description="Default HTTP port")
    node_version: str = Field(default="20", description="Node.js image / CI version")
    dependency_version: str = Field(
        default="latest", description="Version specifier written for every dependency"
    )
    max_parallel_writes: int = Field(
        default=8, ge=1, description="Maximum concurrent file writes while materializing"
    )

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def project_root(self, project_name: str) -> Path:
        """Directory a project named *project_name* is generated into."""
        return self.output_dir / project_name

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            BOILERCREATE_OUTPUT_DIR, BOILERCREATE_VERSION, BOILERCREATE_AUTHOR,
            BOILERCREATE_LICENSE, BOILERCREATE_PORT, BOILERCREATE_NODE_VERSION,
            BOILERCREATE_DEPENDENCY_VERSION, BOILERCREATE_MAX_PARALLEL_WRITES.

        Keyword *overrides* take precedence over the environment; ``None``
        values are ignored.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("BOILERCREATE_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["BOILERCREATE_OUTPUT_DIR"])
        if os.environ.get("BOILERCREATE_VERSION"):
            kwargs["version"] = os.environ["BOILERCREATE_VERSION"]
        if os.environ.get("BOILERCREATE_AUTHOR"):
            kwargs["author"] = os.environ["BOILERCREATE_AUTHOR"]
        if os.environ.get("BOILERCREATE_LICENSE"):
            kwargs["license"] = os.environ["BOILERCREATE_LICENSE"]
        if os.environ.get("BOILERCREATE_PORT"):
            kwargs["port"] = int(os.environ["BOILERCREATE_PORT"])
        if os.environ.get("BOILERCREATE_NODE_VERSION"):
            kwargs["node_version"] = os.environ["BOILERCREATE_NODE_VERSION"]
        if os.environ.get("BOILERCREATE_DEPENDENCY_VERSION"):
            kwargs["dependency_version"] = os.environ["BOILERCREATE_DEPENDENCY_VERSION"]
        if os.environ.get("BOILERCREATE_MAX_PARALLEL_WRITES"):
            kwargs["max_parallel_writes"] = int(os.environ["BOILERCREATE_MAX_PARALLEL_WRITES"])

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
