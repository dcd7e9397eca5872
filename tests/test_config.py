"""Unit tests for ScaffoldConfig (boilercreate.config).

Tests cover:
- Defaults and validation bounds
- Immutability
- project_root derivation
- from_env (each variable, overrides, invalid values)
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from boilercreate.config import ScaffoldConfig


# ---------------------------------------------------------------------------
# Defaults & validation
# ---------------------------------------------------------------------------


class TestScaffoldConfigDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        config = ScaffoldConfig()
        assert config.output_dir == Path(".")
        assert config.version == "1.0.0"
        assert config.author == ""
        assert config.license == "ISC"
        assert config.port == 3000
        assert config.node_version == "20"
        assert config.dependency_version == "latest"
        assert config.max_parallel_writes == 8

    @pytest.mark.unit
    @pytest.mark.parametrize("port", [0, 65536, -1])
    def test_port_out_of_range(self, port):
        with pytest.raises(ValidationError):
            ScaffoldConfig(port=port)

    @pytest.mark.unit
    def test_max_parallel_writes_must_be_positive(self):
        with pytest.raises(ValidationError):
            ScaffoldConfig(max_parallel_writes=0)

    @pytest.mark.unit
    def test_frozen(self):
        config = ScaffoldConfig()
        with pytest.raises(ValidationError):
            config.port = 8080

    @pytest.mark.unit
    def test_project_root(self, tmp_path: Path):
        config = ScaffoldConfig(output_dir=tmp_path)
        assert config.project_root("demo") == tmp_path / "demo"


# ---------------------------------------------------------------------------
# ScaffoldConfig.from_env
# ---------------------------------------------------------------------------


class TestScaffoldConfigFromEnv:
    @pytest.mark.unit
    def test_defaults_when_no_env(self):
        with patch.dict(os.environ, {}, clear=True):
            config = ScaffoldConfig.from_env()
        assert config == ScaffoldConfig()

    @pytest.mark.unit
    def test_all_variables(self):
        env = {
            "BOILERCREATE_OUTPUT_DIR": "/custom/output",
            "BOILERCREATE_VERSION": "0.1.0",
            "BOILERCREATE_AUTHOR": "Jane Doe",
            "BOILERCREATE_LICENSE": "MIT",
            "BOILERCREATE_PORT": "8080",
            "BOILERCREATE_NODE_VERSION": "22",
            "BOILERCREATE_DEPENDENCY_VERSION": "*",
            "BOILERCREATE_MAX_PARALLEL_WRITES": "2",
        }
        with patch.dict(os.environ, env, clear=True):
            config = ScaffoldConfig.from_env()
        assert config.output_dir == Path("/custom/output")
        assert config.version == "0.1.0"
        assert config.author == "Jane Doe"
        assert config.license == "MIT"
        assert config.port == 8080
        assert config.node_version == "22"
        assert config.dependency_version == "*"
        assert config.max_parallel_writes == 2

    @pytest.mark.unit
    def test_empty_variables_ignored(self):
        with patch.dict(os.environ, {"BOILERCREATE_PORT": ""}, clear=True):
            config = ScaffoldConfig.from_env()
        assert config.port == 3000

    @pytest.mark.unit
    def test_overrides_win(self):
        env = {"BOILERCREATE_OUTPUT_DIR": "/from/env", "BOILERCREATE_PORT": "8080"}
        with patch.dict(os.environ, env, clear=True):
            config = ScaffoldConfig.from_env(output_dir="/from/flag", port=None)
        assert config.output_dir == Path("/from/flag")
        assert config.port == 8080

    @pytest.mark.unit
    def test_invalid_port_rejected(self):
        with patch.dict(os.environ, {"BOILERCREATE_PORT": "70000"}, clear=True):
            with pytest.raises(ValidationError):
                ScaffoldConfig.from_env()
