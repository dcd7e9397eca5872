"""Tests for entry-point synthesis (boilercreate.scaffolder.entry_point)."""

from __future__ import annotations

import pytest

from boilercreate.catalog import Framework
from boilercreate.scaffolder.entry_point import library_import, synthesize_entry_point

pytestmark = pytest.mark.unit


def test_no_libraries() -> None:
    source = synthesize_entry_point(Framework.EXPRESS, [])
    assert source.startswith("import express from 'express';\n")
    assert "apply" not in source
    assert "const app = express();" in source
    assert "export default app;" in source
    assert "require(" not in source


def test_imports_and_applies_in_selection_order() -> None:
    source = synthesize_entry_point("express", ["socket.io", "mongoose"])

    socket_import = source.index("import { applySocketIo } from './lib/socket.io.js';")
    mongoose_import = source.index("import { applyMongoose } from './lib/mongoose.js';")
    socket_call = source.index("applySocketIo(app);")
    mongoose_call = source.index("applyMongoose(app);")

    assert socket_import < mongoose_import
    assert mongoose_import < socket_call < mongoose_call


def test_applies_after_app_is_created() -> None:
    source = synthesize_entry_point("express", ["mongoose"])
    assert source.index("const app = express();") < source.index("applyMongoose(app);")


def test_port_fallback() -> None:
    source = synthesize_entry_point("express", [], port=8080)
    assert "process.env.PORT || 8080" in source


def test_framework_label_in_greeting() -> None:
    assert "Hello from Express!" in synthesize_entry_point("express", [])


def test_library_import_context() -> None:
    assert library_import("swagger-ui-express") == {
        "id": "swagger-ui-express",
        "file": "swagger-ui-express",
    }


def test_unknown_framework() -> None:
    with pytest.raises(ValueError):
        synthesize_entry_point("koa", [])
