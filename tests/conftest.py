"""Shared test fixtures for onion-imports.

The reference configuration follows Jeffrey Palermo's onion diagram:

    UI | Data Access | WCF | IO      (parallel, outermost)
    Business Logic
    Object Model                     (innermost)
"""

import copy
from pathlib import Path

import pytest

from onion_imports.layers.models import LayerModel
from onion_imports.logging_config import reset_logging

REFERENCE_LAYERS = [
    [
        {"name": "UI", "patterns": ["src/ui/"]},
        {"name": "Data Access", "patterns": ["src/data-access/"]},
        {"name": "WCF", "patterns": ["src/wcf/"]},
        {"name": "IO", "patterns": ["src/io/"]},
    ],
    {"name": "Business Logic", "patterns": ["src/business-logic/"]},
    {"name": "Object Model", "patterns": ["src/object-model/"]},
]

REFERENCE_TOML = """\
layers = [
    [
        { name = "UI", patterns = ["src/ui/"] },
        { name = "Data Access", patterns = ["src/data-access/"] },
        { name = "WCF", patterns = ["src/wcf/"] },
        { name = "IO", patterns = ["src/io/"] },
    ],
    { name = "Business Logic", patterns = ["src/business-logic/"] },
    { name = "Object Model", patterns = ["src/object-model/"] },
]
"""

PROJECT_FILES = {
    "src/main.ts": (
        'import { App } from "./ui/app";\n'
        'import { Service } from "./business-logic/service";\n'
    ),
    "src/ui/app.ts": (
        'import { Service } from "../business-logic/service";\n'
        'import { Order } from "../object-model/order";\n'
        'import "./styles";\n'
    ),
    "src/data-access/repo.ts": 'import { render } from "../ui/app";\n',
    "src/business-logic/service.ts": (
        "// Services coordinate repositories\n"
        'import { Repo } from "../data-access/repo";\n'
        'export * from "../object-model/order";\n'
    ),
    "src/object-model/order.ts": (
        'import type { Service } from "../business-logic/service";\n'
        "export class Order {}\n"
    ),
    "src/io/reader.py": "from ..ui.widgets import Button\n",
    "src/README.md": 'import x from "./ui/app"\n',
    "node_modules/lib/index.js": 'import app from "../../src/ui/app";\n',
    ".cache/stale.ts": 'import app from "../src/ui/app";\n',
}


def write_files(root: Path, files: dict) -> Path:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def _clean_package_logger():
    """Drop handlers a test (or CLI run) attached to the package logger."""
    yield
    reset_logging()


@pytest.fixture
def reference_layers():
    """Raw layer configuration (fresh copy per test)."""
    return copy.deepcopy(REFERENCE_LAYERS)


@pytest.fixture
def reference_model():
    """The reference onion as a LayerModel."""
    return LayerModel.from_config(copy.deepcopy(REFERENCE_LAYERS))


@pytest.fixture
def onion_project(tmp_path):
    """A small project laid out along the reference onion, with config."""
    write_files(tmp_path, PROJECT_FILES)
    (tmp_path / "onion-imports.toml").write_text(REFERENCE_TOML, encoding="utf-8")
    return tmp_path


@pytest.fixture
def reference_toml():
    """The reference layers as TOML text."""
    return REFERENCE_TOML


@pytest.fixture
def make_project(tmp_path):
    """Factory writing ``{relative path: content}`` into tmp_path."""

    def _make(files: dict) -> Path:
        return write_files(tmp_path, files)

    return _make
