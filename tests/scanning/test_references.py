"""Tests for import/export reference extraction."""

import pytest

from onion_imports.config import DEFAULT_EXTENSIONS
from onion_imports.scanning.references import extract_references, language_for


def specs(content, path="src/ui/app.ts"):
    return [edge.target_spec for edge in extract_references(content, path)]


class TestJavaScriptImports:
    @pytest.mark.parametrize(
        "statement",
        [
            'import foo from "./foo";',
            "import foo from './foo';",
            'import { a, b as c } from "./foo";',
            'import * as ns from "./foo";',
            'import foo, { bar } from "./foo";',
            'import type { T } from "./foo";',
            'import "./foo";',
            "import './foo'",
            'import{a}from"./foo"',
        ],
    )
    def test_import_forms(self, statement):
        assert specs(statement) == ["./foo"]

    @pytest.mark.parametrize(
        "statement",
        [
            'export { bar } from "./foo";',
            'export * from "./foo";',
            'export * as ns from "./foo";',
            'export type { T } from "./foo";',
        ],
    )
    def test_export_forms(self, statement):
        edges = extract_references(statement, "src/index.ts")
        assert [e.target_spec for e in edges] == ["./foo"]
        assert edges[0].kind == "export"

    def test_multiline_clause(self):
        content = 'import {\n  a,\n  b,\n} from "../business-logic/service";\n'
        edges = extract_references(content, "src/ui/app.ts")
        assert [e.target_spec for e in edges] == ["../business-logic/service"]
        assert edges[0].line == 1

    def test_local_exports_are_not_references(self):
        content = 'export const name = "./foo";\nexport default function x() {}\n'
        assert specs(content) == []

    def test_require_and_dynamic_import_not_extracted(self):
        content = 'const a = require("./a");\nconst b = await import("./b");\n'
        assert specs(content) == []

    def test_commented_out_imports_ignored(self):
        content = (
            '// import a from "./a";\n'
            '/* import b from "./b";\n'
            '   export * from "./c"; */\n'
            'import d from "./d";\n'
        )
        edges = extract_references(content, "src/x.ts")
        assert [e.target_spec for e in edges] == ["./d"]
        assert edges[0].line == 4

    def test_trailing_comment_inside_multiline_clause(self):
        content = 'import {\n  render, // used below\n  mount, /* lazy */\n} from "../ui/app";\n'
        edges = extract_references(content, "src/business-logic/foo.ts")
        assert [e.target_spec for e in edges] == ["../ui/app"]
        assert edges[0].line == 1

    def test_trailing_comment_after_statement(self):
        content = 'import a from "./a"; // outer\nimport b from "./b";\n'
        assert specs(content) == ["./a", "./b"]

    def test_comment_markers_inside_strings(self):
        content = 'const a = "src/*";\nimport x from "../ui/app";\nconst b = "*/";\n'
        edges = extract_references(content, "src/business-logic/foo.ts")
        assert [e.target_spec for e in edges] == ["../ui/app"]
        assert (edges[0].line, edges[0].column) == (2, 1)

    def test_line_comment_marker_inside_strings(self):
        content = (
            "const url = 'https://example.com';\n"
            'const glob = `src/**/*.ts`;\n'
            'import x from "./x";\n'
        )
        assert specs(content) == ["./x"]

    def test_specifier_containing_slashes_kept(self):
        assert specs('import a from "../ui//a";') == ["../ui//a"]

    def test_positions(self):
        content = 'const x = 1;\n\n  import a from "./a";\n'
        (edge,) = extract_references(content, "src/x.js")
        assert edge.line == 3
        assert edge.column == 3
        assert edge.kind == "import"
        assert edge.source_file == "src/x.js"

    def test_several_statements_on_one_line(self):
        assert specs('import a from "./a"; import b from "./b";') == ["./a", "./b"]

    def test_statement_does_not_swallow_following_import(self):
        content = 'export default foo\n\nimport bar from "./bar";\n'
        (edge,) = extract_references(content, "src/x.js")
        assert edge.kind == "import"
        assert edge.line == 3

    def test_source_order(self):
        content = 'import "./styles";\nimport a from "./a";\nexport * from "./b";\n'
        assert specs(content) == ["./styles", "./a", "./b"]


class TestPythonImports:
    def test_relative_module(self):
        assert specs("from .models import Order\n", "src/core/service.py") == ["./models"]

    def test_parent_package_module(self):
        content = "from ..ui.widgets import Button\n"
        assert specs(content, "src/io/reader.py") == ["../ui/widgets"]

    def test_deeper_parents(self):
        assert specs("from ...a import b\n", "x/y/z/m.py") == ["../../a"]

    def test_package_relative_names(self):
        content = "from . import models, views as v\n"
        assert specs(content, "src/app/main.py") == ["./models", "./views"]

    def test_parenthesised_names(self):
        content = "from .. import (\n    ui,\n    io,  # reader\n)\n"
        edges = extract_references(content, "src/app/main.py")
        assert [e.target_spec for e in edges] == ["../ui", "../io"]
        assert all(e.line == 1 for e in edges)

    def test_absolute_imports_ignored(self):
        content = "import os\nfrom pathlib import Path\nfrom src.ui import app\n"
        assert specs(content, "src/io/reader.py") == []

    def test_commented_import_ignored(self):
        assert specs("# from .ui import x\n", "src/io/reader.py") == []


class TestLanguageDetection:
    @pytest.mark.parametrize(
        "path,language",
        [
            ("a.ts", "javascript"),
            ("a.TSX", "javascript"),
            ("a.mjs", "javascript"),
            ("a.py", "python"),
            ("a.md", None),
            ("Makefile", None),
        ],
    )
    def test_language_for(self, path, language):
        assert language_for(path) == language

    def test_unsupported_files_yield_nothing(self):
        assert extract_references('import a from "./a"', "README.md") == []

    def test_language_override(self):
        edges = extract_references('import a from "./a"', "README.md", language="javascript")
        assert len(edges) == 1

    @pytest.mark.parametrize("extension", DEFAULT_EXTENSIONS)
    def test_default_extensions_are_all_understood(self, extension):
        assert language_for(f"src/file{extension}") is not None

    def test_vue_script_block(self):
        content = '<template><p>Don\'t</p></template>\n<script>\nimport Card from "../ui/card";\n</script>\n'
        assert specs(content, "src/io/view.vue") == ["../ui/card"]
