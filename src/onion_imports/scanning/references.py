"""Regex-based reference extraction.

Finds the statements that tie one file to another and turns each into a
ReferenceEdge carrying the literal target spec:

    JavaScript / TypeScript   import ... from "p", import "p",
                              export ... from "p", export * from "p"
    Python                    relative imports only (from .a import b)

Python absolute imports name modules, not paths, and are left alone.
Comments are blanked before matching so positions stay accurate.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Optional

from ..layers.models import ReferenceEdge

JAVASCRIPT = "javascript"
PYTHON = "python"

_LANGUAGE_BY_SUFFIX = {
    ".js": JAVASCRIPT,
    ".jsx": JAVASCRIPT,
    ".mjs": JAVASCRIPT,
    ".cjs": JAVASCRIPT,
    ".ts": JAVASCRIPT,
    ".tsx": JAVASCRIPT,
    ".mts": JAVASCRIPT,
    ".cts": JAVASCRIPT,
    ".vue": JAVASCRIPT,
    ".svelte": JAVASCRIPT,
    ".py": PYTHON,
    ".pyi": PYTHON,
}

# Strings are matched alongside comments so that "/*" or "//" inside a
# literal is never taken for a comment.
_JS_TOKEN = re.compile(
    r"""(?P<string>"(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*'|`(?:[^`\\]|\\.)*`)"""
    r"""|(?P<comment>//[^\n]*|/\*.*?\*/)""",
    re.DOTALL,
)

_JS_FROM = re.compile(
    r"""(?m)(?:^|;)[ \t]*(?P<kind>import|export)\b"""
    r"""(?P<clause>(?:(?!\b(?:import|export)\b)[\w$\s{},*])*?)\bfrom\s*"""
    r"""(?P<quote>['"])(?P<spec>[^'"\n]*)(?P=quote)"""
)
_JS_SIDE_EFFECT = re.compile(
    r"""(?m)(?:^|;)[ \t]*(?P<kind>import)\s*(?P<quote>['"])(?P<spec>[^'"\n]*)(?P=quote)"""
)

_PY_COMMENT = re.compile(r"#[^\n]*")
_PY_FROM = re.compile(
    r"(?m)^[ \t]*(?P<kind>from)[ \t]+(?P<dots>\.+)(?P<module>[\w.]*)[ \t]+import\b"
)
_PY_NAME = re.compile(r"[A-Za-z_]\w*")


def language_for(path: str) -> Optional[str]:
    """Return the reference syntax used by ``path``, or None if unsupported."""
    return _LANGUAGE_BY_SUFFIX.get(PurePosixPath(path).suffix.lower())


def _blank(match: re.Match) -> str:
    return re.sub(r"[^\n]", " ", match.group())


def _blank_js_comment(match: re.Match) -> str:
    return _blank(match) if match.group("comment") is not None else match.group()


def _position(content: str, offset: int) -> tuple[int, int]:
    """1-based line and column of ``offset``."""
    line = content.count("\n", 0, offset) + 1
    column = offset - (content.rfind("\n", 0, offset) + 1) + 1
    return line, column


def _extract_javascript(content: str, source_file: str) -> list[tuple[int, ReferenceEdge]]:
    text = _JS_TOKEN.sub(_blank_js_comment, content)

    found: list[tuple[int, ReferenceEdge]] = []
    for pattern in (_JS_FROM, _JS_SIDE_EFFECT):
        for match in pattern.finditer(text):
            offset = match.start("kind")
            line, column = _position(text, offset)
            found.append(
                (
                    offset,
                    ReferenceEdge(
                        source_file=source_file,
                        target_spec=match.group("spec"),
                        line=line,
                        column=column,
                        kind=match.group("kind"),
                    ),
                )
            )
    return found


def _python_imported_names(text: str, start: int) -> list[str]:
    """Names after ``import`` in ``from . import a, b as c`` (parens allowed)."""
    rest = text[start:].lstrip(" \t")
    if rest.startswith("("):
        end = rest.find(")")
        clause = rest[1:end] if end >= 0 else rest[1:]
    else:
        clause = rest.split("\n", 1)[0].split(";", 1)[0].rstrip("\\")

    names = []
    for part in clause.split(","):
        match = _PY_NAME.match(part.strip())
        if match:
            names.append(match.group())
    return names


def _extract_python(content: str, source_file: str) -> list[tuple[int, ReferenceEdge]]:
    text = _PY_COMMENT.sub(_blank, content)

    found: list[tuple[int, ReferenceEdge]] = []
    for match in _PY_FROM.finditer(text):
        dots = len(match.group("dots"))
        prefix = "./" if dots == 1 else "../" * (dots - 1)
        module = match.group("module").strip(".")

        if module:
            specs = [prefix + module.replace(".", "/")]
        else:
            specs = [prefix + name for name in _python_imported_names(text, match.end())]

        offset = match.start("kind")
        line, column = _position(text, offset)
        for spec in specs:
            found.append(
                (
                    offset,
                    ReferenceEdge(
                        source_file=source_file,
                        target_spec=spec,
                        line=line,
                        column=column,
                        kind="import",
                    ),
                )
            )
    return found


def extract_references(
    content: str, source_file: str, language: Optional[str] = None
) -> list[ReferenceEdge]:
    """Extract reference edges from a file's content.

    Args:
        content: File content
        source_file: Project-relative path of the file
        language: Override for the syntax inferred from the suffix

    Returns:
        Edges in source order (empty for unsupported files)
    """
    language = language or language_for(source_file)
    if language == JAVASCRIPT:
        found = _extract_javascript(content, source_file)
    elif language == PYTHON:
        found = _extract_python(content, source_file)
    else:
        return []

    # Stable by offset; one Python statement may produce several edges
    found.sort(key=lambda item: item[0])
    return [edge for _, edge in found]
