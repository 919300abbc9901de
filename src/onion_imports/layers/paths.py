"""Project-relative path handling.

Every path that reaches the pattern matcher is a forward-slash path relative
to the project root. Absolute paths, Windows separators and ``./`` noise are
normalised here; references are resolved against the directory of the file
that makes them.
"""

from __future__ import annotations

import os
import posixpath
from pathlib import Path
from typing import Any, Optional, Union

PathLike = Union[str, Path]


def to_posix(path: PathLike) -> str:
    """Return ``path`` as a string with forward slashes."""
    return str(path).replace("\\", "/")


def relative_to_root(path: PathLike, project_root: Optional[PathLike] = None) -> str:
    """Express ``path`` relative to ``project_root``.

    Relative paths are assumed to already be project-relative and are only
    normalised. Absolute paths require ``project_root``.
    """
    text = to_posix(path)
    if posixpath.isabs(text) or os.path.isabs(str(path)):
        if project_root is None:
            raise ValueError(f"absolute path {text!r} needs a project root")
        text = to_posix(os.path.relpath(str(path), str(project_root)))
    return posixpath.normpath(text)


def normalize_relative(path: str) -> Optional[str]:
    """Normalise a project-relative path for matching.

    Returns None for paths that cannot belong to the project: empty, the
    root itself, absolute, or escaping the root through ``..``.
    """
    text = to_posix(path).strip()
    if not text or text.startswith("/"):
        return None
    normalized = posixpath.normpath(text)
    if normalized in (".", "..") or normalized.startswith("../"):
        return None
    return normalized


def resolve_target_path(
    source_file: PathLike,
    target_spec: Any,
    project_root: Optional[PathLike] = None,
) -> Optional[str]:
    """Resolve a reference literal to a project-relative path.

    ``target_spec`` is joined onto the source file's directory and normalised; a
    leading ``/`` in it does not reset the join. Non-string specs are
    not path references and resolve to None.

    Example:
        >>> resolve_target_path("src/data-access/foo.js", "../ui/bar.js")
        'src/ui/bar.js'
    """
    if not isinstance(target_spec, str):
        return None

    source = relative_to_root(source_file, project_root)
    source_dir = posixpath.dirname(source)
    spec = to_posix(target_spec)
    joined = f"{source_dir}/{spec}" if source_dir else spec
    return posixpath.normpath(joined or ".")
