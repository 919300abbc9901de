"""
Safe file operations for onion-imports.

Size-limited reads and exclusion checks used by the project scanner.
"""

from pathlib import Path
from typing import Optional

from .exceptions import FileAccessError
from .layers.patterns import compile_patterns


def safe_read_file(
    filepath: Path,
    max_size_bytes: Optional[int] = None,
    encoding: str = "utf-8",
    errors: str = "replace",
) -> str:
    """
    Read a text file, refusing files above ``max_size_bytes``.

    Args:
        filepath: File to read
        max_size_bytes: Size limit (None = unlimited)
        encoding: Text encoding
        errors: How to handle encoding errors

    Returns:
        File contents as string

    Raises:
        FileAccessError: If the file is too large or cannot be read
    """
    try:
        if max_size_bytes is not None:
            size = filepath.stat().st_size
            if size > max_size_bytes:
                raise FileAccessError(
                    filepath, f"File size {size} exceeds limit {max_size_bytes}"
                )
        with open(filepath, encoding=encoding, errors=errors) as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise FileAccessError(filepath, f"Encoding error: {e}")
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")


def should_skip_file(relative_path: str, exclude_patterns: list[str]) -> bool:
    """
    Check if a file should be skipped based on exclusion patterns.

    Args:
        relative_path: Project-relative, forward-slash path
        exclude_patterns: Ignore-style patterns

    Returns:
        True if file should be skipped
    """
    if not exclude_patterns:
        return False
    return compile_patterns(tuple(exclude_patterns)).matches(relative_path)
