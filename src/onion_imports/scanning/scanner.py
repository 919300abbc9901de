"""Project scanner: walks a source tree and collects reference edges."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from ..config import CheckConfig
from ..exceptions import FileAccessError, InvalidPathError
from ..file_ops import safe_read_file, should_skip_file
from ..layers.models import ReferenceEdge
from ..layers.paths import to_posix
from ..logging_config import get_logger
from .references import extract_references

logger = get_logger(__name__)


@dataclass
class ScannedFile:
    """References found in one file."""

    path: str  # project-relative, forward slashes
    edges: list[ReferenceEdge] = field(default_factory=list)


@dataclass
class ScanStats:
    files_scanned: int = 0
    files_skipped: int = 0
    files_errored: int = 0
    errors: list[str] = field(default_factory=list)


class ReferenceScanner:
    """Walks ``root_dir`` and extracts reference edges from source files."""

    def __init__(self, root_dir: Path, config: CheckConfig):
        self.root_dir = Path(root_dir)
        if not self.root_dir.is_dir():
            raise InvalidPathError(self.root_dir, "not a directory")
        self.config = config
        self.stats = ScanStats()
        logger.debug(f"Initialized {self.__class__.__name__} for {self.root_dir}")

    def _walk(self) -> Iterator[tuple[Path, str]]:
        """Yield ``(absolute, relative)`` paths, pruning excluded directories."""
        for dirpath, dirnames, filenames in os.walk(
            self.root_dir, followlinks=self.config.follow_symlinks
        ):
            rel_dir = to_posix(os.path.relpath(dirpath, self.root_dir))
            rel_dir = "" if rel_dir == "." else rel_dir

            kept = []
            for name in sorted(dirnames):
                rel = f"{rel_dir}/{name}" if rel_dir else name
                if name.startswith(".") or should_skip_file(
                    rel + "/", self.config.exclude_patterns
                ):
                    logger.debug(f"Skipped directory: {rel}")
                    continue
                kept.append(name)
            dirnames[:] = kept

            for name in sorted(filenames):
                rel = f"{rel_dir}/{name}" if rel_dir else name
                yield Path(dirpath) / name, rel

    def scan(self) -> Iterator[ScannedFile]:
        """Scan the project and yield one ScannedFile per source file read."""
        extensions = {ext.lower() for ext in self.config.extensions}

        for filepath, rel_path in self._walk():
            if filepath.suffix.lower() not in extensions:
                continue

            if self.stats.files_scanned >= self.config.max_files:
                logger.warning(f"Reached max files limit ({self.config.max_files})")
                break

            if filepath.is_symlink() and not self.config.follow_symlinks:
                self.stats.files_skipped += 1
                logger.debug(f"Skipped (symlink): {rel_path}")
                continue

            if should_skip_file(rel_path, self.config.exclude_patterns):
                self.stats.files_skipped += 1
                logger.debug(f"Skipped (pattern): {rel_path}")
                continue

            try:
                size = filepath.stat().st_size
            except OSError as e:
                self.stats.files_errored += 1
                self.stats.errors.append(f"{rel_path}: {e}")
                logger.warning(f"Cannot stat {rel_path}: {e}")
                continue
            if size > self.config.max_file_size_bytes:
                self.stats.files_skipped += 1
                logger.debug(f"Skipped (size): {rel_path} ({size} bytes)")
                continue

            try:
                content = safe_read_file(filepath, self.config.max_file_size_bytes)
            except FileAccessError as e:
                self.stats.files_errored += 1
                self.stats.errors.append(f"{rel_path}: {e.reason}")
                logger.warning(f"Access error for {rel_path}: {e.reason}")
                continue

            self.stats.files_scanned += 1
            edges = extract_references(content, rel_path)
            logger.debug(f"Analyzed: {rel_path} ({len(edges)} references)")
            yield ScannedFile(path=rel_path, edges=edges)

        logger.info(
            f"Scan complete: {self.stats.files_scanned} scanned, "
            f"{self.stats.files_skipped} skipped, {self.stats.files_errored} errors"
        )


def scan_project(root_dir: Path, config: CheckConfig) -> list[ScannedFile]:
    """Scan ``root_dir`` eagerly and return every ScannedFile."""
    return list(ReferenceScanner(root_dir, config).scan())
