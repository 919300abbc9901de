"""Reference discovery: file walking and import/export extraction."""

from .references import extract_references, language_for
from .scanner import ReferenceScanner, ScannedFile, ScanStats, scan_project

__all__ = [
    "ReferenceScanner",
    "ScannedFile",
    "ScanStats",
    "extract_references",
    "language_for",
    "scan_project",
]
