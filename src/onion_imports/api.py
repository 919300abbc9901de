"""Public API for onion-imports.

Example:
    >>> from onion_imports import check_project
    >>>
    >>> report = check_project("/path/to/project")
    >>> for finding in report.findings:
    ...     print(finding.file, finding.edge.line, finding.message)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import CheckConfig, load_config
from .exceptions import InvalidPathError
from .layers.checker import ViolationChecker
from .logging_config import get_logger
from .models import CheckReport, Finding
from .scanning.scanner import ReferenceScanner

logger = get_logger(__name__)


def check_project(
    path: str = ".",
    config_file: Optional[Path] = None,
    config: Optional[CheckConfig] = None,
    **overrides,
) -> CheckReport:
    """Check every source file under ``path`` against the configured layers.

    1. Load configuration (auto-discover TOML + apply overrides), unless a
       ready CheckConfig is given
    2. Scan the tree for import/export references
    3. Classify each file once and check its references

    Args:
        path: Project root; layer patterns are relative to it
        config_file: Optional explicit config file path
        config: Pre-built configuration (skips discovery)
        **overrides: Configuration overrides (e.g. layers=[...], max_files=100)

    Returns:
        CheckReport with every violation found

    Raises:
        OnionImportsError: If configuration is invalid or the path is not a
            directory
    """
    root = Path(path).resolve()
    if not root.is_dir():
        raise InvalidPathError(root, "not a directory")

    if config is None:
        config = load_config(root, config_file=config_file, **overrides)

    scanner = ReferenceScanner(root, config)
    checker = ViolationChecker(config.layers)
    report = CheckReport(root=str(root))

    for scanned in scanner.scan():
        source = checker.classify_source(scanned.path)
        if source is None:
            continue

        report.files_classified += 1
        for edge in scanned.edges:
            report.edges_checked += 1
            for violation in checker.check_edge(edge, source):
                report.findings.append(Finding(edge=edge, violation=violation))

    report.files_scanned = scanner.stats.files_scanned
    report.errors = list(scanner.stats.errors)
    logger.info(
        f"Checked {report.edges_checked} references in {report.files_classified} "
        f"layered files: {len(report.findings)} violations"
    )
    return report
