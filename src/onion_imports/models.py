"""Report models for onion-imports."""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, List

from .layers.models import ReferenceEdge, Violation


@dataclass(frozen=True)
class Finding:
    """A violation anchored at the edge that caused it."""

    edge: ReferenceEdge
    violation: Violation

    @property
    def file(self) -> str:
        return self.edge.source_file

    @property
    def message(self) -> str:
        return self.violation.message

    def to_dict(self) -> dict:
        return {
            "file": self.edge.source_file,
            "line": self.edge.line,
            "column": self.edge.column,
            "kind": self.edge.kind,
            "target": self.edge.target_spec,
            "target_path": self.violation.target_path,
            "source_layer": self.violation.source_layer,
            "target_layer": self.violation.target_layer,
            "message": self.message,
        }


@dataclass
class CheckReport:
    """Result of checking a project."""

    root: str
    findings: List[Finding] = field(default_factory=list)
    files_scanned: int = 0
    files_classified: int = 0
    edges_checked: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def has_violations(self) -> bool:
        return bool(self.findings)

    def by_file(self) -> Dict[str, List[Finding]]:
        """Findings grouped by source file, in first-seen order."""
        grouped: Dict[str, List[Finding]] = OrderedDict()
        for finding in self.findings:
            grouped.setdefault(finding.file, []).append(finding)
        return grouped

    def to_dict(self) -> dict:
        return {
            "root": self.root,
            "summary": {
                "files_scanned": self.files_scanned,
                "files_classified": self.files_classified,
                "edges_checked": self.edges_checked,
                "violations": len(self.findings),
                "errors": len(self.errors),
            },
            "violations": [f.to_dict() for f in self.findings],
            "errors": list(self.errors),
        }
