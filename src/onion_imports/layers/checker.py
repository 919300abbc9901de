"""Violation detection for reference edges.

For a source file at rank ``r`` the checker looks at rank ``r`` and every
outer rank ``r-1 .. 0``. A target found in any of them, other than the
source's own sub-layer, is a violation. Inner ranks are never consulted, so
inward references always pass.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Optional

from ..logging_config import get_logger
from .classifier import classify, find_sub_layer
from .models import Classification, LayerModel, ReferenceEdge, Violation
from .paths import PathLike, relative_to_root, resolve_target_path

logger = get_logger(__name__)


class ViolationChecker:
    """Applies the onion ordering rule to reference edges."""

    def __init__(self, model: LayerModel, project_root: Optional[PathLike] = None):
        self.model = model
        self.project_root = project_root

    def classify_source(self, source_file: PathLike) -> Optional[Classification]:
        return classify(relative_to_root(source_file, self.project_root), self.model)

    def check(self, source: Classification, target_path: str) -> list[Violation]:
        """Return every violation caused by referencing ``target_path``.

        One violation is reported per scanned rank whose layers contain the
        target, so overlapping patterns may yield more than one.
        """
        violations: list[Violation] = []
        for index in range(source.rank_index, -1, -1):
            other = find_sub_layer(target_path, self.model[index])
            if other is not None and other is not source.layer:
                violations.append(
                    Violation(
                        source_layer=source.layer.name,
                        target_layer=other.name,
                        target_path=target_path,
                    )
                )
        return violations

    def check_edge(
        self, edge: ReferenceEdge, source: Optional[Classification] = None
    ) -> list[Violation]:
        """Check a single edge.

        Args:
            edge: The reference to check
            source: Pre-computed classification of ``edge.source_file``;
                computed on demand when omitted

        Returns:
            Violations for this edge (empty when ``target_spec`` is not a string or
            the source file is outside all layers)
        """
        target_path = resolve_target_path(edge.source_file, edge.target_spec, self.project_root)
        if target_path is None:
            return []

        if source is None:
            source = self.classify_source(edge.source_file)
        if source is None:
            return []

        violations = self.check(source, target_path)
        for violation in violations:
            logger.debug(
                f"{edge.source_file}:{edge.line} {violation.source_layer} -> "
                f"{violation.target_layer} ({target_path})"
            )
        return violations

    def check_edges(self, edges: Iterable[ReferenceEdge]) -> Iterator[tuple[ReferenceEdge, Violation]]:
        """Check a stream of edges, classifying each source file once."""
        classifications: dict[str, Optional[Classification]] = {}
        for edge in edges:
            if not isinstance(edge.target_spec, str):
                continue
            if edge.source_file not in classifications:
                classifications[edge.source_file] = self.classify_source(edge.source_file)
            source = classifications[edge.source_file]
            if source is None:
                continue
            for violation in self.check_edge(edge, source):
                yield edge, violation


def check_edges(
    edges: Iterable[ReferenceEdge],
    model: LayerModel,
    project_root: Optional[PathLike] = None,
) -> list[tuple[ReferenceEdge, Violation]]:
    """Check all ``edges`` against ``model`` and collect the violations."""
    return list(ViolationChecker(model, project_root).check_edges(edges))
