"""Layer model for onion architecture checks.

Defines Layer, Rank, LayerModel, Classification, ReferenceEdge and Violation.

A LayerModel is an ordered list of ranks. Rank 0 is the outermost ring
(UI, adapters, I/O); the last rank is the innermost domain core. A rank is
either a single layer or a group of parallel layers of equal depth that must
not reference each other.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, Optional, Sequence

from ..exceptions import InvalidConfigError
from .patterns import PatternSet, compile_patterns

MESSAGE_TEMPLATE = 'it is forbidden to reference layer "{other_layer}" from layer "{current_layer}"'


@dataclass(frozen=True, eq=False)
class Layer:
    """A named set of path patterns.

    Layers compare by identity: two Layer objects with the same name and
    patterns are still different layers.
    """

    name: str
    patterns: tuple[str, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise InvalidConfigError("name", self.name, "layer name must be a non-empty string")
        if isinstance(self.patterns, str):
            raise InvalidConfigError(
                "patterns", self.patterns, "patterns must be a list of strings"
            )
        patterns = tuple(self.patterns)
        if not patterns:
            raise InvalidConfigError(
                f"{self.name}.patterns", list(patterns), "a layer needs at least one pattern"
            )
        for pattern in patterns:
            if not isinstance(pattern, str) or not pattern:
                raise InvalidConfigError(
                    f"{self.name}.patterns", pattern, "patterns must be non-empty strings"
                )
        object.__setattr__(self, "patterns", patterns)

    def __repr__(self) -> str:
        return f"Layer(name={self.name!r}, patterns={list(self.patterns)!r})"

    @property
    def pattern_set(self) -> PatternSet:
        return compile_patterns(self.patterns)

    def contains(self, path: str) -> bool:
        """Return whether ``path`` belongs to this layer."""
        return self.pattern_set.matches(path)


class RankKind(Enum):
    """Shape of a rank."""

    SINGLE = "single"
    PARALLEL = "parallel"


@dataclass(frozen=True)
class Rank:
    """One position in the layer ordering.

    Use ``Rank.single`` or ``Rank.parallel`` rather than the constructor.
    """

    kind: RankKind
    layers: tuple[Layer, ...]

    def __post_init__(self) -> None:
        layers = tuple(self.layers)
        if not layers:
            raise InvalidConfigError("layers", [], "a parallel layer group needs at least one layer")
        if self.kind is RankKind.SINGLE and len(layers) != 1:
            raise InvalidConfigError("layers", layers, "a single rank holds exactly one layer")
        names = [layer.name for layer in layers]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise InvalidConfigError(
                "layers", duplicates, "layer names must be unique within a parallel group"
            )
        object.__setattr__(self, "layers", layers)

    @classmethod
    def single(cls, layer: Layer) -> "Rank":
        return cls(RankKind.SINGLE, (layer,))

    @classmethod
    def parallel(cls, layers: Iterable[Layer]) -> "Rank":
        return cls(RankKind.PARALLEL, tuple(layers))

    @property
    def is_parallel(self) -> bool:
        return self.kind is RankKind.PARALLEL

    @property
    def names(self) -> list[str]:
        return [layer.name for layer in self.layers]


def _layer_from_config(raw: Any, key: str) -> Layer:
    if not isinstance(raw, dict):
        raise InvalidConfigError(key, raw, "expected a table with 'name' and 'patterns'")
    unknown = set(raw) - {"name", "patterns"}
    if unknown:
        raise InvalidConfigError(key, sorted(unknown), "unknown layer keys")
    if "name" not in raw or "patterns" not in raw:
        raise InvalidConfigError(key, raw, "a layer requires 'name' and 'patterns'")

    name, patterns = raw["name"], raw["patterns"]
    if not isinstance(name, str) or not name:
        raise InvalidConfigError(f"{key}.name", name, "layer name must be a non-empty string")
    if not isinstance(patterns, (list, tuple)) or not patterns:
        raise InvalidConfigError(
            f"{key}.patterns", patterns, "patterns must be a list with at least one entry"
        )
    for i, pattern in enumerate(patterns):
        if not isinstance(pattern, str) or not pattern:
            raise InvalidConfigError(
                f"{key}.patterns[{i}]", pattern, "patterns must be non-empty strings"
            )
    return Layer(name=name, patterns=tuple(patterns))


class LayerModel:
    """Ordered ranks, outermost first. Read-only once built."""

    MIN_RANKS = 2

    def __init__(self, ranks: Iterable[Rank]):
        self._ranks: tuple[Rank, ...] = tuple(ranks)
        if len(self._ranks) < self.MIN_RANKS:
            raise InvalidConfigError(
                "layers",
                len(self._ranks),
                f"at least {self.MIN_RANKS} layers are required",
            )

    @classmethod
    def from_config(cls, layers: Any) -> "LayerModel":
        """Build a model from the configuration ``layers`` value.

        Each item is either a layer table ``{"name": ..., "patterns": [...]}``
        or a list of such tables, which forms a parallel group.

        Raises:
            InvalidConfigError: If the structure is malformed
        """
        if not isinstance(layers, (list, tuple)):
            raise InvalidConfigError("layers", layers, "expected a list of layers")

        ranks: list[Rank] = []
        for i, item in enumerate(layers):
            key = f"layers[{i}]"
            if isinstance(item, (list, tuple)):
                if not item:
                    raise InvalidConfigError(
                        key, [], "a parallel layer group needs at least one layer"
                    )
                members = [_layer_from_config(raw, f"{key}[{j}]") for j, raw in enumerate(item)]
                ranks.append(Rank.parallel(members))
            else:
                ranks.append(Rank.single(_layer_from_config(item, key)))
        return cls(ranks)

    def to_config(self) -> list[Any]:
        """Inverse of ``from_config``."""
        result: list[Any] = []
        for rank in self._ranks:
            tables = [{"name": l.name, "patterns": list(l.patterns)} for l in rank.layers]
            result.append(tables if rank.is_parallel else tables[0])
        return result

    @property
    def ranks(self) -> tuple[Rank, ...]:
        return self._ranks

    def __len__(self) -> int:
        return len(self._ranks)

    def __getitem__(self, index: int) -> Rank:
        return self._ranks[index]

    def __iter__(self) -> Iterator[Rank]:
        return iter(self._ranks)

    def __repr__(self) -> str:
        return f"LayerModel({[rank.names for rank in self._ranks]!r})"

    def layers(self) -> Iterator[tuple[int, Layer]]:
        """Yield ``(rank_index, layer)`` for every layer, outermost first."""
        for index, rank in enumerate(self._ranks):
            for layer in rank.layers:
                yield index, layer


@dataclass(frozen=True)
class Classification:
    """The rank and sub-layer a file path resolved to."""

    rank_index: int
    layer: Layer


@dataclass(frozen=True)
class ReferenceEdge:
    """A reference from one source file to a target literal.

    ``target_spec`` is whatever literal the statement carried. Only string
    values are path references.
    """

    source_file: str
    target_spec: Any
    line: int = 0
    column: int = 0
    kind: str = "import"

    @property
    def source_dir(self) -> str:
        return posixpath.dirname(self.source_file)


@dataclass(frozen=True)
class Violation:
    """A forbidden reference from ``source_layer`` into ``target_layer``."""

    source_layer: str
    target_layer: str
    target_path: Optional[str] = None

    @property
    def message(self) -> str:
        return MESSAGE_TEMPLATE.format(
            other_layer=self.target_layer, current_layer=self.source_layer
        )


def build_model(ranks: Sequence[Any]) -> LayerModel:
    """Build a model from Layers and lists of Layers."""
    return LayerModel(
        Rank.parallel(item) if isinstance(item, (list, tuple)) else Rank.single(item)
        for item in ranks
    )
