"""Map file paths onto the layer model."""

from __future__ import annotations

from typing import Optional

from ..logging_config import get_logger
from .models import Classification, Layer, LayerModel, Rank, RankKind

logger = get_logger(__name__)


def find_sub_layer(path: str, rank: Rank) -> Optional[Layer]:
    """Return the layer of ``rank`` that ``path`` belongs to, or None.

    Parallel members are tried in declaration order and the first match
    wins.
    """
    if rank.kind is RankKind.PARALLEL:
        return next((layer for layer in rank.layers if layer.contains(path)), None)

    layer = rank.layers[0]
    return layer if layer.contains(path) else None


def classify(path: str, model: LayerModel) -> Optional[Classification]:
    """Find the outermost rank containing ``path``.

    Returns:
        Classification with rank index and sub-layer, or None when the path
        lies outside every layer
    """
    for index, rank in enumerate(model.ranks):
        layer = find_sub_layer(path, rank)
        if layer is not None:
            logger.debug(f"{path} -> rank {index} ({layer.name})")
            return Classification(rank_index=index, layer=layer)

    logger.debug(f"{path} is outside all layers")
    return None
