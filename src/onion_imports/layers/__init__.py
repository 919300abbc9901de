"""Onion layer model, classification and violation checking."""

from .checker import ViolationChecker, check_edges
from .classifier import classify, find_sub_layer
from .models import (
    MESSAGE_TEMPLATE,
    Classification,
    Layer,
    LayerModel,
    Rank,
    RankKind,
    ReferenceEdge,
    Violation,
    build_model,
)
from .patterns import PatternSet, matches
from .paths import resolve_target_path

__all__ = [
    "MESSAGE_TEMPLATE",
    "Classification",
    "Layer",
    "LayerModel",
    "PatternSet",
    "Rank",
    "RankKind",
    "ReferenceEdge",
    "Violation",
    "ViolationChecker",
    "build_model",
    "check_edges",
    "classify",
    "find_sub_layer",
    "matches",
    "resolve_target_path",
]
