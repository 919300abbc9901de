"""
onion-imports - Import direction rules for onion architectures

Layers are declared outermost first. A file may reference its own layer and
anything further in; references that point outward, or sideways into a
parallel layer of the same rank, are reported as violations.
"""

__version__ = "0.3.0"

from .api import check_project
from .config import CheckConfig, load_config
from .layers import (
    Classification,
    Layer,
    LayerModel,
    Rank,
    ReferenceEdge,
    Violation,
    ViolationChecker,
    check_edges,
    classify,
)
from .models import CheckReport, Finding

__all__ = [
    "check_project",  # Main entry point
    "check_edges",  # Core check over caller-supplied edges
    "classify",
    "CheckConfig",
    "CheckReport",
    "Classification",
    "Finding",
    "Layer",
    "LayerModel",
    "Rank",
    "ReferenceEdge",
    "Violation",
    "ViolationChecker",
    "load_config",
]
