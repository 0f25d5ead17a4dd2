"""Disjoint-set forest library initialization."""

from .structures import DisjointSetForest, InvalidArgument, OutOfRange
from .labels import LabelIndex, normalize_label
from .spanning import SpanningForest, minimum_spanning_forest
from .similarity import link_similar, similar_pairs
from .components import ComponentConfig, ComponentFinder, ComponentResult, ComponentStats, SpanningResult
from .runner import run_file

__all__ = [
    "DisjointSetForest",
    "InvalidArgument",
    "OutOfRange",
    "LabelIndex",
    "normalize_label",
    "SpanningForest",
    "minimum_spanning_forest",
    "link_similar",
    "similar_pairs",
    "ComponentConfig",
    "ComponentFinder",
    "ComponentResult",
    "ComponentStats",
    "SpanningResult",
    "run_file",
]
