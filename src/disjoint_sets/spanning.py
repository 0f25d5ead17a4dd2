"""Kruskal's minimum spanning forest on top of :class:`DisjointSetForest`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .structures import DisjointSetForest

Edge = Tuple[int, int, float]


@dataclass
class SpanningForest:
    """Edges kept by Kruskal's algorithm together with the resulting forest."""

    edges: List[Edge]
    total_weight: float
    forest: DisjointSetForest

    @property
    def component_count(self) -> int:
        return self.forest.set_count


def minimum_spanning_forest(size: int, edges: Sequence[Edge]) -> SpanningForest:
    """Return a minimum spanning forest of the graph on `size` vertices.

    Edges of equal weight are considered in input order.
    """

    forest = DisjointSetForest(size)
    if not edges:
        return SpanningForest(edges=[], total_weight=0.0, forest=forest)

    weights = np.asarray([edge[2] for edge in edges], dtype=float)
    order = np.argsort(weights, kind="stable")

    kept: List[Edge] = []
    total = 0.0
    for position in order:
        left, right, weight = edges[position]
        if forest.connected(left, right):
            continue
        forest.union(left, right)
        kept.append((left, right, weight))
        total += float(weight)
    return SpanningForest(edges=kept, total_weight=total, forest=forest)


__all__ = ["Edge", "SpanningForest", "minimum_spanning_forest"]
