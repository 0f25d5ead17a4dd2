"""Link texts whose TF-IDF vectors are close under cosine similarity."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.metrics.pairwise import cosine_similarity

from .structures import DisjointSetForest


def similar_pairs(
    texts: Sequence[str],
    threshold: float,
    analyzer: str = "char",
    ngram_range: Tuple[int, int] = (2, 4),
) -> List[Tuple[int, int]]:
    """Return index pairs ``(i, j)``, ``i < j``, whose similarity reaches `threshold`.

    The full similarity matrix is materialized, so memory grows with the
    square of ``len(texts)``.
    """

    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"threshold must be within [0, 1], got {threshold}")
    if len(texts) < 2:
        return []

    vectorizer = TfidfVectorizer(analyzer=analyzer, ngram_range=ngram_range)
    matrix = vectorizer.fit_transform(texts)
    scores = cosine_similarity(matrix)
    lefts, rights = np.triu_indices(len(texts), k=1)
    # Float rounding can put identical texts a hair below 1.0.
    keep = scores[lefts, rights] >= threshold - 1e-9
    return sorted((int(left), int(right)) for left, right in zip(lefts[keep], rights[keep]))


def link_similar(
    texts: Sequence[str],
    threshold: float,
    analyzer: str = "char",
    ngram_range: Tuple[int, int] = (2, 4),
) -> DisjointSetForest:
    forest = DisjointSetForest(len(texts))
    for left, right in similar_pairs(texts, threshold, analyzer=analyzer, ngram_range=ngram_range):
        forest.union(left, right)
    return forest


__all__ = ["link_similar", "similar_pairs"]
