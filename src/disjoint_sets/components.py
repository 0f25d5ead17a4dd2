"""Tabular pipelines that group labelled records with a disjoint-set forest."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

try:
    from tqdm import tqdm

    _TQDM_AVAILABLE = True
except ImportError:  # pragma: no cover - optional dependency
    _TQDM_AVAILABLE = False

from .labels import LabelIndex, normalize_label
from .similarity import similar_pairs
from .spanning import minimum_spanning_forest
from .structures import DisjointSetForest


@dataclass
class ComponentStats:
    """Summary metrics for a grouping run."""

    total_nodes: int
    total_edges: int
    merged_edges: int
    redundant_edges: int
    skipped_edges: int
    component_count: int
    largest_component: int
    runtime_seconds: float


@dataclass
class ComponentResult:
    """Result bundle returned by :class:ComponentFinder."""

    dataframe: pd.DataFrame
    cluster_map: Dict[int, List[int]]
    stats: ComponentStats


@dataclass
class SpanningResult:
    """Edges of a minimum spanning forest, as returned by :meth:ComponentFinder.span."""

    dataframe: pd.DataFrame
    total_weight: float
    component_count: int
    runtime_seconds: float


@dataclass
class ComponentConfig:
    """Configuration parameters for :class:ComponentFinder."""

    source_column: str = "source"
    target_column: str = "target"
    weight_column: str | None = None
    max_weight: float | None = None
    label_column: str = "label"
    similarity_threshold: float = 0.8
    tfidf_analyzer: str = "char"
    tfidf_ngram_range: Tuple[int, int] = (2, 4)
    normalize_labels: bool = False
    use_tqdm: bool | None = None
    verbose: bool = True


def describe_components(forest: DisjointSetForest, labels: Sequence[str]) -> pd.DataFrame:
    """Return one row per element with its component id, size and representative label."""

    roots = forest.labels()
    sizes = [forest.size_of(index) for index in range(len(forest))]
    first_member: Dict[int, int] = {}
    for index, root in enumerate(roots):
        first_member.setdefault(int(root), index)

    frame = pd.DataFrame(
        {
            "label": list(labels),
            "component_id": roots,
            "component_size": sizes,
        }
    )
    representative = {root: labels[index] for root, index in first_member.items()}
    frame["component_label"] = frame["component_id"].map(representative)
    return frame


class ComponentFinder:
    """Group the rows of edge lists or label columns into disjoint sets."""

    def __init__(self, config: ComponentConfig | None = None) -> None:
        self.config = config or ComponentConfig()

    def connect(
        self,
        edges: pd.DataFrame,
        output_path: str | Path | None = None,
    ) -> ComponentResult:
        """Find the connected components of the graph described by `edges`."""

        config = self.config
        required = [config.source_column, config.target_column]
        if config.weight_column:
            required.append(config.weight_column)
        self._require_columns(edges, required)
        if config.max_weight is not None and not config.weight_column:
            raise ValueError("max_weight requires a weight column")

        verbose = config.verbose
        overall_start_time = time.time()
        if verbose:
            print("--- Connected Components Started ---")
            print("\n1. Indexing node labels...")

        t0 = time.time()
        index = LabelIndex(normalize=config.normalize_labels)
        sources = edges[config.source_column].fillna("").astype(str).tolist()
        targets = edges[config.target_column].fillna("").astype(str).tolist()
        weights = self._weights(edges)
        pairs: List[Tuple[int, int]] = []
        skipped = 0
        for position, (source, target) in enumerate(zip(sources, targets)):
            left = index.add(source) if source.strip() else None
            right = index.add(target) if target.strip() else None
            if left is None or right is None or not self._admissible(weights, position):
                skipped += 1
                continue
            pairs.append((left, right))
        if verbose:
            print(f"   Indexed {len(index)} nodes from {len(edges)} edges ({skipped} skipped).")
            print(f"   Done in {time.time() - t0:.2f}s")

        t0 = time.time()
        if verbose:
            print("2. Merging edge endpoints...")
        forest = DisjointSetForest(len(index))
        merged, redundant = self._merge_pairs(forest, pairs, "   Merging Edges")
        if verbose:
            print(f"   Merged {merged} edges, {redundant} already connected.")
            print(f"   Done in {time.time() - t0:.2f}s")

        result = self._finish(forest, index.labels, len(edges), merged, redundant, skipped, overall_start_time)
        self._report(result, output_path)
        return result

    def span(
        self,
        edges: pd.DataFrame,
        output_path: str | Path | None = None,
    ) -> SpanningResult:
        """Return the edges of a minimum spanning forest of the weighted graph."""

        config = self.config
        if not config.weight_column:
            raise ValueError("a weight column is required to build a spanning forest")
        self._require_columns(edges, [config.source_column, config.target_column, config.weight_column])

        verbose = config.verbose
        overall_start_time = time.time()
        if verbose:
            print("--- Minimum Spanning Forest Started ---")
            print("\n1. Indexing weighted edges...")

        index = LabelIndex(normalize=config.normalize_labels)
        sources = edges[config.source_column].fillna("").astype(str).tolist()
        targets = edges[config.target_column].fillna("").astype(str).tolist()
        weights = self._weights(edges)
        weighted: List[Tuple[int, int, float]] = []
        for position, (source, target) in enumerate(zip(sources, targets)):
            weight = weights[position]
            if not source.strip() or not target.strip() or math.isnan(weight):
                continue
            weighted.append((index.add(source), index.add(target), weight))

        t0 = time.time()
        if verbose:
            print(f"   Indexed {len(index)} nodes and {len(weighted)} usable edges.")
            print("2. Running Kruskal's algorithm...")
        spanning = minimum_spanning_forest(len(index), weighted)
        dataframe = pd.DataFrame(
            [(index.label_of(left), index.label_of(right), weight) for left, right, weight in spanning.edges],
            columns=[config.source_column, config.target_column, config.weight_column],
        )
        elapsed = time.time() - overall_start_time
        if verbose:
            print(f"   Kept {len(spanning.edges)} edges with total weight {spanning.total_weight:g}.")
            print(f"   Done in {time.time() - t0:.2f}s")

        if output_path is not None:
            save_dataframe(dataframe, output_path)
            if verbose:
                print(f"\n   Processing complete. Results saved to '{output_path}'")
        if verbose:
            print(f"\n--- Minimum Spanning Forest Finished in {elapsed:.2f} seconds ---")

        return SpanningResult(
            dataframe=dataframe,
            total_weight=spanning.total_weight,
            component_count=spanning.component_count,
            runtime_seconds=elapsed,
        )

    def link(
        self,
        frame: pd.DataFrame,
        output_path: str | Path | None = None,
    ) -> ComponentResult:
        """Group rows whose `label_column` values are textually similar."""

        config = self.config
        self._require_columns(frame, [config.label_column])

        verbose = config.verbose
        overall_start_time = time.time()
        if verbose:
            print("--- Similarity Linking Started ---")
            print("\n1. Vectorizing labels and scoring pairs...")

        t0 = time.time()
        texts = frame[config.label_column].fillna("").astype(str).tolist()
        if config.normalize_labels:
            texts = [normalize_label(text) for text in texts]
        pairs = similar_pairs(
            texts,
            config.similarity_threshold,
            analyzer=config.tfidf_analyzer,
            ngram_range=config.tfidf_ngram_range,
        )
        if verbose:
            print(f"   Found {len(pairs)} pairs at similarity >= {config.similarity_threshold}.")
            print(f"   Done in {time.time() - t0:.2f}s")

        t0 = time.time()
        if verbose:
            print("2. Merging similar rows...")
        forest = DisjointSetForest(len(texts))
        merged, redundant = self._merge_pairs(forest, pairs, "   Merging Pairs")
        if verbose:
            print(f"   Done in {time.time() - t0:.2f}s")

        result = self._finish(forest, texts, len(pairs), merged, redundant, 0, overall_start_time)
        annotated = frame.reset_index(drop=True).copy()
        for column in ("component_id", "component_size", "component_label"):
            annotated[column] = result.dataframe[column]
        result.dataframe = annotated
        self._report(result, output_path)
        return result

    @property
    def _use_tqdm(self) -> bool:
        if self.config.use_tqdm is not None:
            return self.config.use_tqdm and _TQDM_AVAILABLE
        return _TQDM_AVAILABLE

    @staticmethod
    def _require_columns(frame: pd.DataFrame, columns: Iterable[str]) -> None:
        for column in columns:
            if column not in frame.columns:
                raise KeyError(f"Column '{column}' not found in dataframe")

    def _weights(self, edges: pd.DataFrame) -> Optional[List[float]]:
        if not self.config.weight_column:
            return None
        return pd.to_numeric(edges[self.config.weight_column], errors="coerce").astype(float).tolist()

    def _admissible(self, weights: Optional[List[float]], position: int) -> bool:
        if self.config.max_weight is None or weights is None:
            return True
        weight = weights[position]
        return not math.isnan(weight) and weight <= self.config.max_weight

    def _merge_pairs(
        self,
        forest: DisjointSetForest,
        pairs: Sequence[Tuple[int, int]],
        description: str,
    ) -> Tuple[int, int]:
        iterator: Iterable[Tuple[int, int]] = pairs
        if pairs and self._use_tqdm:
            iterator = tqdm(pairs, desc=description, unit="edge")

        merged = 0
        redundant = 0
        for left, right in iterator:
            if forest.connected(left, right):
                redundant += 1
                continue
            forest.union(left, right)
            merged += 1
        return merged, redundant

    @staticmethod
    def _finish(
        forest: DisjointSetForest,
        labels: Sequence[str],
        total_edges: int,
        merged: int,
        redundant: int,
        skipped: int,
        start_time: float,
    ) -> ComponentResult:
        dataframe = describe_components(forest, labels)
        cluster_map = forest.groups()
        largest = max((len(members) for members in cluster_map.values()), default=0)
        stats = ComponentStats(
            total_nodes=len(forest),
            total_edges=total_edges,
            merged_edges=merged,
            redundant_edges=redundant,
            skipped_edges=skipped,
            component_count=forest.set_count,
            largest_component=largest,
            runtime_seconds=time.time() - start_time,
        )
        return ComponentResult(dataframe=dataframe, cluster_map=cluster_map, stats=stats)

    def _report(self, result: ComponentResult, output_path: str | Path | None) -> None:
        verbose = self.config.verbose
        if verbose:
            stats = result.stats
            print("\n--- Results Summary ---")
            print(f"   - Total nodes processed: {stats.total_nodes}")
            print(f"   - Components found: {stats.component_count}")
            clusters_by_size = sorted(result.cluster_map.values(), key=len, reverse=True)
            print("\n   --- Sample of Largest Components Found ---")
            for rank, members in enumerate(clusters_by_size[:10]):
                if len(members) <= 1:
                    break
                label = result.dataframe.loc[members[0], "component_label"]
                print(f"   Component {rank + 1} (Size: {len(members)}): '{label}'")

        if output_path is not None:
            save_dataframe(result.dataframe, output_path)
            if verbose:
                print(f"\n   Processing complete. Results saved to '{output_path}'")

        if verbose:
            print(f"\n--- Finished in {result.stats.runtime_seconds:.2f} seconds ---")


def save_dataframe(dataframe: pd.DataFrame, output_path: str | Path) -> None:
    path = Path(output_path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        dataframe.to_csv(path, index=False)
        return
    if suffix in {".xls", ".xlsx"}:
        dataframe.to_excel(path, index=False)
        return
    raise ValueError(f"Unsupported output file format: '{suffix}'")


__all__ = [
    "ComponentConfig",
    "ComponentFinder",
    "ComponentResult",
    "ComponentStats",
    "SpanningResult",
    "describe_components",
    "save_dataframe",
]
