import pandas as pd
import pytest

from disjoint_sets.components import ComponentConfig, ComponentFinder, describe_components
from disjoint_sets.structures import DisjointSetForest


def _finder(**overrides) -> ComponentFinder:
    return ComponentFinder(ComponentConfig(verbose=False, use_tqdm=False, **overrides))


def _edges() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "source": ["a", "b", "d", "f", "c", None],
            "target": ["b", "c", "e", "f", "a", "g"],
            "weight": ["1", "2", "9", "1", "3", "1"],
        }
    )


def test_describe_components_uses_lowest_index_as_label():
    forest = DisjointSetForest(3)
    forest.union(0, 2)
    frame = describe_components(forest, ["x", "y", "z"])
    assert frame["component_id"].tolist() == [2, 1, 2]
    assert frame["component_size"].tolist() == [2, 1, 2]
    assert frame["component_label"].tolist() == ["x", "y", "x"]


def test_connect_finds_components():
    result = _finder().connect(_edges())
    frame = result.dataframe.set_index("label")

    assert frame.loc["a", "component_id"] == frame.loc["c", "component_id"]
    assert frame.loc["a", "component_size"] == 3
    assert frame.loc["d", "component_label"] == "d"
    assert frame.loc["e", "component_id"] != frame.loc["a", "component_id"]
    assert frame.loc["g", "component_size"] == 1

    stats = result.stats
    assert stats.total_nodes == 7
    assert stats.total_edges == 6
    assert stats.merged_edges == 3
    assert stats.redundant_edges == 2
    assert stats.skipped_edges == 1
    assert stats.component_count == 4
    assert stats.largest_component == 3
    assert sorted(len(members) for members in result.cluster_map.values()) == [1, 1, 2, 3]


def test_connect_skips_heavy_edges():
    result = _finder(weight_column="weight", max_weight=5).connect(_edges())
    frame = result.dataframe.set_index("label")
    assert frame.loc["d", "component_size"] == 1
    assert result.stats.skipped_edges == 2


def test_connect_requires_weight_column_for_max_weight():
    with pytest.raises(ValueError):
        _finder(max_weight=1.0).connect(_edges())


def test_connect_missing_column_raises_key_error():
    with pytest.raises(KeyError):
        _finder(source_column="from").connect(_edges())


def test_connect_can_normalize_labels():
    edges = pd.DataFrame({"source": ["Zoë", "x"], "target": ["y", "ZOE"]})
    result = _finder(normalize_labels=True).connect(edges)
    assert result.stats.total_nodes == 3
    assert result.stats.component_count == 1


def test_span_returns_cheapest_edges():
    result = _finder(weight_column="weight").span(_edges())
    kept = list(result.dataframe.itertuples(index=False, name=None))
    assert kept == [("a", "b", 1.0), ("b", "c", 2.0), ("d", "e", 9.0)]
    assert result.total_weight == pytest.approx(12.0)
    assert result.component_count == 3


def test_span_requires_weight_column():
    with pytest.raises(ValueError):
        _finder().span(_edges())


def test_link_annotates_rows():
    frame = pd.DataFrame({"label": ["Acme Corp", "acme  corp", "Globex"], "city": ["x", "y", "z"]})
    result = _finder(similarity_threshold=0.95, normalize_labels=True).link(frame)
    annotated = result.dataframe
    assert annotated.columns.tolist() == ["label", "city", "component_id", "component_size", "component_label"]
    assert annotated.loc[0, "component_id"] == annotated.loc[1, "component_id"]
    assert annotated.loc[2, "component_size"] == 1
    assert annotated.loc[1, "component_label"] == "acme corp"
    assert result.stats.component_count == 2
