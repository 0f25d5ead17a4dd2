import pytest

from disjoint_sets.spanning import minimum_spanning_forest
from disjoint_sets.structures import InvalidArgument, OutOfRange


def test_minimum_spanning_forest_on_square_with_diagonal():
    edges = [(0, 1, 1.0), (1, 2, 2.0), (2, 3, 1.0), (3, 0, 3.0), (0, 2, 5.0)]
    result = minimum_spanning_forest(4, edges)
    assert result.edges == [(0, 1, 1.0), (2, 3, 1.0), (1, 2, 2.0)]
    assert result.total_weight == pytest.approx(4.0)
    assert result.component_count == 1


def test_minimum_spanning_forest_keeps_components_apart():
    result = minimum_spanning_forest(5, [(0, 1, 2.0), (3, 4, 1.0)])
    assert result.component_count == 3
    assert not result.forest.connected(1, 3)


def test_minimum_spanning_forest_without_edges():
    result = minimum_spanning_forest(3, [])
    assert result.edges == []
    assert result.total_weight == 0.0
    assert result.component_count == 3


def test_minimum_spanning_forest_rejects_bad_input():
    with pytest.raises(OutOfRange):
        minimum_spanning_forest(2, [(0, 2, 1.0)])
    with pytest.raises(InvalidArgument):
        minimum_spanning_forest(-1, [])
