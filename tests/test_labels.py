import pytest

from disjoint_sets.labels import LabelIndex, normalize_label


def test_normalize_label_folds_case_and_spaces():
    assert normalize_label("  Alpha   Beta ") == "alpha beta"


def test_normalize_label_handles_unicode():
    assert normalize_label("José Álvarez") == "jose alvarez"


def test_normalize_label_empty_values():
    assert normalize_label("") == ""
    assert normalize_label(None) == ""


def test_label_index_assigns_first_seen_order():
    index = LabelIndex.from_values(["b", "a", "b", "c"])
    assert index.labels == ["b", "a", "c"]
    assert index.index_of("c") == 2
    assert index.label_of(1) == "a"
    assert len(index) == 3
    assert "a" in index
    assert "z" not in index


def test_label_index_unknown_label_raises_key_error():
    with pytest.raises(KeyError):
        LabelIndex().index_of("missing")


def test_label_index_can_merge_spelling_variants():
    index = LabelIndex.from_values(["Café", "cafe", "CAFE "], normalize=True)
    assert len(index) == 1
    assert index.index_of("Cafe") == 0
