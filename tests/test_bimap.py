"""Tests for the bijective map."""
from __future__ import annotations

import pytest

from gikh.bimap import BiMap, BiMapCollisionError, find_conflict


class TestConstruction:
    def test_lookups_both_directions(self) -> None:
        bm = BiMap([("a", "1"), ("b", "2")])
        assert bm.to_value("a") == "1"
        assert bm.to_key("2") == "b"
        assert bm.to_value("z") is None
        assert bm.to_key("9") is None

    def test_empty(self) -> None:
        bm: BiMap[str, str] = BiMap()
        assert len(bm) == 0
        assert not bm

    def test_duplicate_key_raises(self) -> None:
        with pytest.raises(BiMapCollisionError) as excinfo:
            BiMap([("a", "1"), ("a", "2")])
        assert excinfo.value.kind == "duplicate_key"
        assert excinfo.value.entry == ("a", "2")
        assert excinfo.value.existing == ("a", "1")

    def test_duplicate_value_raises(self) -> None:
        with pytest.raises(BiMapCollisionError) as excinfo:
            BiMap([("a", "1"), ("b", "1")])
        assert excinfo.value.kind == "duplicate_value"
        assert excinfo.value.entry == ("b", "1")

    def test_collision_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            BiMap([("a", "1"), ("a", "1")])

    def test_safe_returns_none_on_duplicates(self) -> None:
        assert BiMap.safe([("a", "1"), ("b", "1")]) is None
        assert BiMap.safe([("a", "1"), ("a", "2")]) is None

    def test_safe_accepts_generator(self) -> None:
        bm = BiMap.safe((k, k.upper()) for k in "abc")
        assert bm is not None
        assert bm.to_key("C") == "c"

    def test_pairs_keep_insertion_order(self) -> None:
        pairs = [("z", "1"), ("a", "2"), ("m", "3")]
        assert BiMap(pairs).pairs() == pairs

    def test_every_pair_round_trips(self) -> None:
        bm = BiMap([("א", "a"), ("ב", "b"), ("ג", "c")])
        for key, value in bm.pairs():
            assert bm.to_key(bm.to_value(key)) == key
            assert bm.to_value(bm.to_key(value)) == value


class TestViews:
    def test_forward_view_is_read_only(self) -> None:
        bm = BiMap([("a", "1")])
        with pytest.raises(TypeError):
            bm.forward["b"] = "2"  # type: ignore[index]

    def test_reverse_view(self) -> None:
        bm = BiMap([("a", "1")])
        assert dict(bm.reverse) == {"1": "a"}

    def test_contains_checks_keys(self) -> None:
        bm = BiMap([("a", "1")])
        assert "a" in bm
        assert "1" not in bm
        assert bm.contains_value("1")

    def test_equality(self) -> None:
        assert BiMap([("a", "1")]) == BiMap([("a", "1")])
        assert BiMap([("a", "1")]) != BiMap([("a", "2")])


class TestMerge:
    def test_disjoint_merge(self) -> None:
        left = BiMap([("a", "1")])
        right = BiMap([("b", "2")])
        merged = left.merge(right)
        assert merged.pairs() == [("a", "1"), ("b", "2")]

    def test_merge_leaves_inputs_untouched(self) -> None:
        left = BiMap([("a", "1")])
        right = BiMap([("b", "2")])
        left.merge(right)
        assert len(left) == 1
        assert len(right) == 1

    def test_merge_key_collision_names_both_sides(self) -> None:
        left = BiMap([("a", "1")])
        right = BiMap([("a", "9")])
        with pytest.raises(BiMapCollisionError) as excinfo:
            left.merge(right, source_label="keywords", incoming_label="project")
        err = excinfo.value
        assert err.kind == "duplicate_key"
        assert err.source_label == "keywords"
        assert err.incoming_label == "project"
        assert "keywords" in str(err)
        assert "project" in str(err)

    def test_merge_value_collision(self) -> None:
        left = BiMap([("a", "1")])
        right = BiMap([("b", "1")])
        with pytest.raises(BiMapCollisionError) as excinfo:
            left.merge(right)
        assert excinfo.value.kind == "duplicate_value"
        assert excinfo.value.existing == ("a", "1")

    def test_failed_merge_after_partial_overlap(self) -> None:
        left = BiMap([("a", "1")])
        right = BiMap([("b", "2"), ("c", "1")])
        with pytest.raises(BiMapCollisionError):
            left.merge(right)
        assert left.to_value("b") is None


class TestFindConflict:
    def test_none_for_bijective_pairs(self) -> None:
        assert find_conflict([("a", "1"), ("b", "2")]) is None

    def test_reports_first_conflict(self) -> None:
        conflict = find_conflict([("a", "1"), ("b", "2"), ("c", "2"), ("a", "3")])
        assert conflict is not None
        assert conflict.kind == "duplicate_value"
        assert conflict.entry == ("c", "2")
        assert conflict.existing == ("b", "2")
