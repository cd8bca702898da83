"""Tests for field extraction helpers."""
import pytest

from toolkit.errors import UpstreamFailure
from toolkit.extract import as_list, contains_any, first, indexed_pairs, split_lines


class TestIndexedPairs:
    def test_empty_slots_are_excluded(self):
        record = {"strIngredient1": "Flour", "strMeasure1": "2 cups", "strIngredient2": ""}
        assert indexed_pairs(record.get, "strIngredient", "strMeasure", 20) == ["Flour - 2 cups"]

    def test_none_and_whitespace_slots_are_excluded(self):
        record = {
            "strIngredient1": "Eggs",
            "strMeasure1": "3",
            "strIngredient2": None,
            "strIngredient3": "   ",
            "strIngredient4": "Milk",
            "strMeasure4": "1 cup ",
        }
        assert indexed_pairs(record.get, "strIngredient", "strMeasure", 20) == ["Eggs - 3", "Milk - 1 cup"]

    def test_blank_measure_keeps_ingredient_alone(self):
        record = {"strIngredient1": "Salt", "strMeasure1": ""}
        assert indexed_pairs(record.get, "strIngredient", "strMeasure", 20) == ["Salt"]

    def test_slot_count_bounds_the_scan(self):
        record = {"a1": "x", "b1": "1", "a2": "y", "b2": "2"}
        assert indexed_pairs(record.get, "a", "b", 1) == ["x - 1"]


class TestSplitLines:
    def test_splits_and_trims(self):
        assert split_lines("Step one.\r\n\r\n  Step two.  \nStep three.") == [
            "Step one.",
            "Step two.",
            "Step three.",
        ]

    def test_missing_text_is_empty(self):
        assert split_lines(None) == []
        assert split_lines("") == []


class TestFirstAndLists:
    def test_missing_list_is_empty(self):
        assert as_list(None) == []
        assert as_list((1, 2)) == [1, 2]

    def test_first_returns_primary_result(self):
        assert first(["a", "b"], "none") == "a"

    def test_first_raises_with_user_message(self):
        with pytest.raises(UpstreamFailure) as excinfo:
            first([], "Nothing found.")
        assert excinfo.value.user_message == "Nothing found."


class TestContainsAny:
    def test_case_insensitive_substring(self):
        assert contains_any("KROGER Marketplace #12", ["Kroger"])
        assert not contains_any("Acme Local Grocer", ["Kroger", "Ralphs"])

    def test_whole_words_only(self):
        assert not contains_any("Rinaldi's Deli", ["Aldi"])
        assert contains_any("ALDI Food Market", ["Aldi"])
        assert contains_any("H-E-B plus!", ["H-E-B"])
