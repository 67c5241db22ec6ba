"""Tests for field definition models."""

import dataclasses
import time

import pytest

from record_decoder.casting import CallbackCast, NamedCast
from record_decoder.exceptions import InvalidFieldDefinition
from record_decoder.models import IndexField, LoadStats, RangeField


class TestIndexField:
    """Test index-based field definitions."""

    def test_valid_definition(self):
        definition = IndexField("place", 0, NamedCast("int"))
        assert definition.name == "place"
        assert definition.index == 0
        assert definition.cast == NamedCast("int")
        assert not definition.skipped

    def test_negative_index_rejected(self):
        with pytest.raises(InvalidFieldDefinition):
            IndexField("place", -1)

    @pytest.mark.parametrize("index", [1.0, "1", True, None])
    def test_non_integer_index_rejected(self, index):
        with pytest.raises(InvalidFieldDefinition):
            IndexField("place", index)

    def test_none_name_is_skipped(self):
        assert IndexField(None, 3).skipped

    def test_unhashable_name_rejected(self):
        with pytest.raises(InvalidFieldDefinition):
            IndexField(["place"], 0)

    def test_invalid_cast_rejected(self):
        """Raw casts must go through the definition builder."""
        with pytest.raises(InvalidFieldDefinition):
            IndexField("place", 0, "int")

    def test_extract_past_end_returns_none(self):
        assert IndexField("x", 2).extract(["a", "b"]) is None
        assert IndexField("x", 1).extract(["a", "b"]) == "b"

    def test_is_frozen(self):
        definition = IndexField("place", 0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            definition.index = 4


class TestRangeField:
    """Test range-based field definitions."""

    def test_valid_definition(self):
        definition = RangeField("age", 1, 3, CallbackCast(int))
        assert definition.slice == (0, 3)

    def test_single_column_range(self):
        definition = RangeField("flag", 5, 5)
        assert definition.slice == (4, 5)
        assert definition.extract("abcdef") == "e"

    @pytest.mark.parametrize("start,end", [(5, 4), (10, 1), (2, 1)])
    def test_end_before_start_rejected(self, start, end):
        with pytest.raises(InvalidFieldDefinition):
            RangeField("age", start, end)

    @pytest.mark.parametrize("start,end", [(0, 3), (-1, 3), (0, 0)])
    def test_bounds_below_one_rejected(self, start, end):
        with pytest.raises(InvalidFieldDefinition):
            RangeField("age", start, end)

    def test_non_integer_bounds_rejected(self):
        with pytest.raises(InvalidFieldDefinition):
            RangeField("age", "1", 3)

    def test_extract_short_line(self):
        """Short lines give the characters that exist, never an error."""
        assert RangeField("x", 2, 10).extract("abc") == "bc"
        assert RangeField("x", 5, 8).extract("abc") == ""

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            RangeField("age", 3, 1)


def test_load_stats_throughput():
    stats = LoadStats(total_rows=10, start_time=time.time() - 2)
    stats.finish()
    assert stats.end_time is not None
    assert stats.duration >= 2
    assert 0 < stats.rows_per_second <= 5
