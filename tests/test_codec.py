"""
Tests for the sort and filter codecs.

Conversion between table state ({id, desc} / {id, value}) and editor drafts.
"""

from sortfilter.codec import (
    DraftFilterEntry,
    DraftSortEntry,
    decode_filters,
    decode_sorting,
    encode_filters,
    encode_sorting,
)
from sortfilter.equality import filters_equal
from sortfilter.values import ConditionedValues, Scalar, ScalarArray, canonical_value, is_scalar, parse_filter_value


class TestParseFilterValue:
    def test_scalar(self):
        assert parse_filter_value("test") == Scalar("test")
        assert parse_filter_value(100) == Scalar(100)

    def test_array_drops_non_scalars(self):
        assert parse_filter_value(["a", None, {"x": 1}, 2, True]) == ScalarArray(("a", 2))

    def test_conditioned_object(self):
        parsed = parse_filter_value({"condition": "isNot", "values": ["PO"]})
        assert parsed == ConditionedValues("isNot", ("PO",))

    def test_object_without_values_is_empty(self):
        assert parse_filter_value({"condition": "is"}).values == ()

    def test_null_is_empty(self):
        assert parse_filter_value(None).values == ()

    def test_bool_and_nan_are_not_scalars(self):
        assert not is_scalar(True)
        assert not is_scalar(float("nan"))
        assert is_scalar(0)
        assert is_scalar("")

    def test_canonical_value_folds_shapes(self):
        assert canonical_value("a") == canonical_value(["a"])
        assert canonical_value(["b", "a"]) == canonical_value(["a", "b"])
        assert canonical_value({"condition": "is", "values": ["a"]}) == canonical_value("a")
        assert canonical_value({"condition": "isNot", "values": ["a"]}) != canonical_value("a")


class TestDecodeSorting:
    def test_empty(self):
        assert decode_sorting([]) == []

    def test_multi_sort(self):
        result = decode_sorting([{"id": "partName", "desc": False}, {"id": "price", "desc": True}])
        assert result == [
            DraftSortEntry("sort-0", "partName", "asc"),
            DraftSortEntry("sort-1", "price", "desc"),
        ]

    def test_malformed_input_degrades(self):
        assert decode_sorting(None) == []
        assert decode_sorting([None, {"desc": True}, {"id": "price"}]) == [DraftSortEntry("sort-0", "price", "asc")]

    def test_string_desc_flags(self):
        result = decode_sorting([{"id": "a", "desc": "false"}, {"id": "b", "desc": "True"}, {"id": "c", "desc": ""}])
        assert [s.direction for s in result] == ["asc", "desc", "asc"]


class TestEncodeSorting:
    def test_strips_ids_and_keeps_order(self):
        draft = [DraftSortEntry("sort-7", "price", "desc"), DraftSortEntry("sort-2", "partName", "asc")]
        assert encode_sorting(draft) == [{"id": "price", "desc": True}, {"id": "partName", "desc": False}]

    def test_round_trip_keeps_duplicates(self):
        original = [
            {"id": "partName", "desc": False},
            {"id": "price", "desc": True},
            {"id": "partName", "desc": True},
        ]
        assert encode_sorting(decode_sorting(original)) == original


class TestDecodeFilters:
    def test_single_values(self):
        result = decode_filters([{"id": "partName", "value": "test"}, {"id": "price", "value": 100}])
        assert result == [
            DraftFilterEntry("filter-partName", "partName", ["test"]),
            DraftFilterEntry("filter-price", "price", [100]),
        ]

    def test_drops_null_from_array(self):
        result = decode_filters([{"id": "partName", "value": ["test", None, 123]}])
        assert result == [DraftFilterEntry("filter-partName", "partName", ["test", 123])]

    def test_object_with_values(self):
        result = decode_filters([{"id": "partName", "value": {"values": ["test1", "test2"]}}])
        assert result == [DraftFilterEntry("filter-partName", "partName", ["test1", "test2"])]

    def test_keeps_non_default_condition(self):
        result = decode_filters([{"id": "type", "value": {"condition": "isNot", "values": ["PO"]}}])
        assert result == [DraftFilterEntry("filter-type", "type", ["PO"], condition="isNot")]

    def test_corrupted_entry_still_produces_a_row(self):
        result = decode_filters([{"id": "plant", "value": {"nested": {"x": 1}}}])
        assert result == [DraftFilterEntry("filter-plant", "plant", [])]

    def test_ids_are_deterministic(self):
        table = [{"id": "plant", "value": ["plant_1"]}, {"id": "type", "value": "PO"}]
        assert [f.id for f in decode_filters(table)] == [f.id for f in decode_filters(table)]


class TestEncodeFilters:
    def test_single_value_encodes_as_scalar(self):
        assert encode_filters([DraftFilterEntry("filter-partName", "partName", ["test"])]) == [
            {"id": "partName", "value": "test"}
        ]

    def test_multiple_values_encode_as_array(self):
        assert encode_filters([DraftFilterEntry("filter-partName", "partName", ["a", "b"])]) == [
            {"id": "partName", "value": ["a", "b"]}
        ]

    def test_empty_entries_are_omitted(self):
        draft = [DraftFilterEntry("filter-plant", "plant", []), DraftFilterEntry("filter-type", "type", ["PO"])]
        assert encode_filters(draft) == [{"id": "type", "value": "PO"}]

    def test_condition_is_reattached(self):
        draft = [DraftFilterEntry("filter-type", "type", ["PO"], condition="isNot")]
        assert encode_filters(draft) == [{"id": "type", "value": {"condition": "isNot", "values": ["PO"]}}]

    def test_default_condition_uses_plain_form(self):
        draft = [DraftFilterEntry("filter-type", "type", ["PO", "PR"], condition="is")]
        assert encode_filters(draft) == [{"id": "type", "value": ["PO", "PR"]}]

    def test_round_trip(self):
        original = [
            {"id": "partName", "value": "test"},
            {"id": "plant", "value": ["plant_1", "plant_100000"]},
            {"id": "type", "value": {"condition": "isNot", "values": ["STO"]}},
        ]
        encoded = encode_filters(decode_filters(original))
        assert encoded == original
        assert filters_equal(encoded, original)
