"""Tests for the definition builder."""

import pytest

from record_decoder.casting import CallbackCast, NamedCast
from record_decoder.definitions import as_cast_rule, delimited_definitions, fixed_width_definitions
from record_decoder.exceptions import InvalidFieldDefinition
from record_decoder.models import IndexField, RangeField


class TestDelimitedDefinitions:
    """Test delimited shorthand parsing."""

    def test_shorthand_forms(self):
        upper = str.upper
        definitions = delimited_definitions([
            ["place", "to_i"],
            None,
            "name",
            ["city"],
            ["gender", upper],
        ])
        assert definitions == (
            IndexField("place", 0, NamedCast("int")),
            IndexField(None, 1),
            IndexField("name", 2),
            IndexField("city", 3),
            IndexField("gender", 4, CallbackCast(upper)),
        )

    def test_result_is_immutable(self):
        assert isinstance(delimited_definitions(["a", "b"]), tuple)

    def test_explicit_fields_kept(self):
        """An explicit IndexField keeps its own index."""
        definitions = delimited_definitions([IndexField("last", 9), "first"])
        assert definitions[0].index == 9
        assert definitions[1].index == 1

    def test_non_string_names(self):
        definitions = delimited_definitions([1, (2, "int")])
        assert definitions[0].name == 1
        assert definitions[1] == IndexField(2, 1, NamedCast("int"))

    def test_unknown_cast_accepted_at_construction(self):
        definitions = delimited_definitions([["place", "frobnicate"]])
        assert definitions[0].cast == NamedCast("frobnicate")

    def test_too_many_elements_rejected(self):
        with pytest.raises(InvalidFieldDefinition):
            delimited_definitions([["place", "int", "extra"]])

    def test_mapping_element_rejected(self):
        with pytest.raises(InvalidFieldDefinition):
            delimited_definitions([{"field": "place", "start": 1, "end": 2}])

    @pytest.mark.parametrize("spec", [None, "place", {"place": "int"}])
    def test_non_sequence_rejected(self, spec):
        with pytest.raises(InvalidFieldDefinition):
            delimited_definitions(spec)


class TestFixedWidthDefinitions:
    """Test fixed-width shorthand parsing."""

    def test_mapping_forms(self):
        definitions = fixed_width_definitions([
            {"field": "place", "start": 1, "end": 6, "cast": "to_i"},
            {"name": "name", "start": 7, "end": 20},
        ])
        assert definitions == (
            RangeField("place", 1, 6, NamedCast("int")),
            RangeField("name", 7, 20),
        )

    def test_explicit_fields_kept(self):
        field = RangeField("age", 1, 3)
        assert fixed_width_definitions([field]) == (field,)

    def test_invalid_range_rejected(self):
        with pytest.raises(InvalidFieldDefinition):
            fixed_width_definitions([{"field": "age", "start": 5, "end": 4}])

    def test_missing_keys_rejected(self):
        with pytest.raises(InvalidFieldDefinition) as exc_info:
            fixed_width_definitions([{"field": "age", "start": 5}])
        assert "end" in str(exc_info.value)

    def test_non_mapping_rejected(self):
        with pytest.raises(InvalidFieldDefinition):
            fixed_width_definitions([["age", 1, 3]])

    def test_definition_required(self):
        with pytest.raises(InvalidFieldDefinition):
            fixed_width_definitions(None)


class TestAsCastRule:
    """Test cast shorthand normalization."""

    def test_none(self):
        assert as_cast_rule(None) is None

    def test_alias_normalized(self):
        assert as_cast_rule("to_f") == NamedCast("float")
        assert as_cast_rule("INT") == NamedCast("int")

    def test_callable(self):
        assert as_cast_rule(float) == CallbackCast(float)

    def test_existing_rule_passthrough(self):
        rule = NamedCast("decimal")
        assert as_cast_rule(rule) is rule

    def test_invalid(self):
        with pytest.raises(InvalidFieldDefinition):
            as_cast_rule(42)
