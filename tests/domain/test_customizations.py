"""Tests for customization normalization and line identity comparison."""

import pytest
from foodorder.cart.customizations import Customization, customizations_match, normalize_customizations
from protean.exceptions import ValidationError


class TestNormalize:
    def test_none_is_empty(self):
        assert normalize_customizations(None) == []

    def test_mapping_keeps_insertion_order(self):
        assert normalize_customizations({"size": "L", "crust": "thin"}) == [
            {"option_id": "size", "choice_id": "L"},
            {"option_id": "crust", "choice_id": "thin"},
        ]

    def test_mapping_with_list_choices_expands(self):
        assert normalize_customizations({"extras": ["cheese", "olives"]}) == [
            {"option_id": "extras", "choice_id": "cheese"},
            {"option_id": "extras", "choice_id": "olives"},
        ]

    def test_value_objects(self):
        result = normalize_customizations([Customization(option_id="size", choice_id="S")])
        assert result == [{"option_id": "size", "choice_id": "S"}]

    def test_tuples(self):
        assert normalize_customizations([("size", "M")]) == [{"option_id": "size", "choice_id": "M"}]

    def test_values_become_strings(self):
        assert normalize_customizations({"spice": 3}) == [{"option_id": "spice", "choice_id": "3"}]

    def test_pair_dict_missing_keys(self):
        with pytest.raises(ValidationError):
            normalize_customizations([{"option_id": "size"}])

    def test_plain_string_rejected(self):
        with pytest.raises(ValidationError):
            normalize_customizations("size=L")

    @pytest.mark.parametrize(
        "value",
        [
            {"size": "x" * 101},
            [("x" * 101, "L")],
            [{"option_id": "size", "choice_id": "x" * 101}],
        ],
    )
    def test_overlong_ids_rejected_in_every_form(self, value):
        with pytest.raises(ValidationError):
            normalize_customizations(value)


class TestMatch:
    def test_equal_lists_match(self):
        assert customizations_match([("size", "L")], [{"option_id": "size", "choice_id": "L"}])

    def test_order_sensitive(self):
        assert not customizations_match([("a", "1"), ("b", "2")], [("b", "2"), ("a", "1")])

    def test_length_mismatch(self):
        assert not customizations_match([("a", "1")], [("a", "1"), ("b", "2")])

    def test_none_and_empty_match(self):
        assert customizations_match(None, [])

    def test_dict_key_order_is_irrelevant(self):
        left = [{"option_id": "size", "choice_id": "L"}]
        right = [{"choice_id": "L", "option_id": "size"}]
        assert customizations_match(left, right)
