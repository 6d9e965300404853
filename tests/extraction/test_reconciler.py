"""Tests for pasted-object parsing and field reconciliation."""

import json

import pytest

from listing_reconciler.extraction.base import ErrorKind, ExtractionError
from listing_reconciler.extraction.reconciler import (
    FIELDS,
    ROOT,
    parse_pasted,
    reconcile,
    resolve,
)


class TestParsePasted:
    """Tests for strict pasted-value parsing."""

    def test_json_object(self):
        assert parse_pasted('{"price": 500000}') == {"price": 500000}

    def test_mapping_passes_through(self):
        assert parse_pasted({"beds": 3}) == {"beds": 3}

    @pytest.mark.parametrize("value", [None, "", "   \n"])
    def test_empty(self, value):
        with pytest.raises(ExtractionError) as exc_info:
            parse_pasted(value)
        assert exc_info.value.kind == ErrorKind.EMPTY_INPUT

    @pytest.mark.parametrize(
        "value",
        [
            "309 North Rd, Chester NJ",
            '{"price": 500000',
            "[1, 2, 3]",
            '"just a string"',
            "42",
            42,
            ["price"],
        ],
    )
    def test_invalid_shape(self, value):
        with pytest.raises(ExtractionError) as exc_info:
            parse_pasted(value)
        assert exc_info.value.kind == ErrorKind.INVALID_SHAPE


class TestResolve:
    """Tests for alias and namespace lookup order."""

    def test_flat_camel_case(self):
        assert resolve({"yearBuilt": 1985}, FIELDS["year_built"]) == 1985

    def test_snake_case_alias(self):
        assert resolve({"year_built": "1985"}, FIELDS["year_built"]) == 1985

    def test_namespace_order(self):
        blob = {"beds": 3, "details": {"bedrooms": 4}}
        assert resolve(blob, FIELDS["beds"]) == 4

    def test_same_alias_property_before_root(self):
        blob = {"bedrooms": 3, "property": {"bedrooms": 5}}
        assert resolve(blob, FIELDS["beds"]) == 5

    def test_alias_major_order(self):
        # "listPrice" is tried everywhere before "price" is tried anywhere
        blob = {"property": {"price": 1}, "financial": {"listPrice": 2}}
        assert resolve(blob, FIELDS["price"]) == 2

    def test_null_is_skipped(self):
        blob = {"property": {"bedrooms": None}, "bedrooms": 2}
        assert resolve(blob, FIELDS["beds"]) == 2

    def test_non_object_namespace_ignored(self):
        blob = {"details": "see below", "bedrooms": 2}
        assert resolve(blob, FIELDS["beds"]) == 2

    def test_container_not_used_as_scalar(self):
        blob = {"property": {"price": {"amount": 1}}, "price": 500000}
        assert resolve(blob, FIELDS["price"]) == 500000

    def test_nested_path(self):
        blob = {"exterior": {"garage": {"spaces": 2, "type": "Attached"}}}
        assert resolve(blob, FIELDS["garage_spaces"]) == 2
        assert resolve(blob, FIELDS["garage_type"]) == ["Attached"]

    def test_list_alias_requires_array(self):
        assert resolve({"appliances": "Dishwasher"}, FIELDS["appliances"]) is None
        assert resolve({"appliances": ["Dishwasher", " ", None]}, FIELDS["appliances"]) == ["Dishwasher"]

    def test_list_namespaces(self):
        assert FIELDS["appliances"].namespaces[3] == ROOT
        blob = {"interior": {"appliances": ["Range"]}, "appliances": ["Washer"]}
        assert resolve(blob, FIELDS["appliances"]) == ["Range"]

    @pytest.mark.parametrize(
        "value,expected",
        [(True, True), ("Yes", True), ("false", False), ("maybe", None), (0, False)],
    )
    def test_flag_values(self, value, expected):
        assert resolve({"petsAllowed": value}, FIELDS["pets_allowed"]) is expected

    def test_text_stripped(self):
        assert resolve({"city": "  Chester "}, FIELDS["city"]) == "Chester"

    def test_blank_text_is_absent(self):
        assert resolve({"property": {"city": "  "}, "city": "Chester"}, FIELDS["city"]) == "Chester"


class TestReconcile:
    """Tests for reconcile() over whole pasted objects."""

    def test_nested_listing(self):
        blob = {
            "property": {
                "address": "309 North Rd",
                "city": "Chester",
                "state": "NJ",
                "zipCode": "07930-1234",
                "listPrice": "$650,000",
            },
            "details": {"bedrooms": 4, "fullBaths": 2, "halfBaths": 1, "squareFeet": 2600},
            "financial": {"taxes": {"amount": 12480.6, "year": 2024}, "hoaFee": 150},
            "utilities": {"heating": {"type": "Forced Air"}},
            "interior": {"inLawSuite": {"hasInLaw": True, "features": "Kitchenette"}},
        }
        fields = reconcile(blob)
        assert fields["address"] == "309 North Rd"
        assert fields["zip"] == "07930"
        assert fields["price"] == 650000
        assert fields["beds"] == 4
        assert fields["baths"] == 2.5
        assert fields["sqft"] == 2600
        assert fields["price_per_sqft"] == 250
        assert fields["property_tax_annual"] == 12481
        assert fields["tax_year"] == 2024
        assert fields["hoa_fee"] == 150
        assert fields["heating"] == "Forced Air"
        assert fields["has_in_law_suite"] is True
        assert fields["in_law_features"] == ["Kitchenette"]

    def test_bedrooms_namespace_priority_is_stable(self):
        blob = {"beds": 3, "details": {"bedrooms": 4}}
        results = [reconcile(blob)["beds"] for _ in range(3)]
        assert results == [4, 4, 4]

    def test_full_half_beat_total(self):
        fields = reconcile({"baths": 3, "fullBaths": 2, "halfBaths": 1})
        assert fields["baths"] == 2.5

    def test_total_baths_kept_without_components(self):
        assert reconcile({"bathrooms": "2"})["baths"] == 2

    def test_lot_acres_fallback(self):
        fields = reconcile({"lot": {"acres": 0.25}})
        assert fields["lot_size"] == 10890
        assert fields["lot_acres"] == 0.25

    def test_lot_size_preferred_over_acres(self):
        assert reconcile({"lotSize": 9000.4, "acres": 1})["lot_size"] == 9000

    def test_lot_size_tagged_as_acres(self):
        assert reconcile({"lotSize": "0.5 acres"})["lot_size"] == 21780

    def test_nested_lot_size_in_acres_text(self):
        assert reconcile({"lot": {"lot_size": "1 Acre"}})["lot_size"] == 43560

    def test_lot_size_text_in_sqft(self):
        assert reconcile({"lotSize": "7,500 sq ft"})["lot_size"] == 7500

    def test_integer_zip_padded(self):
        assert reconcile({"zip": 7930})["zip"] == "07930"

    def test_unknown_year_dropped(self):
        assert "year_built" not in reconcile({"yearBuilt": 9999})

    def test_price_per_sqft_needs_both(self):
        assert "price_per_sqft" not in reconcile({"price": 500000})
        assert reconcile({"price": 500000, "sqft": 2000})["price_per_sqft"] == 250

    def test_explicit_price_per_sqft_kept_without_inputs(self):
        assert reconcile({"pricePerSqft": 312})["price_per_sqft"] == 312

    def test_empty_values_dropped(self):
        fields = reconcile({"city": "", "shortSale": False, "appliances": [], "beds": None})
        assert fields == {}

    def test_empty_object(self):
        assert reconcile({}) == {}

    def test_deterministic(self):
        blob = json.loads('{"price": 1, "property": {"price": 2}, "details": {"listPrice": 3}}')
        assert reconcile(blob) == reconcile(blob)
        assert reconcile(blob)["price"] == 3
