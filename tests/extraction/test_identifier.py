"""Tests for address recovery from listing URL slugs."""

import pytest

from listing_reconciler.extraction.base import SourceKind
from listing_reconciler.extraction.identifier import parse_identifier
from tests.conftest import REALTOR_URL, REDFIN_URL, ZILLOW_URL


class TestRedfinGrammar:
    """Tests for /STATE/City/Street-Zip/home/ID paths."""

    def test_full_path(self):
        result = parse_identifier("/NJ/Chester/309-North-Rd-07930/home/37150152", SourceKind.REDFIN)
        assert result == {
            "state": "NJ",
            "city": "Chester",
            "address": "309 North Rd",
            "zip": "07930",
        }

    def test_full_url(self):
        assert parse_identifier(REDFIN_URL, SourceKind.REDFIN)["address"] == "309 North Rd"

    def test_multi_word_city(self):
        result = parse_identifier("/CA/San-Francisco/1-Main-St-94105/home/1", SourceKind.REDFIN)
        assert result["city"] == "San Francisco"

    def test_zip_plus_four(self):
        result = parse_identifier("/NJ/Chester/309-North-Rd-07930-1234/home/1", SourceKind.REDFIN)
        assert result["zip"] == "07930"
        assert result["address"] == "309 North Rd"

    def test_state_must_be_two_letters(self):
        result = parse_identifier("/New-Jersey/Chester/309-North-Rd-07930/home/1", SourceKind.REDFIN)
        assert "state" not in result
        assert result["city"] == "Chester"

    def test_lowercase_state_upper_cased(self):
        result = parse_identifier("/nj/Chester/309-North-Rd-07930/home/1", SourceKind.REDFIN)
        assert result["state"] == "NJ"

    def test_unit_path(self):
        result = parse_identifier("/NJ/Chester/309-North-Rd-07930/unit-2/home/1", SourceKind.REDFIN)
        assert result["address"] == "309 North Rd"
        assert result["zip"] == "07930"

    def test_no_zip(self):
        result = parse_identifier("/NJ/Chester/309-North-Rd/home/1", SourceKind.REDFIN)
        assert "zip" not in result
        assert result["address"] == "309 North Rd"

    def test_partial_path(self):
        assert parse_identifier("/NJ/Chester", SourceKind.REDFIN) == {}


class TestZillowGrammar:
    """Tests for /homedetails/Street-City-State-Zip/ID_zpid/ paths."""

    def test_full_url(self):
        assert parse_identifier(ZILLOW_URL, SourceKind.ZILLOW) == {
            "address": "12 Oak St",
            "city": "Spring Lake",
            "state": "NJ",
            "zip": "07762",
        }

    def test_hyphenated_city_keeps_state_and_zip(self):
        result = parse_identifier("/homedetails/123-Main-St-New-York-NY-10001/1_zpid/", SourceKind.ZILLOW)
        assert result["state"] == "NY"
        assert result["zip"] == "10001"
        assert result["city"] == "York"

    def test_too_few_parts(self):
        assert parse_identifier("/homedetails/Chester-NJ-07930/1_zpid/", SourceKind.ZILLOW) == {}

    def test_not_a_listing_path(self):
        assert parse_identifier("/homes/for_sale/", SourceKind.ZILLOW) == {}


class TestRealtorGrammar:
    """Tests for /realestateandhomes-detail/Street_City_State_Zip_ID paths."""

    def test_full_url(self):
        assert parse_identifier(REALTOR_URL, SourceKind.REALTOR) == {
            "address": "45 Elm Ave",
            "city": "Montclair",
            "state": "NJ",
            "zip": "07042",
        }

    def test_too_few_parts(self):
        assert parse_identifier("/realestateandhomes-detail/45-Elm-Ave_Montclair", SourceKind.REALTOR) == {}


class TestNonListingPaths:
    """Pages on a supported site that are not listing detail pages."""

    @pytest.mark.parametrize(
        "path",
        [
            "/city/30749/NJ/Chester",
            "/zipcode/07930",
            "/NJ/Chester/309-North-Rd-07930",
            "/NJ/Chester/apartments-for-rent",
        ],
    )
    def test_redfin(self, path):
        assert parse_identifier(path, SourceKind.REDFIN) == {}

    @pytest.mark.parametrize(
        "path",
        ["/homes/Chester,-NJ_rb/", "/b/oak-towers-chester-nj/", "/homedetails/"],
    )
    def test_zillow(self, path):
        assert parse_identifier(path, SourceKind.ZILLOW) == {}

    @pytest.mark.parametrize(
        "path",
        [
            "/realestateandhomes-search/Chester_NJ",
            "/realestateandhomes-detail/M12345-67890",
            "/realestateagents/Jane-Doe_Chester_NJ_12345",
        ],
    )
    def test_realtor(self, path):
        assert parse_identifier(path, SourceKind.REALTOR) == {}


class TestParseIdentifierInputs:
    """Malformed input never raises."""

    @pytest.mark.parametrize("value", [None, "", 42, ["/NJ/Chester"]])
    def test_unusable_input(self, value):
        assert parse_identifier(value, SourceKind.REDFIN) == {}

    @pytest.mark.parametrize("kind", list(SourceKind))
    def test_garbage_path(self, kind):
        assert isinstance(parse_identifier("/%%%/???/---", kind), dict)

    def test_percent_encoded_segments(self):
        result = parse_identifier("/NJ/Spring%20Lake/12-Oak-St-07762/home/1", SourceKind.REDFIN)
        assert result["city"] == "Spring Lake"
