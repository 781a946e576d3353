"""FIPS resolver tests"""

import pytest

from geofips.pipeline.fips_lookup import NOT_AVAILABLE, FipsTables
from geofips.pipeline.normalize import county_segment, normalize_county_name, normalize_state_name


def test_resolve_state_and_county(fips_tables):
    assert fips_tables.resolve("California", "Los Angeles County") == ("06", "037")


def test_resolve_unknown_county(fips_tables):
    assert fips_tables.resolve("California", "Orange County") == ("06", NOT_AVAILABLE)


def test_resolve_unknown_region(fips_tables):
    assert fips_tables.resolve("Ontario", "Toronto") == (NOT_AVAILABLE, NOT_AVAILABLE)


def test_resolve_empty_names(fips_tables):
    assert fips_tables.resolve("", "") == (NOT_AVAILABLE, NOT_AVAILABLE)


def test_resolve_none_names(fips_tables):
    assert fips_tables.resolve(None, None) == (NOT_AVAILABLE, NOT_AVAILABLE)


def test_unknown_region_never_looks_at_county(fips_tables):
    # County name valid in another state still gives N/A without a state
    assert fips_tables.resolve("Nowhere", "Los Angeles County") == (NOT_AVAILABLE, NOT_AVAILABLE)


@pytest.mark.parametrize("county", ["Los Angeles County", "los angeles", "LOS ANGELES COUNTY", "Los Angeles"])
def test_county_match_ignores_case_and_suffix(fips_tables, county):
    assert fips_tables.resolve("california", county) == ("06", "037")


def test_state_known_but_no_counties(fips_tables):
    tables = FipsTables.from_dicts({"TEXAS": "48"}, {})
    assert tables.resolve("Texas", "Travis County") == ("48", NOT_AVAILABLE)


def test_resolve_is_repeatable(fips_tables):
    first = fips_tables.resolve("New York", "New York County")
    second = fips_tables.resolve("New York", "New York County")
    assert first == second == ("36", "061")
    assert dict(fips_tables.state_map) == {"CALIFORNIA": "06", "NEW YORK": "36"}


def test_enrich_returns_field_names(fips_tables):
    assert fips_tables.enrich("California", "Los Angeles County") == {
        "stateFips": "06",
        "countyFips": "037",
    }


def test_tables_are_read_only(fips_tables):
    with pytest.raises(TypeError):
        fips_tables.state_map["TEXAS"] = "48"
    with pytest.raises(TypeError):
        fips_tables.county_map["06"]["ORANGE"] = "059"


def test_from_dicts_copies_input():
    states = {"OHIO": "39"}
    tables = FipsTables.from_dicts(states, {})
    states["OHIO"] = "00"
    assert tables.state_map["OHIO"] == "39"


def test_normalizers():
    assert normalize_state_name("New Mexico") == "NEW MEXICO"
    assert normalize_state_name(None) == ""
    assert normalize_county_name("Cook County") == "COOK"
    assert normalize_county_name("County Line") == "COUNTY LINE"
    assert normalize_county_name(None) == ""
    assert county_segment("Los Angeles County, California") == "Los Angeles County"
    assert county_segment("   , Nevada") is None
