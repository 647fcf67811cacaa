from municipal_assessments.schema.records import (
    NUM_COLUMNS,
    record_from_api_row,
    record_from_cells,
)

from conftest import make_record


ROW = [
    "1179381",
    "12",
    "104",
    "STREET NW",
    "Y",
    "5300",
    "GRANVILLE",
    "Nakota Isga Ward",
    "405500",
    "53.460700000",
    "-113.6799",
    "POINT (-113.6799 53.4607)",
    "85",
    "10.5",
    "4.5",
    "RESIDENTIAL",
    "COMMERCIAL",
    "FARMLAND",
]


def test_well_formed_row_round_trips_every_field():
    rec = record_from_cells(ROW)

    assert rec.account_number == 1179381
    assert rec.building.suite == 12
    assert rec.building.house_number == 104
    assert rec.building.street_name == "STREET NW"
    assert rec.building.garage is True
    assert rec.neighbourhood.neighbourhood_id == 5300
    assert rec.neighbourhood.neighbourhood == "GRANVILLE"
    assert rec.neighbourhood.ward == "Nakota Isga Ward"
    assert rec.assessed_value == 405500
    # coordinates are echoed verbatim, trailing zeros included
    assert rec.location.latitude == "53.460700000"
    assert rec.location.longitude == "-113.6799"
    assert rec.assessment_class.percentages == (85.0, 10.5, 4.5)
    assert rec.assessment_class.names == ("RESIDENTIAL", "COMMERCIAL", "FARMLAND")


def test_malformed_numeric_cells_default_to_zero():
    row = list(ROW)
    for idx in (0, 1, 2, 5, 8):
        row[idx] = "not-a-number"
    for idx in (12, 13, 14):
        row[idx] = "12%"
    rec = record_from_cells(row)

    assert rec.account_number == 0
    assert rec.building.suite == 0
    assert rec.building.house_number == 0
    assert rec.neighbourhood.neighbourhood_id == 0
    assert rec.assessed_value == 0
    assert rec.assessment_class.percentages == (0.0, 0.0, 0.0)


def test_blank_cells_are_absent_values():
    row = [""] * NUM_COLUMNS
    row[0] = "42"
    rec = record_from_cells(row)
    assert rec.account_number == 42
    assert rec.building.suite == 0
    assert rec.building.garage is False
    assert rec.assessment_class.names == ("", "", "")
    assert rec.assessment_class.percentages == (0.0, 0.0, 0.0)


def test_garage_flag_only_for_y():
    for marker, expected in (("Y", True), ("y", True), ("N", False), ("", False), ("YES", False)):
        row = list(ROW)
        row[4] = marker
        assert record_from_cells(row).building.garage is expected


def test_equality_and_hash_use_account_number_only():
    a = make_record(1, assessed_value=100)
    b = make_record(1, assessed_value=999, street_name="OTHER")
    c = make_record(2, assessed_value=100)

    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert len({a, b, c}) == 2


def test_ordering_uses_assessed_value():
    low = make_record(5, assessed_value=100)
    high = make_record(1, assessed_value=300)
    tie = make_record(9, assessed_value=100)

    assert low < high
    assert high > low
    assert not (low < tie) and not (tie < low)
    assert low <= tie and low >= tie
    assert low != tie
    assert [r.account_number for r in sorted([high, low, tie])] == [5, 9, 1]


def test_api_row_maps_like_csv_with_missing_keys(api_page):
    rec = record_from_api_row(api_page[0])
    assert rec.account_number == 1179381
    assert rec.building.suite == 0
    assert rec.building.garage is True
    assert rec.assessed_value == 200000
    assert rec.location.latitude == "53.46070"
    assert rec.assessment_class.names == ("RESIDENTIAL", "", "")
    assert rec.assessment_class.percentages == (100.0, 0.0, 0.0)


def test_api_row_nulls_and_bad_numbers():
    rec = record_from_api_row(
        {"account_number": "77", "assessed_value": None, "suite": "n/a", "mill_class_2": None}
    )
    assert rec.account_number == 77
    assert rec.assessed_value == 0
    assert rec.building.suite == 0
    assert rec.assessment_class.class_2 == ""


def test_to_dict_uses_api_field_names():
    rec = record_from_cells(ROW)
    d = rec.to_dict()
    assert d["account_number"] == 1179381
    assert d["neighbourhood"] == "GRANVILLE"
    assert d["mill_class_3"] == "FARMLAND"
    assert d["tax_class_pct_2"] == 10.5
