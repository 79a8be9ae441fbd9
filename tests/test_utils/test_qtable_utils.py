"""
Tests for the QTable header utilities.
"""

from astropy import units as u
from astropy.table import Column, QTable

from stellartools.utils.qtable_utils import (
    TableColumnInfo,
    get_header_from_table,
    header_from_json,
    header_to_json,
)


class TestHeaderFromTable:
    def test_quantity_and_plain_columns(self):
        table = QTable(
            {
                "mass": [1.0, 2.0] * u.solMass,
                "label": Column(["a", "b"], description="Label column"),
            }
        )
        header = get_header_from_table(table)

        assert header["mass"].unit == "solMass"
        assert header["mass"].dtype == "float64"
        assert header["mass"].description is None
        assert header["label"].unit is None
        assert header["label"].description == "Label column"

    def test_descriptions_override(self):
        table = QTable({"label": Column(["a"], description="original")})
        header = get_header_from_table(table, descriptions={"label": "overridden"})
        assert header["label"].description == "overridden"

    def test_json_round_trip(self):
        header = {"temperature": TableColumnInfo(description="Surface temperature", unit="K", dtype="float64")}
        assert header_from_json(header_to_json(header)) == header
