"""
Test cases for wide-to-long reshaping of passenger tables, including record
counts, key uniqueness and the row/column context carried by parse errors.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from config import settings
from engine.exceptions import ParseError
from engine.ingest import parse_wide_table
from services.pipeline_service import load_source_text


def test_reshape_yields_rows_times_columns(sample_table):
    table = parse_wide_table(sample_table)
    assert table.transport_types == ("bus", "tram", "ferry")
    assert table.row_count == 4
    assert len(table.records) == 4 * 3
    keys = {r.key for r in table.records}
    assert len(keys) == len(table.records)


def test_values_map_to_header_columns(sample_table):
    table = parse_wide_table(sample_table)
    by_key = {r.key: r.passengers for r in table.records}
    assert by_key[(2016, "bus")] == 100.0
    assert by_key[(2017, "tram")] == 45.0
    assert by_key[(2019, "ferry")] == 6.0
    assert all(isinstance(r.year, int) for r in table.records)


def test_fractional_values_and_crlf():
    table = parse_wide_table("year;air;sea\r\n1995;1914.9;7817\r\n1996;1724;5044.6\r\n\r\n")
    assert len(table.records) == 4
    assert table.records[0].passengers == pytest.approx(1914.9)


def test_bundled_source_has_26_years_of_8_modes():
    table = parse_wide_table(load_source_text(settings.source_path))
    assert table.row_count == 26
    assert len(table.transport_types) == 8
    assert len(table.records) == 208
    assert "railway" in table.transport_types


def test_column_count_mismatch_reports_row():
    with pytest.raises(ParseError) as excinfo:
        parse_wide_table("year;a;b\n2000;1;2\n2001;3\n")
    assert excinfo.value.row == 2
    assert excinfo.value.column is None


def test_non_numeric_value_reports_row_and_column():
    with pytest.raises(ParseError) as excinfo:
        parse_wide_table("year;a;b\n2000;1;2\n2001;3;lots\n")
    assert excinfo.value.row == 2
    assert excinfo.value.column == 2
    assert excinfo.value.field == "b"
    assert "row 2, column 2" in str(excinfo.value)


def test_header_and_data_rows_share_line_numbering():
    with pytest.raises(ParseError) as excinfo:
        parse_wide_table("\n\nperiod;a\n2000;1\n")
    assert excinfo.value.row == 2
    with pytest.raises(ParseError) as excinfo:
        parse_wide_table("\n\nyear;a\n2000;x\n")
    assert excinfo.value.row == 3


def test_non_integer_year():
    with pytest.raises(ParseError) as excinfo:
        parse_wide_table("year;a\n2000.5;1\n")
    assert excinfo.value.column == 0


@pytest.mark.parametrize("raw", ["nan", "inf", "-5"])
def test_non_finite_and_negative_values_rejected(raw):
    with pytest.raises(ParseError):
        parse_wide_table(f"year;a\n2000;{raw}\n")


def test_header_validation():
    with pytest.raises(ParseError):
        parse_wide_table("")
    with pytest.raises(ParseError):
        parse_wide_table("period;a\n2000;1\n")
    with pytest.raises(ParseError):
        parse_wide_table("year\n2000\n")
    with pytest.raises(ParseError) as excinfo:
        parse_wide_table("year;a;a\n2000;1;2\n")
    assert excinfo.value.column == 2


def test_duplicate_year_rejected():
    with pytest.raises(ParseError) as excinfo:
        parse_wide_table("year;a\n2000;1\n2000;2\n")
    assert excinfo.value.row == 2


def test_custom_delimiter():
    table = parse_wide_table("year,a\n2000,1\n", delimiter=",")
    assert table.records[0].passengers == 1.0
