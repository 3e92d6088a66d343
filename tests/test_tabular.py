"""
tests/test_tabular.py - Unit tests for the WDI / subnational table parser.

Covers:
- quote-aware tokenizing (embedded delimiters, doubled quotes, trailing comma)
- cell-for-cell fidelity: every (code, year) lookup returns the source value
  or None for blank / non-numeric cells, never 0
- silent degradation: malformed rows skipped, no 1960 column -> empty store
"""

from __future__ import annotations

import math

import pytest

from processing.tabular import (
    parse_country_table,
    parse_subnational_table,
    parse_value,
    parse_year,
    tokenize_line,
)
from registry import code_of

from conftest import GDP_CONSTANT_ROWS, YEARS, make_country_table


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

class TestTokenizeLine:
    def test_plain_fields(self):
        assert tokenize_line("a,b,c") == ["a", "b", "c"]

    def test_quoted_field_keeps_delimiter(self):
        assert tokenize_line('"Korea, Rep.","KOR","1.5"') == ["Korea, Rep.", "KOR", "1.5"]

    def test_quotes_are_stripped(self):
        assert tokenize_line('"USA"') == ["USA"]

    def test_doubled_quotes_collapse(self):
        assert tokenize_line('"Say ""hi""",x') == ['Say "hi"', "x"]

    def test_trailing_comma_gives_empty_field(self):
        assert tokenize_line('"a","b",') == ["a", "b", ""]

    def test_carriage_return_ignored(self):
        assert tokenize_line('"a","b"\r\n') == ["a", "b"]

    def test_empty_quoted_field(self):
        assert tokenize_line('"","x"') == ["", "x"]


class TestCellParsing:
    @pytest.mark.parametrize("cell, expected", [
        ("1610.51", 1610.51),
        (" 42 ", 42.0),
        ("-3.5", -3.5),
        ("1e3", 1000.0),
    ])
    def test_numeric(self, cell, expected):
        assert parse_value(cell) == expected

    @pytest.mark.parametrize("cell", ["", "  ", "n/a", "..", "abc", "nan", "inf", "-inf"])
    def test_missing_is_none(self, cell):
        assert parse_value(cell) is None

    def test_year_headers(self):
        assert parse_year("1960") == 1960
        assert parse_year(" 2023 ") == 2023
        assert parse_year("") is None
        assert parse_year("Indicator Code") is None


# ---------------------------------------------------------------------------
# Country tables
# ---------------------------------------------------------------------------

class TestParseCountryTable:
    def test_every_cell_round_trips(self, gdp_constant_text):
        store = parse_country_table(gdp_constant_text)
        assert len(store) == len(GDP_CONSTANT_ROWS)

        for name, code, cells in GDP_CONSTANT_ROWS:
            series = store.get(code)
            assert series is not None
            assert series.name == name
            for year, cell in zip(YEARS, cells):
                assert int(year) in series.values
                expected = parse_value(cell)
                actual = series.value(int(year))
                if expected is None:
                    assert actual is None
                else:
                    assert actual == expected

    def test_blank_and_text_cells_are_not_zero(self, gdp_constant_text):
        store = parse_country_table(gdp_constant_text)
        ireland = store.get("IRL")
        assert ireland.value(2022) is None      # "n/a"
        assert ireland.value(2018) is None      # ""
        assert 2022 in ireland.values

    def test_no_nan_values(self, gdp_constant_text):
        store = parse_country_table(gdp_constant_text)
        for series in store:
            for value in series.values.values():
                assert value is None or math.isfinite(value)

    def test_quoted_comma_in_name(self, gdp_constant_text):
        store = parse_country_table(gdp_constant_text)
        assert store.get("KOR").name == "Korea, Rep."

    def test_trailing_non_year_column_skipped(self, gdp_constant_text):
        store = parse_country_table(gdp_constant_text)
        assert sorted(store.get("USA").values) == [int(y) for y in YEARS]

    def test_columns_before_1960_ignored(self):
        text = make_country_table([("Aruba", "ABW", ["1", "2", "3"])], years=["1959", "1960", "1961"])
        series = parse_country_table(text).get("ABW")
        assert series.values == {1960: 2.0, 1961: 3.0}

    def test_short_rows_skipped(self, gdp_constant_text):
        text = gdp_constant_text + '"Broken","XX","only"\n' + "\n"
        store = parse_country_table(text)
        assert "XX" not in store
        assert len(store) == len(GDP_CONSTANT_ROWS)

    def test_missing_start_year_gives_empty_store(self):
        text = make_country_table(
            [("United States", "USA", ["1", "2"])],
            years=["1970", "1971"],
        )
        assert len(parse_country_table(text)) == 0

    def test_too_few_lines_gives_empty_store(self):
        assert len(parse_country_table('"Data Source","WDI",\n\n')) == 0
        assert len(parse_country_table("")) == 0

    def test_row_longer_than_header(self):
        text = make_country_table([("Aruba", "ABW", ["1", "2", "3", "4", "5", "6", "7"])])
        series = parse_country_table(text).get("ABW")
        assert sorted(series.values) == [int(y) for y in YEARS]

    def test_label_is_kept(self, gdp_constant_text):
        assert parse_country_table(gdp_constant_text, "gdp/constant").label == "gdp/constant"


# ---------------------------------------------------------------------------
# Subnational tables
# ---------------------------------------------------------------------------

class TestParseSubnationalTable:
    def test_rows_keyed_by_synthesized_code(self, subnational_store):
        assert sorted(subnational_store.codes()) == ["SUB_CALIFORNIA", "SUB_NEW_YORK", "SUB_TEXAS"]

    def test_values_aligned_to_bare_year_header(self, subnational_store):
        california = subnational_store.get("SUB_CALIFORNIA")
        assert california.name == "California"
        assert california.values == {2018: 70000.0, 2022: 80000.0, 2023: 85000.0}

    def test_missing_cells(self, subnational_store):
        assert subnational_store.get("SUB_NEW_YORK").value(2022) is None
        assert subnational_store.get("SUB_TEXAS").value(2022) is None
        assert 2022 in subnational_store.get("SUB_TEXAS").values

    def test_nameless_row_skipped(self, subnational_store):
        assert len(subnational_store) == 3

    def test_empty_text(self):
        assert len(parse_subnational_table("", code_of)) == 0

    def test_header_only(self):
        assert len(parse_subnational_table("Region,2020,2021\n", code_of)) == 0
