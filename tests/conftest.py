"""
Shared fixtures: small WDI-shaped country tables, a subnational table,
a boundary collection and a catalog built from them.
"""

from __future__ import annotations

import json

import pytest

from config import Config
from geo.features import features_from_geojson
from processing.tabular import parse_country_table, parse_subnational_table
from registry import build_catalog, code_of
from session import ExplorerContext


YEARS = ["1960", "2013", "2018", "2022", "2023"]


def _csv_line(fields: list[str]) -> str:
    # WDI rows quote every field and end with a trailing comma
    return ",".join(f'"{f}"' for f in fields) + ","


def make_country_table(rows: list[tuple[str, str, list[str]]], years: list[str] = YEARS) -> str:
    header = ["Country Name", "Country Code", "Indicator Name", "Indicator Code", *years]
    lines = [
        '"Data Source","World Development Indicators",',
        "",
        '"Last Updated Date","2024-06-28",',
        "",
        _csv_line(header),
    ]
    for name, code, values in rows:
        lines.append(_csv_line([name, code, "GDP per capita", "NY.GDP.PCAP.KD", *values]))
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Country tables
# ---------------------------------------------------------------------------

GDP_CONSTANT_ROWS = [
    ("United States", "USA", ["3000", "50000", "60000", "64000", "65000"]),
    ("Korea, Rep.", "KOR", ["", "800", "1000", "1500", "1610.51"]),
    ("France", "FRA", ["", "36000", "38000", "39000", ""]),
    ("Ireland", "IRL", ["", "", "", "n/a", "90000"]),
]

PPP_CONSTANT_ROWS = [
    ("United States", "USA", ["", "55000", "62000", "70000", "72000"]),
    ("Korea, Rep.", "KOR", ["", "", "40000", "45000", "48000"]),
    ("France", "FRA", ["", "", "45000", "50000", "52000"]),
    ("Ireland", "IRL", ["", "", "", "", "100000"]),
]

GDP_CURRENT_ROWS = [
    ("United States", "USA", ["3007", "53000", "63000", "76000", "80000"]),
    ("Korea, Rep.", "KOR", ["", "27000", "33000", "32000", "33000"]),
    ("France", "FRA", ["", "42000", "41000", "40000", "44000"]),
    ("Ireland", "IRL", ["", "", "", "", "100000"]),
]

PPP_CURRENT_ROWS = [
    ("United States", "USA", ["", "53000", "63000", "76000", "80000"]),
    ("Korea, Rep.", "KOR", ["", "", "45000", "50000", "55000"]),
    ("France", "FRA", ["", "", "48000", "55000", "0"]),
    ("Ireland", "IRL", ["", "", "", "", ""]),
]

SUBNATIONAL_TABLE = "\n".join([
    "Region,2018,2022,2023",
    "California,70000,80000,85000",
    '"New  York",75000,,90000',
    "Texas,60000,abc,65000",
    ",1,2,3",
]) + "\n"


GEOJSON = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "properties": {"ISO_A3": "USA", "ADMIN": "United States of America"},
            "geometry": {
                "type": "Polygon",
                "coordinates": [[[-120, 30], [-70, 30], [-70, 48], [-120, 48], [-120, 30]]],
            },
        },
        {
            "type": "Feature",
            "properties": {"ISO_A3": "FRA", "ADMIN": "France"},
            "geometry": {
                "type": "MultiPolygon",
                "coordinates": [
                    [[[-4, 43], [7, 43], [7, 50], [-4, 50]]],
                    [[[8.5, 41.4], [9.5, 41.4], [9.5, 43], [8.5, 43]]],
                ],
            },
        },
        {
            "type": "Feature",
            "properties": {"ISO_A3": "-99", "ADMIN": "Somaliland"},
            "geometry": None,
        },
    ],
}


@pytest.fixture
def gdp_constant_text() -> str:
    return make_country_table(GDP_CONSTANT_ROWS)


@pytest.fixture
def country_stores() -> dict:
    return {
        ("gdp", "constant"): parse_country_table(make_country_table(GDP_CONSTANT_ROWS), "gdp/constant"),
        ("ppp", "constant"): parse_country_table(make_country_table(PPP_CONSTANT_ROWS), "ppp/constant"),
        ("gdp", "current"): parse_country_table(make_country_table(GDP_CURRENT_ROWS), "gdp/current"),
        ("ppp", "current"): parse_country_table(make_country_table(PPP_CURRENT_ROWS), "ppp/current"),
    }


@pytest.fixture
def subnational_store():
    return parse_subnational_table(SUBNATIONAL_TABLE, code_of, label="us_states.csv")


@pytest.fixture
def catalog(country_stores, subnational_store):
    return build_catalog(
        country_stores,
        {("gdp", "constant"): [("us_states.csv", subnational_store)]},
        features_from_geojson(GEOJSON),
    )


@pytest.fixture
def ctx() -> ExplorerContext:
    return ExplorerContext(
        selected=["USA", "KOR", "FRA", "IRL"],
        view="gdp",
        basis="constant",
        year_start=2018,
        year_end=2023,
        map_year=2023,
    )


@pytest.fixture
def data_dir(tmp_path):
    """Fixture tables written to disk plus a matching Config."""
    files = {
        ("gdp", "constant"): GDP_CONSTANT_ROWS,
        ("ppp", "constant"): PPP_CONSTANT_ROWS,
        ("gdp", "current"): GDP_CURRENT_ROWS,
        ("ppp", "current"): PPP_CURRENT_ROWS,
    }
    tables = {}
    for (indicator, basis), rows in files.items():
        path = tmp_path / f"{indicator}_{basis}.csv"
        path.write_text(make_country_table(rows), encoding="utf-8")
        tables[(indicator, basis)] = str(path)

    regions = tmp_path / "us_states.csv"
    regions.write_text(SUBNATIONAL_TABLE, encoding="utf-8")
    geo = tmp_path / "countries.geojson"
    geo.write_text(json.dumps(GEOJSON), encoding="utf-8")

    cfg = Config(
        tables=tables,
        subnational_tables=[("gdp", "constant", str(regions))],
        geojson_url=str(geo),
    )
    return tmp_path, cfg
