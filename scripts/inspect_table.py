#!/usr/bin/env python
"""
Inspect how a WDI country table parses.

Prints header diagnostics and the parsed values for one region code.

Usage:
    python scripts/inspect_table.py data/API_NY.GDP.PCAP.PP.KD_DS2_en_csv_v2_1423.csv IRL
    python scripts/inspect_table.py data/... IRL --years 1990 1991 1995 2020
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from processing.tabular import (  # noqa: E402
    METADATA_LINES,
    START_YEAR_HEADER,
    parse_country_table,
    tokenize_line,
)


def main() -> int:
    parser = argparse.ArgumentParser(description="Inspect a World Bank country table")
    parser.add_argument('path', type=Path, help="CSV file")
    parser.add_argument('code', help="Region code, e.g. IRL")
    parser.add_argument('--years', type=int, nargs='*', help="Only show these years")
    args = parser.parse_args()

    text = args.path.read_text(encoding='utf-8-sig')
    lines = text.strip().splitlines()
    print(f"Total lines: {len(lines)}")

    if len(lines) <= METADATA_LINES:
        print("Header line not found!")
        return 1

    headers = tokenize_line(lines[METADATA_LINES])
    print(f"Header line: {lines[METADATA_LINES][:100]}...")
    print(f"Headers count: {len(headers)}")
    start = next((i for i, h in enumerate(headers) if h.strip() == START_YEAR_HEADER), None)
    print(f"Start year ({START_YEAR_HEADER}) index: {start}")

    store = parse_country_table(text, label=args.path.name)
    print(f"Parsed regions: {len(store)}")

    series = store.get(args.code)
    if series is None:
        print(f"{args.code} NOT found in parsed data.")
        return 1

    print(f"Name: {series.name}, Code: {series.code}")
    years = args.years or series.years
    for year in years:
        value = series.value(year) if year in series.values else '(no column)'
        print(f"  {year}: {value}")
    print(f"Defined years: {len(series.defined_years())} of {len(series.values)}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
