"""
Tabular Parser - World Bank style CSV tables -> SeriesStore.

Two schemas share one quote-aware tokenizer:

Country tables (WDI bulk download):
    "Data Source","World Development Indicators",
    (blank)
    "Last Updated Date","2024-06-28",
    (blank)
    "Country Name","Country Code","Indicator Name","Indicator Code","1960",...,"2023",
    "Aruba","ABW","GDP per capita (constant 2015 US$)","NY.GDP.PCAP.KD","","",...

Subnational tables:
    Region,2000,2001,...
    California,51234.5,52012.1,...

Malformed rows are skipped and a table without a "1960" header column
parses to an empty store. Nothing in here raises on bad content.
"""

import logging
import math
from typing import Callable, List, Optional

from registry.series_store import SeriesStore, TimeSeries

logger = logging.getLogger(__name__)

METADATA_LINES = 4          # rows before the header in country tables
START_YEAR_HEADER = '1960'  # first year column of the WDI time range
MIN_COUNTRY_FIELDS = 5


def tokenize_line(line: str, delimiter: str = ',') -> List[str]:
    """
    Split one CSV line, honoring double-quoted fields.

    A quote toggles the "inside quoted field" state; delimiters inside
    quotes do not split. Surrounding quotes are stripped afterwards and
    doubled quotes ("") collapse to one.
    """
    fields = []
    current = []
    in_quotes = False

    for ch in line.rstrip('\r\n'):
        if ch == '"':
            in_quotes = not in_quotes
            current.append(ch)
        elif ch == delimiter and not in_quotes:
            fields.append(_unquote(''.join(current)))
            current = []
        else:
            current.append(ch)

    fields.append(_unquote(''.join(current)))
    return fields


def _unquote(field: str) -> str:
    field = field.strip()
    if len(field) >= 2 and field[0] == '"' and field[-1] == '"':
        field = field[1:-1]
    return field.replace('""', '"')


def parse_value(cell: str) -> Optional[float]:
    """Parse a numeric cell. Empty, non-numeric and non-finite cells are None."""
    cell = cell.strip()
    if not cell:
        return None
    try:
        value = float(cell)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_year(header: str) -> Optional[int]:
    """Header -> year, or None for non-year columns (e.g. a trailing blank)."""
    header = header.strip()
    try:
        return int(header)
    except ValueError:
        return None


def parse_country_table(text: str, label: str = '') -> SeriesStore:
    """
    Parse a provider country table into a SeriesStore keyed by country code.

    Args:
        text: Raw CSV text (4 metadata lines, header, data rows)
        label: Store label, e.g. "gdp/constant"

    Returns:
        SeriesStore; empty when the header or the 1960 column is missing
    """
    store = SeriesStore(label)
    lines = text.strip().splitlines()

    if len(lines) <= METADATA_LINES:
        logger.warning(f"Table {label or '<unnamed>'} has no header line ({len(lines)} lines)")
        return store

    headers = tokenize_line(lines[METADATA_LINES])
    start_idx = _find_start_column(headers)
    if start_idx is None:
        logger.warning(f"Table {label or '<unnamed>'} has no {START_YEAR_HEADER} column; no data available")
        return store

    skipped = 0
    for line in lines[METADATA_LINES + 1:]:
        if not line.strip():
            continue

        parts = tokenize_line(line)
        if len(parts) < MIN_COUNTRY_FIELDS:
            skipped += 1
            continue

        name, code = parts[0], parts[1].strip()
        values = _row_values(parts, headers, start_idx)
        store.put(TimeSeries(code=code, name=name, values=values))

    if skipped:
        logger.info(f"Table {label or '<unnamed>'}: skipped {skipped} malformed rows")
    return store


def parse_subnational_table(
    text: str,
    code_of: Callable[[str], str],
    label: str = '',
) -> SeriesStore:
    """
    Parse a subnational table (header of bare years, rows of name + values).

    Args:
        text: Raw CSV text
        code_of: Synthesizes a region code from the row's name
        label: Store label

    Returns:
        SeriesStore keyed by synthesized code; rows whose names map to the same
        code keep the last one and are listed in store.duplicates
    """
    store = SeriesStore(label)
    lines = [line for line in text.strip().splitlines() if line.strip()]
    if not lines:
        return store

    headers = tokenize_line(lines[0])
    skipped = 0
    for line in lines[1:]:
        parts = tokenize_line(line)
        name = parts[0].strip()
        if len(parts) < 2 or not name:
            skipped += 1
            continue

        values = _row_values(parts, headers, 1)
        code = code_of(name)
        previous = store.put(TimeSeries(code=code, name=name, values=values))
        if previous is not None:
            logger.warning(
                f"Subnational table {label or '<unnamed>'}: rows '{previous.name}' and '{name}' "
                f"both map to {code}; keeping '{name}'"
            )
            store.duplicates.append((code, previous.name, name))

    if skipped:
        logger.info(f"Subnational table {label or '<unnamed>'}: skipped {skipped} malformed rows")
    return store


def _find_start_column(headers: List[str]) -> Optional[int]:
    for idx, header in enumerate(headers):
        if header.strip() == START_YEAR_HEADER:
            return idx
    return None


def _row_values(parts: List[str], headers: List[str], start_idx: int) -> dict:
    values = {}
    for j in range(start_idx, len(parts)):
        if j >= len(headers):
            break
        year = parse_year(headers[j])
        if year is None:
            continue
        values[year] = parse_value(parts[j])
    return values
