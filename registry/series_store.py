"""
Series Store - Region code -> time series mapping.

One store per parsed dataset (e.g. GDP at constant prices). Stores are keyed by
region code: a 3-letter country code or a synthesized subnational code
(see registry.reconciler).

A year key exists only if the source row had that column. A present key maps
to a finite float or None ("no data"), never NaN.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class TimeSeries:
    """A named year -> value series for one region."""

    code: str
    name: str
    values: Dict[int, Optional[float]] = field(default_factory=dict)

    def value(self, year: int) -> Optional[float]:
        """Value for a year, or None if missing or not in the source."""
        return self.values.get(year)

    def points(self, years: List[int]) -> List[Optional[float]]:
        """Values aligned to a list of years (None where missing)."""
        return [self.values.get(y) for y in years]

    @property
    def years(self) -> List[int]:
        return sorted(self.values)

    def defined_years(self) -> List[int]:
        """Years that carry an actual value."""
        return sorted(y for y, v in self.values.items() if v is not None)


class SeriesStore:
    """
    Mapping from region code to TimeSeries.

    A code appears at most once; put() replaces an existing entry.
    duplicates lists (code, replaced name, kept name) for rows of the same
    source table that mapped to one code.
    """

    def __init__(self, label: str = '', series: Optional[Dict[str, TimeSeries]] = None):
        self.label = label
        self._series: Dict[str, TimeSeries] = dict(series or {})
        self.duplicates: List[Tuple[str, str, str]] = []

    def get(self, code: str) -> Optional[TimeSeries]:
        return self._series.get(code)

    def put(self, series: TimeSeries) -> Optional[TimeSeries]:
        """Insert a series, returning the entry it replaced (if any)."""
        previous = self._series.get(series.code)
        self._series[series.code] = series
        return previous

    def value(self, code: str, year: int) -> Optional[float]:
        series = self._series.get(code)
        return series.value(year) if series else None

    def codes(self) -> List[str]:
        return list(self._series)

    def items(self) -> Iterator[Tuple[str, TimeSeries]]:
        return iter(self._series.items())

    def copy(self, label: Optional[str] = None) -> 'SeriesStore':
        return SeriesStore(label if label is not None else self.label, self._series)

    def __contains__(self, code: object) -> bool:
        return code in self._series

    def __len__(self) -> int:
        return len(self._series)

    def __iter__(self) -> Iterator[TimeSeries]:
        return iter(self._series.values())

    def __repr__(self) -> str:
        return f"SeriesStore({self.label!r}, {len(self._series)} series)"


def get_series(store: SeriesStore, code: str) -> Optional[TimeSeries]:
    """Look up a region's series; None when the store has no such region."""
    return store.get(code)
