"""
Derived Metrics - growth, CAGR and cross-series ratios.

Every function returns None when the metric is not computable (missing
endpoint, zero denominator, non-positive CAGR base, empty interval).
Callers must treat the result as optional and never coerce it to 0.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from registry.series_store import SeriesStore


class MetricKind(str, Enum):
    VALUE = 'value'
    GROWTH = 'growth'
    CAGR = 'cagr'
    RATIO = 'ratio'


def growth(start: Optional[float], end: Optional[float]) -> Optional[float]:
    """Percent change from start to end. Positive = increase."""
    if start is None or end is None or start == 0:
        return None
    return (end - start) / start * 100


def cagr(start: Optional[float], end: Optional[float], years: int) -> Optional[float]:
    """
    Compound annual growth rate in percent over `years` years.

    Not computed for a non-positive interval or a non-positive start value.
    A negative end value has no real root and is not computed either.
    """
    if start is None or end is None or years <= 0:
        return None
    if start <= 0 or end < 0:
        return None
    return (pow(end / start, 1 / years) - 1) * 100


def ratio(numerator: Optional[float], denominator: Optional[float]) -> Optional[float]:
    if numerator is None or denominator is None or denominator == 0:
        return None
    return numerator / denominator


# =============================================================================
# Store-level lookups
# =============================================================================

def growth_between(store: SeriesStore, code: str, start_year: int, end_year: int) -> Optional[float]:
    return growth(store.value(code, start_year), store.value(code, end_year))


def cagr_between(store: SeriesStore, code: str, start_year: int, end_year: int) -> Optional[float]:
    return cagr(store.value(code, start_year), store.value(code, end_year), end_year - start_year)


def ratio_at(numerator: SeriesStore, denominator: SeriesStore, code: str, year: int) -> Optional[float]:
    return ratio(numerator.value(code, year), denominator.value(code, year))


@dataclass
class MetricParams:
    """Parameters for get_metric()."""

    year: int
    start_year: Optional[int] = None
    indicator: str = 'gdp'
    basis: str = 'constant'


def get_metric(kind: MetricKind, code: str, params: MetricParams, catalog) -> Optional[float]:
    """
    Compute one derived metric for a region.

    The ratio always uses current-price GDP over current-price PPP,
    whatever basis the caller displays.

    Args:
        kind: Metric to compute
        code: Region code
        params: Year / interval, indicator and basis
        catalog: StoreCatalog holding the combined stores

    Returns:
        The value, or None when not computable
    """
    kind = MetricKind(kind)

    if kind == MetricKind.RATIO:
        return ratio_at(
            catalog.combined('gdp', 'current'),
            catalog.combined('ppp', 'current'),
            code, params.year,
        )

    store = catalog.combined(params.indicator, params.basis)
    if kind == MetricKind.VALUE:
        return store.value(code, params.year)

    if params.start_year is None:
        return None
    if kind == MetricKind.GROWTH:
        return growth_between(store, code, params.start_year, params.year)
    return cagr_between(store, code, params.start_year, params.year)
