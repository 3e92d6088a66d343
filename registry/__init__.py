"""Registry module - Series stores, region reconciliation and the store catalog."""

from .series_store import SeriesStore, TimeSeries, get_series
from .reconciler import RegionReconciler, code_of, is_country_code, reconcile
from .catalog import RegionInfo, StoreCatalog, build_catalog, matches, name_sort_key

__all__ = [
    'SeriesStore',
    'TimeSeries',
    'get_series',
    'RegionReconciler',
    'code_of',
    'is_country_code',
    'reconcile',
    'RegionInfo',
    'StoreCatalog',
    'build_catalog',
    'matches',
    'name_sort_key',
]
