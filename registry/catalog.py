"""
Store Catalog - every resident dataset the explorer queries.

Holds the four country stores (gdp/ppp x constant/current), the combined
country + subnational stores built from them, and the boundary features.
"""

import unicodedata
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from config import BASES, INDICATORS
from .series_store import SeriesStore, TimeSeries
from .reconciler import reconcile


@dataclass
class RegionInfo:
    code: str
    name: str
    subnational: bool = False


@dataclass
class StoreCatalog:
    """All stores plus boundary features, built once per initialization."""

    country: Dict[Tuple[str, str], SeriesStore]
    combined_stores: Dict[Tuple[str, str], SeriesStore] = field(default_factory=dict)
    features: list = field(default_factory=list)

    def store(self, indicator: str, basis: str) -> SeriesStore:
        return self.country[(indicator, basis)]

    def combined(self, indicator: str, basis: str) -> SeriesStore:
        store = self.combined_stores.get((indicator, basis))
        return store if store is not None else self.country[(indicator, basis)]

    def series(self, code: str, indicator: str = 'gdp', basis: str = 'constant') -> Optional[TimeSeries]:
        return self.combined(indicator, basis).get(code)

    def name_of(self, code: str) -> Optional[str]:
        """Display name, searching every combined store."""
        for key in self.combined_stores or self.country:
            series = self.combined(*key).get(code)
            if series:
                return series.name
        return None

    def regions(self, query: str = '') -> List[RegionInfo]:
        """
        Known regions sorted by display name, optionally filtered.

        The region list comes from the GDP stores (country and subnational,
        both bases); `query` matches name or code case-insensitively.
        """
        seen: Dict[str, RegionInfo] = {}
        for basis in BASES:
            for series in self.combined('gdp', basis):
                if series.code not in seen:
                    is_sub = series.code not in self.country[('gdp', basis)]
                    seen[series.code] = RegionInfo(series.code, series.name, is_sub)

        regions = list(seen.values())
        if query:
            regions = [r for r in regions if matches(r.code, r.name, query)]
        return sorted(regions, key=lambda r: name_sort_key(r.name))

    def stats(self) -> dict:
        return {
            'country': {f'{i}/{b}': len(s) for (i, b), s in self.country.items()},
            'combined': {f'{i}/{b}': len(s) for (i, b), s in self.combined_stores.items()},
            'features': len(self.features),
        }


def build_catalog(
    country: Dict[Tuple[str, str], SeriesStore],
    subnational: Dict[Tuple[str, str], List[Tuple[str, SeriesStore]]],
    features: Optional[list] = None,
) -> StoreCatalog:
    """
    Reconcile subnational stores into per-(indicator, basis) combined stores.

    Args:
        country: Parsed country stores keyed by (indicator, basis)
        subnational: (source_id, store) pairs keyed by (indicator, basis)
        features: Parsed boundary features

    Returns:
        StoreCatalog
    """
    combined = {}
    for indicator in INDICATORS:
        for basis in BASES:
            key = (indicator, basis)
            if key not in country:
                country[key] = SeriesStore(f'{indicator}/{basis}')
            combined[key] = reconcile(country[key], subnational.get(key, []), f'{indicator}/{basis}+regions')

    return StoreCatalog(country=country, combined_stores=combined, features=features or [])


def matches(code: str, name: str, query: str) -> bool:
    """Case-insensitive substring match over name and code."""
    q = query.strip().casefold()
    if not q:
        return True
    return q in name.casefold() or q in code.casefold()


def name_sort_key(name: str) -> Tuple[str, str]:
    """
    Accent- and case-insensitive sort key: NFKD decomposition with combining
    marks dropped, then casefolded. A simplification of locale-aware
    collation; the original name breaks ties.

    "Côte d'Ivoire" sorts with "Cote", "Ireland" before "italy".
    """
    decomposed = unicodedata.normalize('NFKD', name)
    base = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), name)
