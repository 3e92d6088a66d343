"""
Ranking Engine - Per-region metric snapshot, dense ranks, sorting, filtering.

Rank 1 = highest primary metric. Ranks are assigned once, from the
unfiltered snapshot sorted by the primary metric, and travel with each
entry: re-sorting by another column or filtering never renumbers them.

Placement rule for missing metrics: an entry whose sort metric is not
computable always goes after every entry that has one, in both
ascending and descending order. Ties (and the missing block) fall back
to rank, then name.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from config import config
from registry.catalog import matches, name_sort_key
from .metrics import growth_between, ratio_at

SORT_KEYS = ('rank', 'name', 'primary', 'secondary', 'growth', 'ratio')


@dataclass
class RankingEntry:
    code: str
    name: str
    primary: Optional[float]
    secondary: Dict[str, Optional[float]] = field(default_factory=dict)
    rank: Optional[int] = None

    @property
    def growth(self) -> Optional[float]:
        return self.secondary.get('growth')

    def metric(self, key: str) -> Optional[float]:
        if key == 'primary':
            return self.primary
        if key == 'rank':
            return float(self.rank) if self.rank is not None else None
        return self.secondary.get(key)


def build_snapshot(catalog, year: int, basis: str = 'constant', growth_span: Optional[int] = None) -> List[RankingEntry]:
    """
    One entry per GDP region for a year.

    primary = GDP per capita (basis), secondary = PPP (basis),
    ratio = current-price GDP / PPP, growth = primary growth over
    growth_span years ending at `year`.
    """
    span = config.growth_span if growth_span is None else growth_span
    gdp = catalog.combined('gdp', basis)
    ppp = catalog.combined('ppp', basis)
    gdp_current = catalog.combined('gdp', 'current')
    ppp_current = catalog.combined('ppp', 'current')

    entries = []
    for series in gdp:
        code = series.code
        entries.append(RankingEntry(
            code=code,
            name=series.name,
            primary=series.value(year),
            secondary={
                'secondary': ppp.value(code, year),
                'ratio': ratio_at(gdp_current, ppp_current, code, year),
                'growth': growth_between(gdp, code, year - span, year),
            },
        ))
    return entries


def assign_ranks(entries: List[RankingEntry]) -> List[RankingEntry]:
    """
    Dense 1-based ranks by primary metric, highest first.

    Entries without a primary value stay unranked (rank None).
    Returns new entries in rank order.
    """
    ordered = _sort_by_metric(entries, 'primary', ascending=False)
    ranked = []
    rank = 0
    previous = None
    for entry in ordered:
        if entry.primary is None:
            ranked.append(replace(entry, rank=None))
            continue
        if entry.primary != previous:
            rank += 1
            previous = entry.primary
        ranked.append(replace(entry, rank=rank))
    return ranked


def sort_entries(entries: List[RankingEntry], sort_key: str = 'rank', ascending: bool = True) -> List[RankingEntry]:
    """Order entries by any column; see module docstring for placement rules."""
    if sort_key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key '{sort_key}' (expected one of {', '.join(SORT_KEYS)})")

    if sort_key == 'name':
        return sorted(entries, key=lambda e: name_sort_key(e.name), reverse=not ascending)
    return _sort_by_metric(entries, sort_key, ascending)


def _sort_by_metric(entries: List[RankingEntry], key: str, ascending: bool) -> List[RankingEntry]:
    # Stable sorts, least significant key first: name, then rank, then the metric
    by_name = sorted(entries, key=lambda e: name_sort_key(e.name))
    by_rank = sorted(by_name, key=lambda e: (e.rank is None, e.rank or 0))

    present = [e for e in by_rank if e.metric(key) is not None]
    missing = [e for e in by_rank if e.metric(key) is None]
    present.sort(key=lambda e: e.metric(key), reverse=not ascending)
    return present + missing


def filter_entries(entries: List[RankingEntry], text: str) -> List[RankingEntry]:
    if not text or not text.strip():
        return list(entries)
    return [e for e in entries if matches(e.code, e.name, text)]


def rank(
    snapshot: List[RankingEntry],
    sort_key: str = 'rank',
    ascending: bool = True,
    filter_text: str = '',
) -> List[RankingEntry]:
    """
    Full ranking pipeline: rank (unfiltered) -> sort -> filter.

    Args:
        snapshot: Entries for one year (ranks are recomputed here)
        sort_key: rank, name, primary, secondary, growth or ratio
        ascending: Sort direction for the chosen column
        filter_text: Case-insensitive substring over name and code

    Returns:
        Entries carrying their primary-metric rank
    """
    ranked = assign_ranks(snapshot)
    return filter_entries(sort_entries(ranked, sort_key, ascending), filter_text)
