"""
Analytics Layer - Per-region statistics and comparative insights.

All growth math goes through processing.metrics so missing data stays
None all the way down; pandas is used for the descriptive statistics.
"""

import pandas as pd
from typing import Dict, List, Optional

from config import config
from registry.series_store import TimeSeries
from .metrics import cagr, growth


def series_frame(series: TimeSeries) -> pd.Series:
    """Year-indexed float Series of the defined values only."""
    data = {year: value for year, value in series.values.items() if value is not None}
    return pd.Series(data, dtype=float).sort_index()


def compute_region_analytics(series: TimeSeries, latest_year: Optional[int] = None) -> Dict:
    """
    Compute analytics for one region's series.

    Args:
        series: The region's time series
        latest_year: Reference year (defaults to config.reference_year)

    Returns:
        Dict with latest value, 1/5/10-year growth, 5-year CAGR and all-time stats
    """
    year = config.reference_year if latest_year is None else latest_year
    latest = series.value(year)

    analytics = {
        'code': series.code,
        'name': series.name,
        'year': year,
        'latest': latest,
        'growth_1y': growth(series.value(year - 1), latest),
        'growth_5y': growth(series.value(year - 5), latest),
        'growth_10y': growth(series.value(year - 10), latest),
        'cagr_5y': cagr(series.value(year - 5), latest, 5),
    }

    values = series_frame(series)
    if len(values) > 0:
        analytics['all_time'] = {
            'high': round(float(values.max()), 4),
            'high_year': int(values.idxmax()),
            'low': round(float(values.min()), 4),
            'low_year': int(values.idxmin()),
            'mean': round(float(values.mean()), 4),
            'first_year': int(values.index[0]),
            'last_year': int(values.index[-1]),
        }

    return analytics


def compute_insights(ctx, catalog) -> Dict:
    """
    Comparative insights for the selected regions.

    Uses PPP data in the 'ppp' view and GDP otherwise, in the context's
    price basis. Regions without a value for the reference year are left
    out of the comparison.
    """
    indicator = 'ppp' if ctx.view == 'ppp' else 'gdp'
    store = catalog.combined(indicator, ctx.basis)

    stats = []
    for code in ctx.selected:
        series = store.get(code)
        if series is None:
            continue
        row = compute_region_analytics(series)
        if row['latest'] is not None:
            stats.append(row)

    stats.sort(key=lambda r: r['latest'], reverse=True)

    insights = {
        'indicator': indicator,
        'label': 'PPP' if indicator == 'ppp' else 'GDP',
        'currency': "Int'l $" if indicator == 'ppp' else 'USD',
        'regions': stats,
        'leader': stats[0] if stats else None,
        'runner_up_gap_pct': None,
        'top_performers': stats[:3],
        'growth_leaders': [],
    }

    if len(stats) >= 2:
        insights['runner_up_gap_pct'] = growth(stats[1]['latest'], stats[0]['latest'])

    with_growth = [r for r in stats if r['growth_5y'] is not None]
    with_growth.sort(key=lambda r: r['growth_5y'], reverse=True)
    insights['growth_leaders'] = with_growth[:3]

    return insights


def insights_to_text(insights: Dict) -> str:
    """Plain-text rendering of compute_insights() output."""
    leader = insights.get('leader')
    if not leader:
        return 'No data available for selected regions.'

    label = insights['label']
    lines: List[str] = [
        f"{leader['name']} leads with {label} per capita of ${leader['latest']:,.0f} ({insights['currency']})."
    ]

    gap = insights.get('runner_up_gap_pct')
    if gap is not None:
        runner_up = insights['regions'][1]
        lines.append(f"That's {gap:.1f}% higher than {runner_up['name']}.")

    if len(insights['regions']) == 1 and leader['growth_5y'] is not None:
        direction = 'grew' if leader['growth_5y'] >= 0 else 'declined'
        lines.append(f"{label} per capita {direction} by {abs(leader['growth_5y']):.1f}% over 5 years.")
        if leader['cagr_5y'] is not None:
            lines.append(f"Avg. annual growth (CAGR): {leader['cagr_5y']:.2f}%")

    return ' '.join(lines)
