"""
View-Model Formatter - Prepare chart, map and table data for rendering.

Every function here is pure over (context, catalog): the output is handed to
a swappable rendering adapter (chart library, SVG map, HTML table).
"""

from typing import Any, Dict, List, Optional, Protocol

from config import MAP_PALETTE, NO_DATA_COLOR, SERIES_COLORS, VIEW_TITLES, config
from geo.choropleth import build_scale
from geo.projection import project_feature
from .metrics import growth_between, ratio_at

COMPARE_LIMIT = 3   # regions shown in compare view (2 lines each)


class ChartHandle(Protocol):
    def destroy(self) -> None: ...


class ChartRenderer(Protocol):
    """External chart capability: draws a view-model, returns a disposable handle."""

    def plot(self, chart: Dict[str, Any]) -> ChartHandle: ...


def _color(index: int) -> str:
    return SERIES_COLORS[index % len(SERIES_COLORS)]


def format_chart_data(ctx, catalog) -> Dict[str, Any]:
    """
    Build the chart view-model for the context's current view.

    Returns:
        {title, y_label, view, labels, series: [{code, name, points, color, dashed}]}
    """
    view = ctx.view if ctx.view in VIEW_TITLES else 'gdp'
    title, y_label = VIEW_TITLES[view][ctx.basis]
    years = ctx.years

    if view == 'ratio':
        series = _ratio_series(ctx, catalog, years)
    elif view == 'compare':
        series = _comparison_series(ctx, catalog, years)
    else:
        series = _level_series(ctx, catalog.combined(view, ctx.basis), years)

    return {
        'title': title,
        'y_label': y_label,
        'view': view,
        'labels': years,
        'series': series,
    }


def _level_series(ctx, store, years: List[int]) -> List[Dict]:
    datasets = []
    for i, code in enumerate(ctx.selected):
        region = store.get(code)
        if region is None:
            continue
        datasets.append({
            'code': code,
            'name': region.name,
            'points': region.points(years),
            'color': _color(i),
            'dashed': False,
        })
    return datasets


def _ratio_series(ctx, catalog, years: List[int]) -> List[Dict]:
    # Price-level ratio is only meaningful at current prices
    gdp = catalog.combined('gdp', 'current')
    ppp = catalog.combined('ppp', 'current')

    datasets = []
    for i, code in enumerate(ctx.selected):
        region = gdp.get(code)
        if region is None or code not in ppp:
            continue
        datasets.append({
            'code': code,
            'name': region.name,
            'points': [ratio_at(gdp, ppp, code, y) for y in years],
            'color': _color(i),
            'dashed': False,
        })
    return datasets


def _comparison_series(ctx, catalog, years: List[int]) -> List[Dict]:
    gdp = catalog.combined('gdp', ctx.basis)
    ppp = catalog.combined('ppp', ctx.basis)

    datasets = []
    for i, code in enumerate(ctx.selected[:COMPARE_LIMIT]):
        g, p = gdp.get(code), ppp.get(code)
        if g is None or p is None:
            continue
        datasets.append({
            'code': code, 'name': f'{g.name} (GDP)', 'points': g.points(years),
            'color': _color(i), 'dashed': True,
        })
        datasets.append({
            'code': code, 'name': f'{g.name} (PPP)', 'points': p.points(years),
            'color': _color(i), 'dashed': False,
        })
    return datasets


def render_chart(ctx, catalog, renderer: ChartRenderer) -> ChartHandle:
    """Dispose the previous chart, draw the current view, keep the new handle."""
    if ctx.chart is not None:
        ctx.chart.destroy()
        ctx.chart = None
    ctx.chart = renderer.plot(format_chart_data(ctx, catalog))
    return ctx.chart


def format_map_view(
    ctx,
    catalog,
    width: Optional[int] = None,
    height: Optional[int] = None,
    year: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Choropleth view-model: one projected, coloured path per boundary feature.

    Colours come from GDP per capita (context basis) in the map year.
    """
    width = width or config.map_width
    height = height or config.map_height
    year = ctx.map_year if year is None else year
    store = catalog.combined('gdp', ctx.basis)

    snapshot = {series.code: series.value(year) for series in store}
    scale = build_scale(snapshot, MAP_PALETTE, NO_DATA_COLOR)

    regions = []
    for feature in catalog.features:
        value = store.value(feature.code, year) if feature.code else None
        regions.append({
            'code': feature.code,
            'name': feature.name,
            'path': project_feature(feature.geometry, width, height),
            'fill': scale.color_of(feature.code) if feature.code else NO_DATA_COLOR,
            'value': value,
        })

    return {
        'year': year,
        'width': width,
        'height': height,
        'legend': {
            'min': scale.min_value,
            'max': scale.max_value,
            'palette': list(scale.palette),
            'no_data': scale.no_data_color,
        },
        'regions': regions,
    }


def format_data_table(ctx, catalog, year: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    Table rows for the selected regions at the reference year.

    Growth is over config.growth_span years, on PPP in the 'ppp' view and
    on GDP otherwise.
    """
    year = config.reference_year if year is None else year
    gdp = catalog.combined('gdp', ctx.basis)
    ppp = catalog.combined('ppp', ctx.basis)
    primary = ppp if ctx.view == 'ppp' else gdp

    rows = []
    for code in ctx.selected:
        g, p = gdp.get(code), ppp.get(code)
        if g is None and p is None:
            continue
        source = p if (ctx.view == 'ppp' and p is not None) else (g or p)
        rows.append({
            'code': code,
            'name': source.name,
            'gdp': gdp.value(code, year),
            'ppp': ppp.value(code, year),
            'ratio': ratio_at(catalog.combined('gdp', 'current'), catalog.combined('ppp', 'current'), code, year),
            'growth': growth_between(primary, code, year - config.growth_span, year),
        })
    return rows
