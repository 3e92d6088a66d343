"""
Explorer API Endpoints

JSON query surface for the UI layer: series lookup, derived metrics, chart /
map / table view-models, rankings, export and selection state.
"""

from typing import List, Optional
from pydantic import BaseModel

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import JSONResponse, Response

from config import BASES, INDICATORS, config
from processing import (
    MetricKind,
    MetricParams,
    build_snapshot,
    compute_insights,
    export_csv,
    format_chart_data,
    format_data_table,
    format_map_view,
    get_metric,
    insights_to_text,
    rank,
)
from processing.ranking import SORT_KEYS
from session import ExplorerContext, Playback

explorer_router = APIRouter()


# =============================================================================
# PYDANTIC MODELS FOR JSON API
# =============================================================================

class SelectionRequest(BaseModel):
    """Regions to add to / remove from the selection."""
    add: List[str] = []
    remove: List[str] = []


class ViewRequest(BaseModel):
    """Partial update of the view settings."""
    view: Optional[str] = None
    basis: Optional[str] = None
    year_start: Optional[int] = None
    year_end: Optional[int] = None
    map_year: Optional[int] = None


# =============================================================================
# STATE HELPERS
# =============================================================================

def get_catalog(request: Request):
    """Loaded catalog, or 503 if initialization failed / has not run."""
    catalog = getattr(request.app.state, 'catalog', None)
    if catalog is None:
        error = getattr(request.app.state, 'init_error', None) or 'Data not loaded yet'
        raise HTTPException(
            status_code=503,
            detail={'error': 'data_unavailable', 'message': error},
        )
    return catalog


def get_context(request: Request) -> ExplorerContext:
    state = request.app.state
    if getattr(state, 'context', None) is None:
        state.context = ExplorerContext()
    return state.context


def get_playback(request: Request) -> Playback:
    state = request.app.state
    if getattr(state, 'playback', None) is None:
        state.playback = Playback(get_context(request), on_tick=lambda year: on_map_year(request.app, year))
    return state.playback


def on_map_year(app, year: int) -> dict:
    """
    Year-change handler shared by manual changes and playback ticks.

    Rebuilds the map view-model for the new year and keeps it as the last render.
    """
    ctx = app.state.context
    ctx.set_map_year(year)
    catalog = getattr(app.state, 'catalog', None)
    if catalog is None:
        return {}
    app.state.map_view = format_map_view(ctx, catalog)
    return app.state.map_view


def _check_choice(value: str, allowed, label: str) -> str:
    if value not in allowed:
        raise HTTPException(status_code=400, detail=f"Unknown {label} '{value}' (expected one of {', '.join(allowed)})")
    return value


# =============================================================================
# QUERY ENDPOINTS
# =============================================================================

@explorer_router.get("/api/regions")
async def list_regions(request: Request, q: str = ''):
    """Regions sorted by name, filtered by a name/code substring (search box)."""
    catalog = get_catalog(request)
    return JSONResponse({
        'regions': [
            {'code': r.code, 'name': r.name, 'subnational': r.subnational}
            for r in catalog.regions(q)
        ]
    })


@explorer_router.get("/api/series/{code}")
async def get_series_endpoint(request: Request, code: str, indicator: str = 'gdp', basis: str = 'constant'):
    """One region's time series."""
    catalog = get_catalog(request)
    _check_choice(indicator, INDICATORS, 'indicator')
    _check_choice(basis, BASES, 'basis')

    series = catalog.series(code, indicator, basis)
    if series is None:
        raise HTTPException(status_code=404, detail=f"No data for region {code}")

    return JSONResponse({
        'code': series.code,
        'name': series.name,
        'indicator': indicator,
        'basis': basis,
        'values': {str(year): series.values[year] for year in series.years},
    })


@explorer_router.get("/api/metric")
async def get_metric_endpoint(
    request: Request,
    kind: str,
    code: str,
    year: int,
    start_year: Optional[int] = None,
    indicator: str = 'gdp',
    basis: str = 'constant',
):
    """A derived metric; value is null when not computable."""
    catalog = get_catalog(request)
    _check_choice(kind, [k.value for k in MetricKind], 'metric kind')
    _check_choice(indicator, INDICATORS, 'indicator')
    _check_choice(basis, BASES, 'basis')

    params = MetricParams(year=year, start_year=start_year, indicator=indicator, basis=basis)
    value = get_metric(MetricKind(kind), code, params, catalog)
    return JSONResponse({
        'kind': kind,
        'code': code,
        'value': value,
        'computable': value is not None,
    })


@explorer_router.get("/api/chart")
async def chart(request: Request):
    catalog = get_catalog(request)
    return JSONResponse(format_chart_data(get_context(request), catalog))


@explorer_router.get("/api/table")
async def table(request: Request, year: Optional[int] = None):
    catalog = get_catalog(request)
    return JSONResponse({'rows': format_data_table(get_context(request), catalog, year)})


@explorer_router.get("/api/insights")
async def insights(request: Request):
    catalog = get_catalog(request)
    result = compute_insights(get_context(request), catalog)
    result['text'] = insights_to_text(result)
    return JSONResponse(result)


@explorer_router.get("/api/map")
async def map_view(
    request: Request,
    year: Optional[int] = None,
    width: int = Query(default=config.map_width, gt=0),
    height: int = Query(default=config.map_height, gt=0),
):
    """Choropleth view-model (paths recomputed on every request)."""
    catalog = get_catalog(request)
    return JSONResponse(format_map_view(get_context(request), catalog, width, height, year))


@explorer_router.get("/api/ranking")
async def ranking(
    request: Request,
    year: Optional[int] = None,
    sort: str = 'rank',
    ascending: Optional[bool] = None,
    q: str = '',
):
    """
    All regions ranked by GDP per capita for a year.

    Default direction: ascending for rank and name, descending for metrics.
    """
    catalog = get_catalog(request)
    ctx = get_context(request)
    _check_choice(sort, SORT_KEYS, 'sort key')
    if ascending is None:
        ascending = sort in ('rank', 'name')

    year = ctx.map_year if year is None else year
    entries = rank(build_snapshot(catalog, year, ctx.basis), sort, ascending, q)
    return JSONResponse({
        'year': year,
        'basis': ctx.basis,
        'sort': sort,
        'ascending': ascending,
        'entries': [
            {
                'rank': e.rank,
                'code': e.code,
                'name': e.name,
                'primary': e.primary,
                **e.secondary,
            }
            for e in entries
        ],
    })


@explorer_router.get("/api/export")
async def export(request: Request):
    """CSV of the selected regions over the chart year range."""
    catalog = get_catalog(request)
    return Response(
        content=export_csv(get_context(request), catalog),
        media_type='text/csv',
        headers={'Content-Disposition': 'attachment; filename="gdp_data_export.csv"'},
    )


# =============================================================================
# STATE ENDPOINTS
# =============================================================================

@explorer_router.get("/api/context")
async def context(request: Request):
    return JSONResponse(get_context(request).to_dict())


@explorer_router.post("/api/selection")
async def update_selection(request: Request, body: SelectionRequest):
    ctx = get_context(request)
    ctx.add_regions(body.add)
    for code in body.remove:
        ctx.remove_region(code)
    return JSONResponse(ctx.to_dict())


@explorer_router.post("/api/view")
async def update_view(request: Request, body: ViewRequest):
    ctx = get_context(request)
    try:
        if body.view is not None:
            ctx.set_view(body.view)
        if body.basis is not None:
            ctx.set_basis(body.basis)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if body.year_start is not None:
        ctx.set_year_start(body.year_start)
    if body.year_end is not None:
        ctx.set_year_end(body.year_end)
    if body.map_year is not None:
        on_map_year(request.app, body.map_year)
    return JSONResponse(ctx.to_dict())


@explorer_router.post("/api/play")
async def play(request: Request):
    get_catalog(request)
    started = get_playback(request).start()
    return JSONResponse({'playing': True, 'started': started, 'map_year': get_context(request).map_year})


@explorer_router.post("/api/pause")
async def pause(request: Request):
    stopped = await get_playback(request).stop()
    return JSONResponse({'playing': False, 'stopped': stopped, 'map_year': get_context(request).map_year})
