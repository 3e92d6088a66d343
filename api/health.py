"""
Health Check and Utility Endpoints
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from cache import cache_manager
from sources import DataLoadError, source_manager

health_router = APIRouter()

VERSION = "1.0.0"


@health_router.get("/health")
async def health_check():
    """Simple health check endpoint."""
    return JSONResponse({
        "status": "healthy",
        "version": VERSION
    })


@health_router.get("/api/status")
async def api_status(request: Request):
    """Detailed status: data load outcome, store sizes, sources, cache."""
    catalog = getattr(request.app.state, 'catalog', None)
    init_error = getattr(request.app.state, 'init_error', None)
    return JSONResponse({
        "status": "healthy" if catalog is not None else "degraded",
        "version": VERSION,
        "data_loaded": catalog is not None,
        "init_error": init_error,
        "stores": catalog.stats() if catalog is not None else None,
        "data_sources": source_manager.available_sources(),
        "cache": cache_manager.stats(),
    })


@health_router.get("/api/cache/clear")
async def clear_cache():
    """Clear all caches (admin endpoint)."""
    cache_manager.clear_all()
    return JSONResponse({
        "status": "success",
        "message": "All caches cleared"
    })


@health_router.post("/api/reload")
async def reload_data(request: Request, force: bool = False):
    """Re-run initialization; the current catalog is kept if the reload fails."""
    try:
        catalog = await source_manager.load_catalog(use_cache=not force)
    except DataLoadError as e:
        return JSONResponse(
            status_code=503,
            content={"status": "error", "error": "data_unavailable", "message": str(e)},
        )

    request.app.state.catalog = catalog
    request.app.state.init_error = None
    return JSONResponse({"status": "success", "stores": catalog.stats()})
