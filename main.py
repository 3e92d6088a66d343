"""
GDP Explorer - Country and Region Economic Data Explorer

Ingests World Bank GDP per capita tables (nominal and PPP, constant and
current prices) plus optional subnational tables, and serves chart, map,
ranking and export view-models over a JSON API.

Features:
- Quote-aware parsing of WDI bulk-download CSVs
- Country + subnational reconciliation into one keyed store
- Growth, CAGR and price-level (GDP/PPP) ratios with explicit "not computable"
- Clamped Mercator choropleth with log-scaled colour bins
- Dense rankings with stable sort/filter
- Map playback through the years
"""

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware

# Import modules
from config import config
from api import explorer_router, health_router
from session import ExplorerContext
from sources import DataLoadError, close_async_client, source_manager

logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
logger = logging.getLogger(__name__)


# =============================================================================
# APP INITIALIZATION
# =============================================================================

app = FastAPI(
    title="GDP Explorer",
    description="Country and region GDP per capita explorer",
    version="1.0.0"
)

# CORS for development (frontend runs on different port)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.catalog = None
app.state.init_error = None
app.state.context = ExplorerContext()
app.state.playback = None
app.state.map_view = None

# Include routers
app.include_router(explorer_router)
app.include_router(health_router)


# Exception handler for debugging
@app.exception_handler(Exception)
async def debug_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "type": type(exc).__name__}
    )


# =============================================================================
# STATIC FRONTEND
# =============================================================================

FRONTEND_BUILD_PATH = Path(__file__).parent / "frontend" / "dist"


def is_production() -> bool:
    """Check if a frontend build is present."""
    return (FRONTEND_BUILD_PATH / "index.html").exists()


if is_production():
    app.mount("/assets", StaticFiles(directory=FRONTEND_BUILD_PATH / "assets"), name="assets")

    @app.get("/")
    async def serve_frontend():
        return FileResponse(FRONTEND_BUILD_PATH / "index.html")


# =============================================================================
# STARTUP / SHUTDOWN
# =============================================================================

@app.on_event("startup")
async def startup():
    """Fetch and parse every dataset; any failed fetch aborts initialization."""
    print("=" * 60)
    print("GDP Explorer Starting Up")
    print("=" * 60)

    print("Tables:")
    for (indicator, basis), location in config.tables.items():
        print(f"  {indicator}/{basis}: {location}")
    for indicator, basis, location in config.subnational_tables:
        print(f"  {indicator}/{basis} (regions): {location}")
    print(f"  boundaries: {config.geojson_url}")

    print("-" * 60)
    try:
        app.state.catalog = await source_manager.load_catalog()
        app.state.init_error = None
        print(f"Loaded {len(app.state.catalog.regions())} regions")
    except DataLoadError as e:
        app.state.catalog = None
        app.state.init_error = str(e)
        print(f"[Startup] Data load FAILED: {e}")

    print("=" * 60)
    print("Ready to serve requests")
    print("=" * 60)


@app.on_event("shutdown")
async def shutdown():
    if app.state.playback is not None:
        await app.state.playback.stop()
    await close_async_client()


# =============================================================================
# RUN
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
