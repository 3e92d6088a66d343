"""API module - FastAPI routers and endpoints."""

from .explorer import explorer_router
from .health import health_router

__all__ = ['explorer_router', 'health_router']
