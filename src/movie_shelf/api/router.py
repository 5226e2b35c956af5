"""Main API router aggregation."""

from fastapi import APIRouter

from movie_shelf.api.catalog import router as catalog_router
from movie_shelf.api.collection import router as collection_router
from movie_shelf.api.dashboard import router as dashboard_router

# Main API router
api_router = APIRouter(prefix="/api")

# Include all sub-routers
api_router.include_router(collection_router)
api_router.include_router(dashboard_router)
api_router.include_router(catalog_router)
