"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from movie_shelf import __version__
from movie_shelf.api import api_router
from movie_shelf.api.catalog import CatalogRequestError
from movie_shelf.config import get_settings
from movie_shelf.database import dispose_engine

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - runs on startup and shutdown."""
    # Startup
    logger.info("Starting %s v%s", settings.app_name, __version__)
    logger.info("Debug mode: %s", settings.debug)
    logger.info("Database: %s", settings.database_url.split("///")[-1])  # Hide path details
    logger.info("TMDB API: %s", "configured" if settings.tmdb_api_key else "NOT CONFIGURED")
    logger.info(
        "Dashboard: timezone %s, top %d genres",
        settings.display_timezone,
        settings.top_genres_limit,
    )

    # Validate and log warnings
    warnings = settings.validate_runtime_config()
    if warnings:
        logger.warning("Configuration warnings:")
        for warning in warnings:
            logger.warning("  - %s", warning)
    else:
        logger.info("Configuration validation passed - no warnings")

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Application shutting down")
    await dispose_engine()


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)


@app.exception_handler(CatalogRequestError)
async def catalog_error_handler(_request: Request, exc: CatalogRequestError) -> JSONResponse:
    """Render catalog proxy failures as {"error": message}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc) or "Unexpected error"},
    )


# Include API router
app.include_router(api_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the API is running."""
    return {"status": "healthy", "version": __version__}
