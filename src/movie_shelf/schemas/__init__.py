"""Pydantic schemas for request/response validation."""

from movie_shelf.schemas.catalog import CatalogEndpoint, CatalogErrorResponse, CatalogRequest
from movie_shelf.schemas.external import TMDBGenre, TMDBGenreListResponse
from movie_shelf.schemas.movie import (
    CollectionListResponse,
    CollectionMovie,
    CollectionMovieResponse,
    EditableFields,
    MovieCreate,
    MovieStatus,
    MovieUpdate,
)
from movie_shelf.schemas.stats import (
    CollectionSummary,
    DashboardResponse,
    GenreCount,
    StatusCount,
    StatusCounts,
    WatchedMonth,
)
from movie_shelf.schemas.view import CollectionViewParams, SortDirection

__all__ = [
    # External API schemas
    "TMDBGenre",
    "TMDBGenreListResponse",
    # Catalog proxy schemas
    "CatalogEndpoint",
    "CatalogRequest",
    "CatalogErrorResponse",
    # Collection schemas
    "MovieStatus",
    "EditableFields",
    "CollectionMovie",
    "CollectionMovieResponse",
    "CollectionListResponse",
    "MovieCreate",
    "MovieUpdate",
    # View schemas
    "SortDirection",
    "CollectionViewParams",
    # Statistics schemas
    "StatusCounts",
    "CollectionSummary",
    "WatchedMonth",
    "GenreCount",
    "StatusCount",
    "DashboardResponse",
]
