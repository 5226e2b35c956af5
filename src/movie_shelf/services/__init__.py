"""Collection statistics, view engine and external API clients."""

from movie_shelf.services.base import (
    APIError,
    BaseAPIClient,
    NotFoundError,
    RateLimitError,
)
from movie_shelf.services.collection import CollectionState, remove_movie, upsert_movie
from movie_shelf.services.records import (
    fields_editable_for,
    resolve_poster_url,
    trusted_rating,
    trusted_review,
)
from movie_shelf.services.stats import (
    build_watched_history,
    status_distribution,
    summarize,
    top_genres,
)
from movie_shelf.services.tmdb import TMDBClient, get_tmdb_client
from movie_shelf.services.view import apply_view

__all__ = [
    "APIError",
    "BaseAPIClient",
    "NotFoundError",
    "RateLimitError",
    "TMDBClient",
    "get_tmdb_client",
    # Collection state
    "CollectionState",
    "upsert_movie",
    "remove_movie",
    # Record helpers
    "fields_editable_for",
    "resolve_poster_url",
    "trusted_rating",
    "trusted_review",
    # Statistics
    "summarize",
    "build_watched_history",
    "top_genres",
    "status_distribution",
    # Browsing
    "apply_view",
]
