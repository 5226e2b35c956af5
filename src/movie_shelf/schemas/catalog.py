"""Pydantic schemas for the catalog proxy endpoint."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CatalogEndpoint(StrEnum):
    """Catalog operations the proxy forwards to TMDB."""

    SEARCH = "search"
    POPULAR = "popular"
    TOP_RATED = "top_rated"
    UPCOMING = "upcoming"
    TRENDING = "trending"
    DETAILS = "details"


class CatalogRequest(BaseModel):
    """Body of a catalog proxy request.

    Field names follow the camelCase keys sent by the web client.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    endpoint: CatalogEndpoint = Field(description="Catalog operation")
    query: str | None = Field(default=None, description="Search text (search only)")
    page: int = Field(default=1, description="Result page, invalid values become 1")
    tmdb_id: int | None = Field(default=None, alias="tmdbId", description="TMDB movie ID")
    include_genres: bool = Field(
        default=False, alias="includeGenres", description="Resolve genre_ids to names"
    )
    language: str | None = Field(default=None, description="Response language code")

    @field_validator("page", mode="before")
    @classmethod
    def normalize_page(cls, v: Any) -> int:
        """Fall back to page 1 for missing, non-numeric or non-positive pages."""
        if isinstance(v, bool):
            return 1
        try:
            page = int(v)
        except (TypeError, ValueError, OverflowError):
            return 1
        return page if page > 0 else 1

    @field_validator("query")
    @classmethod
    def blank_query_to_none(cls, v: str | None) -> str | None:
        """Treat a blank search as no search."""
        if v is None:
            return None
        return v.strip() or None


class CatalogErrorResponse(BaseModel):
    """Error body returned by the catalog proxy."""

    error: str = Field(description="What went wrong")
