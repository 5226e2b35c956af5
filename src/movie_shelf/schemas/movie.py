"""Pydantic schemas for collection movies."""

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from movie_shelf.utils.records import parse_price, parse_timestamp, resolve_genre_labels


class MovieStatus(StrEnum):
    """Lifecycle stage of a movie in a collection."""

    WISHLIST = "wishlist"
    OWNED = "owned"
    WATCHED = "watched"


class EditableFields(BaseModel):
    """Which personal fields may be set for a given status."""

    model_config = ConfigDict(frozen=True)

    rating: bool = Field(description="Whether a rating may be set")
    review: bool = Field(description="Whether a personal review may be set")
    price: bool = Field(description="Whether an estimated price may be set")


class CollectionMovie(BaseModel):
    """A movie in the user's collection, normalized from a stored row.

    Genres are reduced to plain labels, prices and timestamps that cannot be
    parsed become None. Rating and review are kept as stored, even when the
    current status would not allow them.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str = Field(description="Collection movie ID")
    title: str = Field(description="Movie title")
    release_year: int | None = Field(default=None, description="Release year")
    status: MovieStatus = Field(description="Collection status")
    rating: int | None = Field(default=None, description="Personal rating (1-5)")
    synopsis: str | None = Field(default=None, description="Movie synopsis")
    personal_review: str | None = Field(default=None, description="Private review")
    genres: list[str] = Field(default_factory=list, description="Genre labels")
    tmdb_poster_path: str | None = Field(default=None, description="TMDB poster path")
    user_poster_url: str | None = Field(default=None, description="User-provided poster URL")
    estimated_price: float | None = Field(default=None, description="Estimated price")
    watched_at: datetime | None = Field(default=None, description="When the movie was watched")

    @field_validator("id", mode="before")
    @classmethod
    def id_to_str(cls, v: Any) -> Any:
        """Accept numeric or UUID identifiers."""
        if v is None:
            return v
        return str(v)

    @field_validator("genres", mode="before")
    @classmethod
    def normalize_genres(cls, v: Any) -> list[str]:
        """Reduce string / {name} genre entries to labels."""
        return resolve_genre_labels(v)

    @field_validator("estimated_price", mode="before")
    @classmethod
    def normalize_price(cls, v: Any) -> float | None:
        """Parse numeric strings; drop anything unparseable."""
        return parse_price(v)

    @field_validator("watched_at", mode="before")
    @classmethod
    def normalize_watched_at(cls, v: Any) -> datetime | None:
        """Parse ISO timestamps; drop anything unparseable."""
        return parse_timestamp(v)


class CollectionMovieResponse(CollectionMovie):
    """A collection movie decorated with display values."""

    poster_url: str | None = Field(default=None, description="Resolved poster URL")
    price_display: str = Field(description="Formatted estimated price")
    watched_on: str | None = Field(default=None, description="Formatted watch date")
    editable: EditableFields = Field(description="Fields editable for the current status")


class CollectionListResponse(BaseModel):
    """Response for the collection listing endpoint."""

    total: int = Field(description="Number of movies in the whole collection")
    matched: int = Field(description="Number of movies matching the view parameters")
    results: list[CollectionMovieResponse] = Field(
        default_factory=list, description="Filtered and sorted movies"
    )


class MovieCreate(BaseModel):
    """Schema for adding a catalog title to the collection."""

    tmdb_id: int = Field(ge=1, description="TMDB movie ID")
    title: str = Field(min_length=1, max_length=255, description="Movie title")
    release_year: int = Field(ge=1800, le=2100, description="Release year")
    synopsis: str | None = Field(default=None, description="Movie synopsis")
    tmdb_poster_path: str | None = Field(default=None, description="TMDB poster path")
    genres: list[str | dict[str, Any]] = Field(
        default_factory=list, description="Genre names or {id, name} objects"
    )


class MovieUpdate(BaseModel):
    """Schema for replacing the editable fields of a collection movie."""

    status: MovieStatus = Field(description="Collection status")
    rating: int | None = Field(default=None, ge=1, le=5, description="Personal rating (1-5)")
    personal_review: str | None = Field(default=None, description="Private review")
    user_poster_url: str | None = Field(
        default=None, max_length=500, description="User-provided poster URL"
    )
    estimated_price: float | None = Field(
        default=None, ge=0, allow_inf_nan=False, description="Estimated price"
    )

    @field_validator("personal_review")
    @classmethod
    def blank_review_to_none(cls, v: str | None) -> str | None:
        """Trim the review and treat blank text as no review."""
        if v is None:
            return None
        v = v.strip()
        return v or None
