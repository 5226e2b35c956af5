"""Pydantic schemas for collection statistics."""

from pydantic import BaseModel, Field

from movie_shelf.schemas.movie import MovieStatus


class StatusCounts(BaseModel):
    """Number of movies per status; every status is always present."""

    wishlist: int = Field(default=0, description="Movies on the wishlist")
    owned: int = Field(default=0, description="Movies owned")
    watched: int = Field(default=0, description="Movies watched")


class CollectionSummary(BaseModel):
    """Totals for a whole collection."""

    total: int = Field(description="Number of movies")
    status_counts: StatusCounts = Field(description="Number of movies per status")
    watched_this_year: int = Field(description="Movies watched in the current calendar year")
    total_value: float = Field(description="Sum of estimated prices")


class WatchedMonth(BaseModel):
    """One calendar month of the watch history."""

    month_label: str = Field(description="Full month name, e.g. January")
    short_label: str = Field(description="Abbreviated month name, e.g. Jan")
    year: int = Field(description="Calendar year")
    count: int = Field(description="Movies watched during the month")


class GenreCount(BaseModel):
    """How often a genre occurs across the collection."""

    genre: str = Field(description="Genre label")
    count: int = Field(description="Number of occurrences")


class StatusCount(BaseModel):
    """Number of movies with a given status."""

    status: MovieStatus = Field(description="Collection status")
    count: int = Field(description="Number of movies")


class DashboardResponse(BaseModel):
    """All dashboard aggregates for the current user."""

    summary: CollectionSummary = Field(description="Collection totals")
    total_value_display: str = Field(description="Formatted total collection value")
    watched_history: list[WatchedMonth] = Field(description="Trailing 12-month watch history")
    watched_last_12_months: int = Field(description="Movies watched in the history window")
    top_genres: list[GenreCount] = Field(description="Most frequent genres")
    status_distribution: list[StatusCount] = Field(description="Non-empty status counts")
