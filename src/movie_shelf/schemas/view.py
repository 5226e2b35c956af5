"""Pydantic schemas for collection view parameters."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from movie_shelf.schemas.movie import MovieStatus


class SortDirection(StrEnum):
    """Direction of a collection sort."""

    NONE = "none"
    ASC = "asc"
    DESC = "desc"


class CollectionViewParams(BaseModel):
    """Filter and sort parameters for browsing a collection.

    All filters are AND-combined. Rating sort takes precedence over year sort.
    """

    model_config = ConfigDict(frozen=True)

    query: str = Field(default="", description="Case-insensitive title substring")
    genres: frozenset[str] = Field(
        default_factory=frozenset, description="Genre labels, any of which must match"
    )
    statuses: frozenset[MovieStatus] = Field(
        default_factory=frozenset, description="Statuses, one of which must match"
    )
    rating_sort: SortDirection = Field(default=SortDirection.NONE, description="Rating sort")
    year_sort: SortDirection = Field(default=SortDirection.NONE, description="Release year sort")

    @field_validator("query")
    @classmethod
    def strip_query(cls, v: str) -> str:
        """Ignore surrounding whitespace in the title query."""
        return v.strip()

    @field_validator("genres")
    @classmethod
    def lowercase_genres(cls, v: frozenset[str]) -> frozenset[str]:
        """Match genres case-insensitively; drop blank labels."""
        return frozenset(genre.strip().lower() for genre in v if genre.strip())
