"""Pydantic schemas for TMDB API responses."""

from pydantic import BaseModel, ConfigDict, Field


class TMDBGenre(BaseModel):
    """A movie genre from TMDB."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="TMDB genre ID")
    name: str = Field(description="Genre name")


class TMDBGenreListResponse(BaseModel):
    """Response from TMDB movie genre list endpoint."""

    model_config = ConfigDict(extra="ignore")

    genres: list[TMDBGenre] = Field(default_factory=list, description="All movie genres")
