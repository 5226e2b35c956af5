"""SQLAlchemy ORM models."""

from movie_shelf.models.movie import Movie

__all__ = [
    "Movie",
]
