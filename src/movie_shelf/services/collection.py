"""Caller-owned collection state with pure reducer-style updates."""

from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from movie_shelf.schemas.movie import CollectionMovie


def upsert_movie(
    movies: Sequence[CollectionMovie],
    movie: CollectionMovie,
) -> list[CollectionMovie]:
    """Return a new list with movie replacing the entry with the same id.

    The movie is appended if no entry has its id.
    """
    if not any(existing.id == movie.id for existing in movies):
        return [*movies, movie]
    return [movie if existing.id == movie.id else existing for existing in movies]


def remove_movie(movies: Sequence[CollectionMovie], movie_id: str) -> list[CollectionMovie]:
    """Return a new list without the movie with the given id."""
    return [movie for movie in movies if movie.id != movie_id]


class CollectionState(BaseModel):
    """Immutable snapshot of a user's collection.

    Every change produces a new state with a higher generation. A caller
    that starts a fetch remembers the generation it saw and hands it back to
    accept(); results of fetches overtaken by a newer change are dropped.
    """

    model_config = ConfigDict(frozen=True)

    movies: tuple[CollectionMovie, ...] = Field(default=(), description="Current movies")
    generation: int = Field(default=0, description="Incremented on every change")

    def replace(self, movies: Iterable[CollectionMovie]) -> "CollectionState":
        """Return a state holding exactly the given movies."""
        return CollectionState(movies=tuple(movies), generation=self.generation + 1)

    def upsert(self, movie: CollectionMovie) -> "CollectionState":
        """Return a state with movie added or replaced by id."""
        return self.replace(upsert_movie(self.movies, movie))

    def remove(self, movie_id: str) -> "CollectionState":
        """Return a state without the movie with the given id."""
        return self.replace(remove_movie(self.movies, movie_id))

    def accept(self, generation: int, movies: Iterable[CollectionMovie]) -> "CollectionState":
        """Apply a fetch result if no change happened since the fetch started."""
        if generation != self.generation:
            return self
        return self.replace(movies)
