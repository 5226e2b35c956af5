"""Filtering and sorting of a collection for browsing."""

from collections.abc import Callable, Iterable
from typing import Any

from movie_shelf.schemas.movie import CollectionMovie
from movie_shelf.schemas.view import CollectionViewParams, SortDirection
from movie_shelf.services.records import trusted_rating

SortKey = Callable[[CollectionMovie], tuple[Any, ...]]


def _direction(value: Any, name: str) -> SortDirection:
    """Validate a sort direction.

    Raises:
        ValueError: If value is not a SortDirection.
    """
    try:
        return SortDirection(value)
    except ValueError:
        raise ValueError(f"Invalid {name}: {value!r}") from None


def matches_query(movie: CollectionMovie, query: str) -> bool:
    """Case-insensitive title substring match; a blank query matches everything."""
    query = query.strip().lower()
    return not query or query in movie.title.lower()


def matches_genres(movie: CollectionMovie, genres: frozenset[str]) -> bool:
    """True if no genres are selected or the movie has any selected genre."""
    if not genres:
        return True
    return any(label.lower() in genres for label in movie.genres)


def matches_filters(movie: CollectionMovie, params: CollectionViewParams) -> bool:
    """Apply the title, genre and status filters together."""
    return (
        matches_query(movie, params.query)
        and matches_genres(movie, params.genres)
        and (not params.statuses or movie.status in params.statuses)
    )


def _rating_key(direction: SortDirection) -> SortKey:
    sign = 1 if direction == SortDirection.ASC else -1

    def key(movie: CollectionMovie) -> tuple[Any, ...]:
        # Ratings the status does not allow are ignored, as on display
        rating = trusted_rating(movie)
        if rating is None:
            rating = float("-inf")
        return (sign * rating, movie.title)

    return key


def _year_key(direction: SortDirection) -> SortKey:
    sign = 1 if direction == SortDirection.ASC else -1

    def key(movie: CollectionMovie) -> tuple[Any, ...]:
        # Missing years go last in both directions
        if movie.release_year is None:
            return (1, 0, movie.title)
        return (0, sign * movie.release_year, movie.title)

    return key


def sort_key_for(params: CollectionViewParams) -> SortKey | None:
    """Pick the active sort key, or None to keep the input order.

    Rating sort takes precedence; year sort is ignored while it is active.
    Ties are broken by title, ascending.

    Raises:
        ValueError: If either sort direction is invalid.
    """
    rating_sort = _direction(params.rating_sort, "rating_sort")
    year_sort = _direction(params.year_sort, "year_sort")

    if rating_sort != SortDirection.NONE:
        return _rating_key(rating_sort)
    if year_sort != SortDirection.NONE:
        return _year_key(year_sort)
    return None


def apply_view(
    movies: Iterable[CollectionMovie],
    params: CollectionViewParams | None = None,
) -> list[CollectionMovie]:
    """Filter and sort a collection without modifying it.

    Args:
        movies: The collection to browse.
        params: Filter and sort parameters. Defaults to no filtering or sorting.

    Returns:
        A new list of the matching movies in display order.

    Raises:
        ValueError: If a sort direction is invalid.
    """
    params = params or CollectionViewParams()
    sort_key = sort_key_for(params)

    visible = [movie for movie in movies if matches_filters(movie, params)]
    if sort_key is not None:
        visible.sort(key=sort_key)
    return visible
