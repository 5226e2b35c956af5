"""Display helpers and the field-editability policy for collection movies."""

from movie_shelf.schemas.movie import CollectionMovie, EditableFields, MovieStatus

TMDB_POSTER_BASE_URL = "https://image.tmdb.org/t/p/w500"

_EDITABLE_FIELDS: dict[MovieStatus, EditableFields] = {
    MovieStatus.WISHLIST: EditableFields(rating=False, review=False, price=False),
    MovieStatus.OWNED: EditableFields(rating=False, review=False, price=True),
    MovieStatus.WATCHED: EditableFields(rating=True, review=True, price=True),
}


def fields_editable_for(status: MovieStatus | str) -> EditableFields:
    """Return which personal fields may be set for a status.

    Raises:
        ValueError: If status is not a known MovieStatus.
    """
    return _EDITABLE_FIELDS[MovieStatus(status)]


def resolve_poster_url(movie: CollectionMovie) -> str | None:
    """Return the user's poster if set, else the TMDB poster, else None."""
    if movie.user_poster_url:
        return movie.user_poster_url
    if movie.tmdb_poster_path:
        return f"{TMDB_POSTER_BASE_URL}{movie.tmdb_poster_path}"
    return None


def trusted_rating(movie: CollectionMovie) -> int | None:
    """Return the rating only if the movie's status allows one.

    Older rows may carry a rating under any status.
    """
    if not fields_editable_for(movie.status).rating:
        return None
    return movie.rating


def trusted_review(movie: CollectionMovie) -> str | None:
    """Return the personal review only if the movie's status allows one."""
    if not fields_editable_for(movie.status).review:
        return None
    return movie.personal_review
