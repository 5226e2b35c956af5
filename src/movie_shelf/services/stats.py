"""Collection statistics for the dashboard.

Every function here is pure: it reads the movies it is given and returns
new values. Functions that depend on the current date take it as an
argument so callers (and tests) control the clock.
"""

import calendar
from collections import Counter
from collections.abc import Iterable
from datetime import UTC, datetime

from movie_shelf.schemas.movie import CollectionMovie, MovieStatus
from movie_shelf.schemas.stats import (
    CollectionSummary,
    GenreCount,
    StatusCount,
    StatusCounts,
    WatchedMonth,
)
from movie_shelf.utils.records import coerce_price

HISTORY_MONTHS = 12
DEFAULT_GENRE_LIMIT = 4


def _as_of(timestamp: datetime, reference: datetime) -> datetime:
    """Express timestamp in the reference's timezone when both are aware."""
    if timestamp.tzinfo is not None and reference.tzinfo is not None:
        return timestamp.astimezone(reference.tzinfo)
    return timestamp


def summarize(
    movies: Iterable[CollectionMovie],
    now: datetime | None = None,
) -> CollectionSummary:
    """Reduce a collection to its totals.

    Args:
        movies: The collection to summarize.
        now: Evaluation time, used for the "watched this year" count.
            Defaults to the current UTC time.

    Returns:
        Movie count, per-status counts, movies watched in now's calendar
        year, and the sum of estimated prices (unusable prices count as 0).
    """
    now = now or datetime.now(UTC)
    counts = Counter[MovieStatus]()
    total = 0
    watched_this_year = 0
    total_value = 0.0

    for movie in movies:
        total += 1
        counts[movie.status] += 1
        if movie.watched_at is not None and _as_of(movie.watched_at, now).year == now.year:
            watched_this_year += 1
        total_value += coerce_price(movie.estimated_price)

    return CollectionSummary(
        total=total,
        status_counts=StatusCounts(
            wishlist=counts[MovieStatus.WISHLIST],
            owned=counts[MovieStatus.OWNED],
            watched=counts[MovieStatus.WATCHED],
        ),
        watched_this_year=watched_this_year,
        total_value=total_value,
    )


def build_watched_history(
    movies: Iterable[CollectionMovie],
    reference: datetime | None = None,
) -> list[WatchedMonth]:
    """Count watched movies per month for the trailing twelve months.

    The window ends with the month containing reference (inclusive) and is
    returned oldest first. Only movies with status watched and a watched_at
    timestamp are counted.

    Args:
        movies: The collection to count.
        reference: End of the window. Defaults to the current UTC time.

    Returns:
        Exactly twelve WatchedMonth entries.
    """
    reference = reference or datetime.now(UTC)

    watched_per_month = Counter[tuple[int, int]]()
    for movie in movies:
        if movie.status != MovieStatus.WATCHED or movie.watched_at is None:
            continue
        watched_at = _as_of(movie.watched_at, reference)
        watched_per_month[(watched_at.year, watched_at.month)] += 1

    last_month = reference.year * 12 + reference.month - 1
    history = []
    for month_index in range(last_month - HISTORY_MONTHS + 1, last_month + 1):
        year, month = divmod(month_index, 12)
        month += 1
        history.append(
            WatchedMonth(
                month_label=calendar.month_name[month],
                short_label=calendar.month_abbr[month],
                year=year,
                count=watched_per_month[(year, month)],
            )
        )
    return history


def top_genres(
    movies: Iterable[CollectionMovie],
    limit: int = DEFAULT_GENRE_LIMIT,
) -> list[GenreCount]:
    """Rank genres by how many times they occur across the collection.

    Ties keep the order in which genres were first encountered.

    Raises:
        ValueError: If limit is negative.
    """
    if limit < 0:
        raise ValueError(f"limit must not be negative, got {limit}")

    counts = Counter[str]()
    for movie in movies:
        counts.update(movie.genres)

    # most_common is stable, so equal counts stay in first-seen order
    return [GenreCount(genre=genre, count=count) for genre, count in counts.most_common(limit)]


def status_distribution(movies: Iterable[CollectionMovie]) -> list[StatusCount]:
    """Count movies per status, in declared status order, omitting empty statuses."""
    counts = Counter(movie.status for movie in movies)
    return [
        StatusCount(status=status, count=counts[status])
        for status in MovieStatus
        if counts[status] > 0
    ]
