"""Collection API endpoints."""

import logging
from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from movie_shelf.database import get_db
from movie_shelf.models.movie import Movie
from movie_shelf.schemas.movie import (
    CollectionListResponse,
    CollectionMovie,
    CollectionMovieResponse,
    MovieCreate,
    MovieStatus,
    MovieUpdate,
)
from movie_shelf.schemas.view import CollectionViewParams, SortDirection
from movie_shelf.services.records import (
    fields_editable_for,
    resolve_poster_url,
    trusted_rating,
    trusted_review,
)
from movie_shelf.services.view import apply_view
from movie_shelf.utils.clock import get_now
from movie_shelf.utils.records import format_currency, format_date, resolve_genre_labels
from movie_shelf.utils.security import CurrentUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/collection", tags=["collection"])


def movie_to_response(movie: CollectionMovie) -> CollectionMovieResponse:
    """Decorate a collection movie with its display values."""
    data = movie.model_dump()
    data["rating"] = trusted_rating(movie)
    data["personal_review"] = trusted_review(movie)
    return CollectionMovieResponse(
        **data,
        poster_url=resolve_poster_url(movie),
        price_display=format_currency(movie.estimated_price),
        watched_on=format_date(movie.watched_at),
        editable=fields_editable_for(movie.status),
    )


async def load_collection(db: AsyncSession, profile_id: str) -> list[CollectionMovie]:
    """Load every movie owned by a profile, ordered by title.

    Rows that cannot be read as a collection movie are skipped.
    """
    result = await db.execute(
        select(Movie).where(Movie.profile_id == profile_id).order_by(Movie.title)
    )

    movies = []
    for row in result.scalars().all():
        try:
            movies.append(CollectionMovie.model_validate(row))
        except ValidationError as e:
            logger.warning("Skipping unreadable movie row %s: %s", row.id, e.errors()[0]["msg"])
    return movies


async def get_owned_movie(db: AsyncSession, profile_id: str, movie_id: str) -> Movie:
    """Fetch one of the profile's movie rows.

    Raises:
        HTTPException 404: If the movie does not exist or belongs to someone else
    """
    result = await db.execute(
        select(Movie).where(Movie.id == movie_id, Movie.profile_id == profile_id)
    )
    movie = result.scalar_one_or_none()
    if movie is None:
        raise HTTPException(status_code=404, detail="Movie not found in your collection")
    return movie


@router.get("", response_model=CollectionListResponse)
async def list_collection(
    current_user: CurrentUser,
    query: str = Query("", max_length=255, description="Case-insensitive title search"),
    genre: list[str] = Query([], description="Genres to include (any match)"),
    status: list[MovieStatus] = Query([], description="Statuses to include"),
    rating_sort: SortDirection = Query(SortDirection.NONE, description="Sort by rating"),
    year_sort: SortDirection = Query(SortDirection.NONE, description="Sort by release year"),
    db: AsyncSession = Depends(get_db),
) -> CollectionListResponse:
    """List the current user's collection.

    Filters are combined: a movie must match the title search, one of the
    selected genres and one of the selected statuses. Rating sort takes
    precedence over year sort; ties are ordered by title.
    Requires authentication.
    """
    movies = await load_collection(db, current_user.id)
    params = CollectionViewParams(
        query=query,
        genres=frozenset(genre),
        statuses=frozenset(status),
        rating_sort=rating_sort,
        year_sort=year_sort,
    )
    visible = apply_view(movies, params)

    return CollectionListResponse(
        total=len(movies),
        matched=len(visible),
        results=[movie_to_response(movie) for movie in visible],
    )


@router.get("/{movie_id}", response_model=CollectionMovieResponse)
async def get_collection_movie(
    movie_id: str,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> CollectionMovieResponse:
    """Get one movie from the current user's collection.

    Rows that cannot be read as a collection movie are reported as missing,
    as they are left out of the listing.
    Requires authentication.
    """
    movie = await get_owned_movie(db, current_user.id, movie_id)
    try:
        record = CollectionMovie.model_validate(movie)
    except ValidationError as e:
        logger.warning("Skipping unreadable movie row %s: %s", movie.id, e.errors()[0]["msg"])
        raise HTTPException(status_code=404, detail="Movie not found in your collection") from None
    return movie_to_response(record)


@router.post("", response_model=CollectionMovieResponse, status_code=201)
async def add_movie(
    current_user: CurrentUser,
    movie_data: MovieCreate,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
) -> CollectionMovieResponse:
    """Add a catalog title to the current user's collection.

    New movies start on the wishlist.
    Requires authentication.

    Raises:
        HTTPException 409: If the title is already in the collection
    """
    existing_query = select(Movie).where(
        Movie.profile_id == current_user.id,
        Movie.tmdb_id == movie_data.tmdb_id,
    )
    existing_result = await db.execute(existing_query)
    if existing_result.scalar_one_or_none():
        raise HTTPException(
            status_code=409,
            detail="This movie is already in your collection",
        )

    new_movie = Movie(
        id=str(uuid4()),
        profile_id=current_user.id,
        tmdb_id=movie_data.tmdb_id,
        title=movie_data.title,
        release_year=movie_data.release_year,
        status=MovieStatus.WISHLIST.value,
        rating=None,
        synopsis=movie_data.synopsis,
        personal_review=None,
        genres=[{"name": label} for label in resolve_genre_labels(movie_data.genres)],
        tmdb_poster_path=movie_data.tmdb_poster_path,
        user_poster_url=None,
        estimated_price=None,
        watched_at=None,
        created_at=now,
        updated_at=now,
    )
    db.add(new_movie)
    await db.flush()
    logger.info("Added TMDB movie %s to collection of %s", movie_data.tmdb_id, current_user.id)

    return movie_to_response(CollectionMovie.model_validate(new_movie))


@router.put("/{movie_id}", response_model=CollectionMovieResponse)
async def replace_movie(
    movie_id: str,
    current_user: CurrentUser,
    movie_data: MovieUpdate,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
) -> CollectionMovieResponse:
    """Replace the personal fields of a movie in the current user's collection.

    Rating and review are kept only for watched movies; price only for owned
    and watched movies, where it is required. The watch date is kept while a
    movie stays watched, set when it becomes watched and cleared otherwise.
    Requires authentication.

    Raises:
        HTTPException 404: If the movie is not in the collection
        HTTPException 422: If a price is required but missing
    """
    movie = await get_owned_movie(db, current_user.id, movie_id)
    editable = fields_editable_for(movie_data.status)

    if editable.price and movie_data.estimated_price is None:
        raise HTTPException(
            status_code=422,
            detail="Please enter the purchase price for this movie",
        )

    was_watched = movie.status == MovieStatus.WATCHED.value
    if movie_data.status != MovieStatus.WATCHED:
        movie.watched_at = None
    elif not was_watched or movie.watched_at is None:
        movie.watched_at = now

    movie.status = movie_data.status.value
    movie.rating = movie_data.rating if editable.rating else None
    movie.personal_review = movie_data.personal_review if editable.review else None
    movie.estimated_price = (
        Decimal(str(movie_data.estimated_price)) if editable.price else None
    )
    movie.user_poster_url = movie_data.user_poster_url
    movie.updated_at = now
    await db.flush()

    return movie_to_response(CollectionMovie.model_validate(movie))


@router.delete("/{movie_id}", status_code=204)
async def delete_movie(
    movie_id: str,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Remove a movie from the current user's collection.

    Requires authentication.

    Raises:
        HTTPException 404: If the movie is not in the collection
    """
    movie = await get_owned_movie(db, current_user.id, movie_id)
    await db.delete(movie)
    logger.info("Removed movie %s from collection of %s", movie_id, current_user.id)
    return Response(status_code=204)
