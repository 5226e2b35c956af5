"""Dashboard API endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from movie_shelf.api.collection import load_collection
from movie_shelf.config import get_settings
from movie_shelf.database import get_db
from movie_shelf.schemas.stats import DashboardResponse
from movie_shelf.services.stats import (
    build_watched_history,
    status_distribution,
    summarize,
    top_genres,
)
from movie_shelf.utils.clock import get_now
from movie_shelf.utils.records import format_currency
from movie_shelf.utils.security import CurrentUser

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    current_user: CurrentUser,
    genre_limit: int | None = Query(None, ge=1, le=20, description="Number of top genres"),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
) -> DashboardResponse:
    """Get collection statistics for the current user.

    Returns totals, the watch history of the last 12 months, the most
    frequent genres and the status distribution.
    Requires authentication.
    """
    movies = await load_collection(db, current_user.id)
    summary = summarize(movies, now=now)
    history = build_watched_history(movies, reference=now)

    return DashboardResponse(
        summary=summary,
        total_value_display=format_currency(summary.total_value),
        watched_history=history,
        watched_last_12_months=sum(month.count for month in history),
        top_genres=top_genres(movies, limit=genre_limit or get_settings().top_genres_limit),
        status_distribution=status_distribution(movies),
    )
