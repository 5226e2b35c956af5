"""Collection movie ORM model."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, DateTime, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from movie_shelf.database import Base


class Movie(Base):
    """A movie in one user's collection."""

    __tablename__ = "movies"
    __table_args__ = (UniqueConstraint("profile_id", "tmdb_id", name="uq_profile_tmdb_movie"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    profile_id: Mapped[str] = mapped_column(String(36), index=True)
    tmdb_id: Mapped[int] = mapped_column(index=True)
    title: Mapped[str] = mapped_column(String(255))
    release_year: Mapped[int | None] = mapped_column(nullable=True)
    status: Mapped[str] = mapped_column(String(16), default="wishlist")
    rating: Mapped[int | None] = mapped_column(nullable=True)
    synopsis: Mapped[str | None] = mapped_column(Text, nullable=True)
    personal_review: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Raw catalog shape: list of strings and/or {"id", "name"} objects
    genres: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)
    tmdb_poster_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    user_poster_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    estimated_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    watched_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
