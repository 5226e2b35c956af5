"""Injectable clock for date-dependent endpoints."""

from datetime import datetime
from zoneinfo import ZoneInfo

from movie_shelf.config import get_settings


def get_now() -> datetime:
    """Return the current time in the configured display timezone.

    Can be used as a FastAPI dependency and overridden in tests.
    """
    return datetime.now(ZoneInfo(get_settings().display_timezone))
