"""API routers."""

from movie_shelf.api.router import api_router

__all__ = ["api_router"]
