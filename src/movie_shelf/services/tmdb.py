"""TMDB (The Movie Database) API client service."""

from typing import Any

from movie_shelf.config import get_settings
from movie_shelf.schemas.catalog import CatalogEndpoint
from movie_shelf.schemas.external import TMDBGenreListResponse
from movie_shelf.services.base import BaseAPIClient

# Endpoint paths for the paged movie lists
LIST_PATHS: dict[CatalogEndpoint, str] = {
    CatalogEndpoint.SEARCH: "/search/movie",
    CatalogEndpoint.POPULAR: "/movie/popular",
    CatalogEndpoint.TOP_RATED: "/movie/top_rated",
    CatalogEndpoint.UPCOMING: "/movie/upcoming",
    CatalogEndpoint.TRENDING: "/trending/movie/week",
}


class TMDBClient(BaseAPIClient):
    """Client for The Movie Database (TMDB) API.

    Fetches movie lists, search results, details and the genre list.
    Uses the server-held access token as a Bearer token; responses are
    returned as the raw JSON payload so they can be passed through.
    """

    service_name = "TMDB"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        language: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the TMDB client.

        Args:
            api_key: TMDB access token. If not provided, uses settings.
            base_url: TMDB base URL. If not provided, uses settings.
            language: Default response language. If not provided, uses settings.
            timeout: Request timeout in seconds.

        Raises:
            ValueError: If no access token is configured.
        """
        settings = get_settings()
        self._api_key = api_key or settings.tmdb_api_key
        self.language = language or settings.tmdb_default_language
        base = base_url or settings.tmdb_base_url

        if not self._api_key:
            raise ValueError("TMDB access token is not configured")

        super().__init__(base_url=base, timeout=timeout)

    @property
    def default_headers(self) -> dict[str, str]:
        """Return default headers including Bearer token authentication."""
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }

    async def get_movie_list(
        self,
        endpoint: CatalogEndpoint | str,
        page: int = 1,
        language: str | None = None,
        query: str | None = None,
    ) -> dict[str, Any]:
        """Fetch a page of a movie list or of search results.

        Args:
            endpoint: One of search, popular, top_rated, upcoming or trending.
            page: Page number (1-based). Ignored for trending.
            language: Response language code.
            query: Search text, required for search.

        Returns:
            The TMDB list payload.

        Raises:
            ValueError: If the endpoint is not a list endpoint or a search has no query.
        """
        try:
            path = LIST_PATHS[CatalogEndpoint(endpoint)]
        except (KeyError, ValueError):
            raise ValueError("Invalid endpoint specified") from None

        params: dict[str, Any] = {"language": language or self.language}
        if endpoint == CatalogEndpoint.SEARCH:
            if not query:
                raise ValueError("Query is required for search")
            params["query"] = query
            params["include_adult"] = "false"
        if endpoint != CatalogEndpoint.TRENDING:
            params["page"] = page

        return await self.get(path, params=params)

    async def get_movie_details(
        self,
        tmdb_id: int,
        language: str | None = None,
    ) -> dict[str, Any]:
        """Get detailed information about a specific movie.

        Raises:
            NotFoundError: If the movie is not found.
        """
        return await self.get(f"/movie/{tmdb_id}", params={"language": language or self.language})

    async def get_genre_map(self, language: str | None = None) -> dict[int, str]:
        """Fetch the movie genre list as a {genre_id: name} mapping."""
        data = await self.get("/genre/movie/list", params={"language": language or self.language})
        genre_list = TMDBGenreListResponse.model_validate(data)
        return {genre.id: genre.name for genre in genre_list.genres}

    @staticmethod
    def enrich_with_genres(
        payload: dict[str, Any],
        genre_map: dict[int, str] | None,
    ) -> dict[str, Any]:
        """Add resolved genres to every result of a list payload.

        Each result gains a "genres" list of {"id", "name"} objects built from
        its genre_ids; ids missing from genre_map are dropped. The payload is
        not modified.

        Args:
            payload: A TMDB list payload.
            genre_map: Mapping from genre ID to name, or None to skip enrichment.

        Returns:
            The enriched payload.
        """
        results = payload.get("results")
        if not genre_map or not isinstance(results, list):
            return payload

        enriched = []
        for movie in results:
            if not isinstance(movie, dict):
                enriched.append(movie)
                continue
            genres = [
                {"id": genre_id, "name": genre_map[genre_id]}
                for genre_id in movie.get("genre_ids") or []
                if genre_id in genre_map
            ]
            enriched.append({**movie, "genres": genres})

        return {**payload, "results": enriched}


async def get_tmdb_client() -> TMDBClient:
    """Factory function to create a TMDB client.

    Can be used as a FastAPI dependency.

    Raises:
        ValueError: If no access token is configured.
    """
    return TMDBClient()
