"""Tests for the catalog proxy endpoint."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import AsyncClient

from movie_shelf.api.catalog import get_catalog_client
from movie_shelf.main import app
from movie_shelf.services.base import APIError
from movie_shelf.services.tmdb import TMDBClient

SAMPLE_LIST_RESPONSE = {
    "page": 2,
    "total_pages": 10,
    "total_results": 200,
    "results": [
        {"id": 550, "title": "Fight Club", "genre_ids": [18, 53]},
        {"id": 680, "title": "Pulp Fiction", "genre_ids": [80]},
    ],
}

SAMPLE_MOVIE_DETAILS = {"id": 550, "title": "Fight Club", "runtime": 139}


@pytest.fixture
def mock_tmdb_client():
    """Install a mock TMDB client for the proxy."""
    mock_client = MagicMock(spec=TMDBClient)
    mock_client.get_movie_list = AsyncMock(return_value=SAMPLE_LIST_RESPONSE)
    mock_client.get_movie_details = AsyncMock(return_value=SAMPLE_MOVIE_DETAILS)
    mock_client.get_genre_map = AsyncMock(return_value={18: "Drama", 53: "Thriller"})
    mock_client.close = AsyncMock()

    app.dependency_overrides[get_catalog_client] = lambda: mock_client
    yield mock_client
    app.dependency_overrides.clear()


class TestCatalogAuthentication:
    """Tests for bearer token enforcement on the proxy."""

    async def test_missing_token(self, client: AsyncClient) -> None:
        """Test that anonymous requests are rejected."""
        response = await client.post("/api/catalog", json={"endpoint": "popular"})

        assert response.status_code == 401
        assert response.json() == {"error": "Missing or invalid Authorization header"}

    async def test_invalid_token(self, client: AsyncClient) -> None:
        """Test that an invalid token is rejected."""
        response = await client.post(
            "/api/catalog",
            json={"endpoint": "popular"},
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}


class TestCatalogProxy:
    """Tests for forwarding catalog requests."""

    async def test_list_passthrough(
        self, client: AsyncClient, auth_headers: dict[str, str], mock_tmdb_client: MagicMock
    ) -> None:
        """Test that list payloads are returned as received."""
        response = await client.post(
            "/api/catalog",
            json={"endpoint": "popular", "page": 2, "language": "de-DE"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == SAMPLE_LIST_RESPONSE
        mock_tmdb_client.get_movie_list.assert_awaited_once_with(
            "popular", page=2, language="de-DE", query=None
        )
        mock_tmdb_client.get_genre_map.assert_not_called()
        mock_tmdb_client.close.assert_awaited_once()

    async def test_search_with_genres(
        self, client: AsyncClient, auth_headers: dict[str, str], mock_tmdb_client: MagicMock
    ) -> None:
        """Test that includeGenres resolves genre ids on every result."""
        response = await client.post(
            "/api/catalog",
            json={"endpoint": "search", "query": " fight ", "includeGenres": True},
            headers=auth_headers,
        )

        assert response.status_code == 200
        results = response.json()["results"]
        assert results[0]["genres"] == [
            {"id": 18, "name": "Drama"},
            {"id": 53, "name": "Thriller"},
        ]
        assert results[1]["genres"] == []
        mock_tmdb_client.get_movie_list.assert_awaited_once_with(
            "search", page=1, language=None, query="fight"
        )

    @pytest.mark.parametrize("page", [0, -3, "abc", None])
    async def test_invalid_page_falls_back_to_first(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        mock_tmdb_client: MagicMock,
        page,
    ) -> None:
        """Test that unusable page numbers become page 1."""
        await client.post(
            "/api/catalog", json={"endpoint": "top_rated", "page": page}, headers=auth_headers
        )

        assert mock_tmdb_client.get_movie_list.call_args.kwargs["page"] == 1

    async def test_infinite_page_falls_back_to_first(
        self, client: AsyncClient, auth_headers: dict[str, str], mock_tmdb_client: MagicMock
    ) -> None:
        """Test that a page of Infinity is treated as page 1 instead of failing."""
        response = await client.post(
            "/api/catalog",
            content='{"endpoint": "popular", "page": Infinity}',
            headers={**auth_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 200
        mock_tmdb_client.get_movie_list.assert_awaited_once_with(
            "popular", page=1, language=None, query=None
        )

    async def test_details(
        self, client: AsyncClient, auth_headers: dict[str, str], mock_tmdb_client: MagicMock
    ) -> None:
        """Test fetching details for one title."""
        response = await client.post(
            "/api/catalog", json={"endpoint": "details", "tmdbId": 550}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json() == SAMPLE_MOVIE_DETAILS
        mock_tmdb_client.get_movie_details.assert_awaited_once_with(550, language=None)

    async def test_details_requires_id(
        self, client: AsyncClient, auth_headers: dict[str, str], mock_tmdb_client: MagicMock
    ) -> None:
        """Test that details without tmdbId is rejected."""
        response = await client.post(
            "/api/catalog", json={"endpoint": "details"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json() == {"error": "tmdbId is required for details endpoint"}
        mock_tmdb_client.close.assert_awaited_once()

    async def test_unknown_endpoint(
        self, client: AsyncClient, auth_headers: dict[str, str], mock_tmdb_client: MagicMock
    ) -> None:
        """Test that unknown endpoints are rejected."""
        response = await client.post(
            "/api/catalog", json={"endpoint": "now_playing"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid endpoint specified"}

    async def test_search_without_query(
        self, client: AsyncClient, auth_headers: dict[str, str], mock_tmdb_client: MagicMock
    ) -> None:
        """Test that client-side validation errors become 400 responses."""
        mock_tmdb_client.get_movie_list.side_effect = ValueError("Query is required for search")

        response = await client.post(
            "/api/catalog", json={"endpoint": "search", "query": "  "}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Query is required for search"}

    @pytest.mark.parametrize("body", ["not json", "[1, 2]"])
    async def test_body_must_be_object(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        mock_tmdb_client: MagicMock,
        body: str,
    ) -> None:
        """Test that non-object bodies are rejected."""
        response = await client.post(
            "/api/catalog",
            content=body,
            headers={**auth_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Request body must be a JSON object"}

    async def test_upstream_failure(
        self, client: AsyncClient, auth_headers: dict[str, str], mock_tmdb_client: MagicMock
    ) -> None:
        """Test that TMDB failures are reported as bad gateway."""
        mock_tmdb_client.get_movie_list.side_effect = APIError(
            "TMDB request failed: 500 Internal Server Error", status_code=500
        )

        response = await client.post(
            "/api/catalog", json={"endpoint": "upcoming"}, headers=auth_headers
        )

        assert response.status_code == 502
        assert response.json() == {"error": "TMDB request failed: 500 Internal Server Error"}
        mock_tmdb_client.close.assert_awaited_once()


async def test_token_not_configured(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    """Test the error when no TMDB access token is configured."""
    with patch(
        "movie_shelf.api.catalog.get_tmdb_client",
        AsyncMock(side_effect=ValueError("TMDB access token is not configured")),
    ):
        response = await client.post(
            "/api/catalog", json={"endpoint": "popular"}, headers=auth_headers
        )

    assert response.status_code == 400
    assert response.json() == {"error": "TMDB access token is not configured"}
