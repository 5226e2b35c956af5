"""Catalog proxy endpoint.

Forwards search and list requests to TMDB with the server-held access
token, so the token never reaches the browser. Failures are reported as
{"error": message} bodies.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import ValidationError

from movie_shelf.schemas.catalog import CatalogEndpoint, CatalogErrorResponse, CatalogRequest
from movie_shelf.services.base import APIError
from movie_shelf.services.tmdb import TMDBClient, get_tmdb_client
from movie_shelf.utils.security import AuthenticatedUser, authenticate_token, bearer_scheme

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["catalog"])


class CatalogRequestError(Exception):
    """A catalog proxy failure, rendered as {"error": message}."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


async def get_catalog_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> AuthenticatedUser:
    """Verify the caller's bearer token.

    Raises:
        CatalogRequestError 401: If the header is missing or the token is invalid
    """
    if credentials is None:
        raise CatalogRequestError("Missing or invalid Authorization header", status_code=401)

    user = authenticate_token(credentials.credentials)
    if user is None:
        raise CatalogRequestError("Unauthorized", status_code=401)
    return user


CatalogUser = Annotated[AuthenticatedUser, Depends(get_catalog_user)]


async def get_catalog_client() -> TMDBClient:
    """Create the TMDB client used by the proxy.

    Raises:
        CatalogRequestError 400: If no TMDB access token is configured
    """
    try:
        return await get_tmdb_client()
    except ValueError as e:
        raise CatalogRequestError(str(e)) from None


def _describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    if first["loc"] and first["loc"][0] == "endpoint":
        return "Invalid endpoint specified"
    field = ".".join(str(part) for part in first["loc"]) or "body"
    return f"Invalid {field}: {first['msg']}"


async def _read_catalog_request(request: Request) -> CatalogRequest:
    try:
        body = await request.json()
    except ValueError:
        raise CatalogRequestError("Request body must be a JSON object") from None

    if not isinstance(body, dict):
        raise CatalogRequestError("Request body must be a JSON object")

    try:
        return CatalogRequest.model_validate(body)
    except ValidationError as e:
        raise CatalogRequestError(_describe_validation_error(e)) from None


@router.post(
    "",
    response_model=None,
    responses={
        400: {"model": CatalogErrorResponse},
        401: {"model": CatalogErrorResponse},
        502: {"model": CatalogErrorResponse},
    },
)
async def proxy_catalog(
    request: Request,
    current_user: CatalogUser,  # noqa: ARG001 - Required for auth enforcement
    tmdb_client: TMDBClient = Depends(get_catalog_client),
) -> dict[str, Any]:
    """Forward a catalog request to TMDB.

    Body fields: endpoint (search, popular, top_rated, upcoming, trending or
    details), query, page, tmdbId, includeGenres and language. With
    includeGenres, every list result gains resolved genre names.
    Requires authentication.
    """
    try:
        catalog_request = await _read_catalog_request(request)
        language = catalog_request.language

        if catalog_request.endpoint == CatalogEndpoint.DETAILS:
            if catalog_request.tmdb_id is None:
                raise CatalogRequestError("tmdbId is required for details endpoint")
            return await tmdb_client.get_movie_details(catalog_request.tmdb_id, language=language)

        try:
            payload = await tmdb_client.get_movie_list(
                catalog_request.endpoint,
                page=catalog_request.page,
                language=language,
                query=catalog_request.query,
            )
        except ValueError as e:
            raise CatalogRequestError(str(e)) from None

        genre_map = (
            await tmdb_client.get_genre_map(language=language)
            if catalog_request.include_genres
            else None
        )
        return TMDBClient.enrich_with_genres(payload, genre_map)
    except APIError as e:
        logger.warning("Catalog request failed: %s", e)
        raise CatalogRequestError(str(e), status_code=502) from e
    finally:
        await tmdb_client.close()
