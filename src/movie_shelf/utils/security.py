"""Security utilities for bearer JWT verification.

Tokens are issued by the external identity provider and signed with the
shared SECRET_KEY; this service only verifies them. The "sub" claim is the
profile id that owns collection rows.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel, Field

from movie_shelf.config import get_settings

# Bearer scheme; missing credentials are reported by the dependencies below
bearer_scheme = HTTPBearer(auto_error=False)


class AuthenticatedUser(BaseModel):
    """The identity carried by a verified access token."""

    id: str = Field(description="Profile ID (token subject)")
    email: str | None = Field(default=None, description="Email address, if present in the token")


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT access token.

    Args:
        token: The JWT token string to decode

    Returns:
        Decoded token payload if valid, None if invalid or expired
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"verify_aud": False},
        )
    except JWTError:
        return None


def authenticate_token(token: str) -> AuthenticatedUser | None:
    """Verify a token and return its user, or None if it is not acceptable."""
    payload = decode_access_token(token)
    if payload is None:
        return None

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        return None

    email = payload.get("email")
    return AuthenticatedUser(id=subject, email=email if isinstance(email, str) else None)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> AuthenticatedUser:
    """Get the current authenticated user from the bearer token.

    This is a FastAPI dependency that validates the JWT token from the
    Authorization header.

    Raises:
        HTTPException 401: If the token is missing, invalid or expired
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    user = authenticate_token(credentials.credentials)
    if user is None:
        raise credentials_exception

    return user


# Type alias for use in route dependencies
CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
