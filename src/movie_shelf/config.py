"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App settings
    app_name: str = "Movie Shelf API"
    debug: bool = False
    secret_key: str  # Required, shared with the identity provider that issues tokens

    # Database
    database_url: str = "sqlite+aiosqlite:///./movie_shelf.db"

    # TMDB API (server-held access token, never sent to clients)
    tmdb_api_key: str = ""
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    tmdb_default_language: str = "en-US"

    # JWT Authentication
    jwt_algorithm: str = "HS256"

    # Dashboard
    display_timezone: str = "UTC"
    top_genres_limit: int = 4

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str, info) -> str:
        """Validate that secret_key is secure."""
        if not v:
            raise ValueError("SECRET_KEY is required")

        # In production mode, ensure secret key is strong
        debug = info.data.get("debug", False)
        if not debug:
            if len(v) < 32:
                raise ValueError("SECRET_KEY must be at least 32 characters in production mode")
            if v in ("change-me-in-production", "secret", "password", "changeme"):
                raise ValueError("SECRET_KEY must not be a common weak value")

        return v

    @field_validator("display_timezone")
    @classmethod
    def validate_display_timezone(cls, v: str) -> str:
        """Validate that display_timezone names a known IANA zone."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @field_validator("top_genres_limit")
    @classmethod
    def validate_top_genres_limit(cls, v: int) -> int:
        """Validate the dashboard genre limit is positive."""
        if v < 1:
            raise ValueError("TOP_GENRES_LIMIT must be at least 1")
        return v

    def validate_runtime_config(self) -> list[str]:
        """Validate runtime configuration and return warnings."""
        warnings = []

        # Check TMDB access token
        if not self.tmdb_api_key:
            warnings.append("TMDB_API_KEY is not set - catalog search will not work")

        # Warn about debug mode in production
        if self.debug:
            warnings.append("DEBUG mode is enabled - should be disabled in production")

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
