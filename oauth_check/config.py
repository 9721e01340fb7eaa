"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when required OAuth settings are missing."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing required environment variables: {', '.join(missing)}")


class Settings(BaseSettings):
    """Settings loaded from environment variables and an optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Google OAuth2 client (required, checked by require_oauth_client)
    google_client_id: str | None = None
    google_client_secret: str | None = None
    google_redirect_uri: str | None = None

    # Google endpoints
    google_auth_uri: str = "https://accounts.google.com/o/oauth2/auth"
    google_token_uri: str = "https://oauth2.googleapis.com/token"

    log_level: str = "WARNING"

    def missing_oauth_settings(self) -> list[str]:
        """Return env var names of required OAuth values that are empty."""
        required = {
            "GOOGLE_CLIENT_ID": self.google_client_id,
            "GOOGLE_CLIENT_SECRET": self.google_client_secret,
            "GOOGLE_REDIRECT_URI": self.google_redirect_uri,
        }
        return [name for name, value in required.items() if not (value or "").strip()]

    def require_oauth_client(self) -> None:
        missing = self.missing_oauth_settings()
        if missing:
            raise ConfigurationError(missing)


def load_settings(env_file: Path | None = None) -> Settings:
    """Build settings, reading from a specific .env file when given."""
    if env_file is None:
        return get_settings()
    return Settings(_env_file=env_file)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
