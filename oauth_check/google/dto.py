"""DTOs for the Google OAuth check."""

from dataclasses import dataclass
from datetime import datetime, timezone

from google.oauth2.credentials import Credentials

from oauth_check.config import Settings


@dataclass(frozen=True)
class CredentialSet:
    client_id: str
    client_secret: str
    redirect_uri: str
    auth_uri: str = "https://accounts.google.com/o/oauth2/auth"
    token_uri: str = "https://oauth2.googleapis.com/token"

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialSet":
        settings.require_oauth_client()
        return cls(
            client_id=settings.google_client_id.strip(),
            client_secret=settings.google_client_secret.strip(),
            redirect_uri=settings.google_redirect_uri.strip(),
            auth_uri=settings.google_auth_uri,
            token_uri=settings.google_token_uri,
        )

    def to_client_config(self) -> dict:
        """Client config in the shape of a downloaded "web" client secrets file."""
        return {
            "web": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": self.auth_uri,
                "token_uri": self.token_uri,
                "redirect_uris": [self.redirect_uri],
            }
        }

    def __repr__(self) -> str:
        return (
            f"CredentialSet(client_id={self.client_id!r}, "
            f"client_secret=<{len(self.client_secret)} chars>, "
            f"redirect_uri={self.redirect_uri!r})"
        )


@dataclass
class TokenPair:
    access_token: str | None
    refresh_token: str | None = None
    expiry: datetime | None = None

    @classmethod
    def from_credentials(cls, creds: Credentials) -> "TokenPair":
        expiry = creds.expiry
        # google-auth keeps expiry as naive UTC
        if expiry is not None and expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        return cls(
            access_token=creds.token,
            refresh_token=creds.refresh_token,
            expiry=expiry,
        )

    @property
    def expiry_iso(self) -> str | None:
        if self.expiry is None:
            return None
        return self.expiry.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def __repr__(self) -> str:
        return (
            f"TokenPair(access_token={'<set>' if self.access_token else None}, "
            f"refresh_token={'<set>' if self.refresh_token else None}, "
            f"expiry={self.expiry_iso})"
        )


@dataclass
class UserProfile:
    name: str | None = None
    email: str | None = None
