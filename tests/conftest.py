from __future__ import annotations

from datetime import datetime, timezone

import pytest

from oauth_check.config import Settings, get_settings
from oauth_check.google.dto import CredentialSet, TokenPair, UserProfile

ENV_VARS = (
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "GOOGLE_REDIRECT_URI",
    "GOOGLE_AUTH_URI",
    "GOOGLE_TOKEN_URI",
    "LOG_LEVEL",
)

REDIRECT_URI = "https://app.example.com/callback"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        google_client_id="client-123.apps.googleusercontent.com",
        google_client_secret="GOCSPX-secret",
        google_redirect_uri=REDIRECT_URI,
    )


@pytest.fixture
def credentials(settings) -> CredentialSet:
    return CredentialSet.from_settings(settings)


class FakeOAuthClient:
    def __init__(
        self,
        tokens: TokenPair | None = None,
        error: Exception | None = None,
        refresh_error: Exception | None = None,
    ):
        self.tokens = tokens or TokenPair(
            access_token="ya29.access",
            refresh_token="1//refresh",
            expiry=datetime(2030, 1, 1, tzinfo=timezone.utc),
        )
        self.error = error
        self.refresh_error = refresh_error
        self.codes: list[str] = []
        self.refreshed: list[TokenPair] = []
        self.url_built = False

    def create_auth_url(self) -> str:
        self.url_built = True
        return "https://accounts.google.com/o/oauth2/auth?client_id=client-123"

    def exchange_code(self, code: str) -> TokenPair:
        self.codes.append(code)
        if self.error is not None:
            raise self.error
        return self.tokens

    def refresh(self, tokens: TokenPair) -> TokenPair:
        self.refreshed.append(tokens)
        if self.refresh_error is not None:
            raise self.refresh_error
        return TokenPair(access_token="ya29.new", expiry=datetime(2030, 1, 1, 1, tzinfo=timezone.utc))


class FakePeopleService:
    def __init__(self, profile: UserProfile | None = None, error: Exception | None = None):
        self.profile = profile or UserProfile(name="Ada Builder", email="ada@example.com")
        self.error = error
        self.tokens: list[str] = []

    def fetch_profile(self, access_token: str) -> UserProfile:
        self.tokens.append(access_token)
        if self.error is not None:
            raise self.error
        return self.profile
