"""Google OAuth2 consent URL, code exchange and refresh check."""

import logging
import os

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow

from oauth_check.constants import SCOPES
from oauth_check.google.dto import CredentialSet, TokenPair
from oauth_check.google.errors import ProviderError

logger = logging.getLogger(__name__)

# Google answers "profile"/"email" with expanded scope URLs; don't treat that as a failure
os.environ.setdefault("OAUTHLIB_RELAX_TOKEN_SCOPE", "1")


class GoogleOAuthClient:
    """Drives a single consent -> code -> token exchange for one OAuth client."""

    def __init__(self, credentials: CredentialSet, scopes: list[str] | None = None):
        """
        Initialize the OAuth client.

        Args:
            credentials: Client id, secret and redirect URI
            scopes: Scopes to request (default: SCOPES)
        """
        self.credentials = credentials
        self.scopes = list(scopes or SCOPES)
        self._flow: Flow | None = None

    def _create_flow(self) -> Flow:
        return Flow.from_client_config(
            self.credentials.to_client_config(),
            scopes=self.scopes,
            redirect_uri=self.credentials.redirect_uri,
            autogenerate_code_verifier=True,
        )

    @property
    def flow(self) -> Flow:
        """Flow shared by URL construction and exchange (keeps any PKCE verifier)."""
        if self._flow is None:
            self._flow = self._create_flow()
        return self._flow

    def create_auth_url(self) -> str:
        """Build the consent URL: offline access, consent prompt forced."""
        auth_url, _ = self.flow.authorization_url(
            access_type="offline",
            prompt="consent",
        )
        logger.debug(f"Generated auth URL for client {self.credentials.client_id}")
        return auth_url

    def exchange_code(self, code: str) -> TokenPair:
        """
        Exchange an authorization code for a token pair.

        Args:
            code: Authorization code taken from the redirect URL

        Returns:
            Token pair from the provider
        """
        logger.info("Exchanging authorization code for tokens")
        self.flow.fetch_token(code=code)
        tokens = TokenPair.from_credentials(self.flow.credentials)
        logger.info(f"Token exchange succeeded: {tokens!r}")
        return tokens

    def refresh(self, tokens: TokenPair) -> TokenPair:
        """
        Run one refresh-token grant to prove the refresh token works.

        Args:
            tokens: Token pair holding a refresh token

        Returns:
            Token pair with the new access token
        """
        if not tokens.refresh_token:
            raise ProviderError("No refresh token to verify")

        creds = Credentials(
            token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            token_uri=self.credentials.token_uri,
            client_id=self.credentials.client_id,
            client_secret=self.credentials.client_secret,
        )
        logger.info("Refreshing access token")
        creds.refresh(Request())

        refreshed = TokenPair.from_credentials(creds)
        logger.info(f"Refresh succeeded: {refreshed!r}")
        return refreshed
