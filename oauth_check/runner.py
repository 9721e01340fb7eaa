"""The linear OAuth check: consent URL, pasted redirect, exchange, profile."""

import logging
from contextlib import closing
from enum import Enum

from oauth_check.constants import PASTE_PROMPT
from oauth_check.google.auth import GoogleOAuthClient
from oauth_check.google.dto import CredentialSet
from oauth_check.google.errors import ProviderError, diagnose
from oauth_check.google.people import PeopleService
from oauth_check.prompt import ConsoleInput, InputProvider
from oauth_check.redirect import parse_redirect_url
from oauth_check.report import Reporter

logger = logging.getLogger(__name__)


class CheckState(str, Enum):
    MISSING_CONFIG = "missing_config"
    AWAITING_INPUT = "awaiting_input"
    MISSING_CODE = "missing_code"
    CODE_EXTRACTED = "code_extracted"
    TOKEN_EXCHANGED = "token_exchanged"
    PROFILE_FETCHED = "profile_fetched"
    EXCHANGE_FAILED = "exchange_failed"
    DONE = "done"


TERMINAL_STATES = {
    CheckState.MISSING_CONFIG,
    CheckState.MISSING_CODE,
    CheckState.EXCHANGE_FAILED,
    CheckState.DONE,
}

EXCHANGE_STAGE = "OAuth token exchange"

# Refresh runs only after the profile fetch succeeded
FAILURE_STAGES = {
    CheckState.PROFILE_FETCHED: "token refresh check",
}


class OAuthCheck:
    """One run of the redirect exchange check. Not reusable."""

    def __init__(
        self,
        credentials: CredentialSet,
        input_provider: InputProvider | None = None,
        oauth_client: GoogleOAuthClient | None = None,
        people_service: PeopleService | None = None,
        reporter: Reporter | None = None,
        verify_refresh: bool = False,
    ):
        """
        Initialize the check.

        Args:
            credentials: OAuth client credentials
            input_provider: Source of the pasted redirect URL, closed when the run ends (default: stdin, opened by run)
            oauth_client: Consent URL / exchange client (default: GoogleOAuthClient)
            people_service: Profile lookup (default: PeopleService)
            reporter: Console output (default: stdout/stderr)
            verify_refresh: Also run one refresh-token grant after the profile fetch
        """
        self.credentials = credentials
        self.input = input_provider
        self.oauth = oauth_client or GoogleOAuthClient(credentials)
        self.people = people_service or PeopleService()
        self.reporter = reporter or Reporter()
        self.verify_refresh = verify_refresh
        self.state = CheckState.AWAITING_INPUT

    def _advance(self, state: CheckState) -> None:
        logger.debug(f"OAuth check: {self.state.value} -> {state.value}")
        self.state = state

    def show_consent_url(self, url_only: bool = False) -> str:
        self.reporter.configuration(self.credentials)
        auth_url = self.oauth.create_auth_url()
        self.reporter.consent_url(auth_url, url_only=url_only)
        return auth_url

    def run(self) -> CheckState:
        """Run the check to a terminal state; input is closed on every path."""
        if self.state in TERMINAL_STATES:
            raise RuntimeError(f"OAuth check already finished ({self.state.value})")

        if self.input is None:
            self.input = ConsoleInput()

        with closing(self.input):
            self.show_consent_url()

            redirect = parse_redirect_url(self.input.read_line(PASTE_PROMPT))
            if redirect.code is None:
                logger.warning(f"Redirect URL had no code (error={redirect.error})")
                self.reporter.missing_code(redirect)
                self._advance(CheckState.MISSING_CODE)
                return self.state
            self._advance(CheckState.CODE_EXTRACTED)

            try:
                self._exchange(redirect.code)
            except Exception as e:
                error = ProviderError.from_exception(e)
                logger.error(f"OAuth check failed in state {self.state.value}: {error.message}")
                stage = FAILURE_STAGES.get(self.state, EXCHANGE_STAGE)
                self.reporter.provider_error(error, diagnose(error), stage=stage)
                self._advance(CheckState.EXCHANGE_FAILED)
                return self.state

        self._advance(CheckState.DONE)
        return self.state

    def _exchange(self, code: str) -> None:
        self.reporter.exchanging()
        tokens = self.oauth.exchange_code(code)
        self.reporter.tokens(tokens)
        if not tokens.access_token:
            raise ProviderError("Token response did not include an access token")
        self._advance(CheckState.TOKEN_EXCHANGED)

        profile = self.people.fetch_profile(tokens.access_token)
        self.reporter.profile(profile)
        self._advance(CheckState.PROFILE_FETCHED)

        if self.verify_refresh:
            if tokens.refresh_token:
                self.reporter.refresh(self.oauth.refresh(tokens))
            else:
                self.reporter.no_refresh_token()

        self.reporter.success()
