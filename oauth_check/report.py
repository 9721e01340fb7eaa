"""Operator-facing console output."""

import json
import sys
from typing import Any, TextIO

from oauth_check.constants import (
    COMMON_ISSUES,
    INSTRUCTIONS,
    NEXT_STEPS,
    NOT_FOUND,
    URL_ONLY_INSTRUCTIONS,
)
from oauth_check.google.dto import CredentialSet, TokenPair, UserProfile
from oauth_check.google.errors import ProviderError
from oauth_check.redirect import RedirectResult


class Reporter:
    """Writes the check's progress to stdout and failures to stderr."""

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None):
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def _print(self, *parts: Any) -> None:
        print(*parts, file=self.out)

    def _error(self, *parts: Any) -> None:
        print(*parts, file=self.err)

    def _numbered(self, items: list[str]) -> None:
        for i, item in enumerate(items, 1):
            self._print(f"{i}. {item}")

    def missing_config(self, missing: list[str]) -> None:
        self._error("❌ Missing required environment variables:", ", ".join(missing))

    def configuration(self, credentials: CredentialSet) -> None:
        self._print("Current Google OAuth2 Configuration:")
        self._print("- Client ID:", credentials.client_id)
        self._print("- Client Secret length:", len(credentials.client_secret))
        self._print("- Redirect URI:", credentials.redirect_uri)

    def consent_url(self, auth_url: str, url_only: bool = False) -> None:
        self._print("\nAuthorization URL:")
        self._print(auth_url)
        if url_only:
            self._print("\nTo test authentication:")
            self._numbered(URL_ONLY_INSTRUCTIONS)
        else:
            self._print("\nInstructions:")
            self._numbered(INSTRUCTIONS)
            self._print()

    def missing_code(self, redirect: RedirectResult) -> None:
        self._error("❌ No authorization code found in the redirect URL")
        if redirect.error:
            detail = f" ({redirect.error_description})" if redirect.error_description else ""
            self._error(f"Provider returned error: {redirect.error}{detail}")

    def exchanging(self) -> None:
        self._print("\nAttempting to exchange authorization code for tokens...")

    def tokens(self, tokens: TokenPair) -> None:
        self._print("✅ Successfully obtained tokens:")
        self._print("- Access Token:", "✓ Present" if tokens.access_token else "✗ Missing")
        self._print("- Refresh Token:", "✓ Present" if tokens.refresh_token else "✗ Missing")
        self._print("- Expiry Date:", tokens.expiry_iso or "✗ Missing")

    def profile(self, profile: UserProfile) -> None:
        self._print("\n✅ Successfully retrieved user info:")
        self._print("- Name:", profile.name or NOT_FOUND)
        self._print("- Email:", profile.email or NOT_FOUND)

    def refresh(self, refreshed: TokenPair) -> None:
        self._print("\n✅ Refresh token works:")
        self._print("- New Access Token:", "✓ Present" if refreshed.access_token else "✗ Missing")
        self._print("- New Expiry Date:", refreshed.expiry_iso or "✗ Missing")

    def no_refresh_token(self) -> None:
        self._print("\n⚠ No refresh token returned, skipping refresh check")

    def success(self) -> None:
        self._print("\n✅ OAuth authentication is working correctly!")
        self._print("\nNext steps:")
        self._numbered(NEXT_STEPS)

    def provider_error(
        self, error: ProviderError, hint: str | None = None, stage: str = "OAuth token exchange"
    ) -> None:
        self._error(f"❌ Error during {stage}:", error.message)
        if error.payload is not None:
            self._error("Error details:", _format_payload(error.payload))
        if hint:
            self._print("\nLikely cause:")
            self._print(hint)
        self._print("\nCommon issues:")
        self._numbered(COMMON_ISSUES)


def _format_payload(payload: Any) -> str:
    if isinstance(payload, (dict, list)):
        return json.dumps(payload, indent=2, ensure_ascii=False)
    return str(payload)
