"""Provider error normalisation and targeted diagnostics."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import requests
from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

logger = logging.getLogger(__name__)

NETWORK_ERROR = "network_error"

# Provider error codes grouped by the likely misconfiguration behind them
HINTS = {
    "invalid_client": "The client ID or client secret does not match the OAuth client in Google Cloud Console.",
    "unauthorized_client": "The client ID or client secret does not match the OAuth client in Google Cloud Console.",
    "redirect_uri_mismatch": "The redirect URI is not listed under Authorized redirect URIs for this OAuth client.",
    "invalid_grant": (
        "The authorization code has expired, was already used, or was issued for a different "
        "redirect URI. Run the check again and paste the new redirect URL promptly."
    ),
    "access_denied": "Consent was refused, or the account is not allowed by the OAuth consent screen (test users, publishing status).",
    "admin_policy_enforced": "Consent was refused, or the account is not allowed by the OAuth consent screen (test users, publishing status).",
    "org_internal": "Consent was refused, or the account is not allowed by the OAuth consent screen (test users, publishing status).",
    "accessNotConfigured": "The People API is not enabled for this Google Cloud project.",
    "SERVICE_DISABLED": "The People API is not enabled for this Google Cloud project.",
    "insufficientPermissions": "The granted scopes do not cover this request. Make sure every requested scope was accepted.",
    "ACCESS_TOKEN_SCOPE_INSUFFICIENT": "The granted scopes do not cover this request. Make sure every requested scope was accepted.",
    NETWORK_ERROR: "Google could not be reached. Check network connectivity and proxy settings.",
}


@dataclass(eq=False)
class ProviderError(Exception):
    """Failure reported by the OAuth provider or while talking to it."""

    message: str
    status_code: int | None = None
    error_code: str | None = None
    payload: Any = None
    reasons: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_exception(cls, exc: Exception) -> "ProviderError":
        if isinstance(exc, ProviderError):
            return exc
        if isinstance(exc, OAuth2Error):
            return cls._from_oauth2_error(exc)
        if isinstance(exc, HttpError):
            return cls._from_http_error(exc)
        if isinstance(exc, RefreshError):
            return cls._from_refresh_error(exc)
        if isinstance(exc, requests.RequestException):
            response = exc.response
            return cls(
                message=str(exc),
                status_code=response.status_code if response is not None else None,
                error_code=NETWORK_ERROR if response is None else None,
            )
        return cls(message=str(exc) or type(exc).__name__)

    @classmethod
    def _from_oauth2_error(cls, exc: OAuth2Error) -> "ProviderError":
        payload = {"error": exc.error}
        if exc.description:
            payload["error_description"] = exc.description
        return cls(
            message=f"({exc.error}) {exc.description}" if exc.description else exc.error,
            status_code=exc.status_code,
            error_code=exc.error,
            payload=payload,
        )

    @classmethod
    def _from_http_error(cls, exc: HttpError) -> "ProviderError":
        status = int(exc.resp.status) if exc.resp is not None else None
        payload = _decode_json(exc.content)
        error_code = None
        reasons: list[str] = []

        if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
            error = payload["error"]
            error_code = error.get("status")
            for detail in error.get("details") or []:
                if isinstance(detail, dict) and detail.get("reason"):
                    reasons.append(detail["reason"])
            for item in error.get("errors") or []:
                if isinstance(item, dict) and item.get("reason"):
                    reasons.append(item["reason"])

        return cls(
            message=exc.reason or str(exc),
            status_code=status,
            error_code=error_code,
            payload=payload,
            reasons=reasons,
        )

    @classmethod
    def _from_refresh_error(cls, exc: RefreshError) -> "ProviderError":
        message = str(exc.args[0]) if exc.args else "Token refresh failed"
        payload = exc.args[1] if len(exc.args) > 1 else None
        error_code = payload.get("error") if isinstance(payload, dict) else None
        return cls(message=message, error_code=error_code, payload=payload)


def _decode_json(content: bytes | str | None) -> Any:
    if not content:
        return None
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    try:
        return json.loads(content)
    except ValueError:
        return content


def diagnose(error: ProviderError) -> str | None:
    """Return a targeted hint for a provider error, or None when unknown."""
    for signal in [*error.reasons, error.error_code]:
        if signal and signal in HINTS:
            return HINTS[signal]

    if error.status_code == 401:
        return HINTS["invalid_client"]
    if error.status_code == 403 and "has not been used" in str(error.payload or ""):
        return HINTS["SERVICE_DISABLED"]

    logger.debug(f"No specific diagnosis for error_code={error.error_code} status={error.status_code}")
    return None
