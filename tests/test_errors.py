from __future__ import annotations

import json

import httplib2
import requests
from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError
from oauthlib.oauth2.rfc6749.errors import InvalidClientError, InvalidGrantError

from oauth_check.google.errors import HINTS, NETWORK_ERROR, ProviderError, diagnose


def _http_error(status: int, body: dict) -> HttpError:
    return HttpError(httplib2.Response({"status": status}), json.dumps(body).encode())


def test_oauth2_error_keeps_code_description_and_payload() -> None:
    error = ProviderError.from_exception(InvalidGrantError(description="Bad Request"))

    assert error.error_code == "invalid_grant"
    assert error.status_code == 400
    assert error.payload == {"error": "invalid_grant", "error_description": "Bad Request"}
    assert "Bad Request" in error.message
    assert diagnose(error) == HINTS["invalid_grant"]


def test_invalid_client_maps_to_credential_mismatch() -> None:
    error = ProviderError.from_exception(InvalidClientError(description="Unauthorized"))

    assert error.status_code == 401
    assert diagnose(error) == HINTS["invalid_client"]


def test_http_error_reason_from_details_is_diagnosed() -> None:
    body = {
        "error": {
            "code": 403,
            "message": "People API has not been used in project 123 before or it is disabled.",
            "status": "PERMISSION_DENIED",
            "details": [{"@type": "type.googleapis.com/google.rpc.ErrorInfo", "reason": "SERVICE_DISABLED"}],
        }
    }

    error = ProviderError.from_exception(_http_error(403, body))

    assert error.status_code == 403
    assert error.error_code == "PERMISSION_DENIED"
    assert error.reasons == ["SERVICE_DISABLED"]
    assert error.payload == body
    assert error.message.startswith("People API has not been used")
    assert diagnose(error) == HINTS["SERVICE_DISABLED"]


def test_http_403_without_reason_falls_back_to_message_text() -> None:
    body = {"error": {"code": 403, "message": "Gmail API has not been used in project 1", "status": "PERMISSION_DENIED"}}

    assert diagnose(ProviderError.from_exception(_http_error(403, body))) == HINTS["SERVICE_DISABLED"]


def test_refresh_error_payload_is_kept() -> None:
    exc = RefreshError(
        "invalid_grant: Token has been expired or revoked.",
        {"error": "invalid_grant", "error_description": "Token has been expired or revoked."},
    )

    error = ProviderError.from_exception(exc)

    assert error.error_code == "invalid_grant"
    assert error.payload["error_description"] == "Token has been expired or revoked."


def test_connection_error_is_network_error() -> None:
    error = ProviderError.from_exception(requests.ConnectionError("Name or service not known"))

    assert error.error_code == NETWORK_ERROR
    assert error.payload is None
    assert diagnose(error) == HINTS[NETWORK_ERROR]


def test_unknown_error_has_no_specific_hint() -> None:
    error = ProviderError.from_exception(ValueError("something odd"))

    assert error.message == "something odd"
    assert diagnose(error) is None


def test_provider_error_passes_through() -> None:
    original = ProviderError("already normalised", error_code="redirect_uri_mismatch")

    assert ProviderError.from_exception(original) is original
    assert diagnose(original) == HINTS["redirect_uri_mismatch"]
