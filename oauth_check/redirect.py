"""Read the authorization result out of a pasted redirect URL."""

from dataclasses import dataclass
from urllib.parse import parse_qs, urlparse


@dataclass
class RedirectResult:
    code: str | None = None
    error: str | None = None
    error_description: str | None = None


def parse_redirect_url(redirect_url: str) -> RedirectResult:
    """Extract ``code`` (or the provider's ``error``) from the query string."""
    query = parse_qs(urlparse(redirect_url.strip()).query)

    def first(name: str) -> str | None:
        values = [v.strip() for v in query.get(name, []) if v.strip()]
        return values[0] if values else None

    return RedirectResult(
        code=first("code"),
        error=first("error"),
        error_description=first("error_description"),
    )
