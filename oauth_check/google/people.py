"""Google People API client."""

import logging
from typing import Any

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from oauth_check.constants import PEOPLE_FIELDS, PEOPLE_RESOURCE
from oauth_check.google.dto import UserProfile

logger = logging.getLogger(__name__)


class PeopleService:
    """Client for the People API, limited to the caller's own profile."""

    def _get_service(self, credentials: Credentials):
        return build("people", "v1", credentials=credentials, cache_discovery=False)

    def fetch_profile(self, access_token: str) -> UserProfile:
        """
        Fetch the display name and primary email of the token's owner.

        Args:
            access_token: Access token from the code exchange

        Returns:
            Profile with whichever fields the API returned
        """
        service = self._get_service(Credentials(token=access_token))

        try:
            person = (
                service.people()
                .get(resourceName=PEOPLE_RESOURCE, personFields=PEOPLE_FIELDS)
                .execute()
            )
        except HttpError as e:
            logger.error(f"People API error: {e}")
            raise

        profile = UserProfile(
            name=_primary_value(person.get("names"), "displayName"),
            email=_primary_value(person.get("emailAddresses"), "value"),
        )
        logger.debug(f"Profile fields present: name={profile.name is not None}, email={profile.email is not None}")
        return profile


def _primary_value(entries: list[dict[str, Any]] | None, key: str) -> str | None:
    """Pick the entry flagged primary, else the first one."""
    if not entries:
        return None
    primary = next(
        (entry for entry in entries if entry.get("metadata", {}).get("primary")),
        entries[0],
    )
    return primary.get(key) or None
