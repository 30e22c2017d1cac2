from __future__ import annotations

import logging
from typing import Optional, Sequence

import requests

from ..core.exceptions import AuthenticationError
from .model import AuthUser

logger = logging.getLogger(__name__)


class MembersClient:
    """HTTP client for the members site, which owns logins and permissions.

    The members site sets its session cookie on the shared parent domain, so
    the cookie sent along with a request to this app is forwarded verbatim to
    resolve who is making the request.
    """

    def __init__(self, base_url: str, *, cookie_name: str = "session", timeout: float = 5.0, http=None):
        self._base_url = base_url.rstrip("/")
        self._cookie_name = cookie_name
        self._timeout = timeout
        self._http = http or requests.Session()

    @property
    def base_url(self) -> str:
        return self._base_url

    def get_user(self, request) -> Optional[AuthUser]:
        """Resolve the user behind `request`, or None when there isn't one."""
        token = request.cookies.get(self._cookie_name)
        if not token:
            return None

        try:
            response = self._http.get(
                f"{self._base_url}/api/users/session",
                cookies={self._cookie_name: token},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("Members service unreachable while resolving user: %s", e)
            return None

        if response.status_code != 200:
            return None
        try:
            return AuthUser.from_payload(response.json())
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Members service sent an unusable user payload: %s", e)
            return None

    def find_users_with_permission(self, permission: str) -> Sequence[AuthUser]:
        try:
            response = self._http.get(
                f"{self._base_url}/api/users",
                params={"permission": permission},
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise AuthenticationError(f"Could not list users with {permission}: {e}") from e

        try:
            return [AuthUser.from_payload(item) for item in response.json()]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise AuthenticationError(f"Unusable user list for {permission}: {e}") from e
