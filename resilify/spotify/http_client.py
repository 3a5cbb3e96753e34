"""
Lightweight HTTP client for the Spotify Web API.

Wraps requests.Session with a bearer token and pagination support. Each
request is a single attempt; failures are raised as spotipy.SpotifyException
and all retry decisions are left to the ResilientCaller.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

import requests
import spotipy

from .error_handling import ResilientCaller
from .outcome import Outcome
from .retry import RetryPolicy

logger = logging.getLogger(__name__)

BASE_URL = "https://api.spotify.com/v1"
REQUEST_TIMEOUT = 30  # seconds, when no config is given


def _error_from_response(response: requests.Response) -> spotipy.SpotifyException:
    """Build the exception spotipy itself raises for a failed response."""
    reason = None
    try:
        error = response.json().get("error", {})
        if isinstance(error, dict):
            msg = error.get("message", response.text)
            reason = error.get("reason")
        else:
            msg = str(error)
    except Exception:
        msg = response.text

    return spotipy.SpotifyException(
        response.status_code,
        -1,
        f"{response.url}: {msg}",
        reason=reason,
        headers=dict(response.headers or {}),
    )


class SpotifyHTTPClient:
    """
    HTTP client for Spotify Web API requests.

    Handles authorization headers and pagination. Every public call goes
    through a ResilientCaller, so 429s and 5xx are retried and everything
    else is surfaced as a SpotifyError.
    """

    def __init__(
        self,
        access_token: str,
        caller: Optional[ResilientCaller] = None,
        base_url: str = BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
    ):
        """
        Initialize the HTTP client.

        Args:
            access_token: Bearer token for API requests.
            caller: Retry wrapper; defaults to ResilientCaller().
            base_url: API root, without a trailing slash.
            timeout: Per-request timeout in seconds.
        """
        self._access_token = access_token
        self._caller = caller or ResilientCaller()
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        })

    @classmethod
    def from_config(
        cls,
        access_token: str,
        config: Any,
        caller: Optional[ResilientCaller] = None,
    ) -> "SpotifyHTTPClient":
        """
        Create a client from a Config class or config dictionary.

        Reads REQUEST_TIMEOUT for the per-request timeout and, unless a
        caller is given, builds one from the RETRY_* settings.
        """
        if isinstance(config, Mapping):
            timeout = config.get("REQUEST_TIMEOUT", REQUEST_TIMEOUT)
        else:
            timeout = getattr(config, "REQUEST_TIMEOUT", REQUEST_TIMEOUT)
        return cls(
            access_token,
            caller=caller or ResilientCaller(RetryPolicy.from_config(config)),
            timeout=timeout,
        )

    def update_token(self, access_token: str) -> None:
        """Update the bearer token for future requests."""
        self._access_token = access_token
        self._session.headers["Authorization"] = f"Bearer {access_token}"

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    # -----------------------------------------------------------------
    # Public HTTP methods
    # -----------------------------------------------------------------

    def get(self, path: str, params: Optional[Dict] = None) -> Any:
        """Send a GET request."""
        return self._request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        """Send a POST request."""
        return self._request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        """Send a PUT request."""
        return self._request("PUT", path, json=json)

    def delete(self, path: str, json: Any = None) -> Any:
        """Send a DELETE request."""
        return self._request("DELETE", path, json=json)

    def request_outcome(
        self,
        method: str,
        path: str,
        params: Optional[Dict] = None,
        json: Any = None,
    ) -> Outcome:
        """
        Send a request and return a Success or Failure instead of raising.

        Args:
            method: HTTP method.
            path: API path relative to the base URL (e.g. ``/me``).
            params: Optional query parameters.
            json: Optional JSON body.
        """
        url = f"{self._base_url}{path}"
        return self._caller.call(
            lambda: self._send(method, url, params=params, json=json),
            description=f"{method} {path}",
        )

    def get_all_pages(
        self,
        path: str,
        params: Optional[Dict] = None,
        items_key: str = "items",
    ) -> List[Dict]:
        """
        Fetch all pages of a paginated endpoint.

        Follows the ``next`` URL in each response until exhausted. Each
        page is retried on its own.

        Args:
            path: Initial API path (e.g. ``/me/playlists``).
            params: Optional query parameters for the first request.
            items_key: Key containing the list items (default ``items``).

        Returns:
            Concatenated list of all items across pages.
        """
        all_items: List[Dict] = []
        data = self._request("GET", path, params=params)

        while data:
            all_items.extend(data.get(items_key) or [])
            next_url = data.get("next")
            if not next_url:
                break
            data = self._caller.call_or_raise(
                lambda url=next_url: self._send("GET", url),
                description=f"GET {path} (next page)",
            )

        return all_items

    # -----------------------------------------------------------------
    # Internal request handling
    # -----------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict] = None,
        json: Any = None,
    ) -> Any:
        """Make a retried request to a relative API path."""
        url = f"{self._base_url}{path}"
        return self._caller.call_or_raise(
            lambda: self._send(method, url, params=params, json=json),
            description=f"{method} {path}",
        )

    def _send(
        self,
        method: str,
        url: str,
        params: Optional[Dict] = None,
        json: Any = None,
    ) -> Any:
        """Execute exactly one HTTP request."""
        response = self._session.request(
            method, url, params=params, json=json, timeout=self._timeout,
        )

        if response.status_code == 204:
            return None
        if response.ok and not response.content:
            return None
        if response.ok:
            return response.json()

        logger.debug(
            "%s %s returned %d", method, url, response.status_code,
        )
        raise _error_from_response(response)
