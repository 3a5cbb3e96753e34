"""
Spotify module exceptions.

Provides a clean exception hierarchy for Spotify API operations. Every
error raised from a classified failure keeps that failure on ``.failure``.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .outcome import Failure


class SpotifyError(Exception):
    """Base exception for all Spotify-related errors."""

    def __init__(self, message: str, failure: Optional["Failure"] = None):
        super().__init__(message)
        self.failure = failure

    @property
    def http_status(self) -> Optional[int]:
        return self.failure.http_status if self.failure else None


class SpotifyAuthError(SpotifyError):
    """Raised when authentication fails (401). Not retried."""
    pass


class SpotifyAPIError(SpotifyError):
    """Raised when a Spotify API call fails."""
    pass


class SpotifyRateLimitError(SpotifyAPIError):
    """Raised when rate limited by Spotify API and retries ran out."""

    def __init__(
        self,
        message: str,
        retry_after: Optional[float] = None,
        failure: Optional["Failure"] = None,
    ):
        super().__init__(message, failure=failure)
        self.retry_after = retry_after


class SpotifyClientError(SpotifyAPIError):
    """Raised when the request itself is at fault (4xx)."""
    pass


class SpotifyBadRequestError(SpotifyClientError):
    """Raised on a malformed request (400)."""
    pass


class SpotifyForbiddenError(SpotifyClientError):
    """Raised when the token lacks permission for a resource (403)."""
    pass


class SpotifyNotFoundError(SpotifyClientError):
    """Raised when a requested resource is not found (404)."""
    pass


class SpotifyServerError(SpotifyAPIError):
    """Raised when Spotify keeps failing server-side (5xx)."""
    pass
