"""
Failure classification for Spotify API calls.

Reads the status code, service code, message and Retry-After header off a
failed call (usually a ``spotipy.SpotifyException``) and maps it to an
error category and a retry action.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from resilify.enums import ErrorCategory, RetryAction

logger = logging.getLogger(__name__)

# Actions applied to each category unless a status override says otherwise
DEFAULT_ACTIONS: Dict[ErrorCategory, RetryAction] = {
    ErrorCategory.AUTHENTICATION: RetryAction.FATAL_AUTH,
    ErrorCategory.RATE_LIMITED: RetryAction.RETRY_AFTER_DELAY,
    ErrorCategory.BAD_REQUEST: RetryAction.FATAL_CLIENT,
    ErrorCategory.FORBIDDEN: RetryAction.FATAL_CLIENT,
    ErrorCategory.NOT_FOUND: RetryAction.FATAL_CLIENT,
    ErrorCategory.OTHER_CLIENT_ERROR: RetryAction.FATAL_CLIENT,
    ErrorCategory.SERVER_ERROR: RetryAction.RETRY_WITH_BACKOFF,
    ErrorCategory.UNCLASSIFIED: RetryAction.FATAL_UNKNOWN,
}


def _header(headers: Optional[Mapping], name: str) -> Optional[Any]:
    """Case-insensitive header lookup over any mapping."""
    if not headers:
        return None
    try:
        return headers[name]
    except (KeyError, TypeError):
        pass
    lowered = name.lower()
    for key, value in headers.items():
        if isinstance(key, str) and key.lower() == lowered:
            return value
    return None


def parse_retry_after(value: Any) -> Optional[float]:
    """
    Parse a Retry-After header value in seconds.

    Returns None for missing, negative, non-finite or non-numeric values (the
    HTTP-date form is not used by Spotify).
    """
    if value is None:
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        logger.debug("Ignoring unparseable Retry-After: %r", value)
        return None
    if seconds < 0 or not math.isfinite(seconds):
        return None
    return seconds


def _status_of(exception: Exception) -> Optional[int]:
    for attr in ("http_status", "status_code"):
        status = getattr(exception, attr, None)
        if isinstance(status, int):
            return status
    response = getattr(exception, "response", None)
    status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None


def _headers_of(exception: Exception) -> Optional[Mapping]:
    headers = getattr(exception, "headers", None)
    if headers:
        return headers
    response = getattr(exception, "response", None)
    return getattr(response, "headers", None)


@dataclass(frozen=True)
class ApiErrorDetails:
    """The fields of a failed API call that drive classification."""

    http_status: Optional[int]
    code: Any
    message: str
    retry_after: Optional[float] = None

    @classmethod
    def from_exception(cls, exception: Exception) -> "ApiErrorDetails":
        """Read status, code, message and Retry-After off a failure."""
        message = getattr(exception, "msg", None)
        if message is None:
            message = getattr(exception, "message", None)
        if message is None:
            message = str(exception)
        return cls(
            http_status=_status_of(exception),
            code=getattr(exception, "code", None),
            message=str(message),
            retry_after=parse_retry_after(
                _header(_headers_of(exception), "Retry-After")
            ),
        )


@dataclass(frozen=True)
class Classification:
    """A failure's category, the action to take, and its raw details."""

    category: ErrorCategory
    action: RetryAction
    details: ApiErrorDetails


def category_for_status(status: Optional[int]) -> ErrorCategory:
    """Map an HTTP status code to an error category."""
    if status is None:
        return ErrorCategory.UNCLASSIFIED
    if status == 401:
        return ErrorCategory.AUTHENTICATION
    if status == 429:
        return ErrorCategory.RATE_LIMITED
    if status == 400:
        return ErrorCategory.BAD_REQUEST
    if status == 403:
        return ErrorCategory.FORBIDDEN
    if status == 404:
        return ErrorCategory.NOT_FOUND
    if 400 <= status < 500:
        return ErrorCategory.OTHER_CLIENT_ERROR
    if status >= 500:
        return ErrorCategory.SERVER_ERROR
    return ErrorCategory.UNCLASSIFIED


class ClassificationPolicy:
    """
    Decides how each failed call is handled.

    Categories map to actions through DEFAULT_ACTIONS. ``overrides``
    replaces the action for individual status codes, e.g.
    ``{408: RetryAction.RETRY_WITH_BACKOFF}``.
    """

    def __init__(self, overrides: Optional[Mapping[int, RetryAction]] = None):
        self._overrides = dict(overrides or {})

    def action_for(
        self,
        status: Optional[int],
        category: Optional[ErrorCategory] = None,
    ) -> RetryAction:
        """Return the retry action for a status code."""
        if status is not None and status in self._overrides:
            return RetryAction(self._overrides[status])
        if category is None:
            category = category_for_status(status)
        return DEFAULT_ACTIONS[category]

    def classify(self, exception: Exception) -> Classification:
        """Classify a failed call. The same input always gives the same result."""
        details = ApiErrorDetails.from_exception(exception)
        category = category_for_status(details.http_status)
        return Classification(
            category=category,
            action=self.action_for(details.http_status, category),
            details=details,
        )


DEFAULT_POLICY = ClassificationPolicy()
