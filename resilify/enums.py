"""
Enums for failure categories and retry decisions.

Single source of truth for the string constants used by the classifier,
the retry wrapper, and diagnostic output.
"""

from enum import StrEnum


class ErrorCategory(StrEnum):
    """Categories a failed Spotify API call is sorted into."""
    AUTHENTICATION = "authentication"
    RATE_LIMITED = "rate_limited"
    BAD_REQUEST = "bad_request"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    OTHER_CLIENT_ERROR = "other_client_error"
    SERVER_ERROR = "server_error"
    UNCLASSIFIED = "unclassified"


class RetryAction(StrEnum):
    """What the call wrapper does with a classified failure."""
    RETRY_AFTER_DELAY = "retry_after_delay"
    RETRY_WITH_BACKOFF = "retry_with_backoff"
    FATAL_AUTH = "fatal_auth"
    FATAL_CLIENT = "fatal_client"
    FATAL_UNKNOWN = "fatal_unknown"

    @property
    def is_retryable(self) -> bool:
        return self in (
            RetryAction.RETRY_AFTER_DELAY,
            RetryAction.RETRY_WITH_BACKOFF,
        )


CLIENT_ERROR_CATEGORIES = frozenset({
    ErrorCategory.BAD_REQUEST,
    ErrorCategory.FORBIDDEN,
    ErrorCategory.NOT_FOUND,
    ErrorCategory.OTHER_CLIENT_ERROR,
})
