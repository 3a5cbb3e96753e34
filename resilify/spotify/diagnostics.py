"""Human-readable descriptions of failed API calls."""

from typing import TYPE_CHECKING

from resilify.enums import CLIENT_ERROR_CATEGORIES, ErrorCategory

if TYPE_CHECKING:
    from .outcome import Failure

CLIENT_ERROR_LABELS = {
    ErrorCategory.BAD_REQUEST: "Bad request",
    ErrorCategory.FORBIDDEN: "Forbidden",
    ErrorCategory.NOT_FOUND: "Not found",
    ErrorCategory.OTHER_CLIENT_ERROR: "Client error",
}


def _status_and_code(failure: "Failure") -> str:
    if failure.code is None:
        return str(failure.http_status)
    return f"{failure.http_status}, code {failure.code}"


def describe_failure(failure: "Failure") -> str:
    """
    Render a failure as a single diagnostic line.

    Includes what went wrong and, where there is one, what to do next.
    """
    category = failure.category

    if category == ErrorCategory.AUTHENTICATION:
        return (
            f"Authentication error ({_status_and_code(failure)}): "
            f"{failure.message}. "
            "Re-authenticate and obtain a new access token."
        )

    if category == ErrorCategory.RATE_LIMITED:
        wait = (
            f"retry after {failure.retry_after:g}s"
            if failure.retry_after is not None
            else "no Retry-After given"
        )
        return (
            f"Rate limited ({_status_and_code(failure)}) after "
            f"{failure.attempts} attempt(s), {wait}: {failure.message}"
        )

    if category in CLIENT_ERROR_CATEGORIES:
        return (
            f"{CLIENT_ERROR_LABELS[category]} "
            f"({_status_and_code(failure)}): {failure.message}. "
            "Fix the request before retrying."
        )

    if category == ErrorCategory.SERVER_ERROR:
        return (
            f"Server error ({_status_and_code(failure)}) after "
            f"{failure.attempts} attempt(s): {failure.message}. "
            "If this persists, check the Spotify service status."
        )

    return f"Unexpected error: {failure.message}"
