"""
Tagged results of a wrapped API call.

A call yields either ``Success`` or ``Failure``. Callers branch on the type
(``isinstance`` or ``match``) and on ``Failure.category``; ``unwrap`` turns
a result back into a value or an exception for code that prefers raising.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from resilify.enums import ErrorCategory, RetryAction

from .classification import Classification
from .diagnostics import describe_failure
from .exceptions import (
    SpotifyAPIError,
    SpotifyAuthError,
    SpotifyBadRequestError,
    SpotifyClientError,
    SpotifyForbiddenError,
    SpotifyNotFoundError,
    SpotifyRateLimitError,
    SpotifyServerError,
)

_ERROR_TYPES = {
    ErrorCategory.AUTHENTICATION: SpotifyAuthError,
    ErrorCategory.RATE_LIMITED: SpotifyRateLimitError,
    ErrorCategory.BAD_REQUEST: SpotifyBadRequestError,
    ErrorCategory.FORBIDDEN: SpotifyForbiddenError,
    ErrorCategory.NOT_FOUND: SpotifyNotFoundError,
    ErrorCategory.OTHER_CLIENT_ERROR: SpotifyClientError,
    ErrorCategory.SERVER_ERROR: SpotifyServerError,
    ErrorCategory.UNCLASSIFIED: SpotifyAPIError,
}


@dataclass(frozen=True)
class Success:
    """The operation returned normally."""

    value: Any
    attempts: int = 1


@dataclass(frozen=True)
class Failure:
    """
    The operation failed and will not be retried further.

    Attributes:
        classification: Category, action and details of the last failure.
        attempts: Number of times the operation was invoked.
        waited: Total seconds slept between attempts.
        exception: The failure object the operation raised.
    """

    classification: Classification
    attempts: int = 1
    waited: float = 0.0
    exception: Optional[BaseException] = field(
        default=None, repr=False, compare=False,
    )

    @property
    def category(self) -> ErrorCategory:
        return self.classification.category

    @property
    def action(self) -> RetryAction:
        return self.classification.action

    @property
    def http_status(self) -> Optional[int]:
        return self.classification.details.http_status

    @property
    def code(self) -> Any:
        return self.classification.details.code

    @property
    def message(self) -> str:
        return self.classification.details.message

    @property
    def retry_after(self) -> Optional[float]:
        return self.classification.details.retry_after

    @property
    def retries(self) -> int:
        return self.attempts - 1

    def describe(self) -> str:
        """Human-readable one-line diagnostic."""
        return describe_failure(self)

    def raise_error(self) -> None:
        """Raise the matching SpotifyError, chained from the original."""
        error_type = _ERROR_TYPES[self.category]
        if error_type is SpotifyRateLimitError:
            error = SpotifyRateLimitError(
                self.describe(), retry_after=self.retry_after, failure=self,
            )
        else:
            error = error_type(self.describe(), failure=self)
        raise error from self.exception


Outcome = Union[Success, Failure]


def unwrap(outcome: Outcome) -> Any:
    """Return a Success's value, or raise the Failure as a SpotifyError."""
    if isinstance(outcome, Success):
        return outcome.value
    outcome.raise_error()
