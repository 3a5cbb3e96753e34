"""
Spotify API error handling and retry logic.

Contains the ResilientCaller, which runs one API operation, classifies any
failure, and either retries it or surfaces it, and the api_error_handler
decorator built on top of it.
"""

import logging
import time
from functools import wraps
from typing import Any, Callable, Optional

from resilify.enums import ErrorCategory, RetryAction

from .classification import DEFAULT_POLICY, ClassificationPolicy
from .outcome import Failure, Outcome, Success, unwrap
from .retry import RetryPolicy

logger = logging.getLogger(__name__)


class ResilientCaller:
    """
    Runs API operations with classification and retry.

    401 and other 4xx failures are surfaced on the first attempt. 429s wait
    the server's Retry-After and retry; 5xx failures retry with exponential
    backoff. Retries stop when the policy's retry count or wait budget runs
    out, and the last failure is returned.

    Example:
        caller = ResilientCaller(RetryPolicy(max_retries=3))
        outcome = caller.call(lambda: sp.track(track_id))
        if isinstance(outcome, Failure):
            print(outcome.describe())
    """

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        classifier: Optional[ClassificationPolicy] = None,
        sleep: Optional[Callable[[float], Any]] = None,
    ):
        """
        Initialize the caller.

        Args:
            policy: Retry bounds. Defaults to RetryPolicy().
            classifier: Status-to-action mapping. Defaults to DEFAULT_POLICY.
            sleep: Function used to wait between attempts. Defaults to
                time.sleep.
        """
        self.policy = policy or RetryPolicy()
        self.classifier = classifier or DEFAULT_POLICY
        self._sleep = sleep

    def _wait(self, delay: float) -> None:
        (self._sleep or time.sleep)(delay)

    def call(
        self,
        operation: Callable[[], Any],
        description: Optional[str] = None,
    ) -> Outcome:
        """
        Run ``operation`` until it succeeds or fails for good.

        Args:
            operation: No-argument callable making one API call.
            description: Name used in log messages.

        Returns:
            Success with the operation's result, or the final Failure.
        """
        name = description or getattr(operation, "__name__", "operation")
        attempts = 0
        backoff_retries = 0
        waited = 0.0

        while True:
            attempts += 1
            try:
                value = operation()
            except Exception as e:
                classification = self.classifier.classify(e)
                failure = Failure(
                    classification, attempts=attempts, waited=waited,
                    exception=e,
                )

                if not classification.action.is_retryable:
                    self._log_surfaced(failure, name)
                    return failure

                if not self.policy.can_retry(attempts - 1):
                    logger.error(
                        "%s in %s: giving up after %d attempts. %s",
                        classification.category, name, attempts,
                        failure.describe(),
                    )
                    return failure

                delay = self.policy.delay_for(classification, backoff_retries)
                if not self.policy.fits_budget(waited, delay):
                    logger.error(
                        "%s in %s: waiting %ss would exceed the %s budget. "
                        "%s",
                        classification.category, name, delay,
                        (
                            f"{self.policy.max_total_wait}s"
                            if self.policy.max_total_wait is not None
                            else "finite"
                        ),
                        failure.describe(),
                    )
                    return failure

                logger.warning(
                    "%s in %s (status %s), attempt %d/%s. "
                    "Retrying in %ss",
                    classification.category, name,
                    classification.details.http_status, attempts,
                    self.policy.max_attempts or "unbounded", delay,
                )
                self._wait(delay)
                waited += delay
                if classification.action == RetryAction.RETRY_WITH_BACKOFF:
                    backoff_retries += 1
                continue

            if attempts > 1:
                logger.info(
                    "%s succeeded after %d attempts", name, attempts,
                )
            return Success(value, attempts=attempts)

    def call_or_raise(
        self,
        operation: Callable[[], Any],
        description: Optional[str] = None,
    ) -> Any:
        """Like call(), but raise a SpotifyError instead of returning Failure."""
        return unwrap(self.call(operation, description))

    @staticmethod
    def _log_surfaced(failure: Failure, name: str) -> None:
        if failure.category == ErrorCategory.UNCLASSIFIED:
            logger.error(
                "Unexpected error in %s: %s", name, failure.exception,
                exc_info=failure.exception,
            )
        else:
            logger.error("Spotify API error in %s: %s", name, failure.describe())


def api_error_handler(
    func: Optional[Callable] = None,
    *,
    caller: Optional[ResilientCaller] = None,
) -> Callable:
    """
    Decorator for handling Spotify API errors with automatic retry.

    Runs the wrapped function through a ResilientCaller and raises the
    matching SpotifyError once a failure is surfaced. Usable bare
    (``@api_error_handler``) or with an explicit caller
    (``@api_error_handler(caller=my_caller)``).
    """

    def decorate(fn: Callable) -> Callable:
        @wraps(fn)
        def wrapper(*args, **kwargs):
            active = caller or ResilientCaller()
            return active.call_or_raise(
                lambda: fn(*args, **kwargs), description=fn.__name__,
            )

        return wrapper

    if func is not None:
        return decorate(func)
    return decorate
