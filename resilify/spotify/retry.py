"""
Retry policy: how many times to retry and how long to wait.

Rate-limited calls wait the server's Retry-After. Server errors back off
exponentially: the Nth retry waits ``base_delay * 2 ** (N - 1)``, capped at
``max_delay``.
"""

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from resilify.enums import RetryAction

from .classification import Classification

# Retry configuration
MAX_RETRIES = 4
BASE_DELAY = 2  # seconds
MAX_DELAY = 16  # seconds
DEFAULT_RETRY_AFTER = 1  # seconds, when a 429 has no usable header


def _config_value(config: Any, key: str, default: Any) -> Any:
    if isinstance(config, Mapping):
        return config.get(key, default)
    return getattr(config, key, default)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounds on retrying recoverable failures.

    Attributes:
        max_retries: Retries after the first attempt. None retries forever.
        base_delay: First backoff delay in seconds.
        max_delay: Cap on a single backoff delay. None leaves it uncapped.
        max_total_wait: Budget for all waits of one call. None is unlimited.
        default_retry_after: Wait used for a 429 without Retry-After.
    """

    max_retries: Optional[int] = MAX_RETRIES
    base_delay: float = BASE_DELAY
    max_delay: Optional[float] = MAX_DELAY
    max_total_wait: Optional[float] = None
    default_retry_after: float = DEFAULT_RETRY_AFTER

    def __post_init__(self):
        """Validate bounds on creation."""
        if self.max_retries is not None and self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.base_delay < 0:
            raise ValueError("base_delay must be >= 0")
        if self.max_delay is not None and self.max_delay < 0:
            raise ValueError("max_delay must be >= 0")
        if self.max_total_wait is not None and self.max_total_wait < 0:
            raise ValueError("max_total_wait must be >= 0")
        if self.default_retry_after < 0:
            raise ValueError("default_retry_after must be >= 0")

    @classmethod
    def from_config(cls, config: Any) -> "RetryPolicy":
        """
        Create a policy from a Config class or a config dictionary.

        Args:
            config: Object or mapping with RETRY_* settings.

        Returns:
            RetryPolicy instance; missing keys keep their defaults.
        """
        return cls(
            max_retries=_config_value(
                config, "RETRY_MAX_RETRIES", MAX_RETRIES
            ),
            base_delay=_config_value(config, "RETRY_BASE_DELAY", BASE_DELAY),
            max_delay=_config_value(config, "RETRY_MAX_DELAY", MAX_DELAY),
            max_total_wait=_config_value(
                config, "RETRY_MAX_TOTAL_WAIT", None
            ),
            default_retry_after=_config_value(
                config, "RETRY_DEFAULT_RETRY_AFTER", DEFAULT_RETRY_AFTER
            ),
        )

    def backoff_delay(self, retry_index: int) -> float:
        """Exponential backoff for a 0-indexed retry, capped at max_delay."""
        if self.base_delay == 0:
            return 0.0
        try:
            delay = float(self.base_delay * 2 ** retry_index)
        except OverflowError:
            delay = math.inf
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay

    def delay_for(
        self, classification: Classification, retry_index: int
    ) -> float:
        """Seconds to wait before retrying a retryable failure."""
        if classification.action == RetryAction.RETRY_AFTER_DELAY:
            retry_after = classification.details.retry_after
            if retry_after is None:
                return self.default_retry_after
            return retry_after
        return self.backoff_delay(retry_index)

    def can_retry(self, retries_done: int) -> bool:
        return self.max_retries is None or retries_done < self.max_retries

    def fits_budget(self, waited: float, delay: float) -> bool:
        return (
            math.isfinite(waited + delay)
            and (
                self.max_total_wait is None
                or waited + delay <= self.max_total_wait
            )
        )

    @property
    def max_attempts(self) -> Optional[int]:
        return None if self.max_retries is None else self.max_retries + 1
