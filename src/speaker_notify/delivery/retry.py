"""
Module: delivery/retry.py
Description: Retry policy for webhook delivery.

Exponential backoff without jitter or cap: the delay before retry k is
base * 2**(k-1). The policy is expressed as tenacity strategies so the
delivery client can drive its attempt loop with AsyncRetrying.
"""

from typing import Awaitable, Callable, Optional

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
)
from tenacity.wait import wait_base

from speaker_notify.delivery.errors import DeliveryError
from speaker_notify.models.delivery import RetryConfig

DEFAULT_BASE_DELAY_MS = 1000


def get_retry_delay(attempt: int, base_delay: int = DEFAULT_BASE_DELAY_MS) -> int:
    """
    Calculate exponential backoff delay for retries.

    Args:
        attempt: Number of retries already made (0-indexed)
        base_delay: Base delay in milliseconds

    Returns:
        Delay in milliseconds (1000, 2000, 4000, ... with the default base)
    """
    if attempt < 0:
        raise ValueError("attempt must be non-negative")
    return base_delay * 2 ** attempt


class wait_retry_delay(wait_base):
    """Tenacity wait strategy backed by get_retry_delay, in seconds."""

    def __init__(self, base_delay: int = DEFAULT_BASE_DELAY_MS):
        self.base_delay = base_delay

    def __call__(self, retry_state: RetryCallState) -> float:
        # attempt_number is the 1-indexed attempt that just failed
        return get_retry_delay(retry_state.attempt_number - 1, self.base_delay) / 1000


def delivery_retrying(
    config: RetryConfig,
    sleep: Callable[[float], Awaitable[None]],
    before_sleep: Optional[Callable[[RetryCallState], None]] = None,
) -> AsyncRetrying:
    """
    Build the attempt loop controller for one delivery.

    Only DeliveryError is retried; anything else propagates unchanged.
    On exhaustion tenacity raises RetryError, which the client converts.

    Args:
        config: Attempt bound and backoff base
        sleep: Async sleep taking seconds
        before_sleep: Hook called after a failed attempt that will be retried

    Returns:
        Configured AsyncRetrying instance
    """
    return AsyncRetrying(
        stop=stop_after_attempt(config.total_attempts),
        wait=wait_retry_delay(config.base_delay_ms),
        retry=retry_if_exception_type(DeliveryError),
        before_sleep=before_sleep,
        sleep=sleep,
        reraise=False,
    )
