"""
Module: delivery/errors.py
Description: Error taxonomy for webhook delivery.

Every DeliveryError is retried the same way; the subclasses only differ
in the message they carry. ExhaustionError is raised once all attempts
have failed. PayloadError is a precondition failure raised before any
request is made and is never retried.
"""

from typing import Optional


class DeliveryError(Exception):
    """Base class for retryable delivery failures."""


class TransportError(DeliveryError):
    """Network-level failure: connection refused, DNS, reset, ..."""


class RequestTimeoutError(DeliveryError):
    """The per-attempt deadline elapsed before a response arrived."""

    def __init__(self, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(f"Request timeout after {timeout_ms}ms")


class HttpStatusError(DeliveryError):
    """The service answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str, body: str):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"HTTP {status_code}: {reason}. {body}")


class InvalidResponseError(DeliveryError):
    """A 2xx response whose body is not a JSON object."""


class ExhaustionError(Exception):
    """All permitted attempts failed."""

    def __init__(self, attempts: int, last_error: Optional[BaseException]):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Failed after {attempts} attempts. Last error: {last_error}"
        )


class PayloadError(ValueError):
    """The payload could not be built from the action inputs."""
