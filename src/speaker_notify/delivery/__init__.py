"""
Package: delivery
Description: Webhook delivery for the speaker notify action.

Provides the retrying delivery client, the backoff policy and the
error taxonomy for transient and terminal delivery failures.
"""

from .client import DeliveryClient, build_headers, build_webhook_url, send_notification
from .errors import (
    DeliveryError,
    ExhaustionError,
    HttpStatusError,
    InvalidResponseError,
    PayloadError,
    RequestTimeoutError,
    TransportError,
)
from .retry import get_retry_delay

__all__ = [
    "DeliveryClient",
    "DeliveryError",
    "ExhaustionError",
    "HttpStatusError",
    "InvalidResponseError",
    "PayloadError",
    "RequestTimeoutError",
    "TransportError",
    "build_headers",
    "build_webhook_url",
    "get_retry_delay",
    "send_notification",
]
