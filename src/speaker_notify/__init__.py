"""
Package: speaker_notify
Description: GitHub Action that announces workflow results on a Xiaomi speaker.

POSTs a resolved message to the speaker webhook service, retrying
transient failures with exponential backoff and a per-attempt timeout.
"""

from speaker_notify.delivery import DeliveryClient, send_notification
from speaker_notify.models import ApiResponse, Credentials, RetryConfig, WebhookPayload

__version__ = "1.0.0"

__all__ = [
    "ApiResponse",
    "Credentials",
    "DeliveryClient",
    "RetryConfig",
    "WebhookPayload",
    "send_notification",
]
