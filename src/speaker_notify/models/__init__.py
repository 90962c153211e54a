"""
Module: models
Description: Package initialization for Pydantic data models.

This package contains all data models used by the speaker notify action:
- WebhookPayload / PayloadMetadata: Body POSTed to the webhook
- Credentials / RetryConfig: Delivery inputs
- ApiResponse: Parsed response of the webhook service

All models are exported here for convenient importing.
"""

from .delivery import Credentials, RetryConfig
from .payload import PayloadMetadata, WebhookPayload
from .response import ApiResponse

__all__ = [
    "ApiResponse",
    "Credentials",
    "PayloadMetadata",
    "RetryConfig",
    "WebhookPayload",
]
