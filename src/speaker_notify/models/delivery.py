"""
Module: delivery.py
Description: Delivery inputs for the webhook client.

Key Components:
- Credentials: Optional shared secret and Cloudflare Access service token
- RetryConfig: Attempt bound, per-attempt timeout and backoff base

Dependencies: pydantic, typing
Author: Speaker Notify Team
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class Credentials(BaseModel):
    """
    Secrets injected into request headers.

    Each value is optional; an absent or empty value means the matching
    header is not sent. The Cloudflare Access pair is not checked for
    completeness, each half is emitted on its own.

    Attributes:
        api_secret: Shared secret sent as X-API-Key
        cf_access_client_id: Sent as CF-Access-Client-Id
        cf_access_client_secret: Sent as CF-Access-Client-Secret
    """

    model_config = ConfigDict(frozen=True)

    api_secret: Optional[str] = None
    cf_access_client_id: Optional[str] = None
    cf_access_client_secret: Optional[str] = None

    def __repr__(self) -> str:
        # Never leak secret values into logs
        present = [name for name, value in self if value]
        return f"Credentials(present={present})"


class RetryConfig(BaseModel):
    """
    Bounds for one delivery.

    Attributes:
        max_retries: Additional attempts after the first (total = max_retries + 1)
        timeout_ms: Deadline for each individual attempt, in milliseconds
        base_delay_ms: Backoff base; the delay before retry k is base * 2**(k-1)
    """

    model_config = ConfigDict(frozen=True)

    max_retries: int = Field(default=2, ge=0, description="Additional attempts")
    timeout_ms: int = Field(default=10000, gt=0, description="Per-attempt timeout in ms")
    base_delay_ms: int = Field(default=1000, ge=0, description="Backoff base delay in ms")

    @property
    def total_attempts(self) -> int:
        """Total number of attempts permitted."""
        return self.max_retries + 1
