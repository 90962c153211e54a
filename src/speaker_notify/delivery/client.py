"""
Module: delivery/client.py
Description: Webhook delivery client for the speaker service.

Implements HTTP push delivery with a per-attempt timeout, exponential
backoff between attempts and classification of transient failures.
"""

import asyncio
import json
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Protocol, Union

import httpx
from pydantic import ValidationError
from tenacity import RetryCallState, RetryError

from speaker_notify.delivery.errors import (
    ExhaustionError,
    HttpStatusError,
    InvalidResponseError,
    RequestTimeoutError,
    TransportError,
)
from speaker_notify.delivery.retry import delivery_retrying
from speaker_notify.models.delivery import Credentials, RetryConfig
from speaker_notify.models.payload import WebhookPayload
from speaker_notify.models.response import ApiResponse
from speaker_notify.utils.logger import get_logger

logger = get_logger(__name__)

WEBHOOK_PATH = "/webhook/custom"
USER_AGENT = "xiaomi-speaker-action/1.0"

Payload = Union[WebhookPayload, Mapping[str, Any]]


class DeliveryReporter(Protocol):
    """Anything that accepts structlog-style calls; a bound logger qualifies."""

    def debug(self, event: str, **kw: Any) -> Any: ...

    def info(self, event: str, **kw: Any) -> Any: ...

    def warning(self, event: str, **kw: Any) -> Any: ...


def build_webhook_url(endpoint: str) -> str:
    """Strip one trailing slash from the endpoint and append the webhook path."""
    if endpoint.endswith("/"):
        endpoint = endpoint[:-1]
    return f"{endpoint}{WEBHOOK_PATH}"


def build_headers(credentials: Optional[Credentials] = None) -> Dict[str, str]:
    """
    Build request headers for a delivery.

    The Cloudflare Access headers are added independently of each other.

    Args:
        credentials: Optional secrets to include

    Returns:
        Header mapping, identical for every attempt
    """
    headers = {
        'Content-Type': 'application/json',
        'User-Agent': USER_AGENT,
    }
    if credentials is None:
        return headers

    if credentials.api_secret:
        headers['X-API-Key'] = credentials.api_secret
    if credentials.cf_access_client_id:
        headers['CF-Access-Client-Id'] = credentials.cf_access_client_id
    if credentials.cf_access_client_secret:
        headers['CF-Access-Client-Secret'] = credentials.cf_access_client_secret
    return headers


def _serialize(payload: Payload) -> Dict[str, Any]:
    if isinstance(payload, WebhookPayload):
        return payload.to_body()
    return dict(payload)


class DeliveryClient:
    """
    HTTP client for delivering notifications to the speaker webhook.

    Retries transport errors, timeouts and non-2xx responses the same way
    and gives up with ExhaustionError once every attempt has failed.

    Attributes:
        http_client: Optional shared httpx.AsyncClient; when omitted a client
            that follows redirects is opened and closed around each delivery
        reporter: Receives debug/info/warning notices
        sleep: Async sleep used between attempts (seconds)
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        reporter: Optional[DeliveryReporter] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.http_client = http_client
        self.reporter = reporter if reporter is not None else logger
        self.sleep = sleep

    async def deliver(
        self,
        endpoint: str,
        payload: Payload,
        credentials: Optional[Credentials],
        retry_config: RetryConfig,
    ) -> ApiResponse:
        """
        Deliver one payload to the webhook, retrying transient failures.

        Args:
            endpoint: Base URL of the webhook service
            payload: Finalized payload to serialize
            credentials: Optional header secrets
            retry_config: Attempt bound, per-attempt timeout and backoff base

        Returns:
            Parsed response of the first successful attempt

        Raises:
            ExhaustionError: If every permitted attempt failed
        """
        url = build_webhook_url(endpoint)
        headers = build_headers(credentials)
        body = _serialize(payload)

        self.reporter.debug(f"Sending request to: {url}")
        self.reporter.debug(f"Payload: {json.dumps(body, indent=2)}")

        if self.http_client is not None:
            return await self._deliver_with_retry(self.http_client, url, headers, body, retry_config)

        async with httpx.AsyncClient(follow_redirects=True) as client:
            return await self._deliver_with_retry(client, url, headers, body, retry_config)

    async def _deliver_with_retry(
        self,
        client: httpx.AsyncClient,
        url: str,
        headers: Dict[str, str],
        body: Dict[str, Any],
        config: RetryConfig,
    ) -> ApiResponse:
        retrying = delivery_retrying(
            config,
            sleep=self.sleep,
            before_sleep=lambda state: self._before_retry(state, config),
        )

        try:
            async for attempt in retrying:
                with attempt:
                    result = await self._attempt(client, url, headers, body, config.timeout_ms)
        except RetryError as exc:
            last_error = exc.last_attempt.exception()
            raise ExhaustionError(config.total_attempts, last_error) from last_error

        retries = attempt.retry_state.attempt_number - 1
        if retries > 0:
            self.reporter.info(f"Request succeeded on retry attempt {retries}", attempt=retries)
        return result

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        url: str,
        headers: Dict[str, str],
        body: Dict[str, Any],
        timeout_ms: int,
    ) -> ApiResponse:
        """Run a single POST bounded by a fresh deadline and classify the outcome."""
        # httpx's own timeout is disabled so the per-attempt deadline is the only one
        try:
            response = await asyncio.wait_for(
                client.post(url, json=body, headers=headers, timeout=None),
                timeout=timeout_ms / 1000,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise RequestTimeoutError(timeout_ms) from exc
        except httpx.HTTPError as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            raise HttpStatusError(response.status_code, response.reason_phrase, response.text)

        try:
            return ApiResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise InvalidResponseError(f"Invalid JSON response: {exc}") from exc

    def _before_retry(self, retry_state: RetryCallState, config: RetryConfig) -> None:
        failed_attempt = retry_state.attempt_number
        error = retry_state.outcome.exception()
        self.reporter.warning(
            f"Attempt {failed_attempt} failed: {error}",
            attempt=failed_attempt,
            error_type=type(error).__name__,
        )

        delay_ms = round(retry_state.next_action.sleep * 1000)
        self.reporter.info(
            f"Retry attempt {failed_attempt}/{config.max_retries} after {delay_ms}ms delay...",
            attempt=failed_attempt,
            delay_ms=delay_ms,
        )


async def send_notification(
    webhook_url: str,
    payload: Payload,
    credentials: Optional[Credentials],
    config: RetryConfig,
    http_client: Optional[httpx.AsyncClient] = None,
) -> ApiResponse:
    """
    Send a notification to the speaker webhook with the retry mechanism.

    Convenience wrapper around DeliveryClient for one-off deliveries.
    """
    client = DeliveryClient(http_client=http_client)
    return await client.deliver(webhook_url, payload, credentials, config)
