"""
Module: test_retry.py
Description: Unit tests for the delivery retry policy.

Tests the backoff function and the tenacity controller built from a
RetryConfig, independently of any HTTP traffic.
"""

import pytest
from tenacity import RetryError

from speaker_notify.delivery.errors import DeliveryError, TransportError
from speaker_notify.delivery.retry import (
    DEFAULT_BASE_DELAY_MS,
    delivery_retrying,
    get_retry_delay,
    wait_retry_delay,
)
from speaker_notify.models import RetryConfig


class TestGetRetryDelay:
    """Test cases for exponential backoff."""

    def test_default_base(self):
        """Default base doubles from one second."""
        assert DEFAULT_BASE_DELAY_MS == 1000
        assert get_retry_delay(0) == 1000
        assert get_retry_delay(1) == 2000
        assert get_retry_delay(2) == 4000
        assert get_retry_delay(3) == 8000

    def test_custom_base(self):
        assert get_retry_delay(0, 500) == 500
        assert get_retry_delay(1, 500) == 1000
        assert get_retry_delay(2, 500) == 2000

    def test_no_cap(self):
        assert get_retry_delay(20) == 1000 * 2 ** 20

    def test_negative_attempt_rejected(self):
        with pytest.raises(ValueError):
            get_retry_delay(-1)


class TestRetryController:
    """Test cases for the tenacity controller."""

    def test_wait_strategy_uses_prior_retry_count(self):
        class State:
            attempt_number = 3

        assert wait_retry_delay(250)(State()) == 1.0

    @pytest.mark.asyncio
    async def test_stops_after_total_attempts(self, fake_sleep):
        attempts = 0
        retrying = delivery_retrying(RetryConfig(max_retries=2), sleep=fake_sleep)

        with pytest.raises(RetryError) as exc_info:
            async for attempt in retrying:
                with attempt:
                    attempts += 1
                    raise TransportError("boom")

        assert attempts == 3
        assert isinstance(exc_info.value.last_attempt.exception(), DeliveryError)
        assert fake_sleep.calls == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_non_delivery_errors_not_retried(self, fake_sleep):
        attempts = 0
        retrying = delivery_retrying(RetryConfig(max_retries=5), sleep=fake_sleep)

        with pytest.raises(KeyError):
            async for attempt in retrying:
                with attempt:
                    attempts += 1
                    raise KeyError("bug")

        assert attempts == 1
        assert fake_sleep.calls == []

    @pytest.mark.asyncio
    async def test_before_sleep_only_between_attempts(self, fake_sleep):
        seen = []
        retrying = delivery_retrying(
            RetryConfig(max_retries=1),
            sleep=fake_sleep,
            before_sleep=lambda state: seen.append(state.attempt_number),
        )

        with pytest.raises(RetryError):
            async for attempt in retrying:
                with attempt:
                    raise TransportError("boom")

        assert seen == [1]
