"""
Module: action.py
Description: Entry point of the speaker notify GitHub Action.

Reads the action inputs, resolves the message, builds the payload and
delivers it to the speaker webhook. A failed notification is reported
as a warning and a 'failed' status output; it never fails the workflow.
"""

import asyncio
from typing import Optional

import httpx

from speaker_notify.config.settings import ActionInputs
from speaker_notify.delivery.client import send_notification
from speaker_notify.utils.actions import GitHubContext, set_output
from speaker_notify.utils.logger import get_logger
from speaker_notify.utils.message import build_payload, resolve_message

logger = get_logger(__name__)


async def run(http_client: Optional[httpx.AsyncClient] = None) -> bool:
    """
    Run the action once.

    Args:
        http_client: Optional httpx client, used by tests

    Returns:
        True if the notification was delivered, False otherwise
    """
    try:
        inputs = ActionInputs()
        logger.info(f"Job status: {inputs.job_status}")

        message = resolve_message(inputs)
        logger.info(f"Resolved message: {message}")

        payload = build_payload(message, inputs, GitHubContext())
        logger.debug(f"Final payload: {payload.model_dump_json(exclude_unset=True, indent=2)}")

        response = await send_notification(
            inputs.webhook_url,
            payload,
            inputs.credentials(),
            inputs.retry_config(),
            http_client=http_client,
        )

        set_output("status", "success")
        set_output("response", response.model_dump_json(exclude_unset=True))
        set_output("message_sent", message)

        logger.info("Notification sent successfully")
        return True

    except Exception as e:
        # Notification is best effort; the workflow carries on
        logger.warning(f"Failed to send notification: {e}", error_type=type(e).__name__)
        set_output("status", "failed")
        return False


def main() -> int:
    """Console script entry point; always exits 0."""
    asyncio.run(run())
    return 0
