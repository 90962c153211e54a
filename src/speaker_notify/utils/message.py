"""
Module: message.py
Description: Message resolution and payload building.

Turns the action inputs and the workflow run context into the payload
handed to the delivery client.

Key Components:
- resolve_message(): Pick the message for the job status
- build_payload(): Assemble message, metadata and custom data
- parse_custom_payload(): Validate the user-supplied JSON object

Author: Speaker Notify Team
"""

import json
from typing import Any, Dict

from speaker_notify.config.settings import ActionInputs
from speaker_notify.delivery.errors import PayloadError
from speaker_notify.models.payload import PayloadMetadata, WebhookPayload
from speaker_notify.utils.actions import GitHubContext


def resolve_message(inputs: ActionInputs) -> str:
    """
    Resolve the message to send based on job status and inputs.

    Priority: success_message/failure_message > message > generated default.
    A cancelled job uses the failure message.

    Args:
        inputs: Action inputs

    Returns:
        Message text
    """
    if inputs.job_status == "success" and inputs.success_message:
        return inputs.success_message

    if inputs.job_status in ("failure", "cancelled") and inputs.failure_message:
        return inputs.failure_message

    if inputs.message:
        return inputs.message

    return f"Workflow {inputs.job_status}"


def parse_custom_payload(text: str) -> Dict[str, Any]:
    """
    Parse the custom_payload input.

    Args:
        text: JSON text supplied by the user

    Returns:
        Parsed JSON object

    Raises:
        PayloadError: If the text is not valid JSON or not a JSON object
    """
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise PayloadError(f"Invalid custom_payload JSON: {e}") from e

    if not isinstance(value, dict):
        raise PayloadError(
            f"Invalid custom_payload JSON: expected an object, got {type(value).__name__}"
        )
    return value


def build_payload(
    message: str,
    inputs: ActionInputs,
    context: GitHubContext,
) -> WebhookPayload:
    """
    Build the webhook payload with message, metadata and custom fields.

    Args:
        message: Resolved message
        inputs: Action inputs (include_owner, custom_payload)
        context: Workflow run context

    Returns:
        Payload ready for delivery

    Raises:
        PayloadError: If custom_payload is malformed
    """
    metadata: Dict[str, Any] = {
        'repository': context.repo,
        'workflow': context.workflow,
    }
    if inputs.include_owner:
        metadata['owner'] = context.owner

    fields: Dict[str, Any] = {
        'message': message,
        'metadata': PayloadMetadata(**metadata),
    }

    if inputs.custom_payload:
        fields['custom'] = parse_custom_payload(inputs.custom_payload)

    return WebhookPayload(**fields)
