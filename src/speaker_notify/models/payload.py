"""
Module: payload.py
Description: Webhook payload models for the speaker notify action.

Defines the JSON body POSTed to the speaker webhook service. The delivery
client treats a payload as opaque and only serializes it.

Key Components:
- PayloadMetadata: Repository and workflow context
- WebhookPayload: Message plus optional metadata and custom object

Dependencies: pydantic, typing
Author: Speaker Notify Team
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, ConfigDict


class PayloadMetadata(BaseModel):
    """
    Workflow context attached to a notification.

    Attributes:
        owner: Repository owner (only when include_owner is enabled)
        repository: Repository name without the owner
        workflow: Workflow name
    """

    model_config = ConfigDict(validate_assignment=True)

    owner: Optional[str] = Field(
        default=None,
        description="GitHub owner of the repository"
    )
    repository: str = Field(..., description="Repository name")
    workflow: str = Field(..., description="Workflow name")


class WebhookPayload(BaseModel):
    """
    Webhook payload sent to the speaker service.

    Fields left unset are omitted from the serialized body, so a payload
    without metadata or custom data is just ``{"message": ...}``.

    Attributes:
        message: Text the speaker announces
        metadata: Optional workflow context
        custom: Optional arbitrary JSON object supplied by the user
    """

    model_config = ConfigDict(validate_assignment=True)

    message: str = Field(..., description="Message to announce")
    metadata: Optional[PayloadMetadata] = Field(
        default=None,
        description="Workflow context"
    )
    custom: Optional[Dict[str, Any]] = Field(
        default=None,
        description="User-supplied JSON object"
    )

    def to_body(self) -> Dict[str, Any]:
        """Return the JSON-ready body, leaving out fields that were never set."""
        return self.model_dump(mode="json", exclude_unset=True)
