"""
Module: response.py
Description: Response model for the speaker webhook service.

The service answers a successful POST with a small JSON object. Field
presence is not enforced; whatever the service returns is kept.
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class ApiResponse(BaseModel):
    """
    Parsed body of a successful webhook response.

    Attributes:
        status: Processing status reported by the service (e.g., 'processed')
        message: Message the service accepted
        notification_sent: Whether the speaker announced the message
    """

    model_config = ConfigDict(extra="allow")

    status: Optional[str] = Field(default=None, description="Processing status")
    message: Optional[str] = Field(default=None, description="Accepted message")
    notification_sent: Optional[bool] = Field(
        default=None,
        description="Whether the notification was played"
    )
