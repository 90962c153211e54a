"""
Package: config
Description: Configuration for the speaker notify action.

Provides pydantic-settings models for the action inputs and
logging options, both read from the environment.
"""

from .settings import ActionInputs, LoggingSettings

__all__ = [
    "ActionInputs",
    "LoggingSettings",
]
