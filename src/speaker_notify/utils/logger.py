"""
Module: logger.py
Description: Structured logging configuration for the speaker notify action.

Configures structlog so log lines render as GitHub Actions workflow
commands (::debug::, ::warning::, ::error::) and the runner annotates
them, or as JSON lines when running outside a workflow.

Key Components:
- Timestamp and log level processors
- Workflow command renderer for the Actions runner
- configure_logging() to (re)apply settings
- get_logger() helper function

Dependencies: structlog, datetime, logging
Author: Speaker Notify Team
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import structlog
from pydantic import ValidationError

from speaker_notify.config.settings import LoggingSettings

# Levels that the runner turns into annotations
_WORKFLOW_COMMANDS = {
    "debug": "debug",
    "warning": "warning",
    "error": "error",
    "critical": "error",
}

# Keys added by our own processors, never rendered as key=value pairs
_RESERVED_KEYS = ("event", "level", "timestamp", "logger")


def _add_timestamp(logger, method_name, event_dict):
    """
    Add ISO 8601 timestamp to log entries.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Current log event dictionary

    Returns:
        Updated event dictionary with timestamp
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    return event_dict


def _add_log_level(logger, method_name, event_dict):
    """Add log level to event dictionary."""
    event_dict["level"] = method_name.upper()
    return event_dict


def _escape_command_data(value: str) -> str:
    # Same escaping the runner expects for workflow command data
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def render_workflow_command(logger, method_name, event_dict: Dict[str, Any]) -> str:
    """
    Render an event as a GitHub Actions workflow command line.

    Info lines are printed as plain text. Debug, warning and error lines
    are prefixed with the matching ``::command::`` so the runner can
    collapse or annotate them. Extra context is appended as key=value pairs.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Current log event dictionary

    Returns:
        Single rendered line
    """
    text = str(event_dict.get("event", ""))
    context = " ".join(
        f"{key}={value}"
        for key, value in event_dict.items()
        if key not in _RESERVED_KEYS
    )
    if context:
        text = f"{text} ({context})"

    command = _WORKFLOW_COMMANDS.get(method_name)
    if command is None:
        return text
    return f"::{command}::{_escape_command_data(text)}"


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure structlog for the action.

    Called once at import time with settings read from the environment.
    Tests and the entry point may call it again to apply other settings.
    Invalid environment settings never raise: the defaults are applied
    and a warning is logged, so the action still runs.

    Args:
        settings: Logging settings (defaults to environment-derived settings)
    """
    invalid: Optional[ValidationError] = None
    if settings is None:
        try:
            settings = LoggingSettings()
        except ValidationError as e:
            invalid = e
            settings = LoggingSettings.model_construct()

    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = render_workflow_command

    structlog.configure(
        processors=[
            _add_timestamp,
            _add_log_level,
            # Add exception information
            structlog.processors.format_exc_info,
            renderer,
        ],
        # Actions runner reads workflow commands from stdout
        logger_factory=structlog.PrintLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.effective_level)
        ),
        cache_logger_on_first_use=False,
    )

    if invalid is not None:
        reasons = "; ".join(error["msg"] for error in invalid.errors())
        structlog.get_logger(__name__).warning(
            f"Invalid logging settings, using defaults: {reasons}",
            error_count=invalid.error_count(),
        )


configure_logging()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.warning("Attempt 1 failed: HTTP 500", attempt=1)
        ::warning::Attempt 1 failed: HTTP 500 (attempt=1)
    """
    return structlog.get_logger(name)
