"""
Module: actions.py
Description: GitHub Actions runner integration.

Reads the workflow run context the runner exports and writes step
outputs back through the GITHUB_OUTPUT file.

Key Components:
- GitHubContext: Repository and workflow of the current run
- set_output(): Publish a step output

Dependencies: pydantic-settings, uuid, os
Author: Speaker Notify Team
"""

import os
import sys
import uuid

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from speaker_notify.utils.logger import get_logger

logger = get_logger(__name__)


class GitHubContext(BaseSettings):
    """Workflow run context loaded from GITHUB_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_",
        case_sensitive=False,
        extra="ignore"
    )

    repository: str = Field(..., description="owner/repo of the running workflow")
    workflow: str = Field(default="", description="Workflow name")

    @field_validator('repository')
    @classmethod
    def validate_repository(cls, v: str) -> str:
        """Validate repository is in owner/repo form."""
        owner, sep, repo = v.partition('/')
        if not sep or not owner or not repo:
            raise ValueError("GITHUB_REPOSITORY must look like 'owner/repo'")
        return v

    @property
    def owner(self) -> str:
        """Repository owner."""
        return self.repository.split('/', 1)[0]

    @property
    def repo(self) -> str:
        """Repository name without the owner."""
        return self.repository.split('/', 1)[1]


def set_output(name: str, value: str) -> None:
    """
    Publish a step output.

    Appends to the file named by GITHUB_OUTPUT using the delimiter form,
    which is safe for multi-line values. Outside a runner, falls back to
    the legacy set-output workflow command on stdout.

    Args:
        name: Output name declared in action.yml
        value: Output value
    """
    output_path = os.environ.get("GITHUB_OUTPUT")
    if not output_path:
        sys.stdout.write(f"::set-output name={name}::{value}\n")
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ValueError(f"Unexpected input: value must not contain the delimiter {delimiter}")

    with open(output_path, "a", encoding="utf-8") as handle:
        handle.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")

    logger.debug("Step output set", name=name)
