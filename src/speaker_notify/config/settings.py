"""
Module: settings.py
Description: Action configuration using pydantic-settings.

Reads the action inputs the Actions runner exports as INPUT_* environment
variables, plus logging options, with validation and defaults.
"""

from typing import Any, Literal, Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from speaker_notify.models.delivery import Credentials, RetryConfig


class ActionInputs(BaseSettings):
    """Action inputs loaded from INPUT_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        case_sensitive=False,
        extra="ignore"
    )

    # Delivery target
    webhook_url: str = Field(
        ...,
        min_length=1,
        description="Base URL of the speaker webhook service"
    )

    # Credentials
    api_secret: Optional[str] = Field(default=None, description="Shared secret sent as X-API-Key")
    cf_client_id: Optional[str] = Field(default=None, description="Cloudflare Access client id")
    cf_client_secret: Optional[str] = Field(default=None, description="Cloudflare Access client secret")

    # Message selection
    message: Optional[str] = Field(default=None, description="Generic message")
    success_message: Optional[str] = Field(default=None, description="Message used when the job succeeded")
    failure_message: Optional[str] = Field(default=None, description="Message used when the job failed or was cancelled")
    job_status: str = Field(
        default="success",
        min_length=1,
        description="Status of the job being reported (success, failure, cancelled, ...)"
    )

    # Payload options
    custom_payload: Optional[str] = Field(
        default=None,
        description="JSON object text merged under the payload's custom field"
    )
    include_owner: bool = Field(default=False, description="Include the repository owner in metadata")

    # Delivery settings
    timeout: int = Field(
        default=10000,
        gt=0,
        description="Per-attempt HTTP timeout in milliseconds"
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        description="Additional attempts after the first one"
    )

    @field_validator('*', mode='before')
    @classmethod
    def empty_input_as_unset(cls, v: Any, info: ValidationInfo) -> Any:
        """The runner exports unset inputs as empty strings; fall back to the default."""
        if isinstance(v, str) and not v.strip():
            field = cls.model_fields[info.field_name]
            if field.is_required():
                return v
            return field.get_default()
        return v

    @field_validator('job_status', mode='before')
    @classmethod
    def normalize_job_status(cls, v: Any) -> Any:
        """Accept job status in any case, as ${{ job.status }} is lowercase but users type otherwise."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def credentials(self) -> Credentials:
        """Build delivery credentials from the inputs."""
        return Credentials(
            api_secret=self.api_secret,
            cf_access_client_id=self.cf_client_id,
            cf_access_client_secret=self.cf_client_secret,
        )

    def retry_config(self) -> RetryConfig:
        """Build the retry configuration from the inputs."""
        return RetryConfig(max_retries=self.max_retries, timeout_ms=self.timeout)


class LoggingSettings(BaseSettings):
    """Logging options loaded from SPEAKER_NOTIFY_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SPEAKER_NOTIFY_",
        case_sensitive=False,
        extra="ignore"
    )

    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["actions", "json"] = Field(
        default="actions",
        description="Render workflow commands or JSON lines"
    )
    runner_debug: bool = Field(
        default=False,
        validation_alias="RUNNER_DEBUG",
        description="Set by the runner when step debug logging is enabled"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @property
    def effective_level(self) -> str:
        """Level to filter at, lowered to DEBUG when the runner asks for it."""
        if self.runner_debug:
            return "DEBUG"
        return self.log_level
