"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here — no scattered magic strings.
"""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from errorpage.domain.dispatch.exception_strategy import (
    DEFAULT_EXCEPTION_MESSAGE,
    DEFAULT_EXCEPTION_TEMPLATE,
)
from errorpage.domain.dispatch.message_template import MessageTemplate


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        environment: Deployment environment, forwarded to Sentry.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit_default: Default rate limit for all endpoints.
        display_exceptions: Show the raw exception on error pages.
        default_exception_message: Error page message; one ``%s`` slot
            receives the Sentry event id. Validated at load time.
        exception_template: Template name used for the error page.
        sentry_dsn: Sentry DSN. Reporting is disabled when unset.
        sentry_traces_sample_rate: Fraction of transactions traced.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "errorpage"
    version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"
    rate_limit_default: str = "60/minute"

    # Error page policy
    display_exceptions: bool = False
    default_exception_message: str = DEFAULT_EXCEPTION_MESSAGE
    exception_template: str = DEFAULT_EXCEPTION_TEMPLATE

    # Error tracking
    sentry_dsn: Optional[str] = None
    sentry_traces_sample_rate: float = 0.0

    @field_validator("default_exception_message")
    @classmethod
    def _check_message_template(cls, value: str) -> str:
        # Raises InvalidMessageTemplateError (a ValueError) on a bad template.
        MessageTemplate(value)
        return value

    @field_validator("exception_template")
    @classmethod
    def _check_exception_template(cls, value: str) -> str:
        if not value.strip():
            msg = "exception_template must not be empty"
            raise ValueError(msg)
        return value

    @field_validator("sentry_traces_sample_rate")
    @classmethod
    def _check_sample_rate(cls, value: float) -> float:
        if not 0.0 <= value <= 1.0:
            msg = f"sentry_traces_sample_rate must be between 0 and 1, got {value}"
            raise ValueError(msg)
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
