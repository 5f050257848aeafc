"""
Configuration using pydantic-settings.

Settings come from ``GIT_INTEGRATE_*`` environment variables; the GitHub
token additionally falls back to the ``integrate.github-token`` git
configuration key (see git_integrate.git.discovery).
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from git_integrate.exceptions import ConfigurationError
from git_integrate.github.client import DEFAULT_API_URL

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class IntegrateSettings(BaseSettings):
    """Runtime settings for an integration run."""

    model_config = SettingsConfigDict(
        env_prefix="GIT_INTEGRATE_",
        case_sensitive=False,
    )

    github_token: SecretStr | None = Field(
        default=None, description="GitHub token; overrides the integrate.github-token git config key"
    )
    api_url: str = Field(default=DEFAULT_API_URL, description="GitHub GraphQL endpoint")
    remote: str = Field(default="origin", min_length=1, description="Remote holding the pull request branches")
    base_branch: str = Field(default="master", min_length=1, description="Remote branch the destination is reset to")
    log_level: LogLevel = Field(default="WARNING", description="Minimum structlog level")
    http_timeout: float | None = Field(default=None, gt=0, description="HTTP timeout in seconds, unset for none")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @classmethod
    def load(cls, **overrides: object) -> IntegrateSettings:
        """Build settings from the environment plus explicit overrides.

        Overrides whose value is None are ignored, so unset CLI options
        leave the environment value in place.

        Raises:
            ConfigurationError: If a value is invalid.
        """
        values = {key: value for key, value in overrides.items() if value is not None}
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def token_value(self) -> str | None:
        """Plain-text token from the environment, if set and non-blank."""
        if self.github_token is None:
            return None
        token = self.github_token.get_secret_value().strip()
        return token or None
