"""Configuration for git-integrate."""

from git_integrate.config.settings import IntegrateSettings

__all__ = ["IntegrateSettings"]
