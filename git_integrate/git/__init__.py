"""Local repository access.

This package locates the working copy and its remote, derives the GitHub
repository identity from the remote URL, reads the GitHub token from git
configuration, and runs the git operations an integration is made of.

Example:
    >>> from git_integrate.git import GitDiscovery, GitRepositoryAccessor
    >>> discovery = GitDiscovery()
    >>> identity = discovery.parse_repository("origin")
    >>> accessor = GitRepositoryAccessor(discovery.working_dir)

Error Handling:
    Discovery exceptions inherit from GitDiscoveryError and include a hint
    for resolution.
"""

from git_integrate.git.accessor import GitRepositoryAccessor, RepositoryAccessor
from git_integrate.git.discovery import TOKEN_CONFIG_KEY, GitDiscovery
from git_integrate.git.exceptions import (
    GitDiscoveryError,
    InvalidGitUrlError,
    NotGitRepositoryError,
    RemoteNotFoundError,
)
from git_integrate.git.models import RepositoryIdentity
from git_integrate.git.parser import GitUrlParser, parse_remote_url

__all__ = [
    # Discovery
    "GitDiscovery",
    "TOKEN_CONFIG_KEY",
    # Accessor
    "RepositoryAccessor",
    "GitRepositoryAccessor",
    # Parser
    "GitUrlParser",
    "parse_remote_url",
    # Models
    "RepositoryIdentity",
    # Exceptions
    "GitDiscoveryError",
    "NotGitRepositoryError",
    "RemoteNotFoundError",
    "InvalidGitUrlError",
]
