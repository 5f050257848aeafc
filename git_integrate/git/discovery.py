"""Git repository discovery and configuration lookup.

This module locates the working copy that is about to be integrated, reads
the URL of its remote and derives the GitHub owner/name from it, and reads
the GitHub token from git's layered configuration (system, global and
repository files, as ``git config --get`` would).

Key Exports:
    GitDiscovery: Repository discovery operations.
    TOKEN_CONFIG_KEY: Git configuration key holding the GitHub token.

Example:
    >>> from git_integrate.git.discovery import GitDiscovery
    >>> discovery = GitDiscovery()
    >>> discovery.parse_repository("origin").full_name
    'owner/repo'
    >>> token = discovery.get_github_token()

Dependencies:
    Requires GitPython (gitpython) package for repository access.
"""

import configparser
from pathlib import Path

import git
import structlog
from git.exc import InvalidGitRepositoryError, NoSuchPathError

from git_integrate.exceptions import CredentialNotFoundError
from git_integrate.git.exceptions import NotGitRepositoryError, RemoteNotFoundError
from git_integrate.git.models import RepositoryIdentity
from git_integrate.git.parser import parse_remote_url

log = structlog.get_logger(__name__)

TOKEN_CONFIG_KEY = "integrate.github-token"


class GitDiscovery:
    """Discovers repository configuration from a local working copy.

    The git.Repo object is created lazily on first use so that an instance
    can be built before the path is validated.

    Attributes:
        repo_path: Resolved absolute path the search starts from.
    """

    def __init__(self, repo_path: str | Path = ".") -> None:
        """Initialize Git discovery for a repository path.

        Args:
            repo_path: Any path within the repository; parent directories
                are searched automatically. Default is current directory.
        """
        self.repo_path = Path(repo_path).resolve()
        self._repo: git.Repo | None = None

    def _get_repo(self) -> git.Repo:
        """Get the Git repository object, initializing if needed.

        Raises:
            NotGitRepositoryError: If the path is not within a Git repository.
        """
        if self._repo is None:
            try:
                self._repo = git.Repo(self.repo_path, search_parent_directories=True)
            except (InvalidGitRepositoryError, NoSuchPathError) as e:
                raise NotGitRepositoryError(str(self.repo_path)) from e

        return self._repo

    @property
    def working_dir(self) -> Path:
        """Top-level directory of the working copy."""
        working_tree = self._get_repo().working_tree_dir
        if working_tree is None:
            raise NotGitRepositoryError(str(self.repo_path))
        return Path(working_tree)

    def get_remote_url(self, remote_name: str = "origin") -> str | None:
        """Return the configured URL of a remote.

        Args:
            remote_name: Name of the remote.

        Returns:
            The remote URL, or None if the remote has no URL entry.

        Raises:
            NotGitRepositoryError: If not within a Git repository.
            RemoteNotFoundError: If the remote is not configured.
        """
        repo = self._get_repo()

        for remote in repo.remotes:
            if remote.name == remote_name:
                try:
                    return remote.url
                except (configparser.NoSectionError, configparser.NoOptionError):
                    return None

        raise RemoteNotFoundError(remote_name, [r.name for r in repo.remotes])

    def parse_repository(self, remote_name: str = "origin") -> RepositoryIdentity:
        """Derive the GitHub repository identity from a remote.

        Raises:
            NotGitRepositoryError: If not within a Git repository.
            RemoteNotFoundError: If the remote is not configured.
            InvalidGitUrlError: If the remote URL is missing or malformed.
        """
        url = self.get_remote_url(remote_name)
        identity = parse_remote_url(url)
        log.debug("repository_discovered", remote=remote_name, url=url, repository=identity.full_name)
        return identity

    def get_config_value(self, key: str) -> str | None:
        """Read a value from git's layered configuration.

        Args:
            key: Dotted key such as ``integrate.github-token``. Everything up
                to the last dot is the section.

        Returns:
            The value, or None when the key is not set at any level.
        """
        section, _, option = key.rpartition(".")
        if not section:
            raise ValueError(f"Configuration key must contain a section: {key!r}")

        reader = self._get_repo().config_reader()
        try:
            # get() returns the raw string; get_value() would coerce "0123" to 123
            return reader.get(section, option)
        except (configparser.NoSectionError, configparser.NoOptionError):
            return None

    def get_github_token(self, key: str = TOKEN_CONFIG_KEY) -> str:
        """Read the GitHub token from git configuration.

        Raises:
            CredentialNotFoundError: If the token is not configured or empty.
        """
        token = self.get_config_value(key)
        if token is None or not token.strip():
            raise CredentialNotFoundError(key)

        log.debug("github_token_loaded", source="git-config", key=key)
        return token.strip()
