"""Git remote URL parsing.

This module turns the URL of a remote into the owner/name pair used to query
GitHub. Parsing is deliberately structural rather than host-aware: the URL is
split on ``/``, the last segment (minus a trailing ``.git``) is the repository
name and the segment before it is the owner. Any ``user@host:`` prefix glued
to the owner segment by the scp-like SSH syntax is dropped by splitting that
segment on ``:`` and keeping the last part.

Supported URL formats include:
    - git@github.com:owner/repo.git
    - https://github.com/owner/repo
    - ssh://git@github.com:22/owner/repo.git
    - /srv/mirrors/owner/repo.git

Example:
    >>> from git_integrate.git.parser import GitUrlParser
    >>> parser = GitUrlParser("git@github.com:owner/repo.git")
    >>> parser.owner, parser.name
    ('owner', 'repo')
    >>> parser.identity.full_name
    'owner/repo'
"""

from pydantic import ValidationError

from git_integrate.git.exceptions import InvalidGitUrlError
from git_integrate.git.models import RepositoryIdentity


class GitUrlParser:
    """Parser for Git remote URLs.

    The URL is parsed during initialization; an InvalidGitUrlError is raised
    if it does not contain both an owner and a repository name. Instances are
    immutable after initialization.

    Attributes:
        url: Original URL with surrounding whitespace removed.
    """

    def __init__(self, url: str) -> None:
        """Initialize parser with a remote URL.

        Args:
            url: Remote URL to parse. Leading/trailing whitespace and
                trailing slashes are ignored.

        Raises:
            InvalidGitUrlError: If the URL has no owner or no repository name.
        """
        self.url = url.strip()
        self._identity = self._parse()

    def _parse(self) -> RepositoryIdentity:
        segments = self.url.rstrip("/").split("/")

        # A URL without any "/" has a name but no owner segment
        if len(segments) < 2:
            raise InvalidGitUrlError(self.url, reason="missing owner segment")

        name = segments[-1].removesuffix(".git")
        owner = segments[-2].split(":")[-1]

        if not name:
            raise InvalidGitUrlError(self.url, reason="empty repository name")
        if not owner:
            raise InvalidGitUrlError(self.url, reason="empty owner")

        try:
            return RepositoryIdentity(owner=owner, name=name)
        except ValidationError as e:
            raise InvalidGitUrlError(self.url, reason="owner and name must not be blank") from e

    @property
    def owner(self) -> str:
        """Repository owner (the segment before the last one)."""
        return self._identity.owner

    @property
    def name(self) -> str:
        """Repository name without the .git suffix."""
        return self._identity.name

    @property
    def identity(self) -> RepositoryIdentity:
        """Parsed identity as an immutable model."""
        return self._identity


def parse_remote_url(url: str | None) -> RepositoryIdentity:
    """Derive the repository identity from a remote URL.

    Args:
        url: Remote URL, or None when the remote has no URL configured.

    Returns:
        RepositoryIdentity for the remote.

    Raises:
        InvalidGitUrlError: If the URL is missing or malformed.
    """
    if not url:
        raise InvalidGitUrlError(url or "", reason="remote has no URL")
    return GitUrlParser(url).identity
