"""Git discovery exceptions.

This module defines the exceptions raised while locating the repository,
its remote and the remote's owner/name. All of them inherit from
GitDiscoveryError and include a hint for resolution. They are configuration
failures: nothing has been fetched or merged when they are raised.

Example:
    >>> from git_integrate.git.exceptions import NotGitRepositoryError
    >>> raise NotGitRepositoryError("/tmp/not-a-repo")
    Traceback (most recent call last):
        ...
    NotGitRepositoryError: Not a Git repository: /tmp/not-a-repo

    Hint: Run 'git init' or navigate to a Git repository directory.
"""

from git_integrate.exceptions import ConfigurationError


class GitDiscoveryError(ConfigurationError):
    """Base exception for Git discovery errors.

    Attributes:
        message: Error message
        hint: Optional hint for resolution
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        """Initialize exception.

        Args:
            message: Error message
            hint: Optional hint for resolution
        """
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        """Format error message with hint.

        Returns:
            Formatted error message with optional hint
        """
        if self.hint:
            return f"{self.message}\n\nHint: {self.hint}"
        return self.message


class NotGitRepositoryError(GitDiscoveryError):
    """Raised when directory is not a Git repository.

    Attributes:
        path: Path to the directory that is not a Git repository
    """

    def __init__(self, path: str) -> None:
        super().__init__(
            message=f"Not a Git repository: {path}",
            hint="Run 'git init' or navigate to a Git repository directory.",
        )
        self.path = path


class RemoteNotFoundError(GitDiscoveryError):
    """Raised when the requested remote is not configured.

    Attributes:
        remote_name: The remote that was looked up
        available: Names of the remotes that do exist
    """

    def __init__(self, remote_name: str, available: list[str]) -> None:
        listing = ", ".join(f"'{name}'" for name in available) or "none"
        super().__init__(
            message=f"Remote '{remote_name}' not found (available: {listing})",
            hint=f"Add it with: git remote add {remote_name} <url>",
        )
        self.remote_name = remote_name
        self.available = available


class InvalidGitUrlError(GitDiscoveryError):
    """Raised when a remote URL does not yield an owner and a repository name.

    Attributes:
        url: The invalid URL
    """

    def __init__(self, url: str, reason: str | None = None) -> None:
        """Initialize exception.

        Args:
            url: The invalid URL
            reason: Optional reason for the error
        """
        msg = f"Could not build remote info from URL: {url!r}"
        if reason:
            msg += f" ({reason})"

        super().__init__(
            message=msg,
            hint=(
                "Expected formats:\n"
                "  - git@github.com:owner/repo.git\n"
                "  - https://github.com/owner/repo.git"
            ),
        )
        self.url = url
