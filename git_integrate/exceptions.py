"""Custom exception hierarchy for git-integrate.

This module defines a structured exception hierarchy so that library code can
raise precise errors and the command-line entry point can map each of them
to a message and an exit code in one place.

Exception Hierarchy:
    GitIntegrateError (base)
    ├── ConfigurationError
    │   ├── CredentialNotFoundError
    │   └── GitDiscoveryError (see git_integrate.git.exceptions)
    ├── QueryError
    └── GitOperationError
        ├── FetchError
        ├── CheckoutError
        └── IntegrationHalt
            ├── MergeConflictError
            └── MergeCommitError

Example Usage:
    >>> from git_integrate.exceptions import ConfigurationError
    >>> try:
    ...     settings = IntegrateSettings()
    ... except ValidationError as e:
    ...     raise ConfigurationError(f"Invalid settings: {e}") from e
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from git_integrate.engine.types import IntegrationRun


class GitIntegrateError(Exception):
    """Base exception for all git-integrate errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(GitIntegrateError):
    """Configuration-related errors.

    Raised before any network or repository side effect takes place.

    Examples:
        - Invalid GIT_INTEGRATE_* environment values
        - Remote URL cannot be turned into an owner/name pair
        - Authentication token missing
    """

    pass


class CredentialNotFoundError(ConfigurationError):
    """The GitHub token is missing from both the environment and git config.

    Attributes:
        key: The git configuration key that was looked up
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(
            f"Could not find {key} in any git configuration file\n"
            f"Suggestion: git config --global {key} <token>"
        )


class QueryError(GitIntegrateError):
    """The pull request query failed at the transport or authentication level.

    Attributes:
        message: Error message without the status suffix
        status_code: HTTP status code (if a response was received)
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize exception.

        Args:
            message: Error message
            status_code: HTTP status code (if applicable)
        """
        self.status_code = status_code

        full_message = message
        if status_code:
            full_message = f"{message} (HTTP {status_code})"

        super().__init__(full_message)
        self.message = message


class GitOperationError(GitIntegrateError):
    """Git operation errors.

    Raised when a git command cannot be run or reports failure while
    preparing or integrating the destination branch.
    """

    pass


class FetchError(GitOperationError):
    """Fetching from the remotes failed."""

    def __init__(self) -> None:
        super().__init__("Error fetching from remote")


class CheckoutError(GitOperationError):
    """The destination branch could not be reset to the base branch.

    Attributes:
        branch: Destination branch name
    """

    def __init__(self, branch: str) -> None:
        self.branch = branch
        super().__init__(f"Could not checkout branch {branch}")


class IntegrationHalt(GitOperationError):
    """Base class for failures that stop a run part way through the branch list.

    Attributes:
        branch: The source branch being merged when the run stopped
        run: The integration run, with the outcomes recorded so far
    """

    def __init__(self, message: str, branch: str, run: IntegrationRun) -> None:
        self.branch = branch
        self.run = run
        super().__init__(message)


class MergeConflictError(IntegrationHalt):
    """A merge left unmerged paths in the working tree.

    This is an expected stop: the operator resolves the conflict or aborts
    the merge by hand.
    """

    GUIDANCE = (
        "Merge conflict detected, either fix the conflict and\n"
        "use `git commit --no-edit` to commit this merge or use\n"
        "`git merge --abort` to quit this merge"
    )

    def __init__(self, branch: str, run: IntegrationRun) -> None:
        super().__init__(f"Merge conflict merging branch {branch}", branch, run)

    @property
    def guidance(self) -> str:
        """Operator instructions for leaving the conflicted state."""
        return self.GUIDANCE


class MergeCommitError(IntegrationHalt):
    """Committing a merge that reported no conflicts failed."""

    def __init__(self, branch: str, run: IntegrationRun) -> None:
        super().__init__(f"Failure merging branch {branch}", branch, run)
