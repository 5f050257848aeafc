"""Tests for the git-integrate exception hierarchy."""

import pytest

from git_integrate.engine.types import IntegrationRun
from git_integrate.exceptions import (
    CheckoutError,
    ConfigurationError,
    CredentialNotFoundError,
    FetchError,
    GitIntegrateError,
    GitOperationError,
    IntegrationHalt,
    MergeCommitError,
    MergeConflictError,
    QueryError,
)
from git_integrate.git.exceptions import (
    GitDiscoveryError,
    InvalidGitUrlError,
    NotGitRepositoryError,
    RemoteNotFoundError,
)


class TestHierarchy:
    """Every error can be caught as GitIntegrateError."""

    @pytest.mark.parametrize(
        ("error_class", "parent"),
        [
            (ConfigurationError, GitIntegrateError),
            (CredentialNotFoundError, ConfigurationError),
            (GitDiscoveryError, ConfigurationError),
            (NotGitRepositoryError, GitDiscoveryError),
            (RemoteNotFoundError, GitDiscoveryError),
            (InvalidGitUrlError, GitDiscoveryError),
            (QueryError, GitIntegrateError),
            (FetchError, GitOperationError),
            (CheckoutError, GitOperationError),
            (IntegrationHalt, GitOperationError),
            (MergeConflictError, IntegrationHalt),
            (MergeCommitError, IntegrationHalt),
        ],
    )
    def test_inheritance(self, error_class, parent):
        assert issubclass(error_class, parent)


class TestMessages:
    """Tests for exception messages and attributes."""

    def test_query_error_with_status(self):
        error = QueryError("GitHub API request failed", status_code=502)

        assert str(error) == "GitHub API request failed (HTTP 502)"
        assert error.message == "GitHub API request failed"
        assert error.status_code == 502

    def test_query_error_without_status(self):
        error = QueryError("connection refused")

        assert str(error) == "connection refused"
        assert error.status_code is None

    def test_credential_not_found_names_key(self):
        error = CredentialNotFoundError("integrate.github-token")

        assert "integrate.github-token" in str(error)
        assert "git config --global integrate.github-token" in str(error)
        assert error.key == "integrate.github-token"

    def test_checkout_error_names_branch(self):
        error = CheckoutError("release")

        assert error.message == "Could not checkout branch release"
        assert error.branch == "release"

    def test_merge_conflict_carries_run_and_guidance(self):
        run = IntegrationRun(destination_branch="release", source_branches=["a", "b"])
        error = MergeConflictError("a", run)

        assert error.run is run
        assert error.branch == "a"
        assert "git commit --no-edit" in error.guidance
        assert "git merge --abort" in error.guidance

    def test_merge_commit_error_names_branch(self):
        run = IntegrationRun(destination_branch="release")
        error = MergeCommitError("feature/x", run)

        assert error.message == "Failure merging branch feature/x"

    def test_discovery_error_formats_hint(self):
        error = NotGitRepositoryError("/tmp/nowhere")

        assert str(error) == (
            "Not a Git repository: /tmp/nowhere\n\nHint: Run 'git init' or navigate to a Git repository directory."
        )
        assert error.message == "Not a Git repository: /tmp/nowhere"

    def test_remote_not_found_lists_available(self):
        error = RemoteNotFoundError("origin", ["upstream", "fork"])

        assert "'upstream', 'fork'" in error.message
        assert error.hint == "Add it with: git remote add origin <url>"

    def test_remote_not_found_without_remotes(self):
        error = RemoteNotFoundError("origin", [])

        assert "available: none" in error.message
