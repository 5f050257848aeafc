"""Repository accessor: the git operations the integration run is built from.

The orchestrator only ever talks to the repository through the five
operations of the RepositoryAccessor protocol. Each returns a plain boolean;
the orchestrator decides what a failure means.

GitRepositoryAccessor is the real implementation. Commands run as blocking
``git`` subprocesses whose exit status is the only success signal. Their
output is not captured, so the operator sees git's own progress and conflict
reports. Conflicts are detected by asking git for unmerged index entries
through GitPython's command wrapper, which works with every index format.

Example:
    >>> accessor = GitRepositoryAccessor(".")
    >>> accessor.fetch_all()
    True
    >>> accessor.reset_destination("release")
    True
    >>> if not accessor.merge_remote("feature/a") and not accessor.has_conflicts():
    ...     accessor.commit_pending_merge()
"""

import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

import git
import structlog
from git.exc import GitCommandError

from git_integrate.exceptions import GitOperationError

log = structlog.get_logger(__name__)


class RepositoryAccessor(Protocol):
    """Protocol for the repository operations used by an integration run."""

    def fetch_all(self) -> bool:
        """Update every remote-tracking ref."""
        ...

    def reset_destination(self, branch: str) -> bool:
        """Create or reset ``branch`` at the remote base branch and check it out.

        The branch does not track the remote. Local commits previously on
        ``branch`` are discarded.
        """
        ...

    def merge_remote(self, branch: str) -> bool:
        """Merge the remote ``branch`` into the current branch.

        Returns:
            False when the merge stopped, either on a conflict or because
            the merge still has to be committed.
        """
        ...

    def has_conflicts(self) -> bool:
        """Return True if any path in the working tree is unmerged."""
        ...

    def commit_pending_merge(self) -> bool:
        """Commit the staged merge with its prepared message."""
        ...


class GitRepositoryAccessor:
    """RepositoryAccessor backed by the git command line.

    Attributes:
        repo_path: Working copy the commands run in
        remote: Remote the source branches and base branch live on
        base_branch: Branch on ``remote`` the destination is reset to
    """

    def __init__(
        self,
        repo_path: str | Path = ".",
        remote: str = "origin",
        base_branch: str = "master",
        git_executable: str = "git",
    ) -> None:
        self.repo_path = Path(repo_path)
        self.remote = remote
        self.base_branch = base_branch
        self.git_executable = git_executable
        self._repo: git.Repo | None = None

    def _get_repo(self) -> git.Repo:
        if self._repo is None:
            self._repo = git.Repo(self.repo_path, search_parent_directories=True)
        return self._repo

    def _run_git(self, args: Sequence[str]) -> bool:
        """Run a git command, inheriting stdout/stderr.

        Raises:
            GitOperationError: If the git executable cannot be started.
        """
        command = [self.git_executable, *args]
        log.debug("git_command", command=command, cwd=str(self.repo_path))

        try:
            result = subprocess.run(command, cwd=self.repo_path, check=False)  # nosec B603
        except OSError as e:
            raise GitOperationError(f"Could not run {self.git_executable}: {e}") from e

        if result.returncode != 0:
            log.debug("git_command_failed", command=command, returncode=result.returncode)
        return result.returncode == 0

    def remote_ref(self, branch: str) -> str:
        """Remote-tracking ref name for ``branch``."""
        return f"{self.remote}/{branch}"

    def fetch_all(self) -> bool:
        return self._run_git(["fetch", "--all"])

    def reset_destination(self, branch: str) -> bool:
        return self._run_git(["checkout", "--no-track", "-B", branch, self.remote_ref(self.base_branch)])

    def merge_remote(self, branch: str) -> bool:
        return self._run_git(
            [
                "merge",
                "--no-ff",
                "--no-edit",
                "--rerere-autoupdate",
                "--log",
                self.remote_ref(branch),
            ]
        )

    def has_conflicts(self) -> bool:
        try:
            output = self._get_repo().git.ls_files("--unmerged")
        except GitCommandError as e:
            raise GitOperationError(f"Could not list unmerged paths: {e}") from e

        # One line per conflict stage: "<mode> <sha> <stage>\t<path>"
        paths = sorted({line.split("\t", 1)[-1] for line in output.splitlines() if line.strip()})
        if paths:
            log.debug("unmerged_paths", paths=paths)
        return bool(paths)

    def commit_pending_merge(self) -> bool:
        return self._run_git(["commit", "--no-edit"])
