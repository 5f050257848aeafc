"""
Integration orchestrator: builds a destination branch from pull request branches.

The orchestrator drives one integration run through a fixed state machine:

    START -> FETCHED -> DESTINATION_READY -> MERGING(0) -> ... -> MERGING(n-1) -> DONE
                                             \\-> HALTED (from any MERGING(i))

Stage by stage:
    1. Fetch every remote. Failure raises FetchError.
    2. Reset the destination branch to the remote base branch. Failure
       raises CheckoutError.
    3. Ask the resolver for the source branches, once. An empty list ends
       the run with no merge.
    4. Merge each branch in order. A merge that succeeds on its own is
       CLEAN. A merge that stops is classified by looking for unmerged
       paths: with conflicts the run halts with MergeConflictError; without
       them the pending merge is committed (COMMITTED_AUTO_MERGE), and if
       that commit fails the run halts with MergeCommitError.

Nothing is retried and nothing is rolled back: branches merged before a
halt stay in the destination branch.

Example:
    >>> accessor = GitRepositoryAccessor(".")
    >>> with GitHubGraphQLClient(token) as resolver:
    ...     orchestrator = IntegrationOrchestrator(accessor, resolver)
    ...     run = orchestrator.run(identity, milestone=42, destination_branch="release")
    >>> run.state
    <IntegrationState.DONE: 'done'>
"""

from collections.abc import Callable
from typing import Protocol

import click
import structlog

from git_integrate.engine.types import IntegrationRun, IntegrationState, MergeOutcome
from git_integrate.exceptions import CheckoutError, FetchError, MergeCommitError, MergeConflictError
from git_integrate.git.accessor import RepositoryAccessor
from git_integrate.git.models import RepositoryIdentity

log = structlog.get_logger(__name__)


class BranchResolver(Protocol):
    """Source of the branch names to integrate."""

    def resolve(self, identity: RepositoryIdentity, milestone: int) -> list[str]: ...

    def resolve_label(self, identity: RepositoryIdentity, label: str) -> list[str]: ...


class IntegrationOrchestrator:
    """Run the fetch, reset and sequential merge of an integration.

    Attributes:
        accessor: Repository operations (the only mutator of the working tree).
        resolver: Branch resolver queried once per run.
        echo: Callable receiving operator-facing progress lines.
    """

    def __init__(
        self,
        accessor: RepositoryAccessor,
        resolver: BranchResolver,
        echo: Callable[[str], None] = click.echo,
    ) -> None:
        self.accessor = accessor
        self.resolver = resolver
        self.echo = echo

    def run(
        self,
        identity: RepositoryIdentity,
        milestone: int,
        destination_branch: str,
        label: str | None = None,
    ) -> IntegrationRun:
        """Integrate the branches of a milestone into ``destination_branch``.

        Args:
            identity: Repository the pull requests belong to.
            milestone: Milestone number whose pull requests are merged.
            destination_branch: Branch to (re)build.
            label: When given, pull requests are selected by this label
                instead of by milestone.

        Returns:
            The completed run, in state DONE.

        Raises:
            FetchError: If fetching fails.
            CheckoutError: If the destination branch cannot be reset.
            QueryError: If the branch query fails.
            MergeConflictError: If a merge leaves conflicts.
            MergeCommitError: If committing a non-conflicted merge fails.
        """
        run = IntegrationRun(destination_branch=destination_branch)
        log.info(
            "integration_started",
            repository=identity.full_name,
            milestone=milestone,
            label=label,
            destination=destination_branch,
        )

        self._prepare(run)
        run.source_branches = self._resolve_branches(identity, milestone, label)

        if not run.source_branches:
            log.info("integration_no_branches", milestone=milestone, label=label)

        while run.current_branch is not None:
            self._merge(run, run.current_branch)

        run.state = IntegrationState.DONE
        log.info(
            "integration_done",
            destination=destination_branch,
            merged=len(run.results),
            auto_committed=sum(1 for r in run.results if r.outcome is MergeOutcome.COMMITTED_AUTO_MERGE),
        )
        return run

    def _prepare(self, run: IntegrationRun) -> None:
        if not self.accessor.fetch_all():
            log.error("integration_fetch_failed")
            raise FetchError()
        run.state = IntegrationState.FETCHED

        if not self.accessor.reset_destination(run.destination_branch):
            log.error("integration_checkout_failed", destination=run.destination_branch)
            raise CheckoutError(run.destination_branch)
        run.state = IntegrationState.DESTINATION_READY
        log.debug("integration_destination_ready", destination=run.destination_branch)

    def _resolve_branches(self, identity: RepositoryIdentity, milestone: int, label: str | None) -> list[str]:
        if label is not None:
            return list(self.resolver.resolve_label(identity, label))
        return list(self.resolver.resolve(identity, milestone))

    def _merge(self, run: IntegrationRun, branch: str) -> None:
        """Merge one branch and record its outcome.

        Raises:
            MergeConflictError: If the merge left conflicts.
            MergeCommitError: If the pending merge could not be committed.
        """
        run.state = IntegrationState.MERGING
        self.echo(f"\nMerging {branch}")
        log.info("merge_started", branch=branch, index=run.current_index, total=len(run.source_branches))

        if self.accessor.merge_remote(branch):
            outcome = MergeOutcome.CLEAN
        elif self.accessor.has_conflicts():
            run.record(branch, MergeOutcome.CONFLICTED)
            run.state = IntegrationState.HALTED
            log.warning("merge_conflicted", branch=branch, remaining=run.not_attempted)
            raise MergeConflictError(branch, run)
        elif self.accessor.commit_pending_merge():
            outcome = MergeOutcome.COMMITTED_AUTO_MERGE
        else:
            run.state = IntegrationState.HALTED
            log.error("merge_commit_failed", branch=branch)
            raise MergeCommitError(branch, run)

        run.record(branch, outcome)
        log.info("merge_completed", branch=branch, outcome=str(outcome))
