"""Types describing an integration run.

An IntegrationRun is created when the orchestrator starts, advances one
source branch at a time and is never persisted. It is returned when the run
completes and attached to the exception when it halts, so the caller can
report which branches made it into the destination branch.

Example:
    >>> run = IntegrationRun(destination_branch="release")
    >>> run.source_branches = ["feature/a", "feature/b"]
    >>> run.record("feature/a", MergeOutcome.CLEAN)
    >>> run.current_index
    1
    >>> run.current_branch
    'feature/b'
"""

from dataclasses import dataclass, field
from enum import Enum


class MergeOutcome(str, Enum):
    """Result of merging one source branch.

    - clean: the merge command completed on its own
    - committed-auto-merge: the merge stopped without conflicts and an
      explicit commit completed it
    - conflicted: the merge left unmerged paths; the run stops here
    """

    CLEAN = "clean"
    COMMITTED_AUTO_MERGE = "committed-auto-merge"
    CONFLICTED = "conflicted"

    def __str__(self) -> str:
        return self.value


class IntegrationState(str, Enum):
    """Orchestrator state machine positions."""

    START = "start"
    FETCHED = "fetched"
    DESTINATION_READY = "destination-ready"
    MERGING = "merging"
    DONE = "done"
    HALTED = "halted"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BranchResult:
    branch: str
    outcome: MergeOutcome


@dataclass
class IntegrationRun:
    """Progress of one integration run.

    Attributes:
        destination_branch: Branch being built
        source_branches: Branches to merge, in resolver order
        current_index: Index of the branch being merged (or next to merge)
        state: Current state machine position
        results: Outcome of every branch attempted so far
    """

    destination_branch: str
    source_branches: list[str] = field(default_factory=list)
    current_index: int = 0
    state: IntegrationState = IntegrationState.START
    results: list[BranchResult] = field(default_factory=list)

    @property
    def current_branch(self) -> str | None:
        """Branch being merged, or None once every branch is merged."""
        if self.current_index < len(self.source_branches):
            return self.source_branches[self.current_index]
        return None

    @property
    def not_attempted(self) -> list[str]:
        """Branches after the current one.

        After a halt these are the branches that were never merged. Selected
        by position, so a later branch sharing the failed branch's name is kept.
        """
        return self.source_branches[self.current_index + 1 :]

    @property
    def merged(self) -> list[str]:
        """Branches whose merge is part of the destination branch."""
        return [r.branch for r in self.results if r.outcome is not MergeOutcome.CONFLICTED]

    def record(self, branch: str, outcome: MergeOutcome) -> None:
        """Store a branch outcome and advance unless the branch conflicted."""
        self.results.append(BranchResult(branch, outcome))
        if outcome is not MergeOutcome.CONFLICTED:
            self.current_index += 1
