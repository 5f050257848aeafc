"""Integration engine: the state machine that merges branches in sequence."""

from git_integrate.engine.orchestrator import BranchResolver, IntegrationOrchestrator
from git_integrate.engine.types import BranchResult, IntegrationRun, IntegrationState, MergeOutcome

__all__ = [
    "BranchResolver",
    "BranchResult",
    "IntegrationOrchestrator",
    "IntegrationRun",
    "IntegrationState",
    "MergeOutcome",
]
