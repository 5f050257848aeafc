"""Pytest configuration and shared fixtures."""

from dataclasses import dataclass, field

import pytest
import structlog

from git_integrate.git.models import RepositoryIdentity


@dataclass
class FakeRepositoryAccessor:
    """In-memory RepositoryAccessor recording every call.

    Attributes:
        fetch_ok: Result of fetch_all()
        reset_ok: Result of reset_destination()
        merge_results: Per-branch merge_remote() result (default True)
        conflicted: Branches whose failed merge leaves conflicts
        commit_ok: Result of commit_pending_merge()
        calls: Ordered (operation, argument) log
    """

    fetch_ok: bool = True
    reset_ok: bool = True
    merge_results: dict[str, bool] = field(default_factory=dict)
    conflicted: set[str] = field(default_factory=set)
    commit_ok: bool = True
    calls: list[tuple[str, str | None]] = field(default_factory=list)
    _last_merged: str | None = None

    def fetch_all(self) -> bool:
        self.calls.append(("fetch_all", None))
        return self.fetch_ok

    def reset_destination(self, branch: str) -> bool:
        self.calls.append(("reset_destination", branch))
        return self.reset_ok

    def merge_remote(self, branch: str) -> bool:
        self.calls.append(("merge_remote", branch))
        self._last_merged = branch
        return self.merge_results.get(branch, True)

    def has_conflicts(self) -> bool:
        self.calls.append(("has_conflicts", None))
        return self._last_merged in self.conflicted

    def commit_pending_merge(self) -> bool:
        self.calls.append(("commit_pending_merge", self._last_merged))
        return self.commit_ok

    def calls_to(self, operation: str) -> list[str | None]:
        return [arg for name, arg in self.calls if name == operation]


@dataclass
class FakeResolver:
    """BranchResolver returning canned branch lists."""

    branches: list[str] = field(default_factory=list)
    label_branches: list[str] = field(default_factory=list)
    error: Exception | None = None
    queries: list[tuple[str, RepositoryIdentity, int | str]] = field(default_factory=list)

    def resolve(self, identity: RepositoryIdentity, milestone: int) -> list[str]:
        self.queries.append(("milestone", identity, milestone))
        if self.error:
            raise self.error
        return list(self.branches)

    def resolve_label(self, identity: RepositoryIdentity, label: str) -> list[str]:
        self.queries.append(("label", identity, label))
        if self.error:
            raise self.error
        return list(self.label_branches)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Drop logging configuration installed by CLI tests (it binds a closed stream)."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def identity() -> RepositoryIdentity:
    """Repository identity for testing."""
    return RepositoryIdentity(owner="acme", name="widgets")


@pytest.fixture
def accessor() -> FakeRepositoryAccessor:
    """Fake accessor where every operation succeeds."""
    return FakeRepositoryAccessor()


@pytest.fixture
def resolver() -> FakeResolver:
    """Fake resolver with no branches."""
    return FakeResolver()


@pytest.fixture
def echoed() -> list[str]:
    """Collects operator messages passed to the orchestrator."""
    return []
