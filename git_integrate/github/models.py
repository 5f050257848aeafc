"""Pydantic models for GitHub GraphQL responses.

Every level of the response path is optional: GitHub answers a query for a
milestone that does not exist with ``"milestone": null`` and a GraphQL error
entry, which is an empty result here rather than a failure.
"""

from pydantic import BaseModel, ConfigDict, Field


class _GraphQLModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PullRequestNode(_GraphQLModel):
    head_ref_name: str = Field(alias="headRefName")


class PullRequestConnection(_GraphQLModel):
    nodes: list[PullRequestNode | None] | None = None

    def branch_names(self) -> list[str]:
        """Head branch names in server order, skipping null nodes."""
        return [node.head_ref_name for node in self.nodes or [] if node is not None]


class Milestone(_GraphQLModel):
    pull_requests: PullRequestConnection | None = Field(default=None, alias="pullRequests")


class Repository(_GraphQLModel):
    milestone: Milestone | None = None
    pull_requests: PullRequestConnection | None = Field(default=None, alias="pullRequests")


class ResponseData(_GraphQLModel):
    repository: Repository | None = None


class GraphQLError(_GraphQLModel):
    message: str
    type: str | None = None
    path: list[str | int] | None = None


class GraphQLResponse(_GraphQLModel):
    """Top-level GraphQL response envelope."""

    data: ResponseData | None = None
    errors: list[GraphQLError] | None = None

    def milestone_branches(self) -> list[str]:
        """Branches of ``data.repository.milestone.pullRequests.nodes``."""
        repository = self.data.repository if self.data else None
        milestone = repository.milestone if repository else None
        connection = milestone.pull_requests if milestone else None
        return connection.branch_names() if connection else []

    def label_branches(self) -> list[str]:
        """Branches of ``data.repository.pullRequests.nodes``."""
        repository = self.data.repository if self.data else None
        connection = repository.pull_requests if repository else None
        return connection.branch_names() if connection else []
