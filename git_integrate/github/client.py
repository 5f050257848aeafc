"""GitHub GraphQL client resolving the branches to integrate."""

from types import TracebackType
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from git_integrate import __version__
from git_integrate.exceptions import QueryError
from git_integrate.git.models import RepositoryIdentity
from git_integrate.github.models import GraphQLResponse
from git_integrate.github.queries import LABEL_BRANCHES_QUERY, MILESTONE_BRANCHES_QUERY

log = structlog.get_logger(__name__)

DEFAULT_API_URL = "https://api.github.com/graphql"


class GitHubGraphQLClient:
    """Resolve pull request head branches through the GitHub GraphQL API.

    Each resolution sends exactly one request. Only the first page of pull
    requests is read; there is no pagination and no retry.
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ):
        """Initialize the client.

        Args:
            token: GitHub personal access token
            api_url: GraphQL endpoint (override for GitHub Enterprise)
            timeout: Request timeout in seconds, None to wait indefinitely
            client: Preconfigured httpx client (mainly for tests)
        """
        self.token = token.strip() if token else token
        self.api_url = api_url
        self._client = client or httpx.Client(timeout=timeout)
        self._headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/json",
            "User-Agent": f"git-integrate/{__version__}",
        }

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> "GitHubGraphQLClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _execute(self, query: str, variables: dict[str, Any]) -> GraphQLResponse:
        """POST a GraphQL document and validate the envelope.

        Raises:
            QueryError: On transport failure, non-2xx status or malformed body.
        """
        try:
            response = self._client.post(
                self.api_url,
                json={"query": query, "variables": variables},
                headers=self._headers,
            )
        except httpx.HTTPError as e:
            log.error("github_query_transport_failed", url=self.api_url, error=str(e))
            raise QueryError(f"GitHub API request failed: {e}") from e

        if not response.is_success:
            log.error("github_query_failed", url=self.api_url, status_code=response.status_code)
            raise QueryError("GitHub API request failed", status_code=response.status_code)

        try:
            result = GraphQLResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            log.error("github_query_malformed_response", url=self.api_url, error=str(e))
            raise QueryError(f"Malformed response from GitHub API: {e}") from e

        if result.errors:
            # A missing milestone is reported here alongside a null path
            log.warning("github_query_errors", errors=[error.message for error in result.errors])

        return result

    def resolve(self, identity: RepositoryIdentity, milestone: int) -> list[str]:
        """Return the head branches of the pull requests in a milestone.

        Args:
            identity: Repository to query
            milestone: Milestone number

        Returns:
            Branch names in server order; empty when the milestone does not
            exist or has no pull requests.

        Raises:
            QueryError: If the request fails.
        """
        log.info("resolve_milestone_branches", repository=identity.full_name, milestone=milestone)

        result = self._execute(
            MILESTONE_BRANCHES_QUERY,
            {"owner": identity.owner, "name": identity.name, "milestone": milestone},
        )
        branches = result.milestone_branches()

        log.info("milestone_branches_resolved", milestone=milestone, count=len(branches))
        return branches

    def resolve_label(self, identity: RepositoryIdentity, label: str) -> list[str]:
        """Return the head branches of the pull requests carrying a label.

        Same semantics as resolve(), keyed by label instead of milestone.
        """
        log.info("resolve_label_branches", repository=identity.full_name, label=label)

        result = self._execute(
            LABEL_BRANCHES_QUERY,
            {"owner": identity.owner, "name": identity.name, "label": label},
        )
        branches = result.label_branches()

        log.info("label_branches_resolved", label=label, count=len(branches))
        return branches
