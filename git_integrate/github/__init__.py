"""GitHub API access: resolving pull request branches by milestone or label."""

from git_integrate.github.client import DEFAULT_API_URL, GitHubGraphQLClient

__all__ = ["DEFAULT_API_URL", "GitHubGraphQLClient"]
