"""Tests for git_integrate/github/client.py - GitHub GraphQL branch resolver.

Requests are answered by an httpx.MockTransport so the exact payload sent
to the API can be inspected.
"""

import json

import httpx
import pytest

from git_integrate.exceptions import QueryError
from git_integrate.github.client import DEFAULT_API_URL, GitHubGraphQLClient
from git_integrate.github.queries import LABEL_BRANCHES_QUERY, MILESTONE_BRANCHES_QUERY

# =============================================================================
# Fixtures
# =============================================================================


def milestone_payload(*branches: str | None) -> dict:
    nodes = [None if b is None else {"headRefName": b} for b in branches]
    return {"data": {"repository": {"milestone": {"pullRequests": {"nodes": nodes}}}}}


class Recorder:
    """MockTransport handler returning a canned response and keeping requests."""

    def __init__(self, response: httpx.Response | Exception) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    @property
    def body(self) -> dict:
        return json.loads(self.requests[-1].content)


def make_client(handler: Recorder, token: str = "ghp_test_token") -> GitHubGraphQLClient:
    return GitHubGraphQLClient(token, client=httpx.Client(transport=httpx.MockTransport(handler)))


# =============================================================================
# Milestone resolution
# =============================================================================


class TestResolveMilestone:
    """Tests for resolve()."""

    def test_returns_branches_in_server_order(self, identity):
        handler = Recorder(httpx.Response(200, json=milestone_payload("feature/b", "feature/a")))

        branches = make_client(handler).resolve(identity, 42)

        assert branches == ["feature/b", "feature/a"]

    def test_sends_single_authenticated_post(self, identity):
        handler = Recorder(httpx.Response(200, json=milestone_payload("feature/a")))

        make_client(handler, token="  ghp_secret \n").resolve(identity, 42)

        assert len(handler.requests) == 1
        request = handler.requests[0]
        assert request.method == "POST"
        assert str(request.url) == DEFAULT_API_URL
        assert request.headers["Authorization"] == "Bearer ghp_secret"
        assert handler.body == {
            "query": MILESTONE_BRANCHES_QUERY,
            "variables": {"owner": "acme", "name": "widgets", "milestone": 42},
        }

    def test_custom_api_url(self, identity):
        handler = Recorder(httpx.Response(200, json=milestone_payload()))
        client = GitHubGraphQLClient(
            "token",
            api_url="https://github.example.com/api/graphql",
            client=httpx.Client(transport=httpx.MockTransport(handler)),
        )

        client.resolve(identity, 1)

        assert str(handler.requests[0].url) == "https://github.example.com/api/graphql"

    def test_null_nodes_are_skipped(self, identity):
        handler = Recorder(httpx.Response(200, json=milestone_payload("a", None, "b")))

        assert make_client(handler).resolve(identity, 42) == ["a", "b"]

    @pytest.mark.parametrize(
        "payload",
        [
            {"data": None},
            {},
            {"data": {"repository": None}},
            {"data": {"repository": {"milestone": None}}},
            {"data": {"repository": {"milestone": {"pullRequests": None}}}},
            {"data": {"repository": {"milestone": {"pullRequests": {"nodes": None}}}}},
            {"data": {"repository": {"milestone": {"pullRequests": {"nodes": []}}}}},
        ],
    )
    def test_absent_path_yields_empty_list(self, identity, payload):
        handler = Recorder(httpx.Response(200, json=payload))

        assert make_client(handler).resolve(identity, 42) == []

    def test_missing_milestone_with_graphql_error_is_empty(self, identity):
        payload = {
            "data": {"repository": {"milestone": None}},
            "errors": [{"type": "NOT_FOUND", "path": ["repository", "milestone"], "message": "Not found"}],
        }
        handler = Recorder(httpx.Response(200, json=payload))

        assert make_client(handler).resolve(identity, 999) == []


class TestResolveErrors:
    """Tests for transport, status and body failures."""

    @pytest.mark.parametrize("status", [401, 403, 404, 500, 502])
    def test_non_success_status_raises(self, identity, status):
        handler = Recorder(httpx.Response(status, json={"message": "Bad credentials"}))

        with pytest.raises(QueryError) as exc_info:
            make_client(handler).resolve(identity, 42)

        assert exc_info.value.status_code == status

    def test_transport_error_raises(self, identity):
        handler = Recorder(httpx.ConnectError("connection refused"))

        with pytest.raises(QueryError, match="connection refused"):
            make_client(handler).resolve(identity, 42)

    def test_invalid_json_raises(self, identity):
        handler = Recorder(httpx.Response(200, content=b"<html>rate limited</html>"))

        with pytest.raises(QueryError, match="Malformed response"):
            make_client(handler).resolve(identity, 42)

    def test_unexpected_shape_raises(self, identity):
        payload = {"data": {"repository": {"milestone": {"pullRequests": {"nodes": [{"title": "x"}]}}}}}
        handler = Recorder(httpx.Response(200, json=payload))

        with pytest.raises(QueryError, match="Malformed response"):
            make_client(handler).resolve(identity, 42)

    def test_non_object_body_raises(self, identity):
        handler = Recorder(httpx.Response(200, json=["not", "an", "object"]))

        with pytest.raises(QueryError):
            make_client(handler).resolve(identity, 42)


# =============================================================================
# Label resolution
# =============================================================================


class TestResolveLabel:
    """Tests for resolve_label()."""

    def test_returns_label_branches(self, identity):
        payload = {"data": {"repository": {"pullRequests": {"nodes": [{"headRefName": "fix/x"}, None]}}}}
        handler = Recorder(httpx.Response(200, json=payload))

        branches = make_client(handler).resolve_label(identity, "ready-to-ship")

        assert branches == ["fix/x"]
        assert handler.body == {
            "query": LABEL_BRANCHES_QUERY,
            "variables": {"owner": "acme", "name": "widgets", "label": "ready-to-ship"},
        }

    def test_missing_repository_is_empty(self, identity):
        handler = Recorder(httpx.Response(200, json={"data": {"repository": None}}))

        assert make_client(handler).resolve_label(identity, "ready") == []


class TestLifecycle:
    def test_context_manager_closes_client(self):
        http_client = httpx.Client(transport=httpx.MockTransport(Recorder(httpx.Response(200, json={}))))

        with GitHubGraphQLClient("token", client=http_client):
            pass

        assert http_client.is_closed
