import asyncio
import json

import httpx
import pytest

from api.base_client import UpstreamAPIError
from api.linear_client import LinearClient
from models.tickets import Ticket

pytestmark = pytest.mark.unit

TEAM_RESPONSE = {"data": {"teams": {"nodes": [{"id": "team-1", "name": "Accessibility"}]}}}


class FakeLinear:
    """Answers the team query, then one scripted response per issue mutation."""

    def __init__(self, issue_responses, team_response=TEAM_RESPONSE):
        self.issue_responses = list(issue_responses)
        self.team_response = team_response
        self.bodies = []

    def __call__(self, request: httpx.Request):
        body = json.loads(request.content)
        self.bodies.append(body)
        if "teams" in body["query"]:
            return httpx.Response(200, json=self.team_response)
        return httpx.Response(200, json=self.issue_responses.pop(0))


def _issue(identifier):
    return {"data": {"issueCreate": {"success": True, "issue": {"id": identifier, "identifier": identifier}}}}


def test_create_issues_maps_priorities_and_reports_team():
    fake = FakeLinear([_issue("ACC-1"), _issue("ACC-2")])
    client = LinearClient(api_key="lin-key", transport=httpx.MockTransport(fake))
    tickets = [Ticket("Contrast", "Low contrast", "high"), Ticket("Alt text", "Missing alt", "low")]

    result = asyncio.run(client.create_issues(tickets))

    assert result["success"] is True
    assert result["team_name"] == "Accessibility"
    assert [r["issue"]["identifier"] for r in result["results"]] == ["ACC-1", "ACC-2"]
    variables = [b["variables"] for b in fake.bodies[1:]]
    assert [v["priority"] for v in variables] == [1, 3]
    assert all(v["teamId"] == "team-1" for v in variables)


def test_graphql_error_on_one_ticket_does_not_stop_others():
    fake = FakeLinear([{"errors": [{"message": "title too long"}]}, _issue("ACC-3")])
    client = LinearClient(api_key="lin-key", transport=httpx.MockTransport(fake))

    result = asyncio.run(client.create_issues([Ticket("x" * 500), Ticket("ok")]))

    first, second = result["results"]
    assert first == {"title": "x" * 500, "success": False, "error": "title too long"}
    assert second["success"] is True


def test_missing_team_raises():
    fake = FakeLinear([], team_response={"data": {"teams": {"nodes": []}}})
    client = LinearClient(api_key="lin-key", transport=httpx.MockTransport(fake))

    with pytest.raises(UpstreamAPIError) as exc_info:
        asyncio.run(client.create_issues([Ticket("t")]))

    assert exc_info.value.status_code == 500


def test_authorization_header_is_raw_key():
    seen = []

    def handler(request):
        seen.append(request.headers["Authorization"])
        return httpx.Response(200, json=TEAM_RESPONSE)

    client = LinearClient(api_key="lin-key", transport=httpx.MockTransport(handler))
    asyncio.run(client.get_first_team())
    assert seen == ["lin-key"]


def test_unknown_priority_normalizes_to_none():
    assert Ticket("t", priority="URGENT!").priority == "none"
    assert Ticket("t", priority=" High ").priority == "high"
