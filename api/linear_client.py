"""Linear GraphQL client for filing accessibility tickets."""

from typing import Any, Optional

import httpx

from models.tickets import Ticket
from utils.logger import get_logger

from .base_client import BaseServiceClient, UpstreamAPIError

logger = get_logger(__name__)

LINEAR_API_URL = "https://api.linear.app"

# Linear priorities: 1 urgent, 2 high, 3 normal, 0 none
PRIORITY_MAP = {"high": 1, "medium": 2, "low": 3, "none": 0}

TEAM_QUERY = """
query {
  teams(first: 1) {
    nodes {
      id
      name
    }
  }
}
"""

ISSUE_CREATE_MUTATION = """
mutation IssueCreate($title: String!, $description: String!, $teamId: String!, $priority: Int) {
  issueCreate(input: {
    title: $title
    description: $description
    teamId: $teamId
    priority: $priority
  }) {
    success
    issue {
      id
      identifier
      url
    }
  }
}
"""


class LinearClient(BaseServiceClient):
    SERVICE_NAME = "linear"

    def __init__(
        self,
        api_key: str,
        base_url: str = LINEAR_API_URL,
        timeout_s: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(api_key, base_url, timeout_s=timeout_s, transport=transport)

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": self.api_key}

    async def _graphql(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables
        data = await self._request("POST", "/graphql", json=payload)
        return data if isinstance(data, dict) else {}

    async def get_first_team(self) -> dict[str, str]:
        data = await self._graphql(TEAM_QUERY)
        nodes = ((data.get("data") or {}).get("teams") or {}).get("nodes") or []
        if not nodes or not nodes[0].get("id"):
            raise UpstreamAPIError(
                self.SERVICE_NAME, "Could not find a Linear team to add issues to.", status_code=500
            )
        return {"id": nodes[0]["id"], "name": nodes[0].get("name", "")}

    async def create_issues(self, tickets: list[Ticket]) -> dict[str, Any]:
        """
        File one issue per ticket on the first team.

        A GraphQL error on one ticket is recorded in its result and does not
        stop the remaining tickets.
        """
        team = await self.get_first_team()
        results = []

        for ticket in tickets:
            data = await self._graphql(
                ISSUE_CREATE_MUTATION,
                {
                    "title": ticket.title,
                    "description": ticket.description,
                    "teamId": team["id"],
                    "priority": PRIORITY_MAP.get(ticket.priority, 0),
                },
            )
            errors = data.get("errors")
            if errors:
                message = errors[0].get("message", "Unknown error") if isinstance(errors[0], dict) else str(errors[0])
                logger.error(f"Linear issue creation failed for '{ticket.title}': {message}")
                results.append({"title": ticket.title, "success": False, "error": message})
                continue

            issue = ((data.get("data") or {}).get("issueCreate") or {}).get("issue")
            results.append({"title": ticket.title, "success": True, "issue": issue})

        logger.info(f"Filed {sum(1 for r in results if r['success'])}/{len(results)} Linear issues")
        return {"success": True, "results": results, "team_name": team["name"]}
