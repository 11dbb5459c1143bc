"""Yutori API client: persistent scouts, browsing tasks and research tasks."""

from typing import Any, Optional

import httpx

from config.config import DEFAULT_YUTORI_API_URL
from models.scout import ScoutTask
from utils.logger import get_logger

from .base_client import BaseServiceClient

logger = get_logger(__name__)

DEFAULT_SCHEDULE = "0 9 * * *"  # daily at 09:00

SCOUT_RESULT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "results": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "startup_name": {"type": "string"},
                    "website_url": {"type": "string", "description": "https://example.com"},
                    "source": {
                        "type": "string",
                        "description": "Product Hunt | YC | Indie Hackers | Reddit | Other",
                    },
                    "stage": {"type": "string", "description": "idea | MVP | beta | early-stage"},
                    "accessibility_issues": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Issues such as 'missing alt text' or 'low color contrast'",
                    },
                    "severity_score": {"type": "integer", "description": "Severity score from 1 to 10"},
                    "why_this_is_bad": {
                        "type": "string",
                        "description": "Concrete explanation of the accessibility failures",
                    },
                    "notes": {"type": "string", "description": "Optional context"},
                },
                "required": [
                    "startup_name",
                    "website_url",
                    "accessibility_issues",
                    "severity_score",
                    "why_this_is_bad",
                ],
            },
        }
    },
    "required": ["results"],
}

SCOUT_INSTRUCTIONS = """
Find early-stage startups or indie products with publicly accessible websites
that have clearly bad web accessibility.

Early-stage: MVPs, betas, solo-founder projects, YC-style startups, hackathon
demos. Not enterprise or Big Tech sites. Often found on Product Hunt, the YC
directory, Indie Hackers, Reddit or personal domains.

Bad accessibility (any of): missing image alt text, poor color contrast, no
keyboard navigation or focus states, unlabeled form fields, non-semantic
markup, missing ARIA labels, broken tab order, text embedded in images, no
skip-to-content link, estimated Lighthouse accessibility score under 70.

Rules:
- Return ONLY valid JSON matching the schema, no markdown or commentary.
- Websites must be live. Do not invent startups; skip any site you are unsure about.
- List the top 2-4 accessibility issues per site.
"""

OWNER_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "contacts": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "url": {"type": "string"},
                    "contact_name": {"type": "string"},
                    "email": {"type": "string"},
                    "role": {"type": "string"},
                },
                "required": ["url", "contact_name", "email"],
            },
        }
    },
    "required": ["contacts"],
}


def _as_list(data: Any, *keys: str) -> list[Any] | None:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in keys:
            if isinstance(data.get(key), list):
                return data[key]
    return None


class YutoriClient(BaseServiceClient):
    """Thin async wrapper over the Yutori REST API."""

    SERVICE_NAME = "yutori"

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_YUTORI_API_URL,
        timeout_s: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(api_key, base_url, timeout_s=timeout_s, transport=transport)

    def auth_headers(self) -> dict[str, str]:
        return {"X-API-Key": self.api_key}

    # ── Scouting ────────────────────────────────────────────────────────────

    async def create_scout(self, query: str, schedule: str = DEFAULT_SCHEDULE) -> ScoutTask:
        logger.info(f"Creating scout for query: '{query}' (schedule: {schedule})")
        data = await self._request(
            "POST",
            "/v1/scouting/tasks",
            json={
                "query": query,
                "schedule": schedule,
                "schema": SCOUT_RESULT_SCHEMA,
                "instructions": SCOUT_INSTRUCTIONS,
            },
        )
        return ScoutTask.from_payload({"query": query, "schedule": schedule, **(data or {})})

    async def list_scouts(self) -> list[ScoutTask]:
        data = await self._request("GET", "/v1/scouting/tasks")
        items = _as_list(data, "tasks", "scouts")
        if items is None:
            logger.warning(
                "Unexpected response format for list_scouts",
                extra={"extra_fields": {"response_type": type(data).__name__}},
            )
            return []
        return [ScoutTask.from_payload(item) for item in items if isinstance(item, dict)]

    async def find_active_scout(self, query: str) -> ScoutTask | None:
        for scout in await self.list_scouts():
            if scout.query == query and scout.is_active:
                return scout
        return None

    async def get_scout_status(self, scout_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/v1/scouting/tasks/{scout_id}")

    async def get_scout_updates(self, scout_id: str, page_size: int = 20) -> list[dict[str, Any]]:
        data = await self._request(
            "GET", f"/v1/scouting/tasks/{scout_id}/updates", params={"page_size": page_size}
        )
        updates = _as_list(data, "updates")
        return [u for u in updates if isinstance(u, dict)] if updates else []

    # ── Browsing agent ──────────────────────────────────────────────────────

    async def create_browsing_task(self, start_url: str, task: str) -> dict[str, Any]:
        return await self._request(
            "POST", "/v1/browsing/tasks", json={"start_url": start_url, "task": task}
        )

    async def get_browsing_task(self, task_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/v1/browsing/tasks/{task_id}")

    # ── Research ────────────────────────────────────────────────────────────

    async def create_research_task(self, query: str, json_schema: dict[str, Any]) -> dict[str, Any]:
        return await self._request(
            "POST",
            "/v1/research/tasks",
            json={
                "query": query,
                "task_spec": {"output_schema": {"type": "json", "json_schema": json_schema}},
            },
        )

    async def find_site_owners(self, urls: list[str]) -> dict[str, Any]:
        """Start a research task looking up who owns accessibility for each site."""
        query = (
            "Find the contact person and email address responsible for accessibility or "
            f"technical changes for the following websites: {', '.join(urls)}. "
            "Return the url, contact name, email, and role for each."
        )
        return await self.create_research_task(query, OWNER_SCHEMA)
