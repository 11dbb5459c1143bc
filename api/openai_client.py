import json
import re
from typing import Any, Optional

import openai

from models.tickets import Ticket, TicketBatch
from utils.logger import get_logger

logger = get_logger(__name__)

_FENCED_JSON = re.compile(r"```json\s*\n([\s\S]*?)\n```")
_BRACED_JSON = re.compile(r"\{[\s\S]*\}")

TICKET_INSTRUCTIONS = """Please analyze this output.

Do not include any introductory text. Just the findings.

Identify ALL accessibility findings and issues. Create a separate ticket for EACH distinct finding. If you find fewer than 3 distinct issues, add further accessibility concerns or improvements until there are at least 3 tickets.

Return a JSON object with the following structure:
{
  "summary": "A concise, human-readable summary of all findings (markdown supported).",
  "tickets": [
    {
      "title": "Short title for the issue",
      "description": "Detailed description of the issue",
      "priority": "high" | "medium" | "low"
    }
  ]
}

Do not wrap the JSON in markdown code blocks."""


def parse_ticket_payload(content: str) -> TicketBatch:
    """
    Parse model output into a TicketBatch.

    Tries plain JSON, then a fenced ```json block, then the outermost {...}
    span. If nothing parses, the raw text becomes the summary with no tickets.
    """
    content = (content or "").strip()
    data: Any = None

    candidates = [content]
    fenced = _FENCED_JSON.search(content)
    if fenced:
        candidates.append(fenced.group(1))
    braced = _BRACED_JSON.search(content)
    if braced:
        candidates.append(braced.group(0))

    for candidate in candidates:
        try:
            data = json.loads(candidate)
            break
        except (json.JSONDecodeError, TypeError):
            continue

    if not isinstance(data, dict):
        return TicketBatch(summary=content, tickets=[])

    tickets = [Ticket.from_payload(t) for t in data.get("tickets") or [] if isinstance(t, dict)]
    return TicketBatch(summary=str(data.get("summary") or ""), tickets=tickets)


class TicketSummarizer:
    """
    Turns a browsing-automation log (plus optional screenshots) into
    accessibility tickets using the OpenAI chat completions API.
    """

    def __init__(self, api_key: str, model_name: str = "gpt-4o-mini", client: Any = None, **kwargs):
        """
        Initialize the summarizer.

        Args:
            api_key: The OpenAI API key
            model_name: Chat model to use
            client: Pre-built client (tests pass a fake with chat.completions.create)
            **kwargs: timeout / max_retries forwarded to openai.OpenAI
        """
        self.api_key = api_key
        self.model_name = model_name
        self.client = client or openai.OpenAI(
            api_key=api_key,
            timeout=kwargs.get("timeout", 60.0),
            max_retries=kwargs.get("max_retries", 3),
        )

    @staticmethod
    def build_messages(
        automation_log: str, url: Optional[str] = None, screenshot_urls: Optional[list[str]] = None
    ) -> list[dict[str, Any]]:
        url_context = f"\n\nThis analysis is for the URL: {url}" if url else ""
        content: list[dict[str, Any]] = [
            {
                "type": "text",
                "text": (
                    f"Here is the log from the automation run:\n\n{automation_log}{url_context}\n\n"
                    f"{TICKET_INSTRUCTIONS}"
                ),
            }
        ]
        for screenshot in screenshot_urls or []:
            content.append({"type": "image_url", "image_url": {"url": screenshot}})
        return [{"role": "user", "content": content}]

    def summarize(
        self, automation_log: str, url: Optional[str] = None, screenshot_urls: Optional[list[str]] = None
    ) -> TicketBatch:
        """
        Get tickets for one automation run.

        Raises:
            openai.OpenAIError: When the API call itself fails
        """
        messages = self.build_messages(automation_log, url, screenshot_urls)
        logger.info(
            "Requesting ticket summary",
            extra={"extra_fields": {"model": self.model_name, "screenshots": len(screenshot_urls or [])}},
        )

        response = self.client.chat.completions.create(
            model=self.model_name,
            messages=messages,
            response_format={"type": "json_object"},
        )
        content = response.choices[0].message.content or "{}"

        batch = parse_ticket_payload(content)
        logger.info(f"Ticket summary produced {len(batch.tickets)} tickets")
        return batch
