"""Ticket endpoints: summarize automation logs and file them in Linear."""

import asyncio

from fastapi import APIRouter, Depends, HTTPException, status

from api.linear_client import LinearClient
from api.openai_client import TicketSummarizer
from models.tickets import Ticket
from server.dependencies import get_api_key, get_linear_client, get_ticket_summarizer
from server.schemas.requests import ConvertOutputRequest, LinearIssuesRequest
from server.schemas.responses import LinearIssuesResponseDTO, TicketBatchDTO
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["Tickets"])


@router.post("/convert-output", response_model=TicketBatchDTO)
async def convert_output(
    request: ConvertOutputRequest,
    api_key: str = Depends(get_api_key),
    summarizer: TicketSummarizer = Depends(get_ticket_summarizer),
):
    """Turn an automation log into a summary plus one ticket per finding."""
    try:
        batch = await asyncio.to_thread(
            summarizer.summarize,
            request.automation_log,
            request.url,
            request.all_screenshot_urls,
        )
    except Exception as e:
        logger.error(f"Ticket summary failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Summarizer error: {e}"
        ) from e
    return TicketBatchDTO.from_ticket_batch(batch)


@router.post("/linear-issues", response_model=LinearIssuesResponseDTO)
async def create_linear_issues(
    request: LinearIssuesRequest,
    api_key: str = Depends(get_api_key),
    client: LinearClient = Depends(get_linear_client),
):
    tickets = [
        Ticket(title=t.title, description=t.description, priority=t.priority or "none")
        for t in request.tickets
    ]
    return await client.create_issues(tickets)
