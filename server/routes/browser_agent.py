"""Browsing-agent task endpoints (pass-through to Yutori)."""

from fastapi import APIRouter, Depends

from api.base_client import UpstreamAPIError
from api.yutori_client import YutoriClient
from server.dependencies import get_api_key, get_yutori_client
from server.schemas.requests import BrowserAgentRequest
from server.schemas.responses import BrowserAgentResponseDTO
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["Browser Agent"])


@router.post("/browser-agent", response_model=BrowserAgentResponseDTO)
async def create_browser_tasks(
    request: BrowserAgentRequest,
    api_key: str = Depends(get_api_key),
    client: YutoriClient = Depends(get_yutori_client),
):
    """Start one browsing task per URL; a failed URL is reported, not fatal."""
    tasks, errors = [], []

    for url in request.urls:
        try:
            data = await client.create_browsing_task(url, request.goal)
        except UpstreamAPIError as exc:
            errors.append({"url": url, "status": exc.status_code, "error": exc.details or str(exc)})
            continue
        tasks.append({"url": url, **(data if isinstance(data, dict) else {"result": data})})

    logger.info(f"Browsing tasks created: {len(tasks)}, failed: {len(errors)}")
    return BrowserAgentResponseDTO(tasks=tasks, errors=errors)


@router.get("/browser-agent/{task_id}")
async def get_browser_task(
    task_id: str,
    api_key: str = Depends(get_api_key),
    client: YutoriClient = Depends(get_yutori_client),
):
    return await client.get_browsing_task(task_id)
