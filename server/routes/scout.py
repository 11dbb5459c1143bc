"""POST /v1/scout: one-off discovery run."""

from fastapi import APIRouter, Depends

from orchestrator.discovery import DiscoveryOrchestrator
from server.dependencies import get_api_key, get_discovery_orchestrator
from server.schemas.requests import ScoutRunRequest
from server.schemas.responses import DiscoveryRunDTO
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["Scout"])


@router.post("/scout", response_model=DiscoveryRunDTO)
async def run_scout(
    request: ScoutRunRequest,
    orchestrator: DiscoveryOrchestrator = Depends(get_discovery_orchestrator),
    api_key: str = Depends(get_api_key),
):
    """
    Run the discovery pipeline and return the deduplicated site list.

    Zero sites is a normal answer, not an error.
    """
    run = await orchestrator.run(query=request.query, limit=request.limit, mock=request.mock)
    logger.info(
        "Scout run served",
        extra={"extra_fields": {"run_id": run.run_id, "sites": run.site_count, "mock": request.mock}},
    )
    return DiscoveryRunDTO.from_discovery_run(run)
