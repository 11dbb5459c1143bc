"""POST /v1/find-owners: look up accessibility contacts for sites."""

from fastapi import APIRouter, Depends

from api.yutori_client import YutoriClient
from server.dependencies import get_api_key, get_yutori_client
from server.schemas.requests import FindOwnersRequest

router = APIRouter(prefix="/v1", tags=["Owners"])


@router.post("/find-owners")
async def find_owners(
    request: FindOwnersRequest,
    api_key: str = Depends(get_api_key),
    client: YutoriClient = Depends(get_yutori_client),
):
    return await client.find_site_owners(request.urls)
